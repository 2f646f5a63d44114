import pytest

from elevatorgame.assets import AssetType, Handle, PrefabList, SpriteSheetList
from elevatorgame.combat import IMPACT_OFFSET_X, BulletCollisionSystem, ShootSystem
from elevatorgame.physics_components import (
    Collidee,
    CollideeDetails,
    Direction,
    Directions,
    Motion,
)
from elevatorgame.player_components import Bullet, BulletImpact, Gun, GunState, Player
from elevatorgame.player_entities import spawn_bullet
from elevatorgame.world import Child, Transform, Vector2, World


def _details(x: float) -> CollideeDetails:
    return CollideeDetails(
        name="Bullet",
        position=Vector2(x, 0.0),
        half_size=Vector2(1.0, 1.0),
        correction=0.0,
        velocity=200.0,
        collided_with_name="wall",
        collided_with_velocity=0.0,
        is_rideable=False,
    )


def _facing(x: Directions) -> Direction:
    return Direction(Directions.RIGHT, Directions.NEUTRAL, x, Directions.NEUTRAL)


@pytest.fixture
def combat_world():
    world = World()
    prefabs = PrefabList()
    prefabs.insert(AssetType.BULLET_IMPACT, Handle("prefabs/bullet_impact.ron"))
    world.insert_resource(prefabs)
    sheets = SpriteSheetList()
    sheets.insert(AssetType.BULLET, Handle("prefabs/bullet.ron", "texture/bullet.png"))
    world.insert_resource(sheets)
    return world


def test_bullet_hit_spawns_impact_and_frees_shot(combat_world):
    world = combat_world
    gun_entity = world.spawn(Gun(is_player=True, shots_fired=2))
    bullet = spawn_bullet(world, gun_entity, None, 10.0, 20.0, _facing(Directions.RIGHT))
    world.get(bullet, Collidee).horizontal = _details(50.0)

    BulletCollisionSystem().run(world)

    assert not world.is_alive(bullet)
    assert world.get(gun_entity, Gun).shots_fired == 1
    impacts = list(world.join(BulletImpact, Transform, Direction))
    assert len(impacts) == 1
    _, _, transform, direction = impacts[0]
    assert transform.x == pytest.approx(50.0 + IMPACT_OFFSET_X)
    assert direction.x is Directions.RIGHT


def test_leftward_bullet_impact_is_offset_the_other_way(combat_world):
    world = combat_world
    gun_entity = world.spawn(Gun(is_player=True, shots_fired=1))
    bullet = spawn_bullet(world, gun_entity, None, 100.0, 20.0, _facing(Directions.LEFT))
    world.get(bullet, Collidee).horizontal = _details(50.0)

    BulletCollisionSystem().run(world)

    (_, _, transform, direction), = list(world.join(BulletImpact, Transform, Direction))
    assert transform.x == pytest.approx(50.0 - IMPACT_OFFSET_X)
    assert direction.x is Directions.LEFT


def test_bullet_without_hit_is_left_alone(combat_world):
    world = combat_world
    gun_entity = world.spawn(Gun(is_player=True, shots_fired=1))
    bullet = spawn_bullet(world, gun_entity, None, 10.0, 20.0, _facing(Directions.RIGHT))

    BulletCollisionSystem().run(world)

    assert world.is_alive(bullet)
    assert world.get(gun_entity, Gun).shots_fired == 1
    assert list(world.join(BulletImpact)) == []


def test_missing_impact_prefab_raises():
    world = World()
    world.insert_resource(PrefabList())
    gun_entity = world.spawn(Gun(is_player=True))
    bullet = spawn_bullet(world, gun_entity, None, 10.0, 20.0, _facing(Directions.RIGHT))
    world.get(bullet, Collidee).horizontal = _details(50.0)
    with pytest.raises(KeyError):
        BulletCollisionSystem().run(world)


def _armed_player(world, state):
    player = Player()
    player.update_position(10.0, 20.0)
    player_entity = world.spawn(player)
    gun_entity = world.spawn(
        Gun(is_player=True, state=state), Child(player_entity), _facing(Directions.RIGHT)
    )
    return gun_entity


def test_shooting_gun_spawns_one_bullet(combat_world):
    world = combat_world
    gun_entity = _armed_player(world, GunState.SHOOTING)

    ShootSystem().run(world)
    ShootSystem().run(world)

    bullets = list(world.join(Bullet, Motion))
    assert len(bullets) == 1
    _, bullet, motion = bullets[0]
    assert bullet.parent == gun_entity
    assert motion.velocity.x > 0.0
    gun = world.get(gun_entity, Gun)
    assert gun.shots_fired == 1
    assert gun.spawned_bullet is True


def test_holstered_gun_does_not_fire(combat_world):
    world = combat_world
    gun_entity = _armed_player(world, GunState.HOLSTERED)

    ShootSystem().run(world)

    assert list(world.join(Bullet)) == []
    assert world.get(gun_entity, Gun).shots_fired == 0


def test_gun_without_player_parent_does_not_fire(combat_world):
    world = combat_world
    other = world.spawn()
    world.spawn(Gun(is_player=True, state=GunState.SHOOTING), Child(other), _facing(Directions.RIGHT))

    ShootSystem().run(world)

    assert list(world.join(Bullet)) == []