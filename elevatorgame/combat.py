"""Systems that fire bullets from guns and resolve bullet hits."""

from __future__ import annotations

from elevatorgame.assets import AssetType, PrefabList, SpriteSheetList
from elevatorgame.physics_components import Collidee, Collider, Direction, Motion
from elevatorgame.player_components import Bullet, Gun, GunState, Player
from elevatorgame.player_entities import show_bullet_impact, spawn_bullet
from elevatorgame.world import Child, World

IMPACT_OFFSET_X = -8.0

_FIRING_STATES = frozenset({GunState.SHOOTING, GunState.JUMP_SHOOTING})


class BulletCollisionSystem:
    """Replaces bullets that hit something with an impact and frees a shot."""

    def run(self, world: World) -> None:
        for entity, bullet, collider, collidee, motion in world.join(
            Bullet, Collider, Collidee, Motion
        ):
            # Bullets only travel horizontally.
            hit = collidee.horizontal
            if hit is None:
                continue
            handle = world.resource(PrefabList).get(AssetType.BULLET_IMPACT)
            if handle is None:
                raise KeyError("no bullet impact prefab loaded")
            if motion.velocity.x > 0.0:
                impact_x = hit.position.x + IMPACT_OFFSET_X
            else:
                impact_x = hit.position.x - IMPACT_OFFSET_X
            show_bullet_impact(
                world,
                handle,
                impact_x,
                collider.bounding_box.position.y,
                motion.velocity.x,
            )
            if bullet.parent is not None:
                gun = world.get(bullet.parent, Gun)
                if gun is not None:
                    gun.shots_fired -= 1
            world.delete(entity)


class ShootSystem:
    """Spawns one bullet for every player's gun that has just started firing."""

    def run(self, world: World) -> None:
        for gun_entity, gun, child, direction in world.join(Gun, Child, Direction):
            player = world.get(child.parent, Player)
            if player is None or gun.spawned_bullet or gun.state not in _FIRING_STATES:
                continue
            handle = world.resource(SpriteSheetList).get(AssetType.BULLET)
            if handle is None:
                raise KeyError("no bullet sprite sheet loaded")
            spawn_bullet(
                world,
                gun_entity,
                handle,
                player.position.x,
                player.position.y,
                direction,
            )
            gun.shots_fired += 1
            gun.spawned_bullet = True