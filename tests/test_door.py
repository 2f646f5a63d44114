import pytest

from elevatorgame.animation import Animation, AnimationControlSet, AnimationId, EndControl
from elevatorgame.assets import Handle
from elevatorgame.door import (
    Door,
    DoorAnimationSystem,
    DoorEntry,
    DoorEntryCollisionSystem,
    DoorState,
    DoorTransformationSystem,
    Room,
    load_door,
)
from elevatorgame.physics_components import Collider, Direction, Directions
from elevatorgame.player_components import Player, PlayerState
from elevatorgame.world import Child, Named, Transform, Vector2, World

PREFAB = Handle("prefabs/doors.ron")


def _entry(world):
    return next(world.join(DoorEntry, Child, Collider, Transform), None)


def _spawn_player(world, position, facing, state=PlayerState.IDLING):
    collider = Collider.of_size(12.0, 24.0)
    collider.bounding_box.position = position.copy()
    player = Player(state=state)
    world.spawn(
        Named("Player"),
        player,
        collider,
        Direction(Directions.RIGHT, Directions.NEUTRAL, facing, Directions.NEUTRAL),
    )
    return player


@pytest.mark.parametrize("enter", [True, False])
def test_door_papers_follow_entry_permission(enter):
    door = Door(Vector2(1.0, 2.0), enter)
    assert door.has_papers is enter
    assert door.state is DoorState.CLOSED


def test_load_red_door_creates_door_room_and_entry():
    world = World()
    door_entity = load_door(world, PREFAB, Vector2(50.0, 80.0), "red_left")

    door = world.get(door_entity, Door)
    assert door.can_user_enter is True
    assert world.get(door_entity, Named).name == "Door"
    assert world.get(door_entity, Animation).current is AnimationId.RED_DOOR
    assert world.get(door_entity, Direction).x is Directions.LEFT
    collider = world.get(door_entity, Collider)
    assert collider.is_collidable is False
    assert collider.bounding_box.position == Vector2(50.0, 80.0)
    assert world.get(door_entity, Transform).z == pytest.approx(0.1)
    assert world.get(door_entity, Handle) == PREFAB

    rooms = list(world.join(Room, Child))
    assert len(rooms) == 1
    assert rooms[0][2].parent == door_entity
    assert rooms[0][2].offset_z == pytest.approx(-0.1)

    entry = _entry(world)
    assert entry is not None
    entry_entity, _, child, _, transform = entry
    assert child.parent == door_entity
    assert (child.offset_x, child.offset_y) == (transform.x, transform.y)
    assert world.get(entry_entity, Direction).x is Directions.LEFT


def test_load_blue_door_has_no_entry():
    world = World()
    door_entity = load_door(world, PREFAB, Vector2(10.0, 20.0), "blue_right")
    assert world.get(door_entity, Door).can_user_enter is False
    assert world.get(door_entity, Animation).current is AnimationId.BLUE_DOOR
    assert world.get(door_entity, Direction).x is Directions.RIGHT
    assert _entry(world) is None
    assert len(list(world.join(Room))) == 1


def test_transformation_of_open_and_closed_doors():
    world = World()
    door_entity = load_door(world, PREFAB, Vector2(10.0, 20.0), "red_right")
    door = world.get(door_entity, Door)
    collider = world.get(door_entity, Collider)
    transform = world.get(door_entity, Transform)

    door.state = DoorState.OPEN
    DoorTransformationSystem().run(world)
    assert collider.is_collidable is True
    assert transform.z == pytest.approx(0.9)

    door.state = DoorState.CLOSED
    DoorTransformationSystem().run(world)
    assert collider.is_collidable is False
    assert transform.z == 0.0


def test_animation_switches_to_open():
    world = World()
    door_entity = load_door(world, PREFAB, Vector2(10.0, 20.0), "red_left")
    control_set = AnimationControlSet()
    control_set.add_animation(AnimationId.RED_DOOR, EndControl.LOOP)
    control_set.add_animation(AnimationId.RED_DOOR_OPEN, EndControl.LOOP)
    world.insert(door_entity, control_set)

    world.get(door_entity, Door).state = DoorState.OPEN
    DoorAnimationSystem().run(world)

    assert world.get(door_entity, Animation).current is AnimationId.RED_DOOR_OPEN
    assert not control_set.has_animation(AnimationId.RED_DOOR)
    assert control_set.animations[AnimationId.RED_DOOR_OPEN].running is True


def test_animation_unchanged_for_closed_blue_door():
    world = World()
    door_entity = load_door(world, PREFAB, Vector2(10.0, 20.0), "blue_left")
    control_set = AnimationControlSet()
    control_set.add_animation(AnimationId.BLUE_DOOR, EndControl.LOOP)
    world.insert(door_entity, control_set)
    DoorAnimationSystem().run(world)
    assert world.get(door_entity, Animation).current is AnimationId.BLUE_DOOR
    assert control_set.has_animation(AnimationId.BLUE_DOOR)


def test_idle_player_facing_door_enters():
    world = World()
    door_entity = load_door(world, PREFAB, Vector2(50.0, 80.0), "red_left")
    entry_collider = _entry(world)[3]
    player = _spawn_player(world, entry_collider.bounding_box.position, Directions.RIGHT)

    DoorEntryCollisionSystem().run(world)

    assert world.get(door_entity, Door).state is DoorState.OPEN
    assert player.state is PlayerState.ENTERING_ROOM


def test_player_facing_away_does_not_enter():
    world = World()
    door_entity = load_door(world, PREFAB, Vector2(50.0, 80.0), "red_left")
    entry_collider = _entry(world)[3]
    player = _spawn_player(world, entry_collider.bounding_box.position, Directions.LEFT)

    DoorEntryCollisionSystem().run(world)

    assert world.get(door_entity, Door).state is DoorState.CLOSED
    assert player.state is PlayerState.IDLING


def test_walking_player_does_not_enter():
    world = World()
    door_entity = load_door(world, PREFAB, Vector2(50.0, 80.0), "red_left")
    entry_collider = _entry(world)[3]
    player = _spawn_player(
        world, entry_collider.bounding_box.position, Directions.RIGHT, PlayerState.WALKING
    )

    DoorEntryCollisionSystem().run(world)

    assert world.get(door_entity, Door).state is DoorState.CLOSED
    assert player.state is PlayerState.WALKING


def test_player_far_away_does_not_enter():
    world = World()
    door_entity = load_door(world, PREFAB, Vector2(50.0, 80.0), "red_left")
    _spawn_player(world, Vector2(500.0, 500.0), Directions.RIGHT)
    DoorEntryCollisionSystem().run(world)
    assert world.get(door_entity, Door).state is DoorState.CLOSED