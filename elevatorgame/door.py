"""Doors, the rooms behind them, their entries and the systems that drive them."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any

from elevatorgame.animation import Animation, AnimationControlSet, AnimationId
from elevatorgame.physics_components import (
    Collidee,
    Collider,
    Direction,
    Directions,
    Motion,
)
from elevatorgame.player_components import Player, PlayerState
from elevatorgame.world import Child, Entity, Named, Transform, Vector2, World

log = logging.getLogger(__name__)

DOOR_WIDTH = 4.0
DOOR_HEIGHT = 28.0
DOOR_Z = 0.1
OPEN_DOOR_Z = 0.9
ROOM_OFFSET_Z = -0.1
ENTRY_WIDTH = 1.0
ENTRY_HEIGHT = 2.0

_ENTERABLE_NAMES = frozenset({"red_left", "red_right"})
_RIGHT_FACING_NAMES = frozenset({"blue_right", "red_right"})

_DOOR_ANIMATIONS = [
    AnimationId.RED_DOOR,
    AnimationId.RED_DOOR_CLOSE,
    AnimationId.RED_DOOR_OPEN,
    AnimationId.BLUE_DOOR,
    AnimationId.BLUE_DOOR_OPEN,
    AnimationId.BLUE_DOOR_CLOSE,
]


class DoorState(enum.Enum):
    CLOSED = "closed"
    OPEN = "open"


@dataclass
class Door:
    """A door; only red doors can be entered by the player."""

    position: Vector2
    can_user_enter: bool
    state: DoorState = DoorState.CLOSED
    has_papers: bool = field(init=False)

    def __post_init__(self) -> None:
        self.has_papers = self.can_user_enter


@dataclass
class DoorEntry:
    """Marks the spot in front of a door where the player can enter."""


@dataclass
class Room:
    """Marks the room drawn behind a door."""


def load_door(world: World, prefab_handle: Any, position: Vector2, name: str) -> Entity:
    """Create a door, its room and, for enterable doors, its entry; return the door."""
    can_user_enter = name in _ENTERABLE_NAMES
    facing = Directions.RIGHT if name in _RIGHT_FACING_NAMES else Directions.LEFT

    # Narrower than the sprite so that bodies cannot walk past it.
    collider = Collider.of_size(DOOR_WIDTH, DOOR_HEIGHT)
    collider.is_collidable = False
    collider.bounding_box.position = Vector2(position.x, position.y)

    log.info("Loading door %s at %s, can_user_enter: %s", name, position, can_user_enter)
    animation_id = AnimationId.RED_DOOR if can_user_enter else AnimationId.BLUE_DOOR

    door_entity = world.spawn(
        Named("Door"),
        Door(Vector2(position.x, position.y), can_user_enter),
        collider,
        Collidee(),
        Transform(position.x, position.y, DOOR_Z),
        # Motion makes the door take part in collisions.
        Motion(),
        Animation(animation_id, list(_DOOR_ANIMATIONS)),
        prefab_handle,
        Direction(Directions.RIGHT, Directions.NEUTRAL, facing, Directions.NEUTRAL),
    )

    world.spawn(
        Named("Room"),
        Room(),
        Child(door_entity, 0.0, 0.0, ROOM_OFFSET_Z),
        Transform(position.x, position.y, 0.0),
        Animation(AnimationId.PURPLE_ROOM, [AnimationId.PURPLE_ROOM]),
        prefab_handle,
    )

    if can_user_enter:
        x = position.x - 9.0
        y = position.y - 15.0
        entry_collider = Collider.of_size(ENTRY_WIDTH, ENTRY_HEIGHT)
        entry_collider.bounding_box.position = Vector2(x + 4.0, y + 1.0)
        world.spawn(
            Named("DoorEntry"),
            Child(door_entity, x, y, 0.0),
            DoorEntry(),
            entry_collider,
            Collidee(),
            Transform(x, y, 0.0),
            Animation(AnimationId.DOOR_ENTRY, [AnimationId.DOOR_ENTRY]),
            prefab_handle,
            Direction(Directions.RIGHT, Directions.NEUTRAL, facing, Directions.NEUTRAL),
        )

    return door_entity


def _door_animation(door: Door) -> AnimationId:
    if door.state is DoorState.OPEN:
        return AnimationId.RED_DOOR_OPEN if door.can_user_enter else AnimationId.BLUE_DOOR_OPEN
    return AnimationId.RED_DOOR if door.can_user_enter else AnimationId.BLUE_DOOR


class DoorAnimationSystem:
    """Switches door animations to match their open or closed state."""

    def run(self, world: World) -> None:
        for _, door, animation, control_set in world.join(
            Door, Animation, AnimationControlSet
        ):
            new_id = _door_animation(door)
            if animation.current != new_id:
                control_set.abort(animation.current)
                control_set.start(new_id)
                animation.current = new_id


class DoorEntryCollisionSystem:
    """Opens a closed door when an idle player stands at its entry facing it."""

    def run(self, world: World) -> None:
        for _, player, player_collider, player_direction, _ in world.join(
            Player, Collider, Direction, Named
        ):
            if player.state is not PlayerState.IDLING:
                continue
            for _, child, entry_collider, _, entry_direction in world.join(
                Child, Collider, DoorEntry, Direction
            ):
                if not player_collider.is_overlapping_with(entry_collider, False):
                    continue
                if player_direction.x == entry_direction.x:
                    continue
                door = world.get(child.parent, Door)
                if door is not None and door.state is DoorState.CLOSED:
                    log.info("Opening door...")
                    door.state = DoorState.OPEN
                    player.state = PlayerState.ENTERING_ROOM


class DoorTransformationSystem:
    """Brings open doors to the front and makes them solid."""

    def run(self, world: World) -> None:
        for _, door, collider, transform in world.join(Door, Collider, Transform):
            if door.state is DoorState.OPEN:
                transform.z = OPEN_DOOR_Z
                collider.is_collidable = True
            else:
                transform.z = 0.0
                collider.is_collidable = False