"""Elevator components and the entities that make up an elevator."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from elevatorgame.physics_components import Collidee, Collider, Motion, Proximity
from elevatorgame.world import Child, Entity, Named, SpriteRender, Transform, Vector2, World

log = logging.getLogger(__name__)

FLOOR_HEIGHT = 48.0
ELEVATOR_Z = 0.0
ELEVATOR_OFFSET = 24.0
SHAFT_SPRITE = 3
BOTTOM_SHAFT_SPRITE = 5


class _Offsets(NamedTuple):
    x: float
    y: float
    z: float


@dataclass
class Rideable:
    """Marks something an entity can ride on."""


@dataclass
class ElevatorComponent:
    """One part of an elevator car, positioned relative to the car."""

    name: str
    sprite_number: int
    width: float
    height: float
    offsets: tuple[float, float, float]
    is_collidable: bool

    def __post_init__(self) -> None:
        self.offsets = _Offsets(*self.offsets)


class ElevatorState(enum.Enum):
    UP = "up"
    DOWN = "down"
    WAITING = "waiting"


@dataclass
class Elevator:
    """An elevator car travelling between floors."""

    position: Vector2 = field(default_factory=Vector2)
    boundaries: list[float] = field(default_factory=list)
    floor_height: float = FLOOR_HEIGHT
    num_floors: int = 1
    start_floor: int = 0
    current_floor: float = 0.0
    velocity: float = 0.0
    previous_state: ElevatorState = ElevatorState.WAITING
    state: ElevatorState = ElevatorState.WAITING
    wait_seconds: float = 0.0
    can_wait: bool = True


def make_elevator(
    position: Vector2,
    min_floor: int,
    max_floor: int,
    start_floor: int,
    velocity: float,
) -> Elevator:
    """Build an elevator at position, which is the height of its start floor."""
    if min_floor < 0 or max_floor < min_floor:
        raise ValueError(f"invalid floor range {min_floor}..{max_floor}")
    if start_floor < min_floor:
        raise ValueError(f"start floor {start_floor} is below floor {min_floor}")
    base = position.y - (start_floor - min_floor) * FLOOR_HEIGHT
    boundaries = [
        base + (floor - min_floor) * FLOOR_HEIGHT for floor in range(min_floor, max_floor + 1)
    ]
    log.info("Set elevator boundaries -- boundaries: %s", boundaries)
    return Elevator(
        position=position.copy(),
        boundaries=boundaries,
        num_floors=max_floor - min_floor + 1,
        start_floor=start_floor,
        current_floor=float(start_floor),
        velocity=velocity,
    )


def _create_component(
    world: World,
    elevator_entity: Entity,
    position: Vector2,
    component: ElevatorComponent,
    sprite_sheet_handle: Any,
) -> Entity:
    offsets = component.offsets
    collider = Collider.of_size(component.width, component.height)
    collider.is_collidable = component.is_collidable
    collider.is_rideable = True
    collider.allow_proximity = collider.is_collidable
    bbox = collider.bounding_box
    bbox.position = Vector2(position.x + offsets.x, position.y + offsets.y)
    bbox.old_position = bbox.position.copy()
    transform = Transform(z=ELEVATOR_Z + offsets.z)
    return world.spawn(
        Named(component.name),
        component,
        Child(elevator_entity, position.x + offsets.x, position.y + offsets.y, offsets.z),
        collider,
        Collidee(),
        Motion(),
        Proximity(),
        SpriteRender(sprite_sheet_handle, component.sprite_number),
        transform,
    )


def load_elevator(
    world: World,
    sprite_sheet_handle: Any,
    top_left: Vector2,
    bottom_right: Vector2,
    min_floor: int,
    max_floor: int,
    start_floor: int,
) -> Entity:
    """Create an elevator, its shaft and its car parts; return the elevator entity."""
    elevator = make_elevator(top_left, min_floor, max_floor, start_floor, 0.0)
    elevator_entity = world.spawn(
        Named("Elevator"),
        elevator,
        Collidee(),
        Transform(top_left.x, top_left.y, ELEVATOR_Z),
    )

    for floor in range(max_floor, min_floor - 1, -1):
        # The sprites sit a few units lower than the floor boundaries.
        y = top_left.y - FLOOR_HEIGHT * (max_floor - floor) - 4.0
        sprite = BOTTOM_SHAFT_SPRITE if floor == min_floor else SHAFT_SPRITE
        world.spawn(
            Named("ElevatorShaft"),
            SpriteRender(sprite_sheet_handle, sprite),
            Transform(top_left.x, y, ELEVATOR_Z - 0.1),
        )

    parts = (
        ElevatorComponent("ElevatorInside", 2, 24.0, 40.0, (0.0, 0.0, 0.0), False),
        ElevatorComponent("ElevatorBottom", 0, 24.0, 4.0, (0.0, -ELEVATOR_OFFSET, 0.0), True),
        ElevatorComponent("ElevatorTop", 7, 24.0, 4.0, (0.0, ELEVATOR_OFFSET, 0.0), True),
    )
    for part in parts:
        _create_component(world, elevator_entity, top_left, part, sprite_sheet_handle)
    return elevator_entity