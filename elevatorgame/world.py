"""A small entity-component world plus the basic spatial components."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, Iterator

GAME_WIDTH = 256.0
GAME_HEIGHT = 192.0

Entity = int


@dataclass
class Vector2:
    """A mutable two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0

    def copy(self) -> Vector2:
        return Vector2(self.x, self.y)


@dataclass
class Transform:
    """Position, rotation about the y axis and uniform scale of an entity."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    rotation_y: float = 0.0
    scale: float = 1.0

    def set_translation_xyz(self, x: float, y: float, z: float) -> None:
        self.x, self.y, self.z = x, y, z

    def set_rotation_y_axis(self, angle: float) -> None:
        self.rotation_y = angle


@dataclass
class Named:
    """A human-readable entity name."""

    name: str


@dataclass
class SpriteRender:
    """Draws one sprite from a sprite sheet."""

    sprite_sheet: Any
    sprite_number: int = 0


@dataclass
class Time:
    """Frame timing resource."""

    delta_seconds: float = 0.0
    absolute_time_seconds: float = 0.0
    frame_number: int = 0


@dataclass
class InputState:
    """Current values of bound input axes and actions."""

    axes: dict[str, float] = field(default_factory=dict)
    actions: dict[str, bool] = field(default_factory=dict)

    def axis_value(self, name: str) -> float:
        try:
            return self.axes[name]
        except KeyError:
            raise KeyError(f"unknown input axis {name!r}") from None

    def action_is_down(self, name: str) -> bool:
        try:
            return self.actions[name]
        except KeyError:
            raise KeyError(f"unknown input action {name!r}") from None


@dataclass
class Child:
    """Links an entity to its parent with a positional offset."""

    parent: Entity
    offset_x: float = 0.0
    offset_y: float = 0.0
    offset_z: float = 0.0


@dataclass
class Camera:
    """An orthographic 2D camera covering width x height world units."""

    width: float
    height: float


class World:
    """Holds entities, their components (one per type) and global resources."""

    def __init__(self) -> None:
        self._ids = itertools.count()
        self._alive: dict[Entity, None] = {}
        self._storages: dict[type, dict[Entity, Any]] = {}
        self._resources: dict[type, Any] = {}

    def spawn(self, *args: Any) -> Entity:
        """Create an entity carrying the given components and return it."""
        entity = next(self._ids)
        self._alive[entity] = None
        for component in args:
            self.insert(entity, component)
        return entity

    def insert(self, entity: Entity, component: Any) -> None:
        if entity not in self._alive:
            raise ValueError(f"entity {entity} is not alive")
        self._storages.setdefault(type(component), {})[entity] = component

    def get(self, entity: Entity, component_type: type) -> Any:
        return self._storages.get(component_type, {}).get(entity)

    def delete(self, entity: Entity) -> None:
        if self._alive.pop(entity, False) is False:
            return
        for storage in self._storages.values():
            storage.pop(entity, None)

    def is_alive(self, entity: Entity) -> bool:
        return entity in self._alive

    def join(self, *args: type) -> Iterator[tuple[Any, ...]]:
        """Yield (entity, component, ...) for entities having every given type."""
        if args:
            storages = [self._storages.get(t, {}) for t in args]
            candidates = sorted(min(storages, key=len))
        else:
            candidates = list(self._alive)
        for entity in candidates:
            if entity not in self._alive:
                continue
            current = [self._storages.get(t, {}) for t in args]
            if all(entity in storage for storage in current):
                yield (entity, *(storage[entity] for storage in current))

    def insert_resource(self, resource: Any) -> None:
        self._resources[type(resource)] = resource

    def resource(self, resource_type: type) -> Any:
        try:
            return self._resources[resource_type]
        except KeyError:
            raise KeyError(f"missing resource {resource_type.__name__}") from None


def init_camera(world: World) -> Entity:
    """Add a camera whose view covers the arena with (0, 0) at the bottom left."""
    transform = Transform()
    transform.set_translation_xyz(GAME_WIDTH * 0.5, GAME_HEIGHT * 0.5, 10.0)
    return world.spawn(Camera(GAME_WIDTH, GAME_HEIGHT), transform)