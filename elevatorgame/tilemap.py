"""Tile maps exported by the map editor and the entities they describe."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from elevatorgame.assets import AssetType, PrefabList, SpriteSheetList
from elevatorgame.door import load_door
from elevatorgame.elevator import FLOOR_HEIGHT, load_elevator
from elevatorgame.physics_components import Collider, Direction, Motion
from elevatorgame.world import Named, SpriteRender, Transform, Vector2, World

log = logging.getLogger(__name__)

TILE_OFFSET_Y = 224.0
TILE_WIDTH = 256.0
TILE_HEIGHT = 48.0
NUM_COLUMNS = 1
OBJECT_OFFSET_X = 0.0
OBJECT_OFFSET_Y = 223.0
BACKGROUND_Z = -10.0
_NON_COLLIDABLE = frozenset({"shaft", "entry"})


@dataclass
class Property:
    """A named integer property of a map object."""

    name: str
    value: int


@dataclass
class MapObject:
    """An object placed on an object layer."""

    name: str
    height: float
    width: float
    rotation: float
    x: float
    y: float
    visible: bool
    properties: list[Property] | None = None


@dataclass
class Layer:
    """A tile layer (with data) or an object layer (with objects)."""

    name: str
    opacity: int
    x: float
    y: float
    visible: bool
    data: list[int] | None = None
    height: int | None = None
    width: int | None = None
    objects: list[MapObject] | None = None


@dataclass
class TileMap:
    """A map and its layers."""

    width: int
    height: int
    tilewidth: int
    tileheight: int
    layers: list[Layer]

    def load_layers(self, world: World, sprite_sheet_handle: Any) -> None:
        """Create the entities of every known layer."""
        for layer in self.layers:
            if layer.name == "collision":
                _load_collision_layer(world, layer)
            elif layer.name in ("doors", "elevators"):
                _load_sprite_layer(world, layer)
            elif layer.name == "map":
                _load_tile_layer(world, layer, sprite_sheet_handle)


def _load_sprite_layer(world: World, layer: Layer) -> None:
    for obj in layer.objects or ():
        if layer.name == "doors":
            x = OBJECT_OFFSET_X + obj.x + obj.width / 2.0
            y = OBJECT_OFFSET_Y - obj.y - obj.height / 2.0
            log.info("Adding door object %s, x: %s, y: %s", obj.name, x, y)
            handle = world.resource(PrefabList).get(AssetType.DOOR)
            if handle is None:
                raise KeyError("no door prefab loaded")
            load_door(world, handle, Vector2(x, y), obj.name)
        elif layer.name == "elevators":
            x = OBJECT_OFFSET_X + obj.x + obj.width / 2.0
            y = OBJECT_OFFSET_Y - obj.y - FLOOR_HEIGHT / 2.0
            floors = {"min_floor": 0, "max_floor": 0, "start_floor": 0}
            for prop in obj.properties or ():
                if prop.name in floors:
                    floors[prop.name] = prop.value
            log.info("Adding elevator object %s, x: %s, y: %s, %s", obj.name, x, y, floors)
            handle = world.resource(SpriteSheetList).get(AssetType.ELEVATOR)
            if handle is None:
                raise KeyError("no elevator sprite sheet loaded")
            # The elevator sits one unit higher than the object.
            top_left = Vector2(x, y + 1.0)
            bottom_right = Vector2(x + FLOOR_HEIGHT, y - obj.height)
            load_elevator(
                world,
                handle,
                top_left,
                bottom_right,
                floors["min_floor"],
                floors["max_floor"],
                floors["start_floor"],
            )


def _load_collision_layer(world: World, layer: Layer) -> None:
    for obj in layer.objects or ():
        collider = Collider.of_size(obj.width, obj.height)
        if obj.name in _NON_COLLIDABLE:
            collider.is_collidable = False
        bbox = collider.bounding_box
        bbox.position = Vector2(
            OBJECT_OFFSET_X + obj.x + bbox.half_size.x,
            OBJECT_OFFSET_Y - obj.y - bbox.half_size.y,
        )
        bbox.old_position = bbox.position.copy()
        log.info("Adding collision object %s at %s", obj.name, bbox.position)
        world.spawn(
            Named(obj.name),
            Motion(),
            Transform(z=BACKGROUND_Z),
            collider,
            Direction(),
        )


def _load_tile_layer(world: World, layer: Layer, sprite_sheet_handle: Any) -> None:
    log.info("Load tile layer: %s", layer.name)
    for index, tile in enumerate(layer.data or ()):
        if tile < 1:
            raise ValueError(f"tile {index} has id {tile}; tile ids start at 1")
        row, column = divmod(index, NUM_COLUMNS)
        x = TILE_WIDTH / 2.0 + TILE_HEIGHT * column
        y = TILE_OFFSET_Y - TILE_HEIGHT / 2.0 - TILE_HEIGHT * row
        world.spawn(
            Named("map_tile"),
            Transform(x, y, BACKGROUND_Z),
            # Tile ids in the map are one higher than sprite numbers.
            SpriteRender(sprite_sheet_handle, tile - 1),
        )


def _field(data: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in data:
        raise ValueError(f"{where} is missing field {key!r}")
    return data[key]


def _float(data: Mapping[str, Any], key: str, where: str) -> float:
    value = _field(data, key, where)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{where} field {key!r} must be a number")
    return float(value)


def _check_int(value: Any, key: str, where: str, minimum: int | None = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{where} field {key!r} must be an integer")
    if minimum is not None and value < minimum:
        raise ValueError(f"{where} field {key!r} must be at least {minimum}")
    return value


def _int(data: Mapping[str, Any], key: str, where: str, minimum: int | None = None) -> int:
    return _check_int(_field(data, key, where), key, where, minimum)


def _optional_int(data: Mapping[str, Any], key: str, where: str) -> int | None:
    value = data.get(key)
    return None if value is None else _check_int(value, key, where)


def _bool(data: Mapping[str, Any], key: str, where: str) -> bool:
    value = _field(data, key, where)
    if not isinstance(value, bool):
        raise ValueError(f"{where} field {key!r} must be a boolean")
    return value


def _str(data: Mapping[str, Any], key: str, where: str) -> str:
    value = _field(data, key, where)
    if not isinstance(value, str):
        raise ValueError(f"{where} field {key!r} must be a string")
    return value


def _list(value: Any, key: str, where: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValueError(f"{where} field {key!r} must be a list")
    return value


def _object(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{where} must be a JSON object")
    return value


def _parse_property(value: Any) -> Property:
    data = _object(value, "property")
    return Property(
        name=_str(data, "name", "property"),
        value=_int(data, "value", "property", minimum=0),
    )


def _parse_object(value: Any) -> MapObject:
    data = _object(value, "map object")
    where = "map object"
    properties = data.get("properties")
    return MapObject(
        name=_str(data, "name", where),
        height=_float(data, "height", where),
        width=_float(data, "width", where),
        rotation=_float(data, "rotation", where),
        x=_float(data, "x", where),
        y=_float(data, "y", where),
        visible=_bool(data, "visible", where),
        properties=None
        if properties is None
        else [_parse_property(p) for p in _list(properties, "properties", where)],
    )


def _parse_layer(value: Any) -> Layer:
    data = _object(value, "layer")
    where = "layer"
    tiles = data.get("data")
    objects = data.get("objects")
    return Layer(
        name=_str(data, "name", where),
        opacity=_int(data, "opacity", where),
        x=_float(data, "x", where),
        y=_float(data, "y", where),
        visible=_bool(data, "visible", where),
        data=None
        if tiles is None
        else [_check_int(t, "data", where) for t in _list(tiles, "data", where)],
        height=_optional_int(data, "height", where),
        width=_optional_int(data, "width", where),
        objects=None
        if objects is None
        else [_parse_object(o) for o in _list(objects, "objects", where)],
    )


def parse_map(data: str | bytes | Mapping[str, Any]) -> TileMap:
    """Build a map from JSON text or an already decoded JSON object."""
    if isinstance(data, (str, bytes, bytearray)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid map JSON: {exc}") from exc
    mapping = _object(data, "map")
    return TileMap(
        width=_int(mapping, "width", "map"),
        height=_int(mapping, "height", "map"),
        tilewidth=_int(mapping, "tilewidth", "map"),
        tileheight=_int(mapping, "tileheight", "map"),
        layers=[_parse_layer(layer) for layer in _list(_field(mapping, "layers", "map"), "layers", "map")],
    )


def load_map(path: str | Path) -> TileMap:
    """Read a map JSON file."""
    return parse_map(Path(path).read_text(encoding="utf-8"))