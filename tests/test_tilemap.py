import json

import pytest

from elevatorgame.assets import AssetType, Handle, PrefabList, SpriteSheetList
from elevatorgame.door import Door
from elevatorgame.elevator import Elevator
from elevatorgame.physics_components import Collider
from elevatorgame.tilemap import (
    TILE_HEIGHT,
    Layer,
    MapObject,
    Property,
    TileMap,
    load_map,
    parse_map,
)
from elevatorgame.world import Named, SpriteRender, Transform, World


def obj(name, x=0, y=0, width=16, height=16, properties=None):
    data = {
        "name": name,
        "height": height,
        "width": width,
        "rotation": 0,
        "x": x,
        "y": y,
        "visible": True,
    }
    if properties is not None:
        data["properties"] = properties
    return data


def layer(name, data=None, objects=None):
    result = {"name": name, "opacity": 1, "x": 0, "y": 0, "visible": True}
    if data is not None:
        result["data"] = data
        result["width"] = 1
        result["height"] = len(data)
    if objects is not None:
        result["objects"] = objects
    return result


def map_doc(*layers):
    return {"width": 1, "height": 4, "tilewidth": 256, "tileheight": 48, "layers": list(layers)}


def test_parse_map_reads_layers_and_objects():
    doc = map_doc(
        layer("map", data=[1, 2]),
        layer("elevators", objects=[obj("lift", properties=[{"name": "max_floor", "value": 2}])]),
    )
    tile_map = parse_map(json.dumps(doc))
    assert tile_map.tilewidth == 256
    assert tile_map.layers[0].data == [1, 2]
    assert tile_map.layers[0].objects is None
    assert tile_map.layers[1].objects[0].properties == [Property("max_floor", 2)]
    assert tile_map.layers[1].objects[0].name == "lift"


def test_parse_map_rejects_missing_field():
    doc = map_doc()
    del doc["tilewidth"]
    with pytest.raises(ValueError):
        parse_map(doc)


def test_parse_map_rejects_bad_json():
    with pytest.raises(ValueError):
        parse_map("{not json")


def test_parse_map_rejects_negative_property_value():
    doc = map_doc(layer("elevators", objects=[obj("lift", properties=[{"name": "min_floor", "value": -1}])]))
    with pytest.raises(ValueError):
        parse_map(doc)


def test_load_map_from_file(tmp_path):
    path = tmp_path / "floors.json"
    path.write_text(json.dumps(map_doc(layer("map", data=[3]))), encoding="utf-8")
    tile_map = load_map(path)
    assert tile_map.layers[0].name == "map"
    assert tile_map.layers[0].data == [3]


def test_tile_layer_creates_one_tile_per_entry():
    world = World()
    tile_map = parse_map(map_doc(layer("map", data=[1, 2, 3])))
    tile_map.load_layers(world, "tiles")
    tiles = list(world.join(Named, Transform, SpriteRender))
    assert [s.sprite_number for _, _, _, s in tiles] == [0, 1, 2]
    assert all(n.name == "map_tile" for _, n, _, _ in tiles)
    assert all(s.sprite_sheet == "tiles" for _, _, _, s in tiles)
    ys = [t.y for _, _, t, _ in tiles]
    assert [a - b for a, b in zip(ys, ys[1:])] == [TILE_HEIGHT, TILE_HEIGHT]
    assert len({t.x for _, _, t, _ in tiles}) == 1


def test_tile_layer_rejects_empty_tile():
    world = World()
    tile_map = parse_map(map_doc(layer("map", data=[0])))
    with pytest.raises(ValueError):
        tile_map.load_layers(world, "tiles")


def test_collision_layer_places_boxes_from_corner():
    world = World()
    tile_map = parse_map(
        map_doc(layer("collision", objects=[obj("floor", x=10, y=200, width=40, height=8), obj("shaft")]))
    )
    tile_map.load_layers(world, None)
    found = {named.name: collider for _, named, collider in world.join(Named, Collider)}
    floor = found["floor"].bounding_box
    assert floor.position.x - floor.half_size.x == 10
    assert floor.position.y + floor.half_size.y == 223 - 200
    assert floor.old_position == floor.position
    assert found["floor"].is_collidable is True
    assert found["shaft"].is_collidable is False


def test_doors_layer_creates_doors():
    world = World()
    world.insert_resource(PrefabList({AssetType.DOOR: Handle("prefabs/doors.ron")}))
    tile_map = parse_map(map_doc(layer("doors", objects=[obj("red_left", x=20, y=100)])))
    tile_map.load_layers(world, None)
    doors = [door for _, door in world.join(Door)]
    assert len(doors) == 1
    assert doors[0].can_user_enter is True


def test_doors_layer_needs_door_prefab():
    world = World()
    world.insert_resource(PrefabList())
    tile_map = parse_map(map_doc(layer("doors", objects=[obj("blue_left")])))
    with pytest.raises(KeyError):
        tile_map.load_layers(world, None)


def test_elevators_layer_reads_floor_properties():
    world = World()
    world.insert_resource(SpriteSheetList({AssetType.ELEVATOR: Handle("prefabs/elevator.ron")}))
    props = [
        {"name": "min_floor", "value": 0},
        {"name": "max_floor", "value": 2},
        {"name": "start_floor", "value": 0},
    ]
    tile_map = parse_map(
        map_doc(layer("elevators", objects=[obj("lift", x=100, y=50, width=48, height=144, properties=props)]))
    )
    tile_map.load_layers(world, None)
    elevators = [e for _, e in world.join(Elevator)]
    assert len(elevators) == 1
    assert elevators[0].num_floors == 3
    assert elevators[0].start_floor == 0


def test_unknown_layers_are_ignored():
    world = World()
    tile_map = TileMap(
        1, 1, 256, 48,
        [Layer(name="decor", opacity=1, x=0.0, y=0.0, visible=True,
               objects=[MapObject("x", 1.0, 1.0, 0.0, 0.0, 0.0, True)])],
    )
    tile_map.load_layers(world, None)
    assert list(world.join()) == []