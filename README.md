# elevatorgame

The game logic of a small side-scrolling action game set in a building of
elevators, doors and rooms. It runs on a lightweight entity-component-system
core: entities are integer ids, components are plain dataclasses, and each
system's `run(world)` makes one pass over the entities it cares about.

## Installing

```
pip install .
```

Use `pip install .[test]` to get pytest for the test suite as well.

## Running

```
elevatorgame [ASSETS] [--frames N] [--delta SECONDS]
```

The command calls `elevatorgame.game.main`. `ASSETS` is the assets directory
(default `assets`, which must exist). The game runs `--frames` frames
(default 600), each `--delta` seconds long (default 1/60).

On the first frame the game checks that these files exist under the assets
directory:

- `prefabs/player.ron`, `prefabs/guns.ron`, `prefabs/bullet.ron`,
  `prefabs/bullet_impact.ron`, `prefabs/doors.ron`, `prefabs/elevator.ron`
- `tilesets/floors.json` (a tileset)
- `tilesets/floors_1.json` (a map)

The `.ron` files are only checked for existence; they are not read. When all
are present, the tileset and map are read, the map's layers become entities
and the player with its gun is placed. The command then prints
`ran N frames` and exits with status 0. If any file is missing (or no frame
was run), it prints the load errors to standard error and exits with status 1.

## What it does not do

The package has no window, no rendering and no keyboard or gamepad handling.
Sprites, textures and animations are recorded as data on entities but never
drawn, and images are not loaded. Input comes from the `InputState` resource,
which stays at rest unless your code changes it, so the command on its own
runs the world with nobody at the controls.

## Using it from code

```python
from elevatorgame.game import Game

game = Game("assets")
game.world.resource(InputState).axes["move"] = 1.0   # walk right
for _ in range(60):
    game.step(1 / 60)
```

(`InputState` is in `elevatorgame.world`.) `Game(assets_dir, input_state=None)`
builds a `World` with `Time`, `FpsCounter` and `InputState` resources, a
`GameState` and the systems from `build_systems()`. `Game.step(delta_seconds)`
advances time, updates the sampled frame rate, lets the game state finish
loading, then runs every system in order. A negative frame time raises
`ValueError`.

The input axis is `move`; the actions are `jump`, `shoot`, `up` and `down`.

## Modules

- `elevatorgame.world`: `World` (`spawn`, `insert`, `get`, `delete`,
  `is_alive`, `join`, `insert_resource`, `resource`), the shared components
  `Vector2`, `Transform`, `Named`, `SpriteRender`, `Child`, `Camera`, the
  resources `Time` and `InputState`, and `init_camera`.
- `elevatorgame.physics_components`: `GenericBox`, `Collider`, `Collidee`,
  `CollideeDetails`, `Proximity`, `ProximityDetails`, `Motion`, `Direction`,
  `Directions` and `DefaultTransformation`.
- `elevatorgame.physics_systems`: `CollisionSystem`, `ProximitySystem`,
  `KinematicsSystem`, `DirectionSystem` and `DefaultTransformationSystem`.
- `elevatorgame.animation`: `AnimationId`, `EndControl`, `AnimationSet`,
  `AnimationControlSet`, `Animation`, `end_control_for` and
  `AnimationControlSystem`.
- `elevatorgame.fps`: `UiText`, `FpsCounter`, `format_fps` and
  `UiFpsSystem`, which rewrites the `fps_text` text every twentieth frame.
- `elevatorgame.assets`: `AssetType`, `Handle`, `ProgressCounter`,
  `SpriteSheetList`, `PrefabList`, `asset_paths` and `load_assets`.
- `elevatorgame.tileset`: `Tileset`, `SpriteSheet`, `Sprite`,
  `TextureCoordinates`, `parse_tileset` and `load_tileset`.
- `elevatorgame.tilemap`: `TileMap`, `Layer`, `MapObject`, `Property`,
  `parse_map` and `load_map`. `TileMap.load_layers` handles the `collision`,
  `doors`, `elevators` and `map` layers and ignores the rest. Malformed JSON
  or fields raise `ValueError`.
- `elevatorgame.elevator` and `elevatorgame.elevator_systems`: elevator
  cars built by `make_elevator` / `load_elevator` that travel between floors
  at 20 units per second, wait 2.2 seconds at each floor, and answer the `up`
  and `down` actions (`ElevatorControlSystem`,
  `ElevatorTransformationSystem`, `stop_elevator`).
- `elevatorgame.door`: `load_door` and the door systems. Doors named
  `red_left` or `red_right` are red and have an entry; an idle player
  overlapping that entry and facing the other way opens the door and starts
  entering the room. Blue doors never open.
- `elevatorgame.player_components`, `elevatorgame.player_entities`,
  `elevatorgame.player_systems`, `elevatorgame.player_transform` and
  `elevatorgame.combat`: the player, its gun (at most three bullets in
  flight), bullets and bullet impacts. Walking towards the top or bottom of
  an elevator car close by makes the player hop.