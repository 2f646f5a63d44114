"""The game state, the ordered list of systems and the headless game loop."""

from __future__ import annotations

import argparse
import logging
import sys
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from elevatorgame.animation import AnimationControlSystem
from elevatorgame.assets import AssetType, Handle, PrefabList, ProgressCounter, load_assets
from elevatorgame.combat import BulletCollisionSystem, ShootSystem
from elevatorgame.door import (
    DoorAnimationSystem,
    DoorEntryCollisionSystem,
    DoorTransformationSystem,
)
from elevatorgame.elevator_systems import ElevatorControlSystem, ElevatorTransformationSystem
from elevatorgame.fps import FPS_TEXT_ID, FpsCounter, UiFpsSystem, UiText
from elevatorgame.physics_systems import (
    CollisionSystem,
    DefaultTransformationSystem,
    DirectionSystem,
    KinematicsSystem,
    ProximitySystem,
)
from elevatorgame.player_entities import load_player
from elevatorgame.player_systems import (
    BulletImpactAnimationSystem,
    GunAnimationSystem,
    PlayerAnimationSystem,
    PlayerControlsSystem,
    PlayerKinematicsSystem,
)
from elevatorgame.player_transform import (
    CameraTransformationSystem,
    GunTransformationSystem,
    PlayerTransformationSystem,
)
from elevatorgame.tilemap import load_map
from elevatorgame.tileset import load_tileset
from elevatorgame.world import InputState, Time, World, init_camera

log = logging.getLogger(__name__)

MAP_PATH = "tilesets/floors_1.json"
TILESET_PATH = "tilesets/floors.json"
FPS_SAMPLES = 20

GAME_ASSETS = (
    AssetType.PLAYER,
    AssetType.GUNS,
    AssetType.BULLET,
    AssetType.BULLET_IMPACT,
    AssetType.DOOR,
    AssetType.ELEVATOR,
)


def default_input() -> InputState:
    """Input with every bound axis and action at rest."""
    return InputState(
        axes={"move": 0.0},
        actions={"jump": False, "shoot": False, "down": False, "up": False},
    )


@dataclass
class GameState:
    """Loads the assets, then builds the map and the player once they are ready."""

    assets_dir: Path
    progress_counter: ProgressCounter | None = None
    map_handle: Handle | None = None
    tileset_handle: Handle | None = None

    def on_start(self, world: World) -> None:
        log.info("GameState on_start")
        progress = load_assets(world, GAME_ASSETS)
        self.map_handle = Handle(MAP_PATH)
        self.tileset_handle = Handle(TILESET_PATH)
        progress.track(self.map_handle)
        progress.track(self.tileset_handle)
        self.progress_counter = progress

        world.spawn(UiText(FPS_TEXT_ID))
        init_camera(world)

    def update(self, world: World) -> None:
        progress = self.progress_counter
        if progress is None:
            return
        progress.resolve(self.assets_dir)
        if not progress.is_complete():
            log.info(
                "Loading: %d, Failed: %d, Finished: %d, Errors: %s",
                progress.num_loading,
                progress.num_failed,
                progress.num_finished,
                progress.errors,
            )
            return

        log.info("GameState progress complete")
        tileset = load_tileset(self.assets_dir / self.tileset_handle.path)
        sprite_sheet = tileset.load_spritesheet()
        world.insert_resource(sprite_sheet)

        tile_map = load_map(self.assets_dir / self.map_handle.path)
        tile_map.load_layers(world, sprite_sheet)
        self.map_handle = None
        self.tileset_handle = None

        prefabs = world.resource(PrefabList)
        player_handle = prefabs.get(AssetType.PLAYER)
        guns_handle = prefabs.get(AssetType.GUNS)
        if player_handle is None or guns_handle is None:
            raise KeyError("player or guns prefab not loaded")
        load_player(world, player_handle, guns_handle)
        self.progress_counter = None

    @property
    def loaded(self) -> bool:
        return self.progress_counter is None and self.map_handle is None


def build_systems() -> list[Any]:
    """Every system of the game in an order that honours their dependencies."""
    return [
        UiFpsSystem(),
        PlayerControlsSystem(),
        ElevatorControlSystem(),
        PlayerKinematicsSystem(),
        KinematicsSystem(),
        ShootSystem(),
        CollisionSystem(),
        BulletCollisionSystem(),
        DoorEntryCollisionSystem(),
        DefaultTransformationSystem(),
        DoorTransformationSystem(),
        ElevatorTransformationSystem(),
        PlayerTransformationSystem(),
        CameraTransformationSystem(),
        ProximitySystem(),
        GunTransformationSystem(),
        BulletImpactAnimationSystem(),
        PlayerAnimationSystem(),
        DoorAnimationSystem(),
        GunAnimationSystem(),
        AnimationControlSystem(),
        DirectionSystem(),
    ]


class Game:
    """A world, its game state and its systems, advanced one frame at a time."""

    def __init__(self, assets_dir: str | Path, input_state: InputState | None = None) -> None:
        self.world = World()
        self.world.insert_resource(Time())
        self.world.insert_resource(FpsCounter())
        self.world.insert_resource(input_state or default_input())
        self.state = GameState(Path(assets_dir))
        self.systems = build_systems()
        self._frame_times: deque[float] = deque(maxlen=FPS_SAMPLES)
        self.state.on_start(self.world)

    def step(self, delta_seconds: float) -> None:
        """Advance the game by one frame lasting delta_seconds."""
        if delta_seconds < 0:
            raise ValueError("frame time cannot be negative")
        time = self.world.resource(Time)
        time.delta_seconds = delta_seconds
        time.absolute_time_seconds += delta_seconds
        time.frame_number += 1

        self._frame_times.append(delta_seconds)
        total = sum(self._frame_times)
        if total > 0:
            self.world.resource(FpsCounter).sampled_fps = len(self._frame_times) / total

        self.state.update(self.world)
        for system in self.systems:
            system.run(self.world)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the elevator game without a display.")
    parser.add_argument("assets", nargs="?", default="assets", help="assets directory")
    parser.add_argument("--frames", type=int, default=600, help="number of frames to run")
    parser.add_argument("--delta", type=float, default=1.0 / 60.0, help="seconds per frame")
    args = parser.parse_args(argv)

    assets = Path(args.assets)
    if not assets.is_dir():
        parser.error(f"assets directory not found: {assets}")
    if args.frames < 0:
        parser.error("--frames cannot be negative")

    logging.basicConfig(level=logging.INFO)
    game = Game(assets)
    for _ in range(args.frames):
        game.step(args.delta)

    if not game.state.loaded:
        progress = game.state.progress_counter
        errors = progress.errors if progress is not None else []
        print(f"assets failed to load: {errors}", file=sys.stderr)
        return 1
    print(f"ran {args.frames} frames")
    return 0