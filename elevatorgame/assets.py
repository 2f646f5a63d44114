"""Asset types, handles to their files, and load progress tracking."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from elevatorgame.world import World


class AssetType(enum.Enum):
    BULLET = "bullet"
    BULLET_IMPACT = "bullet_impact"
    DOOR = "door"
    ELEVATOR = "elevator"
    PLAYER = "player"
    GUNS = "guns"


_PATHS = {
    AssetType.PLAYER: ("texture/player.png", "prefabs/player.ron"),
    AssetType.BULLET: ("texture/bullet.png", "prefabs/bullet.ron"),
    AssetType.BULLET_IMPACT: ("texture/bullet_impact.png", "prefabs/bullet_impact.ron"),
    AssetType.DOOR: ("texture/doors.png", "prefabs/doors.ron"),
    AssetType.ELEVATOR: ("texture/elevator.png", "prefabs/elevator.ron"),
    AssetType.GUNS: ("texture/guns.png", "prefabs/guns.ron"),
}

_WITHOUT_ANIMATION = frozenset({AssetType.BULLET, AssetType.ELEVATOR})


@dataclass(frozen=True)
class Handle:
    """Refers to an asset file, and to its texture for sprite sheets."""

    path: str
    texture_path: str | None = None


@dataclass
class ProgressCounter:
    """Tracks which assets are still loading, finished or failed."""

    pending: list[Handle] = field(default_factory=list)
    finished: list[Handle] = field(default_factory=list)
    failures: dict[Handle, str] = field(default_factory=dict)

    def track(self, handle: Handle) -> None:
        self.pending.append(handle)

    def finish(self, handle: Handle) -> None:
        self.pending.remove(handle)
        self.finished.append(handle)

    def fail(self, handle: Handle, error: str) -> None:
        self.pending.remove(handle)
        self.failures[handle] = error

    @property
    def num_loading(self) -> int:
        return len(self.pending)

    @property
    def num_finished(self) -> int:
        return len(self.finished)

    @property
    def num_failed(self) -> int:
        return len(self.failures)

    @property
    def errors(self) -> list[str]:
        return list(self.failures.values())

    def is_complete(self) -> bool:
        """True once every tracked asset has finished loading."""
        return not self.pending and not self.failures

    def resolve(self, root: str | Path) -> None:
        """Finish every pending asset whose file exists under root; fail the rest."""
        base = Path(root)
        for handle in list(self.pending):
            if (base / handle.path).is_file():
                self.finish(handle)
            else:
                self.fail(handle, f"asset file not found: {handle.path}")


@dataclass
class SpriteSheetList:
    """Sprite sheets of assets drawn without animation."""

    sprite_sheets: dict[AssetType, Handle] = field(default_factory=dict)

    def insert(self, asset_type: AssetType, handle: Handle) -> None:
        self.sprite_sheets[asset_type] = handle

    def get(self, asset_type: AssetType) -> Handle | None:
        return self.sprite_sheets.get(asset_type)


@dataclass
class PrefabList:
    """Animated prefabs of assets."""

    prefabs: dict[AssetType, Handle] = field(default_factory=dict)

    def insert(self, asset_type: AssetType, handle: Handle) -> None:
        self.prefabs[asset_type] = handle

    def get(self, asset_type: AssetType) -> Handle | None:
        return self.prefabs.get(asset_type)


def asset_paths(asset_type: AssetType) -> tuple[str, str]:
    """Return the (texture, description) file paths of an asset type."""
    return _PATHS[asset_type]


def load_assets(world: World, asset_types: Iterable[AssetType]) -> ProgressCounter:
    """Register handles for the given assets as world resources and track them."""
    sprite_sheets = SpriteSheetList()
    prefabs = PrefabList()
    progress = ProgressCounter()

    for asset_type in asset_types:
        texture_path, ron_path = asset_paths(asset_type)
        if asset_type in _WITHOUT_ANIMATION:
            handle = Handle(ron_path, texture_path)
            sprite_sheets.insert(asset_type, handle)
        else:
            handle = Handle(ron_path)
            prefabs.insert(asset_type, handle)
        progress.track(handle)

    world.insert_resource(sprite_sheets)
    world.insert_resource(prefabs)
    return progress