"""On-screen frames-per-second display."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from elevatorgame.world import Entity, Time, World

FPS_TEXT_ID = "fps_text"
UPDATE_EVERY_FRAMES = 20


@dataclass
class UiText:
    """A piece of UI text identified by id."""

    id: str
    text: str = ""


@dataclass
class FpsCounter:
    """Resource holding the sampled frame rate."""

    sampled_fps: float = 0.0


def format_fps(fps: float) -> str:
    return f"FPS: {fps:.2f}"


def _read(world: World, resource_type: type) -> Any:
    try:
        return world.resource(resource_type)
    except KeyError:
        return resource_type()


@dataclass
class UiFpsSystem:
    """Refreshes the FPS text every twentieth frame."""

    fps_display: Entity | None = None

    def run(self, world: World) -> None:
        if self.fps_display is None:
            self.fps_display = next(
                (entity for entity, text in world.join(UiText) if text.id == FPS_TEXT_ID),
                None,
            )
        if self.fps_display is None:
            return
        display = world.get(self.fps_display, UiText)
        if display is None:
            return
        if _read(world, Time).frame_number % UPDATE_EVERY_FRAMES == 0:
            display.text = format_fps(_read(world, FpsCounter).sampled_fps)