"""Tilesets and the sprite sheets cut from them."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)

_NUMERIC_FIELDS = (
    "columns",
    "imageheight",
    "imagewidth",
    "margin",
    "spacing",
    "tileheight",
    "tilewidth",
    "tilecount",
)


@dataclass
class TextureCoordinates:
    """Normalised sprite bounds within a texture."""

    left: float
    right: float
    bottom: float
    top: float


@dataclass
class Sprite:
    """One sprite of a sheet."""

    width: float
    height: float
    tex_coords: TextureCoordinates
    offsets: tuple[float, float] = (0.0, 0.0)


@dataclass
class SpriteSheet:
    """A texture and the sprites laid out on it."""

    texture: str
    sprites: list[Sprite] = field(default_factory=list)


@dataclass
class Tileset:
    """Tileset description as exported by the map editor."""

    columns: float
    image: str
    imageheight: float
    imagewidth: float
    margin: float
    spacing: float
    tileheight: float
    tilewidth: float
    tilecount: float

    def load_spritesheet(self) -> SpriteSheet:
        """Cut the tileset image into one sprite per tile, row by row."""
        log.info("Loaded tileset with image: %s", self.image)
        if self.columns <= 0:
            raise ValueError("tileset must have at least one column")
        if self.tilewidth <= 0 or self.tileheight <= 0:
            raise ValueError("tile size must be positive")

        rows = int(self.tilecount / self.columns)
        columns = int(self.columns)
        sheet_columns = int(self.imagewidth / self.tilewidth)
        sheet_rows = int(self.imageheight / self.tileheight)
        if sheet_columns <= 0 or sheet_rows <= 0:
            raise ValueError("tileset image is smaller than one tile")
        column_step = 1.0 / sheet_columns
        row_step = 1.0 / sheet_rows

        log.info("columns: %s, rows: %s, tilecount: %s", self.columns, rows, self.tilecount)
        sprites = [
            Sprite(
                width=self.tilewidth,
                height=self.tileheight,
                tex_coords=TextureCoordinates(
                    left=x * column_step,
                    right=(x + 1) * column_step,
                    bottom=(y + 1) * row_step,
                    top=y * row_step,
                ),
            )
            for y in range(rows)
            for x in range(columns)
        ]
        log.info("sprites: %d", len(sprites))
        return SpriteSheet(texture=self.image, sprites=sprites)


def parse_tileset(data: str | bytes | Mapping[str, Any]) -> Tileset:
    """Build a tileset from JSON text or an already decoded JSON object."""
    if isinstance(data, (str, bytes, bytearray)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid tileset JSON: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ValueError("tileset must be a JSON object")

    missing = [name for name in ("image", *_NUMERIC_FIELDS) if name not in data]
    if missing:
        raise ValueError(f"tileset is missing fields: {', '.join(missing)}")

    image = data["image"]
    if not isinstance(image, str):
        raise ValueError("tileset image must be a string")
    values: dict[str, float] = {}
    for name in _NUMERIC_FIELDS:
        value = data[name]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"tileset field {name!r} must be a number")
        values[name] = float(value)
    return Tileset(image=image, **values)


def load_tileset(path: str | Path) -> Tileset:
    """Read a tileset JSON file."""
    return parse_tileset(Path(path).read_text(encoding="utf-8"))