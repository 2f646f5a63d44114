"""Components of the player, its gun and its bullets."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from elevatorgame.world import Entity, Vector2

PLAYER_HEIGHT = 16.0
PLAYER_WIDTH = 16.0


@dataclass
class BulletImpact:
    """Marks the short-lived impact effect of a bullet."""


@dataclass
class Bullet:
    """A bullet, remembering the gun that fired it."""

    parent: Entity | None = None


class GunState(enum.Enum):
    SHOOTING = "shooting"
    JUMP_SHOOTING = "jump_shooting"
    HOLSTERED = "holstered"


@dataclass
class Gun:
    """A gun and its firing state."""

    is_player: bool
    shots_fired: int = 0
    state: GunState = GunState.HOLSTERED
    last_shoot_state: bool = False
    last_shot_seconds: float = -1.0
    spawned_bullet: bool = False


class PlayerState(enum.Enum):
    DUCKING = "ducking"
    DYING = "dying"
    IDLING = "idling"
    JUMPING = "jumping"
    SHOOTING = "shooting"
    WALKING = "walking"
    HOPPING = "hopping"
    ENTERING_ROOM = "entering_room"
    INSIDE_ROOM = "inside_room"
    EXITING_ROOM = "exiting_room"


@dataclass
class Player:
    """The player character's state and movement limits."""

    state: PlayerState = PlayerState.IDLING
    is_ducking: bool = False
    last_jump_state: bool = False
    jump_time: float | None = None
    width: float = PLAYER_WIDTH
    height: float = PLAYER_HEIGHT
    velocity: Vector2 = field(default_factory=Vector2)
    max_ground_speed: float = 36.0
    max_jump_velocity: float = 110.0
    position: Vector2 = field(default_factory=Vector2)

    def update_position(self, x: float, y: float) -> None:
        self.position.x = x
        self.position.y = y