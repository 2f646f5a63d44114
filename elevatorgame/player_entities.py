"""Creation of the player with its gun, of bullets and of bullet impacts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from elevatorgame.animation import Animation, AnimationId
from elevatorgame.physics_components import (
    Collidee,
    Collider,
    DefaultTransformation,
    Direction,
    Directions,
    Motion,
    Proximity,
)
from elevatorgame.player_components import Bullet, BulletImpact, Gun, Player
from elevatorgame.world import Child, Entity, Named, SpriteRender, Transform, Vector2, World

log = logging.getLogger(__name__)

PLAYER_START_X = 40.0
PLAYER_START_Y = 150.0
PLAYER_Z = 0.5
PLAYER_COLLIDER_WIDTH = 12.0
PLAYER_COLLIDER_HEIGHT = 24.0
GUN_Z = 0.7
GUN_OFFSET_X = 8.0
GUN_OFFSET_Y = 2.0
GUN_OFFSET_Z = 0.0

SCALE = 1.0
OFFSET_X = 11.0
OFFSET_Y = 3.0
BULLET_WIDTH = 6.0
BULLET_HEIGHT = 3.0
BULLET_VELOCITY = 200.0
BULLET_Z = 1.0

_PLAYER_ANIMATIONS = [
    AnimationId.DIE,
    AnimationId.HOP,
    AnimationId.JUMP,
    AnimationId.IDLE,
    AnimationId.WALK,
    AnimationId.DUCK,
]

_GUN_ANIMATIONS = [
    AnimationId.PLAYER_SHOOT,
    AnimationId.PLAYER_JUMP_SHOOT,
    AnimationId.HOLSTER,
]


@dataclass
class Transparent:
    """Marks entities drawn with transparency."""


def _facing_right() -> Direction:
    return Direction(Directions.RIGHT, Directions.NEUTRAL, Directions.RIGHT, Directions.NEUTRAL)


def load_player(
    world: World, player_prefab_handle: Any, guns_prefab_handle: Any
) -> tuple[Entity, Entity]:
    """Create the player and its gun; return (player entity, gun entity)."""
    log.info("Loading player")
    x, y = PLAYER_START_X, PLAYER_START_Y

    collider = Collider.of_size(PLAYER_COLLIDER_WIDTH, PLAYER_COLLIDER_HEIGHT)
    collider.allow_proximity = True
    bbox = collider.bounding_box
    bbox.position = Vector2(x + bbox.half_size.x, y - bbox.half_size.y)
    bbox.old_position = bbox.position.copy()

    player = world.spawn(
        Named("Player"),
        Player(),
        collider,
        Collidee(),
        Transform(z=PLAYER_Z),
        Animation(AnimationId.IDLE, list(_PLAYER_ANIMATIONS)),
        player_prefab_handle,
        Motion(),
        _facing_right(),
        Proximity(),
    )

    gun = world.spawn(
        Named("Gun"),
        Child(player, GUN_OFFSET_X, GUN_OFFSET_Y, GUN_OFFSET_Z),
        Gun(is_player=True),
        Transform(x, y, GUN_Z),
        Animation(AnimationId.HOLSTER, list(_GUN_ANIMATIONS)),
        guns_prefab_handle,
        _facing_right(),
    )
    return player, gun


def spawn_bullet(
    world: World,
    gun_entity: Entity,
    sprite_sheet_handle: Any,
    start_x: float,
    start_y: float,
    shooter_direction: Direction,
) -> Entity:
    """Fire a bullet from the shooter's position in the direction it faces."""
    motion = Motion()
    direction = Direction(
        Directions.RIGHT, Directions.NEUTRAL, Directions.NEUTRAL, Directions.NEUTRAL
    )

    if shooter_direction.x is Directions.RIGHT:
        motion.velocity.x = BULLET_VELOCITY
        direction.x = Directions.RIGHT
        bullet_x = start_x + OFFSET_X
    elif shooter_direction.x is Directions.LEFT:
        motion.velocity.x = -BULLET_VELOCITY
        direction.x = Directions.LEFT
        bullet_x = start_x - OFFSET_X
    else:
        bullet_x = 0.0
    bullet_y = start_y + OFFSET_Y

    collider = Collider.of_size(BULLET_WIDTH * SCALE, BULLET_HEIGHT * SCALE)
    bbox = collider.bounding_box
    bbox.position = Vector2(bullet_x, bullet_y)
    bbox.old_position = bbox.position.copy()

    return world.spawn(
        Bullet(gun_entity),
        Named("Bullet"),
        collider,
        Collidee(),
        DefaultTransformation(),
        SpriteRender(sprite_sheet_handle, 0),
        motion,
        Transform(bullet_x, bullet_y, BULLET_Z, scale=SCALE),
        direction,
        Transparent(),
    )


def show_bullet_impact(
    world: World,
    prefab_handle: Any,
    impact_x: float,
    impact_y: float,
    bullet_velocity: float,
) -> Entity:
    """Show an impact effect facing the way the bullet travelled."""
    facing = Directions.RIGHT if bullet_velocity > 0.0 else Directions.LEFT
    direction = Direction(Directions.RIGHT, Directions.NEUTRAL, facing, Directions.NEUTRAL)
    return world.spawn(
        BulletImpact(),
        Named("BulletImpact"),
        Animation(AnimationId.BULLET_IMPACT, [AnimationId.BULLET_IMPACT]),
        prefab_handle,
        Transform(impact_x, impact_y, BULLET_Z, scale=SCALE),
        direction,
        Transparent(),
    )