"""Systems for player and gun input, player movement and their animations."""

from __future__ import annotations

from elevatorgame.animation import Animation, AnimationControlSet, AnimationId
from elevatorgame.physics_components import (
    Collider,
    Direction,
    Directions,
    Motion,
    Proximity,
)
from elevatorgame.player_components import (
    BulletImpact,
    Gun,
    GunState,
    Player,
    PlayerState,
)
from elevatorgame.world import InputState, Time, Vector2, World

GRAVITY_AMOUNT = -6.0
FRICTION_AMOUNT = -12.0
WALK_ACCELERATION = 16.0
MAX_SHOTS = 3
SHOT_DURATION = 0.05

_HOP_OBSTACLES = frozenset({"ElevatorTop", "ElevatorBottom"})

_PLAYER_ANIMATIONS = {
    PlayerState.HOPPING: AnimationId.HOP,
    PlayerState.JUMPING: AnimationId.JUMP,
    PlayerState.WALKING: AnimationId.WALK,
    PlayerState.SHOOTING: AnimationId.SHOOT,
    PlayerState.DYING: AnimationId.DIE,
    PlayerState.DUCKING: AnimationId.DUCK,
}

_GUN_ANIMATIONS = {
    GunState.SHOOTING: AnimationId.PLAYER_SHOOT,
    GunState.JUMP_SHOOTING: AnimationId.PLAYER_JUMP_SHOOT,
}


def _time(world: World) -> Time:
    try:
        return world.resource(Time)
    except KeyError:
        return Time()


def _switch(animation: Animation, control_set: AnimationControlSet, new_id: AnimationId) -> bool:
    """Replace the running animation with new_id; return whether it changed."""
    if animation.current == new_id:
        return False
    control_set.abort(animation.current)
    control_set.start(new_id)
    animation.current = new_id
    return True


class BulletImpactAnimationSystem:
    """Plays each impact once and removes it when its animation is gone."""

    def run(self, world: World) -> None:
        for entity, _, animation, control_set in world.join(
            BulletImpact, Animation, AnimationControlSet
        ):
            if animation.show:
                control_set.start(animation.current)
                animation.show = False
            elif not control_set.has_animation(AnimationId.BULLET_IMPACT):
                world.delete(entity)


class GunAnimationSystem:
    """Shows the gun animation matching the gun state."""

    def run(self, world: World) -> None:
        for _, gun, animation, control_set in world.join(Gun, Animation, AnimationControlSet):
            _switch(animation, control_set, _GUN_ANIMATIONS.get(gun.state, AnimationId.HOLSTER))


class PlayerAnimationSystem:
    """Shows the player animation matching the player state."""

    def run(self, world: World) -> None:
        for _, player, animation, control_set in world.join(
            Player, Animation, AnimationControlSet
        ):
            new_id = _PLAYER_ANIMATIONS.get(player.state, AnimationId.IDLE)
            if not _switch(animation, control_set, new_id) and new_id is AnimationId.DIE:
                animation.show = False


def _face(direction: Direction, move_input: float) -> None:
    if move_input > 0.0:
        direction.x = Directions.RIGHT
    elif move_input < 0.0:
        direction.x = Directions.LEFT


def _should_hop(proximity: Proximity | None, collider: Collider) -> bool:
    if proximity is None:
        return False
    return any(
        details.approaching
        and (
            details.other_name in _HOP_OBSTACLES
            or (details.other_name == "floor" and collider.on_elevator)
        )
        for details in proximity.details
    )


class PlayerControlsSystem:
    """Turns input into gun and player states and facing."""

    def run(self, world: World) -> None:
        now = _time(world).absolute_time_seconds
        for entity, direction in world.join(Direction):
            gun = world.get(entity, Gun)
            player = world.get(entity, Player)
            if gun is None and player is None:
                continue

            input_state = world.resource(InputState)
            move_input = input_state.axis_value("move")
            jump_input = input_state.action_is_down("jump")
            shoot_input = input_state.action_is_down("shoot")
            down_input = input_state.action_is_down("down")

            if gun is not None:
                self._control_gun(gun, direction, now, move_input, shoot_input)

            if player is not None:
                collider = world.get(entity, Collider)
                proximity = world.get(entity, Proximity)
                self._control_player(
                    player, collider, proximity, direction, move_input, jump_input, down_input
                )

    @staticmethod
    def _control_gun(
        gun: Gun, direction: Direction, now: float, move_input: float, shoot_input: bool
    ) -> None:
        if shoot_input and not gun.last_shoot_state and gun.shots_fired < MAX_SHOTS:
            gun.last_shot_seconds = now
            gun.state = GunState.SHOOTING
        elif now - gun.last_shot_seconds < SHOT_DURATION:
            gun.state = GunState.SHOOTING
        else:
            gun.spawned_bullet = False
            gun.state = GunState.HOLSTERED
        gun.last_shoot_state = shoot_input
        _face(direction, move_input)

    @staticmethod
    def _control_player(
        player: Player,
        collider: Collider | None,
        proximity: Proximity | None,
        direction: Direction,
        move_input: float,
        jump_input: bool,
        down_input: bool,
    ) -> None:
        # No turning around in the middle of a hop.
        if player.state is not PlayerState.HOPPING:
            _face(direction, move_input)

        if collider is not None:
            if not down_input and player.is_ducking:
                player.is_ducking = False

            if jump_input and not player.last_jump_state:
                player.state = PlayerState.JUMPING
            elif collider.on_ground:
                if down_input and not collider.on_elevator:
                    player.is_ducking = True
                    player.state = PlayerState.DUCKING
                elif move_input != 0.0:
                    player.state = (
                        PlayerState.HOPPING
                        if _should_hop(proximity, collider)
                        else PlayerState.WALKING
                    )
                else:
                    player.state = PlayerState.IDLING
            elif player.state not in (PlayerState.JUMPING, PlayerState.HOPPING):
                # Falling.
                player.state = PlayerState.IDLING

        player.last_jump_state = jump_input


class PlayerKinematicsSystem:
    """Applies gravity, friction, walking and jumping to the player's velocity."""

    def run(self, world: World) -> None:
        for _, collider, direction, player, motion in world.join(
            Collider, Direction, Player, Motion
        ):
            acceleration = Vector2()
            state = player.state
            if state in (PlayerState.IDLING, PlayerState.DUCKING):
                if motion.velocity.x != 0.0 and collider.on_ground:
                    acceleration_x = FRICTION_AMOUNT
                elif not collider.on_ground:
                    # Keep drifting a little while falling.
                    acceleration_x = FRICTION_AMOUNT / 2.5
                else:
                    acceleration_x = 0.0
                acceleration = Vector2(acceleration_x, GRAVITY_AMOUNT)
            elif state is PlayerState.WALKING:
                acceleration = Vector2(WALK_ACCELERATION, GRAVITY_AMOUNT)
            elif state is PlayerState.JUMPING:
                if collider.on_ground:
                    motion.velocity.y = player.max_jump_velocity
                    collider.on_ground = False
                acceleration_x = -WALK_ACCELERATION / 50.0 if motion.velocity.x != 0.0 else 0.0
                acceleration = Vector2(acceleration_x, GRAVITY_AMOUNT)
            elif state is PlayerState.HOPPING:
                if collider.on_ground:
                    motion.velocity.y = player.max_jump_velocity / 2.0
                    collider.on_ground = False
                acceleration = Vector2(WALK_ACCELERATION, GRAVITY_AMOUNT)
            motion.update_velocity(acceleration, direction, 0.0, player.max_ground_speed)