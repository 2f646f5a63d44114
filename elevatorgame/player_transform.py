"""Systems that resolve the player's collisions and place the gun and camera."""

from __future__ import annotations

from elevatorgame.physics_components import Collidee, Collider, Direction, Motion
from elevatorgame.player_components import Gun, Player, PlayerState
from elevatorgame.world import Camera, Child, Transform, World

SAFE_PADDING = 0.0001
DUCK_OFFSET_Y = 4.0
PLAYER_Z = 0.5
GUN_Z = 0.7
HIDDEN_Z = 0.0
CAMERA_MOVE_FACTOR = 35.0
_ELEVATOR_FLOORS = frozenset({"ElevatorBottom", "ElevatorTop"})


class PlayerTransformationSystem:
    """Stops the player at obstacles, lets it ride elevators and syncs its transform."""

    def run(self, world: World) -> None:
        for _, player, collider, collidee, motion, transform in world.join(
            Player, Collider, Collidee, Motion, Transform
        ):
            bbox = collider.bounding_box
            velocity = motion.velocity

            horizontal, collidee.horizontal = collidee.horizontal, None
            if horizontal is not None:
                velocity.x = 0.0
                if horizontal.is_rideable:
                    # The sign of the correction tells which side we are pushed to.
                    reach = horizontal.half_size.x + bbox.half_size.x + SAFE_PADDING
                    if horizontal.correction < 0.0:
                        bbox.position.x = horizontal.position.x + reach
                    else:
                        bbox.position.x = horizontal.position.x - reach
                else:
                    bbox.position.x -= horizontal.correction

            vertical, collidee.vertical = collidee.vertical, None
            if vertical is not None:
                velocity.y = 0.0
                if vertical.is_rideable:
                    reach = vertical.half_size.y + bbox.half_size.y + SAFE_PADDING
                    if vertical.correction < 0.0:
                        bbox.position.y = vertical.position.y + reach
                    else:
                        bbox.position.y = vertical.position.y - reach
                else:
                    bbox.position.y -= vertical.correction
                if vertical.correction < 0.0:
                    collider.on_ground = True
                if vertical.name in _ELEVATOR_FLOORS:
                    collider.on_elevator = True
            else:
                collider.on_elevator = False

            if velocity.y != 0.0:
                collider.on_ground = False

            x = bbox.position.x
            y = bbox.position.y
            collider.set_hit_box_position(velocity)
            if player.state is PlayerState.DUCKING:
                y -= DUCK_OFFSET_Y

            transform.z = HIDDEN_Z if player.state is PlayerState.ENTERING_ROOM else PLAYER_Z
            player.update_position(x, y)
            transform.x = x
            transform.y = y


class GunTransformationSystem:
    """Keeps every gun at its offset from the player holding it."""

    def run(self, world: World) -> None:
        for _, _, child, direction, transform in world.join(Gun, Child, Direction, Transform):
            player = world.get(child.parent, Player)
            if player is None:
                continue
            if direction.x != direction.default_x:
                transform.x = player.position.x - child.offset_x
            else:
                transform.x = player.position.x + child.offset_x
            transform.y = player.position.y + child.offset_y
            transform.z = HIDDEN_Z if player.state is PlayerState.ENTERING_ROOM else GUN_Z


class CameraTransformationSystem:
    """Eases the camera vertically towards the first player."""

    def run(self, world: World) -> None:
        for _, _, transform in world.join(Camera, Transform):
            first = next(world.join(Player), None)
            if first is None:
                continue
            player = first[1]
            if player.state in (PlayerState.JUMPING, PlayerState.DUCKING):
                continue
            transform.y += (player.position.y - transform.y) / CAMERA_MOVE_FACTOR