"""Systems that move colliders, detect collisions and proximity, and orient sprites."""

from __future__ import annotations

import math

from elevatorgame.physics_components import (
    Collidee,
    Collider,
    DefaultTransformation,
    Direction,
    Directions,
    Motion,
    Proximity,
)
from elevatorgame.world import Named, Time, Transform, Vector2, World


def _time(world: World) -> Time:
    try:
        return world.resource(Time)
    except KeyError:
        return Time()


def _use_hit_box(velocity_a: Vector2, velocity_b: Vector2) -> bool:
    return velocity_a.x * velocity_b.x != 0.0 or velocity_a.y * velocity_b.y != 0.0


class CollisionSystem:
    """Records what each moving collider overlaps with."""

    def run(self, world: World) -> None:
        for entity_a, collider_a, collidee, motion_a, named_a in world.join(
            Collider, Collidee, Motion, Named
        ):
            velocity_a = motion_a.velocity
            # Horizontal motion alone is enough; vertical motion also needs a collidable body.
            if not (
                velocity_a.x != 0.0 or (velocity_a.y != 0.0 and collider_a.is_collidable)
            ):
                continue
            for entity_b, collider_b, motion_b, named_b in world.join(
                Collider, Motion, Named
            ):
                if entity_a == entity_b or not collider_b.is_collidable:
                    continue
                velocity_b = motion_b.velocity
                use_hit_box = _use_hit_box(velocity_a, velocity_b)
                if collider_a.is_overlapping_with(collider_b, use_hit_box):
                    collidee.set_collidee_details(
                        named_b.name,
                        named_a.name,
                        collider_a,
                        collider_b,
                        velocity_a,
                        velocity_b,
                        use_hit_box,
                    )


class ProximitySystem:
    """Refreshes the list of nearby entities of every moving entity."""

    def run(self, world: World) -> None:
        for entity_a, collider_a, motion_a, named_a, proximity in world.join(
            Collider, Motion, Named, Proximity
        ):
            velocity_a = motion_a.velocity
            if not (
                velocity_a.x != 0.0 or (velocity_a.y != 0.0 and collider_a.allow_proximity)
            ):
                continue
            proximity.reset_details()
            for entity_b, collider_b, motion_b, named_b in world.join(
                Collider, Motion, Named
            ):
                if entity_a == entity_b or not collider_b.allow_proximity:
                    continue
                proximity.add_proximity_details(
                    named_a.name,
                    named_b.name,
                    collider_a,
                    collider_b,
                    velocity_a,
                    _use_hit_box(velocity_a, motion_b.velocity),
                )


class DirectionSystem:
    """Flips sprites about the y axis to match their facing."""

    def run(self, world: World) -> None:
        for _, direction, transform in world.join(Direction, Transform):
            if direction.x == direction.default_x:
                transform.set_rotation_y_axis(math.pi)
            elif direction.x is not Directions.NEUTRAL:
                transform.set_rotation_y_axis(0.0)


class KinematicsSystem:
    """Advances collider boxes by their velocity over the frame time."""

    def run(self, world: World) -> None:
        delta = _time(world).delta_seconds
        for _, collider, motion in world.join(Collider, Motion):
            bbox = collider.bounding_box
            bbox.old_position = bbox.position.copy()
            bbox.position.x += motion.velocity.x * delta
            bbox.position.y += motion.velocity.y * delta

            hbox = collider.hit_box
            hbox.old_position = hbox.position.copy()
            collider.set_hit_box_position(motion.velocity)


class DefaultTransformationSystem:
    """Resolves collisions of plain moving entities and syncs their transforms."""

    def run(self, world: World) -> None:
        for _, _, collider, collidee, motion, transform in world.join(
            DefaultTransformation, Collider, Collidee, Motion, Transform
        ):
            bbox = collider.bounding_box
            velocity = motion.velocity
            x, y = bbox.position.x, bbox.position.y

            horizontal, collidee.horizontal = collidee.horizontal, None
            if horizontal is not None:
                bbox.position.x -= horizontal.correction
                velocity.x = 0.0

            vertical, collidee.vertical = collidee.vertical, None
            if vertical is not None:
                velocity.y = 0.0
                if vertical.correction < 0.0:
                    collider.on_ground = True

            if velocity.y != 0.0:
                collider.on_ground = False

            collider.set_hit_box_position(velocity)
            transform.x = x
            transform.y = y