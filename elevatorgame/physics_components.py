"""Collision, direction and motion components."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field

from elevatorgame.world import Vector2

DEFAULT_PROXIMITY_PADDING = 3.0


def _ratio(numerator: float, denominator: float) -> float:
    """Divide with IEEE semantics for a zero denominator."""
    if denominator == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


@dataclass
class GenericBox:
    """An axis-aligned box given by its centre and half extents."""

    half_size: Vector2 = field(default_factory=Vector2)
    position: Vector2 = field(default_factory=Vector2)
    old_position: Vector2 = field(default_factory=Vector2)

    @classmethod
    def of_size(cls, width: float, height: float) -> GenericBox:
        return cls(half_size=Vector2(width / 2.0, height / 2.0))


@dataclass
class CollideeDetails:
    """What an entity collided with along one axis."""

    name: str
    position: Vector2
    half_size: Vector2
    correction: float
    velocity: float
    collided_with_name: str
    collided_with_velocity: float
    is_rideable: bool


@dataclass
class ProximityDetails:
    """A nearby, non-overlapping entity."""

    name: str
    other_name: str
    distance: Vector2
    approaching: bool


@dataclass
class Collider:
    """Bounding and hit boxes plus collision flags."""

    bounding_box: GenericBox = field(default_factory=GenericBox)
    bounding_box_offset: Vector2 = field(default_factory=Vector2)
    hit_box: GenericBox = field(default_factory=GenericBox)
    hit_box_offset: Vector2 = field(default_factory=Vector2)
    on_ground: bool = False
    on_elevator: bool = False
    hit_box_offset_front: float = 0.0
    hit_box_offset_back: float = 0.0
    is_collidable: bool = True
    is_rideable: bool = False
    allow_proximity: bool = True

    @classmethod
    def of_size(cls, width: float, height: float) -> Collider:
        return cls(
            bounding_box=GenericBox.of_size(width, height),
            hit_box=GenericBox.of_size(width, height),
        )

    def set_hit_box_position(self, velocity: Vector2) -> None:
        bbox = self.bounding_box.position
        hbox = self.hit_box.position
        offset = self.hit_box_offset
        hbox.x = bbox.x + offset.x if velocity.x >= 0.0 else bbox.x - offset.x
        hbox.y = bbox.y + offset.y if velocity.y >= 0.0 else bbox.y - offset.y

    def boxes_with(self, other: Collider, use_hit_box: bool) -> tuple[GenericBox, GenericBox]:
        if use_hit_box:
            return self.hit_box, other.hit_box
        return self.bounding_box, other.bounding_box

    def is_overlapping_with(self, other: Collider, use_hit_box: bool) -> bool:
        a, b = self.boxes_with(other, use_hit_box)
        return abs(a.position.x - b.position.x) <= abs(
            a.half_size.x + b.half_size.x
        ) and abs(a.position.y - b.position.y) <= abs(a.half_size.y + b.half_size.y)


@dataclass
class Proximity:
    """Entities close to this one, refreshed each frame."""

    min_distance: float = DEFAULT_PROXIMITY_PADDING
    details: list[ProximityDetails] = field(default_factory=list)

    def reset_details(self) -> None:
        self.details = []

    def add_proximity_details(
        self,
        name_a: str,
        name_b: str,
        collider_a: Collider,
        collider_b: Collider,
        velocity_a: Vector2,
        use_hit_box: bool,
    ) -> None:
        own, other = collider_a.boxes_with(collider_b, use_hit_box)
        x_diff = abs(
            abs(own.half_size.x + other.half_size.x)
            - abs(own.position.x - other.position.x)
        )
        y_diff = abs(
            abs(own.half_size.y + other.half_size.y)
            - abs(own.position.y - other.position.y)
        )
        if (
            collider_a.is_overlapping_with(collider_b, use_hit_box)
            or x_diff > self.min_distance
            or y_diff > self.min_distance
        ):
            return
        own_cx = own.position.x + own.half_size.x
        other_cx = other.position.x + other.half_size.x
        own_cy = own.position.y + own.half_size.y
        other_cy = other.position.y + other.half_size.y
        approaching = (
            (own_cx < other_cx and velocity_a.x > 0.0)
            or (own_cx > other_cx and velocity_a.x < 0.0)
            or (own_cy < other_cy and velocity_a.y > 0.0)
            or (own_cy > other_cy and velocity_a.y < 0.0)
        )
        self.details.append(
            ProximityDetails(name_a, name_b, Vector2(x_diff, y_diff), approaching)
        )


@dataclass
class Collidee:
    """The latest horizontal and vertical collisions of an entity."""

    horizontal: CollideeDetails | None = None
    vertical: CollideeDetails | None = None

    def set_collidee_details(
        self,
        name: str,
        collided_with_name: str,
        collider_a: Collider,
        collider_b: Collider,
        velocity_a: Vector2,
        velocity_b: Vector2,
        use_hit_box: bool,
    ) -> None:
        box_a, box_b = collider_a.boxes_with(collider_b, use_hit_box)

        speed_sum_x = abs(velocity_a.x - velocity_b.x)
        speed_sum_y = abs(velocity_a.y - velocity_b.y)
        ratio_a_x = _ratio(velocity_a.x, speed_sum_x)
        ratio_a_y = _ratio(velocity_a.y, speed_sum_y)
        ratio_b_x = _ratio(velocity_b.x, speed_sum_x)

        safe_x = box_a.half_size.x + box_b.half_size.x
        safe_y = box_a.half_size.y + box_b.half_size.y
        overlap_x = safe_x - abs(box_a.position.x - box_b.position.x)
        overlap_y = safe_y - abs(box_a.position.y - box_b.position.y)
        x_overlapped = abs(box_a.old_position.x - box_b.old_position.x) < safe_x
        y_overlapped = abs(box_a.old_position.y - box_b.old_position.y) < safe_y

        same_direction = velocity_a.x * velocity_b.x > 0.0
        faster = abs(ratio_a_x) > abs(ratio_b_x)

        def details(correction: float, velocity: float, other_velocity: float) -> CollideeDetails:
            return CollideeDetails(
                name=name,
                position=box_b.position.copy(),
                half_size=box_b.half_size.copy(),
                correction=correction,
                velocity=velocity,
                collided_with_name=collided_with_name,
                collided_with_velocity=other_velocity,
                is_rideable=collider_b.is_rideable,
            )

        if (y_overlapped or abs(overlap_x) <= abs(overlap_y)) and not x_overlapped:
            # A slower body moving the same way as the other needs no correction.
            if (faster or not same_direction) and not math.isnan(ratio_a_x):
                correction = overlap_x * ratio_a_x
            else:
                correction = 0.0
            self.horizontal = details(correction, velocity_a.x, velocity_b.x)
        elif x_overlapped and y_overlapped:
            # Already overlapping, e.g. an entity added at run time: no correction.
            self.horizontal = details(0.0, velocity_a.x, velocity_b.x)
        else:
            correction = 0.0 if math.isnan(ratio_a_y) else overlap_y * ratio_a_y
            self.vertical = details(correction, velocity_a.y, velocity_b.y)


class Directions(enum.Enum):
    RIGHT = "right"
    LEFT = "left"
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


@dataclass
class Direction:
    """Facing of an entity and the facing its sprite is drawn with."""

    default_x: Directions = Directions.NEUTRAL
    default_y: Directions = Directions.NEUTRAL
    x: Directions = Directions.NEUTRAL
    y: Directions = Directions.NEUTRAL


@dataclass
class Motion:
    """Own velocity plus the velocity inherited from what the entity rides."""

    velocity: Vector2 = field(default_factory=Vector2)
    ride_velocity: Vector2 = field(default_factory=Vector2)

    def update_velocity(
        self,
        acceleration: Vector2,
        direction: Direction,
        min_limit: float,
        max_limit: float,
    ) -> None:
        velocity = self.velocity
        if direction.x is Directions.RIGHT:
            velocity.x += acceleration.x + self.ride_velocity.x
            if acceleration.x <= 0.0:
                velocity.x = max(velocity.x, min_limit)
            else:
                velocity.x = min(velocity.x, max_limit)
        elif direction.x is Directions.LEFT:
            velocity.x -= acceleration.x - self.ride_velocity.x
            if acceleration.x <= 0.0:
                velocity.x = min(velocity.x, -min_limit)
            else:
                velocity.x = max(velocity.x, -max_limit)
        velocity.y += acceleration.y


@dataclass
class DefaultTransformation:
    """Marks entities moved by the default transformation system."""