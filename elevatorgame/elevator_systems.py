"""Systems that steer elevators between floors and keep their parts together."""

from __future__ import annotations

import math

from elevatorgame.elevator import Elevator, ElevatorComponent, ElevatorState, FLOOR_HEIGHT
from elevatorgame.physics_components import Collidee, Collider, Motion
from elevatorgame.world import Child, InputState, Named, Time, Transform, World

WAIT_TIME = 2.2
VELOCITY = 20.0
INSIDE_NAME = "ElevatorInside"


def _time(world: World) -> Time:
    try:
        return world.resource(Time)
    except KeyError:
        return Time()


def stop_elevator(
    elevator: Elevator, current_floor: float, position: float, wait_time: float
) -> None:
    """Halt the elevator at a floor and start its waiting period."""
    elevator.current_floor = current_floor
    elevator.velocity = 0.0
    elevator.previous_state = elevator.state
    elevator.state = ElevatorState.WAITING
    elevator.wait_seconds = wait_time
    elevator.position.y = position
    elevator.can_wait = False


def _floor_index(current_floor: float, start_floor: int) -> int:
    value = math.floor(current_floor) - start_floor + 1.0
    if math.isnan(value) or value <= 0:
        return 0
    return int(value)


class ElevatorControlSystem:
    """Chooses the direction of each elevator from waiting time and input."""

    def run(self, world: World) -> None:
        input_state = world.resource(InputState)
        up_input = input_state.action_is_down("up")
        down_input = input_state.action_is_down("down")
        current_time = _time(world).absolute_time_seconds

        for entity, elevator in world.join(Elevator):
            top_floor = elevator.start_floor + elevator.num_floors - 1
            if (
                current_time - elevator.wait_seconds > WAIT_TIME
                and elevator.state is ElevatorState.WAITING
            ):
                # Resume in the last direction travelled.
                if elevator.previous_state is ElevatorState.WAITING:
                    elevator.state = ElevatorState.DOWN
                else:
                    elevator.state = elevator.previous_state

                if (
                    elevator.state is ElevatorState.UP
                    and elevator.current_floor == float(top_floor)
                ):
                    elevator.state = ElevatorState.DOWN
                elif (
                    elevator.state is ElevatorState.DOWN
                    and elevator.current_floor == float(elevator.start_floor)
                ):
                    elevator.state = ElevatorState.UP
            elif down_input and (
                elevator.current_floor > elevator.start_floor or elevator.velocity > 0.0
            ):
                elevator.state = ElevatorState.DOWN
            elif up_input and elevator.current_floor < elevator.start_floor + elevator.num_floors:
                elevator.state = ElevatorState.UP

            if elevator.state is ElevatorState.UP:
                elevator.velocity = VELOCITY
            elif elevator.state is ElevatorState.DOWN:
                elevator.velocity = -VELOCITY
            else:
                elevator.velocity = 0.0

            for _, _, child, motion in world.join(ElevatorComponent, Child, Motion):
                if child.parent == entity:
                    motion.velocity.y = elevator.velocity


class ElevatorTransformationSystem:
    """Stops elevators at floor boundaries and moves their parts with them."""

    def run(self, world: World) -> None:
        now = _time(world).absolute_time_seconds
        for _, component, child, collider, _, motion, transform, named in world.join(
            ElevatorComponent, Child, Collider, Collidee, Motion, Transform, Named
        ):
            elevator = world.get(child.parent, Elevator)
            if elevator is None:
                continue
            bbox = collider.bounding_box
            x, y = bbox.position.x, bbox.position.y

            if named.name == INSIDE_NAME:
                elevator.position.x = x
                elevator.position.y = y
                if elevator.state is not ElevatorState.WAITING:
                    self._check_floors(elevator, bbox.position.y, now)

            motion.velocity.y = elevator.velocity

            # At rest, line every part up with the car.
            if elevator.velocity == 0.0:
                x = elevator.position.x + component.offsets.x
                y = elevator.position.y + component.offsets.y
                bbox.position.x = x
                bbox.position.y = y
                collider.hit_box.position.x = x
                collider.hit_box.position.y = y
            transform.x = x
            transform.y = y

    @staticmethod
    def _check_floors(elevator: Elevator, car_y: float, now: float) -> None:
        boundaries = list(elevator.boundaries)
        for floor, boundary in enumerate(boundaries, start=1):
            moving = elevator.state in (ElevatorState.UP, ElevatorState.DOWN)
            diff = abs(car_y - boundary)
            if moving and diff < 0.5 and elevator.can_wait:
                stop_elevator(elevator, float(floor - 1 + elevator.start_floor), boundary, now)
            elif moving and 2.0 < diff < 5.0:
                # Far enough from the last stop to be allowed to stop again.
                elevator.can_wait = True
            elif floor == 1 and elevator.state is ElevatorState.DOWN and car_y < boundaries[0]:
                stop_elevator(elevator, float(elevator.start_floor), boundaries[0], now)
            elif (
                floor == elevator.num_floors
                and elevator.state is ElevatorState.UP
                and car_y > boundary
            ):
                stop_elevator(elevator, float(floor - 1 + elevator.start_floor), boundary, now)
            elif floor == _floor_index(elevator.current_floor, elevator.start_floor):
                signed_diff = car_y - boundary
                elevator.current_floor = math.floor(elevator.current_floor) + signed_diff / FLOOR_HEIGHT