"""Animation identifiers, per-entity animation state and its control system."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from elevatorgame.world import World


class AnimationId(enum.Enum):
    """Identifies which animation of an animation set to play."""

    # player
    BULLET_IMPACT = "bullet_impact"
    DIE = "die"
    DUCK = "duck"
    EXPLODE = "explode"
    HOP = "hop"
    JUMP = "jump"
    MOVE = "move"
    IDLE = "idle"
    SHOOT = "shoot"
    WALK = "walk"
    # gun
    PLAYER_SHOOT = "player_shoot"
    PLAYER_JUMP_SHOOT = "player_jump_shoot"
    HOLSTER = "holster"
    # doors
    DOOR_ENTRY = "door_entry"
    RED_DOOR = "red_door"
    RED_DOOR_CLOSE = "red_door_close"
    RED_DOOR_OPEN = "red_door_open"
    BLUE_DOOR = "blue_door"
    BLUE_DOOR_CLOSE = "blue_door_close"
    BLUE_DOOR_OPEN = "blue_door_open"
    PURPLE_ROOM = "purple_room"


class EndControl(enum.Enum):
    """What an animation does when it reaches its end."""

    STAY = "stay"
    LOOP = "loop"


_STAYING = frozenset({AnimationId.PLAYER_SHOOT, AnimationId.IDLE, AnimationId.BULLET_IMPACT})


def end_control_for(animation_id: AnimationId) -> EndControl:
    return EndControl.STAY if animation_id in _STAYING else EndControl.LOOP


@dataclass
class AnimationSet:
    """All animations an entity can play, keyed by id."""

    animations: dict[AnimationId, Any] = field(default_factory=dict)

    def get(self, animation_id: AnimationId) -> Any:
        return self.animations.get(animation_id)


@dataclass
class AnimationControl:
    """Playback state of one animation."""

    end: EndControl
    running: bool = False


@dataclass
class AnimationControlSet:
    """The animations currently attached to an entity."""

    animations: dict[AnimationId, AnimationControl] = field(default_factory=dict)

    def has_animation(self, animation_id: AnimationId) -> bool:
        return animation_id in self.animations

    def add_animation(self, animation_id: AnimationId, end: EndControl) -> None:
        self.animations.setdefault(animation_id, AnimationControl(end))

    def start(self, animation_id: AnimationId) -> None:
        control = self.animations.get(animation_id)
        if control is not None:
            control.running = True

    def abort(self, animation_id: AnimationId) -> None:
        self.animations.pop(animation_id, None)


@dataclass
class Animation:
    """Which animation an entity shows and which ones it may use."""

    current: AnimationId
    types: list[AnimationId]
    show: bool = True


class AnimationControlSystem:
    """Attaches every animation an entity uses and starts its current one."""

    def run(self, world: World) -> None:
        for entity, animation, animation_set in world.join(Animation, AnimationSet):
            control_set = world.get(entity, AnimationControlSet)
            if control_set is None:
                control_set = AnimationControlSet()
                world.insert(entity, control_set)

            if animation.show:
                # Re-adding here restores animations removed by abort().
                for animation_id in animation.types:
                    if control_set.has_animation(animation_id):
                        continue
                    if animation_set.get(animation_id) is None:
                        raise KeyError(f"animation set has no {animation_id.name}")
                    control_set.add_animation(animation_id, end_control_for(animation_id))

            control_set.start(animation.current)