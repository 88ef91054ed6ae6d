# crafthouse/cameras/free_fly.py
"""
Free-fly camera (shooter-style).

Mouse motion turns a desired look angle (yaw, pitch); the current look
angle follows it. WASD-style keys move the player: forward/back along the
full look direction, strafe and vertical motion ignore pitch.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Iterable, Sequence
import logging
import math

from ..config import FreeFlyConfig, MovementPolicy
from ..core.input import InputFrame, MoveKey, held_in_priority
from ..core.math3d import Vec2, Vec3, Quat, clamp_pitch, lerp, normalize_direction
from .pose import CameraPose

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LookAngles:
    yaw: float = math.pi
    pitch: float = 0.0

    def direction(self) -> Vec3:
        return normalize_direction(self.yaw, self.pitch)


@dataclass
class FreeFlyState:
    position: Vec3 = field(default_factory=lambda: Vec3(0.0, 1.0, 0.0))
    desired_look: LookAngles = field(default_factory=LookAngles)
    current_look: LookAngles = field(default_factory=LookAngles)
    pose: CameraPose = field(default_factory=CameraPose)


def look_rotation(look: LookAngles) -> Quat:
    return Quat.looking_to(look.direction(), Vec3.unit_y())


def spawn_free_fly_state(config: FreeFlyConfig = None) -> FreeFlyState:
    config = config or FreeFlyConfig()
    position = Vec3.from_tuple(config.start_position)
    yaw, pitch = config.start_look
    look = LookAngles(yaw, clamp_pitch(pitch, config.pitch_epsilon))
    return FreeFlyState(
        position=position,
        desired_look=look,
        current_look=look,
        pose=CameraPose(position=position, rotation=look_rotation(look)),
    )


# =============================================================================
# Look
# =============================================================================

def accumulate_look(look: LookAngles, deltas: Sequence[Vec2],
                    config: FreeFlyConfig) -> LookAngles:
    """
    Turn the desired look by the first `max_look_events` motion deltas.
    Later deltas of the same tick are ignored.
    """
    yaw, pitch = look.yaw, look.pitch
    for d in deltas[:config.max_look_events]:
        yaw += d.x * config.sensitivity
        wanted = pitch - d.y * config.sensitivity
        pitch = clamp_pitch(wanted, config.pitch_epsilon)
        if pitch != wanted:
            logger.debug("Pitch clamped to %.4f", pitch)
    return LookAngles(yaw, pitch)


def ease_look(current: LookAngles, desired: LookAngles, dt: float,
              config: FreeFlyConfig) -> LookAngles:
    """
    Move the current look toward the desired one.

    Without a smoothing rate the look snaps to the desired angle every tick.
    """
    if config.smoothing_rate is None:
        return desired
    t = min(1.0, config.smoothing_rate * dt)
    return LookAngles(lerp(current.yaw, desired.yaw, t),
                      lerp(current.pitch, desired.pitch, t))


# =============================================================================
# Movement
# =============================================================================

def key_direction(key: MoveKey, look: LookAngles) -> Vec3:
    yaw = look.yaw
    if key is MoveKey.FORWARD:
        return look.direction()
    if key is MoveKey.BACK:
        return -look.direction()
    if key is MoveKey.RIGHT:
        return Vec3(-math.sin(yaw), 0.0, math.cos(yaw))
    if key is MoveKey.LEFT:
        return Vec3(math.sin(yaw), 0.0, -math.cos(yaw))
    if key is MoveKey.UP:
        return Vec3(0.0, 1.0, 0.0)
    return Vec3(0.0, -1.0, 0.0)


def movement_direction(keys: Iterable[MoveKey], look: LookAngles,
                       policy: MovementPolicy = MovementPolicy.PRIORITY) -> Vec3:
    held = held_in_priority(keys)
    if not held:
        return Vec3.zero()
    if policy is MovementPolicy.PRIORITY:
        return key_direction(held[0], look)

    total = Vec3.zero()
    for key in held:
        total = total + key_direction(key, look)
    return total.normalized()


# =============================================================================
# Update
# =============================================================================

def freefly_update(state: FreeFlyState, frame: InputFrame, dt: float,
                   config: FreeFlyConfig = None) -> FreeFlyState:
    """
    Advance the free-fly camera by one tick.

    Look is updated before movement, so a tick's motion already steers
    that tick's forward step. Returns `state` unchanged while the input
    gate is closed.
    """
    config = config or FreeFlyConfig()
    if not frame.enabled:
        return state

    desired = accumulate_look(state.desired_look, frame.mouse_deltas, config)
    current = ease_look(state.current_look, desired, dt, config)

    direction = movement_direction(frame.keys, current, config.movement_policy)
    position = state.position + direction * config.speed

    return replace(
        state,
        position=position,
        desired_look=desired,
        current_look=current,
        pose=CameraPose(position=position, rotation=look_rotation(current)),
    )


class FreeFlyController:
    """Owns a FreeFlyState and advances it once per tick."""

    kind = "shooter"

    def __init__(self, config: FreeFlyConfig = None):
        self.config = config or FreeFlyConfig()
        self.state = spawn_free_fly_state(self.config)

    @property
    def pose(self) -> CameraPose:
        return self.state.pose

    def update(self, frame: InputFrame, dt: float) -> CameraPose:
        self.state = freefly_update(self.state, frame, dt, self.config)
        return self.state.pose

    def reset(self):
        self.state = spawn_free_fly_state(self.config)
