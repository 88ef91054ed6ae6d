# crafthouse/cameras/orbit.py
"""
Orbit camera (editor / blender-style).

The camera sits on a virtual arm of length `radius` attached to `focus`.
Horizontal mouse motion yaws the arm around the world Y axis, vertical
motion pitches it around the camera's own X axis. There is no pitch clamp:
the arm can swing over the pole, in which case horizontal input is
inverted so dragging right still moves the view right.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
import logging

from ..config import OrbitConfig
from ..core.input import InputFrame
from ..core.math3d import Vec2, Vec3, Quat
from .pose import CameraPose

logger = logging.getLogger(__name__)


@dataclass
class OrbitState:
    focus: Vec3 = field(default_factory=Vec3.zero)
    radius: float = 5.0
    upside_down: bool = False
    pose: CameraPose = field(default_factory=CameraPose)

    @property
    def rotation(self) -> Quat:
        return self.pose.rotation

    @property
    def position(self) -> Vec3:
        return self.pose.position


def spawn_orbit_state(config: OrbitConfig = None) -> OrbitState:
    """Camera at the configured start position looking at the focus."""
    config = config or OrbitConfig()
    focus = Vec3.from_tuple(config.focus)
    position = Vec3.from_tuple(config.start_position)
    radius = (position - focus).length()
    assert radius > 0.0, "orbit radius must be positive"
    return OrbitState(
        focus=focus,
        radius=radius,
        upside_down=False,
        pose=CameraPose.looking_at(position, focus, Vec3.unit_y()),
    )


def is_upside_down(rotation: Quat) -> bool:
    return rotation.local_up().y <= 0.0


def orbit_rotation(rotation: Quat, motion: Vec2, viewport: Vec2,
                   upside_down: bool, config: OrbitConfig) -> Quat:
    """Apply one tick of mouse motion: global yaw first, local pitch second."""
    assert viewport.x > 0.0 and viewport.y > 0.0, "viewport must have positive size"
    delta_x = motion.x / viewport.x * config.yaw_range
    if upside_down:
        delta_x = -delta_x
    delta_y = motion.y / viewport.y * config.pitch_range

    yaw = Quat.from_rotation_y(-delta_x)
    pitch = Quat.from_rotation_x(-delta_y)
    return (yaw * rotation * pitch).normalized()


def arm_position(focus: Vec3, rotation: Quat, radius: float) -> Vec3:
    # Parent (yaw/pitch) with a child offset along local +Z
    return focus + rotation.rotate_vec(Vec3(0.0, 0.0, radius))


def orbit_update(state: OrbitState, frame: InputFrame,
                 config: OrbitConfig = None) -> OrbitState:
    """
    Advance the orbit camera by one tick.

    Returns `state` itself when nothing changes (gate closed or no motion),
    otherwise a new OrbitState.
    """
    config = config or OrbitConfig()
    if config.require_grab and not frame.enabled:
        return state

    motion = frame.mouse_motion
    if motion.is_zero():
        return state

    assert state.radius > 0.0, "orbit radius must be positive"

    # Checked against the orientation before this tick's rotation
    upside_down = is_upside_down(state.rotation)
    if upside_down != state.upside_down:
        logger.debug("Orbit camera %s", "flipped upside down" if upside_down else "back upright")

    rotation = orbit_rotation(state.rotation, motion, frame.viewport, upside_down, config)
    position = arm_position(state.focus, rotation, state.radius)
    return replace(state, upside_down=upside_down,
                   pose=CameraPose(position=position, rotation=rotation))


class OrbitController:
    """Owns an OrbitState and advances it once per tick."""

    kind = "editor"

    def __init__(self, config: OrbitConfig = None):
        self.config = config or OrbitConfig()
        self.state = spawn_orbit_state(self.config)

    @property
    def pose(self) -> CameraPose:
        return self.state.pose

    def update(self, frame: InputFrame, dt: float) -> CameraPose:
        self.state = orbit_update(self.state, frame, self.config)
        return self.state.pose

    def reset(self):
        self.state = spawn_orbit_state(self.config)
