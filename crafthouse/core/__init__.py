"""Core: math, timing, input."""

from .math3d import (
    Vec2, Vec3, Mat4, Quat,
    PITCH_EPSILON,
    clamp, lerp, clamp_pitch, normalize_direction,
)
from .frame import FrameState, FixedTimestep, FIXED_TIME_STEP
from .input import (
    MoveKey, MOVE_PRIORITY, DEFAULT_KEY_BINDINGS,
    InputFrame, InputCollector, CursorGrab,
    resolve_key_bindings,
)

__all__ = [
    'Vec2', 'Vec3', 'Mat4', 'Quat',
    'PITCH_EPSILON',
    'clamp', 'lerp', 'clamp_pitch', 'normalize_direction',
    'FrameState', 'FixedTimestep', 'FIXED_TIME_STEP',
    'MoveKey', 'MOVE_PRIORITY', 'DEFAULT_KEY_BINDINGS',
    'InputFrame', 'InputCollector', 'CursorGrab',
    'resolve_key_bindings',
]
