# crafthouse/__init__.py
"""
crafthouse - camera control for 3D game/CAD viewers.

Core components:
- OrbitController: editor camera orbiting a focus point
- FreeFlyController: shooter camera with keyboard movement and mouse look
- InputCollector: buffers window events into per-tick InputFrames
- FixedTimestep: runs controllers at a fixed 60 Hz
"""

from .core import (
    # Math
    Vec2, Vec3, Mat4, Quat,
    clamp, lerp, clamp_pitch, normalize_direction,

    # Timing
    FrameState, FixedTimestep, FIXED_TIME_STEP,

    # Input
    MoveKey, InputFrame, InputCollector, CursorGrab,
)

from .cameras import (
    CameraPose,
    OrbitState, OrbitController, orbit_update,
    LookAngles, FreeFlyState, FreeFlyController, freefly_update,
    make_controller,
)

from .config import (
    AppConfig, OrbitConfig, FreeFlyConfig,
    MovementPolicy, ConfigError, load_config,
)

__version__ = '0.1.0'

__all__ = [
    # Cameras
    'CameraPose',
    'OrbitState', 'OrbitController', 'orbit_update',
    'LookAngles', 'FreeFlyState', 'FreeFlyController', 'freefly_update',
    'make_controller',

    # Config
    'AppConfig', 'OrbitConfig', 'FreeFlyConfig',
    'MovementPolicy', 'ConfigError', 'load_config',

    # Core
    'Vec2', 'Vec3', 'Mat4', 'Quat',
    'clamp', 'lerp', 'clamp_pitch', 'normalize_direction',
    'FrameState', 'FixedTimestep', 'FIXED_TIME_STEP',
    'MoveKey', 'InputFrame', 'InputCollector', 'CursorGrab',
]
