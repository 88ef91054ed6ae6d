"""Camera controllers: orbit (editor) and free-fly (shooter)."""

from .pose import CameraPose
from .orbit import OrbitState, OrbitController, orbit_update, spawn_orbit_state
from .free_fly import (
    LookAngles, FreeFlyState, FreeFlyController,
    freefly_update, spawn_free_fly_state, movement_direction,
)

__all__ = [
    'CameraPose',
    'OrbitState', 'OrbitController', 'orbit_update', 'spawn_orbit_state',
    'LookAngles', 'FreeFlyState', 'FreeFlyController',
    'freefly_update', 'spawn_free_fly_state', 'movement_direction',
]


def make_controller(kind: str, config):
    """Build the controller for `kind` ("shooter" or "editor") from an AppConfig."""
    if kind == "editor":
        return OrbitController(config.orbit)
    if kind == "shooter":
        return FreeFlyController(config.free_fly)
    raise ValueError(f"Unknown camera kind: {kind!r}")
