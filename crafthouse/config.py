# crafthouse/config.py
"""
Tunable parameters for the camera controllers and the demo host.

Defaults reproduce the constants of the shooter and editor examples.
Values can be loaded from a JSON file and overridden from the environment.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, asdict
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union
import json
import logging
import math
import os

from .core.input import DEFAULT_KEY_BINDINGS

logger = logging.getLogger(__name__)

ENV_CAMERA = "CRAFTHOUSE_CAMERA"
ENV_LOG_LEVEL = "CRAFTHOUSE_LOG_LEVEL"

CAMERA_KINDS = ("shooter", "editor")


class ConfigError(ValueError):
    """Invalid configuration value."""


class MovementPolicy(Enum):
    PRIORITY = "priority"   # first held key wins
    COMBINED = "combined"   # held directions summed and normalized


@dataclass
class OrbitConfig:
    focus: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    start_position: Tuple[float, float, float] = (-2.0, 2.5, 5.0)
    yaw_range: float = 2.0 * math.pi      # radians per viewport width
    pitch_range: float = math.pi          # radians per viewport height
    require_grab: bool = True

    def validate(self):
        _check_vec3("orbit.focus", self.focus)
        _check_vec3("orbit.start_position", self.start_position)
        _check_number("orbit.yaw_range", self.yaw_range)
        _check_number("orbit.pitch_range", self.pitch_range)
        if not isinstance(self.require_grab, bool):
            raise ConfigError("orbit.require_grab must be true or false")
        offset = [s - f for s, f in zip(self.start_position, self.focus)]
        if math.sqrt(sum(c * c for c in offset)) <= 0.0:
            raise ConfigError("orbit.start_position must differ from orbit.focus")


@dataclass
class FreeFlyConfig:
    start_position: Tuple[float, float, float] = (0.0, 1.0, 0.0)
    start_look: Tuple[float, float] = (math.pi, 0.0)
    speed: float = 0.1                    # world units per tick
    sensitivity: float = 0.02             # radians per pixel
    pitch_epsilon: float = 0.01
    max_look_events: int = 2
    smoothing_rate: Optional[float] = None
    movement_policy: MovementPolicy = MovementPolicy.PRIORITY

    def validate(self):
        _check_vec3("free_fly.start_position", self.start_position)
        if not isinstance(self.start_look, tuple) or len(self.start_look) != 2:
            raise ConfigError("free_fly.start_look must be (yaw, pitch)")
        for c in self.start_look:
            _check_number("free_fly.start_look", c)
        for name in ("speed", "sensitivity", "pitch_epsilon"):
            _check_number(f"free_fly.{name}", getattr(self, name))
        _check_int("free_fly.max_look_events", self.max_look_events)
        if self.smoothing_rate is not None:
            _check_number("free_fly.smoothing_rate", self.smoothing_rate)
        if not isinstance(self.movement_policy, MovementPolicy):
            raise ConfigError("free_fly.movement_policy must be a MovementPolicy")
        if self.speed < 0.0:
            raise ConfigError("free_fly.speed must be >= 0")
        if not 0.0 < self.pitch_epsilon < math.pi / 2.0:
            raise ConfigError("free_fly.pitch_epsilon must be in (0, pi/2)")
        if self.max_look_events < 0:
            raise ConfigError("free_fly.max_look_events must be >= 0")
        if self.smoothing_rate is not None and self.smoothing_rate <= 0.0:
            raise ConfigError("free_fly.smoothing_rate must be > 0 or null")


@dataclass
class AppConfig:
    camera: str = "shooter"
    title: str = "crafthouse"
    window_size: Tuple[int, int] = (1280, 720)
    time_step: float = 1.0 / 60.0
    max_steps_per_frame: int = 5
    fov_y_deg: float = 60.0
    log_level: str = "INFO"
    key_bindings: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_KEY_BINDINGS))
    orbit: OrbitConfig = field(default_factory=OrbitConfig)
    free_fly: FreeFlyConfig = field(default_factory=FreeFlyConfig)

    def validate(self) -> AppConfig:
        for name in ("camera", "title", "log_level"):
            if not isinstance(getattr(self, name), str):
                raise ConfigError(f"{name} must be a string")
        _check_number("time_step", self.time_step)
        _check_int("max_steps_per_frame", self.max_steps_per_frame)
        _check_number("fov_y_deg", self.fov_y_deg)
        if not isinstance(self.window_size, tuple) or len(self.window_size) != 2:
            raise ConfigError("window_size must be two positive integers")
        for c in self.window_size:
            _check_int("window_size", c)
        if not isinstance(self.key_bindings, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in self.key_bindings.items()):
            raise ConfigError("key_bindings must map action names to key names")
        if not isinstance(self.orbit, OrbitConfig) or not isinstance(self.free_fly, FreeFlyConfig):
            raise ConfigError("orbit and free_fly must be config sections")
        if self.camera not in CAMERA_KINDS:
            raise ConfigError(f"camera must be one of {CAMERA_KINDS}, got {self.camera!r}")
        if self.time_step <= 0.0:
            raise ConfigError("time_step must be > 0")
        if self.max_steps_per_frame < 1:
            raise ConfigError("max_steps_per_frame must be >= 1")
        if len(self.window_size) != 2 or min(self.window_size) <= 0:
            raise ConfigError("window_size must be two positive integers")
        if not 0.0 < self.fov_y_deg < 180.0:
            raise ConfigError("fov_y_deg must be in (0, 180)")
        self.orbit.validate()
        self.free_fly.validate()
        return self

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AppConfig:
        data = dict(_section(data, "config"))
        orbit = _build(OrbitConfig, _section(data.pop("orbit", {}), "orbit"), "orbit")
        free_fly_data = dict(_section(data.pop("free_fly", {}), "free_fly"))
        if "movement_policy" in free_fly_data:
            try:
                free_fly_data["movement_policy"] = MovementPolicy(free_fly_data["movement_policy"])
            except ValueError:
                raise ConfigError(
                    f"free_fly.movement_policy must be one of "
                    f"{[p.value for p in MovementPolicy]}"
                ) from None
        free_fly = _build(FreeFlyConfig, free_fly_data, "free_fly")
        bindings = dict(DEFAULT_KEY_BINDINGS)
        bindings.update(_section(data.pop("key_bindings", {}), "key_bindings"))
        config = _build(cls, data, "", orbit=orbit, free_fly=free_fly, key_bindings=bindings)
        return config.validate()

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["free_fly"]["movement_policy"] = self.free_fly.movement_policy.value
        return data


def _is_number(value) -> bool:
    return (isinstance(value, (int, float)) and not isinstance(value, bool)
            and math.isfinite(value))


def _check_number(name: str, value) -> None:
    if not _is_number(value):
        raise ConfigError(f"{name} must be a finite number, got {value!r}")


def _check_int(name: str, value) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}")


def _check_vec3(name: str, value) -> None:
    if not isinstance(value, tuple) or len(value) != 3 or not all(_is_number(c) for c in value):
        raise ConfigError(f"{name} must be three finite numbers")


def _section(value, name: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(f"{name} must be an object, got {type(value).__name__}")
    return value


def _build(cls, data: Dict[str, Any], prefix: str, **extra):
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        where = f"{prefix}." if prefix else ""
        raise ConfigError(f"Unknown config keys: {', '.join(where + k for k in sorted(unknown))}")
    kwargs = {}
    for key, value in data.items():
        kwargs[key] = tuple(value) if isinstance(value, list) else value
    kwargs.update(extra)
    return cls(**kwargs)


def load_config(path: Optional[Union[str, os.PathLike]] = None,
                environ: Optional[Dict[str, str]] = None,
                default_camera: Optional[str] = None) -> AppConfig:
    """
    Build the app configuration.

    `default_camera` applies first, then the JSON file at `path`, then
    CRAFTHOUSE_CAMERA and CRAFTHOUSE_LOG_LEVEL from `environ`
    (defaults to os.environ).
    """
    env = os.environ if environ is None else environ
    data: Dict[str, Any] = {}
    if default_camera is not None:
        data["camera"] = default_camera
    if path is not None:
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as fh:
                loaded = json.load(fh)
        except json.JSONDecodeError as e:
            raise ConfigError(f"{path}: invalid JSON ({e})") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"{path}: top level must be an object")
        data.update(loaded)
        logger.info("Loaded config from %s", path)

    if env.get(ENV_CAMERA):
        data["camera"] = env[ENV_CAMERA].strip().lower()
    if env.get(ENV_LOG_LEVEL):
        data["log_level"] = env[ENV_LOG_LEVEL].strip().upper()

    return AppConfig.from_dict(data)
