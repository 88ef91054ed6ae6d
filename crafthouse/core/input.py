# crafthouse/core/input.py
"""
Input gathering for camera controllers.

The host window reports raw events (key press/release, mouse motion,
button clicks). InputCollector buffers them and hands out one InputFrame
per fixed tick. Controllers never see the window, only InputFrames.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple
import logging

from .math3d import Vec2

logger = logging.getLogger(__name__)


class MoveKey(Enum):
    FORWARD = auto()
    BACK = auto()
    RIGHT = auto()
    LEFT = auto()
    UP = auto()
    DOWN = auto()


# First held key in this order wins under MovementPolicy.PRIORITY
MOVE_PRIORITY: Tuple[MoveKey, ...] = (
    MoveKey.FORWARD,
    MoveKey.BACK,
    MoveKey.RIGHT,
    MoveKey.LEFT,
    MoveKey.UP,
    MoveKey.DOWN,
)

# Binding name -> key attribute name on the host's key table
DEFAULT_KEY_BINDINGS: Dict[str, str] = {
    "forward": "W",
    "back": "S",
    "right": "D",
    "left": "A",
    "up": "SPACE",
    "down": "LEFT_SHIFT",
}


@dataclass(frozen=True)
class InputFrame:
    """Everything a controller may read for one tick."""
    keys: FrozenSet[MoveKey] = frozenset()
    mouse_deltas: Tuple[Vec2, ...] = ()
    viewport: Vec2 = field(default_factory=lambda: Vec2(1280.0, 720.0))
    enabled: bool = True

    @property
    def mouse_motion(self) -> Vec2:
        """All motion events of the tick summed."""
        total = Vec2(0.0, 0.0)
        for d in self.mouse_deltas:
            total = total + d
        return total


class CursorGrab:
    """
    Cursor capture state.

    A left click locks (and hides) the cursor, Escape releases it.
    Controllers only run while locked.
    """

    def __init__(self, locked: bool = False):
        self.locked = locked

    def lock(self) -> bool:
        """Returns True if the state changed."""
        if self.locked:
            return False
        self.locked = True
        logger.info("Cursor locked")
        return True

    def release(self) -> bool:
        if not self.locked:
            return False
        self.locked = False
        logger.info("Cursor released")
        return True


class InputCollector:
    """
    Buffers host input events between ticks.

    Motion events are queued in arrival order and drained by `take_frame()`.
    Held keys persist until released.
    """

    def __init__(self, bindings: Optional[Dict[object, MoveKey]] = None,
                 grab: Optional[CursorGrab] = None):
        self.bindings: Dict[object, MoveKey] = dict(bindings or {})
        self.grab = grab if grab is not None else CursorGrab()
        self.viewport = Vec2(1280.0, 720.0)
        self._held: set = set()
        self._motion: List[Vec2] = []

    # -------------------------------------------------------------------------
    # Host Events
    # -------------------------------------------------------------------------

    def key_down(self, key) -> None:
        move = self.bindings.get(key)
        if move is not None:
            self._held.add(move)

    def key_up(self, key) -> None:
        move = self.bindings.get(key)
        if move is not None:
            self._held.discard(move)

    def mouse_motion(self, dx: float, dy: float) -> None:
        self._motion.append(Vec2(float(dx), float(dy)))

    def resize(self, width: float, height: float) -> None:
        assert width > 0 and height > 0, "viewport must have positive size"
        self.viewport = Vec2(float(width), float(height))

    def release_all(self) -> None:
        """Forget held keys (e.g. when the window loses focus)."""
        self._held.clear()

    # -------------------------------------------------------------------------
    # Tick
    # -------------------------------------------------------------------------

    @property
    def pending_motion(self) -> int:
        return len(self._motion)

    def take_frame(self) -> InputFrame:
        """Build the InputFrame for one tick and drain buffered motion."""
        frame = InputFrame(
            keys=frozenset(self._held),
            mouse_deltas=tuple(self._motion),
            viewport=Vec2(self.viewport.x, self.viewport.y),
            enabled=self.grab.locked,
        )
        self._motion.clear()
        return frame


def resolve_key_bindings(key_table, names: Dict[str, str]) -> Dict[object, MoveKey]:
    """
    Map host key codes to MoveKeys.

    `key_table` is any object exposing key codes as attributes (e.g. a
    moderngl-window `wnd.keys`). Unknown action or key names are skipped
    with a warning.
    """
    resolved: Dict[object, MoveKey] = {}
    for action, key_name in names.items():
        try:
            move = MoveKey[action.upper()]
        except KeyError:
            logger.warning("Unknown movement action %r in key bindings", action)
            continue
        code = getattr(key_table, key_name.upper(), None)
        if code is None:
            logger.warning("Key %r for %s is not available on this window backend",
                           key_name, action)
            continue
        resolved[code] = move
    return resolved


def held_in_priority(keys: Iterable[MoveKey]) -> List[MoveKey]:
    """Held keys sorted by movement priority."""
    held = set(keys)
    return [k for k in MOVE_PRIORITY if k in held]
