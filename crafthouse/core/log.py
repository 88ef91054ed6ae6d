"""
Logging setup for crafthouse.

Modules log through `logging.getLogger(__name__)`; call setup_logging()
once at startup (the app does) to attach handlers to the package root.
"""

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional, Union

ROOT_NAME = "crafthouse"
ENV_LOG_LEVEL = "CRAFTHOUSE_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%H:%M:%S"

_setup_done = False


def level_from_name(name: Optional[str], default: int = logging.INFO) -> int:
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(
    level: Optional[Union[int, str]] = None,
    log_file: Optional[Union[str, os.PathLike]] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the crafthouse root logger: level, console handler,
    optional file handler. Idempotent.
    """
    global _setup_done
    root = logging.getLogger(ROOT_NAME)
    if _setup_done:
        return root

    if level is None:
        level = level_from_name(os.environ.get(ENV_LOG_LEVEL))
    elif isinstance(level, str):
        level = level_from_name(level)
    root.setLevel(level)

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt=_DATE_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setFormatter(formatter)
        root.addHandler(fh)

    _setup_done = True
    return root


def reset_logging() -> None:
    """Remove handlers added by setup_logging (tests)."""
    global _setup_done
    root = logging.getLogger(ROOT_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)
    _setup_done = False
