"""Logging setup for the soft body demo."""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(level: Union[int, str]) -> int:
    """Turn a level name such as ``"DEBUG"`` (as given on the command line) into its number."""

    if isinstance(level, int):
        return level
    number = logging.getLevelName(str(level).upper())
    if not isinstance(number, int):
        raise ValueError(f"unknown log level {level!r}")
    return number


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> None:
    """Route every simulation module's log to stdout and optionally to ``log_file``.

    The modules log under their own names (``grid2d``, ``timestep``, ...), so the
    handlers go on the root logger.  PyOpenGL logs under ``OpenGL``; it is kept
    at WARNING so DEBUG runs only show the simulation.
    """

    level = resolve_level(level)
    root = logging.getLogger()
    root.setLevel(level)

    if root.hasHandlers():
        root.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.getLogger("OpenGL").setLevel(max(level, logging.WARNING))
