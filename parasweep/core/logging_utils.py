"""Logging utilities for parasweep.

Provides a consistent logger hierarchy and formatting without modifying the
process root logger. All parasweep code should obtain loggers via get_logger().
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_ROOT_NAME = 'parasweep'
_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')


def _ensure_package_root() -> logging.Logger:
    """Ensure the 'parasweep' logger has a single stream handler and is isolated
    from the process root logger. Returns the 'parasweep' logger.
    """
    root = logging.getLogger(_ROOT_NAME)
    # The package __init__ only installs a NullHandler; swap it for stdout
    has_stream = any(not isinstance(h, logging.NullHandler) for h in root.handlers)
    if not has_stream:
        for h in list(root.handlers):
            root.removeHandler(h)
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(_FORMAT)
        root.addHandler(handler)
    root.propagate = False
    return root


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    value = getattr(logging, str(level).upper(), None)
    return value if isinstance(value, int) else default


def configure_logging(level: Union[str, int] = 'INFO', mute_external: bool = True) -> None:
    """Configure the 'parasweep' logger family level.

    This does NOT modify the process root logger. With ``mute_external`` the
    very chatty matplotlib loggers are kept at INFO when running at DEBUG.
    """
    root = _ensure_package_root()
    lvl = _to_level(level)
    root.setLevel(lvl)
    if mute_external and lvl <= logging.DEBUG:
        for noisy in ('matplotlib', 'matplotlib.font_manager', 'PIL'):
            logging.getLogger(noisy).setLevel(logging.INFO)


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Return a logger under the 'parasweep' namespace.

    Without a level the logger is left at NOTSET so it inherits whatever
    configure_logging() set on the package root.
    """
    if name != _ROOT_NAME and not name.startswith(_ROOT_NAME + '.'):
        name = f'{_ROOT_NAME}.{name}'
    log = logging.getLogger(name)
    log.setLevel(_to_level(level) if level is not None else logging.NOTSET)
    return log


__all__ = ['get_logger', 'configure_logging']
