"""Opt-in logging setup for the ``mocma`` logger namespace."""

from __future__ import annotations

import logging

_NAMESPACE = "mocma"
_DEFAULT_FORMAT = "%(name)s: %(message)s"


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown logging level '{level}'.")
    return resolved


def configure_mocma_logging(*, level: int | str = logging.INFO, fmt: str = _DEFAULT_FORMAT) -> logging.Logger:
    """
    Attach a console handler to the "mocma" logger.

    Library modules only ever call ``logging.getLogger(__name__)``; nothing in
    the package calls ``logging.basicConfig()``. When the root logger or the
    "mocma" logger already has handlers, only the level is adjusted.
    """
    mocma_logger = logging.getLogger(_NAMESPACE)
    mocma_logger.setLevel(_resolve_level(level))

    if logging.getLogger().handlers or mocma_logger.handlers:
        return mocma_logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))
    mocma_logger.addHandler(handler)
    mocma_logger.propagate = False
    return mocma_logger


__all__ = ["configure_mocma_logging"]
