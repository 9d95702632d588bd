# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Logging setup for the readiness service.

Modules obtain loggers through ``get_logger(__name__)``; the first call
configures the root handler from ``Settings.log_level``. The HTTP client
libraries log every outbound request at INFO, so they are held at WARNING
unless the service itself runs at DEBUG.
"""

from __future__ import annotations

import logging
from typing import Final

from beartype import beartype

__all__: Final = [
    "configure_logging",
    "get_logger",
]

_DEFAULT_LOG_FORMAT: Final = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_PACKAGE_LOGGER: Final = "eho_readiness"
_CHATTY_LOGGERS: Final = ("httpx", "httpcore")
_is_configured: bool = False


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


@beartype
def configure_logging(
    *, level: int | str | None = None, fmt: str = _DEFAULT_LOG_FORMAT
) -> None:
    """Configure logging once; later calls are no-ops.

    Args:
        level: Root level; defaults to ``Settings.log_level``
        fmt: Log record format
    """
    global _is_configured
    if _is_configured:
        return

    if level is None:
        from .config import get_settings

        level = get_settings().log_level

    root_level = _resolve_level(level)
    logging.basicConfig(level=root_level, format=fmt)

    if root_level > logging.DEBUG:
        for name in _CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    _is_configured = True


@beartype
def get_logger(name: str | None = None, *, level: int | None = None) -> logging.Logger:
    """Return a configured logger, the package logger when no name is given."""
    configure_logging()
    logger = logging.getLogger(name or _PACKAGE_LOGGER)
    if level is not None:
        logger.setLevel(level)
    return logger
