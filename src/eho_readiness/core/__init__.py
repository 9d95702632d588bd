# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Core infrastructure components for the readiness engine."""

from .config import Settings, clear_settings_cache, get_settings
from .logging_utils import configure_logging, get_logger
from .result_types import Err, Ok, Result

__all__ = [
    "Settings",
    "get_settings",
    "clear_settings_cache",
    "configure_logging",
    "get_logger",
    "Ok",
    "Err",
    "Result",
]
