# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Readiness scoring: catalog, matching, status, aggregation and reports."""

from .aggregator import aggregate, aggregate_categories, completion_rate, star_rating
from .catalog import (
    CATALOG_VERSION,
    get_requirement,
    list_requirements,
    requirements_by_category,
)
from .engine import ReadinessEngine, evaluate_snapshot
from .matcher import evaluate, evaluate_all, match_requirement
from .report import assemble, count_incidents, summarise
from .snapshot import EvidenceSnapshotLoader
from .status import derive_status

__all__ = [
    "CATALOG_VERSION",
    "list_requirements",
    "get_requirement",
    "requirements_by_category",
    "EvidenceSnapshotLoader",
    "match_requirement",
    "evaluate",
    "evaluate_all",
    "derive_status",
    "aggregate",
    "aggregate_categories",
    "completion_rate",
    "star_rating",
    "count_incidents",
    "summarise",
    "assemble",
    "ReadinessEngine",
    "evaluate_snapshot",
]
