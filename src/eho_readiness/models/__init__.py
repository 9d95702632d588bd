# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Domain models for requirements, evidence and readiness reports."""

from .base import BaseModelConfig
from .evidence import (
    ApplianceEvidence,
    AssessmentEvidence,
    CoshhSheetEvidence,
    DocumentEvidence,
    EvidenceItem,
    EvidenceSnapshot,
    EvidenceSource,
    IncidentEvidence,
    TaskCompletionEvidence,
    TaskTemplateEvidence,
    TemperatureLogEvidence,
    TrainingEvidence,
)
from .report import (
    CategoryStatus,
    CategorySummary,
    IncidentCounters,
    OverallSummary,
    ReadinessReport,
    RequirementEvaluation,
    RequirementStatus,
    StarRating,
)
from .requirement import (
    EvidenceType,
    MatchRule,
    RequirementCategory,
    RequirementDefinition,
)

__all__ = [
    "BaseModelConfig",
    # Requirements
    "EvidenceType",
    "MatchRule",
    "RequirementCategory",
    "RequirementDefinition",
    # Evidence
    "EvidenceItem",
    "EvidenceSource",
    "EvidenceSnapshot",
    "DocumentEvidence",
    "CoshhSheetEvidence",
    "AssessmentEvidence",
    "TrainingEvidence",
    "ApplianceEvidence",
    "TaskTemplateEvidence",
    "TaskCompletionEvidence",
    "TemperatureLogEvidence",
    "IncidentEvidence",
    # Report
    "RequirementStatus",
    "CategoryStatus",
    "RequirementEvaluation",
    "StarRating",
    "CategorySummary",
    "OverallSummary",
    "IncidentCounters",
    "ReadinessReport",
]
