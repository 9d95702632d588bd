# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Requirement matcher.

Each evidence type maps to exactly one strategy function. Strategies read the
requirement's declarative ``source``/``rule`` and never branch on requirement
ids. All strategies are "first match wins" over the snapshot's source order.
"""

from collections.abc import Callable, Mapping, Sequence
from datetime import datetime
from types import MappingProxyType

from attrs import frozen
from beartype import beartype

from ..models.evidence import (
    AssessmentEvidence,
    DocumentEvidence,
    EvidenceItem,
    EvidenceSnapshot,
    EvidenceSource,
)
from ..models.report import RequirementEvaluation
from ..models.requirement import EvidenceType, MatchRule, RequirementDefinition
from .status import EXPIRING_SOON_DAYS, derive_status

FUZZY_PREFIX_LENGTH = 15
TEMPLATE_PREFIX_LENGTH = 10


@frozen
class MatchOutcome:
    """What a strategy found, before status derivation."""

    found: bool
    description: str | None = None
    expiry_date: datetime | None = None


_NOT_FOUND = MatchOutcome(found=False)

Strategy = Callable[[RequirementDefinition, EvidenceSnapshot], MatchOutcome]


def _collection(
    requirement: RequirementDefinition,
    snapshot: EvidenceSnapshot,
    default: EvidenceSource,
) -> tuple[EvidenceItem, ...]:
    return snapshot.collection(requirement.source or default)


def _accepted(
    items: Sequence[EvidenceItem], rule: MatchRule | None
) -> list[EvidenceItem]:
    if rule is None:
        return list(items)
    return [item for item in items if rule.matches(item)]


def _describe(
    template: str | None,
    fallback: str,
    *,
    matched: int,
    total: int,
    label: str,
) -> str:
    return (template or fallback).format(matched=matched, total=total, label=label)


def _normalise_label(text: str) -> str:
    return " ".join(text.lower().split())


def _prefix_overlap(left: str, right: str) -> bool:
    """True when the start of the shorter string occurs in the longer one."""
    shorter, longer = (left, right) if len(left) <= len(right) else (right, left)
    if not shorter:
        return False
    return shorter[:FUZZY_PREFIX_LENGTH] in longer


def _match_document(
    requirement: RequirementDefinition, snapshot: EvidenceSnapshot
) -> MatchOutcome:
    documents = _collection(requirement, snapshot, EvidenceSource.DOCUMENTS)
    wanted = _normalise_label(requirement.name)
    labelled = [
        (document, _normalise_label(document.label))
        for document in documents
        if document.label.strip()
    ]

    match = next((doc for doc, label in labelled if label == wanted), None)
    if match is None:
        match = next(
            (doc for doc, label in labelled if _prefix_overlap(label, wanted)), None
        )
    if match is None:
        return _NOT_FOUND

    expiry = match.expiry_date if isinstance(match, DocumentEvidence) else None
    return MatchOutcome(
        found=True,
        description=_describe(
            requirement.description,
            "{label}",
            matched=1,
            total=len(documents),
            label=match.label,
        ),
        expiry_date=expiry,
    )


def _match_assessment(
    requirement: RequirementDefinition, snapshot: EvidenceSnapshot
) -> MatchOutcome:
    if requirement.rule is None:
        return _NOT_FOUND
    assessments = _collection(requirement, snapshot, EvidenceSource.RISK_ASSESSMENTS)
    match = next((a for a in assessments if requirement.rule.matches(a)), None)
    if match is None:
        return _NOT_FOUND

    expiry = match.next_review_date if isinstance(match, AssessmentEvidence) else None
    return MatchOutcome(
        found=True,
        description=_describe(
            requirement.description,
            "{label}",
            matched=1,
            total=len(assessments),
            label=match.label,
        ),
        expiry_date=expiry,
    )


def _match_training(
    requirement: RequirementDefinition, snapshot: EvidenceSnapshot
) -> MatchOutcome:
    if requirement.rule is None:
        return _NOT_FOUND
    records = _collection(requirement, snapshot, EvidenceSource.TRAINING)
    match = next((r for r in records if requirement.rule.matches(r)), None)
    if match is None:
        return _NOT_FOUND

    return MatchOutcome(
        found=True,
        description=_describe(
            requirement.description,
            "{label} ({total} records)",
            matched=1,
            total=len(records),
            label=match.label,
        ),
    )


def _match_record(
    requirement: RequirementDefinition, snapshot: EvidenceSnapshot
) -> MatchOutcome:
    if requirement.source is None:
        return _NOT_FOUND
    items = snapshot.collection(requirement.source)
    accepted = _accepted(items, requirement.rule)

    if not accepted:
        if items and requirement.unmet_description:
            return MatchOutcome(
                found=False,
                description=_describe(
                    requirement.unmet_description,
                    "",
                    matched=0,
                    total=len(items),
                    label="",
                ),
            )
        return _NOT_FOUND

    return MatchOutcome(
        found=True,
        description=_describe(
            requirement.description,
            "{matched} records",
            matched=len(accepted),
            total=len(items),
            label=accepted[0].label,
        ),
    )


def _match_completion(
    requirement: RequirementDefinition, snapshot: EvidenceSnapshot
) -> MatchOutcome:
    if requirement.rule is None:
        return _NOT_FOUND
    completions = _collection(requirement, snapshot, EvidenceSource.TASK_COMPLETIONS)
    accepted = _accepted(completions, requirement.rule)
    if not accepted:
        return _NOT_FOUND

    return MatchOutcome(
        found=True,
        description=_describe(
            requirement.description,
            "{matched} completions (30 days)",
            matched=len(accepted),
            total=len(completions),
            label=accepted[0].label,
        ),
    )


def _match_template(
    requirement: RequirementDefinition, snapshot: EvidenceSnapshot
) -> MatchOutcome:
    rule = requirement.rule or MatchRule(
        attribute="name",
        contains_any=(requirement.name.lower()[:TEMPLATE_PREFIX_LENGTH],),
    )
    templates = _collection(requirement, snapshot, EvidenceSource.TASK_TEMPLATES)
    match = next((t for t in templates if rule.matches(t)), None)
    if match is None:
        return _NOT_FOUND

    return MatchOutcome(
        found=True,
        description=_describe(
            requirement.description,
            "{label}",
            matched=1,
            total=len(templates),
            label=match.label,
        ),
    )


STRATEGIES: Mapping[EvidenceType, Strategy] = MappingProxyType(
    {
        EvidenceType.DOCUMENT: _match_document,
        EvidenceType.ASSESSMENT: _match_assessment,
        EvidenceType.TRAINING: _match_training,
        EvidenceType.RECORD: _match_record,
        EvidenceType.COMPLETION: _match_completion,
        EvidenceType.TEMPLATE: _match_template,
    }
)


def _apply_coshh_rule(
    requirement: RequirementDefinition,
    snapshot: EvidenceSnapshot,
    outcome: MatchOutcome,
) -> MatchOutcome:
    # Any active COSHH sheet satisfies both COSHH requirements.
    if not requirement.satisfied_by_coshh or not snapshot.coshh:
        return outcome
    return MatchOutcome(
        found=True, description=f"{len(snapshot.coshh)} COSHH data sheets"
    )


@beartype
def match_requirement(
    requirement: RequirementDefinition, snapshot: EvidenceSnapshot
) -> MatchOutcome:
    """Run the evidence-type strategy plus the cross-cutting COSHH rule."""
    outcome = STRATEGIES[requirement.evidence_type](requirement, snapshot)
    return _apply_coshh_rule(requirement, snapshot, outcome)


@beartype
def evaluate(
    requirement: RequirementDefinition,
    snapshot: EvidenceSnapshot,
    now: datetime,
    *,
    expiring_soon_days: int = EXPIRING_SOON_DAYS,
) -> RequirementEvaluation:
    """Evaluate one requirement against a snapshot at time ``now``."""
    outcome = match_requirement(requirement, snapshot)
    expiry = outcome.expiry_date if outcome.found else None
    status = derive_status(
        outcome.found, expiry, now, expiring_soon_days=expiring_soon_days
    )

    return RequirementEvaluation(
        requirement_id=requirement.id,
        name=requirement.name,
        category=requirement.category,
        evidence_type=requirement.evidence_type,
        required=requirement.required,
        frequency_hint=requirement.frequency_hint,
        found=outcome.found,
        matched_description=outcome.description,
        expiry_date=expiry,
        status=status,
    )


@beartype
def evaluate_all(
    requirements: Sequence[RequirementDefinition],
    snapshot: EvidenceSnapshot,
    now: datetime,
    *,
    expiring_soon_days: int = EXPIRING_SOON_DAYS,
) -> tuple[RequirementEvaluation, ...]:
    """Evaluate every requirement, preserving catalog order."""
    return tuple(
        evaluate(
            requirement, snapshot, now, expiring_soon_days=expiring_soon_days
        )
        for requirement in requirements
    )
