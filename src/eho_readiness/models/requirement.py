# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Requirement definitions and declarative match rules.

A requirement carries its own matching data (which evidence source to read and
which ``MatchRule`` selects qualifying items) so the matcher strategies never
branch on requirement ids.
"""

from enum import Enum
from typing import Any

from attrs import field, frozen
from beartype import beartype

from .evidence import EvidenceSource


class RequirementCategory(str, Enum):
    """Compliance areas an inspector reviews."""

    FOOD_SAFETY = "Food Safety"
    HEALTH_AND_SAFETY = "Health & Safety"
    FIRE_SAFETY = "Fire Safety"
    TRAINING = "Training"
    CLEANING = "Cleaning"
    EQUIPMENT = "Equipment"
    LEGAL = "Legal"
    COMPLIANCE = "Compliance"


class EvidenceType(str, Enum):
    """Kind of evidence that can satisfy a requirement."""

    DOCUMENT = "document"
    RECORD = "record"
    TEMPLATE = "template"
    COMPLETION = "completion"
    TRAINING = "training"
    ASSESSMENT = "assessment"


def _normalise(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _lower_keywords(keywords: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(keyword.lower() for keyword in keywords)


@frozen
class MatchRule:
    """Selects evidence items by one of their attributes.

    ``equals`` compares exactly (case-insensitive for strings), ``contains_any``
    accepts the item when the attribute contains any of the keywords. A rule
    with neither set accepts every item.
    """

    attribute: str = field()
    contains_any: tuple[str, ...] = field(default=(), converter=_lower_keywords)
    equals: str | bool | None = field(default=None)

    @beartype
    def matches(self, item: object) -> bool:
        """Return True when ``item`` satisfies this rule."""
        value = getattr(item, self.attribute, None)
        if self.equals is not None:
            return value is not None and _normalise(value) == _normalise(self.equals)
        if self.contains_any:
            if not isinstance(value, str):
                return False
            text = value.lower()
            return any(keyword in text for keyword in self.contains_any)
        return True


@frozen
class RequirementDefinition:
    """Immutable catalog entry.

    ``description`` and ``unmet_description`` are format templates for the
    human-readable match summary. They may reference ``{matched}`` (items
    accepted by the rule), ``{total}`` (items in the source) and ``{label}``
    (label of the first accepted item).
    """

    id: str = field()
    name: str = field()
    category: RequirementCategory = field()
    evidence_type: EvidenceType = field()
    frequency_hint: str = field(default="")
    required: bool = field(default=True)

    # Declarative matching
    source: EvidenceSource | None = field(default=None)
    rule: MatchRule | None = field(default=None)
    description: str | None = field(default=None)
    unmet_description: str | None = field(default=None)
    satisfied_by_coshh: bool = field(default=False)
