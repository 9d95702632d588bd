# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""UK EHO requirement catalog for hospitality venues.

The catalog is a declarative table. Each entry names its evidence type and,
where the type needs one, the evidence source and ``MatchRule`` that decide
whether the requirement is satisfied.
"""

from collections.abc import Sequence
from types import MappingProxyType

from beartype import beartype

from ..models.evidence import EvidenceSource
from ..models.requirement import (
    EvidenceType,
    MatchRule,
    RequirementCategory,
    RequirementDefinition,
)

CATALOG_VERSION = "2025.1"

_FOOD = RequirementCategory.FOOD_SAFETY
_HS = RequirementCategory.HEALTH_AND_SAFETY
_FIRE = RequirementCategory.FIRE_SAFETY
_TRAINING = RequirementCategory.TRAINING
_CLEANING = RequirementCategory.CLEANING
_EQUIPMENT = RequirementCategory.EQUIPMENT
_LEGAL = RequirementCategory.LEGAL
_COMPLIANCE = RequirementCategory.COMPLIANCE


def _document(
    req_id: str,
    name: str,
    category: RequirementCategory,
    frequency: str,
    *,
    satisfied_by_coshh: bool = False,
) -> RequirementDefinition:
    return RequirementDefinition(
        id=req_id,
        name=name,
        category=category,
        evidence_type=EvidenceType.DOCUMENT,
        frequency_hint=frequency,
        source=EvidenceSource.DOCUMENTS,
        satisfied_by_coshh=satisfied_by_coshh,
    )


def _training(
    req_id: str,
    name: str,
    category: RequirementCategory,
    frequency: str,
    *keywords: str,
) -> RequirementDefinition:
    return RequirementDefinition(
        id=req_id,
        name=name,
        category=category,
        evidence_type=EvidenceType.TRAINING,
        frequency_hint=frequency,
        source=EvidenceSource.TRAINING,
        rule=MatchRule(attribute="course", contains_any=keywords),
    )


def _assessment(
    req_id: str, name: str, category: RequirementCategory, rule: MatchRule
) -> RequirementDefinition:
    return RequirementDefinition(
        id=req_id,
        name=name,
        category=category,
        evidence_type=EvidenceType.ASSESSMENT,
        frequency_hint="Annual review",
        source=EvidenceSource.RISK_ASSESSMENTS,
        rule=rule,
    )


def _completion(
    req_id: str,
    name: str,
    category: RequirementCategory,
    frequency: str,
    rule: MatchRule,
) -> RequirementDefinition:
    return RequirementDefinition(
        id=req_id,
        name=name,
        category=category,
        evidence_type=EvidenceType.COMPLETION,
        frequency_hint=frequency,
        source=EvidenceSource.TASK_COMPLETIONS,
        rule=rule,
    )


def _name_contains(*keywords: str) -> MatchRule:
    return MatchRule(attribute="name", contains_any=keywords)


_REQUIREMENTS: tuple[RequirementDefinition, ...] = (
    # Food safety policies and documents
    _document("fs-policy", "Food Safety Policy", _FOOD, "Annual review"),
    _document(
        "haccp-plan",
        "HACCP Plan / Food Safety Management System",
        _FOOD,
        "Annual review",
    ),
    _document("allergen-policy", "Allergen Management Policy", _FOOD, "Annual review"),
    _training(
        "food-hygiene-training",
        "Food Hygiene Training Records (Level 2+)",
        _FOOD,
        "All food handlers",
        "food",
        "hygiene",
    ),
    _training(
        "allergen-training", "Allergen Awareness Training", _FOOD, "All staff", "allergen"
    ),
    # Food safety records
    RequirementDefinition(
        id="temp-logs",
        name="Temperature Logs (30 days)",
        category=_FOOD,
        evidence_type=EvidenceType.RECORD,
        frequency_hint="Daily",
        source=EvidenceSource.TEMPERATURE_LOGS,
        description="{matched} temperature logs (30 days)",
    ),
    _completion(
        "fridge-temp",
        "Fridge/Freezer Temperature Records",
        _FOOD,
        "Daily",
        _name_contains("fridge", "freezer", "temperature"),
    ),
    _completion(
        "hot-holding",
        "Hot Holding Temperature Records",
        _FOOD,
        "During service",
        _name_contains("hot holding"),
    ),
    _completion(
        "opening-checklist",
        "Opening Checklist Records",
        _FOOD,
        "Daily",
        _name_contains("opening"),
    ),
    _completion(
        "closing-checklist",
        "Closing Checklist Records",
        _FOOD,
        "Daily",
        _name_contains("closing"),
    ),
    # Health and safety policies and documents
    _document("hs-policy", "Health & Safety Policy", _HS, "Annual review"),
    _document("hs-appointment", "Competent Person Appointment Letter", _HS, "Annual"),
    RequirementDefinition(
        id="accident-book",
        name="Accident Book / Incident Log",
        category=_HS,
        evidence_type=EvidenceType.RECORD,
        frequency_hint="As occurs",
        source=EvidenceSource.INCIDENTS,
        description="{matched} incident records",
    ),
    RequirementDefinition(
        id="riddor-records",
        name="RIDDOR Reportable Incident Records",
        category=_HS,
        evidence_type=EvidenceType.RECORD,
        frequency_hint="As occurs",
        source=EvidenceSource.INCIDENTS,
        rule=MatchRule(attribute="riddor_reportable", equals=True),
        description="{matched} RIDDOR reportable incidents",
    ),
    # Risk assessments
    _assessment(
        "general-ra",
        "General Risk Assessment",
        _HS,
        MatchRule(attribute="template_type", equals="general"),
    ),
    _assessment(
        "coshh-ra",
        "COSHH Risk Assessments",
        _HS,
        MatchRule(attribute="template_type", equals="coshh"),
    ),
    _assessment(
        "manual-handling-ra",
        "Manual Handling Risk Assessment",
        _HS,
        MatchRule(attribute="title", contains_any=("manual",)),
    ),
    _assessment(
        "fire-ra",
        "Fire Risk Assessment",
        _FIRE,
        MatchRule(attribute="title", contains_any=("fire",)),
    ),
    # COSHH data
    _document(
        "coshh-register",
        "COSHH Register / Chemical Inventory",
        _HS,
        "Updated as chemicals change",
        satisfied_by_coshh=True,
    ),
    _document(
        "coshh-sheets",
        "COSHH Data Sheets (SDS/MSDS)",
        _HS,
        "One per chemical",
        satisfied_by_coshh=True,
    ),
    # Fire safety
    _document("fire-policy", "Fire Safety Policy", _FIRE, "Annual review"),
    _completion(
        "fire-alarm-tests",
        "Fire Alarm Test Records",
        _FIRE,
        "Weekly",
        _name_contains("fire alarm"),
    ),
    _completion(
        "fire-extinguisher",
        "Fire Extinguisher Inspection Records",
        _FIRE,
        "Monthly",
        _name_contains("fire extinguisher"),
    ),
    _completion(
        "emergency-exits",
        "Emergency Exit & Assembly Point Checks",
        _FIRE,
        "Monthly",
        _name_contains("emergency", "exit"),
    ),
    _completion(
        "emergency-lighting",
        "Emergency Lighting Test Records",
        _FIRE,
        "Monthly",
        _name_contains("emergency lighting"),
    ),
    # Training and competency
    _document(
        "training-matrix",
        "Training Matrix / Competency Records",
        _TRAINING,
        "Updated quarterly",
    ),
    _training(
        "hs-training",
        "Health & Safety Training Records",
        _TRAINING,
        "All staff",
        "safety",
        "health",
    ),
    _training(
        "fire-training", "Fire Safety Training Records", _TRAINING, "All staff", "fire"
    ),
    _training(
        "first-aid",
        "First Aid Training Certificates",
        _TRAINING,
        "At least one per site",
        "first aid",
    ),
    # Cleaning and hygiene
    _document("cleaning-schedule", "Cleaning Schedule", _CLEANING, "Updated as needed"),
    _completion(
        "cleaning-records",
        "Cleaning Checklist Records (30 days)",
        _CLEANING,
        "Daily",
        MatchRule(attribute="category", equals="cleaning"),
    ),
    _completion(
        "pest-control",
        "Pest Control Records / Log",
        _CLEANING,
        "Weekly",
        _name_contains("pest"),
    ),
    # Equipment and maintenance
    RequirementDefinition(
        id="pat-tests",
        name="PAT Test Records / Certificates",
        category=_EQUIPMENT,
        evidence_type=EvidenceType.RECORD,
        frequency_hint="Annual for portable appliances",
        source=EvidenceSource.PAT_EQUIPMENT,
        rule=MatchRule(attribute="has_current_test_label", equals=True),
        description="{matched} of {total} appliances with current test labels",
        unmet_description="{total} appliances found but none have current test labels",
    ),
    RequirementDefinition(
        id="equipment-maintenance",
        name="Equipment Maintenance Records",
        category=_EQUIPMENT,
        evidence_type=EvidenceType.RECORD,
        frequency_hint="Inferred from maintenance / servicing / PPM task names",
        source=EvidenceSource.TASK_COMPLETIONS,
        rule=_name_contains("maintenance", "servicing", "ppm"),
        description=(
            "{matched} maintenance completions (30 days, inferred from task names)"
        ),
        unmet_description="No task completions named maintenance, servicing or PPM",
    ),
    _document(
        "gas-safety", "Gas Safety Certificate (if applicable)", _EQUIPMENT, "Annual"
    ),
    _document(
        "electrical-safety",
        "Electrical Installation Certificate",
        _EQUIPMENT,
        "5-yearly",
    ),
    # Legal and insurance
    _document("public-liability", "Public Liability Insurance", _LEGAL, "Annual renewal"),
    _document(
        "employers-liability", "Employers Liability Insurance", _LEGAL, "Annual renewal"
    ),
    _document("premises-licence", "Premises Licence (if applicable)", _LEGAL, "Valid"),
    _document("food-registration", "Food Business Registration", _LEGAL, "Valid"),
    # Additional compliance
    _document(
        "sop-library",
        "Standard Operating Procedures (SOPs)",
        _COMPLIANCE,
        "Updated as needed",
    ),
    _document(
        "waste-management",
        "Waste Management Policy / Records",
        _COMPLIANCE,
        "Annual review",
    ),
    _document(
        "staff-handbook",
        "Staff Handbook / Employment Policies",
        _COMPLIANCE,
        "Updated as needed",
    ),
)


def _index(
    requirements: Sequence[RequirementDefinition],
) -> MappingProxyType[str, RequirementDefinition]:
    index: dict[str, RequirementDefinition] = {}
    for requirement in requirements:
        if requirement.id in index:
            raise ValueError(f"Duplicate requirement id in catalog: {requirement.id}")
        index[requirement.id] = requirement
    return MappingProxyType(index)


_BY_ID = _index(_REQUIREMENTS)


@beartype
def list_requirements() -> tuple[RequirementDefinition, ...]:
    """Return the catalog in its fixed presentation order."""
    return _REQUIREMENTS


@beartype
def get_requirement(requirement_id: str) -> RequirementDefinition | None:
    """Look up a catalog entry by id."""
    return _BY_ID.get(requirement_id)


@beartype
def requirements_by_category(
    requirements: Sequence[RequirementDefinition] | None = None,
) -> dict[RequirementCategory, tuple[RequirementDefinition, ...]]:
    """Group requirements by category, preserving first-seen order."""
    grouped: dict[RequirementCategory, list[RequirementDefinition]] = {}
    for requirement in requirements if requirements is not None else _REQUIREMENTS:
        grouped.setdefault(requirement.category, []).append(requirement)
    return {category: tuple(items) for category, items in grouped.items()}
