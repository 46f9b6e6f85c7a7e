"""
Catalog file schema.

Pydantic models mirroring the YAML/JSON catalog files. They only check shape
and types; cross-references (baseline rule exists, profile items exist, ...)
are checked by the domain catalogs built from them.
"""
from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from clinical_rules.core.checklist.base import (
    CategoryPriorityProfile,
    ChecklistCatalog,
    ChecklistItem,
    ChecklistSection,
)
from clinical_rules.core.rules.base import (
    AlertSeverity,
    RiskLevel,
    RuleCatalog,
    RuleDefinition,
)


# ── Rule catalogs ────────────────────────────────────────────────────────────

class RuleModel(BaseModel):
    id: str
    code: str
    name: str
    rationale: str = ""
    trigger_set: List[str] = Field(default_factory=list)
    risk_level: RiskLevel
    alert_severity: AlertSeverity
    alert_title: str
    alert_message: str
    recommendations: List[str] = Field(default_factory=list)
    safety_considerations: List[str] = Field(default_factory=list)
    referral_required: bool = False
    urgent_action: bool = False
    reference: str = ""

    def to_definition(self) -> RuleDefinition:
        return RuleDefinition(
            id=self.id,
            code=self.code,
            name=self.name,
            rationale=self.rationale,
            trigger_set=tuple(self.trigger_set),
            risk_level=self.risk_level,
            alert_severity=self.alert_severity,
            alert_title=self.alert_title,
            alert_message=self.alert_message,
            recommendations=tuple(self.recommendations),
            safety_considerations=tuple(self.safety_considerations),
            referral_required=self.referral_required,
            urgent_action=self.urgent_action,
            reference=self.reference,
        )


class RuleCatalogModel(BaseModel):
    """Top-level document of a rule catalog file."""

    name: str
    version: str
    baseline_code: str
    default_code: str
    no_signs_sentinel: str
    excluded_sentinels: List[str] = Field(default_factory=list)
    combination_threshold: int = 3
    rules: List[RuleModel]

    def to_catalog(self) -> RuleCatalog:
        return RuleCatalog(
            name=self.name,
            version=self.version,
            rules=tuple(rule.to_definition() for rule in self.rules),
            baseline_code=self.baseline_code,
            default_code=self.default_code,
            no_signs_sentinel=self.no_signs_sentinel,
            excluded_sentinels=frozenset(self.excluded_sentinels),
            combination_threshold=self.combination_threshold,
        )


# ── Checklist catalogs ───────────────────────────────────────────────────────

class ChecklistItemModel(BaseModel):
    id: str
    label: str
    section: ChecklistSection
    required: bool = False


class ProfileModel(BaseModel):
    clinical_focus: str
    critical: List[str] = Field(default_factory=list)
    secondary: List[str] = Field(default_factory=list)
    standard: List[str] = Field(default_factory=list)


class ChecklistCatalogModel(BaseModel):
    """
    Top-level document of a checklist catalog file.

    ``profiles`` is keyed by category; ``category_precedence`` lists the
    categories from most to least severe.
    """

    name: str
    version: str
    items: List[ChecklistItemModel]
    profiles: Dict[str, ProfileModel]
    sign_categories: Dict[str, str]
    category_precedence: List[str]

    def to_catalog(self) -> ChecklistCatalog:
        return ChecklistCatalog(
            name=self.name,
            version=self.version,
            items=tuple(
                ChecklistItem(id=i.id, label=i.label, section=i.section, required=i.required)
                for i in self.items
            ),
            profiles={
                category: CategoryPriorityProfile(
                    category=category,
                    clinical_focus=profile.clinical_focus,
                    critical=tuple(profile.critical),
                    secondary=tuple(profile.secondary),
                    standard=tuple(profile.standard),
                )
                for category, profile in self.profiles.items()
            },
            sign_categories=dict(self.sign_categories),
            category_precedence=tuple(self.category_precedence),
        )
