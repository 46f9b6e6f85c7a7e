"""
Referral Checklist: Base Types

Checklist items, per-category priority profiles and the immutable catalog
that binds them to observed signs. Consistency between profiles and items is
enforced when the catalog is built, so the prioritizer never meets an unknown
item id in a valid catalog.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from clinical_rules.utils import CatalogConfigurationError


class ChecklistSection(str, Enum):
    COMMUNICATION = "communication"
    PROCEDURES    = "procedures"
    MEDICATIONS   = "medications"
    VITALS        = "vitals"
    SPECIAL       = "special"
    FINAL         = "final"


class ChecklistTier(str, Enum):
    CRITICAL  = "critical"
    SECONDARY = "secondary"
    STANDARD  = "standard"


@dataclass(frozen=True)
class ChecklistItem:
    """One actionable item. Defined once in the catalog."""
    id: str
    label: str
    section: ChecklistSection
    required: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "section": self.section.value,
            "required": self.required,
        }


@dataclass(frozen=True)
class CategoryPriorityProfile:
    """Tiered item ordering for one danger-sign category."""
    category: str
    clinical_focus: str
    critical: Tuple[str, ...] = ()
    secondary: Tuple[str, ...] = ()
    standard: Tuple[str, ...] = ()

    def __post_init__(self):
        for tier in ChecklistTier:
            object.__setattr__(self, tier.value, tuple(getattr(self, tier.value)))

    def tier(self, tier: ChecklistTier) -> Tuple[str, ...]:
        return getattr(self, tier.value)

    @property
    def item_ids(self) -> Tuple[str, ...]:
        return self.critical + self.secondary + self.standard


@dataclass(frozen=True)
class OrganizedChecklist:
    """Prioritizer output: three tiers, plus the focus text of the resolved category."""
    critical: Tuple[ChecklistItem, ...] = ()
    secondary: Tuple[ChecklistItem, ...] = ()
    standard: Tuple[ChecklistItem, ...] = ()
    clinical_focus: Optional[str] = None
    primary_category: Optional[str] = None
    unrecognized_signs: Tuple[str, ...] = ()

    @property
    def all_items(self) -> Tuple[ChecklistItem, ...]:
        return self.critical + self.secondary + self.standard

    @property
    def item_ids(self) -> List[str]:
        return [item.id for item in self.all_items]

    def to_dict(self) -> dict:
        return {
            "critical": [i.to_dict() for i in self.critical],
            "secondary": [i.to_dict() for i in self.secondary],
            "standard": [i.to_dict() for i in self.standard],
            "clinical_focus": self.clinical_focus,
            "primary_category": self.primary_category,
            "unrecognized_signs": list(self.unrecognized_signs),
        }


@dataclass(frozen=True)
class ChecklistCatalog:
    """
    Immutable checklist configuration.

    Attributes:
        items:               Every checklist item, in section display order.
        profiles:            Category -> CategoryPriorityProfile.
        sign_categories:     Sign identifier -> category (many-to-one).
        category_precedence: Categories from most to least severe. Must list
                             every profiled category exactly once.
    """
    name: str
    version: str
    items: Tuple[ChecklistItem, ...]
    profiles: Mapping[str, CategoryPriorityProfile]
    sign_categories: Mapping[str, str]
    category_precedence: Tuple[str, ...]
    _items_by_id: Mapping[str, ChecklistItem] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(self, "profiles", MappingProxyType(dict(self.profiles)))
        object.__setattr__(self, "sign_categories", MappingProxyType(dict(self.sign_categories)))
        object.__setattr__(self, "category_precedence", tuple(self.category_precedence))
        object.__setattr__(
            self, "_items_by_id", MappingProxyType({item.id: item for item in self.items})
        )
        self._check_invariants()

    def _fail(self, message: str, **details) -> None:
        raise CatalogConfigurationError(message, catalog=self.name, details=details)

    def _check_invariants(self) -> None:
        if len(self._items_by_id) != len(self.items):
            ids = [item.id for item in self.items]
            self._fail("Duplicate checklist item id", duplicates=sorted({i for i in ids if ids.count(i) > 1}))

        for category, profile in self.profiles.items():
            if profile.category != category:
                self._fail(
                    f"Profile registered under '{category}' declares category '{profile.category}'",
                    category=category,
                )
            missing = [item_id for item_id in profile.item_ids if item_id not in self._items_by_id]
            if missing:
                self._fail(
                    f"Profile '{category}' references unknown checklist items",
                    category=category,
                    missing_items=missing,
                )

        precedence = self.category_precedence
        if len(set(precedence)) != len(precedence):
            self._fail("Category precedence lists a category twice", precedence=list(precedence))
        if set(precedence) != set(self.profiles):
            self._fail(
                "Category precedence must rank every profiled category exactly once",
                unranked=sorted(set(self.profiles) - set(precedence)),
                unprofiled=sorted(set(precedence) - set(self.profiles)),
            )

        orphans = sorted({c for c in self.sign_categories.values() if c not in self.profiles})
        if orphans:
            self._fail("Signs map to categories without a priority profile", categories=orphans)

    # ── Lookups ──────────────────────────────────────────────────────────────

    def item(self, item_id: str) -> Optional[ChecklistItem]:
        return self._items_by_id.get(item_id)

    def category_rank(self, category: str) -> int:
        """0 = most severe."""
        return self.category_precedence.index(category)

    def items_by_section(self) -> Dict[ChecklistSection, List[ChecklistItem]]:
        grouped: Dict[ChecklistSection, List[ChecklistItem]] = {}
        for item in self.items:
            grouped.setdefault(item.section, []).append(item)
        return grouped
