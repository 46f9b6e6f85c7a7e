"""
Checklist Prioritizer

Maps observed danger signs to a tiered referral checklist:

    signs -> categories -> primary category (precedence table) -> profile -> items

With no recognised sign, every catalog item is returned as ``standard`` and
no clinical focus is set: nothing hidden, nothing falsely prioritised.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Set, Tuple

from clinical_rules.core.rules.base import sign_id
from clinical_rules.utils import get_logger
from .base import (
    CategoryPriorityProfile,
    ChecklistCatalog,
    ChecklistItem,
    ChecklistTier,
    OrganizedChecklist,
)

logger = get_logger(__name__)


class ChecklistPrioritizer:
    """
    Builds tiered checklists from a ChecklistCatalog.

    Stateless, safe to call from multiple threads / concurrent requests.
    """

    def __init__(self, catalog: ChecklistCatalog):
        self.catalog = catalog

    # ── Category resolution ──────────────────────────────────────────────────

    def categories_for(self, observed_signs: Optional[Iterable[str]]) -> Tuple[Set[str], List[str]]:
        """Return (implicated categories, unrecognized signs in input order)."""
        categories: Set[str] = set()
        unrecognized: List[str] = []
        for sign in observed_signs or ():
            key = sign_id(sign)
            category = self.catalog.sign_categories.get(key)
            if category is None:
                if key not in unrecognized:
                    unrecognized.append(key)
                continue
            categories.add(category)
        return categories, unrecognized

    def primary_category(self, observed_signs: Optional[Iterable[str]]) -> Optional[str]:
        """The most severe implicated category, or None when no sign is recognised."""
        categories, _ = self.categories_for(observed_signs)
        return self._resolve(categories)

    def _resolve(self, categories: Set[str]) -> Optional[str]:
        if not categories:
            return None
        return min(categories, key=self.catalog.category_rank)

    def get_priority_profile(self, observed_signs: Optional[Iterable[str]]) -> Optional[CategoryPriorityProfile]:
        category = self.primary_category(observed_signs)
        if category is None:
            return None
        return self.catalog.profiles[category]

    # ── Checklist assembly ───────────────────────────────────────────────────

    def organize(self, observed_signs: Optional[Iterable[str]]) -> OrganizedChecklist:
        """
        Organize checklist items by priority for the observed danger signs.

        Args:
            observed_signs: Danger sign identifiers. Unmapped signs are dropped
                            and reported in ``unrecognized_signs``.

        Returns:
            OrganizedChecklist with critical / secondary / standard tiers.
        """
        categories, unrecognized = self.categories_for(observed_signs)
        if unrecognized:
            logger.debug(f"[{self.catalog.name}] ignoring unrecognized signs: {unrecognized}")

        category = self._resolve(categories)
        if category is None:
            return OrganizedChecklist(
                standard=self.all_items(),
                unrecognized_signs=tuple(unrecognized),
            )

        if len(categories) > 1:
            logger.debug(
                f"[{self.catalog.name}] categories {sorted(categories)} -> primary '{category}'"
            )

        profile = self.catalog.profiles[category]
        return OrganizedChecklist(
            critical=self._expand(profile, ChecklistTier.CRITICAL),
            secondary=self._expand(profile, ChecklistTier.SECONDARY),
            standard=self._expand(profile, ChecklistTier.STANDARD),
            clinical_focus=profile.clinical_focus,
            primary_category=category,
            unrecognized_signs=tuple(unrecognized),
        )

    def _expand(self, profile: CategoryPriorityProfile, tier: ChecklistTier) -> Tuple[ChecklistItem, ...]:
        items = []
        for item_id in profile.tier(tier):
            item = self.catalog.item(item_id)
            if item is None:
                logger.warning(
                    f"[{self.catalog.name}] profile '{profile.category}' lists unknown item "
                    f"'{item_id}' in {tier.value} tier; dropped"
                )
                continue
            items.append(item)
        return tuple(items)

    def all_items(self) -> Tuple[ChecklistItem, ...]:
        return self.catalog.items


def default_referral_prioritizer() -> ChecklistPrioritizer:
    """Prioritizer over the process-wide referral catalog (embedded or configured file)."""
    from clinical_rules.core.catalog import default_checklist_catalog
    return ChecklistPrioritizer(default_checklist_catalog())


def organize_referral_checklist(observed_signs: Optional[Iterable[str]]) -> OrganizedChecklist:
    """Organize the emergency referral checklist for the observed danger signs."""
    return default_referral_prioritizer().organize(observed_signs)
