"""
Emergency Referral Checklist

Usage:
    from clinical_rules.core.checklist import organize_referral_checklist, CompletionTracker

    checklist = organize_referral_checklist(["Convulsing", "Fever"])
    tracker = CompletionTracker.for_checklist(checklist)
    tracker.toggle("bp_monitored")
    tracker.progress(checklist.item_ids)
"""
from .base import (
    CategoryPriorityProfile,
    ChecklistCatalog,
    ChecklistItem,
    ChecklistSection,
    ChecklistTier,
    OrganizedChecklist,
)
from .prioritizer import (
    ChecklistPrioritizer,
    default_referral_prioritizer,
    organize_referral_checklist,
)
from .referral_catalog import (
    REFERRAL_CHECKLIST_CATALOG,
    DangerSign,
    DangerSignCategory,
)
from .tracker import ChecklistProgress, CompletionTracker, tier_progress

__all__ = [
    "CategoryPriorityProfile",
    "ChecklistCatalog",
    "ChecklistItem",
    "ChecklistSection",
    "ChecklistTier",
    "OrganizedChecklist",
    "ChecklistPrioritizer",
    "default_referral_prioritizer",
    "organize_referral_checklist",
    "REFERRAL_CHECKLIST_CATALOG",
    "DangerSign",
    "DangerSignCategory",
    "ChecklistProgress",
    "CompletionTracker",
    "tier_progress",
]
