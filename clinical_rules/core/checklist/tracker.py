"""
Checklist Completion Tracker

The only mutable object in the engine. One tracker belongs to one encounter
(one active referral workflow) and is driven by a single caller; it does no
locking.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from clinical_rules.utils import UnknownChecklistItemError
from .base import ChecklistItem, ChecklistTier, OrganizedChecklist


@dataclass
class ItemCompletion:
    completed: bool = False
    completed_at: Optional[datetime] = None


@dataclass(frozen=True)
class ChecklistProgress:
    completed: int
    total: int
    percentage: int

    def to_dict(self) -> dict:
        return {"completed": self.completed, "total": self.total, "percentage": self.percentage}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CompletionTracker:
    """
    Records which checklist items have been marked done.

    Args:
        item_ids: Optional universe of valid item ids. When given, toggling an
                  id outside it raises UnknownChecklistItemError.
        clock:    Timestamp source, defaults to UTC now.
    """

    def __init__(
        self,
        item_ids: Optional[Iterable[str]] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._allowed = frozenset(item_ids) if item_ids is not None else None
        self._clock = clock
        self._state: Dict[str, ItemCompletion] = {}

    @classmethod
    def for_checklist(cls, checklist: OrganizedChecklist, **kwargs) -> "CompletionTracker":
        return cls(item_ids=checklist.item_ids, **kwargs)

    # ── Mutation ─────────────────────────────────────────────────────────────

    def toggle(self, item_id: str) -> None:
        """Flip an item between done and not done, recording or clearing its timestamp."""
        self.set_completed(item_id, not self.is_complete(item_id))

    def set_completed(self, item_id: str, completed: bool) -> None:
        if self._allowed is not None and item_id not in self._allowed:
            raise UnknownChecklistItemError(item_id)
        if completed:
            self._state[item_id] = ItemCompletion(True, self._clock())
        else:
            self._state[item_id] = ItemCompletion(False, None)

    def reset(self) -> None:
        self._state.clear()

    # ── Queries ──────────────────────────────────────────────────────────────

    def is_complete(self, item_id: str) -> bool:
        entry = self._state.get(item_id)
        return entry is not None and entry.completed

    def completed_at(self, item_id: str) -> Optional[datetime]:
        entry = self._state.get(item_id)
        return entry.completed_at if entry is not None else None

    def completed_ids(self) -> List[str]:
        return sorted(item_id for item_id, entry in self._state.items() if entry.completed)

    def progress(self, all_item_ids: Iterable[str]) -> ChecklistProgress:
        """
        Completion over ``all_item_ids``. Completed ids outside that list are not
        counted. Percentage rounds half up and is 0 for an empty list.
        """
        universe = set(all_item_ids)
        total = len(universe)
        completed = sum(1 for item_id in universe if self.is_complete(item_id))
        percentage = math.floor(completed / total * 100 + 0.5) if total else 0
        return ChecklistProgress(completed=completed, total=total, percentage=percentage)

    def required_outstanding(self, items: Iterable[ChecklistItem]) -> List[ChecklistItem]:
        """Required items not yet marked done, in the given order."""
        return [item for item in items if item.required and not self.is_complete(item.id)]

    def snapshot(self) -> Dict[str, dict]:
        """Serializable completion state, for persistence by the caller."""
        return {
            item_id: {
                "completed": entry.completed,
                "completed_at": entry.completed_at.isoformat() if entry.completed_at else None,
            }
            for item_id, entry in self._state.items()
        }


def tier_progress(checklist: OrganizedChecklist, tracker: CompletionTracker) -> Dict[str, ChecklistProgress]:
    """Per-tier completion counts for an organized checklist."""
    return {
        tier.value: tracker.progress(item.id for item in getattr(checklist, tier.value))
        for tier in ChecklistTier
    }
