"""
Danger-sign combination checks.

Flags combinations that cannot be reported together (an unconscious patient
cannot report symptoms) and suggests related signs to examine.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from clinical_rules.core.checklist.referral_catalog import DangerSign
from clinical_rules.core.rules.base import sign_id


@dataclass(frozen=True)
class DangerSignCheck:
    issues: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.issues

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "issues": list(self.issues),
            "recommendations": list(self.recommendations),
        }


def validate_danger_sign_combinations(signs: Iterable) -> DangerSignCheck:
    present = {sign_id(s) for s in signs}
    issues = []
    recommendations = []

    def has(sign: DangerSign) -> bool:
        return sign.value in present

    if has(DangerSign.UNCONSCIOUS):
        if has(DangerSign.SEVERE_HEADACHE):
            issues.append("Unconscious patient cannot report headache")
        if has(DangerSign.VISUAL_DISTURBANCE):
            issues.append("Unconscious patient cannot report visual symptoms")
        recommendations.append("Focus on objective signs for unconscious patient")

    if has(DangerSign.SEVERE_HEADACHE) and not has(DangerSign.VISUAL_DISTURBANCE):
        recommendations.append("Check for visual disturbances with severe headache (pre-eclampsia screen)")

    if has(DangerSign.FEVER) and not has(DangerSign.LOOKS_VERY_ILL):
        recommendations.append("Assess general appearance with fever")

    if has(DangerSign.VAGINAL_BLEEDING) and has(DangerSign.SEVERE_ABDOMINAL_PAIN):
        recommendations.append("URGENT: Possible placental abruption - immediate assessment required")

    return DangerSignCheck(issues=tuple(issues), recommendations=tuple(recommendations))
