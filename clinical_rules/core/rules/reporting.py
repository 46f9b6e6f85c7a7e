"""
Plain-text rendering and escalation helpers for RiskAssessments.
"""
from __future__ import annotations

from typing import List

from .base import RiskAssessment, RiskLevel

_IMMEDIATE_LEVELS = {RiskLevel.HIGH, RiskLevel.IMMEDIATE}


def requires_immediate_intervention(assessment: RiskAssessment) -> bool:
    """True when the assessment calls for same-visit safety intervention."""
    return assessment.urgent_action or assessment.risk_level in _IMMEDIATE_LEVELS


def format_risk_report(assessment: RiskAssessment, title: str = "IPV RISK ASSESSMENT") -> str:
    """
    Render an assessment as the text block pasted into the clinical note.

    Example:
        IPV RISK ASSESSMENT: MEDIUM

        Signs suggest psychological impact of IPV. ...

        CLINICAL RECOMMENDATIONS:
        1. Conduct comprehensive mental health screening
        ...
    """
    lines: List[str] = [
        f"{title}: {assessment.risk_level.value.upper()}",
        "",
        assessment.alert_message,
        "",
    ]

    if assessment.recommendations:
        lines.append("CLINICAL RECOMMENDATIONS:")
        lines.extend(f"{i}. {rec}" for i, rec in enumerate(assessment.recommendations, start=1))
        lines.append("")

    if assessment.safety_considerations:
        lines.append("SAFETY CONSIDERATIONS:")
        lines.extend(f"• {item}" for item in assessment.safety_considerations)
        lines.append("")

    if assessment.urgent_action:
        lines.append("URGENT ACTION REQUIRED - Implement immediately")
    elif assessment.referral_required:
        lines.append("REFERRAL RECOMMENDED - Coordinate specialized support")

    return "\n".join(lines).rstrip() + "\n"
