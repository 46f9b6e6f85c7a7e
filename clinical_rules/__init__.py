"""
Clinical Rule Evaluation Engine

Declarative rule evaluation for antenatal and emergency-referral workflows:

  - Trigger rule evaluation (partner-violence risk screening)
  - Emergency referral checklist prioritization and completion tracking
  - Vital-sign, examination and lab range validation with gestational-age context

Usage:
    from clinical_rules import evaluate_ipv_risk, organize_referral_checklist

    assessment = evaluate_ipv_risk({"Ongoing anxiety"})
    checklist = organize_referral_checklist(["Convulsing"])
"""
from .config import settings
from .utils import setup_logging

setup_logging(settings.log_level, settings.log_file)

from .core.rules import (  # noqa: E402
    RiskAssessment,
    RiskLevel,
    AlertSeverity,
    TriggerRuleEvaluator,
    evaluate_ipv_risk,
)
from .core.checklist import (  # noqa: E402
    ChecklistPrioritizer,
    CompletionTracker,
    OrganizedChecklist,
    organize_referral_checklist,
)
from .core.validation import (  # noqa: E402
    ValidationResult,
    validate_vital_signs,
    validate_maternal_exam,
    validate_fetal_findings,
    validate_lab_results,
    validate_gestational_age,
)

__version__ = "1.0.0"

__all__ = [
    "RiskAssessment",
    "RiskLevel",
    "AlertSeverity",
    "TriggerRuleEvaluator",
    "evaluate_ipv_risk",
    "ChecklistPrioritizer",
    "CompletionTracker",
    "OrganizedChecklist",
    "organize_referral_checklist",
    "ValidationResult",
    "validate_vital_signs",
    "validate_maternal_exam",
    "validate_fetal_findings",
    "validate_lab_results",
    "validate_gestational_age",
]
