"""
Antenatal Range Validation

Usage:
    from clinical_rules.core.validation import validate_vital_signs, VitalSigns

    result = validate_vital_signs(VitalSigns(temperature=39.5, systolic_bp=165, diastolic_bp=70))
    result.valid      # True (abnormal, not impossible)
    result.warnings   # fever + severe hypertension
"""
from .base import BandStatus, ResultBuilder, ThresholdBand, ValidationResult, check_value
from .danger_signs import DangerSignCheck, validate_danger_sign_combinations
from .gestational_age import (
    GestationalAge,
    GestationalAgeResult,
    estimated_due_date,
    get_trimester,
    validate_gestational_age,
    validate_gestational_age_consistency,
)
from .obstetric import (
    ObstetricHistory,
    ObstetricHistoryResult,
    ObstetricRiskLevel,
    ParityCategory,
    calculate_parity_category,
    validate_obstetric_history,
)
from .range_validator import (
    FetalFindings,
    FetalMovement,
    LabResults,
    MaternalExamFindings,
    VitalSigns,
    calculate_bmi,
    validate_blood_pressure,
    validate_fetal_findings,
    validate_lab_results,
    validate_maternal_exam,
    validate_vital_signs,
)

__all__ = [
    "BandStatus",
    "ResultBuilder",
    "ThresholdBand",
    "ValidationResult",
    "check_value",
    "DangerSignCheck",
    "validate_danger_sign_combinations",
    "GestationalAge",
    "GestationalAgeResult",
    "estimated_due_date",
    "get_trimester",
    "validate_gestational_age",
    "validate_gestational_age_consistency",
    "ObstetricHistory",
    "ObstetricHistoryResult",
    "ObstetricRiskLevel",
    "ParityCategory",
    "calculate_parity_category",
    "validate_obstetric_history",
    "FetalFindings",
    "FetalMovement",
    "LabResults",
    "MaternalExamFindings",
    "VitalSigns",
    "calculate_bmi",
    "validate_blood_pressure",
    "validate_fetal_findings",
    "validate_lab_results",
    "validate_maternal_exam",
    "validate_vital_signs",
]
