"""
Range Validator

One validation function per observation category, each returning a fresh
ValidationResult:

    validate_vital_signs      temperature, pulse, respiration, SpO2, blood pressure
    validate_blood_pressure   systolic / diastolic + derived pulse pressure
    validate_maternal_exam    anthropometrics and symphysis-fundal height (GA context)
    validate_fetal_findings   fetal heart rate (trimester context), fetal movement
    validate_lab_results      haemoglobin (trimester context), glucose, OGTT, platelets

Inputs are already-parsed numbers; ``None`` means "not recorded" and is
skipped. Context-dependent checks are skipped when their context is absent.
NO exceptions for well-formed numeric input.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from clinical_rules.utils import get_logger
from . import ranges
from .base import BandStatus, ResultBuilder, ValidationResult, check_value
from .gestational_age import get_trimester

logger = get_logger(__name__)


# ── Observation records ──────────────────────────────────────────────────────

@dataclass
class VitalSigns:
    temperature: Optional[float] = None        # °C
    pulse_rate: Optional[float] = None         # bpm
    respiratory_rate: Optional[float] = None   # breaths/min
    oxygen_saturation: Optional[float] = None  # %
    systolic_bp: Optional[float] = None        # mmHg
    diastolic_bp: Optional[float] = None       # mmHg


@dataclass
class MaternalExamFindings:
    weight: Optional[float] = None                   # kg
    height: Optional[float] = None                   # cm
    bmi: Optional[float] = None                      # kg/m², derived from weight/height when absent
    muac: Optional[float] = None                     # mid-upper arm circumference, cm
    symphysis_fundal_height: Optional[float] = None  # cm


class FetalMovement(str, Enum):
    PRESENT = "present"
    REDUCED = "reduced"
    ABSENT  = "absent"


@dataclass
class FetalFindings:
    fetal_heart_rate: Optional[float] = None  # bpm
    fetal_movement: Optional[FetalMovement] = None


@dataclass
class LabResults:
    hemoglobin: Optional[float] = None            # g/dL
    random_blood_glucose: Optional[float] = None  # mmol/L
    ogtt_fasting: Optional[float] = None          # mmol/L
    ogtt_one_hour: Optional[float] = None         # mmol/L
    ogtt_two_hour: Optional[float] = None         # mmol/L
    platelets: Optional[float] = None             # x10^9/L


def _resolve_trimester(gestational_age_weeks: Optional[float], trimester: Optional[int]) -> Optional[int]:
    if trimester is not None:
        return trimester
    if gestational_age_weeks is not None:
        return get_trimester(int(gestational_age_weeks))
    return None


# ── Vital signs ──────────────────────────────────────────────────────────────

def validate_blood_pressure(systolic: Optional[float], diastolic: Optional[float]) -> ValidationResult:
    """
    Blood pressure checks.

    Each reading is checked against its hard limits. The pair is then graded
    as a whole (severe hypertension >= 160/110, hypertension >= 140/90,
    hypotension < 90/60). Pulse pressure (systolic - diastolic) is checked on
    its own: < 20 or > 100 mmHg is physiologically implausible.
    """
    builder = ResultBuilder()
    if systolic is None and diastolic is None:
        return builder.build()

    sys_status = _hard_limit_only(builder, "Systolic BP", systolic, ranges.SYSTOLIC_BP)
    dia_status = _hard_limit_only(builder, "Diastolic BP", diastolic, ranges.DIASTOLIC_BP)

    if systolic is None or diastolic is None:
        # Single reading: grade it alone
        label, value, status = (
            ("Systolic BP", systolic, sys_status) if systolic is not None
            else ("Diastolic BP", diastolic, dia_status)
        )
        _grade_single_pressure(builder, label, value, status)
        return builder.build()

    if systolic <= diastolic:
        builder.error(f"Systolic BP ({systolic:g}) must be greater than diastolic BP ({diastolic:g})")

    reading = f"{systolic:g}/{diastolic:g} mmHg"
    statuses = {sys_status, dia_status}
    if BandStatus.IMPLAUSIBLE not in statuses:
        if BandStatus.CRITICAL_HIGH in statuses:
            builder.warning(
                f"CRITICAL: Blood pressure {reading} - severe hypertension, "
                f"assess for severe pre-eclampsia and refer immediately"
            )
        elif BandStatus.HIGH in statuses:
            builder.warning(f"Blood pressure {reading} - hypertension, assess for pre-eclampsia")
        if BandStatus.LOW in statuses:
            builder.warning(f"Blood pressure {reading} - hypotension, assess for hemorrhage or dehydration")

    pulse_pressure = systolic - diastolic
    if pulse_pressure < ranges.PULSE_PRESSURE_NARROW:
        builder.warning(
            f"Narrow pulse pressure ({pulse_pressure:g} mmHg) - verify reading, "
            f"consider shock or cardiac tamponade"
        )
    elif pulse_pressure > ranges.PULSE_PRESSURE_WIDE:
        builder.warning(f"Wide pulse pressure ({pulse_pressure:g} mmHg) - verify reading")

    return builder.build()


def _hard_limit_only(builder: ResultBuilder, label: str, value: Optional[float], band) -> BandStatus:
    """Record only the hard-limit error; return the status for combined grading."""
    if value is None:
        return BandStatus.NORMAL
    status = band.classify(value)
    if status is BandStatus.IMPLAUSIBLE:
        check_value(builder, label, value, band)
    return status


def _grade_single_pressure(builder: ResultBuilder, label: str, value: float, status: BandStatus) -> None:
    if status is BandStatus.CRITICAL_HIGH:
        builder.warning(f"CRITICAL: {label} {value:g} mmHg - severe hypertension")
    elif status is BandStatus.HIGH:
        builder.warning(f"{label} {value:g} mmHg - hypertension, assess for pre-eclampsia")
    elif status is BandStatus.LOW:
        builder.warning(f"{label} {value:g} mmHg - hypotension")


def validate_vital_signs(vitals: VitalSigns) -> ValidationResult:
    builder = ResultBuilder()

    check_value(
        builder, "Temperature", vitals.temperature, ranges.TEMPERATURE,
        low="abnormal, hypothermia - check for shock",
        high="abnormal, fever present - investigate for infection",
        critical_high="hyperpyrexia, urgent cooling and sepsis assessment",
    )
    check_value(
        builder, "Pulse rate", vitals.pulse_rate, ranges.PULSE,
        low="bradycardia, verify and investigate",
        high="tachycardia, investigate cause",
        critical_high="marked tachycardia, assess for hemorrhage or sepsis",
    )
    check_value(
        builder, "Respiratory rate", vitals.respiratory_rate, ranges.RESPIRATORY_RATE,
        low="bradypnoea",
        high="tachypnoea",
        critical_high="respiratory distress",
    )
    check_value(
        builder, "Oxygen saturation", vitals.oxygen_saturation, ranges.OXYGEN_SATURATION,
        low="below normal, recheck and give oxygen if persistent",
        critical_low="hypoxaemia, give oxygen and refer",
    )

    builder.extend(validate_blood_pressure(vitals.systolic_bp, vitals.diastolic_bp))
    return builder.build()


# ── Maternal examination ─────────────────────────────────────────────────────

def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    height_m = height_cm / 100
    return round(weight_kg / (height_m * height_m), 1)


def validate_maternal_exam(
    exam: MaternalExamFindings,
    gestational_age_weeks: Optional[float] = None,
) -> ValidationResult:
    """
    Anthropometrics plus symphysis-fundal height.

    SFH is compared against GA only from 20 weeks: after 20 weeks SFH in cm
    approximates GA in weeks, and a difference beyond 3 cm is flagged.
    """
    builder = ResultBuilder()

    weight_status = check_value(
        builder, "Weight", exam.weight, ranges.WEIGHT, low="low maternal weight, nutritional assessment",
    )
    height_status = check_value(
        builder, "Height", exam.height, ranges.HEIGHT, low="short stature, assess for cephalopelvic disproportion",
    )

    bmi = exam.bmi
    if (
        bmi is None
        and exam.weight is not None
        and exam.height is not None
        and BandStatus.IMPLAUSIBLE not in (weight_status, height_status)
    ):
        bmi = calculate_bmi(exam.weight, exam.height)
    check_value(
        builder, "BMI", bmi, ranges.BMI,
        low="underweight, nutritional assessment required",
        high="overweight/obese, screen for gestational diabetes and hypertension",
        critical_low="severely underweight, nutritional assessment required",
        critical_high="requires specialist consultation",
    )

    check_value(builder, "MUAC", exam.muac, ranges.MUAC, low="undernutrition, refer for nutritional support")

    sfh = exam.symphysis_fundal_height
    sfh_status = check_value(builder, "Symphysis-fundal height", sfh, ranges.SYMPHYSIS_FUNDAL_HEIGHT)
    if (
        sfh is not None
        and sfh_status is not BandStatus.IMPLAUSIBLE
        and gestational_age_weeks is not None
        and gestational_age_weeks >= ranges.SFH_MIN_GESTATION_WEEKS
    ):
        difference = sfh - gestational_age_weeks
        if difference > ranges.SFH_TOLERANCE_CM:
            builder.warning(
                f"Symphysis-fundal height {sfh:g} cm is large for gestational age "
                f"({gestational_age_weeks:g} weeks) - assess for multiple pregnancy, "
                f"polyhydramnios or macrosomia"
            )
        elif difference < -ranges.SFH_TOLERANCE_CM:
            builder.warning(
                f"Symphysis-fundal height {sfh:g} cm is small for gestational age "
                f"({gestational_age_weeks:g} weeks) - assess for fetal growth restriction"
            )
    elif sfh is not None and gestational_age_weeks is None:
        logger.debug("SFH recorded without gestational age; GA comparison skipped")

    return builder.build()


# ── Fetal findings ───────────────────────────────────────────────────────────

def validate_fetal_findings(
    fetal: FetalFindings,
    gestational_age_weeks: Optional[float] = None,
    trimester: Optional[int] = None,
) -> ValidationResult:
    """
    Fetal heart rate bands depend on trimester (given directly or derived
    from GA). Without either, only the context-free plausibility limit applies.
    """
    builder = ResultBuilder()
    resolved = _resolve_trimester(gestational_age_weeks, trimester)
    band = ranges.FETAL_HEART_RATE_BY_TRIMESTER.get(resolved, ranges.FETAL_HEART_RATE_ABSOLUTE)

    check_value(
        builder, "Fetal heart rate", fetal.fetal_heart_rate, band,
        low="fetal bradycardia, investigate cause",
        high="fetal tachycardia, check maternal temperature and hydration",
        critical_low="fetal bradycardia, immediate obstetric review",
        critical_high="sustained fetal tachycardia, immediate obstetric review",
    )

    if fetal.fetal_movement is FetalMovement.ABSENT:
        builder.warning("CRITICAL: Absent fetal movements - immediate CTG and ultrasound")
    elif fetal.fetal_movement is FetalMovement.REDUCED:
        builder.warning("Reduced fetal movements - CTG monitoring and kick-count education")

    return builder.build()


# ── Laboratory results ───────────────────────────────────────────────────────

def validate_lab_results(
    labs: LabResults,
    gestational_age_weeks: Optional[float] = None,
    trimester: Optional[int] = None,
) -> ValidationResult:
    builder = ResultBuilder()
    resolved = _resolve_trimester(gestational_age_weeks, trimester)

    check_value(
        builder, "Hemoglobin", labs.hemoglobin, ranges.hemoglobin_band(resolved),
        low="anaemia, iron and folic acid supplementation, recheck in 4 weeks",
        high="elevated, assess for dehydration",
        critical_low="severe anaemia, urgent referral for transfusion",
    )
    check_value(
        builder, "Random blood glucose", labs.random_blood_glucose, ranges.RANDOM_BLOOD_GLUCOSE,
        high="elevated, arrange OGTT",
        critical_low="hypoglycaemia, give glucose",
        critical_high="hyperglycaemia, assess for diabetes",
    )

    ogtt = (
        ("OGTT fasting glucose", labs.ogtt_fasting, ranges.OGTT_FASTING),
        ("OGTT 1-hour glucose", labs.ogtt_one_hour, ranges.OGTT_ONE_HOUR),
        ("OGTT 2-hour glucose", labs.ogtt_two_hour, ranges.OGTT_TWO_HOUR),
    )
    ogtt_abnormal = False
    for label, value, band in ogtt:
        status = check_value(
            builder, label, value, band,
            high="above IADPSG threshold",
            critical_high="overt diabetes range",
        )
        ogtt_abnormal = ogtt_abnormal or status in (BandStatus.HIGH, BandStatus.CRITICAL_HIGH)
    if ogtt_abnormal:
        builder.warning("Gestational diabetes criteria met - dietary counselling and glucose monitoring")

    check_value(
        builder, "Platelets", labs.platelets, ranges.PLATELETS,
        low="thrombocytopenia",
        high="thrombocytosis",
        critical_low="severe thrombocytopenia, assess for HELLP syndrome",
    )

    return builder.build()
