"""
Threshold bands for antenatal range validation.

Thresholds are module-level constants so they can be reviewed / tuned without
hunting through logic. Hard limits mark values that are physically
implausible (data-entry error); warning and critical limits mark values that
are abnormal but real.
"""
from __future__ import annotations

from typing import Dict, Optional

from .base import ThresholdBand

# ── Vital signs ──────────────────────────────────────────────────────────────
# Temperature: normal 35.5-37.5 °C, hard limits at ±10 % of that band
TEMPERATURE_NORMAL_MIN = 35.5
TEMPERATURE_NORMAL_MAX = 37.5
TEMPERATURE = ThresholdBand(
    unit="°C",
    min=TEMPERATURE_NORMAL_MIN * 0.9,
    max=TEMPERATURE_NORMAL_MAX * 1.1,
    warning_min=36.0,
    warning_max=37.9,
    critical_max=40.0,
)

PULSE = ThresholdBand(unit="bpm", min=40, max=200, warning_min=60, warning_max=100, critical_max=130)

RESPIRATORY_RATE = ThresholdBand(
    unit="breaths/min", min=6, max=60, warning_min=12, warning_max=24, critical_max=30
)

OXYGEN_SATURATION = ThresholdBand(unit="%", min=50, max=100, warning_min=95, critical_min=90)

# Blood pressure: severe range >= 160 / >= 110, hypertension >= 140 / >= 90
SYSTOLIC_BP = ThresholdBand(
    unit="mmHg", min=70, max=250, warning_min=90, warning_max=139, critical_max=160
)
DIASTOLIC_BP = ThresholdBand(
    unit="mmHg", min=40, max=150, warning_min=60, warning_max=89, critical_max=110
)

PULSE_PRESSURE_NARROW = 20
PULSE_PRESSURE_WIDE = 100

# ── Maternal examination ─────────────────────────────────────────────────────
WEIGHT = ThresholdBand(unit="kg", min=30, max=250, warning_min=45)
HEIGHT = ThresholdBand(unit="cm", min=100, max=220, warning_min=145)
BMI = ThresholdBand(
    unit="kg/m²", min=10, max=80, warning_min=18.5, warning_max=29.9, critical_min=15, critical_max=50
)
MUAC = ThresholdBand(unit="cm", min=10, max=60, warning_min=23)

SYMPHYSIS_FUNDAL_HEIGHT = ThresholdBand(unit="cm", min=5, max=50)
SFH_TOLERANCE_CM = 3
SFH_MIN_GESTATION_WEEKS = 20

# ── Fetal findings ───────────────────────────────────────────────────────────
# Context-free plausibility limits, applied with or without GA
FETAL_HEART_RATE_ABSOLUTE = ThresholdBand(unit="bpm", min=50, max=240)

# Early-pregnancy FHR peaks near 170-180 bpm; later the normal band is 110-160
FETAL_HEART_RATE_BY_TRIMESTER: Dict[int, ThresholdBand] = {
    1: ThresholdBand(unit="bpm", min=50, max=240, warning_min=110, warning_max=180, critical_min=100, critical_max=200),
    2: ThresholdBand(unit="bpm", min=50, max=240, warning_min=110, warning_max=160, critical_min=100, critical_max=180),
    3: ThresholdBand(unit="bpm", min=50, max=240, warning_min=110, warning_max=160, critical_min=100, critical_max=180),
}

# ── Laboratory results ───────────────────────────────────────────────────────
# Haemoglobin: WHO anaemia cut-off 11.0 g/dL, 10.5 g/dL in the second trimester
HEMOGLOBIN_SEVERE_ANAEMIA = 7.0
HEMOGLOBIN_ANAEMIA_DEFAULT = 11.0
HEMOGLOBIN_ANAEMIA_BY_TRIMESTER: Dict[int, float] = {1: 11.0, 2: 10.5, 3: 11.0}


def hemoglobin_band(trimester: Optional[int] = None) -> ThresholdBand:
    cutoff = HEMOGLOBIN_ANAEMIA_BY_TRIMESTER.get(trimester, HEMOGLOBIN_ANAEMIA_DEFAULT)
    return ThresholdBand(
        unit="g/dL",
        min=2,
        max=25,
        warning_min=cutoff,
        warning_max=18,
        critical_min=HEMOGLOBIN_SEVERE_ANAEMIA,
    )


RANDOM_BLOOD_GLUCOSE = ThresholdBand(
    unit="mmol/L", min=1, max=40, warning_max=7.7, critical_min=2.8, critical_max=11.1
)

# OGTT (IADPSG): fasting >= 5.1, 1 h >= 10.0, 2 h >= 8.5 diagnoses GDM
OGTT_FASTING = ThresholdBand(unit="mmol/L", min=1, max=40, warning_max=5.0, critical_max=7.0)
OGTT_ONE_HOUR = ThresholdBand(unit="mmol/L", min=1, max=40, warning_max=9.9)
OGTT_TWO_HOUR = ThresholdBand(unit="mmol/L", min=1, max=40, warning_max=8.4, critical_max=11.1)

PLATELETS = ThresholdBand(
    unit="x10^9/L", min=5, max=1500, warning_min=150, warning_max=450, critical_min=100
)
