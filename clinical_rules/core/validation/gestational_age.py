"""
Gestational Age

Shared context provider for the trimester- and GA-dependent range checks.
GA is counted from the last menstrual period (LMP); when only the estimated
due date (EDD) is known, LMP is derived with Naegele's rule (EDD - 280 days).
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Union

from .base import ResultBuilder, ValidationResult

PREGNANCY_LENGTH_DAYS = 280
MAX_GESTATION_WEEKS = 45

# Discrepancy tolerances between dating methods (days)
LMP_ULTRASOUND_TOLERANCE_DAYS = 14
SFH_ULTRASOUND_TOLERANCE_DAYS = 21

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class GestationalAge:
    weeks: int
    days: int

    @property
    def total_days(self) -> int:
        return self.weeks * 7 + self.days

    @property
    def trimester(self) -> int:
        return get_trimester(self.weeks)

    @classmethod
    def from_days(cls, total_days: int) -> "GestationalAge":
        return cls(weeks=total_days // 7, days=total_days % 7)

    def __str__(self) -> str:
        return f"{self.weeks} weeks, {self.days} days"


@dataclass(frozen=True)
class GestationalAgeResult(ValidationResult):
    gestational_age: Optional[GestationalAge] = None
    lmp: Optional[date] = None

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.gestational_age is not None:
            data["gestational_age"] = {
                "weeks": self.gestational_age.weeks,
                "days": self.gestational_age.days,
            }
        data["lmp"] = self.lmp.isoformat() if self.lmp else None
        return data


def _as_date(value: DateLike) -> date:
    return value.date() if isinstance(value, datetime) else value


def get_trimester(weeks: int) -> int:
    """1 below 14 weeks, 2 below 28 weeks, 3 from 28 weeks."""
    if weeks < 14:
        return 1
    if weeks < 28:
        return 2
    return 3


def estimated_due_date(lmp: DateLike) -> date:
    return _as_date(lmp) + timedelta(days=PREGNANCY_LENGTH_DAYS)


def validate_gestational_age(
    lmp: Optional[DateLike] = None,
    edd: Optional[DateLike] = None,
    now: Optional[DateLike] = None,
) -> GestationalAgeResult:
    """
    Compute gestational age from LMP, or from EDD when LMP is absent.

    Errors (no gestational age returned):
      - neither LMP nor EDD supplied
      - LMP after ``now``
      - more than 45 weeks elapsed since LMP
    """
    today = _as_date(now) if now is not None else date.today()
    builder = ResultBuilder()

    if lmp is None and edd is None:
        builder.error("LMP or EDD is required to calculate gestational age")
        return GestationalAgeResult(errors=tuple(builder.errors))

    lmp_date = _as_date(lmp) if lmp is not None else _as_date(edd) - timedelta(days=PREGNANCY_LENGTH_DAYS)

    if lmp_date > today:
        builder.error(f"LMP date {lmp_date.isoformat()} cannot be in the future")
        return GestationalAgeResult(errors=tuple(builder.errors), lmp=lmp_date)

    elapsed = (today - lmp_date).days
    if elapsed > MAX_GESTATION_WEEKS * 7:
        builder.error(
            f"Gestational age of {elapsed // 7} weeks exceeds {MAX_GESTATION_WEEKS} weeks - verify LMP/EDD"
        )
        return GestationalAgeResult(errors=tuple(builder.errors), lmp=lmp_date)

    ga = GestationalAge.from_days(elapsed)
    if ga.weeks >= 42:
        builder.warning(f"Post-term pregnancy ({ga}) - assess for induction")

    return GestationalAgeResult(
        warnings=tuple(builder.warnings),
        gestational_age=ga,
        lmp=lmp_date,
    )


def validate_gestational_age_consistency(
    lmp_ga: Optional[GestationalAge] = None,
    ultrasound_ga: Optional[GestationalAge] = None,
    sfh_ga: Optional[GestationalAge] = None,
) -> ValidationResult:
    """Warn when dating methods disagree beyond their tolerances. Ultrasound is the reference."""
    builder = ResultBuilder()

    if lmp_ga is not None and ultrasound_ga is not None:
        diff = abs(lmp_ga.total_days - ultrasound_ga.total_days)
        if diff > LMP_ULTRASOUND_TOLERANCE_DAYS:
            builder.warning(f"LMP and ultrasound dating differ by {diff} days")

    if sfh_ga is not None and ultrasound_ga is not None:
        diff = abs(sfh_ga.total_days - ultrasound_ga.total_days)
        if diff > SFH_ULTRASOUND_TOLERANCE_DAYS:
            builder.warning(
                f"SFH and ultrasound dating differ by {diff} days - possible IUGR or macrosomia"
            )

    return builder.build()
