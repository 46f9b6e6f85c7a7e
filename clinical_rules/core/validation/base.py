"""
Range Validation: Base Types

Two outcome kinds, never conflated:
  - errors:   value outside physiologically possible limits or missing
              structural input. Blocks form submission upstream.
  - warnings: value is abnormal but plausible. Advisory only.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class ValidationResult:
    """Produced fresh per call; immutable after return."""
    errors: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


class BandStatus(str, Enum):
    NORMAL        = "normal"
    LOW           = "low"
    HIGH          = "high"
    CRITICAL_LOW  = "critical_low"
    CRITICAL_HIGH = "critical_high"
    IMPLAUSIBLE   = "implausible"


@dataclass(frozen=True)
class ThresholdBand:
    """
    Nested limits for one numeric field.

        min / max                   hard physiological limits (outside -> error)
        warning_min / warning_max   expected range (outside -> warning)
        critical_min                critical when value < critical_min
        critical_max                critical when value >= critical_max

    Any limit may be None (not checked).
    """
    unit: str
    min: Optional[float] = None
    max: Optional[float] = None
    warning_min: Optional[float] = None
    warning_max: Optional[float] = None
    critical_min: Optional[float] = None
    critical_max: Optional[float] = None

    def classify(self, value: float) -> BandStatus:
        if (self.min is not None and value < self.min) or (self.max is not None and value > self.max):
            return BandStatus.IMPLAUSIBLE
        if self.critical_max is not None and value >= self.critical_max:
            return BandStatus.CRITICAL_HIGH
        if self.critical_min is not None and value < self.critical_min:
            return BandStatus.CRITICAL_LOW
        if self.warning_max is not None and value > self.warning_max:
            return BandStatus.HIGH
        if self.warning_min is not None and value < self.warning_min:
            return BandStatus.LOW
        return BandStatus.NORMAL

    def describe_limits(self) -> str:
        return f"{_fmt(self.min)}-{_fmt(self.max)} {self.unit}"


def _fmt(value: Optional[float]) -> str:
    if value is None:
        return "?"
    return f"{value:g}" if float(value).is_integer() else f"{value:.2f}".rstrip("0").rstrip(".")


class ResultBuilder:
    """Accumulates errors and warnings for one validation call."""

    def __init__(self):
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def error(self, message: str) -> None:
        self.errors.append(message)

    def warning(self, message: str) -> None:
        self.warnings.append(message)

    def extend(self, result: ValidationResult) -> None:
        self.errors.extend(result.errors)
        self.warnings.extend(result.warnings)

    def build(self) -> ValidationResult:
        return ValidationResult(errors=tuple(self.errors), warnings=tuple(self.warnings))


def check_value(
    builder: ResultBuilder,
    label: str,
    value: Optional[float],
    band: ThresholdBand,
    low: str = "below expected range",
    high: str = "above expected range",
    critical_low: Optional[str] = None,
    critical_high: Optional[str] = None,
) -> BandStatus:
    """
    Check one value against a band, recording an error or a warning.

    ``value=None`` means "not recorded" and is skipped. Critical findings are
    prefixed "CRITICAL:"; when no critical wording is given the plain low/high
    wording is reused.
    """
    if value is None:
        return BandStatus.NORMAL

    status = band.classify(value)
    shown = f"{_fmt(value)} {band.unit}".rstrip()

    if status is BandStatus.IMPLAUSIBLE:
        builder.error(
            f"{label} {shown} is outside the physiologically possible range "
            f"({band.describe_limits()}) - verify reading"
        )
    elif status is BandStatus.CRITICAL_HIGH:
        builder.warning(f"CRITICAL: {label} {shown} - {critical_high or high}")
    elif status is BandStatus.CRITICAL_LOW:
        builder.warning(f"CRITICAL: {label} {shown} - {critical_low or low}")
    elif status is BandStatus.HIGH:
        builder.warning(f"{label} {shown} - {high}")
    elif status is BandStatus.LOW:
        builder.warning(f"{label} {shown} - {low}")
    return status
