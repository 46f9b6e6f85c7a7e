"""
Obstetric History Validation

GPAL record (gravida, para, abortions, living children) plus a parity-based
risk grading. Structural errors (out-of-range counts, impossible totals) make
the result invalid; the risk grading is only computed for valid histories.

Usage:
    result = validate_obstetric_history(ObstetricHistory(gravida=5, para=4, abortions=0, living_children=4))
    result.parity_category   # ParityCategory.MULTIPARA
    result.risk_level        # ObstetricRiskLevel.MODERATE
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from clinical_rules.utils import get_logger
from .base import ResultBuilder, ValidationResult

logger = get_logger(__name__)

# Hard bounds: field -> (min, max)
GRAVIDA_BOUNDS = (1, 20)
PARA_BOUNDS = (0, 15)
ABORTIONS_BOUNDS = (0, 10)
LIVING_CHILDREN_BOUNDS = (0, 15)

GRAND_MULTIGRAVIDA_THRESHOLD = 5
HIGH_PARITY_THRESHOLD = 6
RECURRENT_LOSS_THRESHOLD = 3
PERINATAL_LOSS_RATE_THRESHOLD = 20.0  # percent, applied when para >= 2


class ParityCategory(str, Enum):
    NULLIPARA       = "nullipara"
    PRIMIPARA       = "primipara"
    MULTIPARA       = "multipara"
    GRAND_MULTIPARA = "grand_multipara"


class ObstetricRiskLevel(str, Enum):
    LOW      = "low"
    MODERATE = "moderate"
    HIGH     = "high"


_RISK_ORDER = {
    ObstetricRiskLevel.LOW:      1,
    ObstetricRiskLevel.MODERATE: 2,
    ObstetricRiskLevel.HIGH:     3,
}


@dataclass
class ObstetricHistory:
    gravida: int
    para: int
    abortions: int = 0
    living_children: int = 0


@dataclass(frozen=True)
class ObstetricHistoryResult(ValidationResult):
    parity_category: Optional[ParityCategory] = None
    risk_level: Optional[ObstetricRiskLevel] = None
    recommendations: Tuple[str, ...] = ()
    requires_specialist_consultation: bool = False

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            "parity_category": self.parity_category.value if self.parity_category else None,
            "risk_level": self.risk_level.value if self.risk_level else None,
            "recommendations": list(self.recommendations),
            "requires_specialist_consultation": self.requires_specialist_consultation,
        })
        return data


def calculate_parity_category(para: int) -> ParityCategory:
    if para == 0:
        return ParityCategory.NULLIPARA
    if para == 1:
        return ParityCategory.PRIMIPARA
    if para <= 4:
        return ParityCategory.MULTIPARA
    return ParityCategory.GRAND_MULTIPARA


def _check_bounds(builder: ResultBuilder, label: str, value: int, bounds: Tuple[int, int]) -> None:
    low, high = bounds
    if value < low:
        builder.error(f"{label} cannot be less than {low}")
    elif value > high:
        builder.error(f"{label} cannot exceed {high}")


def validate_obstetric_history(history: ObstetricHistory) -> ObstetricHistoryResult:
    builder = ResultBuilder()

    _check_bounds(builder, "Gravida", history.gravida, GRAVIDA_BOUNDS)
    _check_bounds(builder, "Para", history.para, PARA_BOUNDS)
    _check_bounds(builder, "Abortions", history.abortions, ABORTIONS_BOUNDS)
    _check_bounds(builder, "Living children", history.living_children, LIVING_CHILDREN_BOUNDS)

    if history.para + history.abortions > history.gravida:
        builder.error(
            f"Para ({history.para}) plus abortions ({history.abortions}) "
            f"cannot exceed gravida ({history.gravida})"
        )
    if history.living_children > history.para:
        builder.error(
            f"Living children ({history.living_children}) cannot exceed para ({history.para})"
        )

    if builder.errors:
        logger.debug(f"Obstetric history rejected: {builder.errors}")
        return ObstetricHistoryResult(errors=tuple(builder.errors))

    category = calculate_parity_category(history.para)
    risk = ObstetricRiskLevel.LOW
    specialist = False
    recommendations = []

    def raise_risk(level: ObstetricRiskLevel) -> None:
        nonlocal risk
        if _RISK_ORDER[level] > _RISK_ORDER[risk]:
            risk = level

    if history.gravida >= GRAND_MULTIGRAVIDA_THRESHOLD:
        builder.warning(f"Grand multiparity (gravida {history.gravida}, >= 5 pregnancies) identified")
        recommendations.append("Enhanced monitoring required")
        recommendations.append("Delivery planning at tertiary care facility")
        raise_risk(ObstetricRiskLevel.MODERATE)
        specialist = True

    if history.para > HIGH_PARITY_THRESHOLD:
        builder.warning(f"High parity ({history.para} births, > 6) - increased obstetric risks")
        recommendations.append("Specialist obstetric consultation required")
        raise_risk(ObstetricRiskLevel.HIGH)
        specialist = True

    if history.abortions >= RECURRENT_LOSS_THRESHOLD:
        builder.warning(f"Recurrent pregnancy loss ({history.abortions} losses) identified")
        recommendations.append("Specialist consultation for recurrent loss workup")
        raise_risk(ObstetricRiskLevel.HIGH)
        specialist = True

    if history.para >= 2:
        loss_rate = (history.para - history.living_children) / history.para * 100
        if loss_rate > PERINATAL_LOSS_RATE_THRESHOLD:
            builder.warning(f"High perinatal loss rate ({loss_rate:.1f}%)")
            recommendations.append("Detailed perinatal history review required")
            recommendations.append("Enhanced antenatal surveillance")
            raise_risk(ObstetricRiskLevel.MODERATE)

    if category is ParityCategory.NULLIPARA:
        recommendations.append("First birth - standard antenatal care protocol")
        recommendations.append("Patient education on labour signs and danger signs")
    elif category is ParityCategory.PRIMIPARA:
        recommendations.append("Previous birth - review for complications from the first pregnancy")

    return ObstetricHistoryResult(
        warnings=tuple(builder.warnings),
        parity_category=category,
        risk_level=risk,
        recommendations=tuple(recommendations),
        requires_specialist_consultation=specialist,
    )
