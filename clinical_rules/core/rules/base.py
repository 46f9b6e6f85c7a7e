"""
Trigger Rules: Base Types

Data contracts for trigger-rule catalogs and the assessment they resolve to.
Catalogs are immutable once built; every invariant the evaluator relies on is
checked at construction so evaluation itself can never fail.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple

from clinical_rules.utils import CatalogConfigurationError


class RiskLevel(str, Enum):
    """
    Risk classification produced by a rule.

    NONE      – no indicators, routine care
    LOW       – indicators present, enhanced support
    MEDIUM    – specialised support and referral
    HIGH      – active risk, intervention required
    IMMEDIATE – immediate danger
    """
    NONE      = "none"
    LOW       = "low"
    MEDIUM    = "medium"
    HIGH      = "high"
    IMMEDIATE = "immediate"

    @property
    def precedence(self) -> int:
        return RISK_LEVEL_PRECEDENCE[self]


class AlertSeverity(str, Enum):
    """Colour band surfaced to the alerting layer."""
    BLUE   = "blue"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED    = "red"

    @property
    def precedence(self) -> int:
        return ALERT_SEVERITY_PRECEDENCE[self]


# ── Precedence tables (higher = more severe) ─────────────────────────────────
RISK_LEVEL_PRECEDENCE: Dict[RiskLevel, int] = {
    RiskLevel.NONE:      1,
    RiskLevel.LOW:       2,
    RiskLevel.MEDIUM:    3,
    RiskLevel.HIGH:      4,
    RiskLevel.IMMEDIATE: 5,
}

ALERT_SEVERITY_PRECEDENCE: Dict[AlertSeverity, int] = {
    AlertSeverity.BLUE:   1,
    AlertSeverity.YELLOW: 2,
    AlertSeverity.ORANGE: 3,
    AlertSeverity.RED:    4,
}


def sign_id(sign: Any) -> str:
    """Normalise a sign (plain string or str-valued Enum member) to its identifier."""
    if isinstance(sign, Enum):
        return str(sign.value)
    return str(sign)


@dataclass(frozen=True)
class RiskAssessment:
    """The resolved outcome of one trigger-rule evaluation."""
    risk_level: RiskLevel
    alert_severity: AlertSeverity
    alert_title: str
    alert_message: str
    recommendations: Tuple[str, ...] = ()
    safety_considerations: Tuple[str, ...] = ()
    referral_required: bool = False
    urgent_action: bool = False

    # Which rule produced this assessment
    rule_code: str = ""

    # Observed identifiers that no catalog rule or sentinel knows about
    unrecognized_signs: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "risk_level": self.risk_level.value,
            "alert_severity": self.alert_severity.value,
            "alert_title": self.alert_title,
            "alert_message": self.alert_message,
            "recommendations": list(self.recommendations),
            "safety_considerations": list(self.safety_considerations),
            "referral_required": self.referral_required,
            "urgent_action": self.urgent_action,
            "rule_code": self.rule_code,
            "unrecognized_signs": list(self.unrecognized_signs),
        }


@dataclass(frozen=True)
class RuleDefinition:
    """
    One declarative rule.

    A rule fires when any sign in ``trigger_set`` is observed. A rule with an
    empty ``trigger_set`` is the catalog's combination rule: it is selected by
    the count of active signs, never by matching.
    """
    id: str
    code: str
    name: str
    rationale: str
    trigger_set: Tuple[str, ...]
    risk_level: RiskLevel
    alert_severity: AlertSeverity
    alert_title: str
    alert_message: str
    recommendations: Tuple[str, ...] = ()
    safety_considerations: Tuple[str, ...] = ()
    referral_required: bool = False
    urgent_action: bool = False
    reference: str = ""

    def __post_init__(self):
        # Accept lists / enum members from catalog authors, store plain tuples of ids
        object.__setattr__(self, "trigger_set", tuple(sign_id(s) for s in self.trigger_set))
        object.__setattr__(self, "recommendations", tuple(self.recommendations))
        object.__setattr__(self, "safety_considerations", tuple(self.safety_considerations))

    @property
    def is_combination(self) -> bool:
        return not self.trigger_set

    def matches(self, active_signs: FrozenSet[str]) -> bool:
        return any(trigger in active_signs for trigger in self.trigger_set)

    def to_assessment(self, unrecognized_signs: Iterable[str] = ()) -> RiskAssessment:
        return RiskAssessment(
            risk_level=self.risk_level,
            alert_severity=self.alert_severity,
            alert_title=self.alert_title,
            alert_message=self.alert_message,
            recommendations=self.recommendations,
            safety_considerations=self.safety_considerations,
            referral_required=self.referral_required,
            urgent_action=self.urgent_action,
            rule_code=self.code,
            unrecognized_signs=tuple(unrecognized_signs),
        )


@dataclass(frozen=True)
class RuleCatalog:
    """
    Versioned, immutable collection of rules plus the sentinels and fixed
    rule roles the evaluator needs.

    Invariants (checked in ``__post_init__``):
      - exactly one rule has an empty trigger set (the combination rule)
      - the combination rule is at least as severe as every trigger rule
      - ``baseline_code`` and ``default_code`` name rules in the catalog
      - rule ids and codes are unique
      - ``combination_threshold`` is at least 1
    """
    name: str
    version: str
    rules: Tuple[RuleDefinition, ...]
    baseline_code: str
    default_code: str
    no_signs_sentinel: str
    excluded_sentinels: FrozenSet[str] = field(default_factory=frozenset)
    combination_threshold: int = 3

    def __post_init__(self):
        object.__setattr__(self, "rules", tuple(self.rules))
        object.__setattr__(self, "no_signs_sentinel", sign_id(self.no_signs_sentinel))
        object.__setattr__(
            self, "excluded_sentinels", frozenset(sign_id(s) for s in self.excluded_sentinels)
        )
        self._check_invariants()

    def _fail(self, message: str, **details) -> None:
        raise CatalogConfigurationError(message, catalog=self.name, details=details)

    def _check_invariants(self) -> None:
        if not self.rules:
            self._fail("Rule catalog has no rules")

        ids = [r.id for r in self.rules]
        codes = [r.code for r in self.rules]
        if len(set(ids)) != len(ids):
            self._fail("Duplicate rule id in catalog", ids=ids)
        if len(set(codes)) != len(codes):
            self._fail("Duplicate rule code in catalog", codes=codes)

        combination = [r.code for r in self.rules if r.is_combination]
        if len(combination) != 1:
            self._fail(
                "Catalog must define exactly one combination rule (empty trigger set)",
                combination_rules=combination,
            )

        # A superset of signs may resolve to the combination rule instead of a
        # trigger rule, so it must never be the less severe of the two.
        combined = self.combination
        highest = max(
            (r.risk_level for r in self.rules if not r.is_combination),
            key=lambda level: level.precedence,
            default=None,
        )
        if highest is not None and combined.risk_level.precedence < highest.precedence:
            self._fail(
                f"Combination rule '{combined.code}' is less severe than a trigger rule",
                combination=combined.code,
                combination_risk_level=combined.risk_level.value,
                highest_trigger_risk_level=highest.value,
            )

        for role, code in (("baseline", self.baseline_code), ("default", self.default_code)):
            if code not in codes:
                self._fail(f"The {role} rule '{code}' is not defined", role=role, code=code)

        if self.combination_threshold < 1:
            self._fail(
                "combination_threshold must be at least 1",
                combination_threshold=self.combination_threshold,
            )

    # ── Lookups ──────────────────────────────────────────────────────────────

    def get(self, code: str) -> Optional[RuleDefinition]:
        for rule in self.rules:
            if rule.code == code:
                return rule
        return None

    @property
    def baseline(self) -> RuleDefinition:
        return self.get(self.baseline_code)

    @property
    def default(self) -> RuleDefinition:
        return self.get(self.default_code)

    @property
    def combination(self) -> RuleDefinition:
        return next(r for r in self.rules if r.is_combination)

    @property
    def sentinels(self) -> FrozenSet[str]:
        return frozenset({self.no_signs_sentinel}) | self.excluded_sentinels

    @property
    def known_signs(self) -> FrozenSet[str]:
        """Every identifier the catalog recognises, sentinels included."""
        signs = set(self.sentinels)
        for rule in self.rules:
            signs.update(rule.trigger_set)
        return frozenset(signs)
