"""
Trigger Rule Evaluator

Resolves a set of observed categorical signs to exactly one rule of a
RuleCatalog, in a single pass:

    1. nothing observed (or only the "no signs" sentinel) -> baseline rule
    2. drop sentinels -> active signs
    3. active signs >= combination threshold               -> combination rule
    4. highest risk level among matching rules, declaration order on ties
    5. nothing matched                                     -> default rule

Usage:
    from clinical_rules.core.rules import TriggerRuleEvaluator
    from clinical_rules.core.rules.ipv_catalog import IPV_RULE_CATALOG

    evaluator = TriggerRuleEvaluator(IPV_RULE_CATALOG)
    assessment = evaluator.evaluate({"Ongoing anxiety", "Injury to abdomen"})
"""
from __future__ import annotations

from typing import Iterable, Optional, Tuple

from clinical_rules.utils import get_logger
from .base import RiskAssessment, RuleCatalog, RuleDefinition, sign_id

logger = get_logger(__name__)


class TriggerRuleEvaluator:
    """
    Matches observation sets against a RuleCatalog.

    Stateless, safe to call from multiple threads / concurrent requests.
    """

    def __init__(self, catalog: RuleCatalog):
        self.catalog = catalog

    def evaluate(self, observed_signs: Optional[Iterable[str]]) -> RiskAssessment:
        """
        Evaluate an observation set.

        Args:
            observed_signs: Sign identifiers (strings or str-valued Enum members).
                            Order and duplicates are irrelevant.

        Returns:
            The RiskAssessment of the single resolved rule. Unknown identifiers
            never match a rule; they are reported in ``unrecognized_signs``.
        """
        rule, unrecognized = self.resolve(observed_signs)
        return rule.to_assessment(unrecognized)

    def resolve(
        self, observed_signs: Optional[Iterable[str]]
    ) -> Tuple[RuleDefinition, Tuple[str, ...]]:
        """Return the resolved rule and the unrecognized identifiers, in sorted order."""
        catalog = self.catalog
        observed = frozenset(sign_id(s) for s in (observed_signs or ()))
        unrecognized = tuple(sorted(observed - catalog.known_signs))
        if unrecognized:
            logger.debug(f"[{catalog.name}] ignoring unrecognized signs: {list(unrecognized)}")

        if not observed or observed == {catalog.no_signs_sentinel}:
            logger.debug(f"[{catalog.name}] no signs observed -> {catalog.baseline_code}")
            return catalog.baseline, unrecognized

        active = observed - catalog.sentinels

        if len(active) >= catalog.combination_threshold:
            rule = catalog.combination
            logger.debug(
                f"[{catalog.name}] {len(active)} active signs "
                f"(threshold {catalog.combination_threshold}) -> {rule.code}"
            )
            return rule, unrecognized

        matched = self._highest_matching_rule(active)
        if matched is None:
            logger.debug(f"[{catalog.name}] no rule matched -> {catalog.default_code}")
            return catalog.default, unrecognized

        logger.debug(f"[{catalog.name}] matched {matched.code} ({matched.risk_level.value})")
        return matched, unrecognized

    def _highest_matching_rule(self, active: frozenset) -> Optional[RuleDefinition]:
        best: Optional[RuleDefinition] = None
        for rule in self.catalog.rules:
            if rule.is_combination or not rule.matches(active):
                continue
            # Strictly greater: the first declared rule wins a tie
            if best is None or rule.risk_level.precedence > best.risk_level.precedence:
                best = rule
        return best


def default_ipv_evaluator() -> TriggerRuleEvaluator:
    """
    Evaluator over the process-wide IPV catalog (embedded or configured file).

    Built on every call around the cached catalog, so clearing the catalog
    cache is enough to pick up new settings.
    """
    from clinical_rules.core.catalog import default_rule_catalog
    return TriggerRuleEvaluator(default_rule_catalog())


def evaluate_ipv_risk(observed_signs: Optional[Iterable[str]]) -> RiskAssessment:
    """Evaluate IPV screening responses against the default IPV catalog."""
    return default_ipv_evaluator().evaluate(observed_signs)
