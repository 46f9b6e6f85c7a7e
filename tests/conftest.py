"""
Pytest Configuration and Fixtures

Shared fixtures for clinical rule engine tests.
"""
import pytest
from pathlib import Path
from datetime import datetime, timedelta, timezone
import sys

# Add package root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from clinical_rules.core.rules import (
    AlertSeverity,
    RiskLevel,
    RuleCatalog,
    RuleDefinition,
    TriggerRuleEvaluator,
    IPV_RULE_CATALOG,
)
from clinical_rules.core.checklist import (
    CategoryPriorityProfile,
    ChecklistCatalog,
    ChecklistItem,
    ChecklistPrioritizer,
    ChecklistSection,
    REFERRAL_CHECKLIST_CATALOG,
)


def make_rule(code: str, triggers, risk: RiskLevel = RiskLevel.LOW, **overrides) -> RuleDefinition:
    """Build a minimal rule; only code, triggers and risk level matter to the evaluator."""
    fields = dict(
        id=f"T.{code}",
        code=code,
        name=code.title(),
        rationale="test rule",
        trigger_set=tuple(triggers),
        risk_level=risk,
        alert_severity=AlertSeverity.YELLOW,
        alert_title=f"{code} title",
        alert_message=f"{code} message",
    )
    fields.update(overrides)
    return RuleDefinition(**fields)


@pytest.fixture
def ipv_evaluator() -> TriggerRuleEvaluator:
    """Evaluator over the embedded IPV catalog."""
    return TriggerRuleEvaluator(IPV_RULE_CATALOG)


@pytest.fixture
def small_rule_catalog() -> RuleCatalog:
    """
    Toy catalog:
      BASE  <- sentinel "none"
      A     <- "a1", "a2"   (low)
      B     <- "b1"         (medium)
      B2    <- "b1", "b2"   (medium, declared after B)
      COMBO <- 3+ active signs
    """
    return RuleCatalog(
        name="toy",
        version="1",
        rules=(
            make_rule("BASE", ["none"], RiskLevel.NONE),
            make_rule("A", ["a1", "a2"], RiskLevel.LOW),
            make_rule("B", ["b1"], RiskLevel.MEDIUM),
            make_rule("B2", ["b1", "b2"], RiskLevel.MEDIUM),
            make_rule("COMBO", [], RiskLevel.HIGH, urgent_action=True),
        ),
        baseline_code="BASE",
        default_code="A",
        no_signs_sentinel="none",
        excluded_sentinels=frozenset({"disclosed"}),
        combination_threshold=3,
    )


@pytest.fixture
def referral_prioritizer() -> ChecklistPrioritizer:
    """Prioritizer over the embedded emergency referral catalog."""
    return ChecklistPrioritizer(REFERRAL_CHECKLIST_CATALOG)


@pytest.fixture
def small_checklist_catalog() -> ChecklistCatalog:
    """Two categories, four items; 'severe' outranks 'mild'."""
    items = (
        ChecklistItem("call", "Call ahead", ChecklistSection.COMMUNICATION, True),
        ChecklistItem("iv", "IV access", ChecklistSection.PROCEDURES, True),
        ChecklistItem("drug", "Give drug", ChecklistSection.MEDICATIONS),
        ChecklistItem("form", "Referral form", ChecklistSection.FINAL, True),
    )
    profiles = {
        "severe": CategoryPriorityProfile("severe", "Stabilise", critical=("iv", "drug"), standard=("call", "form")),
        "mild": CategoryPriorityProfile("mild", "Observe", critical=("call",), secondary=("drug",), standard=("form",)),
    }
    return ChecklistCatalog(
        name="toy_checklist",
        version="1",
        items=items,
        profiles=profiles,
        sign_categories={"fits": "severe", "cough": "mild"},
        category_precedence=("severe", "mild"),
    )


class FakeClock:
    """Deterministic clock; advances one minute per call."""

    def __init__(self, start: datetime = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + timedelta(minutes=1)
        return current


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rule_factory():
    """Expose make_rule to tests that build their own catalogs."""
    return make_rule
