"""
Trigger Rules

Usage:
    from clinical_rules.core.rules import evaluate_ipv_risk

    assessment = evaluate_ipv_risk({"Ongoing anxiety"})
    print(assessment.risk_level, assessment.alert_title)
"""
from .base import (
    AlertSeverity,
    RiskAssessment,
    RiskLevel,
    RuleCatalog,
    RuleDefinition,
    RISK_LEVEL_PRECEDENCE,
    ALERT_SEVERITY_PRECEDENCE,
)
from .evaluator import TriggerRuleEvaluator, evaluate_ipv_risk, default_ipv_evaluator
from .ipv_catalog import IPV_RULE_CATALOG, IPVSign
from .reporting import format_risk_report, requires_immediate_intervention

__all__ = [
    "AlertSeverity",
    "RiskAssessment",
    "RiskLevel",
    "RuleCatalog",
    "RuleDefinition",
    "RISK_LEVEL_PRECEDENCE",
    "ALERT_SEVERITY_PRECEDENCE",
    "TriggerRuleEvaluator",
    "evaluate_ipv_risk",
    "default_ipv_evaluator",
    "IPV_RULE_CATALOG",
    "IPVSign",
    "format_risk_report",
    "requires_immediate_intervention",
]
