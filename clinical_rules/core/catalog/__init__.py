"""
Catalog Loading

Usage:
    from clinical_rules.core.catalog import load_rule_catalog
    from clinical_rules.core.rules import TriggerRuleEvaluator

    evaluator = TriggerRuleEvaluator(load_rule_catalog("/etc/clinical_rules/ipv_screening.yaml"))
"""
from .loader import (
    default_checklist_catalog,
    default_rule_catalog,
    load_checklist_catalog,
    load_rule_catalog,
)
from .schema import (
    ChecklistCatalogModel,
    ChecklistItemModel,
    ProfileModel,
    RuleCatalogModel,
    RuleModel,
)

__all__ = [
    "default_checklist_catalog",
    "default_rule_catalog",
    "load_checklist_catalog",
    "load_rule_catalog",
    "ChecklistCatalogModel",
    "ChecklistItemModel",
    "ProfileModel",
    "RuleCatalogModel",
    "RuleModel",
]
