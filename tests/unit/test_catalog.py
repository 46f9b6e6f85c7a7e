"""
Unit Tests for Catalog Loading

Tests for YAML/JSON catalog files, schema errors, invariant errors and the
settings-driven default catalogs.
"""
import json
import pytest
from pathlib import Path

from clinical_rules.config import get_settings
from clinical_rules.core.catalog import (
    default_checklist_catalog,
    default_rule_catalog,
    load_checklist_catalog,
    load_rule_catalog,
)
from clinical_rules.core.checklist import (
    ChecklistPrioritizer,
    REFERRAL_CHECKLIST_CATALOG,
    organize_referral_checklist,
)
from clinical_rules.core.rules import (
    IPV_RULE_CATALOG,
    RiskLevel,
    TriggerRuleEvaluator,
    evaluate_ipv_risk,
)
from clinical_rules.utils import CatalogConfigurationError, CatalogLoadError


RULE_CATALOG_YAML = """
name: triage_demo
version: "0.1"
baseline_code: CLEAR
default_code: WATCH
no_signs_sentinel: nothing observed
excluded_sentinels: [declined to answer]
combination_threshold: 2
rules:
  - id: D.01
    code: CLEAR
    name: Clear
    trigger_set: [nothing observed]
    risk_level: none
    alert_severity: blue
    alert_title: Clear
    alert_message: Nothing to report.
  - id: D.02
    code: WATCH
    name: Watch
    trigger_set: [tired]
    risk_level: low
    alert_severity: yellow
    alert_title: Watch
    alert_message: Keep an eye on it.
    recommendations: [Recheck next visit]
  - id: D.03
    code: ACT
    name: Act
    trigger_set: [bruising]
    risk_level: high
    alert_severity: orange
    alert_title: Act
    alert_message: Act now.
    urgent_action: true
    reference: Local protocol 7
  - id: D.04
    code: MANY
    name: Many
    risk_level: immediate
    alert_severity: red
    alert_title: Many signs
    alert_message: Escalate.
    referral_required: true
    urgent_action: true
"""

CHECKLIST_CATALOG = {
    "name": "mini_referral",
    "version": "0.1",
    "items": [
        {"id": "call", "label": "Call ahead", "section": "communication", "required": True},
        {"id": "iv", "label": "IV access", "section": "procedures"},
        {"id": "form", "label": "Referral form", "section": "final", "required": True},
    ],
    "profiles": {
        "urgent": {"clinical_focus": "Stabilise", "critical": ["iv"], "standard": ["call", "form"]},
        "routine": {"clinical_focus": "Paperwork", "critical": ["form"], "secondary": ["call"]},
    },
    "sign_categories": {"bleeding": "urgent", "anxious": "routine"},
    "category_precedence": ["urgent", "routine"],
}


@pytest.fixture
def rule_catalog_file(tmp_path) -> Path:
    path = tmp_path / "rules.yaml"
    path.write_text(RULE_CATALOG_YAML, encoding="utf-8")
    return path


@pytest.fixture
def checklist_catalog_file(tmp_path) -> Path:
    path = tmp_path / "checklist.json"
    path.write_text(json.dumps(CHECKLIST_CATALOG), encoding="utf-8")
    return path


@pytest.fixture
def clear_catalog_caches():
    """Reset cached settings and default catalogs around a test."""
    get_settings.cache_clear()
    default_rule_catalog.cache_clear()
    default_checklist_catalog.cache_clear()
    yield
    get_settings.cache_clear()
    default_rule_catalog.cache_clear()
    default_checklist_catalog.cache_clear()


class TestRuleCatalogLoading:
    """Tests for load_rule_catalog."""

    def test_load_yaml(self, rule_catalog_file):
        """Test a YAML catalog loads and drives the evaluator."""
        catalog = load_rule_catalog(rule_catalog_file)
        evaluator = TriggerRuleEvaluator(catalog)

        assert catalog.name == "triage_demo"
        assert catalog.get("ACT").reference == "Local protocol 7"
        assert evaluator.evaluate(set()).rule_code == "CLEAR"
        assert evaluator.evaluate({"declined to answer"}).rule_code == "WATCH"
        assert evaluator.evaluate({"bruising"}).risk_level == RiskLevel.HIGH
        assert evaluator.evaluate({"tired", "bruising"}).risk_level == RiskLevel.IMMEDIATE

    def test_schema_error(self, tmp_path):
        """Test a shape error is reported with pydantic details."""
        path = tmp_path / "bad.yaml"
        path.write_text(RULE_CATALOG_YAML.replace("risk_level: high", "risk_level: catastrophic"))

        with pytest.raises(CatalogLoadError) as exc:
            load_rule_catalog(path)

        assert exc.value.path == str(path)
        assert exc.value.details["errors"]

    def test_invariant_error(self, tmp_path):
        """Test a well-formed file with a dangling role code fails invariants."""
        path = tmp_path / "dangling.yaml"
        path.write_text(RULE_CATALOG_YAML.replace("default_code: WATCH", "default_code: MISSING"))

        with pytest.raises(CatalogConfigurationError):
            load_rule_catalog(path)

    def test_malformed_yaml(self, tmp_path):
        """Test unparsable YAML is a load error."""
        path = tmp_path / "broken.yaml"
        path.write_text("rules: [unclosed")

        with pytest.raises(CatalogLoadError):
            load_rule_catalog(path)

    def test_non_mapping_document(self, tmp_path):
        """Test the document root must be a mapping."""
        path = tmp_path / "list.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(CatalogLoadError):
            load_rule_catalog(path)

    def test_missing_file(self, tmp_path):
        """Test an unreadable path is a load error."""
        with pytest.raises(CatalogLoadError) as exc:
            load_rule_catalog(tmp_path / "nowhere.yaml")

        assert exc.value.code == "CATALOG_LOAD_ERROR"


class TestChecklistCatalogLoading:
    """Tests for load_checklist_catalog."""

    def test_load_json(self, checklist_catalog_file):
        """Test a JSON catalog loads and drives the prioritizer."""
        catalog = load_checklist_catalog(checklist_catalog_file)
        checklist = ChecklistPrioritizer(catalog).organize(["anxious", "bleeding"])

        assert checklist.primary_category == "urgent"
        assert [item.id for item in checklist.critical] == ["iv"]
        assert checklist.clinical_focus == "Stabilise"

    def test_profile_references_unknown_item(self, tmp_path):
        """Test cross-reference errors surface as configuration errors."""
        document = json.loads(json.dumps(CHECKLIST_CATALOG))
        document["profiles"]["routine"]["critical"].append("ghost")
        path = tmp_path / "ghost.json"
        path.write_text(json.dumps(document))

        with pytest.raises(CatalogConfigurationError):
            load_checklist_catalog(path)

    def test_unknown_section(self, tmp_path):
        """Test an unknown section name is a schema error."""
        document = json.loads(json.dumps(CHECKLIST_CATALOG))
        document["items"][0]["section"] = "lunch"
        path = tmp_path / "section.json"
        path.write_text(json.dumps(document))

        with pytest.raises(CatalogLoadError):
            load_checklist_catalog(path)


class TestDefaultCatalogs:
    """Tests for the settings-driven default catalogs."""

    def test_embedded_by_default(self, monkeypatch, clear_catalog_caches):
        """Test the embedded catalogs are used without configuration."""
        monkeypatch.delenv("CLINICAL_RULES_RULE_CATALOG_PATH", raising=False)
        monkeypatch.delenv("CLINICAL_RULES_CHECKLIST_CATALOG_PATH", raising=False)

        assert default_rule_catalog() is IPV_RULE_CATALOG
        assert default_checklist_catalog() is REFERRAL_CHECKLIST_CATALOG

    def test_configured_paths(self, monkeypatch, clear_catalog_caches, rule_catalog_file, checklist_catalog_file):
        """Test environment settings point the defaults at external files."""
        monkeypatch.setenv("CLINICAL_RULES_RULE_CATALOG_PATH", str(rule_catalog_file))
        monkeypatch.setenv("CLINICAL_RULES_CHECKLIST_CATALOG_PATH", str(checklist_catalog_file))

        assert default_rule_catalog().name == "triage_demo"
        assert default_checklist_catalog().name == "mini_referral"

    def test_loaded_once(self, monkeypatch, clear_catalog_caches, rule_catalog_file):
        """Test the default catalog is cached for the process."""
        monkeypatch.setenv("CLINICAL_RULES_RULE_CATALOG_PATH", str(rule_catalog_file))

        assert default_rule_catalog() is default_rule_catalog()

    def test_helpers_follow_reloaded_settings(self, monkeypatch, clear_catalog_caches,
                                              rule_catalog_file, checklist_catalog_file):
        """Test the module-level helpers use the catalog of the current settings."""
        monkeypatch.delenv("CLINICAL_RULES_RULE_CATALOG_PATH", raising=False)
        monkeypatch.delenv("CLINICAL_RULES_CHECKLIST_CATALOG_PATH", raising=False)
        assert evaluate_ipv_risk(set()).rule_code == "IPV_NO_SIGNS"
        assert organize_referral_checklist(["bleeding"]).primary_category is None

        monkeypatch.setenv("CLINICAL_RULES_RULE_CATALOG_PATH", str(rule_catalog_file))
        monkeypatch.setenv("CLINICAL_RULES_CHECKLIST_CATALOG_PATH", str(checklist_catalog_file))
        get_settings.cache_clear()
        default_rule_catalog.cache_clear()
        default_checklist_catalog.cache_clear()

        assert evaluate_ipv_risk(set()).rule_code == "CLEAR"
        assert organize_referral_checklist(["bleeding"]).primary_category == "urgent"
