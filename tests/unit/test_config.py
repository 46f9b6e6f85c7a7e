"""
Unit Tests for Configuration, Logging and Errors
"""
import logging
import pytest
from pydantic import ValidationError

from clinical_rules.config import Settings
from clinical_rules.core.checklist import ChecklistPrioritizer, REFERRAL_CHECKLIST_CATALOG
from clinical_rules.core.rules import IPV_RULE_CATALOG, TriggerRuleEvaluator
from clinical_rules.utils.logging import StructuredFormatter
from clinical_rules.utils import (
    CatalogLoadError,
    ClinicalRulesError,
    UnknownChecklistItemError,
    setup_logging,
)


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        """Test defaults without environment overrides."""
        monkeypatch.delenv("CLINICAL_RULES_LOG_LEVEL", raising=False)
        monkeypatch.delenv("CLINICAL_RULES_RULE_CATALOG_PATH", raising=False)
        settings = Settings()

        assert settings.log_level == "INFO"
        assert settings.rule_catalog_path is None

    def test_environment_prefix(self, monkeypatch, tmp_path):
        """Test CLINICAL_RULES_ variables are read."""
        monkeypatch.setenv("CLINICAL_RULES_LOG_LEVEL", "debug")
        monkeypatch.setenv("CLINICAL_RULES_CHECKLIST_CATALOG_PATH", str(tmp_path / "c.yaml"))
        settings = Settings()

        assert settings.log_level == "DEBUG"
        assert settings.checklist_catalog_path == tmp_path / "c.yaml"

    def test_invalid_log_level(self):
        """Test unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")


class TestLogging:
    """Tests for logging setup and engine log output."""

    def test_setup_logging_configures_package_logger(self, tmp_path):
        """Test handlers are attached to the package logger only."""
        log_file = tmp_path / "engine.log"
        setup_logging("WARNING", str(log_file))
        package_logger = logging.getLogger("clinical_rules")

        try:
            assert package_logger.level == logging.WARNING
            assert len(package_logger.handlers) == 2
            package_logger.warning("catalog reloaded")
            for handler in package_logger.handlers:
                handler.flush()
            assert "catalog reloaded" in log_file.read_text()
        finally:
            for handler in package_logger.handlers:
                handler.close()
            setup_logging("INFO")

    def test_formatter_without_color(self):
        """Test the plain format carries level and logger name."""
        record = logging.LogRecord("clinical_rules.x", logging.INFO, __file__, 1, "hello %s", ("there",), None)
        line = StructuredFormatter(use_color=False).format(record)

        assert "INFO" in line
        assert "[clinical_rules.x]" in line
        assert line.endswith("hello there")

    def test_unrecognized_rule_signs_logged(self, caplog):
        """Test unknown identifiers are logged at debug level."""
        caplog.set_level(logging.DEBUG, logger="clinical_rules")
        TriggerRuleEvaluator(IPV_RULE_CATALOG).evaluate({"not a sign"})

        assert any("not a sign" in r.getMessage() and r.levelno == logging.DEBUG for r in caplog.records)

    def test_unrecognized_checklist_signs_logged(self, caplog):
        """Test unmapped danger signs are logged at debug level."""
        caplog.set_level(logging.DEBUG, logger="clinical_rules")
        ChecklistPrioritizer(REFERRAL_CHECKLIST_CATALOG).organize(["Other"])

        assert any("Other" in r.getMessage() for r in caplog.records)


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_hierarchy(self):
        """Test every engine error derives from ClinicalRulesError."""
        assert issubclass(CatalogLoadError, ClinicalRulesError)
        assert issubclass(UnknownChecklistItemError, ClinicalRulesError)

    def test_to_dict(self):
        """Test structured error output."""
        error = UnknownChecklistItemError("ghost")

        assert error.to_dict() == {
            "error": "UNKNOWN_CHECKLIST_ITEM",
            "message": "Checklist item 'ghost' is not part of this checklist",
            "details": {"item_id": "ghost"},
        }
