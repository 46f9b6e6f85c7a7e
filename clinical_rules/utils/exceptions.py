"""
Custom Exception Hierarchy

Configuration and loading failures carry structured error information.
Clinical findings are never exceptions: they are returned as data.
"""
from typing import Optional, Dict, Any


class ClinicalRulesError(Exception):
    """Base exception for all rule engine errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class CatalogConfigurationError(ClinicalRulesError):
    """A rule or checklist catalog violates one of its invariants."""

    def __init__(
        self,
        message: str,
        catalog: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="CATALOG_CONFIGURATION_ERROR",
            details={"catalog": catalog, **(details or {})}
        )
        self.catalog = catalog


class CatalogLoadError(ClinicalRulesError):
    """An external catalog file could not be read or parsed."""

    def __init__(
        self,
        message: str,
        path: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="CATALOG_LOAD_ERROR",
            details={"path": path, **(details or {})}
        )
        self.path = path


class UnknownChecklistItemError(ClinicalRulesError):
    """A completion toggle referenced an item outside the encounter checklist."""

    def __init__(
        self,
        item_id: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=f"Checklist item '{item_id}' is not part of this checklist",
            code="UNKNOWN_CHECKLIST_ITEM",
            details={"item_id": item_id, **(details or {})}
        )
        self.item_id = item_id
