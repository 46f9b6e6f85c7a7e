"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    ClinicalRulesError,
    CatalogConfigurationError,
    CatalogLoadError,
    UnknownChecklistItemError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "ClinicalRulesError",
    "CatalogConfigurationError",
    "CatalogLoadError",
    "UnknownChecklistItemError",
]
