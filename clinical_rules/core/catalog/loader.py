"""
Catalog loading.

Catalogs are read from YAML (``.yaml`` / ``.yml``) or JSON (``.json``) files
and validated in two steps: the pydantic schema checks the document shape,
then the domain catalog checks its invariants. Read and shape failures raise
CatalogLoadError; invariant failures raise CatalogConfigurationError.

When no path is configured the embedded catalogs are used.
"""
from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Type, TypeVar, Union

import yaml
from pydantic import BaseModel, ValidationError

from clinical_rules.config import get_settings
from clinical_rules.core.checklist.base import ChecklistCatalog
from clinical_rules.core.checklist.referral_catalog import REFERRAL_CHECKLIST_CATALOG
from clinical_rules.core.rules.base import RuleCatalog
from clinical_rules.core.rules.ipv_catalog import IPV_RULE_CATALOG
from clinical_rules.utils import CatalogLoadError, get_logger
from .schema import ChecklistCatalogModel, RuleCatalogModel

logger = get_logger(__name__)

PathLike = Union[str, Path]
ModelT = TypeVar("ModelT", bound=BaseModel)


def _read_document(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except OSError as e:
        raise CatalogLoadError(f"Cannot read catalog file: {e}", path=str(path))
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise CatalogLoadError(f"Catalog file is not well-formed: {e}", path=str(path))


def _parse(path: PathLike, model: Type[ModelT]) -> ModelT:
    path = Path(path)
    document = _read_document(path)
    if not isinstance(document, dict):
        raise CatalogLoadError("Catalog document must be a mapping", path=str(path))
    try:
        return model.model_validate(document)
    except ValidationError as e:
        raise CatalogLoadError(
            f"Catalog file does not match the {model.__name__} schema",
            path=str(path),
            details={"errors": e.errors(include_url=False)},
        )


def load_rule_catalog(path: PathLike) -> RuleCatalog:
    catalog = _parse(path, RuleCatalogModel).to_catalog()
    logger.info(f"Loaded rule catalog '{catalog.name}' v{catalog.version} ({len(catalog.rules)} rules) from {path}")
    return catalog


def load_checklist_catalog(path: PathLike) -> ChecklistCatalog:
    catalog = _parse(path, ChecklistCatalogModel).to_catalog()
    logger.info(
        f"Loaded checklist catalog '{catalog.name}' v{catalog.version} "
        f"({len(catalog.items)} items, {len(catalog.profiles)} profiles) from {path}"
    )
    return catalog


@lru_cache()
def default_rule_catalog() -> RuleCatalog:
    """Configured rule catalog (``CLINICAL_RULES_RULE_CATALOG_PATH``) or the embedded IPV catalog."""
    path = get_settings().rule_catalog_path
    if path is not None:
        return load_rule_catalog(path)
    return IPV_RULE_CATALOG


@lru_cache()
def default_checklist_catalog() -> ChecklistCatalog:
    """Configured checklist catalog (``CLINICAL_RULES_CHECKLIST_CATALOG_PATH``) or the embedded referral catalog."""
    path = get_settings().checklist_catalog_path
    if path is not None:
        return load_checklist_catalog(path)
    return REFERRAL_CHECKLIST_CATALOG
