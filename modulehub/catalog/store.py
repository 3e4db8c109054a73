"""
Read-only data store for the module catalog.

The catalog is loaded once from a JSON file (the bundled sample
dataset unless ``MODULEHUB_CATALOG_FILE`` points elsewhere) and kept
as an immutable tuple of ``TerraformModule`` instances for the rest of
the process. Loading is the only place where records are validated;
the query engine trusts what it receives.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from ..config import SETTINGS
from .schemas import TerraformModule

logger = logging.getLogger(__name__)

Catalog = Tuple[TerraformModule, ...]


class CatalogError(ValueError):
    """Raised when a catalog file cannot be turned into module records."""


def parse_catalog(raw: object) -> Catalog:
    """Convert decoded JSON into a catalog.

    Parameters
    ----------
    raw : object
        The decoded content of a catalog file. It must be a list of
        module objects.

    Returns
    -------
    Catalog
        The modules in file order.

    Raises
    ------
    CatalogError
        If ``raw`` is not a list, an entry fails validation or two
        entries share an ``id``.
    """
    if not isinstance(raw, list):
        raise CatalogError("Catalog must be a JSON list of modules")
    modules = []
    seen_ids = {}
    for index, entry in enumerate(raw):
        try:
            module = TerraformModule.model_validate(entry)
        except ValidationError as exc:
            label = entry.get("name", "<unnamed>") if isinstance(entry, dict) else "<invalid>"
            raise CatalogError(f"Invalid module at index {index} ({label}): {exc}") from exc
        if module.id in seen_ids:
            raise CatalogError(
                f"Duplicate module id {module.id}: {seen_ids[module.id]} and {module.name}"
            )
        seen_ids[module.id] = module.name
        modules.append(module)
    return tuple(modules)


def load_catalog(path: Union[Path, str]) -> Catalog:
    """Load and validate the catalog stored at ``path``."""
    source = Path(path)
    try:
        with source.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Cannot read catalog %s: %s", source, exc)
        raise CatalogError(f"Cannot read catalog {source}: {exc}") from exc
    catalog = parse_catalog(raw)
    logger.info("Loaded %d modules from %s", len(catalog), source)
    return catalog


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    """Return the process-wide catalog, loading it on first use."""
    return load_catalog(SETTINGS.catalog_file)


def find_module(catalog: Sequence[TerraformModule], module_id: int) -> Optional[TerraformModule]:
    """Return the module with ``module_id`` or ``None`` when absent."""
    return next((m for m in catalog if m.id == module_id), None)
