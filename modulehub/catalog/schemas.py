"""
Pydantic schema definitions for the module catalog.

The ``TerraformModule`` model captures the fields required to render a
catalogue card and the detail view in the front‑end. Catalog records
are immutable for the lifetime of the process, so every model here is
frozen. The JSON dataset and the HTTP API keep the camelCase
``fullName`` key used by the registry front‑end; Python code uses
``full_name``.
"""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ModuleVersion(BaseModel):
    """One published version of a module."""

    model_config = ConfigDict(frozen=True)

    version: str
    # ISO-like date string ("2024-01-15"). Kept as text: a malformed value
    # must not prevent the catalog from loading, it only sorts last under
    # the "recent" ordering.
    date: str


class TerraformModule(BaseModel):
    """A single module entry of the catalog.

    ``versions`` must contain at least one entry. Its order is kept
    exactly as supplied; the detail view lists versions in that order.
    ``full_name`` is expected to be consistent with ``namespace`` and
    ``name`` but is not re-validated.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    namespace: str
    name: str
    full_name: str = Field(alias="fullName")
    description: str = ""
    tags: List[str] = Field(default_factory=list)
    stars: int = Field(default=0, ge=0)
    version: str
    provider: str
    versions: List[ModuleVersion] = Field(min_length=1)

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, value: List[str]) -> List[str]:
        # Tags behave as a set; keep first occurrence order for display.
        seen: set = set()
        out: List[str] = []
        for tag in value:
            if tag not in seen:
                seen.add(tag)
                out.append(tag)
        return out


class ModulePage(BaseModel):
    """A revealed prefix of the ordered query results."""

    total: int
    shown: int
    has_more: bool
    items: List[TerraformModule]


class Facets(BaseModel):
    """Selectable facet vocabularies."""

    tags: List[str]
    providers: List[str]
    tag_counts: Dict[str, int] = Field(default_factory=dict)
    provider_counts: Dict[str, int] = Field(default_factory=dict)


class Snippet(BaseModel):
    module_id: int
    snippet: str
