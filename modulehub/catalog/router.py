"""
Route definitions for the module catalog API.

Endpoints under /api/modules:
- GET  /                       : filtered, sorted, windowed module list
- GET  /facets                 : tag and provider vocabularies
- GET  /{module_id}            : one module
- GET  /{module_id}/snippet    : usage snippet for one module

The API is stateless. Every list request rebuilds the criteria from its
query parameters and evaluates them against the immutable catalog; the
``shown`` parameter plays the role of the front‑end's reveal window.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from ..config import SETTINGS
from . import facets
from .pagination import PaginationWindow
from .query import SORT_LABELS, SORT_STARS, Criteria, evaluate
from .schemas import Facets, ModulePage, Snippet, TerraformModule
from .selection import generate_snippet
from .store import find_module, get_catalog

router = APIRouter(prefix="/api/modules", tags=["modules"])


def _get_or_404(module_id: int) -> TerraformModule:
    module = find_module(get_catalog(), module_id)
    if module is None:
        raise HTTPException(status_code=404, detail="Module not found")
    return module


@router.get("/", response_model=ModulePage)
def list_modules(
    q: str = Query(default="", description="Search name, namespace and description"),
    tag: List[str] = Query(default=[], description="Selected tags (any of)"),
    provider: List[str] = Query(default=[], description="Selected providers (any of)"),
    sort: str = Query(default=SORT_STARS, description="One of: " + ", ".join(SORT_LABELS)),
    shown: Optional[int] = Query(default=None, ge=0, description="How many results to reveal"),
) -> ModulePage:
    """
    Returns the revealed prefix of the ordered results.

    Unknown ``sort`` values keep catalog order. ``shown`` defaults to one
    page and is clamped to the number of matches.
    """
    criteria = Criteria(text=q, tags=frozenset(tag), providers=frozenset(provider), sort=sort)
    results = evaluate(get_catalog(), criteria)

    total = len(results)
    if shown is None:
        window = PaginationWindow(total, page_size=SETTINGS.page_size)
        shown = window.revealed
    shown = min(shown, total)

    return ModulePage(
        total=total,
        shown=shown,
        has_more=shown < total,
        items=results[:shown],
    )


@router.get("/facets", response_model=Facets)
def list_facets() -> Facets:
    catalog = get_catalog()
    tag_counts, provider_counts = facets.facet_counts(catalog)
    return Facets(
        tags=list(facets.tags(catalog)),
        providers=list(facets.providers(catalog)),
        tag_counts=tag_counts,
        provider_counts=provider_counts,
    )


@router.get("/{module_id}", response_model=TerraformModule)
def get_module(module_id: int) -> TerraformModule:
    return _get_or_404(module_id)


@router.get("/{module_id}/snippet", response_model=Snippet)
def get_snippet(module_id: int) -> Snippet:
    module = _get_or_404(module_id)
    return Snippet(module_id=module.id, snippet=generate_snippet(module))
