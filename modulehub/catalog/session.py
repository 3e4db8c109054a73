"""
Browsing session: wires criteria, query results, pagination and the
detail modal together.

Each criteria-changing action replaces the ``Criteria`` value, reruns
:func:`~modulehub.catalog.query.evaluate` over the whole catalog and
resets the pagination window. "Load more" only grows the window; it
never re-queries. The detail modal is independent of the query state.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..config import SETTINGS
from . import facets
from .pagination import PaginationWindow
from .query import SORT_LABELS, Criteria, evaluate
from .schemas import TerraformModule
from .selection import SelectionModal


class BrowseSession:
    """State owned by one user browsing the catalog."""

    def __init__(
        self,
        catalog: Sequence[TerraformModule],
        modal: Optional[SelectionModal] = None,
        page_size: int = SETTINGS.page_size,
    ) -> None:
        self.catalog: Tuple[TerraformModule, ...] = tuple(catalog)
        self.tags = facets.tags(self.catalog)
        self.providers = facets.providers(self.catalog)
        self.modal = modal if modal is not None else SelectionModal()
        self.criteria = Criteria()
        self.hero_text = ""
        self.results: List[TerraformModule] = evaluate(self.catalog, self.criteria)
        self.window = PaginationWindow(len(self.results), page_size=page_size)

    def _apply(self, criteria: Criteria) -> List[TerraformModule]:
        self.criteria = criteria
        self.results = evaluate(self.catalog, criteria)
        self.window.reveal(len(self.results))
        return self.visible

    # -- criteria ---------------------------------------------------------

    def set_text(self, text: str) -> List[TerraformModule]:
        return self._apply(self.criteria.with_text(text))

    def toggle_tag(self, tag: str) -> List[TerraformModule]:
        return self._apply(self.criteria.toggle_tag(tag))

    def toggle_provider(self, provider: str) -> List[TerraformModule]:
        return self._apply(self.criteria.toggle_provider(provider))

    def set_sort(self, sort: str) -> List[TerraformModule]:
        return self._apply(self.criteria.with_sort(sort))

    def clear_filters(self) -> List[TerraformModule]:
        """Clear tag and provider selections; the search text stays."""
        return self._apply(self.criteria.cleared())

    def hero_search(self, term: Optional[str] = None) -> List[TerraformModule]:
        """Submit the landing search box into the list filter."""
        if term is not None:
            self.hero_text = term
        return self.set_text(self.hero_text)

    @property
    def sort_options(self) -> List[Tuple[str, str, bool]]:
        """(key, label, selected) rows for the "Sort by" selector."""
        return [(key, label, key == self.criteria.sort) for key, label in SORT_LABELS.items()]

    def is_tag_selected(self, tag: str) -> bool:
        return tag in self.criteria.tags

    def is_provider_selected(self, provider: str) -> bool:
        return provider in self.criteria.providers

    # -- pagination -------------------------------------------------------

    @property
    def visible(self) -> List[TerraformModule]:
        return self.window.visible(self.results)

    @property
    def can_load_more(self) -> bool:
        return self.window.has_more

    def load_more(self) -> List[TerraformModule]:
        self.window.advance()
        return self.visible

    @property
    def is_empty(self) -> bool:
        """True when the current criteria match nothing."""
        return not self.results

    @property
    def summary(self) -> str:
        if self.is_empty:
            return "No modules found"
        return f"Showing {self.window.revealed} of {len(self.results)} modules"

    # -- selection --------------------------------------------------------

    def select(self, module: TerraformModule) -> None:
        self.modal.select(module)

    def dismiss(self) -> None:
        self.modal.dismiss()

    @property
    def selected(self) -> Optional[TerraformModule]:
        return self.modal.selected
