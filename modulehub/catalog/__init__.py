"""
Catalog package for the module browser.

This package holds everything needed to browse the module catalog:
the immutable in‑memory store, the facet vocabularies, the faceted
query engine, the "load more" pagination window, the detail modal
with its usage snippet, and the session object that wires them
together. ``router`` exposes the same operations over HTTP for a
front‑end.
"""

from .router import router as catalog_router  # noqa: F401
