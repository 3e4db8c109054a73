"""
Faceted query engine for the module catalog.

``evaluate()`` maps a catalog and a ``Criteria`` value to the ordered
list of matching modules. It is a pure function: it never mutates its
inputs, never raises for any criteria, and returns the same ordering
every time it is called with the same arguments. Callers recompute the
whole result set on every criteria change instead of patching a
previous result.

Filters:
- text      : case-insensitive substring of the name, namespace or description
- tags      : the module shares at least one tag with the selection
- providers : the module's provider is in the selection
Empty text or an empty selection does not restrict anything, and the
three filters are combined with AND.

Sort keys (stable, so ties keep catalog order):
- stars  : most starred first
- recent : most recently released version first
- name   : alphabetical, ignoring case and accents
Any other key leaves catalog order untouched.
"""

from __future__ import annotations

import locale
import unicodedata
from datetime import datetime, timezone
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .schemas import TerraformModule

SORT_STARS = "stars"
SORT_RECENT = "recent"
SORT_NAME = "name"

# Labels shown in the "Sort by" selector.
SORT_LABELS: Dict[str, str] = {
    SORT_STARS: "Most Starred",
    SORT_RECENT: "Recently Updated",
    SORT_NAME: "Name (A-Z)",
}


def _norm(s: Optional[str]) -> str:
    """Lowercase for case-insensitive matching; whitespace is kept as typed."""
    return (s or "").lower()


def _toggle(selection: FrozenSet[str], value: str) -> FrozenSet[str]:
    return selection - {value} if value in selection else selection | {value}


class Criteria(BaseModel):
    """Active filter and sort choices.

    Criteria values are immutable; every user action produces a new
    instance. ``sort`` is a plain string so that an unrecognized key can
    be represented (it simply leaves the catalog order unchanged).
    """

    model_config = ConfigDict(frozen=True)

    text: str = ""
    tags: FrozenSet[str] = frozenset()
    providers: FrozenSet[str] = frozenset()
    sort: str = SORT_STARS

    def with_text(self, text: str) -> "Criteria":
        return self.model_copy(update={"text": text})

    def toggle_tag(self, tag: str) -> "Criteria":
        return self.model_copy(update={"tags": _toggle(self.tags, tag)})

    def toggle_provider(self, provider: str) -> "Criteria":
        return self.model_copy(update={"providers": _toggle(self.providers, provider)})

    def with_sort(self, sort: str) -> "Criteria":
        return self.model_copy(update={"sort": sort})

    def cleared(self) -> "Criteria":
        """Drop every tag and provider selection (text and sort are kept)."""
        return self.model_copy(update={"tags": frozenset(), "providers": frozenset()})


# ---------------------------------------------------------------------------
# Filters


def matches_text(module: TerraformModule, text: str) -> bool:
    if not text:
        return True
    needle = _norm(text)
    return (
        needle in _norm(module.name)
        or needle in _norm(module.namespace)
        or needle in _norm(module.description)
    )


def matches_tags(module: TerraformModule, selected: FrozenSet[str]) -> bool:
    if not selected:
        return True
    return any(tag in selected for tag in module.tags)


def matches_provider(module: TerraformModule, selected: FrozenSet[str]) -> bool:
    if not selected:
        return True
    return module.provider in selected


def matches(module: TerraformModule, criteria: Criteria) -> bool:
    """Return True when ``module`` passes all three filters."""
    return (
        matches_text(module, criteria.text)
        and matches_tags(module, criteria.tags)
        and matches_provider(module, criteria.providers)
    )


# ---------------------------------------------------------------------------
# Sorting


def parse_date(value: str) -> Optional[float]:
    """Parse an ISO-like date into a POSIX timestamp.

    Date-only strings and naive timestamps are read as UTC. Returns
    ``None`` for anything that cannot be parsed.
    """
    text = (value or "").strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def latest_release(module: TerraformModule) -> Optional[float]:
    """Timestamp of the most recent parseable version date, if any.

    Every entry of ``versions`` is considered; the list is not assumed
    to be ordered newest first.
    """
    stamps = [s for s in (parse_date(v.date) for v in module.versions) if s is not None]
    return max(stamps) if stamps else None


def _recent_key(module: TerraformModule) -> Tuple[bool, float]:
    stamp = latest_release(module)
    # Modules without a usable date go last.
    return (stamp is None, -(stamp or 0.0))


def _fold(name: str) -> str:
    """Strip accents and case: "Ärger" -> "arger"."""
    decomposed = unicodedata.normalize("NFKD", name)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def name_sort_key(name: str) -> Tuple[str, str]:
    """Collation key ignoring accents and case first, then exact.

    Names that differ only by accent or case fall back to the active
    locale's ordering of the raw name, so the key is total.
    """
    try:
        return (locale.strxfrm(_fold(name)), locale.strxfrm(name))
    except ValueError:
        # strxfrm rejects embedded NUL characters
        return (_fold(name), name)


_SORTERS: Dict[str, Callable[[TerraformModule], object]] = {
    SORT_STARS: lambda m: -m.stars,
    SORT_RECENT: _recent_key,
    SORT_NAME: lambda m: name_sort_key(m.name),
}


def sort_modules(modules: Iterable[TerraformModule], sort: str) -> List[TerraformModule]:
    """Return ``modules`` ordered by ``sort``; unknown keys keep input order."""
    items = list(modules)
    key = _SORTERS.get(sort)
    if key is not None:
        items.sort(key=key)
    return items


def evaluate(catalog: Iterable[TerraformModule], criteria: Criteria) -> List[TerraformModule]:
    """Filter and order ``catalog`` according to ``criteria``."""
    return sort_modules((m for m in catalog if matches(m, criteria)), criteria.sort)
