"""Facet vocabularies derived from the catalog."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, Tuple

from .schemas import TerraformModule


def tags(catalog: Iterable[TerraformModule]) -> Tuple[str, ...]:
    """Sorted, lowercased union of every module's tags."""
    return tuple(sorted({t.lower() for m in catalog for t in m.tags}))


def providers(catalog: Iterable[TerraformModule]) -> Tuple[str, ...]:
    """Sorted union of module providers (case preserved)."""
    return tuple(sorted({m.provider for m in catalog}))


def facet_counts(modules: Iterable[TerraformModule]) -> Tuple[Dict[str, int], Dict[str, int]]:
    """Count how many of ``modules`` carry each tag and each provider.

    Tags are counted in their lowercased form so the keys line up with
    :func:`tags`. A module is counted once per tag even if the tag
    appears twice with different case.
    """
    tag_counts: Counter = Counter()
    provider_counts: Counter = Counter()
    for module in modules:
        tag_counts.update({t.lower() for t in module.tags})
        provider_counts[module.provider] += 1
    return dict(tag_counts), dict(provider_counts)
