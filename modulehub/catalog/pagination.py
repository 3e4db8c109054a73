"""Incremental "load more" window over an ordered result list."""

from __future__ import annotations

from typing import List, Sequence, TypeVar

from ..config import SETTINGS

T = TypeVar("T")


class PaginationWindow:
    """Tracks how many of the ordered results are currently revealed.

    The window always satisfies ``0 <= revealed <= total``. It starts at
    ``min(page_size, total)``, grows by ``page_size`` on each
    :meth:`advance` and snaps back to the initial size on :meth:`reset`.
    """

    def __init__(self, total: int = 0, page_size: int = SETTINGS.page_size) -> None:
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.page_size = page_size
        self._total = max(0, int(total))
        self._revealed = self._initial()

    def _initial(self) -> int:
        return min(self.page_size, self._total)

    @property
    def total(self) -> int:
        return self._total

    @property
    def revealed(self) -> int:
        return self._revealed

    @property
    def has_more(self) -> bool:
        """Whether "load more" is actionable."""
        return self._revealed < self._total

    def reveal(self, total: int) -> int:
        """Bind the window to a new result total and reset it."""
        self._total = max(0, int(total))
        return self.reset()

    def advance(self) -> int:
        self._revealed = min(self._revealed + self.page_size, self._total)
        return self._revealed

    def reset(self) -> int:
        self._revealed = self._initial()
        return self._revealed

    def visible(self, items: Sequence[T]) -> List[T]:
        """Return the revealed prefix of ``items``."""
        return list(items[: self._revealed])

    def __repr__(self) -> str:
        return f"PaginationWindow(revealed={self._revealed}, total={self._total}, page_size={self.page_size})"
