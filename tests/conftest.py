from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, List

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from modulehub.catalog.schemas import TerraformModule  # noqa: E402
from modulehub.catalog.selection import ClipboardError  # noqa: E402
from modulehub.catalog.store import Catalog, load_catalog  # noqa: E402
from modulehub.config import DEFAULT_CATALOG_FILE  # noqa: E402


class RecordingClipboard:
    """Clipboard double that records writes and can be told to fail."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.writes: List[str] = []

    async def write_text(self, text: str) -> None:
        if self.error is not None:
            raise self.error
        self.writes.append(text)


class FakeHandle:
    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        """Simulate the delay elapsing."""
        if not self.cancelled:
            self.callback()


class FakeScheduler:
    """Stands in for ``loop.call_later``; timers fire only when told to."""

    def __init__(self) -> None:
        self.handles: List[FakeHandle] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> FakeHandle:
        handle = FakeHandle(delay, callback)
        self.handles.append(handle)
        return handle


@pytest.fixture(scope="session")
def catalog() -> Catalog:
    return load_catalog(DEFAULT_CATALOG_FILE)


@pytest.fixture
def make_module() -> Callable[..., TerraformModule]:
    def _make(**overrides) -> TerraformModule:
        data = {
            "id": 100,
            "namespace": "acme",
            "name": "thing",
            "fullName": "acme/thing/aws",
            "description": "",
            "tags": [],
            "stars": 0,
            "version": "1.0.0",
            "provider": "aws",
            "versions": [{"version": "1.0.0", "date": "2024-01-01"}],
        }
        data.update(overrides)
        return TerraformModule.model_validate(data)

    return _make


@pytest.fixture
def clipboard() -> RecordingClipboard:
    return RecordingClipboard()


@pytest.fixture
def failing_clipboard() -> RecordingClipboard:
    return RecordingClipboard(error=ClipboardError("denied"))


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()