"""
Module detail view: selection, usage snippet and clipboard copy.

The detail modal shows one selected module, renders the configuration
block users paste into their own code and copies that block to the
system clipboard. A successful copy flips a transient "Copied!"
confirmation that reverts on its own after a fixed delay
(``SETTINGS.copy_confirm_ms``, 2000 ms by default).

Clipboard access is the only asynchronous operation. It goes through
the :class:`Clipboard` protocol so tests and embedding applications can
supply their own implementation; :class:`SystemClipboard` shells out
to whatever clipboard tool the platform provides.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import shutil
import sys
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, Tuple

from ..config import SETTINGS
from .schemas import ModuleVersion, TerraformModule

logger = logging.getLogger(__name__)

SNIPPET_TEMPLATE = (
    'module "{name}" {{\n'
    '  source  = "{source}"\n'
    '  version = "{version}"\n'
    "\n"
    "  # Configuration options\n"
    "}}"
)


def generate_snippet(module: TerraformModule) -> str:
    """Return the usage block for ``module``."""
    return SNIPPET_TEMPLATE.format(
        name=module.name,
        source=module.full_name,
        version=module.version,
    )


def initials(module: TerraformModule) -> str:
    """Avatar text: first two characters of the namespace, upper-cased."""
    return module.namespace[:2].upper()


def list_versions(module: TerraformModule) -> List[ModuleVersion]:
    """Versions exactly in the order they are stored."""
    return list(module.versions)


# ---------------------------------------------------------------------------
# Clipboard


class ClipboardError(RuntimeError):
    """Raised when text cannot be written to the clipboard."""


class Clipboard(Protocol):
    async def write_text(self, text: str) -> None: ...


# Candidate commands, tried in order. Each reads the text on stdin.
_CLIPBOARD_COMMANDS: Tuple[Tuple[str, ...], ...] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
    ("clip",),
)


class SystemClipboard:
    """Clipboard backed by the platform's command-line clipboard tool.

    X11 and Wayland tools fork a background child that keeps owning the
    selection after the command itself exits. Only stdin is piped, so
    waiting on the command never depends on that child; ``timeout``
    bounds how long a tool may take to exit.
    """

    def __init__(
        self,
        commands: Sequence[Tuple[str, ...]] = _CLIPBOARD_COMMANDS,
        timeout: float = 5.0,
    ) -> None:
        self.commands = tuple(commands)
        self.timeout = timeout

    def _command(self) -> Tuple[str, ...]:
        for command in self.commands:
            if shutil.which(command[0]):
                return command
        raise ClipboardError(f"No clipboard tool found on {sys.platform}")

    async def _feed(self, proc: asyncio.subprocess.Process, data: bytes) -> int:
        assert proc.stdin is not None
        proc.stdin.write(data)
        try:
            await proc.stdin.drain()
        except (BrokenPipeError, ConnectionResetError):
            # The tool closed stdin early; its exit status decides the outcome.
            pass
        proc.stdin.close()
        return await proc.wait()

    async def write_text(self, text: str) -> None:
        command = self._command()
        proc = await asyncio.create_subprocess_exec(
            *command,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
        try:
            returncode = await asyncio.wait_for(self._feed(proc, text.encode("utf-8")), self.timeout)
        except asyncio.TimeoutError:
            if proc.returncode is None:
                try:
                    proc.kill()
                except ProcessLookupError:
                    pass
                await proc.wait()
            raise ClipboardError(f"{command[0]} did not finish within {self.timeout}s") from None
        if returncode != 0:
            raise ClipboardError(f"{command[0]} exited with {returncode}")


# ---------------------------------------------------------------------------
# Copy confirmation


class CopyOutcome(str, enum.Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class Handle(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], Handle]


def _loop_scheduler(delay: float, callback: Callable[[], None]) -> Handle:
    return asyncio.get_running_loop().call_later(delay, callback)


class CopyConfirmation:
    """Two-state timer machine: ``idle`` and ``confirmed``.

    :meth:`confirm` enters ``confirmed`` and schedules the revert;
    :meth:`cancel` drops any pending revert and returns to ``idle``.
    Only the most recently scheduled revert can fire.
    """

    def __init__(
        self,
        delay: float = SETTINGS.copy_confirm_seconds,
        scheduler: Scheduler = _loop_scheduler,
    ) -> None:
        self.delay = delay
        self._scheduler = scheduler
        self._handle: Optional[Handle] = None
        self._generation = 0
        self.confirmed = False

    def confirm(self) -> None:
        self.cancel()
        self.confirmed = True
        generation = self._generation
        self._handle = self._scheduler(self.delay, lambda: self._revert(generation))

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._generation += 1
        self.confirmed = False

    def _revert(self, generation: int) -> None:
        # A revert scheduled before the latest confirm() is stale.
        if generation != self._generation:
            return
        self._handle = None
        self.confirmed = False
        logger.debug("Copy confirmation expired")

    @property
    def label(self) -> str:
        return "Copied!" if self.confirmed else "Copy"


# ---------------------------------------------------------------------------
# Modal


class SelectionModal:
    """Holds the module being inspected and copies its snippet."""

    def __init__(
        self,
        clipboard: Optional[Clipboard] = None,
        confirmation: Optional[CopyConfirmation] = None,
    ) -> None:
        self.clipboard: Clipboard = clipboard if clipboard is not None else SystemClipboard()
        self.confirmation = confirmation if confirmation is not None else CopyConfirmation()
        self.selected: Optional[TerraformModule] = None
        self.last_error: Optional[BaseException] = None

    @property
    def is_open(self) -> bool:
        return self.selected is not None

    def select(self, module: TerraformModule) -> None:
        self.selected = module

    def dismiss(self) -> None:
        self.selected = None

    def generate_snippet(self, module: TerraformModule) -> str:
        return generate_snippet(module)

    def versions(self, module: TerraformModule) -> List[ModuleVersion]:
        return list_versions(module)

    def detail(self) -> Optional[Dict[str, Any]]:
        """Everything the detail view renders for the selected module."""
        module = self.selected
        if module is None:
            return None
        return {
            "title": module.full_name,
            "initials": initials(module),
            "namespace": module.namespace,
            "stars": module.stars,
            "version": module.version,
            "description": module.description,
            "tags": list(module.tags),
            "snippet": generate_snippet(module),
            "versions": list_versions(module),
            "copy_label": self.confirmation.label,
        }

    async def copy(self, snippet: str) -> CopyOutcome:
        """Write ``snippet`` to the clipboard.

        A new request supersedes any pending confirmation. Failures are
        logged and reported through the returned outcome and
        ``last_error``; they never raise.
        """
        self.confirmation.cancel()
        try:
            await self.clipboard.write_text(snippet)
        except Exception as exc:
            self.last_error = exc
            logger.warning("Copy to clipboard failed: %s", exc, exc_info=True)
            return CopyOutcome.FAILURE
        self.last_error = None
        self.confirmation.confirm()
        logger.debug("Copied %d characters to clipboard", len(snippet))
        return CopyOutcome.SUCCESS

    async def copy_selected(self) -> Optional[CopyOutcome]:
        """Copy the selected module's snippet; ``None`` when nothing is selected."""
        if self.selected is None:
            return None
        return await self.copy(generate_snippet(self.selected))
