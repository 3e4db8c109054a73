"""
Runtime settings for the module browser.

Values are read once from environment variables when the package is
imported. Every setting has a default so the application runs without
any configuration; override them with the ``MODULEHUB_*`` variables
listed below.

- MODULEHUB_CATALOG_FILE    : JSON file holding the module catalog
- MODULEHUB_PAGE_SIZE       : number of cards revealed per "load more"
- MODULEHUB_COPY_CONFIRM_MS : how long the "Copied!" state lasts
- MODULEHUB_LOG_LEVEL       : root logging level
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

# Bundled sample dataset shipped with the package
DEFAULT_CATALOG_FILE = Path(__file__).resolve().parent / "data" / "modules.json"


def _int_from(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = (environ.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration."""

    catalog_file: Path = DEFAULT_CATALOG_FILE
    """Path of the JSON catalog loaded at start-up."""

    page_size: int = 6
    """Cards revealed initially and added by each "load more"."""

    copy_confirm_ms: int = 2000
    """Duration of the transient "copied" confirmation."""

    log_level: str = "INFO"

    @property
    def copy_confirm_seconds(self) -> float:
        return self.copy_confirm_ms / 1000.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``environ`` (defaults to ``os.environ``)."""
        env = os.environ if environ is None else environ
        catalog = (env.get("MODULEHUB_CATALOG_FILE") or "").strip()
        return cls(
            catalog_file=Path(catalog) if catalog else DEFAULT_CATALOG_FILE,
            page_size=_int_from(env, "MODULEHUB_PAGE_SIZE", 6),
            copy_confirm_ms=_int_from(env, "MODULEHUB_COPY_CONFIRM_MS", 2000),
            log_level=(env.get("MODULEHUB_LOG_LEVEL") or "INFO").strip().upper(),
        )


# Module-level singleton, importable everywhere.
SETTINGS = Settings.from_env()
