"""Configuration for the top-up report pipeline."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _load_env(dotenv_path: Optional[Path] = None) -> None:
    """Load the .env file once for the process."""

    if getattr(_load_env, "_loaded", False):  # type: ignore[attr-defined]
        return

    load_dotenv(dotenv_path)
    setattr(_load_env, "_loaded", True)  # type: ignore[attr-defined]


_LEVEL_NAMES = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
    """Container for pipeline configuration."""

    data_dir: Path = Path("data")
    output_path: Path = Path("output.txt")
    log_level: str = "INFO"
    log_dir: Optional[Path] = None

    @classmethod
    def from_env(cls, dotenv_path: Optional[Path] = None) -> "Settings":
        """Build ``Settings`` using environment variables (optionally from ``.env``)."""

        _load_env(dotenv_path)

        defaults = cls()
        log_dir = os.getenv("TOPUPS_LOG_DIR", "").strip()
        return cls(
            data_dir=Path(os.getenv("TOPUPS_DATA_DIR", str(defaults.data_dir))),
            output_path=Path(os.getenv("TOPUPS_OUTPUT_PATH", str(defaults.output_path))),
            log_level=normalize_level(os.getenv("TOPUPS_LOG_LEVEL", defaults.log_level)),
            log_dir=Path(log_dir) if log_dir else None,
        )

    def override(
        self,
        *,
        data_dir: Optional[Path] = None,
        output_path: Optional[Path] = None,
        log_level: Optional[str] = None,
    ) -> "Settings":
        """Return a copy with any explicitly provided values replaced."""

        changes: dict[str, object] = {}
        if data_dir is not None:
            changes["data_dir"] = Path(data_dir)
        if output_path is not None:
            changes["output_path"] = Path(output_path)
        if log_level is not None:
            changes["log_level"] = normalize_level(log_level)
        return replace(self, **changes)


def normalize_level(value: str) -> str:
    """Upper-case a level name, falling back to INFO for unknown names."""

    level = value.strip().upper()
    if level in _LEVEL_NAMES:
        return level

    # Import locally to avoid circular dependencies during module import time.
    from .logger import get_logger

    get_logger(__name__).warning("Unknown log level %r, using INFO", value)
    return "INFO"


@lru_cache()
def get_settings(dotenv_path: Optional[Path] = None) -> Settings:
    """Return a cached settings instance."""

    return Settings.from_env(dotenv_path=dotenv_path)
