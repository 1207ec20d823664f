"""Logging setup for a single report run: rich console output plus an optional log file."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from threading import RLock
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install as install_rich_traceback

from .context import ContextFilter, log_context
from .timing import timeit

__all__ = [
    "init_logging",
    "get_logger",
    "shutdown_logging",
    "log_context",
    "timeit",
]


@dataclass
class LoggingConfig:
    """Runtime configuration for the logging subsystem."""

    app_name: str = "topups"
    level: str | int = "INFO"
    log_dir: Optional[Path] = None
    console: bool = True
    rich_tracebacks: bool = True


_config_lock = RLock()
_config: LoggingConfig | None = None
_handlers: list[logging.Handler] = []
_context_filter = ContextFilter()


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def log_file_for(directory: Path, day: date | None = None) -> Path:
    """Return the file a run started on ``day`` appends to."""

    return Path(directory) / f"{(day or date.today()).strftime('%Y_%m_%d')}.log"


def _build_handlers(cfg: LoggingConfig, level: int) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []

    if cfg.rich_tracebacks:
        install_rich_traceback(show_locals=False)

    if cfg.console:
        # stderr, so the console never mixes with anything piped from stdout
        console_handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=cfg.rich_tracebacks,
            show_path=False,
            markup=False,
            log_time_format="%Y-%m-%d %H:%M:%S",
        )
        console_handler.setFormatter(logging.Formatter("%(context)s%(message)s"))
        handlers.append(console_handler)

    if cfg.log_dir:
        path = log_file_for(Path(cfg.log_dir))
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(context)s%(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)
        handler.addFilter(_context_filter)
    return handlers


def init_logging(**kwargs: object) -> None:
    """Attach the console and file handlers to the root logger.

    Calling again with the same options is a no-op; different options replace
    the previous handlers. Records are emitted synchronously, so nothing is
    lost when the process exits right after logging.
    """

    with _config_lock:
        global _config

        cfg = LoggingConfig()
        for key, value in kwargs.items():
            if hasattr(cfg, key):
                setattr(cfg, key, value)  # type: ignore[arg-type]

        if _config is not None:
            if _config == cfg:
                return
            _teardown_locked()

        root = logging.getLogger()
        root.setLevel(logging.NOTSET)
        for handler in _build_handlers(cfg, _parse_level(cfg.level)):
            root.addHandler(handler)
            _handlers.append(handler)
        _config = cfg


def _teardown_locked() -> None:
    global _config
    _config = None
    root = logging.getLogger()
    while _handlers:
        handler = _handlers.pop()
        root.removeHandler(handler)
        handler.flush()
        handler.close()


def shutdown_logging() -> None:
    """Flush and detach every handler; called when a run ends."""

    with _config_lock:
        _teardown_locked()


def get_logger(name: str | None = None) -> logging.Logger:
    with _config_lock:
        if _config is None:
            init_logging()
    cfg = _config or LoggingConfig()
    return logging.getLogger(name or cfg.app_name)
