"""Timing helpers to log duration and throughput of operations."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from time import perf_counter
from typing import Iterator, Optional


@dataclass
class _Timer:
    label: str
    logger: logging.Logger
    level: int
    unit: str
    total: Optional[int]
    start: float = field(default_factory=perf_counter)

    def set_total(self, total: int) -> None:
        self.total = total

    def finish(self, success: bool = True) -> None:
        elapsed = perf_counter() - self.start
        if not success:
            message = f"{self.label} failed after {elapsed:.2f}s"
            if self.total:
                message += f" ({self.total:,} {self.unit})"
            self.logger.error(message)
            return

        message = f"{self.label} completed in {elapsed:.2f}s"
        if self.total is not None:
            message += f" ({self.total:,} {self.unit}"
            if elapsed > 0 and self.total:
                message += f" @ {self.total / elapsed:,.0f} {self.unit}/s"
            message += ")"
        self.logger.log(self.level, message)


@contextmanager
def timeit(
    label: str,
    *,
    logger: Optional[logging.Logger] = None,
    level: int = logging.INFO,
    unit: str = "items",
    total: Optional[int] = None,
) -> Iterator[_Timer]:
    """Time the enclosed block and log how long it took.

    Args:
        label: Description of the operation being timed
        logger: Logger instance to use (defaults to "topups.timer")
        level: Logging level for the timing message
        unit: Unit for throughput calculation (e.g., "records", "companies")
        total: Item count, when known up front; ``set_total`` can supply it later
    """
    log = logger or logging.getLogger("topups.timer")
    timer = _Timer(label=label, logger=log, level=level, unit=unit, total=total)
    try:
        yield timer
    except Exception:
        timer.finish(success=False)
        raise
    else:
        timer.finish(success=True)
