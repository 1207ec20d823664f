"""Service layer for the top-up report."""

from .aggregation import TopUpAggregator
from .pipeline import build_report, run
from .report import ReportRenderer, write_report

__all__ = [
    "TopUpAggregator",
    "ReportRenderer",
    "build_report",
    "run",
    "write_report",
]
