"""End-to-end run: load both datasets, render the report, write it out."""
from __future__ import annotations

from pathlib import Path

from topups.core.config import Settings
from topups.core.logger import get_logger, timeit
from topups.repositories.dataset_repository import DatasetRepository
from topups.services.report import ReportRenderer, write_report

LOGGER = get_logger(__name__)


def build_report(repository: DatasetRepository, renderer: ReportRenderer | None = None) -> str:
    """Load users and companies from ``repository`` and return the rendered report.

    Both datasets are fully validated before any rendering starts.
    """

    users = repository.load("users")
    companies = repository.load("companies")
    renderer = renderer or ReportRenderer()
    with timeit("render report", logger=LOGGER, unit="companies", total=len(companies)):
        return renderer.render(companies, users)


def run(settings: Settings) -> Path:
    """Produce the report described by ``settings`` and return its path."""

    LOGGER.info("Reading datasets from %s", settings.data_dir)
    document = build_report(DatasetRepository(settings.data_dir))
    return write_report(document, settings.output_path)
