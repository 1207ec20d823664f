"""Plain-text rendering of the top-up report."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

from topups.core.logger import get_logger
from topups.domain.records import Company, User
from topups.schemas.report import CompanyTopUpSummary, UserTopUp
from topups.services.aggregation import TopUpAggregator

LOGGER = get_logger(__name__)

EMAILED_TITLE = "Users Emailed:"
NOT_EMAILED_TITLE = "Users Not Emailed:"


class ReportRenderer:
    """Render company summaries into the tab-indented report layout."""

    def __init__(self, aggregator: TopUpAggregator | None = None) -> None:
        self._aggregator = aggregator or TopUpAggregator()

    def render(self, companies: Iterable[Company], users: Sequence[User]) -> str:
        """Return the complete report document.

        Companies without active users are left out entirely.
        """

        lines = [""]
        rendered = 0
        for summary in self._aggregator.summarize(companies, users):
            if summary.is_empty:
                LOGGER.debug("Skipping company id=%s without active users", summary.company.id)
                continue
            lines.extend(self.render_company(summary))
            rendered += 1
        LOGGER.info("Rendered %s company section(s)", rendered)
        return "\n".join(lines) + "\n"

    def render_company(self, summary: CompanyTopUpSummary) -> list[str]:
        company = summary.company
        lines = [
            f"\tCompany Id: {company.id}",
            f"\tCompany Name: {company.name}",
        ]
        lines.extend(self._render_group(EMAILED_TITLE, summary.top_ups(summary.emailed)))
        lines.extend(self._render_group(NOT_EMAILED_TITLE, summary.top_ups(summary.not_emailed)))
        lines.append(f"\t\tTotal amount of top ups for {company.name}: {summary.total_top_up}")
        lines.append("")
        return lines

    @staticmethod
    def _render_group(title: str, entries: Iterable[UserTopUp]) -> list[str]:
        lines = [f"\t{title}"]
        for entry in entries:
            lines.append(f"\t\t{entry.last_name}, {entry.first_name}, {entry.email}")
            lines.append(f"\t\t  Previous Token Balance, {entry.previous_balance}")
            lines.append(f"\t\t  New Token Balance {entry.new_balance}")
        return lines


def write_report(document: str, path: Path | str) -> Path:
    """Write ``document`` to ``path`` in one call, replacing any previous report."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8", newline="\n") as handle:
        handle.write(document)
    LOGGER.info("Report written to %s", target)
    return target
