"""Join users onto companies and split them by email eligibility."""
from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from topups.core.logger import get_logger
from topups.domain.records import Company, User
from topups.schemas.report import CompanyTopUpSummary

LOGGER = get_logger(__name__)


def _by_last_name(users: Iterable[User]) -> tuple[User, ...]:
    return tuple(sorted(users, key=lambda user: user.last_name))


class TopUpAggregator:
    """Service that builds per-company top-up summaries."""

    def active_users(self, company: Company, users: Iterable[User]) -> list[User]:
        """Return users counted toward ``company``, in input order."""

        return [user for user in users if user.is_active_for(company)]

    def aggregate(self, company: Company, users: Iterable[User]) -> CompanyTopUpSummary:
        """Return the emailed and not-emailed active users of ``company``.

        Each group is sorted by last name; users sharing a last name keep their
        input order. A company without active users yields empty groups.
        """

        emailed: list[User] = []
        not_emailed: list[User] = []
        for user in self.active_users(company, users):
            if company.emails(user):
                emailed.append(user)
            else:
                not_emailed.append(user)

        summary = CompanyTopUpSummary(
            company=company,
            emailed=_by_last_name(emailed),
            not_emailed=_by_last_name(not_emailed),
        )
        LOGGER.debug(
            "Company id=%s: %s active, %s emailed",
            company.id,
            summary.active_count,
            len(summary.emailed),
        )
        return summary

    def summarize(
        self, companies: Iterable[Company], users: Sequence[User]
    ) -> Iterator[CompanyTopUpSummary]:
        """Yield one summary per company in ascending company id order."""

        for company in sorted(companies, key=lambda company: company.id):
            yield self.aggregate(company, users)
