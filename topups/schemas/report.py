"""Schema definitions for per-company top-up summaries."""
from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel, ConfigDict, computed_field

from topups.domain.records import Company, User


class UserTopUp(BaseModel):
    """A single user's balance before and after the company top-up."""

    model_config = ConfigDict(frozen=True)

    last_name: str
    first_name: str
    email: str
    previous_balance: int
    new_balance: int


class CompanyTopUpSummary(BaseModel):
    """Active users of one company split by whether they are emailed."""

    model_config = ConfigDict(frozen=True)

    company: Company
    emailed: tuple[User, ...] = ()
    not_emailed: tuple[User, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def active_count(self) -> int:
        return len(self.emailed) + len(self.not_emailed)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_top_up(self) -> int:
        return self.active_count * self.company.top_up

    @property
    def is_empty(self) -> bool:
        return self.active_count == 0

    def top_ups(self, users: Iterable[User]) -> list[UserTopUp]:
        """Return the balance change for each of ``users``, order preserved."""

        return [
            UserTopUp(
                last_name=user.last_name,
                first_name=user.first_name,
                email=user.email,
                previous_balance=user.tokens,
                new_balance=self.company.credit(user),
            )
            for user in users
        ]
