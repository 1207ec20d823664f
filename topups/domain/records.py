"""Immutable records loaded from the users and companies datasets."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class User:
    """A user holding a token balance with one company."""

    id: int
    first_name: str
    last_name: str
    email: str
    company_id: int
    email_status: bool
    active_status: bool
    tokens: int

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "User":
        return cls(
            id=record["id"],
            first_name=record["first_name"],
            last_name=record["last_name"],
            email=record["email"],
            company_id=record["company_id"],
            email_status=record["email_status"],
            active_status=record["active_status"],
            tokens=record["tokens"],
        )

    def is_active_for(self, company: "Company") -> bool:
        return self.active_status and self.company_id == company.id


@dataclass(frozen=True, slots=True)
class Company:
    """A company crediting a fixed top-up to each of its active users."""

    id: int
    name: str
    top_up: int
    email_status: bool

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Company":
        return cls(
            id=record["id"],
            name=record["name"],
            top_up=record["top_up"],
            email_status=record["email_status"],
        )

    def credit(self, user: User) -> int:
        """Return the user's balance after this company's top-up."""

        return user.tokens + self.top_up

    def emails(self, user: User) -> bool:
        """Whether ``user`` is emailed about the top-up."""

        return self.email_status and user.email_status
