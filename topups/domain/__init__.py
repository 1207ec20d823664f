"""Domain records for the top-up report."""

from .records import Company, User

__all__ = ["Company", "User"]
