"""Error taxonomy raised while loading datasets.

Every error carries the offending dataset name as structured data and a
process exit code so the command line can report failures distinctly.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True, slots=True)
class Violation:
    """A single schema violation found in a dataset record."""

    index: int
    field: str | None
    reason: str

    def __str__(self) -> str:
        if self.field is None:
            return f"record {self.index}: {self.reason}"
        return f"record {self.index}: field '{self.field}' {self.reason}"


class DatasetError(Exception):
    """Base class for failures tied to a named dataset."""

    exit_code = 1

    def __init__(self, dataset: str, message: str) -> None:
        super().__init__(message)
        self.dataset = dataset
        self.message = message


class UnknownDatasetError(DatasetError):
    exit_code = 2

    def __init__(self, dataset: str) -> None:
        super().__init__(dataset, f"{dataset} is not a known dataset")


class NotFoundError(DatasetError):
    exit_code = 3

    def __init__(self, dataset: str) -> None:
        super().__init__(dataset, f"{dataset} does not exist")


class ParseError(DatasetError):
    exit_code = 4

    def __init__(self, dataset: str, detail: str | None = None) -> None:
        message = f"{dataset} is invalid"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(dataset, message)
        self.detail = detail


class ShapeError(DatasetError):
    exit_code = 5

    def __init__(self, dataset: str, reason: str) -> None:
        super().__init__(dataset, f"{dataset} {reason}")
        self.reason = reason


class ValidationError(DatasetError):
    """Raised when one or more records fail their schema."""

    exit_code = 6

    def __init__(self, dataset: str, violations: Iterable[Violation]) -> None:
        self.violations = tuple(violations)
        message = f"Invalid data found in {dataset}.json"
        if self.violations:
            details = "; ".join(str(v) for v in self.violations)
            message = f"{message} ({details})"
        super().__init__(dataset, message)
