"""File-backed access to the JSON datasets."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from topups.core.errors import (
    DatasetError,
    NotFoundError,
    ParseError,
    ShapeError,
    ValidationError,
    Violation,
)
from topups.core.logger import get_logger, log_context, timeit
from topups.schemas.datasets import SCHEMAS, DatasetSchema, get_schema

LOGGER = get_logger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


class DatasetRepository:
    """Load and validate datasets stored as ``<data_dir>/<name>.json``."""

    def __init__(
        self,
        data_dir: Path | str,
        *,
        schemas: Mapping[str, DatasetSchema] = SCHEMAS,
    ) -> None:
        self._data_dir = Path(data_dir)
        self._schemas = schemas

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, name: str) -> Path:
        return self._data_dir / f"{name}.json"

    def load(self, name: str) -> tuple[Any, ...]:
        """Return every record of ``name`` as immutable records, source order kept.

        Raises the matching ``DatasetError`` subclass when the file is missing,
        is not JSON, is not a non-empty array, or holds invalid records.
        """

        schema = get_schema(name, self._schemas)
        with log_context.scoped(dataset=name):
            try:
                with timeit(f"load {name}", logger=LOGGER, unit="records") as timer:
                    data = self._read(name)
                    timer.set_total(len(data))
                    records = self._validate(schema, data)
            except DatasetError as exc:
                LOGGER.error("%s", exc.message)
                raise
            LOGGER.info("Loaded %s record(s) from %s", len(records), self.path_for(name))
        return records

    def _read(self, name: str) -> list[Any]:
        path = self.path_for(name)
        if not path.is_file():
            raise NotFoundError(name)

        LOGGER.debug("Reading %s", path)
        try:
            data = json.loads(
                path.read_text(encoding="utf-8"),
                parse_constant=_reject_constant,
            )
        except (UnicodeDecodeError, ValueError, RecursionError) as exc:
            raise ParseError(name, str(exc)) from exc

        if not isinstance(data, list):
            raise ShapeError(name, "is not an array")
        if not data:
            raise ShapeError(name, "is empty")
        return data

    @staticmethod
    def _validate(schema: DatasetSchema, data: list[Any]) -> tuple[Any, ...]:
        violations: list[Violation] = []
        for index, record in enumerate(data):
            violations.extend(schema.violations(index, record))
        if violations:
            raise ValidationError(schema.name, violations)
        return tuple(schema.build(record) for record in data)
