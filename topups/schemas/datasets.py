"""Required fields and primitive types for every known dataset.

The registry is a read-only table built once at import time. Registering a
new dataset kind means adding one ``DatasetSchema`` entry to ``SCHEMAS``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping

from topups.core.errors import UnknownDatasetError, Violation
from topups.domain.records import Company, User


class FieldType(str, Enum):
    """JSON primitive types a record field may be declared as."""

    INTEGER = "integer"
    STRING = "string"
    BOOLEAN = "boolean"

    def accepts(self, value: Any) -> bool:
        # bool is an int subclass; JSON integers must not match booleans.
        if self is FieldType.INTEGER:
            return isinstance(value, int) and not isinstance(value, bool)
        if self is FieldType.STRING:
            return isinstance(value, str)
        return isinstance(value, bool)


@dataclass(frozen=True)
class DatasetSchema:
    """Required fields of one dataset and the record type built from them."""

    name: str
    fields: Mapping[str, FieldType]
    record_type: Callable[[Mapping[str, Any]], Any]

    def violations(self, index: int, record: Any) -> list[Violation]:
        """Return every way ``record`` fails this schema, in field order."""

        if not isinstance(record, dict):
            return [Violation(index, None, "is not an object")]

        found: list[Violation] = []
        for field, kind in self.fields.items():
            if field not in record:
                found.append(Violation(index, field, "is missing"))
            elif not kind.accepts(record[field]):
                found.append(Violation(index, field, f"is not of type {kind.value}"))
        return found

    def build(self, record: Mapping[str, Any]) -> Any:
        return self.record_type(record)


def _schema(
    name: str, record_type: Callable[[Mapping[str, Any]], Any], /, **fields: FieldType
) -> DatasetSchema:
    return DatasetSchema(name=name, fields=MappingProxyType(dict(fields)), record_type=record_type)


SCHEMAS: Mapping[str, DatasetSchema] = MappingProxyType(
    {
        "users": _schema(
            "users",
            User.from_record,
            id=FieldType.INTEGER,
            first_name=FieldType.STRING,
            last_name=FieldType.STRING,
            email=FieldType.STRING,
            company_id=FieldType.INTEGER,
            email_status=FieldType.BOOLEAN,
            active_status=FieldType.BOOLEAN,
            tokens=FieldType.INTEGER,
        ),
        "companies": _schema(
            "companies",
            Company.from_record,
            id=FieldType.INTEGER,
            name=FieldType.STRING,
            top_up=FieldType.INTEGER,
            email_status=FieldType.BOOLEAN,
        ),
    }
)


def get_schema(name: str, schemas: Mapping[str, DatasetSchema] = SCHEMAS) -> DatasetSchema:
    """Look up the schema registered for ``name``."""

    try:
        return schemas[name]
    except KeyError:
        raise UnknownDatasetError(name) from None
