"""Dataset schemas and report payloads."""

from .datasets import SCHEMAS, DatasetSchema, FieldType, get_schema
from .report import CompanyTopUpSummary, UserTopUp

__all__ = [
    "SCHEMAS",
    "DatasetSchema",
    "FieldType",
    "get_schema",
    "CompanyTopUpSummary",
    "UserTopUp",
]
