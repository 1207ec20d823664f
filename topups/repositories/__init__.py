"""Data access layer."""

from .dataset_repository import DatasetRepository

__all__ = ["DatasetRepository"]
