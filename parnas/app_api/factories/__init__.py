"""Factory helpers for building named decision tables."""

from .table_factory import TableFactory, default_table_factory
from .table_versions import TABLE_DRAFT, TABLE_FIRST_MATCH, TABLE_V1

__all__ = [
    "TableFactory",
    "default_table_factory",
    "TABLE_V1",
    "TABLE_FIRST_MATCH",
    "TABLE_DRAFT",
]
