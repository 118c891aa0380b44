"""Registry of named decision tables for drivers.

Responsibilities:
  - Map (table_id, version) to a builder returning a fresh RuleTable.
  - Reject unknown ids with ValueError.
"""

from __future__ import annotations

from typing import Callable, Dict, Tuple

from parnas.access_control.table import build_access_table, build_access_table_first_match
from parnas.app_api.factories.table_versions import (
    ALLOWED_TABLE_VERSIONS,
    TABLE_DRAFT,
    TABLE_FIRST_MATCH,
    TABLE_V1,
)
from parnas.core.table.rule_table import RuleTable
from parnas.hvac.table import build_draft_hvac_table, build_hvac_table
from parnas.orders.machine import build_order_table


class TableFactory:
    def __init__(self) -> None:
        self._registry: Dict[Tuple[str, str], Callable[[], RuleTable]] = {}

    def register(self, table_id: str, version: str, builder: Callable[[], RuleTable]) -> None:
        if version not in ALLOWED_TABLE_VERSIONS:
            raise ValueError(f"Unsupported table version: {version}")
        self._registry[(table_id, version)] = builder

    def create(self, table_id: str, version: str = TABLE_V1) -> RuleTable:
        key = (table_id, version)
        if key not in self._registry:
            raise ValueError(f"Unknown table_id/version: {table_id}:{version}")
        return self._registry[key]()

    def available(self) -> list[Tuple[str, str]]:
        return sorted(self._registry)


default_table_factory = TableFactory()
default_table_factory.register("access_control", TABLE_V1, build_access_table)
default_table_factory.register("access_control", TABLE_FIRST_MATCH, build_access_table_first_match)
default_table_factory.register("hvac", TABLE_V1, build_hvac_table)
default_table_factory.register("hvac", TABLE_DRAFT, build_draft_hvac_table)
default_table_factory.register("orders", TABLE_V1, build_order_table)

__all__ = ["TableFactory", "default_table_factory"]
