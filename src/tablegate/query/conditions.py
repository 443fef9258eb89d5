"""Equality condition building for WHERE clauses."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tablegate.core.types import Separator
    from tablegate.schema.whitelist import ColumnWhitelist

logger = logging.getLogger(__name__)

Binding = tuple[str, Any]


class ConditionBuilder:
    """Turns a column/value mapping into ``col = :col`` fragments.

    Columns missing from the whitelist are dropped, not rejected: callers
    may pass extra fields and only known ones participate.
    """

    def __init__(self, whitelist: ColumnWhitelist) -> None:
        self._whitelist = whitelist

    def build_equality(self, conditions: Mapping[str, Any]) -> tuple[list[str], list[Binding]]:
        """Build fragments and bindings for every known column.

        Args:
            conditions: Column to value pairs, in caller order

        Returns:
            (fragments, bindings) where each binding is (":column", value)
        """
        fragments: list[str] = []
        bindings: list[Binding] = []
        for column, value in conditions.items():
            if not self._whitelist.is_allowed(column):
                logger.debug(f"Dropping unknown condition column '{column}'")
                continue
            fragments.append(f"{column} = :{column}")
            bindings.append((f":{column}", value))
        return fragments, bindings

    @staticmethod
    def join(fragments: list[str], separator: Separator | str) -> str:
        """Join fragments with the separator inside one parenthesis group.

        An empty list yields ``()``, which the store rejects.
        """
        return "(" + f" {separator} ".join(fragments) + ")"
