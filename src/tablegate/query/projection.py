"""Column projection against the whitelist."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tablegate.schema.whitelist import ColumnWhitelist

logger = logging.getLogger(__name__)


class ColumnProjector:
    """Filters requested columns down to ones a statement may reference."""

    def __init__(self, whitelist: ColumnWhitelist) -> None:
        self._whitelist = whitelist

    def project(
        self,
        requested: Iterable[str],
        key_field: str,
        writable: bool = True,
    ) -> list[str]:
        """Keep known columns in caller order.

        Args:
            requested: Column names supplied by the caller
            key_field: The table's key field
            writable: If True (insert/update), the key field is dropped too;
                if False (select-subset), any known column is kept

        Returns:
            Filtered column list without duplicates
        """
        columns: list[str] = []
        for column in requested:
            if writable:
                keep = self._whitelist.is_writable(column, key_field)
            else:
                keep = self._whitelist.is_allowed(column)
            if not keep:
                logger.debug(f"Dropping column '{column}' from projection")
                continue
            if column not in columns:
                columns.append(column)
        return columns
