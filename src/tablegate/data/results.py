"""Result buffering for select operations.

Results are materialized eagerly into per-gateway buffers. Neither buffer
is ever cleared here:

- the "all" buffer is filled once and then served as-is, so a second
  ``select_all`` does not query the store again (unless the table was
  empty the first time);
- the "where" buffer grows with every conditional select.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from tablegate.core.types import Row


class ResultAccumulator:
    """Owns the select-all and select-where buffers of one gateway."""

    def __init__(self) -> None:
        self._all: list[Row] = []
        self._where: list[Row] = []

    @property
    def all_rows(self) -> list[Row]:
        return self._all

    @property
    def where_rows(self) -> list[Row]:
        return self._where

    def accumulate_all(self, fetch: Callable[[], Iterable[Row]]) -> list[Row]:
        """Fill the all-buffer from ``fetch`` if it is still empty.

        Args:
            fetch: Runs the unconditional select; not called when the
                buffer already holds rows

        Returns:
            The all-buffer itself
        """
        if not self._all:
            self._all.extend(fetch())
        return self._all

    def accumulate_where(self, rows: Iterable[Row]) -> list[Row]:
        """Append rows to the where-buffer and return it."""
        self._where.extend(rows)
        return self._where
