"""Schema introspection for tablegate."""

from tablegate.schema.whitelist import ColumnWhitelist, is_identifier

__all__ = ["ColumnWhitelist", "is_identifier"]
