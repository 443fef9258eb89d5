"""SQL generation for tablegate.

    1. ConditionBuilder - equality fragments and their bindings
    2. ColumnProjector - whitelist filtering of column lists
    3. StatementFactory - full statements for each operation
"""

from tablegate.query.conditions import ConditionBuilder
from tablegate.query.projection import ColumnProjector
from tablegate.query.statements import Statement, StatementFactory

__all__ = [
    "ConditionBuilder",
    "ColumnProjector",
    "Statement",
    "StatementFactory",
]
