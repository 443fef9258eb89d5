"""Result handling for tablegate."""

from tablegate.data.results import ResultAccumulator

__all__ = ["ResultAccumulator"]
