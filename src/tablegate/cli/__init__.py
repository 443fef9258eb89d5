"""Command-line interface for tablegate."""
