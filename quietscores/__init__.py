"""quietscores - sports feed normalization and game analytics."""

__version__ = "0.1.0"
