"""Output formatting utilities."""

from .time_formatter import format_percent, format_time

__all__ = ["format_time", "format_percent"]
