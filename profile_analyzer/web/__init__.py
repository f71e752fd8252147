"""Web output helpers."""

from .result_builder import LAYOUTS, prepare_results

__all__ = ["prepare_results", "LAYOUTS"]
