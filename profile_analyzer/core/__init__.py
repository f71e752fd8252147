"""Core components for profile analysis."""

from .analyzer import ProfileAnalyzer
from .errors import MergedCellError, ProfileFormatError
from .types import (
    CallFrame,
    Category,
    ComputedNode,
    Location,
    ProfileConfig,
    ProfileModel,
)

__all__ = [
    "ProfileAnalyzer",
    "ProfileConfig",
    "ProfileModel",
    "ComputedNode",
    "Location",
    "CallFrame",
    "Category",
    "ProfileFormatError",
    "MergedCellError",
]
