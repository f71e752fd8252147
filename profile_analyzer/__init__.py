"""
Profile Analyzer - CPU profile model, bottom-up and flame graph views
"""

__version__ = "1.0.0"

from .core.analyzer import ProfileAnalyzer
from .core.errors import MergedCellError, ProfileFormatError
from .core.types import Category, ProfileConfig, ProfileModel

__all__ = [
    "ProfileAnalyzer",
    "ProfileConfig",
    "ProfileModel",
    "Category",
    "ProfileFormatError",
    "MergedCellError",
]
