"""Processors for profile data transformation and analysis."""

from .file_processor import ProfileFileProcessor
from .profile_intake import ProfileIntake
from .location_resolver import LocationResolver
from .timing_calculator import TimingCalculator
from .model_builder import ModelBuilder
from .bottom_up import BottomUpGraphBuilder, BottomUpNode
from .flame_columns import FlameCell, FlameColumn, FlameColumnBuilder
from .location_accessor import LocationAccessor

__all__ = [
    "ProfileFileProcessor",
    "ProfileIntake",
    "LocationResolver",
    "TimingCalculator",
    "ModelBuilder",
    "BottomUpGraphBuilder",
    "BottomUpNode",
    "FlameCell",
    "FlameColumn",
    "FlameColumnBuilder",
    "LocationAccessor",
]
