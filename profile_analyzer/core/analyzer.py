"""
Main profile analyzer orchestrator.
"""

from typing import Any, Dict, List, Mapping, Optional

from ..core.types import ProfileConfig, ProfileModel
from ..extractors import CategoryExtractor, PathNormalizer
from ..processors import (
    BottomUpGraphBuilder,
    BottomUpNode,
    FlameColumn,
    FlameColumnBuilder,
    LocationResolver,
    ModelBuilder,
    ProfileFileProcessor,
    ProfileIntake,
    TimingCalculator,
)
from ..formatters import format_time


class ProfileAnalyzer:
    """Main orchestrator for CPU profile analysis."""

    def __init__(
        self,
        root_path: Optional[str] = None,
        dependency_marker: str = 'node_modules'
    ):
        """
        Initialize the ProfileAnalyzer.

        Args:
            root_path: Directory used to display source paths relatively
            dependency_marker: Substring marking third-party script URLs
        """
        # Configuration
        self.config = ProfileConfig(
            root_path=root_path,
            dependency_marker=dependency_marker
        )

        # Results, computed once per processed profile
        self.model: Optional[ProfileModel] = None
        self._bottom_up: Optional[BottomUpNode] = None
        self._timeline_columns: Optional[List[FlameColumn]] = None
        self._left_heavy_columns: Optional[List[FlameColumn]] = None

        # Initialize components
        self.path_normalizer = PathNormalizer()
        self.category_extractor = CategoryExtractor(self.config.dependency_marker)

        self.file_processor = ProfileFileProcessor()
        self.intake = ProfileIntake()
        self.location_resolver = LocationResolver(self.path_normalizer)
        self.timing_calculator = TimingCalculator()

        self.model_builder = ModelBuilder(
            self.config,
            self.location_resolver,
            self.category_extractor,
            self.timing_calculator
        )
        self.bottom_up_builder = BottomUpGraphBuilder()
        self.column_builder = FlameColumnBuilder()

    def process_profile_file(self, file_path: str) -> ProfileModel:
        """
        Read a .cpuprofile file and build its model.

        Args:
            file_path: Path to the profile JSON file

        Returns:
            The built ProfileModel
        """
        raw = self.file_processor.process_file(file_path)
        model = self.process_profile(raw)

        print(f"\nFound {len(model.nodes)} call tree nodes across {len(model.locations)} unique locations")
        print(f"Found {len(model.samples)} samples covering {format_time(model.total_self_time)} "
              f"of {format_time(model.duration)} captured")

        return model

    def process_profile(self, raw: Mapping[str, Any]) -> ProfileModel:
        """
        Validate a raw profile and build its model. Derived views from a
        previously processed profile are discarded.

        Args:
            raw: Parsed .cpuprofile JSON document

        Returns:
            The built ProfileModel

        Raises:
            ProfileFormatError: If the profile is malformed
        """
        profile = self.intake.normalize(raw)
        self.model = self.model_builder.build_model(profile)
        self._bottom_up = None
        self._timeline_columns = None
        self._left_heavy_columns = None
        return self.model

    def _require_model(self) -> ProfileModel:
        if self.model is None:
            raise RuntimeError('No profile has been processed yet')
        return self.model

    @property
    def bottom_up(self) -> BottomUpNode:
        """Root of the bottom-up graph for the current model."""
        if self._bottom_up is None:
            self._bottom_up = self.bottom_up_builder.build(self._require_model())
        return self._bottom_up

    @property
    def timeline_columns(self) -> List[FlameColumn]:
        """Flame columns in sample order."""
        if self._timeline_columns is None:
            self._timeline_columns = self.column_builder.build_columns(self._require_model())
        return self._timeline_columns

    @property
    def left_heavy_columns(self) -> List[FlameColumn]:
        """Flame columns with the heaviest stacks first."""
        if self._left_heavy_columns is None:
            self._left_heavy_columns = self.column_builder.build_left_heavy_columns(
                self._require_model()
            )
        return self._left_heavy_columns

    def top_locations(self, limit: int = 20) -> List[Dict[str, Any]]:
        """
        Locations ranked by self time.

        Args:
            limit: Maximum number of locations to return

        Returns:
            List of dictionaries with location, self and aggregate times
        """
        model = self._require_model()
        ranked = sorted(model.locations, key=lambda loc: -loc.self_time)
        return [
            {
                'location': loc,
                'self_time': loc.self_time,
                'aggregate_time': loc.aggregate_time,
            }
            for loc in ranked[:limit]
            if loc.self_time > 0
        ]

    def format_time(self, us: float) -> str:
        """
        Format time in microseconds to a human-readable string.

        Args:
            us: Time in microseconds

        Returns:
            Formatted time string
        """
        return format_time(us)
