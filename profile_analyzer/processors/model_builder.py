"""
Builds the normalized profile model from a raw profile.
"""

from typing import List, Optional

from ..core.errors import ProfileFormatError
from ..core.types import ComputedNode, Location, ProfileModel, RawProfile


class ModelBuilder:
    """Converts a raw profile into a zero-based, fully linked ProfileModel."""

    def __init__(self, config, location_resolver, category_extractor, timing_calculator):
        """
        Initialize with configuration and processing components.

        Args:
            config: ProfileConfig instance
            location_resolver: LocationResolver instance
            category_extractor: CategoryExtractor instance
            timing_calculator: TimingCalculator instance
        """
        self.config = config
        self.location_resolver = location_resolver
        self.category_extractor = category_extractor
        self.timing_calculator = timing_calculator

    def build_model(self, profile: RawProfile) -> ProfileModel:
        """
        Compute the model for a raw profile.

        Args:
            profile: Validated raw profile with 1-based ids

        Returns:
            ProfileModel with 0-based ids. If the profile has no samples or
            time deltas, the model has no nodes, locations or samples but
            keeps the duration and root path.
        """
        root_path = self.config.root_path or profile.root_path
        duration = profile.end_time - profile.start_time

        if profile.samples is None or profile.time_deltas is None:
            return ProfileModel(
                nodes=(),
                locations=(),
                samples=(),
                time_deltas=(),
                duration=duration,
                root_path=root_path,
            )

        # 1. Locations, deduplicated and categorized
        resolved = self.location_resolver.resolve(profile)
        locations = self._build_locations(resolved.annotations, root_path)

        # 2. Nodes, re-indexed to 0-based ids
        nodes: List[Optional[ComputedNode]] = [None] * len(profile.nodes)
        for raw_node in profile.nodes:
            location_id = resolved.node_locations.get(raw_node.id)
            if location_id is None or not 0 <= location_id < len(locations):
                raise ProfileFormatError(f'Node {raw_node.id} has no valid location')

            nodes[raw_node.id - 1] = ComputedNode(
                id=raw_node.id - 1,
                location_id=location_id,
                children=[child - 1 for child in raw_node.children],
            )

            for tick in resolved.node_ticks.get(raw_node.id, ()):
                nodes[raw_node.id - 1].ticks += tick.ticks
                if tick.start_location_id is not None:
                    locations[tick.start_location_id].ticks += tick.ticks

        # Parents are not part of the raw profile, back-fill them
        for node in nodes:
            for child in node.children:
                nodes[child].parent = node.id

        # 3. Self time from samples, then aggregate and location rollups
        samples = tuple(s - 1 for s in profile.samples)
        self.timing_calculator.accumulate_self_times(nodes, samples, profile.time_deltas)
        self.timing_calculator.calculate_timings(nodes, locations)

        return ProfileModel(
            nodes=tuple(nodes),
            locations=tuple(locations),
            samples=samples,
            time_deltas=tuple(profile.time_deltas),
            duration=duration,
            root_path=root_path,
        )

    def _build_locations(self, annotations, root_path: Optional[str]) -> List[Location]:
        locations = []
        for location_id, annotation in enumerate(annotations):
            src = self.location_resolver.best_location(annotation.locations, root_path)
            call_frame = self.category_extractor.display_name(annotation.call_frame)
            locations.append(Location(
                id=location_id,
                call_frame=call_frame,
                category=self.category_extractor.categorize(call_frame, src),
                src=src,
            ))
        return locations
