"""
Location resolution for raw profile nodes.
"""

from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.types import (
    CallFrame,
    LocationAnnotation,
    PositionTick,
    RawProfile,
    SourceLocation,
    SourceReference,
)


class ResolvedLocations:
    """Locations for a profile, plus the location of every node and tick."""

    def __init__(
        self,
        annotations: Sequence[LocationAnnotation],
        node_locations: Dict[int, int],
        node_ticks: Dict[int, Tuple[PositionTick, ...]]
    ):
        self.annotations = annotations
        self.node_locations = node_locations
        self.node_ticks = node_ticks


class LocationResolver:
    """Deduplicates call frames into locations and picks their best source."""

    def __init__(self, path_normalizer):
        """
        Initialize with the path utilities used to turn URLs into paths.

        Args:
            path_normalizer: PathNormalizer instance
        """
        self.path_normalizer = path_normalizer

    def resolve(self, profile: RawProfile) -> ResolvedLocations:
        """
        Assign a location id to every node and every position tick.

        Profiles that already carry location annotations are used as-is.
        Otherwise locations are deduplicated by (function name, url, script
        id, line, column). Each position tick also produces two locations
        marking the whole source line it refers to.

        Args:
            profile: Validated raw profile

        Returns:
            ResolvedLocations keyed by raw (1-based) node id
        """
        if profile.annotations is not None:
            return ResolvedLocations(
                annotations=profile.annotations,
                node_locations={n.id: n.location_id for n in profile.nodes},
                node_ticks={n.id: n.position_ticks for n in profile.nodes},
            )

        ids_by_key: Dict[Tuple, int] = {}
        annotations: List[LocationAnnotation] = []

        def location_id_for(call_frame: CallFrame) -> int:
            key = (
                call_frame.function_name,
                call_frame.url,
                call_frame.script_id,
                call_frame.line_number,
                call_frame.column_number,
            )
            existing = ids_by_key.get(key)
            if existing is not None:
                return existing

            path = self.path_normalizer.file_url_to_path(call_frame.url)
            ids_by_key[key] = len(annotations)
            annotations.append(LocationAnnotation(
                call_frame=call_frame,
                locations=(SourceLocation(
                    line_number=call_frame.line_number,
                    column_number=call_frame.column_number,
                    source=SourceReference(name=path, path=path, source_reference=0),
                ),),
            ))
            return ids_by_key[key]

        node_locations = {}
        node_ticks = {}
        for node in profile.nodes:
            node_locations[node.id] = location_id_for(node.call_frame)
            # Tick lines are 1-based and only line-granular: mark the whole line.
            node_ticks[node.id] = tuple(
                replace(
                    tick,
                    start_location_id=location_id_for(
                        replace(node.call_frame, line_number=tick.line - 1, column_number=0)
                    ),
                    end_location_id=location_id_for(
                        replace(node.call_frame, line_number=tick.line, column_number=0)
                    ),
                )
                for tick in node.position_ticks
            )

        return ResolvedLocations(annotations, node_locations, node_ticks)

    def best_location(
        self,
        candidates: Sequence[SourceLocation],
        root_path: Optional[str]
    ) -> Optional[SourceLocation]:
        """
        Pick the best source for a location.

        An on-disk file (a path with no embedded source reference) wins and
        gets a path relative to root_path when one is configured. Otherwise
        the first candidate is used.

        Args:
            candidates: Source locations for one location
            root_path: Optional root directory of the profiled program

        Returns:
            The chosen SourceLocation, or None if there are no candidates
        """
        on_disk = next(
            (c for c in candidates if c.source.path and c.source.source_reference == 0),
            None
        )
        if on_disk is None:
            return candidates[0] if candidates else None

        relative_path = None
        if root_path:
            relative_path = self.path_normalizer.relative_path(root_path, on_disk.source.path)

        return replace(on_disk, relative_path=relative_path)
