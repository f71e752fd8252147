"""
Validation and normalization of raw .cpuprofile records.
"""

from typing import Any, List, Mapping, Optional, Tuple

from ..core.errors import ProfileFormatError
from ..core.types import (
    CallFrame,
    LocationAnnotation,
    PositionTick,
    RawNode,
    RawProfile,
    SourceLocation,
    SourceReference,
)


class ProfileIntake:
    """Turns a JSON-shaped profile into typed, validated records."""

    def normalize(self, raw: Mapping[str, Any]) -> RawProfile:
        """
        Validate a raw profile and convert it into a RawProfile.

        Missing samples or time deltas are not an error (an aborted capture
        still has a valid, empty model). Node ids must form the dense range
        1..len(nodes) and samples must reference those ids.

        Args:
            raw: Parsed .cpuprofile JSON document

        Returns:
            RawProfile with 1-based ids preserved

        Raises:
            ProfileFormatError: If the record cannot be turned into a model
        """
        if not isinstance(raw, Mapping):
            raise ProfileFormatError('Profile must be a JSON object')

        raw_nodes = raw.get('nodes')
        if not isinstance(raw_nodes, list):
            raise ProfileFormatError("Profile is missing a 'nodes' list")

        nodes = tuple(self._parse_node(n) for n in raw_nodes)
        ids = sorted(node.id for node in nodes)
        if ids != list(range(1, len(nodes) + 1)):
            raise ProfileFormatError('Node ids must be unique and numbered 1..N')

        samples = raw.get('samples')
        time_deltas = raw.get('timeDeltas')
        if samples is not None and time_deltas is not None:
            samples, time_deltas = self._align_samples(
                [int(s) for s in samples], list(time_deltas), len(nodes)
            )

        vscode = raw.get('$vscode') or {}
        if not isinstance(vscode, Mapping):
            raise ProfileFormatError("'$vscode' must be a JSON object")

        annotations = None
        if vscode.get('locations') is not None:
            if not isinstance(vscode['locations'], list):
                raise ProfileFormatError("'$vscode.locations' must be a list")
            annotations = tuple(self._parse_annotation(a) for a in vscode['locations'])

        return RawProfile(
            nodes=nodes,
            start_time=raw.get('startTime', 0),
            end_time=raw.get('endTime', 0),
            samples=tuple(samples) if samples is not None else None,
            time_deltas=tuple(time_deltas) if time_deltas is not None else None,
            root_path=vscode.get('rootPath'),
            annotations=annotations,
        )

    @staticmethod
    def _align_samples(
        samples: List[int],
        time_deltas: List[float],
        node_count: int
    ) -> Tuple[List[int], List[float]]:
        """
        Make time_deltas exactly one shorter than samples.

        Delta i-1 is attributed to sample i, so V8's one-delta-per-sample
        output leaves the last delta unused; it and any other surplus
        trailing deltas are dropped.
        """
        for sample in samples:
            if sample < 1 or sample > node_count:
                raise ProfileFormatError(f'Sample references unknown node {sample}')

        if not samples:
            return samples, []

        if len(time_deltas) >= len(samples):
            time_deltas = time_deltas[:len(samples) - 1]

        if len(time_deltas) != len(samples) - 1:
            raise ProfileFormatError(
                f'Expected {len(samples) - 1} time deltas for {len(samples)} samples, '
                f'got {len(time_deltas)}'
            )

        return samples, time_deltas

    def _parse_node(self, raw_node: Any) -> RawNode:
        if not isinstance(raw_node, Mapping) or not isinstance(raw_node.get('id'), int):
            raise ProfileFormatError('Every node needs an integer id')

        return RawNode(
            id=raw_node['id'],
            call_frame=self._parse_call_frame(raw_node.get('callFrame')),
            children=tuple(raw_node.get('children') or ()),
            position_ticks=tuple(
                self._parse_position_tick(tick)
                for tick in raw_node.get('positionTicks') or ()
            ),
            location_id=raw_node.get('locationId'),
        )

    @staticmethod
    def _parse_position_tick(raw_tick: Any) -> PositionTick:
        if (not isinstance(raw_tick, Mapping)
                or not isinstance(raw_tick.get('line'), int)
                or not isinstance(raw_tick.get('ticks'), int)):
            raise ProfileFormatError('Every position tick needs an integer line and ticks')

        return PositionTick(
            line=raw_tick['line'],
            ticks=raw_tick['ticks'],
            start_location_id=raw_tick.get('startLocationId'),
            end_location_id=raw_tick.get('endLocationId'),
        )

    @staticmethod
    def _parse_call_frame(raw_frame: Any) -> CallFrame:
        if not isinstance(raw_frame, Mapping):
            raise ProfileFormatError('Every node needs a callFrame object')

        return CallFrame(
            function_name=raw_frame.get('functionName') or '',
            url=raw_frame.get('url') or '',
            script_id=str(raw_frame.get('scriptId', '0')),
            line_number=raw_frame.get('lineNumber', -1),
            column_number=raw_frame.get('columnNumber', -1),
        )

    def _parse_annotation(self, raw_annotation: Any) -> LocationAnnotation:
        if not isinstance(raw_annotation, Mapping):
            raise ProfileFormatError('Every location annotation must be a JSON object')

        return LocationAnnotation(
            call_frame=self._parse_call_frame(raw_annotation.get('callFrame')),
            locations=tuple(
                self.parse_source_location(loc)
                for loc in raw_annotation.get('locations') or ()
            ),
        )

    @staticmethod
    def parse_source_location(raw_location: Mapping[str, Any]) -> SourceLocation:
        """Parse a {lineNumber, columnNumber, source} record."""
        source: Optional[Mapping[str, Any]] = raw_location.get('source') or {}
        return SourceLocation(
            line_number=raw_location.get('lineNumber', 0),
            column_number=raw_location.get('columnNumber', 0),
            source=SourceReference(
                name=source.get('name'),
                path=source.get('path'),
                source_reference=source.get('sourceReference', 0),
            ),
        )
