"""
Type definitions for profile analysis.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Tuple


class Category(IntEnum):
    """Category of a call frame: runtime internals, user code or dependencies."""
    SYSTEM = 0
    USER = 1
    MODULE = 2


@dataclass(frozen=True)
class CallFrame:
    """A single stack frame as recorded by the profiler."""
    function_name: str
    url: str
    script_id: str
    line_number: int
    column_number: int

    def to_dict(self) -> Dict:
        """Convert to the camel-case shape used by .cpuprofile files."""
        return {
            'functionName': self.function_name,
            'url': self.url,
            'scriptId': self.script_id,
            'lineNumber': self.line_number,
            'columnNumber': self.column_number,
        }


@dataclass(frozen=True)
class SourceReference:
    """A source file, either on disk or embedded in the runtime."""
    name: Optional[str] = None
    path: Optional[str] = None
    source_reference: int = 0


@dataclass(frozen=True)
class SourceLocation:
    """A position inside a source file, optionally relative to the profile root."""
    line_number: int
    column_number: int
    source: SourceReference
    relative_path: Optional[str] = None

    def to_dict(self) -> Dict:
        """Convert to a JSON-friendly dictionary."""
        return {
            'lineNumber': self.line_number,
            'columnNumber': self.column_number,
            'source': {
                'name': self.source.name,
                'path': self.source.path,
                'sourceReference': self.source.source_reference,
            },
            'relativePath': self.relative_path,
        }


@dataclass(frozen=True)
class PositionTick:
    """Number of samples that landed on a 1-based source line of a node."""
    line: int
    ticks: int
    start_location_id: Optional[int] = None
    end_location_id: Optional[int] = None


@dataclass(frozen=True)
class LocationAnnotation:
    """A precomputed, deduplicated location carried by the profile itself."""
    call_frame: CallFrame
    locations: Tuple[SourceLocation, ...] = ()


@dataclass(frozen=True)
class RawNode:
    """A node of the raw profile, still using 1-based ids."""
    id: int
    call_frame: CallFrame
    children: Tuple[int, ...] = ()
    position_ticks: Tuple[PositionTick, ...] = ()
    location_id: Optional[int] = None


@dataclass(frozen=True)
class RawProfile:
    """A validated raw profile record."""
    nodes: Tuple[RawNode, ...]
    start_time: float
    end_time: float
    samples: Optional[Tuple[int, ...]] = None
    time_deltas: Optional[Tuple[float, ...]] = None
    root_path: Optional[str] = None
    annotations: Optional[Tuple[LocationAnnotation, ...]] = None


@dataclass
class Location:
    """
    One distinct call site. Many computed nodes can share a location, so the
    timings here are summed across every call path.
    """
    id: int
    call_frame: CallFrame
    category: Category
    src: Optional[SourceLocation] = None
    self_time: float = 0.0
    aggregate_time: float = 0.0
    ticks: int = 0


@dataclass
class ComputedNode:
    """One occurrence of a location within a specific call stack."""
    id: int
    location_id: int
    children: List[int] = field(default_factory=list)
    parent: Optional[int] = None
    self_time: float = 0.0
    aggregate_time: float = 0.0
    ticks: int = 0


@dataclass(frozen=True)
class ProfileModel:
    """
    The normalized profile. Samples hold 0-based node ids and
    time_deltas[i] is the time attributed to samples[i + 1].
    """
    nodes: Tuple[ComputedNode, ...]
    locations: Tuple[Location, ...]
    samples: Tuple[int, ...]
    time_deltas: Tuple[float, ...]
    duration: float
    root_path: Optional[str] = None

    def nodes_for_location(self, location_id: int) -> List[ComputedNode]:
        """Return every computed node that refers to the given location."""
        return [node for node in self.nodes if node.location_id == location_id]

    @property
    def total_self_time(self) -> float:
        return sum(node.self_time for node in self.nodes)


class ProfileConfig:
    """Configuration for profile analysis."""

    def __init__(
        self,
        root_path: Optional[str] = None,
        dependency_marker: str = 'node_modules'
    ):
        """
        Initialize profile analysis configuration.

        Args:
            root_path: Directory used to display source paths relatively.
                       Overrides the root path embedded in the profile, if any.
                       Default: None (use the embedded root path)

            dependency_marker: Substring that marks a script URL as third-party
                               code, categorizing its frames as modules.
                               Default: 'node_modules'
        """
        self.root_path = root_path
        self.dependency_marker = dependency_marker
