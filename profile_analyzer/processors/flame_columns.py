"""
Flame graph columns built from the time-ordered samples of a profile.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

from ..core.types import CallFrame, Category, Location, ProfileModel


@dataclass
class FlameCell:
    """A location drawn in a flame column, with the time it covers there."""
    location: Location
    graph_id: int
    self_time: float
    aggregate_time: float

    @property
    def id(self) -> int:
        return self.location.id

    @property
    def call_frame(self) -> CallFrame:
        return self.location.call_frame

    @property
    def category(self) -> Category:
        return self.location.category

    @property
    def src(self):
        return self.location.src

    @property
    def ticks(self) -> int:
        return self.location.ticks


# A row is either a cell, or the index of an earlier column whose cell at the
# same depth this one was merged into.
FlameRow = Union[FlameCell, int]


@dataclass
class FlameColumn:
    """One time slice. rows[0] is the outermost frame, rows[-1] the running one."""
    x1: float
    x2: float
    rows: List[FlameRow] = field(default_factory=list)


def resolve_cell(columns: List[FlameColumn], x: int, y: int) -> Tuple[int, FlameCell]:
    """
    Follow back-references from columns[x].rows[y] to the cell holding the
    merged data.

    Returns:
        Tuple of (column index, cell)
    """
    row = columns[x].rows[y]
    while isinstance(row, int):
        x = row
        row = columns[x].rows[y]
    return x, row


class FlameColumnBuilder:
    """Builds timeline and left-heavy flame graph columns."""

    def build_columns(self, model: ProfileModel) -> List[FlameColumn]:
        """
        Build the timeline flame graph. Each interior sample becomes a column
        whose width is its share of the profile duration; adjacent columns
        with the same frames are then merged into wider bands.

        Args:
            model: Built profile model

        Returns:
            Merged columns in sample order
        """
        columns = self._synthesize_columns(model)
        self._lay_out(columns, model)
        return self.merge_columns(columns)

    def build_left_heavy_columns(self, model: ProfileModel) -> List[FlameColumn]:
        """
        Build the left-heavy flame graph: the same columns as the timeline,
        reordered so that at every depth the heaviest stacks come first.
        Identical stacks end up next to each other and merge completely.

        Args:
            model: Built profile model

        Returns:
            Merged columns ordered by weight
        """
        columns = self._synthesize_columns(model)

        prefix_weights: Dict[Tuple[int, ...], float] = {}
        stacks = []
        for column in columns:
            stack = tuple(cell.id for cell in column.rows)
            stacks.append(stack)
            weight = column.rows[-1].self_time
            for depth in range(1, len(stack) + 1):
                prefix = stack[:depth]
                prefix_weights[prefix] = prefix_weights.get(prefix, 0.0) + weight

        def sort_key(index: int):
            stack = stacks[index]
            return [
                (-prefix_weights[stack[:depth + 1]], location_id)
                for depth, location_id in enumerate(stack)
            ]

        order = sorted(range(len(columns)), key=sort_key)
        columns = [columns[i] for i in order]
        self._lay_out(columns, model)
        return self.merge_columns(columns)

    @staticmethod
    def merge_columns(columns: List[FlameColumn]) -> List[FlameColumn]:
        """
        Merge each row into the same row of the previous column when both
        show the same location. Merged rows become back-references and their
        times are added to the referenced cell. Stacks are contiguous from
        the root, so the first mismatch in a column stops merging deeper rows.

        Rows that are already back-references are left alone, so running the
        merge again on merged columns changes nothing.

        Args:
            columns: Columns to merge (modified in-place)

        Returns:
            The same list of columns
        """
        for x in range(1, len(columns)):
            column = columns[x]
            previous = columns[x - 1]
            for y, current in enumerate(column.rows):
                if isinstance(current, int):
                    continue
                if y >= len(previous.rows):
                    break

                target_x, target = resolve_cell(columns, x - 1, y)
                if target.id != current.id:
                    break

                column.rows[y] = target_x
                target.self_time += current.self_time
                target.aggregate_time += current.aggregate_time

        return columns

    @staticmethod
    def _synthesize_columns(model: ProfileModel) -> List[FlameColumn]:
        """
        Create one unmerged column per interior sample. The first and last
        samples lack a delta on one side and are skipped.
        """
        columns = []
        graph_id = 0
        for i in range(1, len(model.samples) - 1):
            node = model.nodes[model.samples[i]]
            self_time = model.time_deltas[i - 1]
            rows: List[FlameRow] = [FlameCell(
                location=model.locations[node.location_id],
                graph_id=graph_id,
                self_time=self_time,
                aggregate_time=0.0,
            )]
            graph_id += 1

            # Callers contain the sample but do not run themselves. The top
            # of the tree is the profiler's synthetic root and gets no row.
            parent_id = node.parent
            while parent_id is not None and model.nodes[parent_id].parent is not None:
                caller = model.nodes[parent_id]
                rows.append(FlameCell(
                    location=model.locations[caller.location_id],
                    graph_id=graph_id,
                    self_time=0.0,
                    aggregate_time=self_time,
                ))
                graph_id += 1
                parent_id = caller.parent

            rows.reverse()
            columns.append(FlameColumn(x1=0.0, x2=0.0, rows=rows))

        return columns

    @staticmethod
    def _lay_out(columns: List[FlameColumn], model: ProfileModel) -> None:
        """
        Set each column's x-extent as a fraction of the profile duration.
        Runs before merging, while the last row still holds the column's time.
        """
        scale = model.duration
        if scale <= 0:
            scale = sum(column.rows[-1].self_time for column in columns)

        time_offset = 0.0
        for column in columns:
            self_time = column.rows[-1].self_time
            if scale > 0:
                column.x1 = time_offset / scale
                column.x2 = (time_offset + self_time) / scale
            else:
                column.x1 = column.x2 = 0.0
            time_offset += self_time
