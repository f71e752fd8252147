"""
Read-only cursor over merged flame graph columns.
"""

from dataclasses import replace
from typing import List, Sequence

from ..core.errors import MergedCellError
from .flame_columns import FlameCell, FlameColumn, resolve_cell


class LocationAccessor:
    """
    Accessor for querying a cell of the flame graph. The cell spans its own
    column plus every following column whose row at the same depth refers
    back to it.
    """

    def __init__(self, columns: Sequence[FlameColumn], x: int, y: int):
        cell = columns[x].rows[y]
        if not isinstance(cell, FlameCell):
            raise MergedCellError('Cannot create an accessor in a merged location')

        self.columns = columns
        self.x = x
        self.y = y
        self.cell = cell
        self.id = cell.id
        self.self_time = cell.self_time
        self.aggregate_time = cell.aggregate_time
        self.ticks = cell.ticks
        self.category = cell.category
        self.call_frame = cell.call_frame
        self.src = cell.src

    def _spans(self, x: int) -> bool:
        rows = self.columns[x].rows
        if self.y >= len(rows):
            return False
        row = rows[self.y]
        return isinstance(row, int) and row == self.x

    @property
    def span_end(self) -> int:
        """Index one past the last column this cell spans."""
        end = self.x + 1
        while end < len(self.columns) and self._spans(end):
            end += 1
        return end

    @property
    def children(self) -> List['LocationAccessor']:
        """Cells one level deeper that start in any column this cell spans."""
        children = []
        for dx in range(self.x, self.span_end):
            rows = self.columns[dx].rows
            if self.y + 1 < len(rows) and isinstance(rows[self.y + 1], FlameCell):
                children.append(LocationAccessor(self.columns, dx, self.y + 1))
        return children

    @staticmethod
    def root_accessors(columns: Sequence[FlameColumn]) -> List['LocationAccessor']:
        """Accessors for every cell at the outermost depth."""
        return [
            LocationAccessor(columns, x, 0)
            for x in range(len(columns))
            if columns[x].rows and isinstance(columns[x].rows[0], FlameCell)
        ]

    @staticmethod
    def get_filtered_columns(
        columns: Sequence[FlameColumn],
        accessors: Sequence['LocationAccessor']
    ) -> List[FlameColumn]:
        """
        Return the columns spanned by the given accessors, in order.

        Removing columns shifts indices, so back-references in the kept
        columns are remapped to the new positions. When a back-reference
        points at a removed column, the first kept column referring to it
        takes over the merged cell and later references point there instead.
        The result is a new list of new column objects; the input is not
        modified.

        Args:
            columns: Merged flame columns
            accessors: Accessors whose columns to keep

        Returns:
            Filtered columns
        """
        keep = [False] * len(columns)
        for accessor in accessors:
            for x in range(accessor.x, accessor.span_end):
                keep[x] = True

        new_index = {}
        for x in range(len(columns)):
            if keep[x]:
                new_index[x] = len(new_index)

        adopted = {}
        filtered = []
        for x, column in enumerate(columns):
            if not keep[x]:
                continue

            rows = []
            for y, row in enumerate(column.rows):
                if not isinstance(row, int):
                    rows.append(row)
                elif row in new_index:
                    rows.append(new_index[row])
                elif (row, y) in adopted:
                    rows.append(adopted[(row, y)])
                else:
                    adopted[(row, y)] = len(filtered)
                    rows.append(replace(resolve_cell(columns, row, y)[1]))

            filtered.append(FlameColumn(x1=column.x1, x2=column.x2, rows=rows))

        return filtered
