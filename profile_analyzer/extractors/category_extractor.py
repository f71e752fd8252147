"""
Call frame categorization.
"""

from typing import Optional

from ..core.types import CallFrame, Category, SourceLocation

ANONYMOUS_FUNCTION = '(anonymous)'


class CategoryExtractor:
    """Sorts call frames into system, user and module (dependency) code."""

    def __init__(self, dependency_marker: str = 'node_modules'):
        """
        Initialize with the marker that identifies dependency code.

        Args:
            dependency_marker: Substring searched for in script URLs
        """
        self.dependency_marker = dependency_marker

    @staticmethod
    def display_name(call_frame: CallFrame) -> CallFrame:
        """Return the call frame with an empty function name replaced by a placeholder."""
        if call_frame.function_name:
            return call_frame
        return CallFrame(
            function_name=ANONYMOUS_FUNCTION,
            url=call_frame.url,
            script_id=call_frame.script_id,
            line_number=call_frame.line_number,
            column_number=call_frame.column_number,
        )

    def categorize(self, call_frame: CallFrame, src: Optional[SourceLocation]) -> Category:
        """
        Categorize a call frame.

        Frames without a line number belong to the runtime. Frames whose URL
        contains the dependency marker, or that could not be matched to a
        source, are modules. Everything else is user code.

        Args:
            call_frame: Call frame to categorize
            src: Best source location found for the frame, if any

        Returns:
            Category of the frame
        """
        if call_frame.line_number < 0:
            return Category.SYSTEM

        if self.dependency_marker in call_frame.url or src is None:
            return Category.MODULE

        return Category.USER
