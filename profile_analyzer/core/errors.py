"""
Exceptions raised by the profile analyzer.
"""


class ProfileFormatError(ValueError):
    """Raised when a raw profile record is structurally unusable."""


class MergedCellError(ValueError):
    """Raised when an accessor is positioned on a merged (back-reference) cell."""
