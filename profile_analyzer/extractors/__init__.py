"""Data extraction utilities for call frames and script URLs."""

from .category_extractor import ANONYMOUS_FUNCTION, CategoryExtractor
from .path_normalizer import PathNormalizer

__all__ = ["CategoryExtractor", "PathNormalizer", "ANONYMOUS_FUNCTION"]
