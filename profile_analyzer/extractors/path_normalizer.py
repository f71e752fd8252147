"""
Script URL and source path normalization.
"""

import posixpath
import re
from typing import Optional
from urllib.parse import unquote, urlparse


class PathNormalizer:
    """Converts script URLs to local paths and relativizes them against a root."""

    def __init__(self):
        """Initialize regex patterns for Windows path handling."""
        self.drive_pattern = re.compile(r'^/?([A-Za-z]):[\\/]')

    def file_url_to_path(self, url: Optional[str]) -> Optional[str]:
        """
        Convert a file:// URL into a local filesystem path. Anything that is
        not a file URL (http URLs, node internals, empty strings) is returned
        unchanged.

        Args:
            url: Script URL from a call frame

        Returns:
            Local path, or the input when it is not a file URL
        """
        if not url or not url.startswith('file://'):
            return url

        parsed = urlparse(url)
        path = unquote(parsed.path)

        # file:///C:/foo -> C:\foo
        if self.drive_pattern.match(path):
            return path.lstrip('/').replace('/', '\\')

        # file://server/share -> UNC path
        if parsed.netloc and parsed.netloc != 'localhost':
            return f"//{parsed.netloc}{path}"

        return path

    def relative_path(self, root: str, path: str) -> str:
        """
        Compute the path of `path` relative to `root` using forward slashes.

        Windows paths are compared case-insensitively on the drive letter.
        Paths on a different drive than the root are returned unchanged.

        Args:
            root: Directory to relativize against
            path: Absolute source path

        Returns:
            Relative path string
        """
        root_norm = self._to_posix(root)
        path_norm = self._to_posix(path)

        root_drive = self.drive_pattern.match(root_norm)
        path_drive = self.drive_pattern.match(path_norm)
        if root_drive or path_drive:
            if not (root_drive and path_drive):
                return path_norm
            if root_drive.group(1).lower() != path_drive.group(1).lower():
                return path_norm
            root_norm = root_norm[2:]
            path_norm = path_norm[2:]

        return posixpath.relpath(path_norm, root_norm or '/')

    @staticmethod
    def _to_posix(path: str) -> str:
        return path.replace('\\', '/')
