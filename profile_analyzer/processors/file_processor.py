"""
.cpuprofile file reading using streaming parser.
"""

import ijson
from typing import Any, Dict

from ..core.errors import ProfileFormatError


class ProfileFileProcessor:
    """Reads .cpuprofile JSON files using a streaming parser."""

    @staticmethod
    def process_file(file_path: str) -> Dict[str, Any]:
        """
        Read a .cpuprofile file into a dictionary of its top-level fields.

        Args:
            file_path: Path to the profile JSON file

        Returns:
            Dictionary with the raw profile fields (nodes, samples, timeDeltas, ...)

        Raises:
            ProfileFormatError: If the file is not valid JSON
        """
        profile = {}

        print(f"Processing {file_path}...")

        with open(file_path, 'rb') as f:
            try:
                for key, value in ijson.kvitems(f, '', use_float=True):
                    profile[key] = value
                    if isinstance(value, list):
                        print(f"  Read {len(value)} entries from '{key}'")
            except ijson.JSONError as e:
                raise ProfileFormatError(f'Invalid JSON in {file_path}: {e}') from e

        print(f"Completed reading file: {len(profile.get('nodes') or [])} nodes, "
              f"{len(profile.get('samples') or [])} samples found.")

        return profile
