"""
Utility functions for the git version suggester.

Contains small parsing helpers shared by the configuration and CLI modules.
"""

from typing import List, Optional

from .version_number import VersionSegment


def split_comma_separated(value: Optional[str]) -> List[str]:
    """
    Split a comma-separated string into trimmed, non-empty items.

    Args:
        value: String like "master, develop" or None

    Returns:
        list: Items in their original order
    """
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]


def parse_version_segment(value: Optional[str]) -> Optional[VersionSegment]:
    """
    Parse a segment name ignoring case.

    "default", empty and unknown values give None, which means the increment
    strategy decides the segment.
    """
    if not value:
        return None
    for segment in VersionSegment:
        if segment.value == value.strip().lower():
            return segment
    return None
