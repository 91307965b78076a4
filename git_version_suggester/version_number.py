"""
Version number parsing, comparison and increment.

A VersionNumber is a dot-separated sequence of numeric segments together with
a flag telling whether the original string was a plain semantic version
(MAJOR.MINOR.PATCH with optional build metadata). All non-numeric parts of a
segment are stripped, so snapshot strings like "1.2-SNAPSHOT" still parse.
"""

import re
from enum import Enum
from functools import total_ordering
from typing import Iterable, List, Tuple

SEMANTIC_VERSION_PATTERN = re.compile(
    r'^\d+\.\d+\.\d+(\+[0-9a-zA-Z-]+(\.[0-9a-zA-Z-]+)*)?$'
)
SEGMENT_PATTERN = re.compile(r'^(\d+)')


class VersionParseError(ValueError):
    """Raised when a string does not contain any version number segments."""
    pass


class VersionSegment(Enum):
    """Segment of a three part version that should be incremented next."""
    MINOR = 'minor'
    PATCH = 'patch'


def is_valid_semantic_version(version_string: str) -> bool:
    """
    Check whether the string is a plain semantic version.

    Only MAJOR.MINOR.PATCH with optional build metadata is accepted; pre-release
    identifiers are not.
    """
    return SEMANTIC_VERSION_PATTERN.match(version_string) is not None


def _extract_segments(version_string: str) -> List[str]:
    segments = []
    for part in version_string.split('.'):
        match = SEGMENT_PATTERN.match(part)
        if match:
            segments.append(match.group(1))
    return segments


@total_ordering
class VersionNumber:
    """Immutable version number made of numeric segments."""

    __slots__ = ('_segments', '_is_semantic')

    def __init__(self, segments: Iterable[str], is_semantic: bool = False):
        segments = tuple(str(segment) for segment in segments)
        if not segments:
            raise VersionParseError('A version number needs at least one segment')
        for segment in segments:
            if not segment.isdecimal():
                raise VersionParseError(f'Version segments must be numeric (got: {segment!r})')
        self._segments = segments
        self._is_semantic = is_semantic

    @classmethod
    def parse(cls, version_string: str) -> 'VersionNumber':
        """
        Parse a tag or a fully resolved version.

        Args:
            version_string: Version like "1.2.3", "1.2.3+build.5" or "1.2-SNAPSHOT"

        Returns:
            VersionNumber: Parsed version, flagged semantic only for plain X.Y.Z strings

        Raises:
            VersionParseError: If the string is empty or has no numeric segments
        """
        return cls._parse(version_string, force_non_semantic=False)

    @classmethod
    def parse_version_hint(cls, version_string: str) -> 'VersionNumber':
        """
        Parse a version hint such as "1" or "1.2".

        A hint is never semantic, even when it looks like a full version.
        """
        return cls._parse(version_string, force_non_semantic=True)

    @classmethod
    def _parse(cls, version_string: str, force_non_semantic: bool) -> 'VersionNumber':
        if version_string is None:
            raise VersionParseError('version string cannot be None')
        if not version_string:
            raise VersionParseError('version string cannot be empty')

        segments = _extract_segments(version_string)
        if not segments:
            raise VersionParseError(f'No version number segments found in {version_string}')

        is_semantic = False if force_non_semantic else is_valid_semantic_version(version_string)
        return cls(segments, is_semantic)

    @property
    def segments(self) -> Tuple[str, ...]:
        return self._segments

    @property
    def is_semantic(self) -> bool:
        return self._is_semantic

    def __len__(self) -> int:
        return len(self._segments)

    def shorten(self, new_length: int) -> 'VersionNumber':
        """Keep only the first new_length segments."""
        return VersionNumber(self._segments[:new_length], self._is_semantic)

    def unlock_version(self) -> 'VersionNumber':
        """Pad to three segments with zeros and drop the semantic flag."""
        padding = ('0',) * (3 - len(self._segments))
        return VersionNumber(self._segments + padding, False)

    def adapt_to(self, example: 'VersionNumber') -> 'VersionNumber':
        """Resize to three segments when the example has three, otherwise keep the length."""
        new_size = 3 if len(example) == 3 else len(self._segments)
        adapted = self._segments[:new_size]
        adapted += ('0',) * (new_size - len(adapted))
        return VersionNumber(adapted, False)

    def increment_patch_segment(self) -> 'VersionNumber':
        last = int(self._segments[-1]) + 1
        return VersionNumber(self._segments[:-1] + (str(last),), self._is_semantic)

    def increment_minor_segment(self) -> 'VersionNumber':
        if len(self._segments) < 2:
            raise ValueError(f'Cannot increment minor segment of {self}, it has only one segment')
        minor = int(self._segments[-2]) + 1
        return VersionNumber(self._segments[:-2] + (str(minor), '0'), self._is_semantic)

    def _compare(self, other: 'VersionNumber') -> int:
        for mine, theirs in zip(self._segments, other._segments):
            difference = int(mine) - int(theirs)
            if difference:
                return -1 if difference < 0 else 1
        # Non-semantic versions sort before semantic ones
        if self._is_semantic != other._is_semantic:
            return 1 if self._is_semantic else -1
        if len(self._segments) != len(other._segments):
            return -1 if len(self._segments) < len(other._segments) else 1
        return 0

    def __eq__(self, other):
        if not isinstance(other, VersionNumber):
            return NotImplemented
        return self._compare(other) == 0

    def __lt__(self, other):
        if not isinstance(other, VersionNumber):
            return NotImplemented
        return self._compare(other) < 0

    def __hash__(self):
        return hash((tuple(int(segment) for segment in self._segments), self._is_semantic))

    def __str__(self) -> str:
        return '.'.join(self._segments)

    def __repr__(self) -> str:
        return f'VersionNumber({str(self)!r}, is_semantic={self._is_semantic})'
