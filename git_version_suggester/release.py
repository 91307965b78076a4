"""
Release version suggestion.

Decides which segment of the next release should be incremented and computes
that release from the version hint and the versions of existing tags.
"""

from typing import Iterable, List, Optional, Sequence

from loguru import logger

from .version_number import VersionNumber, VersionParseError, VersionSegment


def find_version_segment_to_increment(version_hint: str,
                                      originating_branch: Optional[str] = None,
                                      force_minor_prefixes: Sequence[str] = (),
                                      forced_segment: Optional[VersionSegment] = None) -> VersionSegment:
    """
    Pick the version segment to increment for the next release.

    Args:
        version_hint: Version hint such as "1" or "1.2"
        originating_branch: Branch that was merged into HEAD, if known
        force_minor_prefixes: Branch prefixes that force a MINOR increment
        forced_segment: Explicit override, returned as-is when set

    Returns:
        VersionSegment: MINOR or PATCH
    """
    if forced_segment is not None:
        logger.debug(f'Using forced version segment {forced_segment.name}')
        return forced_segment

    hint = VersionNumber.parse_version_hint(version_hint)

    if originating_branch and len(hint) == 1:
        branch = originating_branch.lower()
        for prefix in force_minor_prefixes:
            if prefix and branch.startswith(prefix.lower()):
                logger.debug(f"Branch '{originating_branch}' matches force-minor prefix '{prefix}'")
                return VersionSegment.MINOR

    return VersionSegment.PATCH


def is_version_tag_part_of_release_track(segment: VersionSegment,
                                         version_hint: VersionNumber,
                                         version_tag: VersionNumber) -> bool:
    """
    Check whether a tag belongs to the release track pinned by the hint.

    A PATCH increment pins major and minor, a MINOR increment pins major only.
    Only full X.Y.Z tags belong to a track, so snapshots and tags carrying
    build metadata are left out.
    """
    if not version_tag.is_semantic or len(version_tag) != 3:
        return False

    segments_to_compare = 2 if segment == VersionSegment.PATCH else 1
    segments_to_compare = min(segments_to_compare, len(version_hint))
    if segments_to_compare == 0:
        return False

    hint_segments = version_hint.segments[:segments_to_compare]
    tag_segments = version_tag.segments[:segments_to_compare]
    return [int(s) for s in hint_segments] == [int(s) for s in tag_segments]


def _parse_existing_versions(existing_versions: Iterable[str]) -> List[VersionNumber]:
    versions = []
    for version in existing_versions:
        try:
            versions.append(VersionNumber.parse(version))
        except VersionParseError:
            logger.debug(f'Ignoring tag that is not a version: {version}')
    return sorted(versions)


def suggest_next_release_version(segment: VersionSegment,
                                 version_hint: str,
                                 existing_versions: Iterable[str]) -> VersionNumber:
    """
    Suggest the next release version.

    The latest existing tag in the release track of the hint is incremented. A
    new track starts at the hint itself, and a hint that is ahead of the latest
    tag in its track wins over the tag.

    Args:
        segment: Segment to increment
        version_hint: Version hint such as "1" or "1.2"
        existing_versions: Versions of existing tags with the prefix stripped

    Returns:
        VersionNumber: Suggested release version

    Raises:
        VersionParseError: If the version hint is malformed
    """
    hint = VersionNumber.parse_version_hint(version_hint)

    in_track = [
        version for version in _parse_existing_versions(existing_versions)
        if is_version_tag_part_of_release_track(segment, hint, version)
    ]

    if not in_track:
        logger.debug(f'No existing release in track of hint {hint}, starting a new track')
        return hint.unlock_version()

    latest = in_track[-1]
    logger.debug(f'Latest release in track of hint {hint} is {latest}')

    hint_as_release = VersionNumber.parse(str(hint.unlock_version()))
    if hint_as_release > latest:
        logger.debug(f'Version hint {hint} is ahead of {latest}, using the hint')
        return hint.unlock_version()

    if segment == VersionSegment.MINOR:
        return latest.increment_minor_segment()
    return latest.increment_patch_segment()
