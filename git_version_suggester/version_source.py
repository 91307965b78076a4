"""
Current version resolution.

Turns the facts read from git (version tags on HEAD and the current branch
name) into the version of the current build: the tag version when HEAD is
tagged, a snapshot version derived from the branch name otherwise, and a
fallback constant when neither is known.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from loguru import logger

BRANCH_NAME_UNSAFE_CHARACTERS = re.compile(r'[/-]')


class VersionSource(Enum):
    TAG = 'tag'
    BRANCH = 'branch'
    FALLBACK = 'fallback'


@dataclass(frozen=True)
class Version:
    """Resolved build version and where it came from."""

    value: str
    source: VersionSource

    @property
    def is_from_tag(self) -> bool:
        return self.source == VersionSource.TAG

    def __str__(self) -> str:
        return self.value


def get_most_recent_tag(tags: Iterable[str]) -> Optional[str]:
    """
    Pick the most recent of several tags on the same commit.

    Tags are ordered by length first and then by name, and the last one wins.
    For tags like dev-1, dev-2, dev-10, dev-11 this yields dev-11.

    Returns:
        str: Most recent tag, or None if there are no tags
    """
    ordered = sorted(tags, key=lambda tag: (len(tag), tag))
    return ordered[-1] if ordered else None


def version_from_tag(tag: str, version_prefix: str) -> Version:
    """Strip the version prefix from a tag name."""
    if version_prefix and tag.startswith(version_prefix):
        tag = tag[len(version_prefix):]
    return Version(tag, VersionSource.TAG)


def version_from_branch_name(branch_name: str,
                             postfix: str = '-SNAPSHOT',
                             max_length: Optional[int] = None) -> Version:
    """
    Build a snapshot version from a branch name.

    Slashes and hyphens are replaced with underscores. When max_length is set the
    sanitized name is cut from the right so the whole version, postfix included,
    fits (63 keeps it usable as a DNS label).
    """
    safe_name = BRANCH_NAME_UNSAFE_CHARACTERS.sub('_', branch_name)
    if max_length is not None:
        safe_name = safe_name[:max(max_length - len(postfix), 0)]
    return Version(f'{safe_name}{postfix}', VersionSource.BRANCH)


def should_use_tags(current_branch_name: Optional[str],
                    try_tags: bool = True,
                    branches_to_use_tags_for: Iterable[str] = ()) -> bool:
    """Check whether tags on HEAD may decide the version for this branch."""
    if not try_tags:
        return False
    branches = list(branches_to_use_tags_for)
    return not branches or current_branch_name in branches


def resolve(head_tags: Iterable[str],
            current_branch_name: Optional[str],
            version_prefix: str = 'v',
            fallback_version: str = 'unknown',
            postfix: str = '-SNAPSHOT',
            max_length: Optional[int] = None) -> Version:
    """
    Resolve the version of the current build.

    Args:
        head_tags: Version tags on HEAD, already filtered by prefix
        current_branch_name: Name of the current branch, or None if unknown
        version_prefix: Prefix stripped from the tag name
        fallback_version: Version used when neither tag nor branch is known
        postfix: Suffix added to branch-derived versions
        max_length: Optional maximum length of branch-derived versions

    Returns:
        Version: Resolved version with its source
    """
    tag = get_most_recent_tag(head_tags)
    if tag is not None:
        logger.debug(f'Using version tag {tag} on HEAD')
        return version_from_tag(tag, version_prefix)

    if current_branch_name:
        logger.debug(f'No version tag on HEAD, using branch {current_branch_name}')
        return version_from_branch_name(current_branch_name, postfix, max_length)

    logger.debug(f'Neither version tag nor branch found, using fallback version {fallback_version}')
    return Version(fallback_version, VersionSource.FALLBACK)
