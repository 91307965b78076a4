"""
Originating branch detection.

Finds the name of the branch that was merged to produce a commit, either from
the commit message (pull request merges, local merges, squash merges) or from
the comments recorded in the HEAD reflog.
"""

import re
from typing import Iterable, Optional

from loguru import logger

PULL_REQUEST_MERGE_FROM_PATH = re.compile(
    r'Pull request #\d+: .+[\s\r\n]+Merge in .*? from \S+/(?P<branch>[^\s/]+) to \S+',
    re.MULTILINE,
)

PULL_REQUEST_MERGE = re.compile(
    r'Pull request #\d+: .+[\s\r\n]+Merge in .*? from (?P<branch>\S+) to \S+',
    re.MULTILINE,
)

LOCAL_MERGE = re.compile(r"Merge branch '(?P<branch>\S+)'", re.MULTILINE)

SQUASH_MERGE = re.compile(r'^(?P<branch>\S+)', re.MULTILINE)

# Order matters: the first pattern that matches wins
MERGE_PATTERNS = (
    ('pull request merge from path', PULL_REQUEST_MERGE_FROM_PATH),
    ('pull request merge', PULL_REQUEST_MERGE),
    ('local merge', LOCAL_MERGE),
    ('squash merge', SQUASH_MERGE),
)

REFLOG_MERGE = re.compile(r'merge (.*?): (.*?)')


def find_originating_branch(commit_message: Optional[str]) -> Optional[str]:
    """
    Find the originating branch of a merge from the full commit message.

    Args:
        commit_message: Full message of the HEAD commit

    Returns:
        str: Branch name from the first matching pattern, or None if nothing matched
    """
    if not commit_message:
        return None

    for name, pattern in MERGE_PATTERNS:
        match = pattern.search(commit_message)
        if match:
            branch = match.group('branch')
            logger.debug(f"Originating branch '{branch}' found by {name} pattern")
            return branch

    return None


def find_originating_branch_from_reflog(ref_log_comments: Optional[Iterable[str]]) -> Optional[str]:
    """Return the branch of the first reflog comment shaped like 'merge <branch>: <message>'."""
    for comment in ref_log_comments or ():
        match = REFLOG_MERGE.fullmatch(comment)
        if match:
            logger.debug(f"Originating branch '{match.group(1)}' found in reflog comment: {comment}")
            return match.group(1)
    return None
