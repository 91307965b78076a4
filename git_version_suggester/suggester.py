"""
Version suggestion for the current state of a git repository.

The version is taken directly from git (tag on HEAD, branch name or fallback)
unless the current branch is configured for release versions, or HEAD is
tagged and an increment for existing tags is requested. In those cases the
next release version is inferred from the existing version tags, the version
hint and the branch that was merged into HEAD.
"""

from typing import Optional

from loguru import logger

from .branch_parser import find_originating_branch, find_originating_branch_from_reflog
from .config import SuggesterConfig
from .git_repo import GitRepo
from .release import find_version_segment_to_increment, suggest_next_release_version
from .version_source import Version, resolve, should_use_tags


def should_infer_release_version(version: Version, current_branch: Optional[str],
                                 config: SuggesterConfig) -> bool:
    """
    Decide whether to infer a release version instead of using the git version.

    Args:
        version: Version resolved from git
        current_branch: Name of the current branch, or None if unknown
        config: Suggester configuration

    Returns:
        bool: True if a release version should be inferred
    """
    if version.is_from_tag:
        return config.increment_for_existing_tag
    return current_branch is not None and current_branch in config.branches_to_infer_release_versions_for


def determine_git_version(repo: GitRepo, config: SuggesterConfig, current_branch: Optional[str],
                          head: Optional[str]) -> Version:
    """Resolve the version from the tags on HEAD and the current branch."""
    head_tags = []
    if should_use_tags(current_branch,
                       config.try_determining_current_version_from_tag_name,
                       config.branches_to_use_tags_as_versions_for):
        head_tags = repo.get_version_tags_from_commit(head, config.version_prefix)

    return resolve(
        head_tags,
        current_branch,
        version_prefix=config.version_prefix,
        fallback_version=config.fallback_version,
        postfix=config.version_from_branch_name_postfix,
        max_length=config.max_version_length
    )


def find_head_originating_branch(repo: GitRepo, config: SuggesterConfig, head: Optional[str]) -> Optional[str]:
    """Find the branch that was merged to produce HEAD."""
    if config.originating_branch_source == 'reflog':
        return find_originating_branch_from_reflog(repo.get_ref_log_comments(head))
    return find_originating_branch(repo.get_commit_message(head))


def get_inferred_version(repo: GitRepo, config: SuggesterConfig, head: Optional[str]) -> str:
    """
    Infer the next release version.

    Raises:
        ValueError: If no version hint is configured
        VersionParseError: If the version hint is malformed
    """
    if not config.version_hint:
        raise ValueError('A version hint is required to suggest a release version')

    existing_versions = repo.get_all_versions_from_tags(config.version_prefix)
    logger.debug(f'Found {len(existing_versions)} existing version tag(s)')

    originating_branch = None
    forced_segment = config.force_segment_increment_for_existing_tag
    if forced_segment is None and config.force_minor_increment_for_branch_prefixes:
        originating_branch = find_head_originating_branch(repo, config, head)
        logger.debug(f'Originating branch: {originating_branch or "not found"}')

    segment = find_version_segment_to_increment(
        config.version_hint,
        originating_branch,
        config.force_minor_increment_for_branch_prefixes,
        forced_segment
    )

    inferred = suggest_next_release_version(segment, config.version_hint, existing_versions)
    logger.info(f'Suggesting release version {inferred} ({segment.name} increment, hint {config.version_hint})')
    return str(inferred)


def add_metadata(version: str, metadata: Optional[str]) -> str:
    """Append build metadata as '+metadata'."""
    if not metadata:
        return version
    return f'{version}+{metadata}'


def suggest_version(config: Optional[SuggesterConfig] = None, repo: Optional[GitRepo] = None) -> str:
    """
    Suggest a version for the current state of the repository.

    Args:
        config: Suggester configuration, defaults when None
        repo: Repository to read, opened from config.git_repo_path when None

    Returns:
        str: Suggested version

    Raises:
        GitError: If the repository cannot be read
        ValueError: If a release must be inferred and the version hint is missing or malformed
    """
    config = config or SuggesterConfig()
    repo = repo or GitRepo.from_dir(config.git_repo_path)

    head = repo.resolve('HEAD')
    current_branch = repo.get_branch_name(config.fallback_to_branch_name_env,
                                          config.fallback_branch_name_env_name)
    logger.debug(f'HEAD={head[:7] if head else "None"}, branch={current_branch or "None"}')

    version = determine_git_version(repo, config, current_branch, head)
    logger.debug(f'Version from git: {version.value} (source: {version.source.name})')

    if should_infer_release_version(version, current_branch, config):
        return add_metadata(get_inferred_version(repo, config, head), config.metadata)

    return add_metadata(version.value, config.metadata)
