"""
Configuration management for the git version suggester.

Handles environment variable loading, validation, and provides a read-only
configuration object passed to every component.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv
from loguru import logger

from .utils import parse_version_segment, split_comma_separated
from .version_number import VersionNumber, VersionParseError, VersionSegment

# Load environment variables from .env file
load_dotenv()

ORIGINATING_BRANCH_SOURCES = ('commit-log', 'reflog')
INCREMENT_FOR_EXISTING_TAG_VALUES = ('default', 'patch', 'minor')


def get_config_value(cli_args, field_name: str, env_key: str, default, value_type: type = str):
    """
    Get configuration value with proper precedence: CLI args > env vars > defaults.

    Args:
        cli_args: CLI arguments object or None
        field_name: Name of the CLI argument field
        env_key: Environment variable key
        default: Default value if neither CLI nor env var is set
        value_type: Type to convert the value to (str, int, bool)

    Returns:
        The configuration value converted to the specified type
    """
    cli_value = getattr(cli_args, field_name, None) if cli_args else None
    if cli_value is not None:
        return cli_value

    env_value = os.environ.get(env_key, '')

    # Handle boolean conversion specially
    if value_type == bool:
        if env_value.strip().lower() in ('true', '1', 'yes'):
            return True
        elif env_value.strip().lower() in ('false', '0', 'no'):
            return False
        return default

    if not env_value:
        return default

    try:
        return value_type(env_value)
    except (ValueError, TypeError):
        return default


def get_config_value_str(cli_args, field_name: str, env_key: str, default: Optional[str] = '') -> Optional[str]:
    """Get string configuration value."""
    return get_config_value(cli_args, field_name, env_key, default, str)


def get_config_value_int(cli_args, field_name: str, env_key: str, default: Optional[int] = 0) -> Optional[int]:
    """Get integer configuration value."""
    return get_config_value(cli_args, field_name, env_key, default, int)


def get_config_value_bool(cli_args, field_name: str, env_key: str, default: bool = False) -> bool:
    """Get boolean configuration value."""
    return get_config_value(cli_args, field_name, env_key, default, bool)


@dataclass(frozen=True)
class SuggesterConfig:
    """Configuration object containing all suggester settings."""

    # Repository
    git_repo_path: str = '.'
    version_prefix: str = 'v'

    # Release suggestion
    version_hint: Optional[str] = None
    branches_to_infer_release_versions_for: Tuple[str, ...] = ()
    force_minor_increment_for_branch_prefixes: Tuple[str, ...] = ()
    increment_for_existing_tag: bool = False
    force_segment_increment_for_existing_tag: Optional[VersionSegment] = None
    originating_branch_source: str = 'commit-log'

    # Current version resolution
    try_determining_current_version_from_tag_name: bool = True
    branches_to_use_tags_as_versions_for: Tuple[str, ...] = ()
    fallback_to_branch_name_env: bool = True
    fallback_branch_name_env_name: str = 'BRANCH_NAME'
    fallback_version: str = 'unknown'
    version_from_branch_name_postfix: str = '-SNAPSHOT'
    max_version_length: Optional[int] = None

    # Output
    metadata: Optional[str] = None

    # Logging
    log_level: str = 'INFO'


def _validate_release_config(version_hint: str, suggest_releases: Tuple[str, ...],
                             increment_for_existing_tag: Optional[str],
                             missing_params: list, validation_errors: list) -> None:
    """
    Validate the release suggestion parameters.

    Args:
        version_hint: Version hint string (may be empty)
        suggest_releases: Branches to suggest release versions for
        increment_for_existing_tag: Raw --increment-for-existing-tag value or None
        missing_params: List to append missing parameter errors
        validation_errors: List to append validation errors
    """
    if (suggest_releases or increment_for_existing_tag is not None) and not version_hint:
        missing_params.append('VERSION_HINT is required when suggesting releases '
                              '(use --version-hint or set VERSION_HINT environment variable)')

    if version_hint:
        try:
            VersionNumber.parse_version_hint(version_hint)
        except VersionParseError as e:
            validation_errors.append(f'VERSION_HINT is not a valid version hint ({e})')

    if increment_for_existing_tag is not None and \
            increment_for_existing_tag.strip().lower() not in INCREMENT_FOR_EXISTING_TAG_VALUES:
        validation_errors.append(f'INCREMENT_FOR_EXISTING_TAG must be one of {list(INCREMENT_FOR_EXISTING_TAG_VALUES)} '
                                 f'(got: {increment_for_existing_tag})')


def _validate_output_config(max_version_length: Optional[int], version_postfix: str,
                            originating_branch_source: str, validation_errors: list) -> None:
    if max_version_length is not None and max_version_length <= len(version_postfix):
        validation_errors.append(f'VERSION_MAX_LENGTH must be greater than {len(version_postfix)} '
                                 f'(got: {max_version_length})')

    if originating_branch_source not in ORIGINATING_BRANCH_SOURCES:
        validation_errors.append(f'ORIGINATING_BRANCH_SOURCE must be one of {list(ORIGINATING_BRANCH_SOURCES)} '
                                 f'(got: {originating_branch_source})')


def load_config(cli_args=None) -> Optional[SuggesterConfig]:
    """
    Load and validate configuration from CLI arguments and environment variables.
    CLI arguments take precedence over environment variables.

    Args:
        cli_args: Parsed CLI arguments or None

    Returns:
        SuggesterConfig: Validated configuration object, or None if validation failed
    """
    git_repo_path = get_config_value_str(cli_args, 'path', 'GIT_REPO_PATH', '.')
    version_prefix = get_config_value_str(cli_args, 'version_prefix', 'VERSION_PREFIX', 'v')
    version_hint = get_config_value_str(cli_args, 'version_hint', 'VERSION_HINT', '').strip()

    suggest_releases = tuple(split_comma_separated(
        get_config_value_str(cli_args, 'suggest_releases', 'SUGGEST_RELEASES', '')))
    force_minor_prefixes = tuple(split_comma_separated(
        get_config_value_str(cli_args, 'force_minor_prefixes', 'FORCE_MINOR_PREFIXES', '')))

    # None means the option was not given at all
    increment_for_existing_tag = get_config_value_str(
        cli_args, 'increment_for_existing_tag', 'INCREMENT_FOR_EXISTING_TAG', None)

    metadata = get_config_value_str(cli_args, 'metadata', 'VERSION_METADATA', '').strip() or None
    max_version_length = get_config_value_int(cli_args, 'max_length', 'VERSION_MAX_LENGTH', None)

    fallback_branch_name_env_name = get_config_value_str(cli_args, 'branch_env_name', 'BRANCH_NAME_ENV', 'BRANCH_NAME')
    # --no-branch-env-fallback is a store_true flag, so only True overrides the environment
    if cli_args is not None and getattr(cli_args, 'no_branch_env_fallback', False) is True:
        fallback_to_branch_name_env = False
    else:
        fallback_to_branch_name_env = get_config_value_bool(None, '', 'FALLBACK_TO_BRANCH_NAME_ENV', True)

    if cli_args is not None and getattr(cli_args, 'reflog', False) is True:
        originating_branch_source = 'reflog'
    else:
        originating_branch_source = get_config_value_str(
            None, '', 'ORIGINATING_BRANCH_SOURCE', 'commit-log').strip().lower()

    log_level = get_config_value_str(cli_args, 'log_level', 'LOG_LEVEL', 'INFO').upper()

    missing_params = []
    validation_errors = []

    valid_log_levels = ['TRACE', 'DEBUG', 'VERBOSE', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
    if log_level not in valid_log_levels:
        validation_errors.append(f'LOG_LEVEL must be one of {valid_log_levels} (got: {log_level})')

    # Update logging level early so debug statements work
    if log_level in valid_log_levels:
        from .logging_config import setup_logging
        setup_logging(log_level)

    _validate_release_config(version_hint, suggest_releases, increment_for_existing_tag,
                             missing_params, validation_errors)
    _validate_output_config(max_version_length, '-SNAPSHOT', originating_branch_source, validation_errors)

    if missing_params:
        logger.error('❌ Configuration Error: Missing required parameters:')
        for i, error_msg in enumerate(missing_params, 1):
            logger.error(f'   {i}. {error_msg}')
        return None

    if validation_errors:
        logger.error('❌ Configuration Error:')
        for i, error_msg in enumerate(validation_errors, 1):
            logger.error(f'   {i}. {error_msg}')
        return None

    config = SuggesterConfig(
        git_repo_path=git_repo_path,
        version_prefix=version_prefix,
        version_hint=version_hint or None,
        branches_to_infer_release_versions_for=suggest_releases,
        force_minor_increment_for_branch_prefixes=force_minor_prefixes,
        increment_for_existing_tag=increment_for_existing_tag is not None,
        force_segment_increment_for_existing_tag=parse_version_segment(increment_for_existing_tag),
        originating_branch_source=originating_branch_source,
        fallback_to_branch_name_env=fallback_to_branch_name_env,
        fallback_branch_name_env_name=fallback_branch_name_env_name,
        max_version_length=max_version_length,
        metadata=metadata,
        log_level=log_level
    )

    logger.debug(f'GIT_REPO_PATH = {config.git_repo_path}')
    logger.debug(f'VERSION_PREFIX = {config.version_prefix}')
    logger.debug(f'VERSION_HINT = {config.version_hint}')
    logger.debug(f'SUGGEST_RELEASES = {list(config.branches_to_infer_release_versions_for)}')
    logger.debug(f'FORCE_MINOR_PREFIXES = {list(config.force_minor_increment_for_branch_prefixes)}')
    logger.debug(f'INCREMENT_FOR_EXISTING_TAG = {increment_for_existing_tag}')
    logger.debug(f'ORIGINATING_BRANCH_SOURCE = {config.originating_branch_source}')
    logger.debug(f'FALLBACK_TO_BRANCH_NAME_ENV = {config.fallback_to_branch_name_env} '
                 f'({config.fallback_branch_name_env_name})')
    logger.debug(f'VERSION_MAX_LENGTH = {config.max_version_length}')
    logger.debug(f'VERSION_METADATA = {config.metadata}')

    return config
