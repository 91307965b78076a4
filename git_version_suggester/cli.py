"""
Command-line interface for the git version suggester.

Parses arguments, loads the configuration and prints the suggested version
on stdout. Everything else (logging, errors, usage) goes to stderr.
"""

import sys
import argparse
from typing import List, Optional

from loguru import logger
from rich.console import Console

from .config import load_config
from .git_repo import GitError
from .logging_config import setup_logging
from .suggester import suggest_version
from .version_number import VersionParseError

# Log output shares stderr so stdout only carries the version
console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='git-version-suggester',
        description='Suggest a version for the current state of a git repository'
    )

    # Repository
    parser.add_argument('-p', '--path', help='The path to the git repository (default: ./)')
    parser.add_argument('--version-prefix', help='Prefix of tags that indicate a version (default: v)')

    # Release suggestion
    parser.add_argument('--suggest-releases', metavar='BRANCH-CSV',
                        help='Comma separated list of branches for which to suggest release versions')
    parser.add_argument('--version-hint',
                        help='The version hint to use when suggesting the next release version, e.g. "1" or "1.2". '
                             'Required when using --suggest-releases')
    parser.add_argument('--force-minor-prefixes',
                        help='Comma separated list of branch prefixes which will force increase of the minor segment '
                             'when the version hint has one segment. Only usable together with --suggest-releases')
    parser.add_argument('--increment-for-existing-tag', nargs='?', const='default',
                        metavar='{default,patch,minor}',
                        help='Suggest a new release even if HEAD already has a version tag. '
                             '"default" or no argument increments as if there was no tag, '
                             '"patch" or "minor" forces that segment')
    parser.add_argument('--reflog', action='store_true',
                        help='Find the merged branch in the HEAD reflog instead of the commit message')

    # Version format
    parser.add_argument('--metadata', help='Build metadata appended to the version as +METADATA')
    parser.add_argument('--max-length', type=int,
                        help='Maximum length of branch snapshot versions (63 makes them valid DNS labels)')

    # Detached HEAD
    parser.add_argument('--branch-env-name',
                        help='Environment variable holding the branch name in detached HEAD state '
                             '(default: BRANCH_NAME)')
    parser.add_argument('--no-branch-env-fallback', action='store_true',
                        help='Do not read the branch name from the environment in detached HEAD state')

    # Logging
    parser.add_argument('--log-level',
                        type=str.upper,
                        choices=['TRACE', 'DEBUG', 'VERBOSE', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Logging level (default: INFO)')

    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return create_parser().parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the application."""
    setup_logging('WARNING', console=console)

    args = parse_arguments(argv)

    config = load_config(args)
    if config is None:
        create_parser().print_help(sys.stderr)
        sys.exit(1)

    setup_logging(config.log_level, console=console)

    try:
        version = suggest_version(config)
    except GitError as e:
        logger.error(f'Failed to read git repository: {e}')
        sys.exit(1)
    except VersionParseError as e:
        logger.error(f'Invalid version: {e}')
        sys.exit(1)

    print(version)


if __name__ == '__main__':
    main()
