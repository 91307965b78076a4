"""
Read-only access to a git repository through the git executable.

Provides the facts the version suggester needs: HEAD commit, version tags,
current branch name (with detached HEAD fallbacks), commit messages and
reflog comments.
"""

import os
import subprocess
from typing import List, Mapping, Optional

from loguru import logger

TAG_REF_PREFIX = 'refs/tags/'
BRANCH_REF_PREFIX = 'refs/heads/'


class GitError(Exception):
    """Raised when the repository cannot be read."""
    pass


class GitRepo:
    """Thin wrapper around git commands run inside one repository."""

    def __init__(self, path: str, git_executable: str = 'git', timeout: int = 30):
        self.path = path
        self.git_executable = git_executable
        self.timeout = timeout

    @classmethod
    def from_dir(cls, path: str) -> 'GitRepo':
        """
        Open the repository containing the given directory.

        Raises:
            GitError: If the directory does not exist or is not inside a git work tree
        """
        if not os.path.isdir(path):
            raise GitError(f'Repository path does not exist: {path}')

        repo = cls(path)
        result = repo._run(['rev-parse', '--is-inside-work-tree'], check=False)
        if result.returncode != 0 or result.stdout.strip() != 'true':
            raise GitError(f'Not a git repository: {path} ({result.stderr.strip()})')
        return repo

    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        command = [self.git_executable] + args
        logger.trace(f"Running: {' '.join(command)}")
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                encoding='utf-8',
                errors='replace',
                timeout=self.timeout,
                cwd=self.path
            )
        except FileNotFoundError as e:
            raise GitError(f'git executable not found: {self.git_executable}') from e
        except subprocess.TimeoutExpired as e:
            raise GitError(f"git {' '.join(args)} timed out after {self.timeout} seconds") from e

        if check and result.returncode != 0:
            raise GitError(f"git {' '.join(args)} failed with exit code {result.returncode}: {result.stderr.strip()}")
        return result

    def _lines(self, args: List[str]) -> List[str]:
        return [line for line in self._run(args).stdout.splitlines() if line.strip()]

    def resolve(self, ref: str) -> Optional[str]:
        """Resolve a ref to a commit id, or None if it does not exist (e.g. HEAD before the first commit)."""
        result = self._run(['rev-parse', '--verify', '--quiet', f'{ref}^{{commit}}'], check=False)
        if result.returncode != 0:
            logger.debug(f'Could not resolve {ref} to a commit')
            return None
        return result.stdout.strip()

    def get_version_tags_from_commit(self, commit: Optional[str], version_prefix: str) -> List[str]:
        """
        List the names of version tags pointing at a commit.

        Annotated tags are peeled to the commit they point at.
        """
        if commit is None:
            return []
        refs = self._lines(['for-each-ref', '--points-at', commit, '--format=%(refname)', TAG_REF_PREFIX])
        tags = [ref[len(TAG_REF_PREFIX):] for ref in refs if ref.startswith(TAG_REF_PREFIX)]
        return [tag for tag in tags if tag.startswith(version_prefix)]

    def get_all_versions_from_tags(self, version_prefix: str) -> List[str]:
        """List the versions of all version tags, with the prefix removed."""
        refs = self._lines(['for-each-ref', '--format=%(refname)', TAG_REF_PREFIX])
        versions = []
        for ref in refs:
            tag = ref[len(TAG_REF_PREFIX):]
            if tag.startswith(version_prefix):
                versions.append(tag[len(version_prefix):])
        return versions

    def get_branch_name(self, fallback_to_branch_name_env: bool = True,
                        fallback_branch_name_env_name: str = 'BRANCH_NAME',
                        environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
        """
        Determine the name of the current branch.

        In detached HEAD state the branch name is taken from an environment
        variable when enabled (build servers like Jenkins set BRANCH_NAME), and
        otherwise from the first local branch that contains HEAD.

        Returns:
            str: Branch name, or None if it cannot be determined
        """
        result = self._run(['symbolic-ref', '--quiet', '--short', 'HEAD'], check=False)
        if result.returncode == 0 and result.stdout.strip():
            return result.stdout.strip()

        logger.debug('HEAD is detached, looking for branch name elsewhere')
        return self.get_branch_name_from_detached_head(
            self.resolve('HEAD'), fallback_to_branch_name_env, fallback_branch_name_env_name, environ)

    def get_branch_name_from_detached_head(self, commit: Optional[str],
                                           fallback_to_branch_name_env: bool = True,
                                           fallback_branch_name_env_name: str = 'BRANCH_NAME',
                                           environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
        if fallback_to_branch_name_env:
            env = os.environ if environ is None else environ
            branch_name = env.get(fallback_branch_name_env_name)
            if branch_name is not None:
                logger.debug(f'Using branch name from {fallback_branch_name_env_name}: {branch_name}')
                return branch_name

        if commit is None:
            return None

        refs = self._lines(['for-each-ref', '--contains', commit, '--format=%(refname)', BRANCH_REF_PREFIX])
        for ref in refs:
            if ref.startswith(BRANCH_REF_PREFIX):
                branch_name = ref[len(BRANCH_REF_PREFIX):]
                logger.debug(f'Commit {commit[:7]} found on branch {branch_name}')
                return branch_name
        return None

    def get_commit_message(self, commit: Optional[str]) -> Optional[str]:
        """Return the full message of a commit."""
        if commit is None:
            return None
        return self._run(['log', '-1', '--format=%B', commit]).stdout

    def get_ref_log_comments(self, commit: Optional[str]) -> List[str]:
        """Return the comments of the HEAD reflog entries that moved HEAD to the commit."""
        if commit is None:
            return []
        result = self._run(['reflog', 'show', '--format=%H%x09%gs', 'HEAD'], check=False)
        if result.returncode != 0:
            # Fresh clones in CI often have no reflog at all
            logger.debug(f'No reflog available: {result.stderr.strip()}')
            return []

        comments = []
        for line in result.stdout.splitlines():
            new_id, _, comment = line.partition('\t')
            if new_id == commit:
                comments.append(comment)
        return comments
