"""
Pytest configuration and shared fixtures for test suite.

Provides mock repositories and real temporary git repositories
built with the git executable.
"""

import os
import shutil
import subprocess
import pytest
from unittest.mock import MagicMock
from loguru import logger


class GitTestRepo:
    """Small helper driving git in a temporary directory."""

    def __init__(self, path):
        self.path = str(path)
        self._counter = 0

    def git(self, *args):
        result = subprocess.run(
            ['git', '-c', 'user.name=Test User', '-c', 'user.email=test@example.com',
             '-c', 'commit.gpgsign=false', '-c', 'tag.gpgsign=false', *args],
            cwd=self.path,
            capture_output=True,
            text=True,
            check=True
        )
        return result.stdout.strip()

    def init(self, branch='master'):
        self.git('init', '-q')
        self.git('symbolic-ref', 'HEAD', f'refs/heads/{branch}')
        return self

    def commit(self, message=None):
        self._counter += 1
        filename = os.path.join(self.path, f'file{self._counter}.txt')
        with open(filename, 'w') as f:
            f.write(f'content {self._counter}\n')
        self.git('add', '.')
        self.git('commit', '-q', '-m', message or f'Commit {self._counter}')
        return self.head()

    def head(self):
        return self.git('rev-parse', 'HEAD')

    def tag(self, name, annotated=False):
        if annotated:
            self.git('tag', '-a', name, '-m', f'Release {name}')
        else:
            self.git('tag', name)

    def checkout(self, ref, create=False):
        if create:
            self.git('checkout', '-q', '-b', ref)
        else:
            self.git('checkout', '-q', ref)

    def detach(self):
        self.git('checkout', '-q', '--detach', 'HEAD')

    def merge(self, branch, no_ff=True):
        args = ['merge', '-q', '--no-edit']
        if no_ff:
            args.append('--no-ff')
        self.git(*args, branch)


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    """Create an empty git repository with 'master' as the initial branch."""
    if shutil.which('git') is None:
        pytest.skip('git executable not available')
    monkeypatch.delenv('BRANCH_NAME', raising=False)
    return GitTestRepo(tmp_path).init()


@pytest.fixture
def mock_repo():
    """Create a mock GitRepo on branch 'master' with no tags."""
    repo = MagicMock()
    repo.resolve.return_value = 'a' * 40
    repo.get_branch_name.return_value = 'master'
    repo.get_version_tags_from_commit.return_value = []
    repo.get_all_versions_from_tags.return_value = []
    repo.get_commit_message.return_value = 'Commit 1\n'
    repo.get_ref_log_comments.return_value = []
    return repo


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop log sinks added during a test so they do not outlive captured streams."""
    yield
    logger.remove()
