"""
Git Version Suggester

Suggests a build or release version for an artifact from the state of a git
repository: version tags, current branch, detached HEAD ancestry and merge
history.
"""

from ._version import __version__
from .config import SuggesterConfig
from .suggester import suggest_version

__author__ = "git-version-suggester contributors"
__description__ = "Suggest build and release versions from git state"
