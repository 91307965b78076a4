"""Version file for the git version suggester.

The package version is read from here by pyproject.toml.
"""

from typing import Tuple

__version__ = "1.0.0"
__version_tuple__: Tuple[int, int, int] = (1, 0, 0)
