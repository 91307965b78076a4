"""
Entry point for python -m git_version_suggester

Allows running the package as a module:
    python -m git_version_suggester
"""

from .cli import main

if __name__ == '__main__':
    main()
