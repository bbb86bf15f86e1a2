"""
dotrepo - A program for working with dotfile git repos

Each dotfile collection is cloned from its remote as a bare Git repository and
checked out into a single shared working directory.
"""

__version__ = "1.0.0"
__description__ = "A program for working with dotfile git repos"

from .core.config import Settings, load_settings
from .core.errors import DotfilesError
from .core.repo_manager import RepoManager

# Version info
VERSION = __version__
VERSION_INFO = tuple(map(int, __version__.split('.')))

__all__ = [
    'RepoManager',
    'Settings',
    'load_settings',
    'DotfilesError',
    'VERSION',
    'VERSION_INFO',
]
