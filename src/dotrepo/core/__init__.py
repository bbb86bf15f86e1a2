"""
Core modules for dotrepo.

This package contains the repository manager, the Git handler for bare
repositories, settings and credential resolution.
"""

from .auth import resolve_auth_environment
from .config import AuthorIdentity, Settings, load_settings
from .errors import (
    AuthError,
    AuthorIdentityError,
    ConfigError,
    DotfilesError,
    FeatureNotImplementedError,
    GitError,
    InvalidRepoUrlError,
    PathOutsideWorkdirError,
    RepoExistsError,
    RepoNotFoundError,
)
from .git_handler import BareRepoHandler, FileStatus
from .repo_manager import RepoManager, RepoStatus

__all__ = [
    'RepoManager',
    'RepoStatus',
    'BareRepoHandler',
    'FileStatus',
    'AuthorIdentity',
    'Settings',
    'load_settings',
    'resolve_auth_environment',
    'DotfilesError',
    'GitError',
    'RepoNotFoundError',
    'RepoExistsError',
    'InvalidRepoUrlError',
    'PathOutsideWorkdirError',
    'AuthorIdentityError',
    'AuthError',
    'ConfigError',
    'FeatureNotImplementedError',
]
