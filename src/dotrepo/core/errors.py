#!/usr/bin/env python3
"""
Exceptions raised by dotrepo.

Every failure surfaced to the command line derives from DotfilesError so the
CLI can report it and exit with status 1.
"""


class DotfilesError(Exception):
    """Base exception for dotrepo errors."""
    pass


class GitError(DotfilesError):
    """Custom exception for Git-related errors."""
    pass


class RepoNotFoundError(DotfilesError):
    """Raised when no bare repository exists for a repo name."""

    def __init__(self, name: str, path):
        self.name = name
        self.path = path
        super().__init__(f"repository '{name}' not found at {path}")


class RepoExistsError(DotfilesError):
    """Raised when init would overwrite an existing bare repository."""

    def __init__(self, name: str, path):
        self.name = name
        self.path = path
        super().__init__(f"repository '{name}' already exists at {path}")


class InvalidRepoUrlError(DotfilesError):
    """Raised when no repo name can be derived from a remote URL."""
    pass


class PathOutsideWorkdirError(DotfilesError):
    """Raised when a file to stage lies outside the working directory."""

    def __init__(self, path, workdir):
        self.path = path
        self.workdir = workdir
        super().__init__(f"{path} is outside the working directory {workdir}")


class AuthorIdentityError(DotfilesError):
    """Raised when the commit author name or email is missing."""
    pass


class AuthError(DotfilesError):
    """Raised when no SSH agent credential can be resolved."""
    pass


class ConfigError(DotfilesError):
    """Raised when the settings file cannot be read."""
    pass


class FeatureNotImplementedError(DotfilesError):
    pass
