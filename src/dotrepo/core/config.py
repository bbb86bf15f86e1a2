#!/usr/bin/env python3
"""
Settings for dotrepo.

A Settings value carries the on-disk layout (base directory of bare
repositories and the shared working directory), the remote name and the
commit author identity. It is built once per invocation from defaults, an
optional YAML or TOML settings file and the environment, then passed to every
operation.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import toml
import yaml

from .errors import AuthorIdentityError, ConfigError
from ..utils.logger import get_logger

DEFAULT_BASEDIR = './dotfiles'
DEFAULT_WORKDIR = './workdir'
DEFAULT_REMOTE = 'origin'
DEFAULT_LOG_LEVEL = 'WARNING'

AUTHOR_NAME_ENV = 'GIT_AUTHOR_NAME'
AUTHOR_EMAIL_ENV = 'GIT_AUTHOR_EMAIL'

SETTINGS_FILENAMES = ('.dotrepo.yaml', '.dotrepo.yml', '.dotrepo.toml')

logger = get_logger(__name__)


@dataclass
class AuthorIdentity:
    """Name and email recorded as author and committer of saved changes."""

    name: str = ''
    email: str = ''

    @property
    def is_complete(self) -> bool:
        return bool(self.name) and bool(self.email)

    def validate(self) -> 'AuthorIdentity':
        if not self.is_complete:
            raise AuthorIdentityError(
                f"{AUTHOR_NAME_ENV} and {AUTHOR_EMAIL_ENV} environment variables must exist."
            )
        return self

    def to_environment(self) -> Dict[str, str]:
        """Git environment variables for a commit made as this identity."""
        return {
            'GIT_AUTHOR_NAME': self.name,
            'GIT_AUTHOR_EMAIL': self.email,
            'GIT_COMMITTER_NAME': self.name,
            'GIT_COMMITTER_EMAIL': self.email,
        }

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


@dataclass
class Settings:
    """Per-invocation configuration."""

    basedir: Path = field(default_factory=lambda: Path(DEFAULT_BASEDIR))
    workdir: Path = field(default_factory=lambda: Path(DEFAULT_WORKDIR))
    remote_name: str = DEFAULT_REMOTE
    author: AuthorIdentity = field(default_factory=AuthorIdentity)
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        self.basedir = Path(self.basedir)
        self.workdir = Path(self.workdir)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'basedir': str(self.basedir),
            'workdir': str(self.workdir),
            'remote': self.remote_name,
            'author': {'name': self.author.name, 'email': self.author.email},
            'log_level': self.log_level,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Settings':
        """Create instance from a parsed settings file."""
        if not isinstance(data, Mapping):
            raise ConfigError("settings must be a mapping")

        author = data.get('author') or {}
        if not isinstance(author, Mapping):
            raise ConfigError("'author' must be a mapping with 'name' and 'email'")

        return cls(
            basedir=Path(data.get('basedir', DEFAULT_BASEDIR)),
            workdir=Path(data.get('workdir', DEFAULT_WORKDIR)),
            remote_name=str(data.get('remote', DEFAULT_REMOTE)),
            author=AuthorIdentity(
                name=str(author.get('name', '')),
                email=str(author.get('email', '')),
            ),
            log_level=str(data.get('log_level', DEFAULT_LOG_LEVEL)),
        )


def find_settings_file(search_dir: Optional[Path] = None) -> Optional[Path]:
    """Return the first settings file present in search_dir."""
    search_dir = Path(search_dir) if search_dir else Path.cwd()
    for filename in SETTINGS_FILENAMES:
        candidate = search_dir / filename
        if candidate.is_file():
            return candidate
    return None


def read_settings_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Parse a YAML or TOML settings file."""
    path = Path(path)
    suffix = path.suffix.lower()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            if suffix in ('.yaml', '.yml'):
                data = yaml.safe_load(f)
            elif suffix == '.toml':
                data = toml.load(f)
            else:
                raise ConfigError(f"unsupported settings file type: {path}")
    except (OSError, yaml.YAMLError, toml.TomlDecodeError) as e:
        raise ConfigError(f"could not read settings file {path}: {e}") from e

    return data or {}


def load_settings(
    config_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Build Settings from defaults, a settings file and the environment.

    Args:
        config_file: Explicit settings file. When omitted, the current
            directory is searched for one of SETTINGS_FILENAMES.
        environ: Environment to read the author identity from; defaults
            to os.environ.

    Returns:
        The resolved Settings
    """
    if environ is None:
        environ = os.environ

    if config_file is None:
        config_file = find_settings_file()

    if config_file is not None:
        logger.debug(f"Loading settings from {config_file}")
        settings = Settings.from_dict(read_settings_file(config_file))
    else:
        settings = Settings()

    # Environment wins over the settings file
    if environ.get(AUTHOR_NAME_ENV):
        settings.author.name = environ[AUTHOR_NAME_ENV]
    if environ.get(AUTHOR_EMAIL_ENV):
        settings.author.email = environ[AUTHOR_EMAIL_ENV]

    return settings
