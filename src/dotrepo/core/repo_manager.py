#!/usr/bin/env python3
"""
Repository manager for dotrepo.

Maps repo names onto bare repositories under the base directory and runs
each command against the shared working directory.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Union

from .auth import resolve_auth_environment
from .config import AuthorIdentity, Settings
from .errors import DotfilesError, FeatureNotImplementedError, RepoExistsError, RepoNotFoundError
from .git_handler import BareRepoHandler, FileStatus
from ..utils.logger import get_logger
from ..utils.path import BARE_SUFFIX, bare_repo_path, derive_repo_name, relative_to_workdir, strip_extension


@dataclass
class RepoStatus:
    """Worktree changes of one repository."""

    name: str
    files: List[FileStatus] = field(default_factory=list)


class RepoManager:
    """Runs dotfile repo commands against a fixed directory layout."""

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize repository manager.

        Args:
            settings: Directory layout, remote name and author identity.
                Defaults to ./dotfiles and ./workdir.
        """
        self.logger = get_logger(f"{__name__}.RepoManager")
        self.settings = settings or Settings()

    @property
    def basedir(self) -> Path:
        return self.settings.basedir

    @property
    def workdir(self) -> Path:
        return self.settings.workdir

    def repo_path(self, name: str) -> Path:
        """Get the bare repository path for a repo name."""
        return bare_repo_path(self.basedir, name)

    def open(self, name: str) -> BareRepoHandler:
        """Open a repo against the shared working directory.

        Raises:
            RepoNotFoundError: If no bare repository exists for name.
                Nothing is created on disk in that case.
        """
        path = self.repo_path(name)
        if not path.is_dir():
            raise RepoNotFoundError(name, path)
        return BareRepoHandler(path, self.workdir, remote_name=self.settings.remote_name)

    def init(self, repo_url: str) -> str:
        """Clone repo_url as a bare repository and check it out.

        Returns:
            The repo name derived from the URL
        """
        self.logger.info(f"Initialising repo {repo_url}")

        name = derive_repo_name(repo_url)
        path = self.repo_path(name)
        self.logger.info(f"Repo name = {name}, path = {path}")
        if path.exists():
            raise RepoExistsError(name, path)

        env = resolve_auth_environment(repo_url)
        handler = BareRepoHandler.clone(
            repo_url,
            path,
            self.workdir,
            remote_name=self.settings.remote_name,
            env=env,
        )
        handler.checkout(force=True)
        return name

    def pull(self, name: str):
        """Pull changes from the remote into the repo and working directory."""
        self.open(name).pull()

    def add(self, name: str, file_path: Union[str, Path]) -> str:
        """Stage a file of the working directory.

        Returns:
            The staged path, relative to the working directory root
        """
        self.logger.info(f"Adding {file_path} to {name}")
        handler = self.open(name)
        rel_path = relative_to_workdir(file_path, self.workdir)
        handler.add(rel_path)
        return rel_path

    def save(self, name: str, message: str, author: Optional[AuthorIdentity] = None) -> str:
        """Commit all modified and staged files, then push.

        A failed push leaves the commit in place.

        Returns:
            The sha of the new commit
        """
        author = (author or self.settings.author).validate()
        handler = self.open(name)
        sha = handler.commit(message, author)
        handler.push()
        return sha

    def push(self, name: str):
        """Push committed changes without committing first."""
        self.open(name).push()

    def undo(self, name: str):
        """Undo staged changes; working directory files are kept."""
        self.open(name).reset_index()

    def list_repos(self, verbose: bool = False) -> List[str]:
        """List the names of the entries in the base directory."""
        if verbose:
            raise FeatureNotImplementedError("verbose listing not implemented.")
        return [strip_extension(entry.name) for entry in self._read_basedir()]

    def repo_names(self) -> List[str]:
        """Names of every bare repository in the base directory."""
        return [
            entry.name[:-len(BARE_SUFFIX)]
            for entry in self._read_basedir()
            if entry.name.endswith(BARE_SUFFIX) and entry.is_dir()
        ]

    def status(self, name: Optional[str] = None) -> Iterator[RepoStatus]:
        """Yield the worktree changes of one repo, or of every repo.

        Only modified, added and deleted paths are reported. Iteration stops
        at the first repo whose status cannot be read.
        """
        names = [name] if name else self.repo_names()
        for repo_name in names:
            yield self.repo_status(repo_name)

    def repo_status(self, name: str) -> RepoStatus:
        """Get the modified, added and deleted paths of one repo."""
        handler = self.open(name)
        changes = [s for s in handler.status() if s.is_worktree_change]
        return RepoStatus(name=name, files=changes)

    def _read_basedir(self) -> List[Path]:
        try:
            return sorted(self.basedir.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise DotfilesError(f"cannot read {self.basedir}: {e}") from e
