#!/usr/bin/env python3
"""
Git repository handler for dotrepo.

This module wraps a bare Git repository bound to a separate work tree. Refs
and remotes are read through a GitPython ``Repo`` on the bare store; commands
that touch the work tree run through a ``git.Git`` rooted at the working
directory with ``GIT_DIR`` and ``GIT_WORK_TREE`` pointing at the pair.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

import git
from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, RemoteProgress, Repo

from .auth import resolve_auth_environment
from .config import AuthorIdentity
from .errors import GitError
from ..utils.logger import get_logger

FETCH_REFSPEC = '+refs/heads/*:refs/remotes/{remote}/*'

# Worktree codes reported by status
MODIFIED = 'M'
ADDED = 'A'
DELETED = 'D'
WORKTREE_CHANGES = (MODIFIED, ADDED, DELETED)


@dataclass
class FileStatus:
    """Status of one path, as reported by ``git status --porcelain``."""

    path: str
    staging: str
    worktree: str

    @property
    def is_worktree_change(self) -> bool:
        return self.worktree in WORKTREE_CHANGES

    def __str__(self) -> str:
        return f"[{self.worktree}] {self.path}"


class CloneProgress(RemoteProgress):
    """Forwards git transfer progress to the debug log."""

    def __init__(self, logger):
        super().__init__()
        self.logger = logger

    def update(self, op_code, cur_count, max_count=None, message=''):
        if op_code & RemoteProgress.END:
            self.logger.debug(f"{self._cur_line}")


def parse_porcelain_status(output: str) -> List[FileStatus]:
    """Parse ``git status --porcelain -z`` output."""
    entries = output.split('\0')
    statuses = []
    i = 0
    while i < len(entries):
        entry = entries[i]
        i += 1
        if len(entry) < 4:
            continue
        staging, worktree, path = entry[0], entry[1], entry[3:]
        if staging in ('R', 'C'):
            # Renames and copies carry the original path as an extra field
            i += 1
        statuses.append(FileStatus(path=path, staging=staging, worktree=worktree))
    return statuses


class BareRepoHandler:
    """Handles Git operations for a bare repository and its shared work tree."""

    def __init__(self, git_dir: Union[str, Path], work_tree: Union[str, Path], remote_name: str = 'origin'):
        """
        Open a bare repository against a work tree.

        Args:
            git_dir: Path to the bare repository
            work_tree: Path to the shared working directory; created if missing
            remote_name: Name of the remote used for pull and push
        """
        self.logger = get_logger(f"{__name__}.BareRepoHandler")
        self.git_dir = Path(git_dir).resolve()
        self.work_tree = Path(work_tree).resolve()
        self.remote_name = remote_name

        try:
            self.repo = Repo(self.git_dir)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise GitError(f"Not a git repository: {self.git_dir}") from e

        self.work_tree.mkdir(parents=True, exist_ok=True)
        self.git = git.Git(str(self.work_tree))
        self.git.update_environment(
            GIT_DIR=str(self.git_dir),
            GIT_WORK_TREE=str(self.work_tree),
        )
        self.logger.debug(f"Opened {self.git_dir} with work tree {self.work_tree}")

    @classmethod
    def clone(cls, url: str, git_dir: Union[str, Path], work_tree: Union[str, Path],
              remote_name: str = 'origin', env: Optional[Dict[str, str]] = None) -> 'BareRepoHandler':
        """Clone url as a bare repository at git_dir and bind it to work_tree."""
        logger = get_logger(f"{__name__}.BareRepoHandler")
        git_dir = Path(git_dir)
        git_dir.parent.mkdir(parents=True, exist_ok=True)

        logger.info(f"Cloning bare repository from {url} to {git_dir}")
        try:
            Repo.clone_from(
                url,
                str(git_dir),
                progress=CloneProgress(logger),
                env=env or None,
                bare=True,
                origin=remote_name,
            )
        except GitCommandError as e:
            raise GitError(f"Failed to clone {url}: {e.stderr.strip() or e}") from e

        handler = cls(git_dir, work_tree, remote_name=remote_name)
        handler.ensure_fetch_refspec()
        return handler

    def _run(self, action: str, *args, env: Optional[Dict[str, str]] = None, **kwargs) -> str:
        """Run a work tree git command, wrapping failures in GitError."""
        try:
            with self.git.custom_environment(**(env or {})):
                return getattr(self.git, action)(*args, **kwargs)
        except GitCommandError as e:
            error_msg = e.stderr.strip() if e.stderr else str(e)
            raise GitError(f"git {action} failed: {error_msg}") from e

    @property
    def current_branch(self) -> str:
        """Get the branch HEAD points at."""
        try:
            return self.repo.head.reference.name
        except TypeError as e:
            raise GitError(f"HEAD is detached in {self.git_dir}") from e

    @property
    def remote_url(self) -> str:
        try:
            return self.repo.remote(self.remote_name).url
        except ValueError as e:
            raise GitError(f"Remote '{self.remote_name}' not configured in {self.git_dir}") from e

    def ensure_fetch_refspec(self):
        """Ensure fetch refspec is configured for remote tracking.

        Bare clones have no fetch refspec, which prevents remote-tracking
        branches from being created.
        """
        expected = FETCH_REFSPEC.format(remote=self.remote_name)
        key = f'remote.{self.remote_name}.fetch'
        try:
            current = self.repo.git.config('--get-all', key)
        except GitCommandError:
            # exit status 1 when the key is unset
            current = ''

        if expected not in current.splitlines():
            self.logger.debug(f"Configuring {key} = {expected}")
            try:
                self.repo.git.config('--add', key, expected)
            except GitCommandError as e:
                raise GitError(f"Failed to configure {key}: {e}") from e

    def checkout(self, force: bool = True):
        """Check out HEAD into the work tree."""
        self._run('checkout', force=force)
        self.logger.info(f"Checked out {self.current_branch} into {self.work_tree}")

    def status(self) -> List[FileStatus]:
        """Get the status of every changed path, sorted by path."""
        output = self._run('status', '--porcelain', '-z')
        return sorted(parse_porcelain_status(output), key=lambda s: s.path)

    def add(self, rel_path: str):
        """Add a path, relative to the work tree root, to the staging area."""
        self._run('add', '--', rel_path)
        self.logger.debug(f"Added file to staging: {rel_path}")

    def commit(self, message: str, author: AuthorIdentity) -> str:
        """Commit all modified and staged files; returns the new commit sha.

        A clean work tree still produces a commit.
        """
        self._run('commit', '--all', '--allow-empty', '-m', message, env=author.to_environment())
        sha = self.repo.head.commit.hexsha
        self.logger.info(f"Created commit {sha[:8]}: {message}")
        return sha

    def push(self, branch: Optional[str] = None):
        """Push a branch to the remote."""
        if branch is None:
            branch = self.current_branch
        env = resolve_auth_environment(self.remote_url)
        self._run('push', self.remote_name, branch, env=env)
        self.logger.info(f"Pushed to {self.remote_name}/{branch}")

    def pull(self, branch: Optional[str] = None):
        """Fast-forward a branch and the work tree from the remote."""
        if branch is None:
            branch = self.current_branch
        env = resolve_auth_environment(self.remote_url)
        self._run('pull', '--ff-only', self.remote_name, branch, env=env)
        self.logger.info(f"Pulled from {self.remote_name}/{branch}")

    def reset_index(self):
        """Unstage all staged changes, leaving work tree files untouched."""
        self._run('reset', '--quiet', '--mixed', 'HEAD')
        self.logger.info(f"Reset staging area of {self.git_dir}")
