"""
Shared fixtures: a local "remote" bare repository and an isolated workspace.
"""

import pytest

from dotrepo.core.config import AuthorIdentity, Settings
from dotrepo.core.repo_manager import RepoManager

from . import DEFAULT_TEST_REPO_NAME, TEST_AUTHOR_EMAIL, TEST_AUTHOR_NAME
from .helpers import make_remote


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Run each test from its own empty directory with no author configured."""
    ws = tmp_path / 'workspace'
    ws.mkdir()
    ws = ws.resolve()
    monkeypatch.chdir(ws)
    monkeypatch.delenv('GIT_AUTHOR_NAME', raising=False)
    monkeypatch.delenv('GIT_AUTHOR_EMAIL', raising=False)
    return ws


@pytest.fixture
def remote_repo(tmp_path):
    """A bare remote named dotfiles-core.git."""
    return make_remote(tmp_path, DEFAULT_TEST_REPO_NAME)


@pytest.fixture
def settings(workspace):
    return Settings(
        basedir=workspace / 'dotfiles',
        workdir=workspace / 'workdir',
        author=AuthorIdentity(TEST_AUTHOR_NAME, TEST_AUTHOR_EMAIL),
    )


@pytest.fixture
def manager(settings):
    return RepoManager(settings)


@pytest.fixture
def initialized(manager, remote_repo):
    """A manager with dotfiles-core cloned and checked out."""
    manager.init(str(remote_repo))
    return manager
