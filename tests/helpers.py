"""
Helpers that build local git remotes for tests.
"""

from pathlib import Path

from git import Actor, Repo

from . import TEST_AUTHOR_EMAIL, TEST_AUTHOR_NAME

ACTOR = Actor(TEST_AUTHOR_NAME, TEST_AUTHOR_EMAIL)

INITIAL_FILES = {
    '.vimrc': 'set number\n',
    '.config/starship.toml': 'add_newline = false\n',
}


def make_remote(root: Path, name: str, files=None) -> Path:
    """Create a bare repository at root/remotes/<name>.git with one commit."""
    files = INITIAL_FILES if files is None else files

    source = root / 'sources' / name
    repo = Repo.init(source)
    for rel_path, content in files.items():
        path = source / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    repo.index.add(list(files))
    repo.index.commit('Initial dotfiles', author=ACTOR, committer=ACTOR)

    remote = root / 'remotes' / f'{name}.git'
    Repo.clone_from(str(source), str(remote), bare=True)
    return remote


def push_change(root: Path, remote: Path, rel_path: str, content: str, message: str):
    """Commit a change to remote from a separate clone."""
    clone_path = root / 'clones' / remote.name
    clone = Repo.clone_from(str(remote), str(clone_path))
    path = clone_path / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    clone.index.add([rel_path])
    clone.index.commit(message, author=ACTOR, committer=ACTOR)
    clone.remote().push(clone.active_branch.name)
