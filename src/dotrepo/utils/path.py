import os
import re
from pathlib import Path
from typing import Union
from urllib.parse import urlparse

from ..core.errors import InvalidRepoUrlError, PathOutsideWorkdirError

BARE_SUFFIX = '.git'


def derive_repo_name(repo_url: str) -> str:
    """Derive a repo name from the last path segment of a remote URL.

    Both ``https://host/user/dotfiles-core.git`` and the scp-like
    ``git@host:user/dotfiles-core.git`` give ``dotfiles-core``.
    """
    url = repo_url.strip()
    if '://' in url:
        # Only the path names a repo, never the host
        url = urlparse(url).path
    url = url.rstrip('/')
    # scp-like urls separate host and path with ':'
    name = re.split(r'[/:]', url)[-1] if url else ''
    if name.endswith(BARE_SUFFIX):
        name = name[:-len(BARE_SUFFIX)]
    if not name or name in ('.', '..'):
        raise InvalidRepoUrlError(f"cannot derive a repo name from '{repo_url}'")
    return name


def bare_repo_path(basedir: Union[str, Path], name: str) -> Path:
    return Path(basedir) / f"{name}{BARE_SUFFIX}"


def relative_to_workdir(file_path: Union[str, Path], workdir: Union[str, Path]) -> str:
    """Return file_path relative to the working directory root.

    The absolute working directory prefix is stripped, leaving a path with no
    leading separator, as expected by the staging index.
    """
    abs_src = Path(os.path.abspath(file_path))
    abs_dst = Path(os.path.abspath(workdir))
    try:
        rel_path = abs_src.relative_to(abs_dst)
    except ValueError:
        raise PathOutsideWorkdirError(abs_src, abs_dst)
    if rel_path == Path('.'):
        raise PathOutsideWorkdirError(abs_src, abs_dst)
    return rel_path.as_posix()


def strip_extension(entry_name: str) -> str:
    return os.path.splitext(entry_name)[0]
