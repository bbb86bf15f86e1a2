#!/usr/bin/env python3
"""
SSH agent credentials for remote operations.

Git performs the transport itself; this module only checks that an ssh agent
is reachable for SSH remotes and builds the environment git runs with.
"""

import os
import re
import stat
from typing import Dict, Mapping, Optional

from .errors import AuthError
from ..utils.logger import get_logger

SSH_AUTH_SOCK_ENV = 'SSH_AUTH_SOCK'

# ssh never prompts; the agent is the only credential source
SSH_COMMAND = 'ssh -o BatchMode=yes'

_SCP_LIKE_URL = re.compile(r'^(?:[\w.+-]+@)?[\w.-]+:(?!//)')

logger = get_logger(__name__)


def is_ssh_url(url: str) -> bool:
    """Check whether url is reached over ssh."""
    if url.startswith(('ssh://', 'git+ssh://', 'ssh+git://')):
        return True
    if '://' in url or os.path.isabs(url):
        return False
    return bool(_SCP_LIKE_URL.match(url))


def _is_socket(path: str) -> bool:
    try:
        return stat.S_ISSOCK(os.stat(path).st_mode)
    except OSError:
        return False


def resolve_auth_environment(url: str, environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Resolve the ssh agent credential for url.

    Args:
        url: Remote URL the command will talk to
        environ: Environment to look the agent up in; defaults to os.environ

    Returns:
        Environment variables to run git with. Empty for non-ssh remotes.

    Raises:
        AuthError: If url is an ssh remote and no agent socket is available
    """
    if not is_ssh_url(url):
        return {}

    if environ is None:
        environ = os.environ

    sock = environ.get(SSH_AUTH_SOCK_ENV)
    if not sock:
        raise AuthError(f"ssh agent not available: {SSH_AUTH_SOCK_ENV} is not set")
    if not _is_socket(sock):
        raise AuthError(f"ssh agent not available: {sock} is not a socket")

    logger.debug(f"Using ssh agent at {sock} for {url}")
    return {
        SSH_AUTH_SOCK_ENV: sock,
        'GIT_SSH_COMMAND': SSH_COMMAND,
    }
