#!/usr/bin/env python3
"""
Tests for ssh agent credential resolution.
"""

from unittest.mock import patch

import pytest

from dotrepo.core import auth
from dotrepo.core.auth import is_ssh_url, resolve_auth_environment
from dotrepo.core.errors import AuthError


class TestIsSshUrl:

    @pytest.mark.parametrize("url", [
        "git@github.com:user/dotfiles-core.git",
        "github.com:user/dotfiles-core.git",
        "ssh://git@example.com/user/dotfiles-core.git",
        "ssh://example.com:2222/dotfiles-core.git",
    ])
    def test_ssh(self, url):
        assert is_ssh_url(url)

    @pytest.mark.parametrize("url", [
        "https://github.com/user/dotfiles-core.git",
        "file:///srv/git/dotfiles-core.git",
        "/srv/git/dotfiles-core.git",
        "../remotes/dotfiles-core.git",
    ])
    def test_not_ssh(self, url):
        assert not is_ssh_url(url)


class TestResolveAuthEnvironment:

    def test_local_remote_needs_no_agent(self):
        assert resolve_auth_environment("/srv/git/dotfiles-core.git", environ={}) == {}

    def test_missing_agent(self):
        with pytest.raises(AuthError) as exc_info:
            resolve_auth_environment("git@github.com:user/dotfiles-core.git", environ={})
        assert "SSH_AUTH_SOCK" in str(exc_info.value)

    def test_agent_socket_not_a_socket(self, tmp_path):
        not_a_socket = tmp_path / "agent.sock"
        not_a_socket.write_text("")
        with pytest.raises(AuthError):
            resolve_auth_environment(
                "git@github.com:user/dotfiles-core.git",
                environ={"SSH_AUTH_SOCK": str(not_a_socket)},
            )

    def test_agent_environment(self):
        with patch.object(auth, "_is_socket", return_value=True):
            env = resolve_auth_environment(
                "git@github.com:user/dotfiles-core.git",
                environ={"SSH_AUTH_SOCK": "/run/user/1000/agent.sock"},
            )

        assert env["SSH_AUTH_SOCK"] == "/run/user/1000/agent.sock"
        assert "BatchMode=yes" in env["GIT_SSH_COMMAND"]
