#!/usr/bin/env python3
"""
Command-line interface for dotrepo.

This module provides the commands for working with dotfile git repos: each
repo is kept as a bare repository under ./dotfiles and checked out into the
shared ./workdir.
"""

import sys
from functools import wraps
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from .core.config import load_settings
from .core.errors import DotfilesError
from .core.repo_manager import RepoManager
from .utils.logger import get_logger, setup_logging

# Rich console for formatted output
console = Console()

logger = get_logger(__name__)


def echo(line: str):
    """Print a plain line of command output."""
    console.print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)


def fail(error: Exception):
    """Report an error on stdout and exit with status 1."""
    logger.debug(f"Command failed: {error!r}")
    console.print(f"[red]{escape(str(error))}[/red]", soft_wrap=True)
    sys.exit(1)


def handle_errors(f):
    """Turn DotfilesError raised by a command into exit status 1."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except DotfilesError as e:
            fail(e)
    return wrapper


def spinner(description: str) -> Progress:
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    )
    progress.add_task(description, total=None)
    return progress


# Main CLI group
@click.group()
@click.option('--config', 'config_file', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Settings file (YAML or TOML)')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--log-file', type=click.Path(path_type=Path), help='Log file path')
@click.pass_context
def cli(ctx, config_file: Optional[Path], verbose: bool, log_file: Optional[Path]):
    """A program for working with dotfile git repos."""
    ctx.ensure_object(dict)

    try:
        settings = load_settings(config_file)
    except DotfilesError as e:
        fail(e)

    setup_logging(
        level=settings.log_level,
        log_file=log_file,
        verbose=verbose
    )

    ctx.obj['settings'] = settings
    ctx.obj['manager'] = RepoManager(settings)


@cli.command()
@click.argument('repo_url', metavar='REPO-URL', type=str)
@click.pass_context
@handle_errors
def init(ctx, repo_url: str):
    """Use a new dotfiles repo."""
    manager: RepoManager = ctx.obj['manager']

    echo(f"Initialising repo {repo_url}")
    with spinner("Cloning repository..."):
        name = manager.init(repo_url)

    echo(f"Repo name = {name}")
    echo(f"Repo path = {manager.repo_path(name)}")
    echo(f"Workdir = {manager.workdir}")


@cli.command()
@click.argument('repo_name', metavar='REPO-NAME', type=str)
@click.pass_context
@handle_errors
def pull(ctx, repo_name: str):
    """Pull changes from the remote dotfile repo."""
    manager: RepoManager = ctx.obj['manager']

    with spinner(f"Pulling {repo_name}..."):
        manager.pull(repo_name)


@cli.command()
@click.argument('repo_name', metavar='REPO-NAME', type=str)
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
@handle_errors
def add(ctx, repo_name: str, file: Path):
    """Add a file to the repo staging index."""
    manager: RepoManager = ctx.obj['manager']

    echo(f"Adding {file} to {repo_name}")
    manager.add(repo_name, file)


@cli.command()
@click.argument('repo_name', metavar='REPO-NAME', type=str)
@click.argument('msg', type=str)
@click.pass_context
@handle_errors
def save(ctx, repo_name: str, msg: str):
    """Save all modified and added files by committing and pushing to the remote dotfile repo."""
    manager: RepoManager = ctx.obj['manager']

    # Validate the author before touching the repo
    author = ctx.obj['settings'].author.validate()
    with spinner(f"Saving {repo_name}..."):
        sha = manager.save(repo_name, msg, author=author)

    echo(f"Saved {repo_name} at {sha[:8]}")


@cli.command()
@click.argument('repo_name', metavar='REPO-NAME', type=str)
@click.pass_context
@handle_errors
def push(ctx, repo_name: str):
    """Push committed changes to the remote dotfile repo."""
    manager: RepoManager = ctx.obj['manager']

    with spinner(f"Pushing {repo_name}..."):
        manager.push(repo_name)


@cli.command()
@click.argument('repo_name', metavar='REPO-NAME', type=str)
@click.pass_context
@handle_errors
def undo(ctx, repo_name: str):
    """Undo staged changes for a dotfile repo."""
    manager: RepoManager = ctx.obj['manager']
    manager.undo(repo_name)


@cli.command('list')
@click.option('--verbose', is_flag=True, help='List all repo information')
@click.pass_context
@handle_errors
def list_repos(ctx, verbose: bool):
    """List the dotfile repos in use."""
    manager: RepoManager = ctx.obj['manager']

    for name in manager.list_repos(verbose=verbose):
        echo(name)


@cli.command()
@click.argument('repo_name', metavar='[REPO-NAME]', type=str, required=False)
@click.pass_context
@handle_errors
def status(ctx, repo_name: Optional[str]):
    """Show the status of files for the dotfile repo."""
    manager: RepoManager = ctx.obj['manager']

    names = [repo_name] if repo_name else manager.repo_names()
    for name in names:
        echo(f"{name}:")
        for file_status in manager.repo_status(name).files:
            echo(str(file_status))


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user.[/yellow]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n[red]Unexpected error: {escape(str(e))}[/red]")
        sys.exit(1)


if __name__ == '__main__':
    main()
