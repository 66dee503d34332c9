"""CLI commands that inspect or prepare a single repository"""

import shutil
import sys
from pathlib import Path
from typing import Optional

import click

from gitsource.cli.utils.logging import fail, logger, report
from gitsource.config import get_default_remote, get_remotes_dir
from gitsource.git import (
    DiagnosticLog,
    GitError,
    GitRepo,
    default_revision,
    find_remote_revision,
)
from gitsource.git.materialize import init_package
from gitsource.git.url import parse_repo_url, same_location


@click.command("status")
@click.argument("directory", type=click.Path(file_okay=False), default=".")
def status(directory: str):
    """Show the state of the repository in DIRECTORY.

    Reports the HEAD commit, whether the working tree has local changes,
    the exact tag on HEAD, all tags and the origin URL.
    """
    repo = GitRepo(Path(directory))
    if not repo.dir_exists() or not repo.inside_work_tree():
        logger.error(f"{directory} is not inside a git work tree")
        sys.exit(1)

    try:
        head = repo.get_head_revision()
    except GitError as e:
        fail(e)

    url = repo.get_filtered_remote_url(get_default_remote())
    tags = repo.get_tags() or []

    click.echo(f"head:   {head}")
    click.echo(f"state:  {'dirty' if repo.has_diff() else 'clean'}")
    click.echo(f"tag:    {repo.find_tag(head) or '-'}")
    click.echo(f"tags:   {', '.join(tags) if tags else '-'}")
    click.echo(f"remote: {url if url is not None else '-'}")


def _holds_clone_of(repo: GitRepo, url: str, remote: str) -> bool:
    """Check whether repo is a clone whose remote designates url."""
    if not repo.is_repo_root():
        return False
    origin = repo.get_remote_url(remote)
    return origin is not None and same_location(origin, url)


@click.command("resolve")
@click.argument("url")
@click.option("--rev", "-r", default=None, help="Commit, branch or tag to resolve.")
@click.option(
    "--dir",
    "-d",
    "directory",
    type=click.Path(file_okay=False),
    default=None,
    help="Clone of URL to fetch into (defaults to a cache directory for URL).",
)
def resolve(url: str, rev: Optional[str], directory: Optional[str]):
    """Fetch URL and print the commit a revision resolves to.

    Without --rev the remote's default branch is resolved. An existing --dir
    must be a clone of URL; a stale cache directory is cloned again.

    Example:

      gitsource resolve https://github.com/user/repo --rev v1.0
    """
    if directory is None:
        path = get_remotes_dir() / parse_repo_url(url)
    else:
        path = Path(directory)

    log = DiagnosticLog()
    repo = GitRepo(path)
    remote = get_default_remote()
    occupied = repo.dir_exists() and any(path.iterdir())

    # remote-tracking refs of any other repository would answer for URL
    if occupied and not _holds_clone_of(repo, url, remote):
        if directory is not None:
            logger.error(f"'{path}' is not a clone of {url}")
            sys.exit(1)
        log = log.info(f"'{path}' does not hold a clone of {url}; cloning again")
        shutil.rmtree(path)
        occupied = False

    try:
        if not occupied:
            log = log.info(f"cloning {url} into {path}")
            repo.clone(url)
        if rev is None:
            rev = default_revision(repo, remote)
        commit = find_remote_revision(repo, remote, rev, remote, log)
    except GitError as e:
        fail(e)

    report(log)
    click.echo(commit)


@click.command("init")
@click.argument("directory", type=click.Path(file_okay=False), default=".")
def init(directory: str):
    """Initialize a git repository in DIRECTORY unless it is already in one."""
    try:
        log = init_package(Path(directory))
    except GitError as e:
        fail(e)
    report(log)
