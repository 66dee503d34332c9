"""CLI commands for dependency checkouts"""

import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError

from gitsource.cli.utils.logging import fail, logger, report
from gitsource.config import get_deps_dir
from gitsource.git import GitError
from gitsource.git.materialize import describe_dependencies, sync_manifest
from gitsource.model.manifest import LockFile, Manifest

DEFAULT_LOCK_SUFFIX = ".lock.yaml"


@click.group(name="deps")
def deps():
    """Manage git dependencies."""
    pass


def _deps_dir_option(func):
    return click.option(
        "--deps-dir",
        type=click.Path(file_okay=False),
        default=None,
        help="Directory holding dependency checkouts.",
        envvar="GITSOURCE_DEPS_DIR",
    )(func)


@deps.command("sync")
@click.argument("manifest_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--lock",
    "lock_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Lock file with resolved commits (defaults to MANIFEST.lock.yaml).",
)
@click.option(
    "--update",
    "-u",
    is_flag=True,
    help="Ignore locked commits and resolve every revision again.",
)
@_deps_dir_option
def sync(
    manifest_path: str, lock_path: Optional[str], update: bool, deps_dir: Optional[str]
):
    """Check out every dependency declared in MANIFEST_PATH.

    Dependencies are pinned to the commits recorded in the lock file as long
    as their declaration is unchanged; the lock file is rewritten afterwards.

    Example:

      gitsource deps sync deps.yaml
    """
    manifest_file = Path(manifest_path)
    if lock_path is None:
        lock_file = manifest_file.with_name(manifest_file.stem + DEFAULT_LOCK_SUFFIX)
    else:
        lock_file = Path(lock_path)
    target_dir = Path(deps_dir) if deps_dir else get_deps_dir()

    try:
        manifest = Manifest.from_file(manifest_file)
        lock = LockFile.from_file(lock_file)
    except (ValidationError, yaml.YAMLError) as e:
        logger.error(f"Failed to load manifest: {e}")
        sys.exit(1)

    if not manifest.dependencies:
        logger.info("No dependencies declared")
        return

    try:
        new_lock, results, log = sync_manifest(manifest, target_dir, lock, update)
    except GitError as e:
        fail(e)

    report(log)
    for result in results:
        suffix = f" ({result.tag})" if result.tag else ""
        click.echo(f"{result.name}: {result.rev}{suffix}")

    new_lock.save(lock_file)
    logger.debug(f"Wrote {lock_file}")


@deps.command("describe")
@_deps_dir_option
def describe(deps_dir: Optional[str]):
    """List checked out dependencies and their state."""
    target_dir = Path(deps_dir) if deps_dir else get_deps_dir()
    results = describe_dependencies(target_dir)
    if not results:
        logger.info(f"No dependencies in {target_dir}")
        return

    for info in results:
        state = "clean" if info["clean"] else "dirty"
        tag = f" ({info['tag']})" if info["tag"] else ""
        click.echo(f"{info['name']}: {info['head']}{tag} [{state}] {info['url']}")
