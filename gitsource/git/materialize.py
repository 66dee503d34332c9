"""
Dependency materialization.

Brings a declared dependency to a checked-out working copy, one lifecycle
step at a time:

    absent -> cloned -> fetched -> resolved(commit) -> checked out

Every step is a separate git operation, so an interrupted run leaves a state
the next run picks up from:
    - a missing directory is cloned
    - a directory that is not the root of its own work tree, or whose origin
      URL no longer matches the declaration, is deleted and cloned again
    - an existing clone is fetched only when the wanted commit is not already
      present, then checked out unless HEAD is already there

Layout:
    <deps_dir>/
    ├── <name>/        # working copy of dependency <name>
    └── <name>.lock    # held while <name> is being materialized

The lock serializes concurrent runs on the same dependency; git itself does
not coordinate two processes mutating one working tree.
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from filelock import FileLock

from gitsource.config import get_default_remote
from gitsource.model.manifest import (
    Dependency,
    LockFile,
    LockedDependency,
    Manifest,
)

from .diagnostics import DiagnosticLog
from .exceptions import GitError, MaterializeError
from .objects import is_full_object_name
from .repo import GitRepo
from .resolve import default_revision, find_remote_revision, resolve_remote_revision
from .url import same_location

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MaterializedDependency:
    """A dependency checked out at a known commit."""

    name: str
    url: str
    dir: Path
    input_rev: Optional[str]
    rev: str
    tag: Optional[str] = None

    def to_locked(self) -> LockedDependency:
        return LockedDependency(
            name=self.name, url=self.url, input_rev=self.input_rev, rev=self.rev
        )


class DependencyMaterializer:
    """Runs the checkout lifecycle for a single dependency.

    The diagnostic log is owned by this run: each step rebinds `self.log` to
    the extended log, and a failure reports everything collected so far.
    """

    def __init__(
        self,
        dep: Dependency,
        deps_dir: Path,
        locked_rev: Optional[str] = None,
        log: Optional[DiagnosticLog] = None,
    ):
        self.dep = dep
        self.repo = GitRepo(Path(deps_dir) / dep.name)
        self.locked_rev = locked_rev
        self.log = log or DiagnosticLog()
        self.remote = get_default_remote()

    @property
    def target_rev(self) -> Optional[str]:
        return self.locked_rev or self.dep.rev

    @property
    def lock_path(self) -> Path:
        return self.repo.dir.parent / f"{self.dep.name}.lock"

    def materialize(self) -> MaterializedDependency:
        """
        Clone or update the dependency and check out the wanted commit.

        Returns:
            The materialized dependency with its resolved commit

        Raises:
            MaterializeError: If any git step fails; carries the diagnostic log
        """
        self.repo.dir.parent.mkdir(parents=True, exist_ok=True)

        with FileLock(str(self.lock_path)):
            try:
                self._materialize()
                rev = self.repo.get_head_revision(self.log)
            except GitError as e:
                log = e.log if len(e.log) > len(self.log) else self.log
                raise MaterializeError(self.dep.name, str(e), log) from e
            tag = self.repo.find_tag(rev)

        return MaterializedDependency(
            name=self.dep.name,
            url=self.dep.url,
            dir=self.repo.dir,
            input_rev=self.dep.rev,
            rev=rev,
            tag=tag,
        )

    def _materialize(self) -> None:
        repo = self.repo
        if not repo.dir_exists():
            self._clone()
        elif not repo.is_repo_root():
            self.log = self.log.warning(
                f"{self.dep.name}: '{repo.dir}' is not a git repository; "
                "deleting it and cloning again"
            )
            self._reclone()
        elif not self._same_url():
            self.log = self.log.info(
                f"{self.dep.name}: URL has changed; deleting '{repo.dir}' "
                "and cloning again"
            )
            self._reclone()
        else:
            self._update()

    def _same_url(self) -> bool:
        remote_url = self.repo.get_remote_url(self.remote)
        if remote_url is None:
            return False
        return same_location(remote_url, self.dep.url)

    def _reclone(self) -> None:
        shutil.rmtree(self.repo.dir)
        self._clone()

    def _clone(self) -> None:
        self.log = self.log.info(f"{self.dep.name}: cloning {self.dep.url}")
        logger.info(f"Cloning {self.dep.url} to {self.repo.dir}")
        self.repo.clone(self.dep.url)

        if self.target_rev is not None:
            commit = resolve_remote_revision(
                self.repo, self.target_rev, self.remote, self.dep.url, self.log
            )
            self._checkout(commit)
        elif self.dep.branch is not None:
            self._checkout(self.repo.get_head_revision(self.log))

    def _update(self) -> None:
        repo = self.repo
        locked = self.locked_rev
        if (
            locked is not None
            and is_full_object_name(locked)
            and repo.revision_exists(locked)
        ):
            # pinned commit already present, no need to hit the network
            commit = locked
        else:
            rev = self.target_rev or default_revision(repo, self.remote)
            commit = find_remote_revision(repo, self.remote, rev, self.remote, self.log)

        head = repo.get_head_revision(self.log)
        if head != commit:
            self.log = self.log.info(
                f"{self.dep.name}: updating '{repo.dir}' to revision {commit}"
            )
            self._checkout(commit)
            return

        if repo.has_diff():
            self.log = self.log.warning(
                f"{self.dep.name}: repository '{repo.dir}' has local changes"
            )
        if self.dep.branch is not None and not repo.branch_exists(self.dep.branch):
            self._checkout(commit)

    def _checkout(self, commit: str) -> None:
        if self.dep.branch is not None:
            logger.debug(f"Checking out {commit} on branch {self.dep.branch}")
            self.repo.checkout_branch(self.dep.branch, commit)
        else:
            logger.debug(f"Checking out detached {commit}")
            self.repo.checkout_detach(commit)


def materialize_dependency(
    dep: Dependency,
    deps_dir: Union[str, Path],
    locked_rev: Optional[str] = None,
    log: Optional[DiagnosticLog] = None,
) -> Tuple[MaterializedDependency, DiagnosticLog]:
    """
    Materialize a single dependency.

    Args:
        dep: Dependency declaration
        deps_dir: Directory holding all dependency working copies
        locked_rev: Commit recorded for this dependency by a previous run
        log: Diagnostic log of the calling chain

    Returns:
        Tuple of (materialized dependency, extended diagnostic log)
    """
    materializer = DependencyMaterializer(dep, Path(deps_dir), locked_rev, log)
    result = materializer.materialize()
    return result, materializer.log


def sync_manifest(
    manifest: Manifest,
    deps_dir: Union[str, Path],
    lock: Optional[LockFile] = None,
    update: bool = False,
    log: Optional[DiagnosticLog] = None,
) -> Tuple[LockFile, List[MaterializedDependency], DiagnosticLog]:
    """
    Materialize every dependency of a manifest.

    Locked commits are reused as long as the declaration that produced them
    (url and input revision) is unchanged, unless `update` is set.

    Returns:
        Tuple of (new lock file, materialized dependencies, diagnostic log)
    """
    lock = lock or LockFile()
    log = log or DiagnosticLog()
    results = []

    for dep in manifest.dependencies:
        locked = lock.get(dep.name)
        locked_rev = None
        if not update and locked is not None and locked.matches(dep):
            locked_rev = locked.rev

        result, log = materialize_dependency(dep, deps_dir, locked_rev, log)
        logger.debug(f"{dep.name} is at {result.rev}")
        results.append(result)

    new_lock = LockFile(dependencies=[r.to_locked() for r in results])
    return new_lock, results, log


def describe_dependencies(deps_dir: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Describe the state of materialized dependencies.

    Args:
        deps_dir: Directory holding dependency working copies

    Returns:
        List of dictionaries with repo information:
        - name: Directory name of the dependency
        - url: Filtered origin URL (or "unknown")
        - head: Current HEAD commit (or "unknown")
        - tag: Exact tag on HEAD, if any
        - clean: Whether the working tree has no unstaged changes
        - tags: All tags in the repository
    """
    deps_dir = Path(deps_dir)
    if not deps_dir.is_dir():
        return []

    remote = get_default_remote()
    results = []
    for path in sorted(p for p in deps_dir.iterdir() if p.is_dir()):
        repo = GitRepo(path)
        if not repo.is_repo_root():
            logger.debug(f"Skipping {path}: not a git repository")
            continue

        url = repo.get_filtered_remote_url(remote)
        head = repo.get_head_revision_opt()
        results.append(
            {
                "name": path.name,
                "url": str(url) if url is not None else "unknown",
                "head": head or "unknown",
                "tag": repo.find_tag(head) if head else None,
                "clean": repo.has_no_diff(),
                "tags": repo.get_tags() or [],
            }
        )

    return results


def init_package(
    path: Union[str, Path], log: Optional[DiagnosticLog] = None
) -> DiagnosticLog:
    """
    Initialize a git repository for a new package.

    Nothing is done when `path` is already inside a work tree (for example a
    package created within an existing repository).

    Returns:
        The extended diagnostic log
    """
    log = log or DiagnosticLog()
    repo = GitRepo(Path(path))
    if repo.dir_exists() and repo.inside_work_tree():
        return log.info(f"'{repo.dir}' is already inside a git work tree")
    repo.quiet_init()
    return log.info(f"initialized git repository in '{repo.dir}'")
