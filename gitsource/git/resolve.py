"""
Revision resolution against fetched remotes.

A dependency names its revision either as a full commit id, as a short
branch/tag name that lives under a remote-tracking namespace
(`origin/main`), or as something already unambiguous locally (a tag, a full
ref path). `resolve_remote_revision` tries these in that order;
`find_remote_revision` fetches first so that resolution never succeeds on
stale refs.
"""

import logging
from typing import Optional

from gitsource.config import get_default_remote, get_upstream_branch

from .diagnostics import DiagnosticLog
from .exceptions import GitProcessError, ResolutionError
from .objects import is_full_object_name
from .repo import GitRepo

logger = logging.getLogger(__name__)


def resolve_remote_revision(
    repo: GitRepo,
    revision: str,
    remote_ref: Optional[str] = None,
    display_url: Optional[str] = None,
    log: Optional[DiagnosticLog] = None,
) -> str:
    """
    Resolve a revision to a commit id using already fetched refs.

    Args:
        repo: Repository to resolve in
        revision: Full commit id, branch or tag name, or any local revision
        remote_ref: Remote-tracking namespace to try first (defaults to the
            configured default remote)
        display_url: How to name the remote in diagnostics (defaults to remote_ref)
        log: Diagnostic log of the calling chain

    Returns:
        The commit id

    Raises:
        ResolutionError: If the revision resolves neither under remote_ref
            nor directly
    """
    if is_full_object_name(revision):
        return revision

    if remote_ref is None:
        remote_ref = get_default_remote()

    rev = repo.resolve_revision(f"{remote_ref}/{revision}")
    if rev is not None:
        logger.debug(f"Resolved {remote_ref}/{revision} to {rev}")
        return rev

    rev = repo.resolve_revision(revision)
    if rev is not None:
        logger.debug(f"Resolved {revision} to {rev}")
        return rev

    log = (log or DiagnosticLog()).error(
        f"{display_url or remote_ref}: revision not found '{revision}'"
    )
    raise ResolutionError(log, len(log) - 1)


def find_remote_revision(
    repo: GitRepo,
    remote_url: Optional[str] = None,
    revision: Optional[str] = None,
    remote_name: Optional[str] = None,
    log: Optional[DiagnosticLog] = None,
) -> str:
    """
    Fetch from a remote and resolve a revision against the fresh refs.

    Args:
        repo: Repository to fetch into
        remote_url: Configured remote name or raw URL to fetch from
            (defaults to the default remote)
        revision: Revision to resolve (defaults to the upstream branch)
        remote_name: Remote-tracking namespace for resolution
            (defaults to the default remote)
        log: Diagnostic log of the calling chain

    Returns:
        The commit id

    Raises:
        GitProcessError: If the fetch fails; no resolution is attempted and
            the error carries `log` as it was passed in
        ResolutionError: If the revision cannot be resolved after fetching
    """
    log = log or DiagnosticLog()
    if remote_url is None:
        remote_url = get_default_remote()
    if remote_name is None:
        remote_name = get_default_remote()

    try:
        repo.fetch(remote_url)
    except GitProcessError as e:
        e.log = log
        raise

    if revision is None:
        revision = get_upstream_branch()
    return resolve_remote_revision(repo, revision, remote_name, remote_url, log)


def default_revision(repo: GitRepo, remote_name: Optional[str] = None) -> str:
    """
    Revision to follow when none is declared.

    A clone records the remote's default branch as `<remote>/HEAD`; that
    branch is followed so that later updates track the same line of history
    the clone started on. Repositories without that ref (e.g. created with
    init + fetch) fall back to the configured upstream branch.

    Args:
        repo: Repository to inspect
        remote_name: Remote-tracking namespace (defaults to the default remote)

    Returns:
        A branch name to resolve under the remote
    """
    if remote_name is None:
        remote_name = get_default_remote()
    branch = repo.get_remote_head_branch(remote_name)
    if branch is not None:
        return branch
    return get_upstream_branch()
