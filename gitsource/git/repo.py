"""
Repository handle: state queries and mutators.

A `GitRepo` is only a working tree root. Nothing is cached on it; every query
runs git again, so answers always reflect the current state on disk.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from . import commands
from .diagnostics import DiagnosticLog
from .exceptions import ResolutionError
from .invoker import GitInvoker
from .url import FilteredUrl, filter_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitRepo:
    """A git working tree rooted at `dir`."""

    dir: Path
    invoker: GitInvoker = field(default_factory=GitInvoker, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "dir", Path(self.dir))

    def __str__(self) -> str:
        return str(self.dir)

    def _run(self, command: commands.GitCommand):
        return self.invoker.run(command, self.dir)

    # queries

    def dir_exists(self) -> bool:
        return self.dir.is_dir()

    def inside_work_tree(self) -> bool:
        return self._run(commands.inside_work_tree())

    def is_repo_root(self) -> bool:
        """
        Check whether `dir` is the top level of a work tree.

        Unlike inside_work_tree, this is False for a plain directory nested in
        some enclosing repository.
        """
        if not self.dir_exists():
            return False
        toplevel = self._run(commands.show_toplevel()).output
        if toplevel is None:
            return False
        return Path(toplevel).resolve() == self.dir.resolve()

    def branch_exists(self, name: str) -> bool:
        return self._run(commands.branch_exists(name))

    def revision_exists(self, rev: str) -> bool:
        """Check whether rev names a commit that is present locally."""
        return self._run(commands.revision_exists(rev))

    def has_no_diff(self) -> bool:
        return self._run(commands.diff_clean())

    def has_diff(self) -> bool:
        """Check whether the working tree has unstaged changes."""
        return not self.has_no_diff()

    def resolve_revision(self, rev: str) -> Optional[str]:
        """
        Resolve a revision to a commit id using only local refs.

        Args:
            rev: Anything `git rev-parse` understands (ref, tag, hash, HEAD~2, ...)

        Returns:
            The full object id, or None if rev does not resolve locally
        """
        return self._run(commands.resolve_revision(rev)).output

    def get_head_revision_opt(self) -> Optional[str]:
        return self.resolve_revision("HEAD")

    def get_head_revision(self, log: Optional[DiagnosticLog] = None) -> str:
        """
        Resolve HEAD to a commit id.

        Args:
            log: Diagnostic log of the calling chain

        Returns:
            The commit id HEAD points at

        Raises:
            ResolutionError: If HEAD cannot be resolved; the error carries `log`
                plus one entry describing the failure
        """
        rev = self.get_head_revision_opt()
        if rev is not None:
            return rev
        log = (log or DiagnosticLog()).error(
            f"{self.dir}: could not resolve 'HEAD' to a commit; the repository "
            "may be corrupt, so you may need to remove it and try again"
        )
        raise ResolutionError(log, len(log) - 1)

    def get_tags(self) -> Optional[List[str]]:
        """
        List the tags of the repository.

        Returns:
            Tag names, or None if `git tag` failed
        """
        out = self._run(commands.list_tags()).output
        if out is None:
            return None
        # output is already stripped of its final newline
        return out.split("\n") if out else []

    def find_tag(self, rev: str = "HEAD") -> Optional[str]:
        """Return the tag pointing exactly at rev, if any."""
        return self._run(commands.exact_tag(rev)).output

    def get_remote_url(self, remote: str) -> Optional[str]:
        return self._run(commands.remote_url(remote)).output

    def get_remote_head_branch(self, remote: str) -> Optional[str]:
        """
        Name of the branch the remote's HEAD pointed at when it was cloned.

        Returns:
            The branch name without the remote prefix (e.g. "main"), or None
            if `refs/remotes/<remote>/HEAD` is not set
        """
        ref = self._run(commands.remote_head(remote)).output
        prefix = f"{remote}/"
        if ref is None or not ref.startswith(prefix):
            return None
        return ref[len(prefix) :]

    def get_filtered_remote_url(self, remote: str) -> Optional[FilteredUrl]:
        """
        Get the URL of a remote in display form.

        Returns:
            The filtered URL, or None only when the remote has no URL
        """
        url = self.get_remote_url(remote)
        if url is None:
            return None
        return filter_url(url)

    # mutators

    def clone(self, url: str) -> None:
        """Clone url into this repository's directory."""
        logger.debug(f"Cloning {url} to {self.dir}")
        self._run(commands.clone(url, str(self.dir)))

    def quiet_init(self) -> None:
        self.dir.mkdir(parents=True, exist_ok=True)
        self._run(commands.init_quiet())

    def fetch(self, remote: str) -> None:
        """Fetch all refs and tags from remote (a remote name or a URL)."""
        self._run(commands.fetch(remote))

    def checkout_branch(self, name: str, commit: str) -> None:
        """
        Point branch `name` at commit and check it out.

        Any existing branch of that name is moved, not merged.
        """
        self._run(commands.checkout_branch(name, commit))

    def checkout_detach(self, commit: str) -> None:
        self._run(commands.checkout_detach(commit))
