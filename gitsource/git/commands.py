"""
Declarative descriptors for every git command used by gitsource.

Each operation is described once, as an argument vector plus the invocation
mode that interprets its result, and handed to a single dispatcher
(`gitsource.git.invoker.GitInvoker.run`).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class InvocationMode(str, Enum):
    EXECUTE = "execute"  # must succeed, raises on failure
    CAPTURE = "capture"  # stdout on success, None on failure
    TEST = "test"  # exit status as a boolean


@dataclass(frozen=True)
class GitCommand:
    """A git subcommand with its arguments and how to run it.

    `in_repo` is False for commands that create the repository directory
    themselves (clone) and so cannot run from inside it.
    """

    args: Tuple[str, ...]
    mode: InvocationMode
    in_repo: bool = True


def init_quiet() -> GitCommand:
    return GitCommand(("init", "-q"), InvocationMode.EXECUTE)


def clone(url: str, dest: str) -> GitCommand:
    return GitCommand(("clone", url, dest), InvocationMode.EXECUTE, in_repo=False)


def fetch(remote: str) -> GitCommand:
    return GitCommand(("fetch", "--tags", "--force", remote), InvocationMode.EXECUTE)


def checkout_branch(branch: str, commit: str) -> GitCommand:
    return GitCommand(("checkout", "-B", branch, commit), InvocationMode.EXECUTE)


def checkout_detach(commit: str) -> GitCommand:
    # the trailing "--" ends the revision list so commit is never read as a path
    return GitCommand(("checkout", "--detach", commit, "--"), InvocationMode.EXECUTE)


def inside_work_tree() -> GitCommand:
    return GitCommand(("rev-parse", "--is-inside-work-tree"), InvocationMode.TEST)


def show_toplevel() -> GitCommand:
    return GitCommand(("rev-parse", "--show-toplevel"), InvocationMode.CAPTURE)


def resolve_revision(rev: str) -> GitCommand:
    return GitCommand(
        ("rev-parse", "--verify", "--end-of-options", rev), InvocationMode.CAPTURE
    )


def branch_exists(branch: str) -> GitCommand:
    return GitCommand(
        ("show-ref", "--verify", f"refs/heads/{branch}"), InvocationMode.TEST
    )


def revision_exists(rev: str) -> GitCommand:
    return GitCommand(
        ("rev-parse", "--verify", f"{rev}^{{commit}}"), InvocationMode.TEST
    )


def list_tags() -> GitCommand:
    return GitCommand(("tag",), InvocationMode.CAPTURE)


def exact_tag(rev: str) -> GitCommand:
    return GitCommand(
        ("describe", "--tags", "--exact-match", rev), InvocationMode.CAPTURE
    )


def remote_url(remote: str) -> GitCommand:
    return GitCommand(("remote", "get-url", remote), InvocationMode.CAPTURE)


def remote_head(remote: str) -> GitCommand:
    return GitCommand(
        ("symbolic-ref", "--quiet", "--short", f"refs/remotes/{remote}/HEAD"),
        InvocationMode.CAPTURE,
    )


def diff_clean() -> GitCommand:
    return GitCommand(("diff", "--exit-code"), InvocationMode.TEST)
