"""Test factories for git repositories.

Repositories are built with dulwich so that fixtures never depend on the
code under test; the tests then exercise them through the git executable.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from dulwich import porcelain

AUTHOR = b"Test <test@test>"


def make_commit(repo_dir: Path, filename: str, content: str, message: str) -> str:
    """Write a file, stage it and commit. Returns the commit id."""
    path = repo_dir / filename
    path.write_text(content)
    porcelain.add(str(repo_dir), paths=[str(path)])
    commit_sha = porcelain.commit(
        str(repo_dir),
        message=message.encode("utf-8"),
        author=AUTHOR,
        committer=AUTHOR,
    )
    return commit_sha.decode("ascii")


def make_tag(repo_dir: Path, tag: str, commit: str) -> None:
    """Create a lightweight tag."""
    porcelain.tag_create(str(repo_dir), tag.encode("utf-8"), objectish=commit)


def make_branch(repo_dir: Path, branch: str, commit: str) -> None:
    porcelain.branch_create(str(repo_dir), branch.encode("utf-8"), objectish=commit)


def make_repo(repo_dir: Path) -> Path:
    repo_dir.mkdir(parents=True)
    porcelain.init(str(repo_dir))
    return repo_dir


@dataclass
class UpstreamRepo:
    """A small repository with two commits, a tag and a side branch.

    history:    first --- second   <- default branch
                  ^
                  v1.0, dev
    """

    path: Path
    default_branch: str
    commits: Dict[str, str] = field(default_factory=dict)

    @property
    def url(self) -> str:
        return str(self.path)


def make_upstream(repo_dir: Path) -> UpstreamRepo:
    make_repo(repo_dir)
    first = make_commit(repo_dir, "hello.txt", "hello\n", "first commit")
    make_tag(repo_dir, "v1.0", first)
    make_branch(repo_dir, "dev", first)
    second = make_commit(repo_dir, "hello.txt", "hello again\n", "second commit")

    default_branch = porcelain.active_branch(str(repo_dir)).decode("utf-8")
    return UpstreamRepo(
        path=repo_dir,
        default_branch=default_branch,
        commits={"first": first, "second": second},
    )
