"""Remote URL normalization."""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

GIT_SUFFIX = ".git"


class UrlForm(str, Enum):
    """How filter_url treated a URL."""

    VERBATIM = "verbatim"  # git:// and git@ addresses, kept as the caller gave them
    FILTERED = "filtered"


@dataclass(frozen=True)
class FilteredUrl:
    """Result of filter_url: the URL to display plus how it was obtained."""

    form: UrlForm
    url: str

    @property
    def canonical(self) -> Optional[str]:
        """The filtered form, or None when the original must be kept."""
        if self.form is UrlForm.VERBATIM:
            return None
        return self.url

    def __str__(self) -> str:
        return self.url


def filter_url(url: str) -> FilteredUrl:
    """
    Derive a clean display form of a remote URL.

    SSH-style and git-protocol addresses (anything starting with "git") are
    not touched. Other URLs lose a trailing ".git" suffix.

    Examples:
        git@host:org/repo.git     -> VERBATIM git@host:org/repo.git
        https://host/org/repo.git -> FILTERED https://host/org/repo
        https://host/org/repo     -> FILTERED https://host/org/repo

    Args:
        url: Remote URL

    Returns:
        FilteredUrl tagged with the form that was applied
    """
    if url[:3] == "git":
        return FilteredUrl(UrlForm.VERBATIM, url)
    if url.endswith(GIT_SUFFIX):
        return FilteredUrl(UrlForm.FILTERED, url[: -len(GIT_SUFFIX)])
    return FilteredUrl(UrlForm.FILTERED, url)


def is_local_path(url: str) -> bool:
    """
    Check if a repository URL is a local filesystem path rather than a remote URL.

    Local paths include ".", "..", relative and absolute paths, and file:// URLs.

    Args:
        url: Repository URL or path

    Returns:
        True if this is a local filesystem path
    """
    url = url.strip()
    if url in (".", "..") or url.startswith("./") or url.startswith("../"):
        return True
    if url.startswith("/"):
        return True
    if url.startswith("file://"):
        return True
    return False


def resolve_local_path(url: str) -> Path:
    """Resolve a local repository URL to an absolute filesystem path."""
    if url.startswith("file://"):
        url = url[len("file://") :]
    return Path(url).expanduser().resolve()


def same_location(a: str, b: str) -> bool:
    """Check whether two repository URLs designate the same repository.

    Remote URLs must match exactly; local paths are compared once resolved.
    """
    if a == b:
        return True
    if is_local_path(a) and is_local_path(b):
        return resolve_local_path(a) == resolve_local_path(b)
    return False


def parse_repo_url(url: str) -> str:
    """
    Parse a git repository URL into a Go-style relative path.

    Examples:
        https://github.com/user/repo.git -> github.com/user/repo
        git@github.com:user/repo.git -> github.com/user/repo
        https://gitlab.com/group/subgroup/project -> gitlab.com/group/subgroup/project

    Args:
        url: Git repository URL

    Returns:
        Path-like string (e.g., "github.com/user/repo")
    """
    url = url.rstrip("/")
    if url.endswith(GIT_SUFFIX):
        url = url[: -len(GIT_SUFFIX)]

    ssh_match = re.match(r"^git@([^:]+):(.+)$", url)
    if ssh_match:
        host, path = ssh_match.groups()
        return f"{host}/{path}"

    parsed = urlparse(url)
    if parsed.netloc and parsed.path:
        return f"{parsed.netloc}/{parsed.path.lstrip('/')}"

    # local paths and anything else
    return url.replace(":", "/").lstrip("/")
