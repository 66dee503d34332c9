"""
Git operations module for gitsource.

All repository access goes through the `git` command line tool; this package
decides what to run and how to read the answer.

Architecture:
    - commands / invoker: argument vectors and the three invocation modes
      (execute, capture, test)
    - repo: the repository handle, its state queries and mutators
    - resolve: revision resolution against fetched remotes
    - materialize: dependency checkout lifecycle built on the above
      (import gitsource.git.materialize explicitly)
"""

from .diagnostics import DiagnosticLog, LogEntry, LogLevel
from .exceptions import GitError, GitProcessError, MaterializeError, ResolutionError
from .invoker import CaptureResult, GitInvoker
from .objects import is_full_object_name
from .repo import GitRepo
from .resolve import default_revision, find_remote_revision, resolve_remote_revision
from .url import FilteredUrl, UrlForm, filter_url, parse_repo_url

__all__ = [
    "CaptureResult",
    "DiagnosticLog",
    "FilteredUrl",
    "GitError",
    "GitInvoker",
    "GitProcessError",
    "GitRepo",
    "LogEntry",
    "LogLevel",
    "MaterializeError",
    "ResolutionError",
    "UrlForm",
    "default_revision",
    "filter_url",
    "find_remote_revision",
    "is_full_object_name",
    "parse_repo_url",
    "resolve_remote_revision",
]
