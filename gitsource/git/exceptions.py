"""
Exception classes for git operations.
"""

from typing import Optional, Sequence

from .diagnostics import DiagnosticLog, LogEntry


class GitError(Exception):
    """Base exception for all git-related errors.

    Carries the diagnostic log accumulated by the operation chain that failed.
    """

    def __init__(self, message: str, log: Optional[DiagnosticLog] = None):
        self.log = log if log is not None else DiagnosticLog()
        super().__init__(message)


class GitProcessError(GitError):
    """Raised when a git command that must succeed exits with an error."""

    def __init__(
        self,
        command: Sequence[str],
        status: Optional[int],
        stdout: str = "",
        stderr: str = "",
        log: Optional[DiagnosticLog] = None,
    ):
        self.command = list(command)
        self.status = status
        self.stdout = stdout
        self.stderr = stderr

        cmdline = " ".join(self.command)
        if status is None:
            message = f"could not run `{cmdline}`"
        else:
            message = f"`{cmdline}` exited with code {status}"
        detail = stderr.strip() or stdout.strip()
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, log)


class ResolutionError(GitError):
    """Raised when no strategy could resolve a revision to a commit.

    `index` points at the entry appended to `log` for this failure; earlier
    entries are the context collected by previous steps of the same chain.
    """

    def __init__(self, log: DiagnosticLog, index: int):
        self.index = index
        super().__init__(log[index].message, log)

    @property
    def entry(self) -> LogEntry:
        return self.log[self.index]


class MaterializeError(GitError):
    """Raised when a dependency cannot be brought to a checked-out state."""

    def __init__(self, name: str, reason: str, log: Optional[DiagnosticLog] = None):
        self.name = name
        super().__init__(f"{name}: {reason}", log)
