"""
Invocation of the git command line tool.

All repository access goes through `GitInvoker`, which runs the literal `git`
executable via GitPython's `Git.execute` with an explicit argument list (never
through a shell) and interprets the result in one of three modes:

    EXECUTE  the command must succeed; a nonzero exit raises GitProcessError
    CAPTURE  returns a CaptureResult; `output` is None when the command failed
    TEST     returns True iff the command exited with status 0

Interactive prompts are disabled for every call.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

from git.cmd import Git
from git.exc import GitCommandNotFound

from .commands import GitCommand, InvocationMode
from .exceptions import GitProcessError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class CaptureResult:
    """Exit status and output of a finished git process.

    `status` is None when the process could not be started at all.
    """

    command: Tuple[str, ...]
    status: Optional[int]
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.status == 0

    @property
    def output(self) -> Optional[str]:
        """Captured stdout (trailing newline trimmed), or None on failure."""
        return self.stdout if self.ok else None


class GitInvoker:
    """Runs git commands in a working directory."""

    executable = "git"
    environment = {"GIT_TERMINAL_PROMPT": "0"}

    def _spawn(self, args: Sequence[str], cwd: Optional[PathLike]) -> CaptureResult:
        command = (self.executable, *args)
        logger.debug(f"running {' '.join(command)} in {cwd or Path.cwd()}")

        # GitPython silently falls back to the process cwd for a missing
        # directory, which could probe an unrelated repository.
        if cwd is not None and not Path(cwd).is_dir():
            return CaptureResult(command, None, "", f"no such directory: {cwd}")

        try:
            status, stdout, stderr = Git(
                str(cwd) if cwd is not None else None
            ).execute(
                list(command),
                with_extended_output=True,
                with_exceptions=False,
                env=self.environment,
            )
        except GitCommandNotFound as e:
            logger.debug(f"could not start {self.executable}: {e}")
            return CaptureResult(command, None, "", str(e))

        return CaptureResult(command, status, stdout, stderr)

    def execute(self, args: Sequence[str], cwd: Optional[PathLike] = None) -> None:
        """Run a command that must succeed.

        Raises:
            GitProcessError: If git exits with a nonzero status or cannot run
        """
        result = self._spawn(args, cwd)
        if not result.ok:
            raise GitProcessError(
                result.command, result.status, result.stdout, result.stderr
            )

    def capture(
        self, args: Sequence[str], cwd: Optional[PathLike] = None
    ) -> CaptureResult:
        """Run a command and capture its output; failure is not an error."""
        result = self._spawn(args, cwd)
        if not result.ok:
            logger.debug(
                f"{' '.join(result.command)} exited with {result.status}: "
                f"{result.stderr.strip()}"
            )
        return result

    def test(self, args: Sequence[str], cwd: Optional[PathLike] = None) -> bool:
        """Run a command and report whether it exited with status 0."""
        return self._spawn(args, cwd).ok

    def run(self, command: GitCommand, cwd: Optional[PathLike] = None):
        """Dispatch a command descriptor to the mode it declares.

        Args:
            command: Descriptor built by gitsource.git.commands
            cwd: Repository root; ignored for commands that run outside it

        Returns:
            None for EXECUTE, CaptureResult for CAPTURE, bool for TEST
        """
        if not command.in_repo:
            cwd = None
        if command.mode is InvocationMode.EXECUTE:
            return self.execute(command.args, cwd)
        if command.mode is InvocationMode.CAPTURE:
            return self.capture(command.args, cwd)
        return self.test(command.args, cwd)
