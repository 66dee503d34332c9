import logging
import sys
from typing import NoReturn

from gitsource.cli.error_formatting import pretty_print_git_error
from gitsource.git.diagnostics import DiagnosticLog
from gitsource.git.exceptions import GitError

logger = logging.getLogger("gitsource")


def configure_logging(debug: bool):
    """
    Route gitsource messages to stderr.

    stdout is kept for command results (commit ids, dependency lists) so they
    can be piped. With debug on, every git invocation is shown as well.
    """
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    if not logger.hasHandlers():
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)


def report(log: DiagnosticLog) -> None:
    """Show the diagnostic trail of a successful operation."""
    log.replay(logger)


def fail(error: GitError) -> NoReturn:
    logger.error(pretty_print_git_error(error))
    sys.exit(1)
