"""Error formatting for CLI output."""

from gitsource.git.exceptions import GitError, ResolutionError


def pretty_print_git_error(error: GitError) -> str:
    """Format a GitError together with the diagnostic trail that led to it.

    Earlier entries of the log are shown as context so a failure at the end
    of a fetch/resolve/checkout chain keeps what happened before it.

    Example output:
        deps/foo: https://host/org/foo: revision not found 'v2'
          info: foo: cloning https://host/org/foo
        > error: https://host/org/foo: revision not found 'v2'
    """
    message_parts = [str(error)]

    failing = error.index if isinstance(error, ResolutionError) else None
    cause = error.__cause__
    if failing is None and isinstance(cause, ResolutionError):
        failing = cause.index

    for i, entry in enumerate(error.log):
        marker = ">" if i == failing else " "
        message_parts.append(f"{marker} {entry}")

    return "\n".join(message_parts)
