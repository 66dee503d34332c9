"""Object id classification."""

FULL_OBJECT_NAME_LENGTH = 40
_HEX_DIGITS = frozenset("0123456789abcdef")


def is_full_object_name(rev: str) -> bool:
    """
    Check whether a revision is a full, lowercase SHA-1 object name.

    Unlike short hashes, branch or tag names, a full object name is never
    ambiguous, so callers can trust it without asking git to verify it.

    Args:
        rev: Revision string (commit hash, branch, tag, ...)

    Returns:
        True if rev is exactly 40 lowercase hexadecimal characters
    """
    return len(rev) == FULL_OBJECT_NAME_LENGTH and all(c in _HEX_DIGITS for c in rev)
