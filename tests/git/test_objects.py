import pytest

from gitsource.git.objects import is_full_object_name


@pytest.mark.short
@pytest.mark.parametrize(
    "rev, expected",
    [
        ("0" * 40, True),
        ("0123456789abcdef0123456789abcdef01234567", True),
        ("0" * 39 + "A", False),
        ("0" * 39, False),
        ("0" * 41, False),
        ("", False),
        ("g" + "0" * 39, False),
        ("master", False),
        ("1faafa2", False),
    ],
)
def test_is_full_object_name(rev, expected):
    assert is_full_object_name(rev) is expected
