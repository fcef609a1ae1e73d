import pytest

from akcli.version import Comparison, compare


@pytest.mark.parametrize(
    "left, right, expected",
    [
        ("1.0.1", "1.0.0", Comparison.GREATER),
        ("0.9.0", "1.0.0", Comparison.SMALLER),
        ("0.9.0", "0.9.0", Comparison.EQUALS),
        ("abc", "0.9.0", Comparison.ERROR),
        ("1.0.0", "abc", Comparison.ERROR),
    ],
)
def test_compare_version(left, right, expected):
    assert compare(left, right) == expected


@pytest.mark.parametrize(
    "left, right, expected",
    [
        ("0.9.9", "1.0.0", Comparison.SMALLER),
        ("0.1.0", "0.2.0", Comparison.SMALLER),
        ("0.3.0", "0.3.1", Comparison.SMALLER),
        ("0.1.0", "0.1.0", Comparison.EQUALS),
        ("1.0.0", "0.9.9", Comparison.GREATER),
        ("0.2.0", "0.1.0", Comparison.GREATER),
        ("0.3.1", "0.3.0", Comparison.GREATER),
        ("1", "2", Comparison.SMALLER),
        ("1.1", "1.2", Comparison.SMALLER),
        ("3.0.0", "3.1.4", Comparison.SMALLER),
        ("1.1.0", "1.1.1", Comparison.SMALLER),
        ("1.1.0", "1.1.1-dev", Comparison.SMALLER),
        ("1.0.4", "1.1.1-dev", Comparison.SMALLER),
        ("1.1.3", "1.1.4-dev", Comparison.SMALLER),
    ],
)
def test_version_compare_table(left, right, expected):
    assert compare(left, right) == expected


@pytest.mark.parametrize(
    "left, right, expected",
    [
        ("1.0.0", "1.0.0", 0),
        ("1.0.0", "abc", 2),
        ("1.0.1", "1.0.0", -1),
        ("1.0.0", "1.0.1", 1),
    ],
)
def test_comparison_integer_values(left, right, expected):
    assert int(compare(left, right)) == expected


def test_compare_is_antisymmetric():
    assert compare("1.2.3", "1.2.4") == Comparison.SMALLER
    assert compare("1.2.4", "1.2.3") == Comparison.GREATER


def test_prerelease_is_lower_than_release():
    assert compare("1.0.0-dev", "1.0.0") == Comparison.SMALLER