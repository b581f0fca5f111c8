from __future__ import annotations

import pytest

from mapty.workout.validator import parse_number, validate


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        (("running", "5", "30", "10", ""), True),
        (("running", "-1", "30", "10", ""), False),
        (("cycling", "10", "40", "", "-5"), False),
        (("cycling", "10", "40", "", "200"), True),
        (("running", "abc", "30", "10", ""), False),
        (("running", "5", "30", "", ""), False),
        (("running", "5", "30", "-3", ""), False),
        (("running", "5", "30", "180", "-99"), True),
        (("cycling", "10", "40", "-7", "0"), True),
        (("cycling", "10", "inf", "", "0"), False),
        (("cycling", "nan", "40", "", "0"), False),
        (("walking", "5", "30", "10", "0"), False),
    ],
)
def test_validate(args: tuple[str, str, str, str, str], expected: bool) -> None:
    assert validate(*args) is expected


def test_validate_accepts_zero_distance_and_duration() -> None:
    assert validate("running", "0", "0", "0", "")
    assert validate("cycling", "0", "30", "", "0")


def test_parse_number() -> None:
    assert parse_number(" 4.5 ") == 4.5
    assert parse_number("1e2") == 100.0
    assert parse_number("") is None
    assert parse_number(None) is None
    assert parse_number("Infinity") is None
