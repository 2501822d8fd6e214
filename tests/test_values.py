from __future__ import annotations

import enum

import pytest

from pystatetable.exceptions import UnsupportedValueError
from pystatetable.state.values import to_state_string


class _Mode(enum.StrEnum):
    SINGLE = "SinglePresentation"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("laptop", "laptop"),
        ("", ""),
        (True, "True"),
        (False, "False"),
        (60, "60"),
        (-3, "-3"),
        (60.0, "60"),
        (-0.0, "0"),
        (0.5, "0.5"),
        (0.1, "0.1"),
        (1e20, "1e+20"),
        (float("nan"), "NaN"),
        (float("inf"), "Infinity"),
        (float("-inf"), "-Infinity"),
        (_Mode.SINGLE, "SinglePresentation"),
    ],
)
def test_to_state_string(value: object, expected: str) -> None:
    assert to_state_string(value) == expected  # type: ignore[arg-type]


@pytest.mark.parametrize("value", [True, False, 60, 60.0, 0.25, "laptop", float("nan")])
def test_canonical_string_is_idempotent(value: object) -> None:
    once = to_state_string(value)  # type: ignore[arg-type]
    assert to_state_string(once) == once


@pytest.mark.parametrize("value", [None, b"60", [1], {"a": 1}, object()])
def test_unsupported_values_raise(value: object) -> None:
    with pytest.raises(UnsupportedValueError) as excinfo:
        to_state_string(value)  # type: ignore[arg-type]

    assert excinfo.value.value_type is type(value)
    assert isinstance(excinfo.value, TypeError)


def test_integer_past_string_conversion_limit_raises() -> None:
    with pytest.raises(UnsupportedValueError) as excinfo:
        to_state_string(10**5000)

    assert excinfo.value.value_type is int
    assert isinstance(excinfo.value.__cause__, ValueError)
