"""Canonical string form of state values.

The table stores strings only.  Every accepted value kind has exactly one
string rendering, and rendering an already-rendered value returns it
unchanged, so a caller can echo a stored value back to ``update`` and have it
treated as "no change".
"""

from __future__ import annotations

import math

from pystatetable.exceptions import UnsupportedValueError

StateValue = str | bool | int | float
"""Value kinds accepted by :meth:`StateTable.update`."""

# Past this magnitude floats stop being exact integers; leave them to repr().
_INTEGRAL_FLOAT_LIMIT = 1e16


def _float_to_state_string(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < _INTEGRAL_FLOAT_LIMIT:
        return str(int(value))
    return repr(value)


def to_state_string(value: StateValue) -> str:
    """Return the canonical string stored for *value*.

    ``bool`` renders as ``"True"``/``"False"``, integral floats drop their
    fractional part (``60.0`` -> ``"60"``).

    Raises
    ------
    UnsupportedValueError
        For ``None``, any type outside :data:`StateValue`, or an integer
        with more digits than the interpreter will convert to a string.
    """
    # bool first: it is an int subclass.
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, str):
        return str(value)
    if isinstance(value, int):
        try:
            return str(int(value))
        except ValueError as exc:
            # Beyond sys.get_int_max_str_digits().
            raise UnsupportedValueError(
                f"Integer too large for a state string: {exc}",
                value_type=type(value),
            ) from exc
    if isinstance(value, float):
        return _float_to_state_string(value)
    raise UnsupportedValueError(
        f"Unsupported state value type: {type(value).__name__}",
        value_type=type(value),
    )
