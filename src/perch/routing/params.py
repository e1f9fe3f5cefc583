"""Path parameter parsing and type conversion.

Built-in converters for typed route segments like ``{id:int}``, plus the
lenient integer parser handlers use for untyped ``:name`` segments.
Digits are ASCII only throughout.
"""

import re

# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"[0-9]+", int),
    "float": (r"[0-9]+(?:\.[0-9]+)?", float),
    "path": (r".+", str),
}

_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]+)")


def convert_param(value: str, param_type: str) -> str | int | float:
    """Convert a captured path parameter string to the target type.

    Raises ``ValueError`` if the string cannot be converted.
    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    _, target_type = CONVERTERS[param_type]
    return target_type(value)


def leading_int(value: str, default: int = 0, *, max_digits: int | None = None) -> int:
    """Parse the leading integer prefix of *value*.

    ``"12abc"`` gives 12, ``"-3"`` gives -3, and a string with no leading
    ASCII digits gives *default*::

        leading_int("42")     # 42
        leading_int("7up")    # 7
        leading_int("abc")    # 0

    Raises ``ValueError`` when the digit run is longer than *max_digits*,
    or longer than the interpreter's int/str conversion limit
    (``sys.get_int_max_str_digits()``).
    """
    m = _LEADING_INT.match(value)
    if m is None:
        return default
    sign, digits = m.groups()
    if max_digits is not None and len(digits) > max_digits:
        msg = f"Integer prefix has {len(digits)} digits; at most {max_digits} are accepted"
        raise ValueError(msg)
    return int(sign + digits)
