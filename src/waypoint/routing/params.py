"""Path parameter converters.

Built-in converters for route path segments like ``{id:int}``. Each
pattern checks a value before it is written into a generated path.
"""

import re

# Segment regex for each supported converter
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}

_COMPILED: dict[str, re.Pattern[str]] = {name: re.compile(pattern) for name, pattern in CONVERTERS.items()}


def accepts(value: str, param_type: str) -> bool:
    """True if the whole of *value* can fill a ``param_type`` segment.

    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    return _COMPILED[param_type].fullmatch(value) is not None
