"""Query-string encoding for route keys a route does not capture.

Nested mappings and sequences follow the bracket convention most
server frameworks parse back::

    >>> to_query({"page": 2, "tags": ["a", "b"]})
    'page=2&tags%5B%5D=a&tags%5B%5D=b'
    >>> to_query({"filter": {"state": "open"}})
    'filter%5Bstate%5D=open'
"""

from collections.abc import Iterator, Mapping
from typing import Any
from urllib.parse import quote, urlencode

from waypoint.urls.escaping import to_param


def _pairs(key: str, value: Any) -> Iterator[tuple[str, str]]:
    if value is None:
        return
    if isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            yield from _pairs(f"{key}[{sub_key}]", sub_value)
    elif isinstance(value, (list, tuple, set, frozenset)):
        for item in value:
            yield from _pairs(f"{key}[]", item)
    else:
        yield key, to_param(value)


def to_query(params: Mapping[str, Any]) -> str:
    """Encode *params* in insertion order. ``None`` values are skipped."""
    pairs = [pair for key, value in params.items() for pair in _pairs(str(key), value)]
    return urlencode(pairs, quote_via=quote)
