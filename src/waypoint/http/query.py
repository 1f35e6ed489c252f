"""Immutable query string parameters of the current request."""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    """

    _data: dict[str, list[str]]
    _raw: str

    __slots__ = ("_data", "_raw")

    def __init__(self, query_string: bytes | str = b"") -> None:
        raw = query_string.decode("latin-1") if isinstance(query_string, bytes) else query_string
        object.__setattr__(self, "_raw", raw.lstrip("?"))
        object.__setattr__(self, "_data", parse_qs(self._raw, keep_blank_values=True))

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    @property
    def raw(self) -> str:
        """The query string as received, without a leading ``?``."""
        return self._raw

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    def to_dict(self) -> dict[str, str]:
        """Plain dict view with the first value for each key.

        Keys are kept as received, so ``tag[]=a&tag[]=b`` gives
        ``{"tag[]": "a"}``. Use ``get_list`` for every value.
        """
        return {key: values[0] for key, values in self._data.items()}
