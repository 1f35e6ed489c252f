"""Immutable, case-insensitive HTTP headers.

Implements ``Mapping[str, str]``. Built from the raw byte pairs of an
ASGI scope; names are lowercased and values decoded once, up front.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``__getitem__`` returns the first matching value.
    ``get_list`` returns all values for a header (e.g. a proxy chain
    that repeats ``X-Forwarded-Host``).
    """

    __slots__ = ("_pairs",)

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        pairs = tuple((name.decode("latin-1").lower(), value.decode("latin-1")) for name, value in raw)
        object.__setattr__(self, "_pairs", pairs)

    @classmethod
    def from_mapping(cls, headers: Mapping[str, str]) -> Headers:
        """Build from a plain ``{name: value}`` mapping."""
        return cls((name.encode("latin-1"), value.encode("latin-1")) for name, value in headers.items())

    def __getitem__(self, key: str) -> str:
        wanted = key.lower()
        for name, value in self._pairs:
            if name == wanted:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        wanted = key.lower()
        return any(name == wanted for name, _ in self._pairs)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._pairs))

    def __len__(self) -> int:
        return len(dict.fromkeys(name for name, _ in self._pairs))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*, in arrival order."""
        wanted = key.lower()
        return [value for name, value in self._pairs if name == wanted]
