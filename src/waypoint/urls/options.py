"""Option parsing — reserved-key table, key normalization and merge steps.

Caller options arrive as a loose mapping. They are split once, at the
boundary, into a ``UrlOptions`` value: one named field per structural
key plus the open ``route_keys`` mapping forwarded to the route
generator.

The rewriter's merge order is exposed as separate steps so each can be
exercised on its own::

    normalize_keys -> merge_params -> merge_overwrite_params -> strip_reserved

Later layers win.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from waypoint._internal.types import OptionsMap

RESERVED_OPTIONS: frozenset[str] = frozenset(
    {
        "anchor",
        "params",
        "only_path",
        "host",
        "protocol",
        "port",
        "trailing_slash",
        "skip_relative_url_root",
    }
)
"""Structural keys never forwarded to the route generator."""

CONSUMED_OPTIONS: frozenset[str] = frozenset({"user", "password", "overwrite_params"})
"""Rewriter-only keys, consumed before the reserved set is stripped."""

PATH_ONLY_DISCARDED: tuple[str, ...] = ("protocol", "host", "port", "skip_relative_url_root")
"""Keys that mean nothing for a relative path."""


def normalize_key(key: Any) -> str:
    """Return the string form of an option key (enum members use their value)."""
    if isinstance(key, str):
        return key
    if isinstance(key, Enum):
        return str(key.value)
    return str(key)


def normalize_keys(options: OptionsMap | None) -> dict[str, Any]:
    """Copy *options* with every top-level key normalized."""
    if not options:
        return {}
    return {normalize_key(key): value for key, value in options.items()}


def merge_params(options: OptionsMap) -> dict[str, Any]:
    """Lift a nested ``params`` mapping into the top level (params win)."""
    merged = dict(options)
    params = merged.get("params")
    if params:
        merged.update(normalize_keys(params))
    return merged


def merge_overwrite_params(options: OptionsMap, current: OptionsMap) -> dict[str, Any]:
    """Reapply *current* parameters, then ``overwrite_params`` on top.

    Without ``overwrite_params`` the options are returned unchanged.
    """
    merged = dict(options)
    overwrite = merged.pop("overwrite_params", None)
    if overwrite is None:
        return merged
    merged.update(normalize_keys(current))
    merged.update(normalize_keys(overwrite))
    return merged


def strip_reserved(options: OptionsMap) -> dict[str, Any]:
    """Drop every reserved or consumed key. Idempotent."""
    return {
        key: value
        for key, value in options.items()
        if key not in RESERVED_OPTIONS and key not in CONSUMED_OPTIONS
    }


def discard_path_only(options: OptionsMap) -> dict[str, Any]:
    """Drop the full-URL keys when ``only_path`` is set.

    ``skip_relative_url_root`` goes too, so a path-only URL always
    carries the root prefix.
    """
    if not options.get("only_path"):
        return dict(options)
    return {key: value for key, value in options.items() if key not in PATH_ONLY_DISCARDED}


def resolve_route_keys(options: OptionsMap, current: OptionsMap) -> dict[str, Any]:
    """Run the rewriter's full merge order and return the route keys."""
    merged = normalize_keys(options)
    merged = merge_params(merged)
    merged = merge_overwrite_params(merged, current)
    return strip_reserved(merged)


def is_present(value: Any) -> bool:
    """True unless *value* is ``None``, ``False`` or an empty string.

    Zero counts as present, so ``anchor=0`` still renders ``#0``.
    """
    return value is not None and value is not False and value != ""


@dataclass(frozen=True, slots=True)
class UrlOptions:
    """Caller options split into structural fields and route keys."""

    route_keys: dict[str, Any] = field(default_factory=dict)
    only_path: bool = False
    protocol: str | None = None
    host: str | None = None
    port: str | int | None = None
    anchor: Any = None
    trailing_slash: bool = False
    skip_relative_url_root: bool = False
    user: str | None = None
    password: str | None = None

    @classmethod
    def from_mapping(cls, options: OptionsMap | None) -> UrlOptions:
        """Split *options* once. Unknown keys become route keys."""
        opts = normalize_keys(options)
        return cls(
            route_keys=strip_reserved(opts),
            only_path=bool(opts.get("only_path")),
            protocol=opts.get("protocol") or None,
            host=opts.get("host") or None,
            port=opts.get("port"),
            anchor=opts.get("anchor"),
            trailing_slash=bool(opts.get("trailing_slash")),
            skip_relative_url_root=bool(opts.get("skip_relative_url_root")),
            user=opts.get("user"),
            password=opts.get("password"),
        )

    @property
    def has_port(self) -> bool:
        return self.port is not None and self.port != ""

    @property
    def has_anchor(self) -> bool:
        return is_present(self.anchor)

    @property
    def has_credentials(self) -> bool:
        return bool(self.user) and bool(self.password)
