"""URL generation configuration.

UrlConfig is a frozen dataclass — immutable after creation, injected into
``UrlWriter`` and ``UrlRewriter`` instead of living in mutable class state.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from waypoint._internal.types import RelativeUrlRootProvider

ENV_PREFIX = "WAYPOINT_"


def _freeze(options: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(options))


@dataclass(frozen=True, slots=True)
class UrlConfig:
    """Configuration shared by every URL built from it.

    All fields have sensible defaults. Override what you need::

        config = UrlConfig(default_url_options={"host": "example.com"})
        config = UrlConfig(relative_url_root="/app")
        config = UrlConfig(relative_url_root=lambda: settings.mount_point)
    """

    # Merged under caller options by UrlWriter (caller wins)
    default_url_options: Mapping[str, Any] = field(default_factory=dict)

    # Prefix for every generated path; a callable is read fresh on each call
    relative_url_root: str | RelativeUrlRootProvider = ""

    # Scheme used by UrlWriter when the caller gives none
    default_protocol: str = "http"

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_url_options", _freeze(self.default_url_options))

    def resolve_relative_url_root(self) -> str:
        """Return the current root prefix. Never cached."""
        root = self.relative_url_root
        if callable(root):
            root = root()
        return "" if root is None else str(root)

    def with_defaults(self, **options: Any) -> UrlConfig:
        """Return a copy with *options* layered over the default options."""
        return replace(self, default_url_options={**self.default_url_options, **options})

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> UrlConfig:
        """Build a config from ``WAYPOINT_*`` environment variables.

        Recognized: ``RELATIVE_URL_ROOT``, ``DEFAULT_PROTOCOL``,
        ``DEFAULT_HOST`` and ``DEFAULT_PORT``. Unset variables keep the
        dataclass defaults.
        """
        env = os.environ if environ is None else environ

        defaults: dict[str, Any] = {}
        host = env.get(f"{ENV_PREFIX}DEFAULT_HOST")
        if host:
            defaults["host"] = host
        port = env.get(f"{ENV_PREFIX}DEFAULT_PORT")
        if port:
            defaults["port"] = port

        return cls(
            default_url_options=defaults,
            relative_url_root=env.get(f"{ENV_PREFIX}RELATIVE_URL_ROOT", ""),
            default_protocol=env.get(f"{ENV_PREFIX}DEFAULT_PROTOCOL") or "http",
        )
