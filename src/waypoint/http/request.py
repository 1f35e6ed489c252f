"""Immutable request context for URL rewriting.

Frozen metadata about the in-flight request: where it came from
(scheme, host, port) and which parameters it carries. ``UrlRewriter``
reads it as a fallback source and never mutates it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from waypoint.http.headers import Headers
from waypoint.http.query import QueryParams

STANDARD_PORTS: dict[str, int] = {"http": 80, "https": 443}


def _split_host(value: str) -> tuple[str, int | None]:
    """Split ``host[:port]``, keeping bracketed IPv6 literals intact."""
    value = value.strip()
    if value.startswith("["):
        end = value.find("]")
        if end != -1:
            rest = value[end + 1 :]
            if rest.startswith(":") and rest[1:].isdigit():
                return value[: end + 1], int(rest[1:])
            return value[: end + 1], None
    host, sep, port = value.rpartition(":")
    if sep and port.isdigit() and ":" not in host:
        return host, int(port)
    return value, None


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable request context.

    ``path_params`` are the route parameters the request was dispatched
    with (controller, action and captured segments); ``query`` holds the
    parsed query string.
    """

    path: str
    headers: Headers
    query: QueryParams
    path_params: dict[str, Any] = field(default_factory=dict)
    server: tuple[str, int] | None = None
    scheme: str = "http"

    # -- Origin --

    @property
    def is_secure(self) -> bool:
        """True for HTTPS, directly or behind a TLS-terminating proxy."""
        if self.scheme == "https":
            return True
        forwarded = self.headers.get("x-forwarded-proto", "")
        return forwarded.split(",")[0].strip().lower() == "https"

    @property
    def protocol(self) -> str:
        """``"https://"`` or ``"http://"``."""
        return "https://" if self.is_secure else "http://"

    def _host_and_port(self) -> tuple[str, int | None]:
        forwarded = self.headers.get_list("x-forwarded-host")
        if forwarded:
            # Proxies append; the last entry is the one closest to us
            return _split_host(forwarded[-1].split(",")[-1])
        host_header = self.headers.get("host")
        if host_header:
            return _split_host(host_header)
        if self.server:
            return self.server[0], self.server[1]
        return "localhost", None

    @property
    def host(self) -> str:
        """The requested host name, without a port."""
        return self._host_and_port()[0]

    @property
    def standard_port(self) -> int:
        return STANDARD_PORTS["https" if self.is_secure else "http"]

    @property
    def port(self) -> int:
        """The requested port, or the standard port for the protocol."""
        port = self._host_and_port()[1]
        return self.standard_port if port is None else port

    @property
    def host_with_port(self) -> str:
        """``host`` plus ``:port`` when the port is not the standard one."""
        if self.port == self.standard_port:
            return self.host
        return f"{self.host}:{self.port}"

    # -- Parameters --

    @property
    def path_parameters(self) -> dict[str, Any]:
        """Route parameters only."""
        return dict(self.path_params)

    @property
    def parameters(self) -> dict[str, Any]:
        """Query parameters (first value per key) overlaid by path parameters."""
        return {**self.query.to_dict(), **self.path_params}

    # -- Factory --

    @classmethod
    def from_asgi(
        cls,
        scope: Mapping[str, Any],
        path_params: Mapping[str, Any] | None = None,
    ) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        server = scope.get("server")
        return cls(
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            path_params=dict(path_params or {}),
            server=tuple(server) if server else None,
            scheme=scope.get("scheme", "http"),
        )
