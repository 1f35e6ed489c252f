"""Waypoint exception hierarchy.

Shared across Router, UrlWriter and UrlRewriter so every module
raises and catches the same types.
"""

from collections.abc import Mapping
from typing import Any


class WaypointError(Exception):
    """Base for all waypoint-specific errors."""


class ConfigurationError(WaypointError):
    """Raised when URL or route configuration is invalid.

    Typically raised by ``UrlWriter.url_for()`` when a full URL is
    requested without a host, or by ``Router.add()`` for a bad route.
    """


class RouteResolutionError(WaypointError):
    """No route generates a path for the given route keys.

    Raised by ``Router.generate()``. The writer and rewriter let it
    propagate untouched.
    """

    def __init__(self, route_keys: Mapping[str, Any], detail: str = "") -> None:
        self.route_keys = dict(route_keys)
        super().__init__(detail or f"No route matches {self.route_keys!r}")
