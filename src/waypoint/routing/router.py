"""Compiled router that writes paths from route keys.

Routes are registered during setup. ``generate()`` walks them in
registration order and writes the first one the given keys can fill.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from waypoint.errors import ConfigurationError, RouteResolutionError
from waypoint.routing.params import CONVERTERS, accepts
from waypoint.routing.query import to_query
from waypoint.routing.route import PathSegment, Route
from waypoint.urls.escaping import to_param

logger = logging.getLogger("waypoint.routing")

_FOREIGN_PARAM = re.compile(r"<[^>/]+>|(?:^|/):[A-Za-z_]")


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"          -> [PathSegment("users")]
        "/users/{id}"     -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/users/{id:int}" -> [PathSegment("{id:int}", is_param=True, param_type="int")]
        "/files/{path:path}" -> [PathSegment("{path:path}", is_param=True, param_type="path")]

    Raises ``ConfigurationError`` for ``<param>`` or ``:param`` syntax
    and for unknown converters.
    """
    if _FOREIGN_PARAM.search(path):
        msg = (
            f"Route path {path!r} uses <param> or :param syntax. "
            "Waypoint expects {param} or {param:type}."
        )
        raise ConfigurationError(msg)

    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            if param_type not in CONVERTERS:
                msg = f"Unknown converter {param_type!r} in route path {path!r}."
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return segments



@dataclass(frozen=True, slots=True)
class _Writer:
    """Reverse-generation view of one route."""

    route: Route
    segments: tuple[PathSegment, ...]
    # Default keys the path does not capture (e.g. controller, action)
    static_keys: tuple[str, ...]
    param_names: tuple[str, ...]

    @classmethod
    def for_route(cls, route: Route, segments: list[PathSegment]) -> _Writer:
        param_names = tuple(seg.param_name or "" for seg in segments if seg.is_param)
        static_keys = tuple(key for key in route.defaults if key not in param_names)
        return cls(route, tuple(segments), static_keys, param_names)

    @property
    def significant_keys(self) -> frozenset[str]:
        return frozenset(self.static_keys) | frozenset(self.param_names)

    def resolve(
        self,
        keys: Mapping[str, Any],
        ambient: Mapping[str, Any],
        *,
        named: bool,
    ) -> dict[str, Any] | None:
        """Resolve every significant key, or ``None`` if the route cannot be used.

        Caller values win. A caller value that differs from the ambient one
        stops recall for every later key. Static keys must equal the route
        defaults; a named route fills them from its defaults instead of
        recalling them.
        """
        defaults = self.route.defaults
        values: dict[str, Any] = {}
        expired = False

        for name in (*self.static_keys, *self.param_names):
            is_static = name in self.static_keys
            if keys.get(name) is not None:
                value = keys[name]
                if ambient.get(name) is not None and to_param(ambient[name]) != to_param(value):
                    expired = True
            elif is_static and named:
                value = defaults[name]
            elif not expired and ambient.get(name) is not None:
                value = ambient[name]
            elif name in defaults and not is_static:
                value = defaults[name]
            else:
                return None

            if is_static and to_param(value) != to_param(defaults[name]):
                return None
            values[name] = value

        return values

    def write_path(self, values: Mapping[str, Any]) -> str | None:
        """Render the path, dropping trailing segments left at their default."""
        defaults = self.route.defaults
        segments = list(self.segments)

        while segments and segments[-1].is_param:
            name = segments[-1].param_name or ""
            value = values.get(name)
            at_default = name in defaults and to_param(value) == to_param(defaults[name])
            if value is None or at_default:
                segments.pop()
                continue
            break

        parts: list[str] = []
        for seg in segments:
            if not seg.is_param:
                parts.append(seg.value)
                continue
            value = values.get(seg.param_name or "")
            if value is None:
                return None
            text = to_param(value)
            if not accepts(text, seg.param_type):
                return None
            parts.append(quote(text, safe="/" if seg.param_type == "path" else ""))

        return "/" + "/".join(parts)


class Router:
    """Ordered route table that writes paths from route keys.

    Usage::

        router = Router()
        router.add(Route("/login", name="login", defaults={"controller": "sessions", "action": "new"}))
        router.add(Route("/{controller}/{action}/{id}", defaults={"action": "index", "id": None}))
        router.compile()
        router.generate({"controller": "users", "action": "show", "id": 7})  # "/users/show/7"
        router.generate({"use_route": "login"})  # "/login"
    """

    __slots__ = ("_compiled", "_named", "_writers")

    def __init__(self) -> None:
        self._compiled = False
        self._writers: list[_Writer] = []
        self._named: dict[str, _Writer] = {}

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        if route.name is not None and route.name in self._named:
            msg = f"Duplicate route name {route.name!r} ({route.path!r})."
            raise ConfigurationError(msg)

        writer = _Writer.for_route(route, parse_path(route.path))
        self._writers.append(writer)
        if route.name is not None:
            self._named[route.name] = writer

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes in registration order."""
        return [writer.route for writer in self._writers]

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def generate(self, route_keys: Mapping[str, Any], ambient: Mapping[str, Any] | None = None) -> str:
        """Write ``path[?query]`` for *route_keys*.

        *ambient* (usually the current request's path parameters) fills
        segments the caller left out. ``use_route`` restricts generation
        to one named route. Keys the chosen route does not use become the
        query string.

        Raises ``RouteResolutionError`` when no route can be written.
        """
        keys = dict(route_keys)
        ambient = ambient or {}
        route_name = keys.pop("use_route", None)

        if route_name is not None:
            writer = self._named.get(str(route_name))
            if writer is None:
                raise RouteResolutionError(route_keys, f"No route named {route_name!r}")
            candidates = [writer]
        else:
            candidates = self._writers

        for writer in candidates:
            values = writer.resolve(keys, ambient, named=route_name is not None)
            if values is None:
                continue
            path = writer.write_path(values)
            if path is None:
                continue

            significant = writer.significant_keys
            extras = {k: v for k, v in keys.items() if k not in significant}
            query = to_query(extras)
            return f"{path}?{query}" if query else path

        logger.debug("No route generates %r (ambient %r)", keys, dict(ambient))
        raise RouteResolutionError(route_keys)
