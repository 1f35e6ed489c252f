"""Shared type aliases and collaborator protocols."""

from collections.abc import Callable, Mapping
from typing import Any, Protocol, TypeAlias, runtime_checkable

# Caller-supplied URL options: reserved structural keys plus route keys
OptionsMap: TypeAlias = Mapping[str, Any]

# Returns the current root prefix (e.g. "" or "/app"); read on every call
RelativeUrlRootProvider: TypeAlias = Callable[[], str]


@runtime_checkable
class RouteGenerator(Protocol):
    """Turns route keys into ``path[?query]``.

    *ambient* holds the current route parameters used to fill segments
    the caller omitted. It may be empty.
    """

    def generate(self, route_keys: OptionsMap, ambient: OptionsMap | None = None) -> str: ...


@runtime_checkable
class RequestContext(Protocol):
    """Read-only view of the in-flight request used as a fallback source."""

    @property
    def protocol(self) -> str: ...

    @property
    def host_with_port(self) -> str: ...

    @property
    def path(self) -> str: ...

    @property
    def parameters(self) -> dict[str, Any]: ...

    @property
    def path_parameters(self) -> dict[str, Any]: ...
