"""Route and PathSegment frozen dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``  (is_param=False)
    Param:   ``/{id}``   (is_param=True, param_name="id")
    Typed:   ``/{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    ``defaults`` supplies values for keys the path does not capture
    (typically ``controller`` and ``action``) and fallbacks for optional
    trailing segments::

        Route("/{controller}/{action}/{id}", defaults={"action": "index", "id": None})
        Route("/login", name="login", defaults={"controller": "sessions", "action": "new"})
    """

    path: str
    name: str | None = None
    defaults: Mapping[str, Any] = field(default_factory=dict)
