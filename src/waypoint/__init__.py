"""Waypoint — URL generation and rewriting.

Turns a symbolic destination (controller, action, route parameters)
plus contextual defaults into a full URL or a path.

Outside a request::

    from waypoint import Route, Router, UrlConfig, UrlWriter

    router = Router()
    router.add(Route("/{controller}/{action}/{id}", defaults={"action": "index", "id": None}))
    router.compile()

    writer = UrlWriter(router, UrlConfig(default_url_options={"host": "example.com"}))
    writer.url_for(controller="users", action="show", id=7)
    # "http://example.com/users/show/7"

Inside a request::

    from waypoint import Request, UrlRewriter

    request = Request.from_asgi(scope, path_params={"controller": "posts", "action": "show", "id": "5"})
    rewriter = UrlRewriter(request, router)
    rewriter.rewrite(action="edit")
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "Request",
    "Route",
    "RouteResolutionError",
    "Router",
    "UrlConfig",
    "UrlOptions",
    "UrlRewriter",
    "UrlWriter",
    "WaypointError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypoint`` fast while providing a clean top-level API.
    """
    if name in ("UrlWriter", "UrlRewriter", "UrlOptions"):
        from waypoint import urls as _urls

        return getattr(_urls, name)

    if name == "UrlConfig":
        from waypoint.config import UrlConfig

        return UrlConfig

    if name == "Request":
        from waypoint.http.request import Request

        return Request

    if name == "Route":
        from waypoint.routing.route import Route

        return Route

    if name == "Router":
        from waypoint.routing.router import Router

        return Router

    if name in ("ConfigurationError", "RouteResolutionError", "WaypointError"):
        from waypoint import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
