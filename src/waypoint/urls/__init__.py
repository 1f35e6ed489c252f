"""URL assembly — writer for request-free code, rewriter for the current request.

Both split caller options into structural keys and route keys, hand the
route keys to a ``RouteGenerator``, and assemble::

    scheme :// [user:password@] host [:port] [root] path [?query] [#anchor]

Usage::

    from waypoint.urls import UrlRewriter, UrlWriter

    UrlWriter(router, config).url_for(controller="users", action="index")
    UrlRewriter(request, router, config).rewrite(action="show", id=3)
"""

from waypoint.urls.options import RESERVED_OPTIONS, UrlOptions
from waypoint.urls.rewriter import UrlRewriter
from waypoint.urls.writer import UrlWriter

__all__ = [
    "RESERVED_OPTIONS",
    "UrlOptions",
    "UrlRewriter",
    "UrlWriter",
]
