"""UrlRewriter — URL generation bound to the current request.

Same assembly as ``UrlWriter``, but the request fills in whatever the
caller leaves out: scheme, host and the route parameters used to
regenerate omitted path segments. One rewriter per request; it is not
shared between threads.

Usage::

    rewriter = UrlRewriter(request, router)

    rewriter.rewrite(action="show", id=5)
    # "https://example.com/posts/show/5"

    rewriter.rewrite(overwrite_params={"page": 2}, only_path=True)
    # current page, same params, page replaced: "/posts?page=2"
"""

import logging
from typing import Any

from waypoint._internal.types import OptionsMap, RequestContext, RouteGenerator
from waypoint.config import UrlConfig
from waypoint.urls.escaping import append_trailing_slash, escape_component
from waypoint.urls.options import UrlOptions, normalize_keys, resolve_route_keys

logger = logging.getLogger("waypoint.urls")


class UrlRewriter:
    """Rewrites URLs relative to *request*.

    *parameters* are the request's current parameters, reapplied when a
    call passes ``overwrite_params``. They default to
    ``request.parameters``.
    """

    __slots__ = ("config", "parameters", "request", "routes")

    def __init__(
        self,
        request: RequestContext,
        routes: RouteGenerator,
        config: UrlConfig | None = None,
        parameters: OptionsMap | None = None,
    ) -> None:
        self.request = request
        self.routes = routes
        self.config = config or UrlConfig()
        self.parameters: dict[str, Any] = normalize_keys(
            request.parameters if parameters is None else parameters
        )

    def rewrite(self, options: OptionsMap | None = None, /, **kwargs: Any) -> str:
        """Return the URL for *options*, falling back to the request.

        Never fails for a missing host or protocol. Route generator errors
        propagate unchanged.
        """
        merged = {**normalize_keys(options), **kwargs}
        url = self._rewrite_url(UrlOptions.from_mapping(merged), merged)
        logger.debug("rewrite %r -> %s", merged, url)
        return url

    def rewrite_path(self, options: OptionsMap) -> str:
        """Generate ``path[?query]`` for *options* with the request's ambient params."""
        route_keys = resolve_route_keys(options, self.parameters)
        return self.routes.generate(route_keys, self.request.path_parameters)

    def _rewrite_url(self, opts: UrlOptions, options: OptionsMap) -> str:
        url = ""

        if not opts.only_path:
            protocol = opts.protocol or self.request.protocol
            url += protocol
            if "://" not in protocol:
                url += "://"
            url += self._rewrite_authentication(opts)
            url += opts.host or self.request.host_with_port
            if opts.has_port:
                url += f":{opts.port}"

        path = self.rewrite_path(options)
        if not opts.skip_relative_url_root:
            url += self.config.resolve_relative_url_root()
        url += append_trailing_slash(path) if opts.trailing_slash else path

        if opts.has_anchor:
            url += f"#{escape_component(opts.anchor)}"

        return url

    @staticmethod
    def _rewrite_authentication(opts: UrlOptions) -> str:
        if not opts.has_credentials:
            return ""
        return f"{escape_component(opts.user)}:{escape_component(opts.password)}@"

    def __str__(self) -> str:
        request = self.request
        return ", ".join(
            (
                request.protocol,
                request.host_with_port,
                request.path,
                str(self.parameters.get("controller")),
                str(self.parameters.get("action")),
                repr(request.parameters),
            )
        )

    def __repr__(self) -> str:
        return f"<UrlRewriter {self}>"
