"""UrlWriter — URL generation outside of a request.

For background jobs, mailers and domain objects: everything comes from
the call's options and the injected ``UrlConfig``. There is no request
to fall back on, so a full URL needs a host from one of those two.

Usage::

    writer = UrlWriter(router, UrlConfig(default_url_options={"host": "example.com"}))

    writer.url_for(controller="users", action="new", message="Welcome!")
    # "http://example.com/users/new?message=Welcome%21"

    writer.url_for(controller="users", action="new", only_path=True)
    # "/users/new"

Supported options:

* ``only_path``: return the relative URL. Defaults to ``False``.
* ``protocol``: scheme to use. Defaults to ``config.default_protocol``.
* ``host``: required in full-URL mode, here or in the default options.
* ``port``: appended as ``:port`` when given.
* ``anchor``: fragment appended after ``#``, escaped.
* ``skip_relative_url_root``: leave out ``config.relative_url_root``
  (full URLs only; a path-only URL always carries the root).
* ``trailing_slash``: add ``/`` before the query string.

Every other key goes to the route generator.
"""

import logging
from typing import Any

from waypoint._internal.types import OptionsMap, RouteGenerator
from waypoint.config import UrlConfig
from waypoint.errors import ConfigurationError
from waypoint.urls.escaping import append_trailing_slash, escape_component
from waypoint.urls.options import UrlOptions, discard_path_only, normalize_keys

logger = logging.getLogger("waypoint.urls")


class UrlWriter:
    """Builds URLs from options and configured defaults.

    Stateless apart from its configuration; safe to share across threads
    as long as the config is not swapped mid-flight.
    """

    __slots__ = ("config", "routes")

    def __init__(self, routes: RouteGenerator, config: UrlConfig | None = None) -> None:
        self.routes = routes
        self.config = config or UrlConfig()

    @property
    def default_url_options(self) -> dict[str, Any]:
        """The configured defaults, as a fresh dict."""
        return dict(self.config.default_url_options)

    def merge_defaults(self, options: OptionsMap | None) -> dict[str, Any]:
        """Layer caller *options* over the default options (caller wins)."""
        return {**normalize_keys(self.config.default_url_options), **normalize_keys(options)}

    def url_for(self, options: OptionsMap | None = None, /, **kwargs: Any) -> str:
        """Generate a URL from *options* (and/or keyword options).

        Raises ``ConfigurationError`` if a full URL is requested and no
        host is available. Route generator errors propagate unchanged.
        """
        merged = self.merge_defaults({**normalize_keys(options), **kwargs})
        opts = UrlOptions.from_mapping(discard_path_only(merged))

        url = ""
        if not opts.only_path:
            protocol = opts.protocol or self.config.default_protocol
            url += protocol
            if "://" not in protocol:
                url += "://"

            if not opts.host:
                msg = (
                    "Missing host to link to! Please provide the host option "
                    "or set default_url_options['host']."
                )
                raise ConfigurationError(msg)
            url += opts.host
            if opts.has_port:
                url += f":{opts.port}"

        if not opts.skip_relative_url_root:
            url += self.config.resolve_relative_url_root()

        generated = self.routes.generate(opts.route_keys, {})
        url += append_trailing_slash(generated) if opts.trailing_slash else generated

        if opts.has_anchor:
            url += f"#{escape_component(opts.anchor)}"

        logger.debug("url_for %r -> %s", opts.route_keys, url)
        return url
