"""Value coercion and escaping for the free-text parts of a URL.

Only the anchor and the embedded credentials are escaped here. Path
segments and query strings are the route generator's job.
"""

import re
from typing import Any
from urllib.parse import quote

# First "?" or the end of the string
_QUERY_OR_END = re.compile(r"\?|\Z")


def to_param(value: Any) -> str:
    """Coerce *value* to its URL parameter text.

    Objects may define ``to_param()`` to control their representation
    (e.g. a model returning its primary key)::

        >>> to_param(42)
        '42'
        >>> to_param(True)
        'true'
        >>> to_param(["2009", "archive"])
        '2009/archive'
        >>> to_param(None)
        ''
    """
    if value is None:
        return ""
    if value is True:
        return "true"
    if value is False:
        return "false"
    hook = getattr(value, "to_param", None)
    if callable(hook):
        return str(hook())
    if isinstance(value, (list, tuple)):
        return "/".join(to_param(item) for item in value)
    return str(value)


def escape_component(value: Any) -> str:
    """Percent-encode *value* as an anchor or a credential component.

    Everything but unreserved characters is escaped, so a space becomes
    ``%20``, a literal ``#`` cannot end a fragment early and ``@`` or ``:``
    cannot split the userinfo.
    """
    return quote(to_param(value), safe="")


def append_trailing_slash(path: str) -> str:
    """Insert ``/`` before the first ``?``, or at the end of *path*.

    A path that already ends in ``/`` at that position is returned as is::

        >>> append_trailing_slash("/x?y=1")
        '/x/?y=1'
        >>> append_trailing_slash("/x")
        '/x/'
        >>> append_trailing_slash("/")
        '/'
    """

    def _insert(match: re.Match[str]) -> str:
        if match.start() > 0 and path[match.start() - 1] == "/":
            return match.group(0)
        return "/" + match.group(0)

    return _QUERY_OR_END.sub(_insert, path, count=1)
