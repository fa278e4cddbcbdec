"""Path resolution against the current location.

Turns whatever a caller hands to ``navigate`` (relative reference,
absolute path, absolute URL) into either a same-host path or, when the
target lives on another host, the full absolute URL.
"""

from urllib.parse import urljoin, urlsplit


def path_of(href: str) -> str:
    """Return ``pathname + search + hash`` of an absolute URL."""
    parts = urlsplit(href)
    path = parts.path or "/"
    if parts.query:
        path += "?" + parts.query
    if parts.fragment:
        path += "#" + parts.fragment
    return path


def resolve_path(path: str, current_href: str) -> str:
    """Resolve *path* against *current_href*.

    Same hostname -> ``pathname + search + hash`` (always with a leading
    ``/``). Different hostname -> the absolute URL, which callers treat as
    an external destination::

        resolve_path("b?x=1", "http://app.test/a/")        # "/a/b?x=1"
        resolve_path("//cdn.test/f", "http://app.test/")   # "http://cdn.test/f"
    """
    absolute = urljoin(current_href, path)
    if urlsplit(absolute).hostname != urlsplit(current_href).hostname:
        return absolute
    resolved = path_of(absolute)
    if not resolved.startswith("/"):
        resolved = "/" + resolved
    return resolved
