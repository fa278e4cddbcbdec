"""Ordered route registry with first-match resolution.

Routes are matched in registration order; the first route whose pattern
accepts the pathname wins. Names are not unique: lookups by name use
the first route carrying it.
"""

import logging
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any

from waypost.errors import InvalidArgument, NotFound, PatternError
from waypost.routing.pattern import compile_pattern
from waypost.routing.route import Match, Route, RouteSpec, as_external
from waypost.url.query import parse_query

logger = logging.getLogger("waypost.routing")

_SPEC_KEYS = frozenset({"path", "name", "external"})


def split_path(path: str) -> tuple[str, str, str, str]:
    """Split *path* into ``(pathname, search, hash, hash_search)`` without prefixes.

    ``#`` separates the hash first, then ``?`` splits both halves. A hash
    query only exists when a ``?`` follows the ``#``::

        split_path("/x?a=1#/y?b=2")  # ("/x", "a=1", "/y", "b=2")
    """
    before_hash, _, after_hash = path.partition("#")
    pathname, _, search = before_hash.partition("?")
    hash_, _, hash_search = after_hash.partition("?")
    return pathname, search, hash_, hash_search


def _prefixed(prefix: str, value: str) -> str:
    return prefix + value if value != "" else ""


class RouteRegistry:
    """Ordered collection of compiled routes.

    Usage::

        registry = RouteRegistry()
        registry.add_routes([{"path": "/users/:id", "name": "user"}])
        registry.match("/users/42?tab=posts").state  # {"tab": "posts", "id": "42"}
        registry.path_for("user", {"id": 7})         # "/users/7"
    """

    __slots__ = ("_atomic", "_routes")

    def __init__(self, *, atomic: bool = True) -> None:
        self._routes: list[Route] = []
        self._atomic = atomic

    def __len__(self) -> int:
        return len(self._routes)

    @property
    def routes(self) -> tuple[Route, ...]:
        """Snapshot of registered routes in match order."""
        return tuple(self._routes)

    def add_routes(self, specs: Sequence[RouteSpec | Mapping[str, Any]]) -> list[Route]:
        """Compile *specs* and append them in order.

        Raises ``InvalidArgument`` if *specs* is not a list or tuple, if an
        element is neither a RouteSpec nor a mapping, or if a path fails to
        compile. In atomic mode nothing from a failing batch is registered;
        otherwise the routes before the failing one stay registered.
        """
        if not isinstance(specs, (list, tuple)):
            msg = "add_routes expects a sequence of route definitions"
            raise InvalidArgument(msg, specs)

        compiled: list[Route] = []
        for spec in specs:
            route = _compile(spec)
            if not self._atomic:
                self._append(route)
            compiled.append(route)

        if self._atomic:
            for route in compiled:
                self._append(route)
        return compiled

    def _append(self, route: Route) -> None:
        logger.debug("Registering route %r (name=%r)", route.path, route.name)
        self._routes.append(route)

    def remove_route(self, name: str) -> None:
        """Remove the first route named *name*. Unknown names are ignored."""
        idx = self._index_of(name)
        if idx >= 0:
            logger.debug("Removing route %r (name=%r)", self._routes[idx].path, name)
            del self._routes[idx]

    def _index_of(self, name: str) -> int:
        for i, route in enumerate(self._routes):
            if route.name == name:
                return i
        return -1

    def get(self, name: str) -> Route:
        """Return the first route named *name*. Raises ``NotFound``."""
        idx = self._index_of(name)
        if idx < 0:
            raise NotFound(name)
        return self._routes[idx]

    def path_for(self, name: str, params: Mapping[str, Any] | None = None) -> str:
        """Render the path of the first route named *name* from *params*.

        Raises ``NotFound`` if no route has that name, ``PatternError`` if
        the pattern cannot be rendered from *params*.
        """
        return self.get(name).stringify(params)

    def match(self, path: str) -> Match | None:
        """Resolve *path* against the registered routes.

        Returns the first match in registration order, or ``None``.
        """
        pathname, search, hash_, hash_search = split_path(path)
        query_state = parse_query("&".join((search, hash_search)))
        for route in self._routes:
            params = route.pattern.match(pathname)
            if params is None:
                continue
            return Match(
                route=route,
                pathname=pathname,
                search=_prefixed("?", search),
                hash=_prefixed("#", hash_),
                hash_search=_prefixed("?", hash_search),
                state={**query_state, **params},
            )
        return None


def _compile(spec: Any) -> Route:
    if isinstance(spec, RouteSpec):
        path, name, external, meta = spec.path, spec.name, spec.external, dict(spec.meta)
    elif isinstance(spec, Mapping):
        path = spec.get("path")
        name = spec.get("name")
        external = spec.get("external", False)
        meta = {k: v for k, v in spec.items() if k not in _SPEC_KEYS}
    else:
        msg = "each route definition must be a RouteSpec or a mapping"
        raise InvalidArgument(msg, spec)

    if path == "":
        path = None
    if name == "":
        name = None

    try:
        pattern = compile_pattern(path)
    except PatternError as exc:
        msg = f"route paths must be a string or compiled regex ({exc})"
        raise InvalidArgument(msg, path) from exc

    return Route(
        path=path,
        name=name,
        external=as_external(external),
        pattern=pattern,
        meta=MappingProxyType(meta),
    )
