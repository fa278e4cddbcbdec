"""RouteSpec, Route, Match and Location frozen dataclasses."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from waypost.routing.pattern import CompiledPattern


@dataclass(frozen=True, slots=True)
class StaticExternal:
    """Externality fixed at registration time."""

    value: bool

    def __call__(self, match: "Match") -> bool:
        return self.value


@dataclass(frozen=True, slots=True)
class DynamicExternal:
    """Externality decided per match by a user predicate."""

    predicate: Callable[["Match"], Any]

    def __call__(self, match: "Match") -> bool:
        return bool(self.predicate(match))


type External = StaticExternal | DynamicExternal


def as_external(value: Any) -> External:
    """Coerce a route's ``external`` field: callables become predicates, anything else a bool."""
    if callable(value):
        return DynamicExternal(value)
    return StaticExternal(bool(value))


@dataclass(frozen=True, slots=True)
class RouteSpec:
    """A route definition as supplied by the application.

    Mappings with the same keys are accepted wherever a RouteSpec is;
    keys beyond ``path``, ``name`` and ``external`` land in ``meta``.
    """

    path: Any = None
    name: str | None = None
    external: bool | Callable[["Match"], Any] = False
    meta: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Route:
    """A registered, compiled route.

    Created by the registry from a RouteSpec; the pattern is never None.
    """

    path: Any
    name: str | None
    external: External
    pattern: "CompiledPattern"
    meta: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def is_external(self, match: "Match") -> bool:
        return self.external(match)

    def stringify(self, params: Mapping[str, Any] | None = None) -> str:
        return self.pattern.stringify(params)


@dataclass(frozen=True, slots=True)
class Match:
    """Result of a successful route match.

    ``state`` holds query parameters (primary query, then hash query)
    overlaid by path parameters.
    """

    route: Route
    pathname: str
    search: str
    hash: str
    hash_search: str
    state: dict[str, Any]


@dataclass(frozen=True, slots=True)
class Location:
    """The resolved location handed to subscribers."""

    path: str
    name: str | None
    pathname: str
    search: str
    hash: str
    hash_search: str
    state: dict[str, Any]

    @classmethod
    def from_match(cls, match: Match | None, path: str) -> "Location | None":
        if match is None:
            return None
        return cls(
            path=path,
            name=match.route.name,
            pathname=match.pathname,
            search=match.search,
            hash=match.hash,
            hash_search=match.hash_search,
            state=match.state,
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "name": self.name,
            "pathname": self.pathname,
            "search": self.search,
            "hash": self.hash,
            "hash_search": self.hash_search,
            "state": dict(self.state),
        }
