"""Router — one registry, one subscriber list, one environment.

Each Router is an independent context. Module-level functions in
``waypost`` operate on a shared default Router for apps that only need one.
"""

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from waypost.config import RouterConfig
from waypost.navigation.broadcaster import ChangeBroadcaster, LocationCallback, Unregister
from waypost.navigation.environment import CancellableEvent, Environment
from waypost.navigation.navigator import NavigationCallback, Navigator
from waypost.routing.registry import RouteRegistry
from waypost.routing.route import Location, Match, Route, RouteSpec


class Router:
    """Client-side route registry and navigation dispatcher.

    Usage::

        router = Router(environment=env)
        router.add_routes([
            {"path": "/", "name": "home"},
            {"path": "/users/:id", "name": "user"},
            {"path": "/docs/*", "external": True},
        ])
        unregister = router.register(lambda location: render(location))
        router.navigate_to_route("user", {"id": "42"})
    """

    __slots__ = ("_broadcaster", "_navigator", "_registry", "config")

    def __init__(
        self,
        config: RouterConfig | None = None,
        *,
        environment: Environment | None = None,
    ) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._registry = RouteRegistry(atomic=self.config.atomic_batch)
        self._broadcaster = ChangeBroadcaster(isolate=self.config.isolate_subscribers)
        self._navigator = Navigator(self._registry, self._broadcaster)
        if environment is not None:
            self.attach(environment)

    def __len__(self) -> int:
        return len(self._registry)

    def __repr__(self) -> str:
        return f"Router(routes={len(self._registry)}, subscribers={len(self._broadcaster)})"

    # -- Environment --

    @property
    def environment(self) -> Environment | None:
        return self._navigator.environment

    def attach(self, environment: Environment) -> Callable[[], None]:
        """Bind *environment*; back/forward moves then broadcast. Returns a detach function."""
        return self._navigator.attach(environment)

    def detach(self) -> None:
        self._navigator.detach()

    # -- Route registration --

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._registry.routes

    def add_routes(self, specs: Sequence[RouteSpec | Mapping[str, Any]]) -> list[Route]:
        return self._registry.add_routes(specs)

    def remove_route(self, name: str) -> None:
        self._registry.remove_route(name)

    def path_for(self, name: str, params: Mapping[str, Any] | None = None) -> str:
        return self._registry.path_for(name, params)

    def match(self, path: str) -> Match | None:
        return self._registry.match(path)

    # -- Navigation --

    def navigate(
        self, path: str, event: CancellableEvent | None = None, replace: bool = False
    ) -> None:
        self._navigator.navigate(path, event, replace)

    def navigate_to_route(
        self,
        name: str,
        params: Mapping[str, Any] | None = None,
        event: CancellableEvent | None = None,
        *,
        replace: bool = False,
    ) -> None:
        self._navigator.navigate_to_route(name, params, event, replace=replace)

    def navigator_for(self, path: str, replace: bool = False) -> NavigationCallback:
        return self._navigator.navigator_for(path, replace)

    def navigator_for_route(
        self, name: str, params: Mapping[str, Any] | None = None
    ) -> NavigationCallback:
        return self._navigator.navigator_for_route(name, params)

    def get_location(self, path: str | None = None) -> Location | None:
        return self._navigator.get_location(path)

    # -- Subscribers --

    def register(self, callback: LocationCallback) -> Unregister:
        return self._broadcaster.register(callback)


_default: Router | None = None


def default_router() -> Router:
    """Return the shared Router, creating a headless one on first use."""
    global _default
    if _default is None:
        _default = Router()
    return _default
