"""Navigation dispatch.

Decides whether a requested path is handled in-process (history update
plus broadcast) or handed to the environment as a full navigation, and
keeps subscribers in sync with back/forward moves.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from waypost.errors import InvalidArgument
from waypost.navigation.broadcaster import ChangeBroadcaster
from waypost.navigation.environment import CancellableEvent, Environment
from waypost.routing.registry import RouteRegistry
from waypost.routing.route import Location
from waypost.url.resolve import path_of, resolve_path

logger = logging.getLogger("waypost.navigation")

type NavigationCallback = Callable[..., None]


def _cancellable(event: Any) -> bool:
    return callable(getattr(event, "prevent_default", None)) and callable(
        getattr(event, "stop_propagation", None)
    )


class Navigator:
    """Drives an environment's history on behalf of a route registry.

    Without an environment the navigator is headless: ``navigate`` has
    neither a history to update nor a page to unload, so it does nothing.
    """

    __slots__ = ("_broadcaster", "_detach", "_environment", "_registry")

    def __init__(self, registry: RouteRegistry, broadcaster: ChangeBroadcaster) -> None:
        self._registry = registry
        self._broadcaster = broadcaster
        self._environment: Environment | None = None
        self._detach: Callable[[], None] | None = None

    @property
    def environment(self) -> Environment | None:
        return self._environment

    def attach(self, environment: Environment) -> Callable[[], None]:
        """Bind *environment* and listen for its back/forward notifications.

        Replaces any previously attached environment. Returns a function
        that detaches it again.
        """
        self.detach()
        self._environment = environment
        if environment.history is not None:
            self._detach = environment.add_popstate_listener(self._on_popstate)
        logger.debug("Attached environment at %r", environment.href)

        def detach() -> None:
            if self._environment is environment:
                self.detach()

        return detach

    def detach(self) -> None:
        if self._detach is not None:
            self._detach()
            self._detach = None
        self._environment = None

    def current_path(self) -> str:
        """``pathname + search + hash`` of the environment, or ``""`` when headless."""
        if self._environment is None:
            return ""
        return path_of(self._environment.href)

    def navigate(
        self,
        path: str,
        event: CancellableEvent | None = None,
        replace: bool = False,
    ) -> None:
        """Navigate to *path*.

        A matching, non-external route updates history (``replace`` picks
        replace over push) and broadcasts the new location. Anything else
        becomes a full navigation through ``Environment.assign``.

        *event*, when given, is skipped if its default was already
        prevented and otherwise has its default prevented and its
        propagation stopped.
        """
        if event is not None and getattr(event, "default_prevented", False):
            return
        if event is not None and _cancellable(event):
            event.prevent_default()
            event.stop_propagation()

        environment = self._environment
        if environment is not None and isinstance(path, str):
            path = resolve_path(path, environment.href)

        history = environment.history if environment is not None else None
        if history is not None:
            if not isinstance(path, str) or path == "":
                msg = "navigate expects a non-empty string path"
                raise InvalidArgument(msg, path)
            m = self._registry.match(path)
            if m is not None and not m.route.is_external(m):
                location = Location.from_match(m, path)
                if replace:
                    history.replace_state(path)
                else:
                    history.push_state(path)
                logger.debug("Navigated to %r (route=%r, replace=%s)", path, m.route.name, replace)
                self._broadcaster.broadcast(location)
                return

        if environment is not None:
            logger.debug("Full navigation to %r", path)
            environment.assign(path)

    def navigate_to_route(
        self,
        name: str,
        params: Mapping[str, Any] | None = None,
        event: CancellableEvent | None = None,
        *,
        replace: bool = False,
    ) -> None:
        self.navigate(self._registry.path_for(name, params), event, replace)

    def navigator_for(self, path: str, replace: bool = False) -> NavigationCallback:
        """Return ``callback(event=None)`` that navigates to *path*."""

        def navigator(event: Any = None) -> None:
            self.navigate(path, event, replace)

        return navigator

    def navigator_for_route(
        self, name: str, params: Mapping[str, Any] | None = None
    ) -> NavigationCallback:
        """Return ``callback(event=None)`` that navigates to the route *name*.

        The path is rendered when the callback fires, so a route removed in
        the meantime raises ``NotFound`` then.
        """

        def navigator(event: Any = None) -> None:
            self.navigate_to_route(name, params, event)

        return navigator

    def get_location(self, path: str | None = None) -> Location | None:
        """Resolve *path* (default: the environment's current path) and broadcast it.

        Always broadcasts, even when nothing matched or nothing changed.
        """
        if path is None or path == "":
            path = self.current_path()
        location = Location.from_match(self._registry.match(path), path)
        self._broadcaster.broadcast(location)
        return location

    def _on_popstate(self) -> None:
        path = self.current_path()
        m = self._registry.match(path)
        if m is None or m.route.is_external(m):
            logger.debug("Ignoring back/forward to %r", path)
            return
        self._broadcaster.broadcast(Location.from_match(m, path))
