"""Location change broadcasting.

Subscribers are plain callables invoked synchronously, in registration
order, with the new ``Location`` (or ``None`` when nothing matched).
"""

import logging
from collections.abc import Callable
from typing import Any

from waypost.errors import InvalidArgument
from waypost.routing.route import Location

logger = logging.getLogger("waypost.navigation")

type LocationCallback = Callable[[Location | None], Any]
type Unregister = Callable[[], None]


class _Subscription:
    """One ``register()`` call. Unregistering removes exactly this entry."""

    __slots__ = ("callback",)

    def __init__(self, callback: LocationCallback) -> None:
        self.callback = callback


class ChangeBroadcaster:
    """Ordered subscriber list.

    Broadcasting iterates a snapshot, so subscribers may register or
    unregister from inside a callback. A subscriber removed mid-broadcast
    is not called for the rest of that broadcast. Registering the same
    callable twice creates two subscriptions, each with its own unregister.

    With ``isolate=True`` a raising subscriber does not stop delivery to
    the others; once everyone has been called the failure is re-raised
    (an ``ExceptionGroup`` if several failed). With ``isolate=False`` the
    first failure propagates immediately.
    """

    __slots__ = ("_isolate", "_subscribers")

    def __init__(self, *, isolate: bool = True) -> None:
        self._subscribers: list[_Subscription] = []
        self._isolate = isolate

    def __len__(self) -> int:
        return len(self._subscribers)

    def register(self, callback: LocationCallback) -> Unregister:
        """Subscribe *callback*. Returns an idempotent unregister function."""
        if not callable(callback):
            msg = "register expects a callable"
            raise InvalidArgument(msg, callback)
        subscription = _Subscription(callback)
        self._subscribers.append(subscription)

        def unregister() -> None:
            self._remove(subscription)

        return unregister

    def _remove(self, subscription: _Subscription) -> None:
        for i, entry in enumerate(self._subscribers):
            if entry is subscription:
                del self._subscribers[i]
                return

    def _is_registered(self, subscription: _Subscription) -> bool:
        return any(entry is subscription for entry in self._subscribers)

    def broadcast(self, location: Location | None) -> None:
        """Deliver *location* to every current subscriber."""
        subscribers = tuple(self._subscribers)
        logger.debug(
            "Broadcasting %r to %d subscriber(s)",
            location.path if location is not None else None,
            len(subscribers),
        )
        errors: list[Exception] = []
        for subscription in subscribers:
            if not self._is_registered(subscription):
                continue
            if not self._isolate:
                subscription.callback(location)
                continue
            try:
                subscription.callback(location)
            except Exception as exc:  # re-raised below once delivery completes
                errors.append(exc)

        if len(errors) == 1:
            raise errors[0]
        if errors:
            msg = "location subscribers failed"
            raise ExceptionGroup(msg, errors)
