"""Host environment protocols.

The router drives a history mechanism and listens for back/forward
notifications, but never owns either. Anything structurally matching
these protocols can be attached: a browser bridge, a test double, a
headless shell.
"""

from collections.abc import Callable
from typing import Protocol


class History(Protocol):
    """Push/replace history entries."""

    def push_state(self, path: str) -> None: ...
    def replace_state(self, path: str) -> None: ...


class Environment(Protocol):
    """The page the router lives in.

    ``history`` is ``None`` when the host has no history mechanism; every
    internal navigation then degrades to ``assign``.
    """

    @property
    def href(self) -> str: ...

    @property
    def history(self) -> History | None: ...

    def assign(self, url: str) -> None: ...

    def add_popstate_listener(self, handler: Callable[[], None]) -> Callable[[], None]: ...


class CancellableEvent(Protocol):
    """A UI event whose default action the navigator can suppress."""

    default_prevented: bool

    def prevent_default(self) -> None: ...
    def stop_propagation(self) -> None: ...
