"""Test utilities for waypost routers.

In-process stand-ins for the page a router lives in::

    from waypost.testing import MemoryEnvironment, NavigationEvent
"""

from waypost.testing.environment import MemoryEnvironment, MemoryHistory, NavigationEvent

__all__ = [
    "MemoryEnvironment",
    "MemoryHistory",
    "NavigationEvent",
]
