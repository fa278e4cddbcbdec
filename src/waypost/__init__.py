"""Waypost — client-side route registry and navigation dispatcher.

Matches paths against ordered route patterns, keeps an environment's
history in step with navigation, and tells subscribers where the app is.

Basic usage::

    import waypost

    waypost.add_routes([
        {"path": "/", "name": "home"},
        {"path": "/users/:id", "name": "user"},
    ])
    waypost.attach(environment)
    waypost.register(lambda location: print(location))
    waypost.navigate("/users/42?tab=posts")

Independent contexts (tests, multiple apps)::

    from waypost import Router
    from waypost.testing import MemoryEnvironment

    router = Router(environment=MemoryEnvironment("http://app.test/"))
"""

__version__ = "0.1.0"
__all__ = [
    "InvalidArgument",
    "Location",
    "Match",
    "NotFound",
    "PatternError",
    "Route",
    "RouteSpec",
    "Router",
    "RouterConfig",
    "WaypostError",
    "add_routes",
    "attach",
    "default_router",
    "detach",
    "get_location",
    "match",
    "navigate",
    "navigate_to_route",
    "navigator_for",
    "navigator_for_route",
    "path_for",
    "register",
    "remove_route",
]

# Operations forwarded to the shared default Router.
_DEFAULT_OPS = frozenset(
    {
        "add_routes",
        "attach",
        "detach",
        "get_location",
        "match",
        "navigate",
        "navigate_to_route",
        "navigator_for",
        "navigator_for_route",
        "path_for",
        "register",
        "remove_route",
    }
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypost`` cheap while providing a flat top-level API.
    """
    if name in _DEFAULT_OPS:
        from waypost.router import default_router

        return getattr(default_router(), name)

    if name in ("Router", "default_router"):
        from waypost import router as _router

        return getattr(_router, name)

    if name == "RouterConfig":
        from waypost.config import RouterConfig

        return RouterConfig

    if name in ("Location", "Match", "Route", "RouteSpec"):
        from waypost.routing import route as _route

        return getattr(_route, name)

    if name in ("InvalidArgument", "NotFound", "PatternError", "WaypostError"):
        from waypost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
