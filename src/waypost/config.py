"""Router configuration.

Settings that change how a Router registers routes and delivers
location changes. Build a new RouterConfig to change them.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(atomic_batch=False)
    """

    # Registration
    atomic_batch: bool = True  # compile a whole add_routes() batch before appending any of it

    # Broadcasting
    isolate_subscribers: bool = True  # keep delivering after a subscriber raises, re-raise afterwards
