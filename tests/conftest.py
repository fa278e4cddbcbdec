import pytest

import waypost.router


@pytest.fixture(autouse=True)
def _fresh_default_router():
    """Each test sees a new shared default router."""
    waypost.router._default = None
    yield
    waypost.router._default = None
