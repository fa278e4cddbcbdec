"""Tests for waypost.navigation.broadcaster — ordered subscriber delivery."""

import pytest

from waypost.errors import InvalidArgument
from waypost.navigation.broadcaster import ChangeBroadcaster
from waypost.routing.route import Location


def _location(path: str = "/x") -> Location:
    return Location(path=path, name=None, pathname=path, search="", hash="", hash_search="", state={})


class TestRegister:
    def test_rejects_non_callable(self) -> None:
        with pytest.raises(InvalidArgument):
            ChangeBroadcaster().register("not callable")  # type: ignore[arg-type]

    def test_delivers_in_registration_order(self) -> None:
        broadcaster = ChangeBroadcaster()
        calls: list[str] = []
        broadcaster.register(lambda loc: calls.append("first"))
        broadcaster.register(lambda loc: calls.append("second"))
        broadcaster.broadcast(_location())
        assert calls == ["first", "second"]

    def test_delivers_location(self) -> None:
        broadcaster = ChangeBroadcaster()
        seen: list[Location | None] = []
        broadcaster.register(seen.append)
        location = _location()
        broadcaster.broadcast(location)
        broadcaster.broadcast(None)
        assert seen == [location, None]

    def test_len(self) -> None:
        broadcaster = ChangeBroadcaster()
        unregister = broadcaster.register(lambda loc: None)
        assert len(broadcaster) == 1
        unregister()
        assert len(broadcaster) == 0


class TestUnregister:
    def test_stops_delivery(self) -> None:
        broadcaster = ChangeBroadcaster()
        seen: list[Location | None] = []
        unregister = broadcaster.register(seen.append)
        unregister()
        broadcaster.broadcast(_location())
        assert seen == []

    def test_idempotent(self) -> None:
        broadcaster = ChangeBroadcaster()
        seen: list[Location | None] = []
        keep = broadcaster.register(lambda loc: None)
        unregister = broadcaster.register(seen.append)
        unregister()
        unregister()
        broadcaster.broadcast(_location())
        assert seen == []
        assert len(broadcaster) == 1
        keep()

    def test_removes_by_identity(self) -> None:
        class AlwaysEqual:
            def __eq__(self, other: object) -> bool:
                return True

            __hash__ = object.__hash__

            def __call__(self, loc: Location | None) -> None:
                pass

        broadcaster = ChangeBroadcaster()
        first, second = AlwaysEqual(), AlwaysEqual()
        broadcaster.register(first)
        unregister_second = broadcaster.register(second)
        unregister_second()
        assert len(broadcaster) == 1
        assert broadcaster._subscribers[0].callback is first

    def test_same_callable_registered_twice(self) -> None:
        broadcaster = ChangeBroadcaster()
        seen: list[Location | None] = []
        unregister_first = broadcaster.register(seen.append)
        broadcaster.register(seen.append)
        unregister_first()
        unregister_first()
        assert len(broadcaster) == 1
        location = _location()
        broadcaster.broadcast(location)
        assert seen == [location]

    def test_each_registration_unregisters_separately(self) -> None:
        broadcaster = ChangeBroadcaster()
        seen: list[Location | None] = []
        unregister_first = broadcaster.register(seen.append)
        unregister_second = broadcaster.register(seen.append)
        unregister_second()
        unregister_first()
        broadcaster.broadcast(_location())
        assert seen == []
        assert len(broadcaster) == 0

    def test_self_unregister_during_broadcast(self) -> None:
        broadcaster = ChangeBroadcaster()
        calls: list[str] = []

        def once(loc: Location | None) -> None:
            calls.append("once")
            unregister()

        unregister = broadcaster.register(once)
        broadcaster.register(lambda loc: calls.append("other"))
        broadcaster.broadcast(_location())
        broadcaster.broadcast(_location())
        assert calls == ["once", "other", "other"]

    def test_unregistered_mid_broadcast_is_skipped(self) -> None:
        broadcaster = ChangeBroadcaster()
        calls: list[str] = []
        broadcaster.register(lambda loc: (calls.append("a"), unregister_b()))
        unregister_b = broadcaster.register(lambda loc: calls.append("b"))
        broadcaster.register(lambda loc: calls.append("c"))
        broadcaster.broadcast(_location())
        assert calls == ["a", "c"]

    def test_registered_mid_broadcast_waits_for_next(self) -> None:
        broadcaster = ChangeBroadcaster()
        calls: list[str] = []
        broadcaster.register(
            lambda loc: broadcaster.register(lambda loc: calls.append("late")) if not calls else None
        )
        broadcaster.register(lambda loc: calls.append("early"))
        broadcaster.broadcast(_location())
        assert calls == ["early"]


class TestFailures:
    def test_isolated_failure_does_not_stop_delivery(self) -> None:
        broadcaster = ChangeBroadcaster()
        calls: list[str] = []

        def boom(loc: Location | None) -> None:
            raise RuntimeError("boom")

        broadcaster.register(boom)
        broadcaster.register(lambda loc: calls.append("after"))
        with pytest.raises(RuntimeError, match="boom"):
            broadcaster.broadcast(_location())
        assert calls == ["after"]

    def test_several_failures_grouped(self) -> None:
        broadcaster = ChangeBroadcaster()

        def boom(loc: Location | None) -> None:
            raise RuntimeError("boom")

        def bang(loc: Location | None) -> None:
            raise ValueError("bang")

        broadcaster.register(boom)
        broadcaster.register(bang)
        with pytest.raises(ExceptionGroup) as exc_info:
            broadcaster.broadcast(_location())
        assert [type(e) for e in exc_info.value.exceptions] == [RuntimeError, ValueError]

    def test_unisolated_failure_aborts(self) -> None:
        broadcaster = ChangeBroadcaster(isolate=False)
        calls: list[str] = []

        def boom(loc: Location | None) -> None:
            raise RuntimeError("boom")

        broadcaster.register(boom)
        broadcaster.register(lambda loc: calls.append("after"))
        with pytest.raises(RuntimeError):
            broadcaster.broadcast(_location())
        assert calls == []
