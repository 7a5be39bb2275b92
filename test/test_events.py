"""
Event Manager Tests

Test classes:
    TestRegistration   — register / register_one / unregister
    TestTrigger        — ordering, short-circuit, payloads, failures
    TestPhaseEvents    — event name construction
"""

from __future__ import annotations

import pytest


class TestRegistration:
    def test_register_returns_handle(self):
        from hostpanel.events.manager import EventManager

        events = EventManager()
        registration = events.register("beforeInstallServers", lambda: 0, priority=5)
        assert registration.event == "beforeInstallServers"
        assert registration.priority == 5
        assert events.has_listeners("beforeInstallServers")

    def test_register_rejects_non_callable(self):
        from hostpanel.events.manager import EventManager

        with pytest.raises(TypeError):
            EventManager().register("beforeInstallServers", "not a function")

    def test_unregister(self):
        from hostpanel.events.manager import EventManager

        events = EventManager()
        registration = events.register("afterSetupTasks", lambda: 0)
        assert events.unregister(registration) is True
        assert events.unregister(registration) is False
        assert not events.has_listeners("afterSetupTasks")

    def test_listeners_sorted_by_priority_then_registration(self):
        from hostpanel.events.manager import EventManager

        events = EventManager()
        late = events.register("e", lambda: 0, priority=10)
        first = events.register("e", lambda: 0, priority=-1)
        second = events.register("e", lambda: 0, priority=-1)
        assert events.listeners("e") == [first, second, late]

    def test_unknown_event_has_no_listeners(self):
        from hostpanel.events.manager import EventManager

        events = EventManager()
        assert events.listeners("nothing") == []
        assert events.has_listeners("nothing") is False


class TestTrigger:
    async def test_trigger_without_listeners_succeeds(self):
        from hostpanel.events.manager import EventManager

        assert await EventManager().trigger("beforeSetupTasks") == 0

    async def test_lower_priority_fires_first(self):
        from hostpanel.events.manager import EventManager

        events = EventManager()
        fired = []
        events.register("e", lambda: fired.append("high"), priority=99)
        events.register("e", lambda: fired.append("low"), priority=0)
        events.register("e", lambda: fired.append("mid"), priority=50)

        assert await events.trigger("e") == 0
        assert fired == ["low", "mid", "high"]

    async def test_ties_fire_in_registration_order(self):
        from hostpanel.events.manager import EventManager

        events = EventManager()
        fired = []
        for name in ("a", "b", "c"):
            events.register("e", lambda name=name: fired.append(name))

        await events.trigger("e")
        assert fired == ["a", "b", "c"]

    async def test_first_non_zero_outcome_stops_dispatch(self):
        from hostpanel.events.manager import EventManager

        events = EventManager()
        fired = []
        events.register("e", lambda: fired.append("first") or 0)
        events.register("e", lambda: 3)
        events.register("e", lambda: fired.append("never"))

        assert await events.trigger("e") == 3
        assert fired == ["first"]

    async def test_payload_is_passed_by_reference(self):
        from hostpanel.events.manager import EventManager

        events = EventManager()
        events.register("beforeSetupTasks", lambda steps: steps.append("extra"))
        steps = ["builtin"]

        await events.trigger("beforeSetupTasks", steps)
        assert steps == ["builtin", "extra"]

    async def test_async_listener_is_awaited(self):
        from hostpanel.events.manager import EventManager

        events = EventManager()
        fired = []

        async def listener(value):
            fired.append(value)
            return 0

        events.register("e", listener)
        assert await events.trigger("e", 42) == 0
        assert fired == [42]

    async def test_async_listener_failure_status(self):
        from hostpanel.events.manager import EventManager

        events = EventManager()

        async def listener():
            return 7

        events.register("e", listener)
        assert await events.trigger("e") == 7

    async def test_listener_exception_becomes_listener_error(self):
        from hostpanel.events.manager import EventManager
        from hostpanel.exceptions import ListenerError

        events = EventManager()

        def listener():
            raise RuntimeError("cannot write vhost")

        events.register("afterInstallServers", listener)
        with pytest.raises(ListenerError) as exc_info:
            await events.trigger("afterInstallServers")

        assert exc_info.value.event == "afterInstallServers"
        assert "cannot write vhost" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    async def test_message_outcome_becomes_listener_error(self):
        from hostpanel.events.manager import EventManager
        from hostpanel.exceptions import ListenerError

        events = EventManager()
        fired = []
        events.register("e", lambda: "disk full")
        events.register("e", lambda: fired.append("late"), priority=1)

        with pytest.raises(ListenerError) as exc_info:
            await events.trigger("e")

        assert exc_info.value.event == "e"
        assert exc_info.value.code == 1
        assert "disk full" in exc_info.value.message
        assert fired == []

    async def test_boolean_outcome_is_a_status(self):
        from hostpanel.events.manager import EventManager

        events = EventManager()
        events.register("e", lambda: True)
        assert await events.trigger("e") == 1

    async def test_listener_added_during_dispatch_only_sees_later_triggers(self):
        from hostpanel.events.manager import EventManager

        events = EventManager()
        fired = []

        def late():
            fired.append("late")

        def registering():
            fired.append("registering")
            events.register("e", late, priority=100)

        events.register("e", registering)

        await events.trigger("e")
        assert fired == ["registering"]

        await events.trigger("e")
        assert fired == ["registering", "registering", "late"]

    async def test_listener_can_register_on_a_later_event(self):
        from hostpanel.events.manager import EventManager

        events = EventManager()
        fired = []

        def registering():
            events.register("after", lambda: fired.append("after"))

        events.register("before", registering)

        await events.trigger("before")
        await events.trigger("after")
        assert fired == ["after"]

    async def test_register_one_fires_once(self):
        from hostpanel.events.manager import EventManager

        events = EventManager()
        fired = []
        events.register_one("e", lambda: fired.append(1))

        await events.trigger("e")
        await events.trigger("e")
        assert fired == [1]
        assert not events.has_listeners("e")

    async def test_unregistered_listener_does_not_fire(self):
        from hostpanel.events.manager import EventManager

        events = EventManager()
        fired = []
        registration = events.register("e", lambda: fired.append(1))
        events.unregister(registration)

        await events.trigger("e")
        assert fired == []

    async def test_managers_are_independent(self):
        from hostpanel.events.manager import EventManager

        first, second = EventManager(), EventManager()
        first.register("e", lambda: 1)
        assert await second.trigger("e") == 0


class TestPhaseEvents:
    def test_phase_event_names(self):
        from hostpanel.events.hooks import phase_event

        assert phase_event("before", "PreInstall", "Servers") == "beforePreInstallServers"
        assert phase_event("after", "Install", "Packages") == "afterInstallPackages"

    def test_phase_event_rejects_unknown_position(self):
        from hostpanel.events.hooks import phase_event

        with pytest.raises(ValueError):
            phase_event("during", "Install", "Servers")

    def test_setup_event_names(self):
        from hostpanel.events import hooks

        assert hooks.BEFORE_SETUP_TASKS == "beforeSetupTasks"
        assert hooks.AFTER_SETUP_TASKS == "afterSetupTasks"
        assert hooks.BEFORE_RESTART_SERVICES == "beforeSetupRestartServices"
