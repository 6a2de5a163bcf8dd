"""Tests for activation and the listener registry."""

from __future__ import annotations

import logging
import threading

import pytest

from hindsight.history.activation import ActivationController
from hindsight.history.listeners import EventHistoryListener, ListenerRegistry
from hindsight.history.record import EventRecord

from tests.conftest import Open, RecordingListener, make_record


# ---------------------------------------------------------------------------
# ActivationController
# ---------------------------------------------------------------------------


class TestActivationController:
    """Dormant/recording switch — last writer wins."""

    def test_initially_dormant(self) -> None:
        assert ActivationController().active is False

    def test_set_active(self) -> None:
        ctl = ActivationController()
        ctl.set_active(True)
        assert ctl.active is True
        ctl.set_active(False)
        assert ctl.active is False

    def test_listener_added_activates(self) -> None:
        ctl = ActivationController()
        ctl.listener_added()
        assert ctl.active is True

    def test_listener_added_overrides_forced_off(self) -> None:
        ctl = ActivationController()
        ctl.set_active(False)
        ctl.listener_added()
        assert ctl.active is True

    def test_listeners_emptied_overrides_forced_on(self) -> None:
        ctl = ActivationController()
        ctl.set_active(True)
        ctl.listeners_emptied()
        assert ctl.active is False

    def test_admin_write_overrides_listener_transition(self) -> None:
        ctl = ActivationController()
        ctl.listener_added()
        ctl.set_active(False)
        assert ctl.active is False

    def test_truthy_values_coerced(self) -> None:
        ctl = ActivationController()
        ctl.set_active(1)  # type: ignore[arg-type]
        assert ctl.active is True

    def test_transitions_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        ctl = ActivationController()
        with caplog.at_level(logging.DEBUG, logger="hindsight.history.activation"):
            ctl.listener_added()
            ctl.listener_added()  # no transition, no log line
            ctl.listeners_emptied()
        messages = [r.getMessage() for r in caplog.records]
        assert messages == [
            "History recording (listener added)",
            "History dormant (no listeners)",
        ]


# ---------------------------------------------------------------------------
# ListenerRegistry
# ---------------------------------------------------------------------------


def deliver(registry: ListenerRegistry, record: EventRecord) -> None:
    """Deliver under the registry lock, the way the recorder does."""
    with registry._lock:
        registry.notify_locked(record)


@pytest.fixture
def activation() -> ActivationController:
    return ActivationController()


@pytest.fixture
def registry(activation: ActivationController) -> ListenerRegistry:
    return ListenerRegistry(threading.Lock(), activation)


class TestListenerRegistry:
    """Registration, removal and ordered delivery."""

    def test_register_activates(
        self, registry: ListenerRegistry, activation: ActivationController
    ) -> None:
        registry.register(RecordingListener())
        assert activation.active is True
        assert len(registry) == 1

    def test_register_twice_keeps_one_entry(
        self, registry: ListenerRegistry, activation: ActivationController
    ) -> None:
        listener = RecordingListener()
        registry.register(listener)
        activation.set_active(False)
        registry.register(listener)

        assert len(registry) == 1
        assert activation.active is True  # re-registration still activates

    def test_unregister_last_deactivates(
        self, registry: ListenerRegistry, activation: ActivationController
    ) -> None:
        a, b = RecordingListener(), RecordingListener()
        registry.register(a)
        registry.register(b)

        registry.unregister(a)
        assert activation.active is True
        registry.unregister(b)
        assert activation.active is False

    def test_unregister_nonlast_keeps_forced_state(
        self, registry: ListenerRegistry, activation: ActivationController
    ) -> None:
        a, b = RecordingListener(), RecordingListener()
        registry.register(a)
        registry.register(b)
        activation.set_active(False)

        registry.unregister(a)
        assert activation.active is False

    def test_unregister_unknown_on_empty_set_deactivates(
        self, registry: ListenerRegistry, activation: ActivationController
    ) -> None:
        activation.set_active(True)
        registry.unregister(RecordingListener())
        assert activation.active is False

    def test_notify_in_registration_order(self, registry: ListenerRegistry) -> None:
        calls: list[str] = []
        registry.register(lambda record: calls.append("first"))
        registry.register(lambda record: calls.append("second"))
        registry.register(lambda record: calls.append("third"))

        deliver(registry, make_record(Open))
        assert calls == ["first", "second", "third"]

    def test_protocol_and_callable_listeners(self, registry: ListenerRegistry) -> None:
        protocol_listener = RecordingListener()
        seen: list[object] = []
        registry.register(protocol_listener)
        registry.register(seen.append)

        record = make_record(Open)
        deliver(registry, record)

        assert isinstance(protocol_listener, EventHistoryListener)
        assert protocol_listener.records == [record]
        assert seen == [record]

    def test_removed_listener_not_notified(self, registry: ListenerRegistry) -> None:
        listener = RecordingListener()
        registry.register(listener)
        registry.unregister(listener)

        deliver(registry, make_record(Open))
        assert listener.records == []

    def test_listener_error_propagates(self, registry: ListenerRegistry) -> None:
        def boom(record: object) -> None:
            raise RuntimeError("listener crash")

        registry.register(boom)
        with pytest.raises(RuntimeError, match="listener crash"):
            deliver(registry, make_record(Open))

    def test_clear_drops_all_and_deactivates(
        self, registry: ListenerRegistry, activation: ActivationController
    ) -> None:
        registry.register(RecordingListener())
        registry.register(RecordingListener())
        registry.clear()

        assert len(registry) == 0
        assert activation.active is False

    def test_contains(self, registry: ListenerRegistry) -> None:
        listener = RecordingListener()
        registry.register(listener)

        assert listener in registry
        assert RecordingListener() not in registry

    def test_unregister_waits_for_inflight_delivery(
        self, registry: ListenerRegistry
    ) -> None:
        """Removal blocks until a delivery that already started has finished."""
        entered = threading.Event()
        release = threading.Event()
        delivered: list[object] = []

        def slow(record: object) -> None:
            entered.set()
            release.wait(timeout=5)
            delivered.append(record)

        registry.register(slow)
        notifier = threading.Thread(target=deliver, args=(registry, make_record(Open)))
        notifier.start()
        assert entered.wait(timeout=5)

        remover = threading.Thread(target=registry.unregister, args=(slow,))
        remover.start()
        remover.join(timeout=0.1)
        assert remover.is_alive()  # still waiting for the lock

        release.set()
        notifier.join(timeout=5)
        remover.join(timeout=5)

        assert len(delivered) == 1
        assert len(registry) == 0
        deliver(registry, make_record(Open, sequence=1))
        assert len(delivered) == 1
