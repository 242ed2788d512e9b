"""Tests for the pure Python Signal and ObservableProperty classes.

These run without Qt.
"""

import pytest

from bibliodesk.gui.viewmodels import BaseViewModel, ObservableProperty, Signal
from bibliodesk.events.bus import Event, EventBus


class TestSignal:
    def test_connect_and_emit(self):
        sig = Signal()
        received = []
        sig.connect(received.append)

        sig.emit(42)

        assert received == [42]

    def test_connect_is_idempotent_per_handler(self):
        sig = Signal()
        received = []
        sig.connect(received.append)
        sig.connect(received.append)

        sig.emit("once")

        assert received == ["once"]
        assert sig.handler_count == 1

    def test_disconnect(self):
        sig = Signal()
        received = []
        handler = sig.connect(received.append)
        sig.emit(1)
        sig.disconnect(handler)
        sig.emit(2)

        assert received == [1]

    def test_disconnect_missing_raises(self):
        with pytest.raises(ValueError):
            Signal().disconnect(lambda: None)

    def test_failing_handler_does_not_stop_others(self, caplog):
        sig = Signal()
        received = []

        def broken(value):
            raise RuntimeError("handler bug")

        sig.connect(broken)
        sig.connect(received.append)
        sig.emit("x")

        assert received == ["x"]
        assert "handler bug" in caplog.text

    def test_blocked_suppresses_emission(self):
        sig = Signal()
        received = []
        sig.connect(received.append)

        with sig.blocked():
            sig.emit("hidden")
        sig.emit("shown")

        assert received == ["shown"]


class TestObservableProperty:
    def test_emits_new_and_old_on_change(self):
        prop = ObservableProperty(False)
        changes = []
        prop.changed.connect(lambda new, old: changes.append((new, old)))

        prop.value = True
        prop.value = True

        assert changes == [(True, False)]


class TestBaseViewModel:
    def test_dispose_cancels_subscriptions(self):
        bus = EventBus()
        received = []
        vm = BaseViewModel()
        vm.subscribe_event(bus, Event, received.append)

        bus.publish(Event())
        vm.dispose()
        bus.publish(Event())

        assert len(received) == 1
        assert vm.disposed
