import logging

from bibliodesk.errors.handler import ErrorHandler, ErrorOccurredEvent, ErrorSeverity
from bibliodesk.events import RecordsLoadedEvent, ViewShownEvent
from bibliodesk.events.bus import EventBus


def test_publish_reaches_subscribers_of_exact_type():
    bus = EventBus()
    shown, loaded = [], []
    bus.subscribe(ViewShownEvent, shown.append)
    bus.subscribe(RecordsLoadedEvent, loaded.append)

    bus.publish(ViewShownEvent(view_id="books", area="main"))

    assert [event.view_id for event in shown] == ["books"]
    assert loaded == []


def test_unsubscribe_stops_delivery():
    bus = EventBus()
    received = []
    subscription = bus.subscribe(ViewShownEvent, received.append)

    bus.unsubscribe(subscription)
    bus.publish(ViewShownEvent(view_id="books"))

    assert received == []
    assert bus.subscriber_count(ViewShownEvent) == 0


def test_failing_handler_is_logged(caplog):
    bus = EventBus(logging.getLogger("test.bus"))
    received = []

    def broken(event):
        raise ValueError("bad handler")

    bus.subscribe(ViewShownEvent, broken)
    bus.subscribe(ViewShownEvent, received.append)
    with caplog.at_level(logging.ERROR, logger="test.bus"):
        bus.publish(ViewShownEvent(view_id="x"))

    assert len(received) == 1
    assert "bad handler" in caplog.text


def test_events_carry_identity():
    first = ViewShownEvent(view_id="a")
    second = ViewShownEvent(view_id="a")
    assert first.event_id != second.event_id


class TestErrorHandler:
    def test_logs_publishes_and_notifies_ui(self, caplog):
        bus = EventBus()
        published = []
        bus.subscribe(ErrorOccurredEvent, published.append)
        handler = ErrorHandler(logging.getLogger("test.errors"), bus)
        shown = []
        handler.register_ui_callback(lambda message, severity: shown.append((message, severity)))

        with caplog.at_level(logging.ERROR, logger="test.errors"):
            handler.handle(RuntimeError("catalog offline"), context={"source": "books"})

        assert "catalog offline" in caplog.text
        assert published[0].context == {"source": "books"}
        assert shown == [("catalog offline", ErrorSeverity.ERROR)]

    def test_warnings_do_not_reach_ui(self):
        handler = ErrorHandler(logging.getLogger("test.errors"))
        shown = []
        handler.register_ui_callback(lambda message, severity: shown.append(message))

        handler.handle(RuntimeError("minor"), ErrorSeverity.WARNING)

        assert shown == []
