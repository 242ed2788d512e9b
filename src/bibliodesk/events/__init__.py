from .bus import Event, EventBus, Subscription
from .app_events import RecordsLoadedEvent, RecordsLoadFailedEvent, ViewShownEvent

__all__ = [
    "Event",
    "EventBus",
    "RecordsLoadFailedEvent",
    "RecordsLoadedEvent",
    "Subscription",
    "ViewShownEvent",
]
