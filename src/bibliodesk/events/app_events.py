"""Events published by the navigation and list-loading layers."""

from __future__ import annotations

from dataclasses import dataclass

from .bus import Event


@dataclass(kw_only=True)
class ViewShownEvent(Event):
    view_id: str
    area: str = ""


@dataclass(kw_only=True)
class RecordsLoadedEvent(Event):
    source: str
    count: int


@dataclass(kw_only=True)
class RecordsLoadFailedEvent(Event):
    source: str
    message: str


@dataclass(kw_only=True)
class SessionStartedEvent(Event):
    user_id: str
    is_admin: bool = False


@dataclass(kw_only=True)
class SessionEndedEvent(Event):
    user_id: str
