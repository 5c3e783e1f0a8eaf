"""Observability — render and channel lifecycle events.

All events are frozen dataclasses with nanosecond timestamps, safe for
concurrent production from request handlers and publisher threads.

Quick Start:
    >>> from ripple.observability import EventLog, RippleCollector
    >>> collector = RippleCollector(EventLog())
    >>> # Pass the collector to ResponseRenderer and ChannelRegistry
    >>> collector.log.stats()["total"]
    0

"""

from ripple.observability.collector import RippleCollector
from ripple.observability.events import (
    ChannelClosed,
    ChannelOpened,
    RenderCompleted,
    RippleEvent,
    UpdatesBroadcast,
    now_ns,
)
from ripple.observability.log import EventLog

__all__ = [
    "ChannelClosed",
    "ChannelOpened",
    "EventLog",
    "RenderCompleted",
    "RippleCollector",
    "RippleEvent",
    "UpdatesBroadcast",
    "now_ns",
]
