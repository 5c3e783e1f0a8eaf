"""Ripple collector — records render and channel events into an EventLog.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.
    Safe for concurrent use from request handlers and publisher threads.

"""

from __future__ import annotations

from ripple.observability.events import (
    ChannelClosed,
    ChannelOpened,
    CloseReason,
    RenderCompleted,
    UpdatesBroadcast,
    now_ns,
)
from ripple.observability.log import EventLog


class RippleCollector:
    """Event collector shared by renderers and channel registries.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    # ----- Channel lifecycle -----

    def record_open(self, channel: str, *, timeout: float | None = None, replaced: bool = False) -> None:
        self._log.append(
            ChannelOpened(
                channel=channel,
                timeout=timeout,
                replaced=replaced,
                timestamp_ns=now_ns(),
            )
        )

    def record_close(self, channel: str, *, reason: CloseReason, deliveries: int = 0) -> None:
        self._log.append(
            ChannelClosed(
                channel=channel,
                reason=reason,
                deliveries=deliveries,
                timestamp_ns=now_ns(),
            )
        )

    # ----- Delivery -----

    def record_broadcast(
        self,
        channel: str,
        *,
        delivered: bool,
        size: int = 0,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a broadcast attempt, delivered or not."""
        self._log.append(
            UpdatesBroadcast(
                channel=channel,
                delivered=delivered,
                size=size,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_render(
        self,
        *,
        encoding: str,
        operations: int,
        fragments_rendered: int,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a completed render pass."""
        self._log.append(
            RenderCompleted(
                encoding=encoding,
                operations=operations,
                fragments_rendered=fragments_rendered,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )
