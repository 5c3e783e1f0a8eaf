"""Channel registry — name-keyed set of open push channels.

Tracks long-lived push connections, associates them with names, and
removes them as soon as their transport completes, fails, or times out.

Lifecycle per channel::

    open() --> OPEN --(complete | error | timeout | close() | failed write)--> CLOSED --> removed

Thread Safety:
    The name-to-channel map is protected by a lock that is only held for
    dictionary operations, never across a sink write, so a slow client
    never blocks unrelated channels.  Writes to one channel are serialized
    by that channel's own lock.  Removal is compare-and-remove: a late
    callback from a superseded channel never evicts its replacement.

"""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING

from ripple._errors import DeliveryError, InvalidArgumentError
from ripple.channels.channel import Channel
from ripple.channels.sink import QueueSink

if TYPE_CHECKING:
    from ripple._types import ChannelName
    from ripple.channels.sink import BaseSink
    from ripple.observability.collector import RippleCollector
    from ripple.observability.events import CloseReason

DEFAULT_CHANNEL = "default"


class ChannelRegistry:
    """Concurrent registry of named push channels.

    Args:
        collector: Optional collector for channel lifecycle and broadcast events.
        max_pending: Queue bound for sinks the registry creates itself.

    """

    __slots__ = ("_channels", "_collector", "_lock", "_max_pending")

    def __init__(
        self,
        *,
        collector: RippleCollector | None = None,
        max_pending: int = 0,
    ) -> None:
        self._channels: dict[str, Channel] = {}
        self._lock = threading.Lock()
        self._collector = collector
        self._max_pending = max_pending

    # -- Introspection --

    def __len__(self) -> int:
        with self._lock:
            return len(self._channels)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._channels

    def lookup(self, name: ChannelName) -> Channel | None:
        """Return the open channel registered under *name*, if any."""
        with self._lock:
            return self._channels.get(name)

    def names(self) -> frozenset[str]:
        """Names with an open channel (snapshot)."""
        with self._lock:
            return frozenset(self._channels)

    # -- Lifecycle --

    def open(
        self,
        name: ChannelName = DEFAULT_CHANNEL,
        timeout: float | None = None,
        sink: BaseSink | None = None,
    ) -> Channel:
        """Register a new OPEN channel under *name*.

        When *sink* is None a ``QueueSink`` with the given timeout is
        created.  An existing channel under the same name is superseded:
        it is closed and its sink completed, so its stream ends.

        Raises:
            InvalidArgumentError: If *name* is empty.

        """
        if not name:
            msg = "Channel name must not be empty"
            raise InvalidArgumentError(msg)
        if sink is None:
            sink = QueueSink(timeout=timeout, max_pending=self._max_pending)

        channel = Channel(name, sink, timeout=timeout)
        with self._lock:
            previous = self._channels.get(name)
            self._channels[name] = channel

        if self._collector is not None:
            self._collector.record_open(name, timeout=timeout, replaced=previous is not None)
        if previous is not None:
            self._release(previous, "superseded")

        # Subscribed after registration: a sink that is already terminated
        # fires immediately and the entry is removed again.
        sink.on_complete(lambda: self._release(channel, "complete"))
        sink.on_error(lambda _exc: self._release(channel, "error"))
        sink.on_timeout(lambda: self._release(channel, "timeout"))
        return channel

    def close(self, name: ChannelName) -> bool:
        """Close and remove the channel under *name*.  Idempotent.

        Returns:
            True if a channel was closed, False if none was registered.

        """
        with self._lock:
            channel = self._channels.pop(name, None)
        if channel is None:
            return False
        return self._release(channel, "closed")

    def close_all(self) -> int:
        """Close every registered channel (e.g. on shutdown)."""
        with self._lock:
            channels = list(self._channels.values())
            self._channels.clear()
        return sum(1 for channel in channels if self._release(channel, "closed"))

    # -- Delivery --

    def broadcast(self, name: ChannelName, payload: str) -> bool:
        """Deliver *payload* to the channel under *name*.

        A missing or closed channel is not an error: the client may simply
        not be connected yet.

        Returns:
            True if the payload was written, False if no open channel took it.

        Raises:
            DeliveryError: The sink write failed.  The channel has been
                closed and deregistered before this is raised.

        """
        channel = self.lookup(name)
        if channel is None:
            self._record_broadcast(name, delivered=False)
            return False

        t0 = time.perf_counter()
        try:
            delivered = channel.deliver(payload)
        except DeliveryError:
            self._release(channel, "delivery_failed")
            raise
        self._record_broadcast(
            name,
            delivered=delivered,
            size=len(payload) if delivered else 0,
            duration_ms=(time.perf_counter() - t0) * 1000,
        )
        return delivered

    # -- Internals --

    def _release(self, channel: Channel, reason: CloseReason) -> bool:
        """Deregister *channel* (if still current) and close it.

        Safe to call repeatedly and from sink callbacks; only the call that
        actually closes the channel records an event.
        """
        with self._lock:
            if self._channels.get(channel.name) is channel:
                del self._channels[channel.name]
        if not channel.close(reason):
            return False
        if self._collector is not None:
            self._collector.record_close(
                channel.name, reason=reason, deliveries=channel.deliveries,
            )
        return True

    def _record_broadcast(
        self, name: str, *, delivered: bool, size: int = 0, duration_ms: float = 0.0,
    ) -> None:
        if self._collector is not None:
            self._collector.record_broadcast(
                name, delivered=delivered, size=size, duration_ms=duration_ms,
            )
