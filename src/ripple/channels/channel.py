"""Channel — a named, single-writer handle around a transport sink."""

from __future__ import annotations

import threading
from enum import Enum
from typing import TYPE_CHECKING

from ripple._errors import DeliveryError, SinkClosedError

if TYPE_CHECKING:
    from ripple.channels.sink import BaseSink
    from ripple.observability.events import CloseReason


class ChannelState(Enum):
    OPEN = "open"
    CLOSED = "closed"


class Channel:
    """A push channel registered under a name.

    The registry owns the name-to-channel entry; the transport owns the
    sink.  Writes are serialized per channel, so concurrent broadcasts to
    one name never interleave on the sink.

    Args:
        name: Registry key.
        sink: Transport sink payloads are written to.
        timeout: Transport timeout in seconds (informational; the transport
            enforces it and reports through ``on_timeout``).

    """

    __slots__ = ("_close_reason", "_deliveries", "_state", "_state_lock", "_write_lock", "name", "sink", "timeout")

    def __init__(self, name: str, sink: BaseSink, *, timeout: float | None = None) -> None:
        self.name = name
        self.sink = sink
        self.timeout = timeout
        self._state = ChannelState.OPEN
        self._close_reason: CloseReason | None = None
        self._deliveries = 0
        self._state_lock = threading.Lock()
        self._write_lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Channel(name={self.name!r}, state={self.state.value})"

    @property
    def state(self) -> ChannelState:
        with self._state_lock:
            return self._state

    @property
    def is_open(self) -> bool:
        return self.state is ChannelState.OPEN

    @property
    def close_reason(self) -> CloseReason | None:
        with self._state_lock:
            return self._close_reason

    @property
    def deliveries(self) -> int:
        """Payloads successfully written over the channel's lifetime."""
        with self._state_lock:
            return self._deliveries

    def deliver(self, payload: str) -> bool:
        """Write *payload* to the sink.

        Returns:
            True if written, False if the channel (or its sink) had already closed.

        Raises:
            DeliveryError: The sink write failed.  The caller must deregister
                the channel; the sink itself has already been failed.

        """
        with self._write_lock:
            if not self.is_open:
                return False
            try:
                self.sink.write(payload)
            except SinkClosedError:
                return False
            except OSError as exc:
                msg = f"Delivery to channel {self.name!r} failed: {exc}"
                raise DeliveryError(msg) from exc
            with self._state_lock:
                self._deliveries += 1
            return True

    def close(self, reason: CloseReason = "closed") -> bool:
        """Transition to CLOSED and complete the sink.

        Only the first call wins; it returns True.  Completing an already
        terminated sink is a no-op, so this is safe to call from the sink's
        own lifecycle callbacks.
        """
        with self._state_lock:
            if self._state is ChannelState.CLOSED:
                return False
            self._state = ChannelState.CLOSED
            self._close_reason = reason
        self.sink.complete()
        return True
