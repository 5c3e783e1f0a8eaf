"""Event model for render and channel observability.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass
from typing import Literal

# Why a channel left the registry.
type CloseReason = Literal["closed", "complete", "error", "timeout", "superseded", "delivery_failed"]


# ---------------------------------------------------------------------------
# Channel lifecycle events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ChannelOpened:
    """A push channel was registered.

    Attributes:
        channel: Channel name.
        timeout: Transport timeout in seconds, if any.
        replaced: True if an existing channel under the same name was superseded.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    channel: str
    timeout: float | None
    replaced: bool
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ChannelClosed:
    """A push channel was closed and deregistered.

    Attributes:
        channel: Channel name.
        reason: What closed the channel.
        deliveries: Payloads written to the channel over its lifetime.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    channel: str
    reason: CloseReason
    deliveries: int
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Delivery events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class UpdatesBroadcast:
    """A payload was offered to a named channel.

    Attributes:
        channel: Channel name.
        delivered: False when no channel was open under that name.
        size: Payload length in characters.
        duration_ms: Time spent writing to the sink.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    channel: str
    delivered: bool
    size: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RenderCompleted:
    """An UpdateSet was rendered through a wire encoder.

    Attributes:
        encoding: Wire format name.
        operations: Number of operations in the set.
        fragments_rendered: Operations that went through the resolver.
        duration_ms: Total render time in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    encoding: str
    operations: int
    fragments_rendered: int
    duration_ms: float
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

type RippleEvent = ChannelOpened | ChannelClosed | UpdatesBroadcast | RenderCompleted


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
