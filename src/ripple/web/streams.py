"""Asynchronous path — named Server-Sent Event streams fed by a ChannelRegistry.

Usage in a Chirp app::

    streams = UpdateStreams(registry, renderer)

    @app.route("/stream")
    async def stream(request):
        return streams.open_stream("default", timeout=300)

    # elsewhere, from any thread
    streams.push(UpdateSet().replace("load").with_("index :: load"), {"time": now})

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from chirp import EventStream, SSEEvent

from ripple.channels.push import push_updates
from ripple.channels.registry import DEFAULT_CHANNEL
from ripple.channels.sink import QueueSink

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Mapping

    from ripple.channels.registry import ChannelRegistry
    from ripple.rendering.renderer import ResponseRenderer
    from ripple.updates.update_set import UpdateSet


class UpdateStreams:
    """Opens SSE streams as registry channels and pushes UpdateSets to them.

    Args:
        registry: Registry the streams are registered in.
        renderer: Renders pushed UpdateSets into payloads.
        event_name: SSE event name on every pushed payload.
        max_pending: Queue bound per stream (0 = unbounded).
        default_timeout: Stream timeout used when ``open_stream`` is given none.
        default_channel: Channel name used when callers do not name one.

    """

    def __init__(
        self,
        registry: ChannelRegistry,
        renderer: ResponseRenderer,
        *,
        event_name: str = "update",
        max_pending: int = 0,
        default_timeout: float | None = None,
        default_channel: str = DEFAULT_CHANNEL,
    ) -> None:
        self._registry = registry
        self._renderer = renderer
        self._event_name = event_name
        self._max_pending = max_pending
        self._default_timeout = default_timeout
        self._default_channel = default_channel

    @property
    def registry(self) -> ChannelRegistry:
        return self._registry

    def open_stream(self, name: str | None = None, timeout: float | None = None) -> EventStream:
        """Register a channel under *name* and return the EventStream serving it.

        A stream already open under *name* is superseded and ends.
        """
        if timeout is None:
            timeout = self._default_timeout
        sink = QueueSink(timeout=timeout, max_pending=self._max_pending)
        self._registry.open(name or self._default_channel, timeout=timeout, sink=sink)
        return EventStream(self._events(sink))

    async def _events(self, sink: QueueSink) -> AsyncIterator[SSEEvent]:
        # Completing the sink on disconnect deregisters the channel.
        try:
            async for payload in sink.events():
                yield SSEEvent(data=payload, event=self._event_name)
        finally:
            sink.complete()

    def push(
        self,
        updates: UpdateSet,
        bindings: Mapping[str, Any] | None = None,
        channel: str | None = None,
    ) -> bool:
        """Render *updates* and deliver them to the stream under *channel*.

        Returns False (without rendering) when no stream is open.
        """
        return push_updates(
            self._registry, self._renderer, updates, bindings or {}, channel or self._default_channel,
        )

    def close(self, name: str | None = None) -> bool:
        """End the stream under *name*."""
        return self._registry.close(name or self._default_channel)
