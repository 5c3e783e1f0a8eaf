"""Periodic publisher — pushes a freshly built UpdateSet on a fixed interval.

Each tick calls ``build()`` for the updates and bindings, renders them,
and broadcasts to one channel.  The push runs in a worker thread so a
slow sink never stalls the event loop.  Errors are reported to stderr and
the next tick proceeds; nothing is retried.
"""

from __future__ import annotations

import asyncio
import sys
from typing import TYPE_CHECKING, Any

from ripple.channels.push import push_updates
from ripple.channels.registry import DEFAULT_CHANNEL

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from chirp import App

    from ripple.channels.registry import ChannelRegistry
    from ripple.rendering.renderer import ResponseRenderer
    from ripple.updates.update_set import UpdateSet

    type UpdateFactory = Callable[[], tuple[UpdateSet, Mapping[str, Any]]]


class PeriodicPublisher:
    """Timer-driven driver for a ChannelRegistry.

    Args:
        registry: Registry holding the target channel.
        renderer: Renders each UpdateSet into a push payload.
        build: Returns ``(updates, bindings)`` for one tick.
        channel: Channel name to publish to.
        interval: Seconds between ticks.

    """

    def __init__(
        self,
        registry: ChannelRegistry,
        renderer: ResponseRenderer,
        build: UpdateFactory,
        *,
        channel: str = DEFAULT_CHANNEL,
        interval: float = 2.0,
    ) -> None:
        if interval <= 0:
            msg = f"interval must be positive, got {interval}"
            raise ValueError(msg)
        self._registry = registry
        self._renderer = renderer
        self._build = build
        self.channel = channel
        self.interval = interval
        self._task: asyncio.Task[None] | None = None
        self.published = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> bool:
        """Build, render, and broadcast once.  Returns True if delivered."""
        updates, bindings = self._build()
        delivered = push_updates(self._registry, self._renderer, updates, bindings, self.channel)
        if delivered:
            self.published += 1
        return delivered

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await asyncio.to_thread(self.tick)
            except Exception as exc:
                print(f"  Publish error on {self.channel!r}: {exc}", file=sys.stderr)

    def start(self) -> None:
        """Spawn the publishing task on the running loop.  No-op if running."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Cancel the publishing task and wait for it to finish."""
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    def install(self, app: App) -> None:
        """Start with the Chirp app and stop on shutdown."""

        @app.on_startup
        async def _start_publisher() -> None:
            self.start()

        @app.on_shutdown
        async def _stop_publisher() -> None:
            await self.stop()
