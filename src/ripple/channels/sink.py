"""Transport sinks — the output side of a push channel.

A sink accepts ``write(str)`` and reports its lifecycle through three
callback kinds, mirroring a server-push emitter:

- ``on_complete``: the stream ended normally (client left, server closed it)
- ``on_error``: the transport failed
- ``on_timeout``: the transport's own timeout elapsed

Exactly one terminal event fires per sink; later ones are ignored.  After
termination every ``write`` raises ``SinkClosedError``.

``QueueSink`` is the asyncio transport used for Server-Sent Events: writes
may come from any thread and are handed to the owning event loop, and
``events()`` is the async generator the HTTP layer streams from.
"""

from __future__ import annotations

import asyncio
import contextlib
import threading
from typing import TYPE_CHECKING, Any, Literal

from ripple._errors import SinkClosedError, SinkOverflowError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

type Termination = Literal["complete", "error", "timeout"]


class BaseSink:
    """Lifecycle bookkeeping shared by all sinks.

    Subclasses implement ``_write`` and may override ``_on_terminated``.

    Thread Safety:
        Callback lists and the terminal state are protected by a lock.
        Callbacks run outside the lock, on the thread that terminated the sink.

    """

    def __init__(self) -> None:
        self._state_lock = threading.Lock()
        self._termination: Termination | None = None
        self._error: BaseException | None = None
        self._complete_callbacks: list[Callable[[], Any]] = []
        self._error_callbacks: list[Callable[[BaseException], Any]] = []
        self._timeout_callbacks: list[Callable[[], Any]] = []

    # -- Lifecycle callbacks --

    def on_complete(self, callback: Callable[[], Any]) -> None:
        """Run *callback* when the sink completes (immediately if it already has)."""
        with self._state_lock:
            if self._termination is None:
                self._complete_callbacks.append(callback)
                return
            fire = self._termination == "complete"
        if fire:
            callback()

    def on_error(self, callback: Callable[[BaseException], Any]) -> None:
        """Run *callback* with the error when the transport fails."""
        with self._state_lock:
            if self._termination is None:
                self._error_callbacks.append(callback)
                return
            fire = self._termination == "error"
            error = self._error
        if fire and error is not None:
            callback(error)

    def on_timeout(self, callback: Callable[[], Any]) -> None:
        """Run *callback* when the transport's timeout elapses."""
        with self._state_lock:
            if self._termination is None:
                self._timeout_callbacks.append(callback)
                return
            fire = self._termination == "timeout"
        if fire:
            callback()

    @property
    def closed(self) -> bool:
        with self._state_lock:
            return self._termination is not None

    @property
    def termination(self) -> Termination | None:
        """How the sink ended, or None while it is still open."""
        with self._state_lock:
            return self._termination

    # -- Terminal transitions --

    def complete(self) -> bool:
        """End the stream normally.  Returns False if already terminated."""
        callbacks = self._terminate("complete")
        if callbacks is None:
            return False
        for callback in callbacks:
            callback()
        return True

    def fail(self, error: BaseException) -> bool:
        """Mark the transport as failed.  Returns False if already terminated."""
        callbacks = self._terminate("error", error)
        if callbacks is None:
            return False
        for callback in callbacks:
            callback(error)
        return True

    def expire(self) -> bool:
        """Report that the transport timed out.  Returns False if already terminated."""
        callbacks = self._terminate("timeout")
        if callbacks is None:
            return False
        for callback in callbacks:
            callback()
        return True

    def _terminate(
        self, kind: Termination, error: BaseException | None = None
    ) -> list[Callable[..., Any]] | None:
        with self._state_lock:
            if self._termination is not None:
                return None
            self._termination = kind
            self._error = error
            callbacks: list[Callable[..., Any]]
            if kind == "complete":
                callbacks = list(self._complete_callbacks)
            elif kind == "error":
                callbacks = list(self._error_callbacks)
            else:
                callbacks = list(self._timeout_callbacks)
            self._complete_callbacks.clear()
            self._error_callbacks.clear()
            self._timeout_callbacks.clear()
        self._on_terminated()
        return callbacks

    # -- Writing --

    def write(self, data: str) -> None:
        """Write *data* to the transport.

        Raises:
            SinkClosedError: The sink already terminated.
            OSError: The transport failed; the sink is failed before re-raising.

        """
        if self.closed:
            msg = "write on a closed sink"
            raise SinkClosedError(msg)
        try:
            self._write(data)
        except SinkClosedError:
            raise
        except OSError as exc:
            self.fail(exc)
            raise

    def _write(self, data: str) -> None:
        raise NotImplementedError

    def _on_terminated(self) -> None:
        """Hook run once, after the terminal state is set and before callbacks."""


class WriterSink(BaseSink):
    """Sink over any object with ``write(str)``, e.g. a response buffer or a socket file.

    ``OSError`` from the stream fails the sink.
    """

    def __init__(self, stream: Any) -> None:
        super().__init__()
        self._stream = stream

    def _write(self, data: str) -> None:
        self._stream.write(data)
        flush = getattr(self._stream, "flush", None)
        if flush is not None:
            flush()


class _Wakeup:
    """Queue marker that wakes a waiting consumer after termination."""

    __slots__ = ()


_WAKEUP = _Wakeup()


class QueueSink(BaseSink):
    """asyncio-queue backed sink for Server-Sent Event streams.

    Args:
        timeout: Seconds after which ``events()`` stops and the sink expires.
            ``None`` keeps the stream open until the client disconnects.
        max_pending: Queue bound; writes beyond it raise ``SinkOverflowError``.
            0 means unbounded.
        write_timeout: Seconds a writer on another thread waits for the event
            loop to accept a payload.

    The sink binds to the running event loop when constructed inside one,
    or when ``events()`` starts.  Writes from the loop thread enqueue
    directly; writes from other threads are scheduled on the loop and wait
    for the result, so failures surface to the writer.
    """

    def __init__(
        self,
        *,
        timeout: float | None = None,
        max_pending: int = 0,
        write_timeout: float = 5.0,
    ) -> None:
        super().__init__()
        self.timeout = timeout
        self._write_timeout = write_timeout
        self._queue: asyncio.Queue[str | _Wakeup] = asyncio.Queue(maxsize=max_pending)
        self._loop: asyncio.AbstractEventLoop | None = _running_loop()

    @property
    def pending(self) -> int:
        """Payloads written but not yet consumed."""
        return self._queue.qsize()

    def _write(self, data: str) -> None:
        loop = self._loop
        if loop is None or _running_loop() is loop:
            self._enqueue(data)
            return
        try:
            future = asyncio.run_coroutine_threadsafe(self._enqueue_on_loop(data), loop)
        except RuntimeError as exc:
            msg = "event loop for this stream is closed"
            raise SinkClosedError(msg) from exc
        try:
            future.result(timeout=self._write_timeout)
        except TimeoutError as exc:
            future.cancel()
            msg = f"event loop did not accept the write within {self._write_timeout}s"
            raise SinkClosedError(msg) from exc

    async def _enqueue_on_loop(self, data: str) -> None:
        self._enqueue(data)

    def _enqueue(self, data: str) -> None:
        # Re-checked here: on the loop thread this orders the write against expiry.
        if self.closed:
            msg = "write on a closed sink"
            raise SinkClosedError(msg)
        try:
            self._queue.put_nowait(data)
        except asyncio.QueueFull as exc:
            msg = f"stream has {self._queue.qsize()} undelivered payloads"
            raise SinkOverflowError(msg) from exc

    def _on_terminated(self) -> None:
        loop = self._loop
        if loop is None or _running_loop() is loop:
            self._wake()
            return
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(self._wake)

    def _wake(self) -> None:
        with contextlib.suppress(asyncio.QueueFull):
            self._queue.put_nowait(_WAKEUP)

    async def events(self) -> AsyncIterator[str]:
        """Yield payloads as they arrive until the sink terminates.

        Client disconnect (``CancelledError`` / ``GeneratorExit``) completes
        the sink; the timeout elapsing expires it.
        """
        loop = asyncio.get_running_loop()
        self._loop = loop
        deadline = None if self.timeout is None else loop.time() + self.timeout
        try:
            while True:
                if self.closed and self._queue.empty():
                    return
                if deadline is None:
                    item = await self._queue.get()
                else:
                    remaining = deadline - loop.time()
                    if remaining <= 0:
                        self.expire()
                        return
                    try:
                        item = await asyncio.wait_for(self._queue.get(), remaining)
                    except TimeoutError:
                        self.expire()
                        return
                if isinstance(item, _Wakeup):
                    continue
                yield item
        finally:
            self.complete()


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None
