"""Response renderer — streams an UpdateSet to a synchronous sink.

For each operation, in insertion order, the renderer renders the fragment
(never for removals), wraps it in the encoder's opening and closing markup,
and writes the result to the sink as one chunk.  Output reaches the sink one
operation at a time: when a fragment fails to render, everything before it has
already been written and the error propagates to the caller, which owns
aborting the exchange.  Nothing is retried.
"""

from __future__ import annotations

import io
import time
from typing import TYPE_CHECKING, Any, Protocol

from ripple.encoding.encoders import get_encoder

if TYPE_CHECKING:
    from ripple._types import Bindings

    from ripple.encoding.encoders import OperationEncoder
    from ripple.observability.collector import RippleCollector
    from ripple.rendering.resolver import FragmentResolver
    from ripple.updates.update_set import UpdateSet


class TextSink(Protocol):
    """Anything with ``write(str)``: a response buffer, a socket wrapper, stdout."""

    def write(self, data: str, /) -> Any: ...


class ResponseRenderer:
    """Renders UpdateSets through a FragmentResolver and a wire encoder.

    Args:
        resolver: Renders fragment identifiers to markup.
        encoder: An ``OperationEncoder`` or the name of a registered format.
        collector: Optional collector that records one event per render pass.

    The renderer holds no per-call state; one instance serves every request.
    """

    __slots__ = ("_collector", "_encoder", "_resolver")

    def __init__(
        self,
        resolver: FragmentResolver,
        encoder: OperationEncoder | str = "envelope",
        *,
        collector: RippleCollector | None = None,
    ) -> None:
        self._resolver = resolver
        self._encoder = get_encoder(encoder) if isinstance(encoder, str) else encoder
        self._collector = collector

    @property
    def encoder(self) -> OperationEncoder:
        return self._encoder

    @property
    def content_type(self) -> str:
        """Content type of the encoded output."""
        return self._encoder.content_type

    def render(
        self,
        updates: UpdateSet,
        bindings: Bindings,
        sink: TextSink,
    ) -> int:
        """Render *updates* into *sink*, one operation at a time.

        Returns:
            Number of fragments rendered (removals excluded).

        Raises:
            TemplateNotFoundError: A template could not be found.
            FragmentNotFoundError: A region could not be found.
            OSError: The sink failed.  Earlier output is not retracted.

        """
        t0 = time.perf_counter()
        rendered = 0
        for op in updates:
            if op.is_remove:
                sink.write(self._encoder.encode(op))
                continue
            markup = self._resolver.render(op.fragment, bindings)
            sink.write(self._encoder.encode(op, markup))
            rendered += 1

        if self._collector is not None:
            self._collector.record_render(
                encoding=self._encoder.name,
                operations=len(updates),
                fragments_rendered=rendered,
                duration_ms=(time.perf_counter() - t0) * 1000,
            )
        return rendered

    def render_to_string(self, updates: UpdateSet, bindings: Bindings) -> str:
        """Render *updates* into a single string (used for push payloads).

        All-or-nothing: if any fragment fails the error propagates and no
        partial payload is returned.
        """
        buffer = io.StringIO()
        self.render(updates, bindings, buffer)
        return buffer.getvalue()
