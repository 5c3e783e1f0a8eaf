"""Synchronous path — turn an UpdateSet into the HTTP response body.

Request detection follows the two client conventions:

- out-of-band swaps are requested by partial-page clients sending
  ``HX-Request: true``
- envelope streams are requested by clients that list the envelope
  content type in ``Accept``
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Any

from chirp import Response

from ripple.encoding.encoders import EnvelopeEncoder

if TYPE_CHECKING:
    from collections.abc import Mapping

    from chirp import Request

    from ripple.rendering.renderer import ResponseRenderer
    from ripple.updates.update_set import UpdateSet

PARTIAL_REQUEST_HEADER = "HX-Request"
ENVELOPE_CONTENT_TYPE = EnvelopeEncoder.content_type


def is_partial_request(request: Request) -> bool:
    """True if the client asked for a partial update (``HX-Request: true``)."""
    return request.headers.get(PARTIAL_REQUEST_HEADER, "").lower() == "true"


def accepts_envelope(request: Request) -> bool:
    """True if ``Accept`` lists the envelope content type."""
    accept = request.headers.get("Accept", "")
    return any(
        part.split(";", 1)[0].strip().lower() == ENVELOPE_CONTENT_TYPE
        for part in accept.split(",")
    )


class UpdateResponder:
    """Builds Chirp responses from UpdateSets.

    The body is rendered into a buffer first: Chirp responses are immutable
    values, so a failed render raises before any response exists and the
    framework's error handling applies.
    """

    __slots__ = ("_renderer",)

    def __init__(self, renderer: ResponseRenderer) -> None:
        self._renderer = renderer

    def respond(
        self,
        updates: UpdateSet,
        bindings: Mapping[str, Any] | None = None,
        *,
        status: int = 200,
    ) -> Response:
        buffer = io.StringIO()
        self._renderer.render(updates, bindings or {}, buffer)
        return Response(
            body=buffer.getvalue(),
            status=status,
            content_type=self._renderer.content_type,
        )
