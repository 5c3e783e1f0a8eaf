"""Chirp adapter — update responses and named push streams."""

from ripple.web.responses import (
    ENVELOPE_CONTENT_TYPE,
    PARTIAL_REQUEST_HEADER,
    UpdateResponder,
    accepts_envelope,
    is_partial_request,
)
from ripple.web.streams import UpdateStreams

__all__ = [
    "ENVELOPE_CONTENT_TYPE",
    "PARTIAL_REQUEST_HEADER",
    "UpdateResponder",
    "UpdateStreams",
    "accepts_envelope",
    "is_partial_request",
]
