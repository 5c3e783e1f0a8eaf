"""Wire encodings for update operations."""

from ripple.encoding.encoders import (
    EnvelopeEncoder,
    OperationEncoder,
    OutOfBandEncoder,
    available_formats,
    get_encoder,
    register_encoder,
)

__all__ = [
    "EnvelopeEncoder",
    "OperationEncoder",
    "OutOfBandEncoder",
    "available_formats",
    "get_encoder",
    "register_encoder",
]
