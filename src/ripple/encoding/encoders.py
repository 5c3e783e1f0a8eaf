"""Wire encoders — wrap rendered fragments for partial-update clients.

Two formats share the same operation model:

Envelope (``"envelope"``)::

    <update-op action="append" target="list"><template>...</template></update-op>

Out-of-band wrapper (``"oob"``)::

    <div id="list" data-swap="beforeend">...</div>

Remove operations carry no inner markup in either format.  Encoders are
stateless; one instance may be shared by every renderer and thread.
"""

from __future__ import annotations

import threading
from html import escape
from typing import TYPE_CHECKING, Protocol

from ripple._errors import ConfigError

if TYPE_CHECKING:
    from ripple.updates.operation import UpdateOperation


class OperationEncoder(Protocol):
    """Wraps one operation's rendered markup in a wire format."""

    name: str
    content_type: str

    def open(self, op: UpdateOperation) -> str: ...

    def close(self, op: UpdateOperation) -> str: ...

    def encode(self, op: UpdateOperation, markup: str | None = None) -> str: ...


class _WrappingEncoder:
    """Shared ``encode`` in terms of ``open``/``close``."""

    __slots__ = ()

    name: str
    content_type: str

    def open(self, op: UpdateOperation) -> str:
        raise NotImplementedError

    def close(self, op: UpdateOperation) -> str:
        raise NotImplementedError

    def encode(self, op: UpdateOperation, markup: str | None = None) -> str:
        """Encode *op* with its rendered *markup* (ignored for removals)."""
        if op.is_remove or markup is None:
            return self.open(op) + self.close(op)
        return self.open(op) + markup + self.close(op)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class EnvelopeEncoder(_WrappingEncoder):
    """Envelope style: ``<update-op>`` with an inner ``<template>``."""

    __slots__ = ()

    name = "envelope"
    content_type = "text/vnd.update-op.html"

    def open(self, op: UpdateOperation) -> str:
        head = f'<update-op action="{op.action.verb}" target="{_attr(op.target)}">'
        if op.is_remove:
            return head
        return head + "<template>"

    def close(self, op: UpdateOperation) -> str:
        if op.is_remove:
            return "</update-op>"
        return "</template></update-op>"


class OutOfBandEncoder(_WrappingEncoder):
    """Out-of-band wrapper style: a ``<div>`` keyed by the target id."""

    __slots__ = ()

    name = "oob"
    content_type = "text/html; charset=utf-8"

    def open(self, op: UpdateOperation) -> str:
        return f'<div id="{_attr(op.target)}" data-swap="{op.action.swap_mode}">'

    def close(self, op: UpdateOperation) -> str:
        return "</div>"


def _attr(value: str) -> str:
    return escape(value, quote=True)


# ---------------------------------------------------------------------------
# Format registry
# ---------------------------------------------------------------------------

_ENCODERS: dict[str, OperationEncoder] = {
    EnvelopeEncoder.name: EnvelopeEncoder(),
    OutOfBandEncoder.name: OutOfBandEncoder(),
}
_ENCODERS_LOCK = threading.Lock()


def get_encoder(name: str) -> OperationEncoder:
    """Look up a registered encoder by format name.

    Raises:
        ConfigError: If no encoder is registered under *name*.

    """
    with _ENCODERS_LOCK:
        encoder = _ENCODERS.get(name)
        available = sorted(_ENCODERS)
    if encoder is None:
        msg = f"Unknown wire format {name!r}. Available: {', '.join(available)}"
        raise ConfigError(msg)
    return encoder


def register_encoder(encoder: OperationEncoder) -> None:
    """Register an additional wire format under ``encoder.name``."""
    if not encoder.name:
        msg = "Encoder name must not be empty"
        raise ConfigError(msg)
    with _ENCODERS_LOCK:
        _ENCODERS[encoder.name] = encoder


def available_formats() -> tuple[str, ...]:
    """Names of all registered wire formats."""
    with _ENCODERS_LOCK:
        return tuple(sorted(_ENCODERS))
