"""Render-and-broadcast: the asynchronous delivery path for an UpdateSet."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ripple.channels.registry import DEFAULT_CHANNEL

if TYPE_CHECKING:
    from ripple._types import Bindings

    from ripple.channels.registry import ChannelRegistry
    from ripple.rendering.renderer import ResponseRenderer
    from ripple.updates.update_set import UpdateSet


def push_updates(
    registry: ChannelRegistry,
    renderer: ResponseRenderer,
    updates: UpdateSet,
    bindings: Bindings,
    channel: str = DEFAULT_CHANNEL,
) -> bool:
    """Render *updates* and broadcast the payload to *channel*.

    Rendering is skipped when nobody listens on *channel*.  Render errors
    propagate before anything is sent; delivery errors propagate after the
    channel has been deregistered.

    Returns:
        True if the payload was delivered.

    """
    if registry.lookup(channel) is None:
        return False
    payload = renderer.render_to_string(updates, bindings)
    return registry.broadcast(channel, payload)
