"""Ripple — partial page updates, rendered in place or pushed to live clients.

Build an ordered set of update operations while handling a request, then
either return them as the response body or push them out of band to the
browsers listening on a named channel.

Quick start::

    from ripple import UpdateSet, create

    ripple = create()

    updates = (
        UpdateSet()
        .append("todos").with_fragment("fragments :: todo")
        .replace("foot").within_template("index")
    )

    # Synchronous: the response to the triggering request
    response = ripple.responder.respond(updates, {"todo": todo})

    # Asynchronous: every client on the "default" channel
    ripple.streams.push(updates, {"todo": todo})

Two wire formats are built in::

    envelope   <update-op action="append" target="todos"><template>...</template></update-op>
    oob        <div id="todos" data-swap="beforeend">...</div>

"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ripple.app import Ripple, create, from_root
    from ripple.channels.registry import ChannelRegistry
    from ripple.config import RippleConfig
    from ripple.rendering.renderer import ResponseRenderer
    from ripple.updates.update_set import UpdateSet

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0-dev"
__all__ = [
    "ChannelRegistry",
    "ResponseRenderer",
    "Ripple",
    "RippleConfig",
    "UpdateSet",
    "__version__",
    "create",
    "from_root",
]

_LAZY = {
    "ChannelRegistry": "ripple.channels.registry",
    "ResponseRenderer": "ripple.rendering.renderer",
    "Ripple": "ripple.app",
    "RippleConfig": "ripple.config",
    "UpdateSet": "ripple.updates.update_set",
    "create": "ripple.app",
    "from_root": "ripple.app",
}


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import ripple`` fast; Kida and Chirp load on first use.
    """
    module_name = _LAZY.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
