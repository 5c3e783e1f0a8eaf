"""Update actions and their wire mappings.

Each action carries two fixed renderings: the envelope verb (the
lower-cased action name) and the out-of-band swap mode.  Encoders read
these tables instead of branching on strings.
"""

from enum import Enum


class Action(Enum):
    """The DOM mutation a single update operation performs."""

    APPEND = "append"
    PREPEND = "prepend"
    REPLACE = "replace"
    UPDATE = "update"
    REMOVE = "remove"

    @property
    def verb(self) -> str:
        """Envelope verb, e.g. ``"append"``."""
        return _VERBS[self]

    @property
    def swap_mode(self) -> str:
        """Out-of-band swap mode, e.g. ``"beforeend"``."""
        return _SWAP_MODES[self]

    @property
    def renders(self) -> bool:
        """False for actions that carry no fragment markup."""
        return self is not Action.REMOVE


_VERBS: dict[Action, str] = {
    Action.APPEND: "append",
    Action.PREPEND: "prepend",
    Action.REPLACE: "replace",
    Action.UPDATE: "update",
    Action.REMOVE: "remove",
}

# "true" means whole-element swap (or removal, with an empty wrapper).
_SWAP_MODES: dict[Action, str] = {
    Action.APPEND: "beforeend",
    Action.PREPEND: "true",
    Action.REPLACE: "true",
    Action.UPDATE: "true",
    Action.REMOVE: "true",
}
