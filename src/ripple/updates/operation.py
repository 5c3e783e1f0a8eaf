"""A single update operation."""

from __future__ import annotations

from dataclasses import dataclass

from ripple._errors import InvalidArgumentError
from ripple.updates.actions import Action

# Fragment placeholder for operations that never render.
REMOVE_SENTINEL = "¯\\_(ツ)_/¯"


@dataclass(frozen=True, slots=True)
class UpdateOperation:
    """One DOM-region mutation: action, target region, and fragment to render.

    Attributes:
        action: What the client does with the target region.
        target: Client-side region identifier.  Never empty.
        fragment: Fragment identifier used as the render key.  For
            ``Action.REMOVE`` this is ``REMOVE_SENTINEL`` and is never rendered.

    """

    action: Action
    target: str
    fragment: str

    def __post_init__(self) -> None:
        if not self.target:
            msg = "Update target must not be empty"
            raise InvalidArgumentError(msg)
        if not self.fragment:
            msg = f"Fragment for {self.action.verb} on {self.target!r} must not be empty"
            raise InvalidArgumentError(msg)

    @property
    def is_remove(self) -> bool:
        return self.action is Action.REMOVE

    @classmethod
    def removal(cls, target: str) -> UpdateOperation:
        """Build a remove operation for *target*."""
        return cls(Action.REMOVE, target, REMOVE_SENTINEL)
