"""UpdateSet — immutable, ordered accumulation of update operations.

Usage::

    updates = (
        UpdateSet()
        .replace("new-todo").within_template("index")
        .append("todos").with_fragment("fragments :: todo")
        .remove("todo-3")
    )

Every builder step returns a new UpdateSet backed by a fresh tuple, so an
UpdateSet can be reused as a common prefix or read from several threads
without copying.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from ripple._errors import InvalidArgumentError
from ripple.updates.actions import Action
from ripple.updates.fragment_id import SEPARATOR, has_separator
from ripple.updates.operation import UpdateOperation


@dataclass(frozen=True, slots=True)
class UpdateSet:
    """An ordered, immutable collection of UpdateOperations.

    Insertion order is the render and delivery order.
    """

    operations: tuple[UpdateOperation, ...] = ()

    # -- Builder entry points --

    def append(self, target: str) -> UpdateBuilder:
        """Append a rendered fragment to the end of *target*."""
        return UpdateBuilder(self, _require_target(target), Action.APPEND)

    def prepend(self, target: str) -> UpdateBuilder:
        """Insert a rendered fragment at the start of *target*."""
        return UpdateBuilder(self, _require_target(target), Action.PREPEND)

    def replace(self, target: str) -> UpdateBuilder:
        """Replace *target* with a rendered fragment."""
        return UpdateBuilder(self, _require_target(target), Action.REPLACE)

    def update(self, target: str) -> UpdateBuilder:
        """Replace the contents of *target* with a rendered fragment."""
        return UpdateBuilder(self, _require_target(target), Action.UPDATE)

    def remove(self, target: str) -> UpdateSet:
        """Remove *target*.  Nothing is rendered for this operation."""
        return self.and_then(UpdateOperation.removal(_require_target(target)))

    def and_then(self, operation: UpdateOperation) -> UpdateSet:
        """Return a new UpdateSet with *operation* appended."""
        return UpdateSet((*self.operations, operation))

    # -- Sequence protocol --

    def __iter__(self) -> Iterator[UpdateOperation]:
        return iter(self.operations)

    def __len__(self) -> int:
        return len(self.operations)

    def __bool__(self) -> bool:
        return bool(self.operations)

    def __add__(self, other: object) -> UpdateSet:
        if not isinstance(other, UpdateSet):
            return NotImplemented
        return UpdateSet((*self.operations, *other.operations))

    @property
    def targets(self) -> tuple[str, ...]:
        """Targets in operation order (duplicates preserved)."""
        return tuple(op.target for op in self.operations)


@dataclass(frozen=True, slots=True)
class UpdateBuilder:
    """Pending operation awaiting its fragment.

    Produced by ``UpdateSet.append()`` and friends; each completion method
    returns a new UpdateSet containing the base operations plus this one.
    """

    base: UpdateSet
    target: str
    action: Action

    def with_(self, fragment_id: str) -> UpdateSet:
        """Render *fragment_id* verbatim (template name or ``template :: region``)."""
        if not fragment_id:
            msg = f"Fragment for {self.action.verb} on {self.target!r} must not be empty"
            raise InvalidArgumentError(msg)
        return self._finish(fragment_id)

    def within_template(self, template: str) -> UpdateSet:
        """Render the region named like the target inside *template*."""
        if not template or not template.strip():
            msg = "Template name must not be empty"
            raise InvalidArgumentError(msg)
        return self._finish(f"{template} {SEPARATOR} {self.target}")

    def with_fragment(self, fragment_id: str) -> UpdateSet:
        """Render an explicit ``template :: region`` fragment identifier."""
        if not fragment_id:
            msg = "Fragment must not be empty"
            raise InvalidArgumentError(msg)
        if not has_separator(fragment_id):
            msg = f"Invalid fragment identifier {fragment_id!r}, expected 'template {SEPARATOR} region'"
            raise InvalidArgumentError(msg)
        return self._finish(fragment_id)

    def _finish(self, fragment_id: str) -> UpdateSet:
        return self.base.and_then(UpdateOperation(self.action, self.target, fragment_id))


def _require_target(target: str) -> str:
    if not target:
        msg = "Update target must not be empty"
        raise InvalidArgumentError(msg)
    return target
