"""Update model — operations and the immutable UpdateSet builder."""

from ripple.updates.actions import Action
from ripple.updates.fragment_id import FragmentRef, parse_fragment_id
from ripple.updates.operation import REMOVE_SENTINEL, UpdateOperation
from ripple.updates.update_set import UpdateBuilder, UpdateSet

__all__ = [
    "REMOVE_SENTINEL",
    "Action",
    "FragmentRef",
    "UpdateBuilder",
    "UpdateOperation",
    "UpdateSet",
    "parse_fragment_id",
]
