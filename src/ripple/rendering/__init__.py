"""Rendering — fragment resolution and synchronous response rendering."""

from ripple.rendering.renderer import ResponseRenderer, TextSink
from ripple.rendering.resolver import FragmentResolver, KidaFragmentResolver

__all__ = [
    "FragmentResolver",
    "KidaFragmentResolver",
    "ResponseRenderer",
    "TextSink",
]
