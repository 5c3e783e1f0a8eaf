"""Fragment resolution — turn a fragment identifier into rendered markup.

The renderer only depends on the ``FragmentResolver`` protocol.  The
bundled ``KidaFragmentResolver`` renders whole templates or single
``{% block %}`` regions through a Kida ``Environment``.

Fragment identifiers map onto Kida like this::

    "index"              -> env.get_template("index.html").render(**bindings)
    "index :: todos"     -> env.get_template("index.html").render_block("todos", **bindings)
    "list.html :: item"  -> env.get_template("list.html").render_block("item", **bindings)

Regions inherited through ``{% extends %}`` resolve too: ``render_block``
walks the whole inheritance chain.

"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from kida import DictLoader, Environment, ErrorCode, FileSystemLoader, TemplateRuntimeError
from kida import TemplateNotFoundError as KidaTemplateNotFoundError

from ripple._errors import FragmentNotFoundError, TemplateNotFoundError
from ripple.updates.fragment_id import parse_fragment_id

if TYPE_CHECKING:
    from kida.template import Template

    from ripple._types import Bindings, FragmentId


class FragmentResolver(Protocol):
    """Renders a fragment identifier with the given variable bindings.

    Implementations raise ``TemplateNotFoundError`` when the template does
    not exist and ``FragmentNotFoundError`` when the region does not.
    """

    def render(self, fragment_id: FragmentId, bindings: Bindings) -> str: ...


class KidaFragmentResolver:
    """FragmentResolver backed by a Kida template environment.

    Args:
        env: The Kida environment used to load templates.
        suffix: Appended to template names that carry no extension, so
            ``"index :: todos"`` resolves ``index.html``.

    Thread Safety:
        Kida environments are safe for concurrent rendering; the resolver
        keeps no mutable state of its own.

    """

    __slots__ = ("_env", "_suffix")

    def __init__(self, env: Environment, *, suffix: str = ".html") -> None:
        self._env = env
        self._suffix = suffix

    @classmethod
    def from_directory(cls, path: str | Path, **options: Any) -> KidaFragmentResolver:
        """Build a resolver that loads templates from *path*."""
        env = Environment(loader=FileSystemLoader(Path(path)), autoescape=True)
        return cls(env, **options)

    @classmethod
    def from_mapping(cls, templates: dict[str, str], **options: Any) -> KidaFragmentResolver:
        """Build a resolver over in-memory template sources."""
        env = Environment(loader=DictLoader(templates), autoescape=True)
        return cls(env, **options)

    @property
    def env(self) -> Environment:
        return self._env

    def render(self, fragment_id: FragmentId, bindings: Bindings) -> str:
        ref = parse_fragment_id(fragment_id)
        template = self._load(ref.template)
        context = dict(bindings)

        if ref.region is None:
            return template.render(**context)

        try:
            return template.render_block(ref.region, **context)
        except TemplateRuntimeError as exc:
            if not _is_missing_block(exc):
                raise
            msg = f"Fragment {ref.region!r} not found in template {ref.template!r}"
            raise FragmentNotFoundError(msg) from exc

    def _load(self, name: str) -> Template:
        if not name:
            msg = "Fragment identifier has an empty template name"
            raise TemplateNotFoundError(msg)
        try:
            return self._env.get_template(self._template_name(name))
        except KidaTemplateNotFoundError as exc:
            msg = f"Template {name!r} not found"
            raise TemplateNotFoundError(msg) from exc

    def _template_name(self, name: str) -> str:
        if self._suffix and not Path(name).suffix:
            return name + self._suffix
        return name


def _is_missing_block(exc: TemplateRuntimeError) -> bool:
    # Kida looks the block up in the inherited block map before rendering;
    # errors raised while a block renders carry the original as __cause__.
    return exc.code is ErrorCode.RUNTIME_ERROR and exc.__cause__ is None
