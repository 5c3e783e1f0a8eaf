"""Shared test fixtures for ripple."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest

from ripple._errors import FragmentNotFoundError, TemplateNotFoundError
from ripple.encoding import encoders
from ripple.encoding.encoders import OutOfBandEncoder
from ripple.rendering.renderer import ResponseRenderer
from ripple.updates.fragment_id import parse_fragment_id
from ripple.updates.operation import UpdateOperation


class FakeResolver:
    """In-memory resolver: ``{"index": {"todos": "<li>..</li>"}}``.

    The whole-template key is ``None``.  Markup may contain ``{name}``
    placeholders filled from the bindings.  Every call is recorded.
    """

    def __init__(self, templates: Mapping[str, Mapping[str | None, str]]) -> None:
        self.templates = templates
        self.calls: list[str] = []

    def render(self, fragment_id: str, bindings: Mapping[str, Any]) -> str:
        self.calls.append(fragment_id)
        ref = parse_fragment_id(fragment_id)
        regions = self.templates.get(ref.template)
        if regions is None:
            msg = f"Template {ref.template!r} not found"
            raise TemplateNotFoundError(msg)
        if ref.region not in regions:
            msg = f"Fragment {ref.region!r} not found in template {ref.template!r}"
            raise FragmentNotFoundError(msg)
        return regions[ref.region].format(**bindings)


class RecordingSink:
    """Synchronous text sink that keeps every write separately."""

    def __init__(self) -> None:
        self.writes: list[str] = []

    def write(self, data: str) -> None:
        self.writes.append(data)

    def getvalue(self) -> str:
        return "".join(self.writes)


@pytest.fixture
def fake_resolver() -> FakeResolver:
    return FakeResolver({
        "index": {
            None: "<main>page</main>",
            "todos": "<ul id=\"todos\"></ul>",
            "new-todo": "<form>{title}</form>",
            "load": "<p>{time}</p>",
        },
        "fragments": {
            "todo": "<li>{title}</li>",
        },
    })


class BareEncoder(OutOfBandEncoder):
    """Wire format that emits the rendered markup with no wrapper."""

    __slots__ = ()
    name = "bare"

    def open(self, op: UpdateOperation) -> str:
        return ""

    def close(self, op: UpdateOperation) -> str:
        return ""


@pytest.fixture
def isolated_encoders(monkeypatch: pytest.MonkeyPatch) -> None:
    """Give the test its own copy of the encoder registry."""
    monkeypatch.setattr(encoders, "_ENCODERS", dict(encoders._ENCODERS))


@pytest.fixture
def envelope_renderer(fake_resolver: FakeResolver) -> ResponseRenderer:
    return ResponseRenderer(fake_resolver, "envelope")


@pytest.fixture
def oob_renderer(fake_resolver: FakeResolver) -> ResponseRenderer:
    return ResponseRenderer(fake_resolver, "oob")


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    """Create a template directory with whole-page and region templates."""
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "index.html").write_text(
        "<main>"
        "{% block todos %}<ul>{{ title }}</ul>{% endblock %}"
        "{% block load %}<p>{{ time }}</p>{% endblock %}"
        "</main>"
    )
    (templates / "fragments.html").write_text(
        "{% block todo %}<li>{{ title }}</li>{% endblock %}"
    )
    (templates / "plain.html").write_text("<p>Hello {{ name }}</p>")
    return templates
