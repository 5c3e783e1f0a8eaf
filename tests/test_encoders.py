"""Tests for ripple.encoding — envelope and out-of-band wire formats."""

from __future__ import annotations

import pytest

from ripple._errors import ConfigError
from ripple.encoding import (
    EnvelopeEncoder,
    OutOfBandEncoder,
    available_formats,
    get_encoder,
    register_encoder,
)
from ripple.updates import Action, UpdateOperation
from conftest import BareEncoder


def _op(action: Action, target: str = "todos", fragment: str = "index :: todos") -> UpdateOperation:
    if action is Action.REMOVE:
        return UpdateOperation.removal(target)
    return UpdateOperation(action, target, fragment)


class TestEnvelopeEncoder:
    """<update-op> envelopes."""

    encoder = EnvelopeEncoder()

    @pytest.mark.parametrize("action", [Action.APPEND, Action.PREPEND, Action.REPLACE, Action.UPDATE])
    def test_wraps_markup_in_template(self, action: Action) -> None:
        result = self.encoder.encode(_op(action), "<li>x</li>")
        assert result == (
            f'<update-op action="{action.verb}" target="todos">'
            "<template><li>x</li></template></update-op>"
        )

    def test_remove_has_no_template(self) -> None:
        result = self.encoder.encode(_op(Action.REMOVE, "todo-3"))
        assert result == '<update-op action="remove" target="todo-3"></update-op>'

    def test_remove_ignores_markup(self) -> None:
        result = self.encoder.encode(_op(Action.REMOVE, "todo-3"), "<li>ignored</li>")
        assert "ignored" not in result

    def test_target_attribute_escaped(self) -> None:
        result = self.encoder.encode(_op(Action.REPLACE, 'a"b<c'), "")
        assert 'target="a&quot;b&lt;c"' in result

    def test_open_close_pair(self) -> None:
        op = _op(Action.APPEND)
        assert self.encoder.open(op) == '<update-op action="append" target="todos"><template>'
        assert self.encoder.close(op) == "</template></update-op>"

    def test_content_type(self) -> None:
        assert self.encoder.content_type == "text/vnd.update-op.html"


class TestOutOfBandEncoder:
    """<div data-swap> wrappers."""

    encoder = OutOfBandEncoder()

    def test_append_is_beforeend(self) -> None:
        result = self.encoder.encode(_op(Action.APPEND), "<li>x</li>")
        assert result == '<div id="todos" data-swap="beforeend"><li>x</li></div>'

    @pytest.mark.parametrize("action", [Action.PREPEND, Action.REPLACE, Action.UPDATE])
    def test_other_actions_swap_true(self, action: Action) -> None:
        result = self.encoder.encode(_op(action), "<p/>")
        assert result == '<div id="todos" data-swap="true"><p/></div>'

    def test_remove_is_empty_wrapper(self) -> None:
        result = self.encoder.encode(_op(Action.REMOVE, "todo-3"))
        assert result == '<div id="todo-3" data-swap="true"></div>'

    def test_content_type_is_html(self) -> None:
        assert self.encoder.content_type.startswith("text/html")


class TestEncoderRegistry:
    """get_encoder / register_encoder."""

    def test_builtin_formats(self) -> None:
        assert {"envelope", "oob"} <= set(available_formats())
        assert isinstance(get_encoder("envelope"), EnvelopeEncoder)
        assert isinstance(get_encoder("oob"), OutOfBandEncoder)

    def test_unknown_format_lists_available(self) -> None:
        with pytest.raises(ConfigError, match="Available: .*envelope"):
            get_encoder("json")

    @pytest.mark.usefixtures("isolated_encoders")
    def test_register_custom_format(self) -> None:
        register_encoder(BareEncoder())
        assert "bare" in available_formats()
        assert get_encoder("bare").encode(_op(Action.APPEND), "<li/>") == "<li/>"

    def test_registration_does_not_outlive_test(self) -> None:
        assert "bare" not in available_formats()

    def test_register_requires_name(self) -> None:
        class Nameless(OutOfBandEncoder):
            __slots__ = ()
            name = ""

        with pytest.raises(ConfigError):
            register_encoder(Nameless())
