"""Tests for ripple._errors."""

from ripple._errors import (
    ChannelError,
    ConfigError,
    DeliveryError,
    FragmentNotFoundError,
    InvalidArgumentError,
    RenderError,
    RippleError,
    SinkClosedError,
    SinkOverflowError,
    TemplateNotFoundError,
)


class TestErrorHierarchy:
    """All ripple errors inherit from RippleError."""

    def test_ripple_error_is_exception(self) -> None:
        assert issubclass(RippleError, Exception)

    def test_invalid_argument_is_value_error(self) -> None:
        assert issubclass(InvalidArgumentError, RippleError)
        assert issubclass(InvalidArgumentError, ValueError)

    def test_config_error_inherits(self) -> None:
        assert issubclass(ConfigError, RippleError)

    def test_render_errors_inherit(self) -> None:
        assert issubclass(TemplateNotFoundError, RenderError)
        assert issubclass(FragmentNotFoundError, RenderError)
        assert issubclass(RenderError, RippleError)

    def test_transport_errors_are_os_errors(self) -> None:
        for error_cls in (SinkClosedError, SinkOverflowError, DeliveryError):
            assert issubclass(error_cls, ChannelError)
            assert issubclass(error_cls, OSError)

    def test_catch_all_ripple_errors(self) -> None:
        """All specific errors are catchable via RippleError."""
        for error_cls in (
            InvalidArgumentError,
            ConfigError,
            TemplateNotFoundError,
            FragmentNotFoundError,
            SinkClosedError,
            DeliveryError,
        ):
            try:
                raise error_cls("test")
            except RippleError:
                pass  # Expected — all caught by base class
