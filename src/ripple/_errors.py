"""Ripple error hierarchy.

All ripple-specific errors inherit from RippleError for easy catching.
Transport failures additionally inherit from ``OSError`` so callers that
only know about I/O errors still catch them.
"""


class RippleError(Exception):
    """Base error for all ripple operations."""


class InvalidArgumentError(RippleError, ValueError):
    """An update operation was built with an invalid argument."""


class ConfigError(RippleError):
    """Invalid or missing configuration."""


class RenderError(RippleError):
    """A fragment could not be rendered."""


class TemplateNotFoundError(RenderError):
    """The template named by a fragment identifier does not exist."""


class FragmentNotFoundError(RenderError):
    """The template exists but does not define the requested region."""


class ChannelError(RippleError):
    """Error on a push channel or its transport."""


class SinkClosedError(ChannelError, OSError):
    """Write attempted on a sink that already completed, failed, or expired."""


class SinkOverflowError(ChannelError, OSError):
    """A bounded sink could not accept another payload."""


class DeliveryError(ChannelError, OSError):
    """A broadcast failed; the channel has been closed and deregistered."""
