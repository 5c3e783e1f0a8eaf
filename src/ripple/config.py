"""Ripple configuration.

RippleConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path

from ripple._errors import ConfigError
from ripple._types import WireFormat
from ripple.encoding.encoders import available_formats


@dataclass(frozen=True, slots=True)
class RippleConfig:
    """Configuration for update rendering and push delivery.

    Attributes:
        templates_dir: Directory containing Kida templates.
              Always resolved to an absolute path on construction.
        wire_format: Encoding used for rendered updates: ``envelope``, ``oob``,
            or any format added with ``register_encoder``.
        default_channel: Channel name used when callers do not name one.
        channel_timeout: Seconds before a push stream is expired by its
            transport.  ``None`` keeps streams open until the client leaves.
        max_pending: Upper bound on queued payloads per stream (0 = unbounded).
        publish_interval: Seconds between ticks of a periodic publisher.
        event_name: SSE event name carried by pushed update payloads.

    """

    templates_dir: Path = field(default_factory=lambda: Path("templates"))
    wire_format: WireFormat = "envelope"
    default_channel: str = "default"
    channel_timeout: float | None = None
    max_pending: int = 0
    publish_interval: float = 2.0
    event_name: str = "update"

    def __post_init__(self) -> None:
        if not isinstance(self.templates_dir, Path):
            object.__setattr__(self, "templates_dir", Path(str(self.templates_dir)))
        if not self.templates_dir.is_absolute():
            object.__setattr__(self, "templates_dir", self.templates_dir.resolve())

        formats = available_formats()
        if self.wire_format not in formats:
            msg = f"wire_format must be one of {formats}, got {self.wire_format!r}"
            raise ConfigError(msg)
        if not self.default_channel:
            msg = "default_channel must not be empty"
            raise ConfigError(msg)
        if self.channel_timeout is not None and self.channel_timeout <= 0:
            msg = f"channel_timeout must be positive, got {self.channel_timeout}"
            raise ConfigError(msg)
        if self.max_pending < 0:
            msg = f"max_pending must be >= 0, got {self.max_pending}"
            raise ConfigError(msg)
        if self.publish_interval <= 0:
            msg = f"publish_interval must be positive, got {self.publish_interval}"
            raise ConfigError(msg)
