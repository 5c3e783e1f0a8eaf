"""Ripple wiring — one object holding the resolver, renderer, and registry.

``create()`` builds every collaborator from a RippleConfig; ``from_root()``
loads the config from a project directory first.  The result is shared by
all request handlers and background publishers of an application.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ripple.channels.publisher import PeriodicPublisher
from ripple.channels.registry import ChannelRegistry
from ripple.config import RippleConfig
from ripple.config_loader import load_config
from ripple.observability.collector import RippleCollector
from ripple.rendering.renderer import ResponseRenderer
from ripple.rendering.resolver import KidaFragmentResolver
from ripple.web.responses import UpdateResponder
from ripple.web.streams import UpdateStreams

if TYPE_CHECKING:
    from ripple.channels.publisher import UpdateFactory
    from ripple.rendering.resolver import FragmentResolver


@dataclass(frozen=True, slots=True)
class Ripple:
    """The configured collaborators of one application."""

    config: RippleConfig
    resolver: FragmentResolver
    renderer: ResponseRenderer
    registry: ChannelRegistry
    collector: RippleCollector
    responder: UpdateResponder
    streams: UpdateStreams

    def publisher(
        self,
        build: UpdateFactory,
        *,
        channel: str | None = None,
        interval: float | None = None,
    ) -> PeriodicPublisher:
        """Create a PeriodicPublisher using the configured defaults."""
        return PeriodicPublisher(
            self.registry,
            self.renderer,
            build,
            channel=channel or self.config.default_channel,
            interval=interval or self.config.publish_interval,
        )


def create(
    config: RippleConfig | None = None,
    *,
    resolver: FragmentResolver | None = None,
    collector: RippleCollector | None = None,
) -> Ripple:
    """Wire a Ripple from *config*.

    Without an explicit *resolver*, templates are loaded by Kida from
    ``config.templates_dir``.
    """
    config = config or RippleConfig()
    collector = collector or RippleCollector()
    if resolver is None:
        resolver = KidaFragmentResolver.from_directory(config.templates_dir)

    renderer = ResponseRenderer(resolver, config.wire_format, collector=collector)
    registry = ChannelRegistry(collector=collector, max_pending=config.max_pending)
    return Ripple(
        config=config,
        resolver=resolver,
        renderer=renderer,
        registry=registry,
        collector=collector,
        responder=UpdateResponder(renderer),
        streams=UpdateStreams(
            registry,
            renderer,
            event_name=config.event_name,
            max_pending=config.max_pending,
            default_timeout=config.channel_timeout,
            default_channel=config.default_channel,
        ),
    )


def from_root(root: str | Path = ".", **overrides: object) -> Ripple:
    """Load ``ripple.yaml``/``ripple.toml`` from *root* and wire a Ripple."""
    return create(load_config(Path(root), **overrides))
