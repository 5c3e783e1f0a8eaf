"""Push channels — registry, transport sinks, and publishing drivers."""

from ripple.channels.channel import Channel, ChannelState
from ripple.channels.publisher import PeriodicPublisher
from ripple.channels.push import push_updates
from ripple.channels.registry import DEFAULT_CHANNEL, ChannelRegistry
from ripple.channels.sink import BaseSink, QueueSink, WriterSink

__all__ = [
    "DEFAULT_CHANNEL",
    "BaseSink",
    "Channel",
    "ChannelRegistry",
    "ChannelState",
    "PeriodicPublisher",
    "QueueSink",
    "WriterSink",
    "push_updates",
]
