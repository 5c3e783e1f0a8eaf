"""Shared type definitions for ripple."""

from collections.abc import Mapping
from typing import Any

# Name of a push channel (e.g., "default", "user-42")
type ChannelName = str

# Fragment identifier, "template :: region" or a bare template name
type FragmentId = str

# Variable bindings passed to the fragment resolver
type Bindings = Mapping[str, Any]

# Name of a registered wire format ("envelope", "oob", or a custom encoder)
type WireFormat = str
