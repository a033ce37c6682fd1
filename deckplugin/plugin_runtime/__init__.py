"""Plugin runtime: connection lifecycle, event routing, and outbound commands.

- **codec**: JSON text <-> envelopes
- **router**: envelope -> ``PluginHandler`` callback
- **commands**: typed outbound commands (``CommandEmitter``)
- **connection**: transport ownership, registration, and the run loop
- **transport**: the ``Transport`` protocol and its WebSocket implementation
"""

from deckplugin.plugin_runtime.commands import CommandEmitter
from deckplugin.plugin_runtime.connection import ConnectionManager, ConnectionStateError
from deckplugin.plugin_runtime.handler import PluginHandler
from deckplugin.plugin_runtime.models.enums import ALL_STATES, ConnectionState, Target

__all__ = [
    "ALL_STATES",
    "CommandEmitter",
    "ConnectionManager",
    "ConnectionState",
    "ConnectionStateError",
    "PluginHandler",
    "Target",
]
