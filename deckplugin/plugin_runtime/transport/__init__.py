"""Transports that carry frames between the plugin and the host."""

from deckplugin.plugin_runtime.transport.base import (
    Transport,
    TransportError,
    TransportOpenError,
    TransportSendError,
)
from deckplugin.plugin_runtime.transport.websocket import WebSocketTransport

__all__ = ["Transport", "TransportError", "TransportOpenError", "TransportSendError", "WebSocketTransport"]
