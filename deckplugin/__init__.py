"""deckplugin - client runtime for Stream Deck style WebSocket plugins."""

__version__ = "0.1.0"
