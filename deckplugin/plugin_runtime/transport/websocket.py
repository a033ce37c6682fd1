"""WebSocket transport built on the ``websockets`` asyncio client."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger
from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK, WebSocketException

from deckplugin.plugin_runtime.transport.base import TransportError, TransportOpenError, TransportSendError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


class WebSocketTransport:
    """``Transport`` implementation over a single WebSocket client connection.

    Compression is disabled and no reconnect is attempted; a dropped
    connection ends the plugin's protocol participation.
    """

    def __init__(self, *, max_message_size: int | None = None) -> None:
        self._max_message_size = max_message_size
        self._ws: ClientConnection | None = None

    async def open(self, uri: str) -> None:
        try:
            self._ws = await connect(uri, compression=None, max_size=self._max_message_size)
        except (OSError, TimeoutError, ValueError, WebSocketException) as e:
            msg = f"Could not connect to {uri}: {e}"
            raise TransportOpenError(msg) from e
        logger.debug("WebSocket connected to {}", uri)

    async def send(self, text: str) -> None:
        if self._ws is None:
            msg = "Transport is not open"
            raise TransportSendError(msg)
        try:
            await self._ws.send(text)
        except ConnectionClosed as e:
            msg = f"Connection closed while sending: {e}"
            raise TransportSendError(msg) from e
        except (OSError, WebSocketException) as e:
            msg = f"Send failed: {e}"
            raise TransportSendError(msg) from e

    async def frames(self) -> AsyncIterator[str | bytes]:
        if self._ws is None:
            return
        while True:
            try:
                message = await self._ws.recv()
            except ConnectionClosedOK:
                return
            except ConnectionClosed as e:
                msg = f"Connection lost: {e}"
                raise TransportError(msg) from e
            except (OSError, WebSocketException) as e:
                msg = f"Receive failed: {e}"
                raise TransportError(msg) from e
            yield message

    async def close(self) -> None:
        if self._ws is None:
            return
        await self._ws.close()

    @property
    def close_reason(self) -> str:
        if self._ws is None or self._ws.close_code is None:
            return ""
        reason = self._ws.close_reason or ""
        return f"{self._ws.close_code} {reason}".strip()
