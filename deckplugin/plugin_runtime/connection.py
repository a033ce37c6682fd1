"""Connection lifecycle -- owns the transport and drives the run loop.

State machine::

    DISCONNECTED -> CONNECTING -> OPEN -> CLOSED | FAILED
                          \\-> FAILED

1. **Connect**: open ``ws://127.0.0.1:<port>``.  Any error here ends in
   FAILED and the loop is never entered.
2. **Register**: the registration frame is the first outbound frame, sent
   exactly once, before any inbound frame is read.  No acknowledgement is
   awaited.
3. **Pump**: inbound text frames are decoded and routed one at a time in
   arrival order.  A handler's commands complete before the next frame is
   read.  Malformed JSON and binary frames are dropped without a state
   change.
4. **Finish**: a normal close (remote or ``stop()``) ends in CLOSED, a
   transport error in FAILED.  There is no reconnect; restarting the
   process is the supervisor's job.

``run()`` never raises for connection problems.  The outcome is visible
through ``state`` once it returns.
"""

from __future__ import annotations

import asyncio
import contextlib
from functools import cached_property
from typing import TYPE_CHECKING

from loguru import logger

from deckplugin.plugin_runtime.codec import decode, encode_registration, parse_info
from deckplugin.plugin_runtime.commands import CommandEmitter
from deckplugin.plugin_runtime.models.enums import ConnectionState
from deckplugin.plugin_runtime.models.envelope import Malformed
from deckplugin.plugin_runtime.router import route
from deckplugin.plugin_runtime.transport.base import TransportError
from deckplugin.plugin_runtime.transport.websocket import WebSocketTransport

if TYPE_CHECKING:
    from concurrent.futures import Future

    from deckplugin.plugin_runtime.handler import PluginHandler
    from deckplugin.plugin_runtime.models.info import RegistrationInfo
    from deckplugin.plugin_runtime.transport.base import Transport

LOOPBACK_HOST = "127.0.0.1"

_TRANSITIONS: dict[ConnectionState, frozenset[ConnectionState]] = {
    ConnectionState.DISCONNECTED: frozenset({ConnectionState.CONNECTING}),
    ConnectionState.CONNECTING: frozenset({ConnectionState.OPEN, ConnectionState.FAILED}),
    ConnectionState.OPEN: frozenset({ConnectionState.CLOSED, ConnectionState.FAILED}),
    ConnectionState.CLOSED: frozenset(),
    ConnectionState.FAILED: frozenset(),
}


class ConnectionStateError(RuntimeError):
    """Raised when the lifecycle is driven out of order (e.g. ``run`` twice)."""


class ConnectionManager(CommandEmitter):
    """The plugin's single connection to the host.

    Created once at startup from the host's launch parameters.  The handler
    is attached here and receives every routed event; ``handler=None`` drops
    all events.
    """

    def __init__(
        self,
        port: int,
        plugin_uuid: str,
        register_event: str,
        info: str,
        handler: PluginHandler | None,
        *,
        transport: Transport | None = None,
    ) -> None:
        super().__init__(plugin_uuid)
        self.port = port
        self.register_event = register_event
        self.info = info
        self.handler = handler
        self._transport: Transport = transport if transport is not None else WebSocketTransport()
        self._state = ConnectionState.DISCONNECTED
        if handler is not None:
            handler.set_connection_manager(self)

    # -- Properties ------------------------------------------------------------

    @property
    def uri(self) -> str:
        return f"ws://{LOOPBACK_HOST}:{self.port}"

    @property
    def state(self) -> ConnectionState:
        return self._state

    @cached_property
    def registration_info(self) -> RegistrationInfo:
        """The ``-info`` launch argument, parsed.  Empty if it was malformed."""
        return parse_info(self.info)

    # -- Run -------------------------------------------------------------------

    def run(self) -> None:
        """Connect and process frames until the connection ends.  Blocking."""
        asyncio.run(self.run_async())

    async def run_async(self) -> None:
        """Coroutine form of ``run`` for callers that already own a loop."""
        if self._state is not ConnectionState.DISCONNECTED:
            msg = f"Connection already used (state={self._state})"
            raise ConnectionStateError(msg)

        self._loop = asyncio.get_running_loop()
        try:
            await self._connect_and_pump()
        finally:
            with contextlib.suppress(TransportError):
                await self._transport.close()
            self._loop = None

    async def _connect_and_pump(self) -> None:
        self._transition(ConnectionState.CONNECTING)
        try:
            await self._transport.open(self.uri)
        except TransportError as e:
            logger.error("Connect failed: {}", e)
            self._transition(ConnectionState.FAILED)
            return

        self._transition(ConnectionState.OPEN)
        try:
            await self._register()
            await self._pump()
        except TransportError as e:
            logger.error("Connection failed: {}", e)
            self._transition(ConnectionState.FAILED)
        else:
            logger.info("Connection closed (reason: {})", self._transport.close_reason or "none given")
            self._transition(ConnectionState.CLOSED)

    async def _register(self) -> None:
        # Bypasses send_frame: a registration that cannot be written is fatal.
        async with self._send_lock:
            await self._transport.send(encode_registration(self.register_event, self.plugin_uuid))
        logger.info("Registered plugin {} with event {!r}", self.plugin_uuid, self.register_event)

    async def _pump(self) -> None:
        async for frame in self._transport.frames():
            if not isinstance(frame, str):
                logger.debug("Ignoring binary frame ({} bytes)", len(frame))
                continue
            await self.process_frame(frame)

    async def process_frame(self, text: str) -> None:
        """Decode and route one inbound text frame.

        Never raises for bad input: malformed JSON is discarded and a handler
        exception is logged, so the loop always moves on to the next frame.
        """
        logger.debug("Received: {}", text)
        envelope = decode(text)
        if isinstance(envelope, Malformed):
            logger.debug("Discarding malformed frame: {}", envelope.reason)
            return
        try:
            await route(envelope, self.handler)
        except Exception:
            logger.exception("Handler failed on event {!r} (context={!r})", envelope.event, envelope.context)

    # -- Stop ------------------------------------------------------------------

    async def stop(self) -> None:
        """Close the connection locally; ``run`` then returns with state CLOSED."""
        if self._state is not ConnectionState.OPEN:
            return
        logger.info("Stopping connection")
        await self._transport.close()

    def stop_threadsafe(self) -> Future[None] | None:
        """Request ``stop`` from a thread other than the run loop's."""
        return self.send_threadsafe(self.stop())

    # -- Internals -------------------------------------------------------------

    async def _write(self, text: str) -> None:
        await self._transport.send(text)

    def _transition(self, new_state: ConnectionState) -> None:
        if new_state not in _TRANSITIONS[self._state]:
            msg = f"Illegal connection transition {self._state} -> {new_state}"
            raise ConnectionStateError(msg)
        logger.debug("Connection {} -> {}", self._state, new_state)
        self._state = new_state
