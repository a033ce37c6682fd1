"""Command emitter -- typed outbound commands.

One coroutine per command kind.  Each builds an ``OutboundEnvelope``,
encodes it, and hands the text to ``send_frame``.  Commands are
fire-and-forget: the host never acknowledges them, and a failed send is
logged and swallowed.  Connection health is the lifecycle's concern, not
the individual command's.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from loguru import logger

from deckplugin.plugin_runtime.codec import encode
from deckplugin.plugin_runtime.models.enums import ALL_STATES, CommandName, PayloadKey, Target
from deckplugin.plugin_runtime.models.envelope import OutboundEnvelope
from deckplugin.plugin_runtime.transport.base import TransportSendError

if TYPE_CHECKING:
    from collections.abc import Coroutine
    from concurrent.futures import Future


class CommandEmitter(ABC):
    """Outbound command surface exposed to plugin handlers.

    Subclasses provide the actual frame writer and the plugin UUID used as
    the context of plugin-scoped commands.
    """

    def __init__(self, plugin_uuid: str) -> None:
        self.plugin_uuid = plugin_uuid
        self._send_lock = asyncio.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None

    # -- Frame writer ----------------------------------------------------------

    @abstractmethod
    async def _write(self, text: str) -> None:
        """Write one text frame.  Raises ``TransportSendError`` on failure."""

    async def send_frame(self, text: str) -> bool:
        """Send one encoded frame, serialized with every other send.

        Returns ``False`` if the transport rejected the frame; the failure is
        logged and not raised.
        """
        async with self._send_lock:
            try:
                await self._write(text)
            except TransportSendError as e:
                logger.warning("Dropping outbound frame: {}", e)
                return False
        logger.debug("Sent: {}", text)
        return True

    async def send(self, envelope: OutboundEnvelope) -> bool:
        return await self.send_frame(encode(envelope))

    def send_threadsafe(self, coro: Coroutine[Any, Any, Any]) -> Future[Any] | None:
        """Schedule a command coroutine from a thread the plugin owns.

        ``coro`` is typically ``emitter.set_title(...)``.  Returns a
        ``concurrent.futures.Future``, or ``None`` (closing *coro*) when no
        run loop is active.
        """
        loop = self._loop
        if loop is None or loop.is_closed():
            logger.warning("No active run loop; dropping command scheduled from another thread")
            coro.close()
            return None
        return asyncio.run_coroutine_threadsafe(coro, loop)

    # -- Key appearance --------------------------------------------------------

    async def set_title(
        self,
        title: str,
        context: str,
        target: Target = Target.HARDWARE_AND_SOFTWARE,
        state: int = ALL_STATES,
    ) -> None:
        payload: dict[str, Any] = {PayloadKey.TARGET.value: int(target), PayloadKey.TITLE.value: title}
        if state >= 0:
            payload[PayloadKey.STATE.value] = state
        await self.send(OutboundEnvelope(event=CommandName.SET_TITLE, context=context, payload=payload))

    async def set_image(
        self,
        image: str,
        context: str,
        target: Target = Target.HARDWARE_AND_SOFTWARE,
        state: int = ALL_STATES,
    ) -> None:
        """Set a key image.

        *image* is sent verbatim: a relative path, an
        ``data:image/svg+xml,`` literal, or a ``data:image/png;base64,``
        string (see ``deckplugin.plugin_runtime.images``).
        """
        payload: dict[str, Any] = {PayloadKey.TARGET.value: int(target), PayloadKey.IMAGE.value: image}
        if state >= 0:
            payload[PayloadKey.STATE.value] = state
        await self.send(OutboundEnvelope(event=CommandName.SET_IMAGE, context=context, payload=payload))

    async def set_state(self, state: int, context: str) -> None:
        await self.send(
            OutboundEnvelope(event=CommandName.SET_STATE, context=context, payload={PayloadKey.STATE.value: state})
        )

    async def show_alert(self, context: str) -> None:
        await self.send(OutboundEnvelope(event=CommandName.SHOW_ALERT, context=context))

    async def show_ok(self, context: str) -> None:
        await self.send(OutboundEnvelope(event=CommandName.SHOW_OK, context=context))

    # -- Encoders and touch strip ----------------------------------------------

    async def set_feedback(self, payload: dict[str, Any], context: str) -> None:
        await self.send(OutboundEnvelope(event=CommandName.SET_FEEDBACK, context=context, payload=payload))

    async def set_feedback_layout(self, layout: str, context: str) -> None:
        """Switch the touch-strip layout to a built-in identifier or a layout file path."""
        await self.send(
            OutboundEnvelope(
                event=CommandName.SET_FEEDBACK_LAYOUT, context=context, payload={PayloadKey.LAYOUT.value: layout}
            )
        )

    # -- Settings --------------------------------------------------------------

    async def set_settings(self, settings: Any, context: str) -> None:
        await self.send(OutboundEnvelope(event=CommandName.SET_SETTINGS, context=context, payload=settings))

    async def get_settings(self, context: str) -> None:
        """Request the settings of *context*; answered by ``didReceiveSettings``."""
        await self.send(OutboundEnvelope(event=CommandName.GET_SETTINGS, context=context))

    async def set_global_settings(self, settings: Any) -> None:
        await self.send(
            OutboundEnvelope(event=CommandName.SET_GLOBAL_SETTINGS, context=self.plugin_uuid, payload=settings)
        )

    async def get_global_settings(self) -> None:
        """Request global settings; answered later by ``didReceiveGlobalSettings``."""
        await self.send(OutboundEnvelope(event=CommandName.GET_GLOBAL_SETTINGS, context=self.plugin_uuid))

    # -- Property inspector ----------------------------------------------------

    async def send_to_property_inspector(self, action: str, context: str, payload: Any) -> None:
        await self.send(
            OutboundEnvelope(
                event=CommandName.SEND_TO_PROPERTY_INSPECTOR, context=context, action=action, payload=payload
            )
        )

    # -- Application -----------------------------------------------------------

    async def switch_to_profile(self, device_id: str, profile_name: str = "") -> None:
        """Switch *device_id* to *profile_name*.

        An empty profile name leaves ``payload`` off the message entirely,
        which tells the host to return to the previously active profile.
        """
        if not device_id:
            return
        extra: dict[str, Any] = {"payload": {PayloadKey.PROFILE.value: profile_name}} if profile_name else {}
        await self.send(
            OutboundEnvelope(event=CommandName.SWITCH_TO_PROFILE, context=self.plugin_uuid, device=device_id, **extra)
        )

    async def log_message(self, message: str) -> None:
        """Write *message* to the host's log for this plugin."""
        if not message:
            return
        await self.send(OutboundEnvelope(event=CommandName.LOG_MESSAGE, payload={PayloadKey.MESSAGE.value: message}))

    async def open_url(self, url: str) -> None:
        if not url:
            return
        await self.send(OutboundEnvelope(event=CommandName.OPEN_URL, payload={PayloadKey.URL.value: url}))
