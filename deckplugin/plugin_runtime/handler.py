"""Plugin handler capability.

Concrete plugins subclass ``PluginHandler`` and override only the events
they care about; every callback defaults to a no-op.  Callbacks run on the
connection's event loop, one at a time, in frame arrival order.  A callback
that awaits for a long time stalls all further frames, so heavy work
belongs in a task the plugin owns.

Commands are reachable from any callback through ``self.connection_manager``::

    class Counter(PluginHandler):
        async def key_down_for_action(self, action, context, payload, device_id):
            await self.connection_manager.set_title("1", context)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from deckplugin.plugin_runtime.commands import CommandEmitter


class PluginHandler:
    """Base class with a no-op default for every inbound event."""

    def __init__(self) -> None:
        self._connection_manager: CommandEmitter | None = None

    # -- Wiring ----------------------------------------------------------------

    def set_connection_manager(self, connection_manager: CommandEmitter) -> None:
        self._connection_manager = connection_manager

    @property
    def connection_manager(self) -> CommandEmitter:
        if self._connection_manager is None:
            msg = f"{type(self).__name__} is not attached to a connection"
            raise RuntimeError(msg)
        return self._connection_manager

    # -- Settings --------------------------------------------------------------

    async def did_receive_global_settings(self, payload: dict[str, Any]) -> None:
        pass

    async def did_receive_settings(
        self, action: str, context: str, payload: dict[str, Any], device_id: str
    ) -> None:
        pass

    # -- Keys ------------------------------------------------------------------

    async def key_down_for_action(
        self, action: str, context: str, payload: dict[str, Any], device_id: str
    ) -> None:
        pass

    async def key_up_for_action(self, action: str, context: str, payload: dict[str, Any], device_id: str) -> None:
        pass

    # -- Dials and touch strip -------------------------------------------------

    async def dial_press_for_action(
        self, action: str, context: str, payload: dict[str, Any], device_id: str
    ) -> None:
        pass

    async def dial_release_for_action(
        self, action: str, context: str, payload: dict[str, Any], device_id: str
    ) -> None:
        pass

    async def dial_rotate_for_action(
        self, action: str, context: str, payload: dict[str, Any], device_id: str
    ) -> None:
        pass

    async def touch_tap_for_action(
        self, action: str, context: str, payload: dict[str, Any], device_id: str
    ) -> None:
        pass

    # -- Visibility ------------------------------------------------------------

    async def will_appear_for_action(
        self, action: str, context: str, payload: dict[str, Any], device_id: str
    ) -> None:
        pass

    async def will_disappear_for_action(
        self, action: str, context: str, payload: dict[str, Any], device_id: str
    ) -> None:
        pass

    async def title_parameters_did_change(
        self, action: str, context: str, payload: dict[str, Any], device_id: str
    ) -> None:
        pass

    # -- Devices ---------------------------------------------------------------

    async def device_did_connect(self, device_id: str, device_info: dict[str, Any]) -> None:
        pass

    async def device_did_disconnect(self, device_id: str) -> None:
        pass

    # -- Property inspector ----------------------------------------------------

    async def send_to_plugin(self, action: str, context: str, payload: dict[str, Any], device_id: str) -> None:
        pass

    async def property_inspector_did_appear(self, action: str, context: str, device_id: str) -> None:
        pass

    async def property_inspector_did_disappear(self, action: str, context: str, device_id: str) -> None:
        pass

    # -- System ----------------------------------------------------------------

    async def system_did_wake_up(self) -> None:
        pass

    async def application_did_launch(self, payload: dict[str, Any]) -> None:
        """Called when an application listed in the plugin manifest starts."""

    async def application_did_terminate(self, payload: dict[str, Any]) -> None:
        pass

    async def did_receive_deep_link(self, payload: dict[str, Any]) -> None:
        pass
