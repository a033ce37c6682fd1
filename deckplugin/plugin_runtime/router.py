"""Event router -- dispatches a decoded envelope to the plugin handler.

Pure dispatch, no I/O of its own.  The route table maps each known event
name to a small adapter that picks the envelope fields meaningful for that
event.  Unknown event names are ignored so newer hosts can add events
without breaking older plugins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from loguru import logger

from deckplugin.plugin_runtime.codec import get_object
from deckplugin.plugin_runtime.models.enums import EnvelopeKey, EventName

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from deckplugin.plugin_runtime.handler import PluginHandler
    from deckplugin.plugin_runtime.models.envelope import Envelope

    Route = Callable[[PluginHandler, Envelope], Awaitable[None]]


# ---------------------------------------------------------------------------
# Field adapters
# ---------------------------------------------------------------------------


def _per_action(method: str) -> Route:
    """Events carrying (action, context, payload, device)."""

    def route(handler: PluginHandler, envelope: Envelope) -> Awaitable[None]:
        return getattr(handler, method)(envelope.action, envelope.context, envelope.payload, envelope.device)

    return route


def _property_inspector(method: str) -> Route:
    def route(handler: PluginHandler, envelope: Envelope) -> Awaitable[None]:
        return getattr(handler, method)(envelope.action, envelope.context, envelope.device)

    return route


def _payload_only(method: str) -> Route:
    def route(handler: PluginHandler, envelope: Envelope) -> Awaitable[None]:
        return getattr(handler, method)(envelope.payload)

    return route


def _device_info(envelope: Envelope) -> dict[str, Any]:
    """Device info nested in the payload, else the top-level ``deviceInfo``."""
    info = get_object(envelope.payload, EnvelopeKey.DEVICE_INFO)
    return info or envelope.device_info


def _device_did_connect(handler: PluginHandler, envelope: Envelope) -> Awaitable[None]:
    return handler.device_did_connect(envelope.device, _device_info(envelope))


def _device_did_disconnect(handler: PluginHandler, envelope: Envelope) -> Awaitable[None]:
    return handler.device_did_disconnect(envelope.device)


def _system_did_wake_up(handler: PluginHandler, envelope: Envelope) -> Awaitable[None]:
    return handler.system_did_wake_up()


# ---------------------------------------------------------------------------
# Route table
# ---------------------------------------------------------------------------

ROUTES: dict[str, Route] = {
    EventName.KEY_DOWN: _per_action("key_down_for_action"),
    EventName.KEY_UP: _per_action("key_up_for_action"),
    EventName.WILL_APPEAR: _per_action("will_appear_for_action"),
    EventName.WILL_DISAPPEAR: _per_action("will_disappear_for_action"),
    EventName.DID_RECEIVE_SETTINGS: _per_action("did_receive_settings"),
    EventName.DID_RECEIVE_GLOBAL_SETTINGS: _payload_only("did_receive_global_settings"),
    EventName.DEVICE_DID_CONNECT: _device_did_connect,
    EventName.DEVICE_DID_DISCONNECT: _device_did_disconnect,
    EventName.SEND_TO_PLUGIN: _per_action("send_to_plugin"),
    EventName.SYSTEM_DID_WAKE_UP: _system_did_wake_up,
    EventName.DIAL_PRESS: _per_action("dial_press_for_action"),
    EventName.DIAL_RELEASE: _per_action("dial_release_for_action"),
    EventName.DIAL_ROTATE: _per_action("dial_rotate_for_action"),
    EventName.TOUCH_TAP: _per_action("touch_tap_for_action"),
    EventName.TITLE_PARAMETERS_DID_CHANGE: _per_action("title_parameters_did_change"),
    EventName.APPLICATION_DID_LAUNCH: _payload_only("application_did_launch"),
    EventName.APPLICATION_DID_TERMINATE: _payload_only("application_did_terminate"),
    EventName.PROPERTY_INSPECTOR_DID_APPEAR: _property_inspector("property_inspector_did_appear"),
    EventName.PROPERTY_INSPECTOR_DID_DISAPPEAR: _property_inspector("property_inspector_did_disappear"),
    EventName.DID_RECEIVE_DEEP_LINK: _payload_only("did_receive_deep_link"),
}


async def route(envelope: Envelope, handler: PluginHandler | None) -> bool:
    """Invoke the handler callback for *envelope*.

    Returns ``True`` if a callback ran, ``False`` if the event is unknown or
    there is no handler.  Exceptions raised by the callback propagate to the
    caller.
    """
    target = ROUTES.get(envelope.event)
    if target is None:
        logger.debug("Ignoring unknown event {!r}", envelope.event)
        return False
    if handler is None:
        return False
    await target(handler, envelope)
    return True
