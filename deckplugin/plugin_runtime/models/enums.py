"""Wire-protocol name tables shared across the plugin runtime.

Every string here is fixed by the host application; renaming a member's
value breaks compatibility.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum

# -- Envelope fields ---------------------------------------------------------


class EnvelopeKey(StrEnum):
    """Top-level envelope keys."""

    EVENT = "event"
    CONTEXT = "context"
    ACTION = "action"
    DEVICE = "device"
    PAYLOAD = "payload"
    DEVICE_INFO = "deviceInfo"
    UUID = "uuid"


class PayloadKey(StrEnum):
    """Keys used inside outbound payload objects."""

    TARGET = "target"
    TITLE = "title"
    IMAGE = "image"
    STATE = "state"
    LAYOUT = "layout"
    PROFILE = "profile"
    MESSAGE = "message"
    URL = "url"


# -- Inbound events ----------------------------------------------------------


class EventName(StrEnum):
    """Events the host sends to the plugin."""

    KEY_DOWN = "keyDown"
    KEY_UP = "keyUp"
    WILL_APPEAR = "willAppear"
    WILL_DISAPPEAR = "willDisappear"
    DID_RECEIVE_SETTINGS = "didReceiveSettings"
    DID_RECEIVE_GLOBAL_SETTINGS = "didReceiveGlobalSettings"
    DEVICE_DID_CONNECT = "deviceDidConnect"
    DEVICE_DID_DISCONNECT = "deviceDidDisconnect"
    SEND_TO_PLUGIN = "sendToPlugin"
    SYSTEM_DID_WAKE_UP = "systemDidWakeUp"
    DIAL_PRESS = "dialPress"
    DIAL_RELEASE = "dialRelease"
    DIAL_ROTATE = "dialRotate"
    TOUCH_TAP = "touchTap"

    # Informational
    TITLE_PARAMETERS_DID_CHANGE = "titleParametersDidChange"
    APPLICATION_DID_LAUNCH = "applicationDidLaunch"
    APPLICATION_DID_TERMINATE = "applicationDidTerminate"
    PROPERTY_INSPECTOR_DID_APPEAR = "propertyInspectorDidAppear"
    PROPERTY_INSPECTOR_DID_DISAPPEAR = "propertyInspectorDidDisappear"
    DID_RECEIVE_DEEP_LINK = "didReceiveDeepLink"


# -- Outbound commands -------------------------------------------------------


class CommandName(StrEnum):
    """Commands the plugin sends to the host."""

    SET_TITLE = "setTitle"
    SET_IMAGE = "setImage"
    SHOW_ALERT = "showAlert"
    SHOW_OK = "showOk"
    SET_SETTINGS = "setSettings"
    GET_SETTINGS = "getSettings"
    SET_GLOBAL_SETTINGS = "setGlobalSettings"
    GET_GLOBAL_SETTINGS = "getGlobalSettings"
    SET_STATE = "setState"
    SET_FEEDBACK = "setFeedback"
    SET_FEEDBACK_LAYOUT = "setFeedbackLayout"
    SEND_TO_PROPERTY_INSPECTOR = "sendToPropertyInspector"
    SWITCH_TO_PROFILE = "switchToProfile"
    LOG_MESSAGE = "logMessage"
    OPEN_URL = "openUrl"


class Target(IntEnum):
    """Destination of a title or image update, serialized as an integer."""

    HARDWARE_AND_SOFTWARE = 0
    HARDWARE_ONLY = 1
    SOFTWARE_ONLY = 2


ALL_STATES = -1
"""State sentinel: any negative state applies an update to every state."""


# -- Lifecycle ---------------------------------------------------------------


class ConnectionState(StrEnum):
    """Connection lifecycle.  ``CLOSED`` and ``FAILED`` are terminal."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"
    FAILED = "failed"
