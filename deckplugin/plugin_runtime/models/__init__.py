"""Data models for the plugin runtime."""

from deckplugin.plugin_runtime.models.enums import (
    ALL_STATES,
    CommandName,
    ConnectionState,
    EnvelopeKey,
    EventName,
    PayloadKey,
    Target,
)
from deckplugin.plugin_runtime.models.envelope import Envelope, Malformed, OutboundEnvelope
from deckplugin.plugin_runtime.models.info import DeviceDescription, RegistrationInfo

__all__ = [
    "ALL_STATES",
    "CommandName",
    "ConnectionState",
    "DeviceDescription",
    # Envelopes
    "Envelope",
    # Enums
    "EnvelopeKey",
    "EventName",
    "Malformed",
    "OutboundEnvelope",
    "PayloadKey",
    # Registration
    "RegistrationInfo",
    "Target",
]
