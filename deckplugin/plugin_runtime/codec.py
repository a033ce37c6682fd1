"""Envelope codec -- raw JSON text <-> protocol envelopes.

Stateless.  Decoding never raises: text that does not parse as a JSON
object yields a ``Malformed`` result, and every field of a well-formed
object is read with lookup-by-name-with-default semantics.
"""

from __future__ import annotations

import json
from typing import Any

from loguru import logger
from pydantic import ValidationError

from deckplugin.plugin_runtime.models.enums import EnvelopeKey
from deckplugin.plugin_runtime.models.envelope import Envelope, Malformed, OutboundEnvelope
from deckplugin.plugin_runtime.models.info import RegistrationInfo

# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------


def get_string(obj: Any, name: str, default: str = "") -> str:
    """Return ``obj[name]`` if it is a string, else *default*."""
    if isinstance(obj, dict):
        value = obj.get(name)
        if isinstance(value, str):
            return value
    return default


def get_object(obj: Any, name: str) -> dict[str, Any]:
    """Return ``obj[name]`` if it is a JSON object, else a new empty dict."""
    if isinstance(obj, dict):
        value = obj.get(name)
        if isinstance(value, dict):
            return value
    return {}


# ---------------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------------


def decode(text: str | bytes) -> Envelope | Malformed:
    """Parse one inbound frame."""
    try:
        raw = json.loads(text)
    except (ValueError, TypeError, RecursionError) as e:
        # json.JSONDecodeError and UnicodeDecodeError are both ValueError;
        # RecursionError comes from pathologically nested arrays/objects.
        return Malformed(reason=str(e), text=_preview(text))

    if not isinstance(raw, dict):
        return Malformed(reason=f"expected a JSON object, got {type(raw).__name__}", text=_preview(text))

    return Envelope(
        event=get_string(raw, EnvelopeKey.EVENT),
        context=get_string(raw, EnvelopeKey.CONTEXT),
        action=get_string(raw, EnvelopeKey.ACTION),
        device=get_string(raw, EnvelopeKey.DEVICE),
        payload=get_object(raw, EnvelopeKey.PAYLOAD),
        device_info=get_object(raw, EnvelopeKey.DEVICE_INFO),
    )


def _preview(text: str | bytes, limit: int = 200) -> str:
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    return text if len(text) <= limit else text[:limit] + "..."


# ---------------------------------------------------------------------------
# Encode
# ---------------------------------------------------------------------------


_OPTIONAL_FIELDS = (
    ("context", EnvelopeKey.CONTEXT),
    ("action", EnvelopeKey.ACTION),
    ("device", EnvelopeKey.DEVICE),
    ("payload", EnvelopeKey.PAYLOAD),
)


def encode(envelope: OutboundEnvelope) -> str:
    """Serialize an outbound envelope to compact JSON.

    Only fields passed to the constructor are written, so an explicit
    ``payload=None`` goes out as ``"payload":null``.  Key order follows the
    host's own messages: event, context, action, device, payload.
    """
    present = envelope.model_fields_set
    obj: dict[str, Any] = {EnvelopeKey.EVENT.value: envelope.event}
    for name, key in _OPTIONAL_FIELDS:
        if name in present:
            obj[key.value] = getattr(envelope, name)
    return _dumps(obj)


def encode_registration(register_event: str, plugin_uuid: str) -> str:
    """Build the registration frame: ``{"event": ..., "uuid": ...}``."""
    return _dumps({EnvelopeKey.EVENT.value: register_event, EnvelopeKey.UUID.value: plugin_uuid})


def _dumps(obj: dict[str, Any]) -> str:
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


# ---------------------------------------------------------------------------
# Registration info
# ---------------------------------------------------------------------------


def parse_info(text: str) -> RegistrationInfo:
    """Parse the ``-info`` launch argument.  Malformed input yields an empty model."""
    if not text:
        return RegistrationInfo()
    try:
        return RegistrationInfo.model_validate_json(text)
    except ValidationError as e:
        logger.warning("Ignoring malformed registration info ({} errors)", e.error_count())
        return RegistrationInfo()
