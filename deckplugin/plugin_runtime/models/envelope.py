"""Envelope models: the wire unit exchanged with the host.

Inbound envelopes are read permissively, so every field carries a
type-appropriate default.  Outbound envelopes carry only the fields a
command sets: a field left out of the constructor is left off the wire,
while one passed explicitly as ``None`` is sent as ``null``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Envelope(BaseModel):
    """A decoded inbound message.  ``event`` is the sole dispatch key."""

    model_config = ConfigDict(frozen=True)

    event: str
    context: str = ""
    action: str = ""
    device: str = ""
    payload: dict[str, Any] = Field(default_factory=dict)
    device_info: dict[str, Any] = Field(default_factory=dict)
    """Top-level ``deviceInfo`` object (deviceDidConnect only)."""


class OutboundEnvelope(BaseModel):
    """A message built by the command emitter.  Unset fields are not encoded."""

    event: str
    context: str | None = None
    action: str | None = None
    device: str | None = None
    payload: Any = None


@dataclass(frozen=True)
class Malformed:
    """Decode result for a frame that is not a JSON object."""

    reason: str
    text: str = ""
