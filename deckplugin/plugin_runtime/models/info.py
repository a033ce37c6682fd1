"""Registration info passed by the host on the command line (``-info``)."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DeviceDescription(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str = ""
    name: str = ""
    type: int = 0
    size: dict[str, int] = Field(default_factory=dict)


class RegistrationInfo(BaseModel):
    """Parsed ``-info`` JSON.

    Only the commonly used sections are typed; anything else the host adds
    is kept as extra fields.
    """

    model_config = ConfigDict(extra="allow")

    application: dict[str, Any] = Field(default_factory=dict)
    plugin: dict[str, Any] = Field(default_factory=dict)
    devices: list[DeviceDescription] = Field(default_factory=list)
    colors: dict[str, Any] = Field(default_factory=dict)
    device_pixel_ratio: int = Field(default=1, alias="devicePixelRatio")

    @property
    def device_ids(self) -> list[str]:
        return [d.id for d in self.devices if d.id]
