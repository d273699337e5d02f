"""
Preset Schema Definition

A preset is a frozen snapshot of two connectors plus the mappings between them.
"""

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from core.schema.connector_schema import Connector, WireModel

SHARE_FORMAT_VERSION = 1


class PinMapping(WireModel):
    model_config = ConfigDict(frozen=True)

    esc_pin: int = Field(..., description="ESC pin id")
    fc_pin: int = Field(..., description="FC pin id")

    def as_pair(self) -> tuple[int, int]:
        return self.esc_pin, self.fc_pin


class Preset(WireModel):
    id: str
    name: str
    description: str = ""
    esc_connector: Connector
    fc_connector: Connector
    mappings: list[PinMapping] = Field(default_factory=list)
    created_at: str
    updated_at: str

    @field_validator("created_at", "updated_at")
    @classmethod
    def validate_iso_timestamp(cls, v: str) -> str:
        datetime.fromisoformat(v.replace("Z", "+00:00"))
        return v


class SharePayload(WireModel):
    """Share-link payload; the short keys keep the encoded string small."""

    e: Connector = Field(..., description="ESC connector")
    f: Connector = Field(..., description="FC connector")
    m: list[PinMapping] = Field(..., description="Mappings")
    v: int = Field(default=SHARE_FORMAT_VERSION, description="Payload format version")

    @property
    def esc_connector(self) -> Connector:
        return self.e

    @property
    def fc_connector(self) -> Connector:
        return self.f

    @property
    def mappings(self) -> list[PinMapping]:
        return self.m
