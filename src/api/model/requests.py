"""
API Request Data Models

Defines input data structures for all API endpoints,
following Pydantic validation rules.
"""

from pydantic import BaseModel, Field, field_validator

from core.model.enum.connector_enum import MappingSide, MoveDirection
from core.schema.connector_schema import TEMPLATE_PIN_COUNTS, Connector, WireModel
from core.schema.preset_schema import PinMapping


class CreateConnectorRequest(BaseModel):
    """
    Request model for building a connector from the editor template.

    Attributes:
        name: Connector name (optional, defaults to "<KIND> <N>-Pin").
        pin_count: Number of pins.
    """

    name: str | None = Field(None, max_length=100, examples=["Tekko32 F4"])
    pin_count: int = Field(8, examples=[8])

    @field_validator("pin_count")
    def validate_pin_count(cls, v: int) -> int:
        """Only template sizes are offered."""
        if v not in TEMPLATE_PIN_COUNTS:
            raise ValueError(f"pin_count must be one of {list(TEMPLATE_PIN_COUNTS)}")
        return v


class RenameConnectorRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class UpdatePinRequest(BaseModel):
    """Fields left out are not changed."""

    label: str | None = Field(None, max_length=100)
    color: str | None = Field(None, pattern=r"^#[0-9a-fA-F]{6}$")
    function: str | None = Field(None, max_length=100)


class MovePinRequest(BaseModel):
    index: int = Field(..., description="Current display index of the pin")
    direction: MoveDirection


class MappingRequest(BaseModel):
    esc_pin: int = Field(..., gt=0)
    fc_pin: int = Field(..., gt=0)


class RetargetRequest(BaseModel):
    """Move the mapping of ``from_pin`` onto ``to_pin`` on the same side."""

    side: MappingSide
    from_pin: int = Field(..., gt=0)
    to_pin: int = Field(..., gt=0)


class SaveWorkspaceRequest(BaseModel):
    name: str | None = Field(None, max_length=200, description="Defaults to '<ESC name> -> <FC name>'")
    description: str | None = Field(None, max_length=1000)


class ShareDecodeRequest(BaseModel):
    encoded: str = Field(..., min_length=1, description="Share string (value of the 's' query parameter)")


class ConfigurationRequest(WireModel):
    """A complete configuration, camelCase or snake_case keys accepted."""

    esc_connector: Connector
    fc_connector: Connector
    mappings: list[PinMapping] = Field(default_factory=list)


class PresetWriteRequest(WireModel):
    """
    Preset body for create (POST) and replace (PUT).

    ``id`` and ``createdAt`` are filled in by the store when absent.
    """

    id: str | None = None
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    esc_connector: Connector
    fc_connector: Connector
    mappings: list[PinMapping] = Field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
