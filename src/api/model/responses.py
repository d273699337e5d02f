"""
API Response Data Models

Defines output data structures for all API endpoints,
providing a unified response format.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from api.model.enums import ResponseStatus
from core.schema.connector_schema import Connector, Pin
from core.schema.preset_schema import PinMapping, Preset


class BaseResponse(BaseModel):
    """
    Base response model.

    The base class for all API responses,
    providing a unified response structure.
    """

    status: ResponseStatus = Field(..., description="Response status")
    timestamp: datetime = Field(default_factory=datetime.now, description="Response timestamp")
    message: str | None = Field(None, description="Additional message")


class WorkspaceResponse(BaseResponse):
    """
    Current wizard session.

    Attributes:
        esc_connector: ESC connector (None until configured).
        fc_connector: FC connector (None until configured).
        mappings: Mappings in insertion order.
        unmapped_esc: ESC pins without a mapping, display order.
        unmapped_fc: FC pins without a mapping, display order.
    """

    esc_connector: Connector | None = None
    fc_connector: Connector | None = None
    mappings: list[PinMapping] = Field(default_factory=list)
    unmapped_esc: list[Pin] = Field(default_factory=list)
    unmapped_fc: list[Pin] = Field(default_factory=list)
    ready: bool = False


class ConnectionColorResponse(BaseModel):
    side: str
    pin_id: int
    partner_pin: int | None = None
    color: str | None = None


class ShareResponse(BaseResponse):
    encoded: str
    url: str


class DecodeResponse(BaseResponse):
    esc_connector: Connector
    fc_connector: Connector
    mappings: list[PinMapping]
    version: int


class DeleteResponse(BaseModel):
    success: bool = True


class ImportResponse(BaseResponse):
    """
    Attributes:
        imported_count: Number of presets appended.
        total_count: Collection size after the import.
        regenerated_ids: Old id -> new id for entries whose id collided.
    """

    imported_count: int
    total_count: int
    regenerated_ids: dict[str, str] = Field(default_factory=dict)
    presets: list[Preset] = Field(default_factory=list)
