"""
Workspace Router

Endpoints for the mapping wizard session: connector setup, pin edits,
mappings, auto-map, presets and share links.
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from api.dependency import get_workspace_service
from api.model.requests import (
    CreateConnectorRequest,
    MappingRequest,
    MovePinRequest,
    RenameConnectorRequest,
    RetargetRequest,
    SaveWorkspaceRequest,
    ShareDecodeRequest,
    UpdatePinRequest,
)
from api.model.responses import ConnectionColorResponse, ShareResponse, WorkspaceResponse
from api.service.workspace_service import WorkspaceService
from core.model.enum.connector_enum import MappingSide
from core.schema.connector_schema import Connector
from core.schema.preset_schema import Preset

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=WorkspaceResponse, summary="Get the current session")
async def get_workspace(service: WorkspaceService = Depends(get_workspace_service)) -> WorkspaceResponse:
    return service.get_state()


@router.delete("", response_model=WorkspaceResponse, summary="Reset the session")
async def reset_workspace(service: WorkspaceService = Depends(get_workspace_service)) -> WorkspaceResponse:
    return service.reset()


# ===== Connectors =====


@router.post(
    "/connectors/{side}",
    response_model=WorkspaceResponse,
    summary="Create connector from template",
    description="Build a fresh connector; mappings whose pin id no longer exists are pruned",
)
async def create_connector(
    side: MappingSide,
    request: CreateConnectorRequest,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceResponse:
    return service.create_connector(side, request.pin_count, request.name)


@router.put(
    "/connectors/{side}",
    response_model=WorkspaceResponse,
    summary="Replace connector",
    description="Replace a connector wholesale; mappings whose pin id no longer exists are pruned",
)
async def replace_connector(
    side: MappingSide,
    connector: Connector,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceResponse:
    return service.replace_connector(side, connector)


@router.patch("/connectors/{side}", response_model=WorkspaceResponse, summary="Rename connector")
async def rename_connector(
    side: MappingSide,
    request: RenameConnectorRequest,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceResponse:
    return service.rename_connector(side, request.name)


@router.patch(
    "/connectors/{side}/pins/{pin_id}",
    response_model=WorkspaceResponse,
    summary="Edit pin",
    description="Update label, colour or function of a pin by id; unknown ids are ignored",
)
async def update_pin(
    side: MappingSide,
    pin_id: int,
    request: UpdatePinRequest,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceResponse:
    return service.update_pin(side, pin_id, label=request.label, color=request.color, function=request.function)


@router.post(
    "/connectors/{side}/move",
    response_model=WorkspaceResponse,
    summary="Move pin",
    description="Move the pin at an index one slot up or down; moves past either end are ignored",
)
async def move_pin(
    side: MappingSide,
    request: MovePinRequest,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceResponse:
    return service.move_pin(side, request.index, request.direction)


@router.post("/connectors/{side}/flip", response_model=WorkspaceResponse, summary="Reverse pin order")
async def flip_connector(
    side: MappingSide,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceResponse:
    return service.flip(side)


@router.get(
    "/connectors/{side}/pins/{pin_id}/color",
    response_model=ConnectionColorResponse,
    summary="Connection colour",
    description="Colour of the pin this pin is mapped to (null when unmapped)",
)
async def connection_color(
    side: MappingSide,
    pin_id: int,
    service: WorkspaceService = Depends(get_workspace_service),
) -> ConnectionColorResponse:
    return service.connection_color(side, pin_id)


# ===== Mappings =====


@router.post(
    "/mappings",
    response_model=WorkspaceResponse,
    summary="Connect pins",
    description="Map an ESC pin to an FC pin; either pin is taken from its previous partner",
)
async def connect(
    request: MappingRequest,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceResponse:
    return service.connect(request.esc_pin, request.fc_pin)


@router.delete("/mappings", response_model=WorkspaceResponse, summary="Disconnect pins")
async def disconnect(
    esc_pin: int = Query(..., gt=0),
    fc_pin: int = Query(..., gt=0),
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceResponse:
    return service.disconnect(esc_pin, fc_pin)


@router.put(
    "/mappings/{index}",
    response_model=WorkspaceResponse,
    summary="Edit mapping",
    description="Re-point the mapping at an index; other mappings using the new pins are removed",
)
async def replace_mapping(
    index: int,
    request: MappingRequest,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceResponse:
    return service.replace_mapping_at(index, request.esc_pin, request.fc_pin)


@router.post(
    "/mappings/retarget",
    response_model=WorkspaceResponse,
    summary="Move mapping to another pin",
    description="Move the mapping of a pin onto another pin on the same side",
)
async def retarget(
    request: RetargetRequest,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceResponse:
    return service.retarget(request.side, request.from_pin, request.to_pin)


@router.post(
    "/automap",
    response_model=WorkspaceResponse,
    summary="Auto-map",
    description="Replace all mappings with pins whose function is unique on both sides",
)
async def auto_map(service: WorkspaceService = Depends(get_workspace_service)) -> WorkspaceResponse:
    return service.auto_map()


# ===== Presets & sharing =====


@router.post("/load/{preset_id}", response_model=WorkspaceResponse, summary="Load preset into the session")
async def load_preset(
    preset_id: str,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceResponse:
    return service.load_preset(preset_id)


@router.post(
    "/save",
    response_model=Preset,
    status_code=status.HTTP_201_CREATED,
    summary="Save session as preset",
)
async def save_preset(
    request: SaveWorkspaceRequest,
    service: WorkspaceService = Depends(get_workspace_service),
) -> Preset:
    return service.save_as_preset(request.name, request.description)


@router.get("/share", response_model=ShareResponse, summary="Share link for the session")
async def share(service: WorkspaceService = Depends(get_workspace_service)) -> ShareResponse:
    return service.share()


@router.post("/share", response_model=WorkspaceResponse, summary="Load a shared configuration")
async def load_share(
    request: ShareDecodeRequest,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceResponse:
    return service.load_share(request.encoded)
