"""
Preset Router

CRUD over the preset collection plus export/import. Each verb works on the
single collection resource; the id travels in the body (PUT) or the query (DELETE).
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from fastapi.responses import Response

from api.dependency import get_preset_service
from api.model.requests import PresetWriteRequest
from api.model.responses import DeleteResponse, ImportResponse
from api.service.preset_service import PresetService
from core.exception import PresetImportError, PresetNotFoundError, PresetStoreError
from core.schema.preset_schema import Preset

router = APIRouter()
logger = logging.getLogger(__name__)

EXPORT_FILENAME = "esc-fc-presets.json"


@router.get(
    "",
    response_model=list[Preset],
    summary="List presets",
    description="Return the whole preset collection (empty when nothing has been saved yet)",
)
async def list_presets(service: PresetService = Depends(get_preset_service)) -> list[Preset]:
    return service.list_presets()


@router.post(
    "",
    response_model=Preset,
    status_code=status.HTTP_201_CREATED,
    summary="Create preset",
    description="Append a preset; id and createdAt are generated when absent",
)
async def create_preset(
    request: PresetWriteRequest,
    service: PresetService = Depends(get_preset_service),
) -> Preset:
    try:
        return service.create_preset(request)
    except PresetStoreError as e:
        raise HTTPException(status_code=500, detail="Failed to save preset") from e


@router.put(
    "",
    response_model=Preset,
    summary="Update preset",
    description="Replace the preset with the same id",
)
async def update_preset(
    request: PresetWriteRequest,
    service: PresetService = Depends(get_preset_service),
) -> Preset:
    """
    Raises:
        HTTPException: 400 without id, 404 when the id is unknown, 500 when saving fails.
    """
    if not request.id:
        raise HTTPException(status_code=400, detail="Preset ID is required")
    try:
        return service.update_preset(request)
    except PresetNotFoundError as e:
        raise HTTPException(status_code=404, detail="Preset not found") from e
    except PresetStoreError as e:
        raise HTTPException(status_code=500, detail="Failed to update preset") from e


@router.delete(
    "",
    response_model=DeleteResponse,
    summary="Delete preset",
    description="Delete the preset with the given id",
)
async def delete_preset(
    id: str | None = Query(None, description="Preset id"),
    service: PresetService = Depends(get_preset_service),
) -> DeleteResponse:
    if not id:
        raise HTTPException(status_code=400, detail="Preset ID is required")
    try:
        service.delete_preset(id)
        return DeleteResponse(success=True)
    except PresetNotFoundError as e:
        raise HTTPException(status_code=404, detail="Preset not found") from e
    except PresetStoreError as e:
        raise HTTPException(status_code=500, detail="Failed to delete preset") from e


@router.get(
    "/export",
    summary="Export presets",
    description="Download the whole collection as a pretty-printed JSON document",
)
async def export_presets(service: PresetService = Depends(get_preset_service)) -> Response:
    return Response(
        content=service.export_document(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@router.post(
    "/import",
    response_model=ImportResponse,
    summary="Import presets",
    description="Append every preset of a JSON array document to the collection",
)
async def import_presets(
    document: Any = Body(..., description="JSON array of presets, as produced by export"),
    service: PresetService = Depends(get_preset_service),
) -> ImportResponse:
    try:
        return service.import_document(document)
    except PresetImportError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except PresetStoreError as e:
        raise HTTPException(status_code=500, detail="Failed to import presets") from e
