"""
Share Router

Stateless share-string encoding and decoding. Nothing here touches the
session or the preset store.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependency import get_system_config
from api.model.enums import ResponseStatus
from api.model.requests import ConfigurationRequest
from api.model.responses import DecodeResponse, ShareResponse
from core.schema.system_config_schema import SystemConfig
from core.util.preset_codec import build_share_url, decode, encode

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/encode",
    response_model=ShareResponse,
    summary="Encode configuration",
    description="Compress a configuration into a URL-safe share string",
)
async def encode_configuration(
    request: ConfigurationRequest,
    config: SystemConfig = Depends(get_system_config),
) -> ShareResponse:
    encoded = encode(request.esc_connector, request.fc_connector, request.mappings)
    return ShareResponse(
        status=ResponseStatus.SUCCESS,
        encoded=encoded,
        url=build_share_url(config.SHARE.BASE_URL, encoded),
    )


@router.get(
    "/decode",
    response_model=DecodeResponse,
    summary="Decode share string",
    description="Expand a share string back into a configuration",
)
async def decode_configuration(
    s: str = Query(..., min_length=1, description="Share string"),
    config: SystemConfig = Depends(get_system_config),
) -> DecodeResponse:
    """
    Raises:
        HTTPException: 400 when the share string holds nothing loadable
    """
    payload = decode(s, frozenset(config.SHARE.ACCEPTED_VERSIONS))
    if payload is None:
        raise HTTPException(status_code=400, detail="Invalid or unsupported share string")

    return DecodeResponse(
        status=ResponseStatus.SUCCESS,
        esc_connector=payload.esc_connector,
        fc_connector=payload.fc_connector,
        mappings=payload.mappings,
        version=payload.v,
    )
