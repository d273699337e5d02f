"""
Health Check Router

Provides service health endpoints.
"""

import platform
from datetime import datetime

from fastapi import APIRouter, Depends

from api.dependency import get_workspace
from core.mapping.workspace import MappingWorkspace

router = APIRouter()

SERVICE_NAME = "ESC/FC Pin Mapper API"
SERVICE_VERSION = "1.0.0"


@router.get("/health", summary="Health Check", description="Check if the API service is running normally")
async def health_check(workspace: MappingWorkspace = Depends(get_workspace)):
    """
    Service health check.

    Returns:
        dict: Service status and a short summary of the session.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "python_version": platform.python_version(),
        "workspace_ready": workspace.is_ready,
        "mapping_count": len(workspace.store),
    }


@router.get("/ping", summary="Ping", description="Simple connectivity test")
async def ping():
    return {"message": "pong"}
