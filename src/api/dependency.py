"""FastAPI Dependency Injection

Centralized management of injectable services and repositories.
"""

import logging

from fastapi import Depends, Request

from api.repository.preset_repository import PresetRepository
from api.service.preset_service import PresetService
from api.service.workspace_service import WorkspaceService
from core.mapping.workspace import MappingWorkspace
from core.schema.system_config_schema import SystemConfig

logger = logging.getLogger(__name__)


def get_system_config(request: Request) -> SystemConfig:
    """Provide SystemConfig from app state."""
    return request.app.state.pinmap.system_config


def get_preset_repository(request: Request) -> PresetRepository:
    """Provide the PresetRepository from app state."""
    return request.app.state.pinmap.get_preset_repository()


def get_workspace(request: Request) -> MappingWorkspace:
    """Provide the single MappingWorkspace from app state."""
    return request.app.state.pinmap.get_workspace()


def get_preset_service(
    preset_repo: PresetRepository = Depends(get_preset_repository),
) -> PresetService:
    """Resolve PresetService with repository dependency."""
    return PresetService(preset_repo)


def get_workspace_service(
    workspace: MappingWorkspace = Depends(get_workspace),
    preset_repo: PresetRepository = Depends(get_preset_repository),
    system_config: SystemConfig = Depends(get_system_config),
) -> WorkspaceService:
    """Resolve WorkspaceService bound to the session and the preset store."""
    return WorkspaceService(
        workspace,
        preset_repo,
        share_base_url=system_config.SHARE.BASE_URL,
        accepted_versions=frozenset(system_config.SHARE.ACCEPTED_VERSIONS),
    )
