"""
Pin Mapper FastAPI Application State

Centralized state management with type safety and runtime validation.
"""

from pydantic import BaseModel, ConfigDict, Field

from api.repository.preset_repository import PresetRepository
from core.mapping.workspace import MappingWorkspace
from core.schema.system_config_schema import SystemConfig


class PinmapAppState(BaseModel):
    """
    Pin mapper application state container.

    Holds the single in-memory wizard session and the preset store; both are
    created by lifecycle.py at startup and handed to services through
    api.dependency.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True, extra="forbid")

    system_config: SystemConfig = Field(default_factory=SystemConfig, description="Loaded system configuration")

    workspace: MappingWorkspace | None = Field(default=None, description="Current wizard session")

    preset_repository: PresetRepository | None = Field(default=None, description="Preset record store")

    def get_workspace(self) -> MappingWorkspace:
        """Get the session, raising if startup has not run."""
        if self.workspace is None:
            raise RuntimeError("MappingWorkspace not initialized")
        return self.workspace

    def get_preset_repository(self) -> PresetRepository:
        if self.preset_repository is None:
            raise RuntimeError("PresetRepository not initialized")
        return self.preset_repository

    def __repr__(self) -> str:
        """String representation for logging."""
        store = self.preset_repository.file_path if self.preset_repository else None
        return f"PinmapAppState(workspace={self.workspace!r}, presets_file={store})"
