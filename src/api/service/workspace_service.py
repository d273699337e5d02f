"""Service layer for the wizard session: connectors, mappings, presets and sharing."""

import logging

from api.model.enums import ResponseStatus
from api.model.responses import ConnectionColorResponse, ShareResponse, WorkspaceResponse
from api.repository.preset_repository import PresetRepository
from core.exception import PresetNotFoundError, ShareDecodeError
from core.mapping.workspace import MappingWorkspace
from core.model.enum.connector_enum import ConnectorKind, MappingSide, MoveDirection
from core.schema.connector_schema import Connector, build_connector
from core.schema.preset_schema import Preset
from core.util.preset_codec import DEFAULT_ACCEPTED_VERSIONS, build_share_url, decode, encode, to_record

logger = logging.getLogger(__name__)

SIDE_KIND = {MappingSide.ESC: ConnectorKind.ESC, MappingSide.FC: ConnectorKind.FC}


class WorkspaceService:
    """
    Workspace Service Layer

    Responsibilities:
    - Apply connector and mapping edits to the session
    - Move configurations between the session and the preset store
    - Produce and consume share strings
    """

    def __init__(
        self,
        workspace: MappingWorkspace,
        preset_repo: PresetRepository,
        share_base_url: str = "http://127.0.0.1:8000/",
        accepted_versions: frozenset[int] = DEFAULT_ACCEPTED_VERSIONS,
    ):
        self._workspace = workspace
        self._preset_repo = preset_repo
        self._share_base_url = share_base_url
        self._accepted_versions = accepted_versions

    def get_state(self, message: str | None = None) -> WorkspaceResponse:
        ws = self._workspace
        return WorkspaceResponse(
            status=ResponseStatus.SUCCESS,
            message=message,
            esc_connector=ws.esc_connector,
            fc_connector=ws.fc_connector,
            mappings=ws.mappings,
            unmapped_esc=ws.unmapped(MappingSide.ESC),
            unmapped_fc=ws.unmapped(MappingSide.FC),
            ready=ws.is_ready,
        )

    # ===== Connectors =====

    def create_connector(self, side: MappingSide, pin_count: int, name: str | None = None) -> WorkspaceResponse:
        connector = build_connector(SIDE_KIND[side], pin_count, name)
        self._workspace.replace_connector(side, connector)
        return self.get_state(f"{side.value.upper()} connector created")

    def replace_connector(self, side: MappingSide, connector: Connector) -> WorkspaceResponse:
        if connector.kind != SIDE_KIND[side]:
            raise ValueError(f"Connector type {connector.kind.value} does not match side '{side.value}'")
        self._workspace.replace_connector(side, connector)
        return self.get_state(f"{side.value.upper()} connector replaced")

    def rename_connector(self, side: MappingSide, name: str) -> WorkspaceResponse:
        self._workspace.rename_connector(side, name)
        return self.get_state()

    def update_pin(
        self,
        side: MappingSide,
        pin_id: int,
        label: str | None = None,
        color: str | None = None,
        function: str | None = None,
    ) -> WorkspaceResponse:
        self._workspace.update_pin(side, pin_id, label=label, color=color, function=function)
        return self.get_state()

    def move_pin(self, side: MappingSide, index: int, direction: MoveDirection) -> WorkspaceResponse:
        self._workspace.move_pin(side, index, direction)
        return self.get_state()

    def flip(self, side: MappingSide) -> WorkspaceResponse:
        self._workspace.flip(side)
        return self.get_state()

    # ===== Mappings =====

    def connect(self, esc_pin: int, fc_pin: int) -> WorkspaceResponse:
        self._workspace.connect(esc_pin, fc_pin)
        return self.get_state()

    def disconnect(self, esc_pin: int, fc_pin: int) -> WorkspaceResponse:
        self._workspace.disconnect(esc_pin, fc_pin)
        return self.get_state()

    def replace_mapping_at(self, index: int, esc_pin: int, fc_pin: int) -> WorkspaceResponse:
        self._workspace.replace_mapping_at(index, esc_pin, fc_pin)
        return self.get_state()

    def retarget(self, side: MappingSide, from_pin: int, to_pin: int) -> WorkspaceResponse:
        self._workspace.retarget(side, from_pin, to_pin)
        return self.get_state()

    def auto_map(self) -> WorkspaceResponse:
        mappings = self._workspace.auto_map()
        return self.get_state(f"Auto-mapped {len(mappings)} pin(s)")

    def connection_color(self, side: MappingSide, pin_id: int) -> ConnectionColorResponse:
        return ConnectionColorResponse(
            side=side.value,
            pin_id=pin_id,
            partner_pin=self._workspace.store.partner_of(side, pin_id),
            color=self._workspace.connection_color(side, pin_id),
        )

    def reset(self) -> WorkspaceResponse:
        self._workspace.reset()
        return self.get_state("Workspace reset")

    # ===== Presets =====

    def load_preset(self, preset_id: str) -> WorkspaceResponse:
        """
        Raises:
            PresetNotFoundError: No preset with that id
        """
        preset = self._preset_repo.get_preset(preset_id)
        if preset is None:
            raise PresetNotFoundError(f"Preset '{preset_id}' not found", preset_id=preset_id)

        self._workspace.load(preset.esc_connector, preset.fc_connector, preset.mappings)
        return self.get_state(f"Loaded preset '{preset.name}'")

    def save_as_preset(self, name: str | None = None, description: str | None = None) -> Preset:
        esc, fc = self._workspace.require_ready()
        preset = to_record(
            esc,
            fc,
            self._workspace.mappings,
            name=(name or "").strip() or f"{esc.name} -> {fc.name}",
            description=description or "",
        )
        return self._preset_repo.create_preset(preset.to_wire())

    # ===== Sharing =====

    def share(self) -> ShareResponse:
        esc, fc = self._workspace.require_ready()
        encoded = encode(esc, fc, self._workspace.mappings)
        return ShareResponse(
            status=ResponseStatus.SUCCESS,
            encoded=encoded,
            url=build_share_url(self._share_base_url, encoded),
        )

    def load_share(self, encoded: str) -> WorkspaceResponse:
        """
        Raises:
            ShareDecodeError: Nothing to load; the session is left as it was
        """
        payload = decode(encoded, self._accepted_versions)
        if payload is None:
            raise ShareDecodeError("Share string could not be decoded")

        self._workspace.load(payload.esc_connector, payload.fc_connector, payload.mappings)
        return self.get_state("Loaded shared configuration")
