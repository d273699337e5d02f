"""
Workspace Service Layer Tests

Tests for WorkspaceService, focusing on:
- Connector setup and side/type checks
- Save/load round trips through the preset store
- Share links and rejected share strings
"""

from urllib.parse import parse_qs, urlsplit

import pytest

from api.repository.preset_repository import PresetRepository
from api.service.workspace_service import WorkspaceService
from core.exception import PresetNotFoundError, ShareDecodeError, WorkspaceNotReadyError
from core.mapping.workspace import MappingWorkspace
from core.model.enum.connector_enum import ConnectorKind, MappingSide
from core.schema.preset_schema import PinMapping


@pytest.fixture
def repository(tmp_path):
    return PresetRepository(tmp_path / "presets.json")


@pytest.fixture
def workspace():
    return MappingWorkspace()


@pytest.fixture
def service(workspace, repository):
    return WorkspaceService(workspace, repository, share_base_url="https://pins.example/app?tab=map")


@pytest.fixture
def ready_service(service, esc_connector, fc_connector):
    service.replace_connector(MappingSide.ESC, esc_connector)
    service.replace_connector(MappingSide.FC, fc_connector)
    return service


class TestConnectors:

    def test_create_connector_from_template(self, service):
        state = service.create_connector(MappingSide.ESC, 6, "Left ESC")

        assert state.esc_connector.name == "Left ESC"
        assert state.esc_connector.kind == ConnectorKind.ESC
        assert len(state.unmapped_esc) == 6
        assert state.ready is False

    def test_replace_connector_rejects_wrong_kind(self, service, fc_connector):
        with pytest.raises(ValueError):
            service.replace_connector(MappingSide.ESC, fc_connector)

    def test_state_reports_unmapped_pins(self, ready_service):
        state = ready_service.connect(1, 11)

        assert state.ready is True
        assert state.mappings == [PinMapping(esc_pin=1, fc_pin=11)]
        assert [p.id for p in state.unmapped_esc] == [2, 3, 4]
        assert [p.id for p in state.unmapped_fc] == [10, 12, 13]

    def test_connection_color_reports_partner(self, ready_service, fc_connector):
        ready_service.connect(1, 11)

        result = ready_service.connection_color(MappingSide.ESC, 1)

        assert result.partner_pin == 11
        assert result.color == fc_connector.get_pin(11).color

    def test_connection_color_of_unmapped_pin(self, ready_service):
        result = ready_service.connection_color(MappingSide.FC, 10)

        assert result.partner_pin is None
        assert result.color is None


class TestMappings:

    def test_auto_map_replaces_mappings(self, ready_service):
        ready_service.connect(1, 10)

        state = ready_service.auto_map()

        assert [m.as_pair() for m in state.mappings] == [(1, 11), (2, 12), (3, 10), (4, 13)]
        assert state.message == "Auto-mapped 4 pin(s)"

    def test_connect_before_ready_raises(self, service, esc_connector):
        service.replace_connector(MappingSide.ESC, esc_connector)

        with pytest.raises(WorkspaceNotReadyError):
            service.connect(1, 10)


class TestPresets:

    def test_save_uses_default_name(self, ready_service, repository):
        ready_service.connect(1, 11)

        preset = ready_service.save_as_preset()

        assert preset.name == "Tekko32 -> F722"
        assert preset.mappings == [PinMapping(esc_pin=1, fc_pin=11)]
        assert repository.get_preset(preset.id) is not None

    def test_save_before_ready_raises(self, service):
        with pytest.raises(WorkspaceNotReadyError):
            service.save_as_preset("Nothing")

    def test_load_preset_restores_session(self, ready_service, workspace):
        """
        GIVEN a saved preset
        WHEN the session is reset and the preset is loaded
        THEN connectors and mappings come back
        """
        # Arrange
        ready_service.connect(2, 12)
        preset = ready_service.save_as_preset("Saved")
        ready_service.reset()

        # Act
        state = ready_service.load_preset(preset.id)

        # Assert
        assert state.ready is True
        assert state.esc_connector.name == "Tekko32"
        assert [m.as_pair() for m in workspace.mappings] == [(2, 12)]

    def test_load_unknown_preset_raises(self, service):
        with pytest.raises(PresetNotFoundError):
            service.load_preset("preset-missing")


class TestSharing:

    def test_share_then_load_restores_configuration(self, ready_service, workspace):
        ready_service.connect(3, 10)
        shared = ready_service.share()
        ready_service.reset()

        state = ready_service.load_share(shared.encoded)

        assert state.fc_connector.name == "F722"
        assert [m.as_pair() for m in workspace.mappings] == [(3, 10)]

    def test_share_url_keeps_existing_query(self, ready_service):
        shared = ready_service.share()

        query = parse_qs(urlsplit(shared.url).query)
        assert query["tab"] == ["map"]
        assert query["s"] == [shared.encoded]

    def test_invalid_share_string_leaves_session_untouched(self, ready_service, workspace):
        ready_service.connect(1, 11)

        with pytest.raises(ShareDecodeError):
            ready_service.load_share("not!a*share")

        assert [m.as_pair() for m in workspace.mappings] == [(1, 11)]

    def test_share_before_ready_raises(self, service):
        with pytest.raises(WorkspaceNotReadyError):
            service.share()
