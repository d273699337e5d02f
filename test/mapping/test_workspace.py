"""
Mapping Workspace Tests

Session-level behaviour: connector replacement prunes by id, mapping edits
ignore unknown pins, loading snapshots copies data.
"""

import pytest

from core.exception import WorkspaceNotReadyError
from core.mapping.workspace import MappingWorkspace
from core.model.enum.connector_enum import UNMAPPED_COLOR, ConnectorKind, MappingSide, MoveDirection
from core.schema.connector_schema import build_connector
from core.schema.preset_schema import PinMapping


@pytest.fixture
def workspace(esc_connector, fc_connector):
    ws = MappingWorkspace()
    ws.replace_connector(MappingSide.ESC, esc_connector)
    ws.replace_connector(MappingSide.FC, fc_connector)
    return ws


def pairs(ws):
    return [m.as_pair() for m in ws.mappings]


class TestReadiness:

    def test_mapping_requires_both_connectors(self, esc_connector):
        ws = MappingWorkspace()
        ws.replace_connector(MappingSide.ESC, esc_connector)

        with pytest.raises(WorkspaceNotReadyError):
            ws.connect(1, 10)
        with pytest.raises(WorkspaceNotReadyError):
            ws.auto_map()

    def test_editing_missing_connector_raises(self):
        with pytest.raises(WorkspaceNotReadyError):
            MappingWorkspace().flip(MappingSide.FC)

    def test_unmapped_of_missing_connector_is_empty(self):
        assert MappingWorkspace().unmapped(MappingSide.ESC) == []


class TestMappingEdits:

    def test_connect_unknown_pin_is_ignored(self, workspace):
        workspace.connect(1, 99)
        workspace.connect(99, 10)

        assert pairs(workspace) == []

    def test_connect_and_steal(self, workspace):
        workspace.connect(1, 10)
        workspace.connect(2, 10)

        assert pairs(workspace) == [(2, 10)]

    def test_auto_map_replaces_manual_mappings(self, workspace):
        workspace.connect(1, 10)

        workspace.auto_map()

        assert pairs(workspace) == [(1, 11), (2, 12), (3, 10), (4, 13)]

    def test_replace_mapping_at_ignores_unknown_pin(self, workspace):
        workspace.connect(1, 10)

        workspace.replace_mapping_at(0, 1, 42)

        assert pairs(workspace) == [(1, 10)]

    def test_retarget_to_unknown_pin_is_ignored(self, workspace):
        workspace.connect(1, 10)

        workspace.retarget(MappingSide.FC, 10, 77)

        assert pairs(workspace) == [(1, 10)]

    def test_connection_color_is_partner_color(self, workspace):
        workspace.update_pin(MappingSide.FC, 11, color="#3b82f6")
        workspace.connect(1, 11)

        assert workspace.connection_color(MappingSide.ESC, 1) == "#3b82f6"
        assert workspace.connection_color(MappingSide.FC, 11) == "#ef4444"
        assert workspace.connection_color(MappingSide.ESC, 2) is None

    def test_connection_color_falls_back_when_partner_missing(self, workspace):
        workspace.store.add_or_replace(1, 500)

        assert workspace.connection_color(MappingSide.ESC, 1) == UNMAPPED_COLOR


class TestConnectorReplacement:

    def test_move_and_flip_keep_mappings(self, workspace):
        workspace.connect(3, 10)

        workspace.move_pin(MappingSide.ESC, 2, MoveDirection.UP)
        workspace.flip(MappingSide.ESC)
        workspace.flip(MappingSide.FC)

        assert pairs(workspace) == [(3, 10)]
        assert [p.id for p in workspace.esc_connector.pins] == [4, 2, 3, 1]

    def test_regenerated_connector_prunes_by_id(self, workspace):
        """
        GIVEN mappings on ESC pins 1 and 4 and a regenerated FC connector
        WHEN the ESC side is rebuilt with pins 1..4 and the FC side with pins 1..6
        THEN only mappings whose FC pin id still exists survive
        """
        workspace.connect(1, 10)
        workspace.connect(4, 13)

        workspace.replace_connector(MappingSide.ESC, build_connector(ConnectorKind.ESC, 4))
        assert pairs(workspace) == [(1, 10), (4, 13)]

        workspace.replace_connector(MappingSide.FC, build_connector(ConnectorKind.FC, 6))
        assert pairs(workspace) == []


class TestSessionLoad:

    def test_load_copies_and_prunes(self, esc_connector, fc_connector):
        ws = MappingWorkspace()

        ws.load(esc_connector, fc_connector, [PinMapping(esc_pin=1, fc_pin=10), PinMapping(esc_pin=9, fc_pin=11)])
        esc_connector.pins[0].label = "edited after load"

        assert pairs(ws) == [(1, 10)]
        assert ws.esc_connector.pins[0].label == "Pin 1"

    def test_reset_clears_everything(self, workspace):
        workspace.connect(1, 10)

        workspace.reset()

        assert workspace.esc_connector is None
        assert workspace.fc_connector is None
        assert workspace.mappings == []
