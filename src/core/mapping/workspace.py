"""
Mapping Workspace

The wizard's current configuration: one ESC connector, one FC connector and
the Mapping Store scoped to that pair. Every edit replaces the affected
connector (or the mapping list) as a whole.
"""

import logging

from core.exception import WorkspaceNotReadyError
from core.mapping import connector_editor
from core.mapping.auto_mapper import auto_map
from core.mapping.mapping_store import MappingStore
from core.model.enum.connector_enum import UNMAPPED_COLOR, MappingSide, MoveDirection
from core.schema.connector_schema import Connector, Pin
from core.schema.preset_schema import PinMapping

logger = logging.getLogger(__name__)


class MappingWorkspace:
    """In-memory session state for one mapping being edited"""

    def __init__(self):
        self.esc_connector: Connector | None = None
        self.fc_connector: Connector | None = None
        self.store = MappingStore()

    def __repr__(self) -> str:
        esc = self.esc_connector.name if self.esc_connector else None
        fc = self.fc_connector.name if self.fc_connector else None
        return f"MappingWorkspace(esc={esc!r}, fc={fc!r}, mappings={len(self.store)})"

    # ===== Accessors =====

    @property
    def mappings(self) -> list[PinMapping]:
        return self.store.mappings

    @property
    def is_ready(self) -> bool:
        return self.esc_connector is not None and self.fc_connector is not None

    def connector(self, side: MappingSide) -> Connector | None:
        return self.esc_connector if side == MappingSide.ESC else self.fc_connector

    def require_connector(self, side: MappingSide) -> Connector:
        connector = self.connector(side)
        if connector is None:
            raise WorkspaceNotReadyError(f"{side.value.upper()} connector is not configured")
        return connector

    def require_ready(self) -> tuple[Connector, Connector]:
        if not self.is_ready:
            raise WorkspaceNotReadyError("Both connectors must be configured before mapping")
        return self.esc_connector, self.fc_connector  # type: ignore[return-value]

    def unmapped(self, side: MappingSide) -> list[Pin]:
        connector = self.connector(side)
        if connector is None:
            return []
        return self.store.unmapped(connector, side)

    def connection_color(self, side: MappingSide, pin_id: int) -> str | None:
        """Colour of the partner pin for a mapped pin, None when unmapped."""
        partner_id = self.store.partner_of(side, pin_id)
        if partner_id is None:
            return None
        other = self.connector(MappingSide.FC if side == MappingSide.ESC else MappingSide.ESC)
        partner = other.get_pin(partner_id) if other else None
        return partner.color if partner else UNMAPPED_COLOR

    # ===== Connector edits =====

    def _set_connector(self, side: MappingSide, connector: Connector) -> Connector:
        if side == MappingSide.ESC:
            self.esc_connector = connector
        else:
            self.fc_connector = connector
        return connector

    def replace_connector(self, side: MappingSide, connector: Connector) -> Connector:
        """Wholesale replace; mappings whose pin id is gone are pruned."""
        other = self.connector(MappingSide.FC if side == MappingSide.ESC else MappingSide.ESC)
        new_connector = connector_editor.replace_wholesale(connector, side, self.store, counterpart=other)
        return self._set_connector(side, new_connector)

    def rename_connector(self, side: MappingSide, name: str) -> Connector:
        current = self.require_connector(side)
        return self._set_connector(side, connector_editor.rename_connector(current, name))

    def update_pin(
        self,
        side: MappingSide,
        pin_id: int,
        *,
        label: str | None = None,
        color: str | None = None,
        function: str | None = None,
    ) -> Connector:
        current = self.require_connector(side)
        updated = connector_editor.update_pin(current, pin_id, label=label, color=color, function=function)
        return self._set_connector(side, updated)

    def move_pin(self, side: MappingSide, from_index: int, direction: MoveDirection) -> Connector:
        current = self.require_connector(side)
        return self._set_connector(side, connector_editor.reorder_pin(current, from_index, direction))

    def flip(self, side: MappingSide) -> Connector:
        current = self.require_connector(side)
        return self._set_connector(side, connector_editor.flip(current))

    # ===== Mapping edits =====

    def connect(self, esc_pin: int, fc_pin: int) -> list[PinMapping]:
        esc, fc = self.require_ready()
        if esc.get_pin(esc_pin) is None or fc.get_pin(fc_pin) is None:
            logger.debug(f"[WORKSPACE] Ignoring connect {esc_pin}->{fc_pin}: unknown pin id")
            return self.mappings
        return self.store.add_or_replace(esc_pin, fc_pin)

    def disconnect(self, esc_pin: int, fc_pin: int) -> list[PinMapping]:
        return self.store.remove(esc_pin, fc_pin)

    def replace_mapping_at(self, index: int, esc_pin: int, fc_pin: int) -> list[PinMapping]:
        esc, fc = self.require_ready()
        if esc.get_pin(esc_pin) is None or fc.get_pin(fc_pin) is None:
            logger.debug(f"[WORKSPACE] Ignoring edit of mapping {index}: unknown pin id")
            return self.mappings
        return self.store.replace_at(index, esc_pin, fc_pin)

    def retarget(self, side: MappingSide, from_pin: int, to_pin: int) -> list[PinMapping]:
        target_connector = self.require_connector(side)
        if target_connector.get_pin(to_pin) is None:
            return self.mappings
        return self.store.retarget(side, from_pin, to_pin)

    def auto_map(self) -> list[PinMapping]:
        esc, fc = self.require_ready()
        return self.store.replace_all(auto_map(esc, fc))

    def clear_mappings(self) -> None:
        self.store.clear()

    # ===== Whole-session =====

    def load(self, esc_connector: Connector, fc_connector: Connector, mappings: list[PinMapping]) -> None:
        """Replace the whole session with deep copies; mappings are pruned to the new pins."""
        self.esc_connector = esc_connector.model_copy(deep=True)
        self.fc_connector = fc_connector.model_copy(deep=True)
        self.store = MappingStore(mappings)
        self.store.prune_invalid(self.esc_connector.pin_ids(), self.fc_connector.pin_ids())
        logger.info(f"[WORKSPACE] Loaded {self!r}")

    def reset(self) -> None:
        self.esc_connector = None
        self.fc_connector = None
        self.store = MappingStore()
        logger.info("[WORKSPACE] Reset")
