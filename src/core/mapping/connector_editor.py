"""
Connector Editor

Edits return a new Connector and never touch pin ids, so mappings (keyed by
id) stay valid across renames, reorders and flips. Only a wholesale replace
can orphan mappings, and it prunes them by id.
"""

import logging

from core.mapping.mapping_store import MappingStore
from core.model.enum.connector_enum import MappingSide, MoveDirection
from core.schema.connector_schema import Connector

logger = logging.getLogger(__name__)


def rename_connector(connector: Connector, name: str) -> Connector:
    new_name = (name or "").strip()
    if not new_name or new_name == connector.name:
        return connector.model_copy(deep=True)
    return connector.model_copy(update={"name": new_name}, deep=True)


def update_pin(
    connector: Connector,
    pin_id: int,
    *,
    label: str | None = None,
    color: str | None = None,
    function: str | None = None,
) -> Connector:
    """
    Update fields of one pin, addressed by id.

    Args:
        connector: Connector to edit
        pin_id: Pin id; unknown ids leave the connector unchanged
        label: New label (trimmed)
        color: New display colour
        function: New function

    Returns:
        Connector: Edited copy
    """
    updates: dict[str, str] = {}
    if label is not None:
        updates["label"] = label.strip()
    if color is not None:
        updates["color"] = str(color)
    if function is not None:
        updates["function"] = str(function)

    pins = [pin.model_copy(update=updates) if pin.id == pin_id else pin.model_copy() for pin in connector.pins]
    return connector.model_copy(update={"pins": pins}, deep=True)


def rename_pin(connector: Connector, pin_id: int, label: str) -> Connector:
    return update_pin(connector, pin_id, label=label)


def reorder_pin(connector: Connector, from_index: int, direction: MoveDirection) -> Connector:
    """Move the pin at ``from_index`` one slot up or down; out of range is a no-op."""
    pins = [pin.model_copy() for pin in connector.pins]
    to_index = from_index - 1 if direction == MoveDirection.UP else from_index + 1

    if from_index < 0 or from_index >= len(pins) or to_index < 0 or to_index >= len(pins):
        return connector.model_copy(deep=True)

    logger.debug(f"[EDITOR] Reordering pin {from_index} -> {to_index} on '{connector.name}'")
    moved = pins.pop(from_index)
    pins.insert(to_index, moved)
    return connector.model_copy(update={"pins": pins}, deep=True)


def flip(connector: Connector) -> Connector:
    pins = [pin.model_copy() for pin in reversed(connector.pins)]
    return connector.model_copy(update={"pins": pins}, deep=True)


def replace_wholesale(
    new_connector: Connector,
    side: MappingSide,
    store: MappingStore,
    counterpart: Connector | None = None,
) -> Connector:
    """
    Swap in a regenerated connector and prune mappings that lost their pin.

    Mappings whose pin id on ``side`` still exists in ``new_connector`` are kept.
    The other side is checked against ``counterpart`` when given, otherwise left
    as it is.

    Returns:
        Connector: Deep copy of ``new_connector`` owned by the caller
    """
    new_ids = new_connector.pin_ids()
    current = store.mappings

    if side == MappingSide.ESC:
        other_ids = counterpart.pin_ids() if counterpart else {m.fc_pin for m in current}
        store.prune_invalid(new_ids, other_ids)
    else:
        other_ids = counterpart.pin_ids() if counterpart else {m.esc_pin for m in current}
        store.prune_invalid(other_ids, new_ids)

    logger.info(
        f"[EDITOR] Replaced {side.value.upper()} connector with '{new_connector.name}' "
        f"({len(new_connector.pins)} pins), {len(store)} mapping(s) kept"
    )
    return new_connector.model_copy(deep=True)
