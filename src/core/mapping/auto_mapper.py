"""
Auto-Mapper

Pairs ESC and FC pins that declare the same function, but only where the
function is unambiguous: exactly one pin carries it on each side.
"""

import logging

from core.model.enum.connector_enum import IGNORED_PIN_FUNCTIONS
from core.schema.connector_schema import Connector, Pin
from core.schema.preset_schema import PinMapping

logger = logging.getLogger(__name__)


def normalize_function(value: str | None) -> str:
    return (value or "").strip()


def group_by_function(pins: list[Pin]) -> dict[str, list[int]]:
    """
    Group pin ids by trimmed function, skipping empty and sentinel functions.

    Insertion order follows the first pin carrying each function.
    """
    groups: dict[str, list[int]] = {}
    for pin in pins:
        func = normalize_function(pin.function)
        if not func or func in IGNORED_PIN_FUNCTIONS:
            continue
        groups.setdefault(func, []).append(pin.id)
    return groups


def auto_map(esc_connector: Connector, fc_connector: Connector) -> list[PinMapping]:
    """
    Compute function-based mappings between two connectors.

    Args:
        esc_connector: ESC side
        fc_connector: FC side

    Returns:
        list[PinMapping]: One mapping per function that appears exactly once on
        each side, in ESC display order. Empty when either connector has no pins.
        The result is meant to replace the current mappings, not merge into them.
    """
    if not esc_connector.pins or not fc_connector.pins:
        return []

    esc_by_func = group_by_function(esc_connector.pins)
    fc_by_func = group_by_function(fc_connector.pins)

    result: list[PinMapping] = []
    skipped: list[str] = []
    for func, esc_ids in esc_by_func.items():
        fc_ids = fc_by_func.get(func)
        if not fc_ids:
            continue
        if len(esc_ids) != 1 or len(fc_ids) != 1:
            skipped.append(func)
            continue
        result.append(PinMapping(esc_pin=esc_ids[0], fc_pin=fc_ids[0]))

    if skipped:
        logger.debug(f"[AUTOMAP] Ambiguous functions skipped: {skipped}")
    logger.info(f"[AUTOMAP] {len(result)} mapping(s) between '{esc_connector.name}' and '{fc_connector.name}'")
    return result
