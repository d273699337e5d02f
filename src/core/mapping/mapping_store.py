"""
Mapping Store

Holds the ESC-to-FC pin associations for one connector pair. The list is a
matching: no ESC pin id and no FC pin id appears in more than one mapping.
Every mutation computes a new list and swaps it in; the module-level functions
are the pure transformations behind those mutations.
"""

import logging
from collections.abc import Iterable, Iterator

from core.model.enum.connector_enum import MappingSide
from core.schema.connector_schema import Connector, Pin
from core.schema.preset_schema import PinMapping

logger = logging.getLogger(__name__)


def reconcile(mappings: list[PinMapping], esc_pin: int, fc_pin: int) -> list[PinMapping]:
    """
    Connect esc_pin to fc_pin, stealing either pin from its previous partner.

    Args:
        mappings: Current mappings
        esc_pin: ESC pin id
        fc_pin: FC pin id

    Returns:
        list[PinMapping]: Mappings using neither pin, followed by the new pair.
        The input is returned as-is when the exact pair is already present.
    """
    if any(m.esc_pin == esc_pin and m.fc_pin == fc_pin for m in mappings):
        return list(mappings)

    kept = [m for m in mappings if m.esc_pin != esc_pin and m.fc_pin != fc_pin]
    return [*kept, PinMapping(esc_pin=esc_pin, fc_pin=fc_pin)]


def remove_pair(mappings: list[PinMapping], esc_pin: int, fc_pin: int) -> list[PinMapping]:
    return [m for m in mappings if not (m.esc_pin == esc_pin and m.fc_pin == fc_pin)]


def replace_at(mappings: list[PinMapping], index: int, esc_pin: int, fc_pin: int) -> list[PinMapping]:
    """
    Re-point the mapping at ``index`` to new endpoints.

    Other mappings that use either new endpoint are evicted. The edited mapping
    keeps its relative position. Out-of-range index is a no-op.
    """
    if index < 0 or index >= len(mappings):
        return list(mappings)

    updated: list[PinMapping] = []
    for i, current in enumerate(mappings):
        if i == index:
            updated.append(PinMapping(esc_pin=esc_pin, fc_pin=fc_pin))
        elif current.esc_pin != esc_pin and current.fc_pin != fc_pin:
            updated.append(current)
    return updated


def prune_invalid(
    mappings: list[PinMapping], valid_esc_ids: Iterable[int], valid_fc_ids: Iterable[int]
) -> list[PinMapping]:
    valid_esc = set(valid_esc_ids)
    valid_fc = set(valid_fc_ids)
    return [m for m in mappings if m.esc_pin in valid_esc and m.fc_pin in valid_fc]


def unmapped_pins(connector: Connector, mappings: list[PinMapping], side: MappingSide) -> list[Pin]:
    """Pins of ``connector`` (display order) that no mapping references on ``side``."""
    used = {m.esc_pin if side == MappingSide.ESC else m.fc_pin for m in mappings}
    return [pin for pin in connector.by_index() if pin.id not in used]


class MappingStore:
    """
    Ordered, conflict-free list of pin mappings for one (ESC, FC) connector pair.

    Pin ids are not checked against real connectors here; callers validate ids
    and call ``prune_invalid`` when a connector is replaced.
    """

    def __init__(self, mappings: Iterable[PinMapping] | None = None):
        self._mappings: list[PinMapping] = []
        for mapping in mappings or []:
            self._mappings = reconcile(self._mappings, mapping.esc_pin, mapping.fc_pin)

    @property
    def mappings(self) -> list[PinMapping]:
        return list(self._mappings)

    def __len__(self) -> int:
        return len(self._mappings)

    def __iter__(self) -> Iterator[PinMapping]:
        return iter(list(self._mappings))

    def __repr__(self) -> str:
        pairs = ", ".join(f"{m.esc_pin}->{m.fc_pin}" for m in self._mappings)
        return f"MappingStore([{pairs}])"

    def add_or_replace(self, esc_pin: int, fc_pin: int) -> list[PinMapping]:
        self._mappings = reconcile(self._mappings, esc_pin, fc_pin)
        return self.mappings

    def remove(self, esc_pin: int, fc_pin: int) -> list[PinMapping]:
        self._mappings = remove_pair(self._mappings, esc_pin, fc_pin)
        return self.mappings

    def replace_at(self, index: int, esc_pin: int, fc_pin: int) -> list[PinMapping]:
        self._mappings = replace_at(self._mappings, index, esc_pin, fc_pin)
        return self.mappings

    def prune_invalid(self, valid_esc_ids: Iterable[int], valid_fc_ids: Iterable[int]) -> list[PinMapping]:
        before = len(self._mappings)
        self._mappings = prune_invalid(self._mappings, valid_esc_ids, valid_fc_ids)
        dropped = before - len(self._mappings)
        if dropped:
            logger.info(f"[MAPPING] Pruned {dropped} stale mapping(s)")
        return self.mappings

    def replace_all(self, mappings: Iterable[PinMapping]) -> list[PinMapping]:
        """Discard the current list and load ``mappings`` (conflicts resolved last-wins)."""
        self._mappings = MappingStore(mappings).mappings
        return self.mappings

    def clear(self) -> None:
        self._mappings = []

    def unmapped(self, connector: Connector, side: MappingSide) -> list[Pin]:
        return unmapped_pins(connector, self._mappings, side)

    def mapping_for(self, side: MappingSide, pin_id: int) -> PinMapping | None:
        for mapping in self._mappings:
            if (mapping.esc_pin if side == MappingSide.ESC else mapping.fc_pin) == pin_id:
                return mapping
        return None

    def partner_of(self, side: MappingSide, pin_id: int) -> int | None:
        mapping = self.mapping_for(side, pin_id)
        if mapping is None:
            return None
        return mapping.fc_pin if side == MappingSide.ESC else mapping.esc_pin

    def retarget(self, side: MappingSide, from_pin: int, to_pin: int) -> list[PinMapping]:
        """
        Move the mapping of ``from_pin`` onto ``to_pin`` on the same side.

        The partner on the other side is kept; whatever used ``to_pin`` before
        is evicted. No-op when ``from_pin`` has no mapping or equals ``to_pin``.
        """
        mapping = self.mapping_for(side, from_pin)
        if mapping is None or from_pin == to_pin:
            return self.mappings

        if side == MappingSide.ESC:
            return self.add_or_replace(to_pin, mapping.fc_pin)
        return self.add_or_replace(mapping.esc_pin, to_pin)
