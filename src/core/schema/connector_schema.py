"""
Connector Schema Definition

Pins are identified by a stable integer id. The order of ``Connector.pins`` is
display order only; anything that references a pin (mappings, edits) goes
through the id.
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.exception import ConnectorConfigError
from core.model.enum.connector_enum import ConnectorKind, PinColor, PinFunction

TEMPLATE_PIN_COUNTS = (4, 6, 8, 10, 12, 14, 16)

PALETTE = [color.value for color in PinColor]


class WireModel(BaseModel):
    """Base model serialized as camelCase JSON (the preset file / share format)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class Pin(WireModel):
    id: int = Field(..., gt=0, description="Stable pin identifier, unique within its connector")
    label: str = Field(default="", description="Free-text label")
    color: str = Field(default=PinColor.RED.value, description="Display colour from the palette")
    function: str = Field(default=PinFunction.POWER.value, description="Pin role used for auto-mapping")


class Connector(WireModel):
    id: str = Field(..., description="Opaque connector identifier")
    name: str = Field(default="")
    kind: ConnectorKind = Field(..., alias="type")
    pin_count: int = Field(..., ge=0, description="Pin count at creation time, not re-validated after edits")
    pins: list[Pin] = Field(default_factory=list)

    def by_id(self) -> dict[int, Pin]:
        """Pins keyed by id, for lookups and validity checks."""
        return {pin.id: pin for pin in self.pins}

    def by_index(self) -> list[Pin]:
        """Pins in display order."""
        return list(self.pins)

    def pin_ids(self) -> set[int]:
        return {pin.id for pin in self.pins}

    def get_pin(self, pin_id: int) -> Pin | None:
        return self.by_id().get(pin_id)

    def index_of(self, pin_id: int) -> int | None:
        for index, pin in enumerate(self.pins):
            if pin.id == pin_id:
                return index
        return None

    def position_label(self, pin_id: int) -> str | None:
        """``Pos N`` label of a pin, following the current display order."""
        index = self.index_of(pin_id)
        return None if index is None else f"Pos {index + 1}"


def generate_connector_id(kind: ConnectorKind) -> str:
    return f"{kind.value.lower()}-{uuid.uuid4().hex[:12]}"


def build_connector(kind: ConnectorKind, pin_count: int, name: str | None = None) -> Connector:
    """
    Build a fresh connector from the editor template.

    Args:
        kind: ESC or FC
        pin_count: One of TEMPLATE_PIN_COUNTS
        name: Connector name (defaults to "<KIND> <N>-Pin")

    Returns:
        Connector: Pins numbered 1..N, labelled "Pin N", palette colours cycling

    Raises:
        ConnectorConfigError: pin_count is not an offered template size
    """
    if pin_count not in TEMPLATE_PIN_COUNTS:
        raise ConnectorConfigError(f"Unsupported pin count {pin_count}, expected one of {list(TEMPLATE_PIN_COUNTS)}")

    pins = [
        Pin(
            id=index + 1,
            label=f"Pin {index + 1}",
            color=PALETTE[index % len(PALETTE)],
            function=PinFunction.POWER.value,
        )
        for index in range(pin_count)
    ]

    return Connector(
        id=generate_connector_id(kind),
        name=(name or "").strip() or f"{kind.value} {pin_count}-Pin",
        kind=kind,
        pin_count=pin_count,
        pins=pins,
    )
