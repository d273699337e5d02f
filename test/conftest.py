import pytest

from core.model.enum.connector_enum import ConnectorKind, PinColor, PinFunction
from core.schema.connector_schema import Connector, Pin


def make_connector(kind: ConnectorKind, functions: list[str], first_id: int = 1, name: str | None = None) -> Connector:
    """Connector whose pins carry the given functions, ids counting up from first_id."""
    pins = [
        Pin(id=first_id + i, label=f"Pin {first_id + i}", color=PinColor.RED.value, function=str(func))
        for i, func in enumerate(functions)
    ]
    return Connector(
        id=f"{kind.value.lower()}-test",
        name=name or f"{kind.value} test",
        kind=kind,
        pin_count=len(pins),
        pins=pins,
    )


@pytest.fixture
def esc_connector() -> Connector:
    """4-pin ESC: Power, Ground, Signal, Telemetry (ids 1..4)"""
    return make_connector(
        ConnectorKind.ESC,
        [PinFunction.POWER, PinFunction.GROUND, PinFunction.SIGNAL, PinFunction.TELEMETRY],
        name="Tekko32",
    )


@pytest.fixture
def fc_connector() -> Connector:
    """4-pin FC: Signal, Power, Ground, Telemetry (ids 10..13)"""
    return make_connector(
        ConnectorKind.FC,
        [PinFunction.SIGNAL, PinFunction.POWER, PinFunction.GROUND, PinFunction.TELEMETRY],
        first_id=10,
        name="F722",
    )


@pytest.fixture
def connector_factory():
    """Build connectors from a list of pin functions: factory(kind, functions, first_id=1)."""
    return make_connector
