from enum import StrEnum


class ConnectorKind(StrEnum):
    ESC = "ESC"
    FC = "FC"


class MappingSide(StrEnum):
    ESC = "esc"
    FC = "fc"


class MoveDirection(StrEnum):
    UP = "up"
    DOWN = "down"


class PinFunction(StrEnum):
    """Pin roles offered by the connector editor. NC and CUSTOM are never auto-mapped."""

    POWER = "Power (+)"
    GROUND = "Ground (-)"
    SIGNAL = "Signal"
    TELEMETRY = "Telemetry"
    DATA = "Data"
    MOTOR_1 = "Motor 1"
    MOTOR_2 = "Motor 2"
    MOTOR_3 = "Motor 3"
    MOTOR_4 = "Motor 4"
    NOT_CONNECTED = "NC (Not Connected)"
    CUSTOM = "Custom"


class PinColor(StrEnum):
    RED = "#ef4444"
    BLACK = "#000000"
    WHITE = "#ffffff"
    YELLOW = "#eab308"
    GREEN = "#22c55e"
    BLUE = "#3b82f6"
    PURPLE = "#8b5cf6"
    ORANGE = "#f97316"
    PINK = "#ec4899"
    GRAY = "#6b7280"


IGNORED_PIN_FUNCTIONS = frozenset({PinFunction.NOT_CONNECTED.value, PinFunction.CUSTOM.value})

UNMAPPED_COLOR = PinColor.GRAY.value
