"""Pin Mapper Exception Definitions"""


class PinmapError(Exception):
    """Base exception for the pin mapper"""

    status_code: int = 500


class PresetError(PinmapError):
    """Base class for preset store exceptions"""

    def __init__(self, message: str, preset_id: str | None = None):
        super().__init__(message)
        self.preset_id = preset_id


class PresetNotFoundError(PresetError):
    """Update or delete targeted a preset id that is not in the store"""

    status_code = 404


class PresetStoreError(PresetError):
    """Writing the preset file failed"""

    status_code = 500


class PresetImportError(PresetError):
    """Import document is not a JSON array of presets"""

    status_code = 400


class ConnectorConfigError(PinmapError):
    """Connector template or connector body is invalid"""

    status_code = 400


class WorkspaceNotReadyError(PinmapError):
    """Operation needs both connectors to be configured"""

    status_code = 409


class ShareDecodeError(PinmapError):
    """Share string could not be decoded into a configuration"""

    status_code = 400
