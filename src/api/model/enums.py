"""API enum definitions."""

from enum import StrEnum


class ResponseStatus(StrEnum):
    """Value of the ``status`` field on every API envelope"""

    SUCCESS = "success"
    ERROR = "error"
