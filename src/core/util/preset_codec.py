"""
Preset Codec

Turns a configuration (ESC connector, FC connector, mappings) into:
- a Preset record for the preset store
- a compact share string that can sit in a URL query value unescaped

Share string: compact JSON of ``{"e", "f", "m", "v"}`` -> zlib -> base64url
without padding. Only ``A-Z a-z 0-9 - _`` appear in the output.
"""

import base64
import binascii
import json
import logging
import re
import uuid
import zlib
from datetime import datetime
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import ValidationError

from core.exception import PresetImportError
from core.schema.connector_schema import Connector
from core.schema.preset_schema import SHARE_FORMAT_VERSION, PinMapping, Preset, SharePayload
from core.util.time_util import to_iso_z, utc_now

logger = logging.getLogger(__name__)

SHARE_QUERY_PARAM = "s"
DEFAULT_ACCEPTED_VERSIONS = frozenset({SHARE_FORMAT_VERSION})

_SHARE_ALPHABET = re.compile(r"^[A-Za-z0-9_-]+$")


def generate_preset_id() -> str:
    return f"preset-{uuid.uuid4().hex}"


def to_record(
    esc_connector: Connector,
    fc_connector: Connector,
    mappings: list[PinMapping],
    name: str,
    description: str = "",
    now: datetime | None = None,
) -> Preset:
    """
    Snapshot a configuration as a new preset.

    Connectors and mappings are deep-copied; later edits to the live objects do
    not reach the preset.
    """
    stamp = to_iso_z(now or utc_now())
    return Preset(
        id=generate_preset_id(),
        name=name,
        description=description,
        esc_connector=esc_connector.model_copy(deep=True),
        fc_connector=fc_connector.model_copy(deep=True),
        mappings=[m.model_copy() for m in mappings],
        created_at=stamp,
        updated_at=stamp,
    )


def build_payload(esc_connector: Connector, fc_connector: Connector, mappings: list[PinMapping]) -> SharePayload:
    return SharePayload(e=esc_connector, f=fc_connector, m=list(mappings), v=SHARE_FORMAT_VERSION)


def encode(esc_connector: Connector, fc_connector: Connector, mappings: list[PinMapping]) -> str:
    payload = build_payload(esc_connector, fc_connector, mappings)
    raw = json.dumps(payload.to_wire(), separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    encoded = base64.urlsafe_b64encode(zlib.compress(raw, 9)).decode("ascii").rstrip("=")
    logger.debug(f"[CODEC] Encoded {len(raw)} bytes of JSON into {len(encoded)} characters")
    return encoded


def decode(
    encoded: str | None,
    accepted_versions: frozenset[int] = DEFAULT_ACCEPTED_VERSIONS,
) -> SharePayload | None:
    """
    Decode a share string.

    Args:
        encoded: Output of ``encode``
        accepted_versions: Payload versions this decoder understands

    Returns:
        SharePayload | None: None for anything that is not a well-formed payload
        of an accepted version. Never raises.
    """
    if not encoded or not isinstance(encoded, str):
        return None

    text = encoded.strip()
    if not _SHARE_ALPHABET.match(text):
        logger.debug("[CODEC] Share string has characters outside the base64url alphabet")
        return None

    try:
        padded = text + "=" * (-len(text) % 4)
        raw = zlib.decompress(base64.urlsafe_b64decode(padded))
        data = json.loads(raw.decode("utf-8"))
    except (binascii.Error, zlib.error, UnicodeDecodeError, ValueError) as e:
        logger.debug(f"[CODEC] Share string rejected: {e}")
        return None

    if not isinstance(data, dict) or not data.get("e") or not data.get("f") or not isinstance(data.get("m"), list):
        logger.debug("[CODEC] Share payload failed shape check")
        return None

    version = data.get("v")
    if isinstance(version, bool) or not isinstance(version, int) or version not in accepted_versions:
        logger.warning(f"[CODEC] Share payload version {version!r} not accepted")
        return None

    try:
        return SharePayload.model_validate(data)
    except ValidationError as e:
        logger.debug(f"[CODEC] Share payload failed validation: {e.error_count()} error(s)")
        return None


def build_share_url(base_url: str, encoded: str) -> str:
    """Set (or overwrite) the ``s`` query parameter on ``base_url``."""
    parts = urlsplit(base_url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != SHARE_QUERY_PARAM]
    query.append((SHARE_QUERY_PARAM, encoded))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))


def export_presets(presets: list[Preset]) -> str:
    """Pretty-printed JSON array of the whole collection."""
    return json.dumps([p.to_wire() for p in presets], indent=2, ensure_ascii=False)


def parse_import(document: Any) -> list[Preset]:
    """
    Parse an import document into presets.

    Raises:
        PresetImportError: Not JSON, not an array, or an entry is not a preset
    """
    if isinstance(document, (str, bytes)):
        try:
            data = json.loads(document)
        except ValueError as e:
            raise PresetImportError(f"Import document is not valid JSON: {e}") from e
    else:
        data = document

    if not isinstance(data, list):
        raise PresetImportError("Import document must be a JSON array of presets")

    presets: list[Preset] = []
    for index, entry in enumerate(data):
        try:
            presets.append(Preset.model_validate(entry))
        except ValidationError as e:
            raise PresetImportError(f"Entry {index} is not a valid preset: {e.error_count()} error(s)") from e
    return presets
