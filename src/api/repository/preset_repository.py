"""
Preset Data Access Layer

Flat JSON file holding the whole preset collection as one array. Every call
reads the file; every mutation rewrites it. Last writer wins. Entries that
do not parse are skipped on read but kept on write.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from core.exception import PresetNotFoundError, PresetStoreError
from core.schema.preset_schema import Preset
from core.util.preset_codec import generate_preset_id
from core.util.time_util import utc_now_iso

logger = logging.getLogger(__name__)


class PresetRepository:
    """
    Preset record store.

    Responsibilities:
    - Read the collection (missing or unreadable file reads as empty)
    - Create / update / delete single records
    - Append imported records
    """

    def __init__(self, file_path: str | Path):
        self.file_path = Path(file_path)

    # ===== File I/O =====

    def _read_raw(self) -> list[Any]:
        if not self.file_path.exists():
            return []
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"[STORE] Failed to read {self.file_path}, treating as empty: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"[STORE] {self.file_path} does not hold a JSON array, treating as empty")
            return []
        return data

    def _write(self, records: list[Any]) -> None:
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.file_path, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"[STORE] Failed to write {self.file_path}: {e}", exc_info=True)
            raise PresetStoreError(f"Failed to save presets: {e}") from e

    @staticmethod
    def _record_id(entry: Any) -> Any:
        return entry.get("id") if isinstance(entry, dict) else None

    # ===== Queries =====

    def list_presets(self) -> list[Preset]:
        presets: list[Preset] = []
        for index, entry in enumerate(self._read_raw()):
            try:
                presets.append(Preset.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"[STORE] Skipping malformed preset at index {index}: {e.error_count()} error(s)")
        return presets

    def get_preset(self, preset_id: str) -> Preset | None:
        for preset in self.list_presets():
            if preset.id == preset_id:
                return preset
        return None

    def existing_ids(self) -> set[str]:
        """Ids of every stored entry, including entries that do not validate."""
        return {rid for rid in (self._record_id(entry) for entry in self._read_raw()) if isinstance(rid, str)}

    # ===== Mutations =====
    # Mutations work on the raw file contents: entries this version cannot
    # parse are written back unchanged.

    def create_preset(self, data: dict[str, Any]) -> Preset:
        """
        Append a preset.

        Args:
            data: Wire-format record; ``id`` and ``createdAt`` are kept when given

        Returns:
            Preset: Stored record with id and timestamps filled in
        """
        now = utc_now_iso()
        record = {
            **data,
            "id": data.get("id") or generate_preset_id(),
            "createdAt": data.get("createdAt") or now,
            "updatedAt": now,
        }
        preset = Preset.model_validate(record)

        records = self._read_raw()
        records.append(preset.to_wire())
        self._write(records)

        logger.info(f"[STORE] Created preset '{preset.name}' ({preset.id})")
        return preset

    def update_preset(self, data: dict[str, Any]) -> Preset:
        """
        Replace the record whose id matches ``data['id']``.

        Raises:
            PresetNotFoundError: No record with that id
        """
        preset_id = data.get("id")
        records = self._read_raw()
        index = next((i for i, entry in enumerate(records) if self._record_id(entry) == preset_id), None)
        if not preset_id or index is None:
            raise PresetNotFoundError(f"Preset '{preset_id}' not found", preset_id=preset_id)

        stored_created_at = records[index].get("createdAt")
        record = {**data, "createdAt": data.get("createdAt") or stored_created_at, "updatedAt": utc_now_iso()}
        preset = Preset.model_validate(record)
        records[index] = preset.to_wire()
        self._write(records)

        logger.info(f"[STORE] Updated preset '{preset.name}' ({preset.id})")
        return preset

    def delete_preset(self, preset_id: str) -> None:
        """
        Raises:
            PresetNotFoundError: No record with that id
        """
        records = self._read_raw()
        remaining = [entry for entry in records if self._record_id(entry) != preset_id]
        if len(remaining) == len(records):
            raise PresetNotFoundError(f"Preset '{preset_id}' not found", preset_id=preset_id)

        self._write(remaining)
        logger.info(f"[STORE] Deleted preset {preset_id}")

    def append_presets(self, imported: list[Preset]) -> int:
        """Append records as given; returns the number of entries now stored."""
        records = self._read_raw()
        records.extend(p.to_wire() for p in imported)
        self._write(records)
        logger.info(f"[STORE] Appended {len(imported)} preset(s), collection size {len(records)}")
        return len(records)
