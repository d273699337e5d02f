"""Service layer for preset storage, export and import."""

import logging
from typing import Any

from api.model.enums import ResponseStatus
from api.model.requests import PresetWriteRequest
from api.model.responses import ImportResponse
from api.repository.preset_repository import PresetRepository
from core.schema.preset_schema import Preset
from core.util.preset_codec import export_presets, generate_preset_id, parse_import

logger = logging.getLogger(__name__)


class PresetService:
    """
    Preset Service Layer

    Responsibilities:
    - CRUD over the preset record store
    - Export of the whole collection as a JSON document
    - Import with id collision handling
    """

    def __init__(self, preset_repo: PresetRepository):
        self._preset_repo = preset_repo

    def list_presets(self) -> list[Preset]:
        return self._preset_repo.list_presets()

    def create_preset(self, request: PresetWriteRequest) -> Preset:
        return self._preset_repo.create_preset(request.to_record())

    def update_preset(self, request: PresetWriteRequest) -> Preset:
        return self._preset_repo.update_preset(request.to_record())

    def delete_preset(self, preset_id: str) -> None:
        self._preset_repo.delete_preset(preset_id)

    def export_document(self) -> str:
        return export_presets(self._preset_repo.list_presets())

    def import_document(self, document: Any) -> ImportResponse:
        """
        Append every preset in ``document`` to the collection.

        An imported preset whose id is already taken (by a stored record or an
        earlier entry of the same document) gets a fresh id; nothing else about
        the entry changes.

        Raises:
            PresetImportError: Document is not a JSON array of presets
        """
        imported = parse_import(document)

        taken = self._preset_repo.existing_ids()
        regenerated: dict[str, str] = {}
        accepted: list[Preset] = []
        for preset in imported:
            if preset.id in taken:
                new_id = generate_preset_id()
                regenerated[preset.id] = new_id
                logger.warning(f"[IMPORT] Preset id '{preset.id}' already exists, re-keyed as '{new_id}'")
                preset = preset.model_copy(update={"id": new_id})
            taken.add(preset.id)
            accepted.append(preset)

        total = self._preset_repo.append_presets(accepted)

        return ImportResponse(
            status=ResponseStatus.SUCCESS,
            message=f"Imported {len(accepted)} preset(s)",
            imported_count=len(accepted),
            total_count=total,
            regenerated_ids=regenerated,
            presets=accepted,
        )
