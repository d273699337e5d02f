"""Startup and shutdown hooks for the FastAPI application."""

import logging

from fastapi import FastAPI

from api.repository.preset_repository import PresetRepository
from core.mapping.workspace import MappingWorkspace

logger = logging.getLogger(__name__)


async def startup_event(app: FastAPI) -> None:
    """Create the session and the preset store unless they were injected already."""
    logger.info("=" * 60)
    logger.info("Starting Pin Mapper API Service...")
    logger.info("=" * 60)

    try:
        state = app.state.pinmap
        config = state.system_config

        if state.preset_repository is None:
            state.preset_repository = PresetRepository(config.PATHS.PRESETS_FILE)
        logger.info(f"Preset store: {state.preset_repository.file_path}")

        if state.workspace is None:
            state.workspace = MappingWorkspace()

        logger.info(f"State: {state!r}")
        logger.info("API startup completed")

    except Exception as exc:
        logger.error("=" * 60)
        logger.error("STARTUP FAILED")
        logger.error("=" * 60)
        logger.error(f"Error: {exc}", exc_info=True)
        raise


async def shutdown_event(app: FastAPI) -> None:
    """Presets are written on every mutation, so there is nothing to flush."""
    logger.info("=" * 60)
    logger.info("Shutting down Pin Mapper API Service...")
    logger.info(f"State: {app.state.pinmap!r}")
    logger.info("=" * 60)
