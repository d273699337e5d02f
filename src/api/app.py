"""
FastAPI Application Entry Point

Builds the pin mapper API: one in-memory mapping session, the flat-file
preset store, and stateless share-string endpoints.
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.app_state import PinmapAppState
from api.lifecycle import shutdown_event, startup_event
from api.middleware.error_handler import add_error_handlers
from api.middleware.logging_middleware import LoggingMiddleware
from api.router import health, presets, share, workspace
from core.schema.system_config_schema import SystemConfig
from core.util.config_manager import ConfigManager
from core.util.logger_config import setup_logging

logger = logging.getLogger("PinmapAPI")

ROUTERS = (
    (health.router, "/api", "Health"),
    (presets.router, "/api/presets", "Presets"),
    (workspace.router, "/api/workspace", "Workspace"),
    (share.router, "/api/share", "Share"),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management"""
    await startup_event(app)
    try:
        yield
    finally:
        await shutdown_event(app)


def create_application(
    system_config: SystemConfig | None = None,
    state: PinmapAppState | None = None,
) -> FastAPI:
    """
    Create and configure a FastAPI application

    Args:
        system_config: Configuration to use (loaded from res/pinmap.yml when omitted)
        state: Pre-built application state (tests inject a temporary preset store)

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    if state is None:
        state = PinmapAppState(system_config=system_config or ConfigManager.load_system_config())
    config = state.system_config

    setup_logging(config.LOGGING, log_dir=config.PATHS.LOG_DIR)

    app = FastAPI(
        title="ESC/FC Pin Mapper API",
        description="Map ESC connector pins to flight controller pins, store presets and share configurations",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.pinmap = state

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.SERVER.CORS_ORIGINS,
        allow_credentials="*" not in config.SERVER.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)
    add_error_handlers(app)

    for router, prefix, tag in ROUTERS:
        app.include_router(router, prefix=prefix, tags=[tag])

    return app


app = create_application()

if __name__ == "__main__":
    import uvicorn

    server = app.state.pinmap.system_config.SERVER
    uvicorn.run(app, host=server.HOST, port=server.PORT)
