from pydantic import BaseModel, ConfigDict, Field, field_validator


class PathsConfig(BaseModel):
    """Path configuration"""

    PRESETS_FILE: str = Field(default="data/presets.json", description="Flat JSON file backing the preset store")
    LOG_DIR: str = Field(default="logs", description="Log directory")


class LoggingConfig(BaseModel):
    LEVEL: str = Field(default="INFO", description="Root log level (DEBUG/INFO/WARNING/ERROR)")
    TO_FILE: bool = Field(default=False, description="Also write a daily rotating log file")
    BASE_FILENAME: str = Field(default="pinmap", description="Log file base name")
    BACKUP_COUNT: int = Field(default=7, ge=0, description="Rotated log files to keep")

    @field_validator("LEVEL")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = str(v).upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
            raise ValueError(f"Unsupported log level: {v}")
        return level


class ShareConfig(BaseModel):
    BASE_URL: str = Field(default="http://127.0.0.1:8000/", description="Page that share links point to")
    ACCEPTED_VERSIONS: list[int] = Field(default_factory=lambda: [1], description="Share payload versions to accept")


class ServerConfig(BaseModel):
    HOST: str = Field(default="0.0.0.0", description="Bind address for uvicorn")
    PORT: int = Field(default=8000, ge=1, le=65535, description="Listen port")
    CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")


class SystemConfig(BaseModel):
    """System configuration (full)"""

    model_config = ConfigDict(extra="allow")

    PATHS: PathsConfig = Field(default_factory=PathsConfig)
    LOGGING: LoggingConfig = Field(default_factory=LoggingConfig)
    SHARE: ShareConfig = Field(default_factory=ShareConfig)
    SERVER: ServerConfig = Field(default_factory=ServerConfig)
