import logging
import sys
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.schema.system_config_schema import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

# Third-party loggers that are noisy at DEBUG
QUIET_LOGGERS = {
    "uvicorn": logging.INFO,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
}


class ISO8601Formatter(logging.Formatter):
    def formatTime(self, record, datefmt=None):
        dt: datetime = datetime.fromtimestamp(record.created)
        return dt.isoformat(timespec="seconds")


def _is_pinmap_handler(handler: logging.Handler) -> bool:
    return getattr(handler, "_pinmap", False)


def _tag(handler: logging.Handler) -> logging.Handler:
    handler._pinmap = True  # type: ignore[attr-defined]
    handler.setFormatter(ISO8601Formatter(fmt=LOG_FORMAT))
    return handler


def build_file_handler(log_dir: str, base_filename: str, backup_count: int) -> TimedRotatingFileHandler:
    """Daily rotating file handler; rotated files get a date suffix."""
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    return TimedRotatingFileHandler(
        filename=str(Path(log_dir) / f"{base_filename}.log"),
        when="midnight",
        interval=1,
        backupCount=backup_count,
        encoding="utf-8",
        utc=False,
    )


def setup_logging(config: LoggingConfig | None = None, log_dir: str = "logs") -> logging.Logger:
    """
    Configure the root logger from the LOGGING section.

    Calling it again (one app per test, for instance) swaps the handlers it
    installed earlier instead of stacking new ones; handlers added by someone
    else (pytest's capture, uvicorn) are left alone.
    """
    config = config or LoggingConfig()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.LEVEL, logging.INFO))

    for handler in [h for h in root_logger.handlers if _is_pinmap_handler(h)]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.addHandler(_tag(logging.StreamHandler(sys.stdout)))
    if config.TO_FILE:
        root_logger.addHandler(_tag(build_file_handler(log_dir, config.BASE_FILENAME, config.BACKUP_COUNT)))

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)

    return root_logger
