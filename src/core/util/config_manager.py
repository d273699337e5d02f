import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

from core.schema.system_config_schema import SystemConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent.parent.parent / "res" / "pinmap.yml"


class ConfigManager:

    @staticmethod
    def load_yaml_file(path: str) -> dict:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def parse_env_var_with_default(value: str) -> bool | int | float | str | None:
        match = re.match(r"\$\{(\w+)(?::-([^\}]*))?\}", value)  # Match ${VAR_NAME:-default} or ${VAR_NAME}
        if not match:
            return value

        var_name = match.group(1)
        default_value = match.group(2)

        resolved_value = os.getenv(var_name) or default_value
        if resolved_value is not None:
            return ConfigManager._parse_value_by_type(resolved_value)
        return None

    @staticmethod
    def resolve_env_vars(node: Any) -> Any:
        """Walk a loaded YAML tree and expand ``${VAR:-default}`` string values."""
        if isinstance(node, dict):
            return {k: ConfigManager.resolve_env_vars(v) for k, v in node.items()}
        if isinstance(node, list):
            return [ConfigManager.resolve_env_vars(v) for v in node]
        if isinstance(node, str):
            return ConfigManager.parse_env_var_with_default(node)
        return node

    @staticmethod
    def load_system_config(path: str | None = None) -> SystemConfig:
        """
        Load the system configuration.

        Path resolution: explicit argument, then PINMAP_CONFIG, then res/pinmap.yml.
        A missing file yields the defaults.
        """
        config_path = Path(path or os.getenv("PINMAP_CONFIG") or DEFAULT_CONFIG_PATH)
        if not config_path.exists():
            logger.warning(f"Config file not found: {config_path}, using defaults")
            return SystemConfig()

        raw = ConfigManager.resolve_env_vars(ConfigManager.load_yaml_file(str(config_path)))
        logger.info(f"Loaded system config from {config_path}")
        return SystemConfig(**raw)

    @staticmethod
    def _parse_value_by_type(value: str) -> bool | int | float | str:
        if value.lower() in ["true", "false"]:
            return value.lower() == "true"
        if ConfigManager._is_int(value):
            return int(value)
        if ConfigManager._is_float(value):
            return float(value)
        return value

    @staticmethod
    def _is_int(value: str) -> bool:
        try:
            int(value)
            return True
        except ValueError:
            return False

    @staticmethod
    def _is_float(value: str) -> bool:
        try:
            float(value)
            return True
        except ValueError:
            return False
