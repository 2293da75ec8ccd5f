import os
import json
import logging
from typing import Any, Dict, Optional

# Plain logging here: logger.py depends on this module for its levels.
logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "XLIFF12_CONFIG"
CONFIG_FILE = "xliff12.json"

DEFAULT_CONFIG = {
    "log_level": "INFO",
    "log_file": "",
    "pretty_print": True,
}


class SettingsManager:
    """
    Reads xliff12 configuration from a JSON file layered over DEFAULT_CONFIG.
    A missing or unreadable file leaves the defaults in place.
    """
    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or os.environ.get(CONFIG_ENV_VAR, CONFIG_FILE)
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        config = dict(DEFAULT_CONFIG)
        if not os.path.exists(self.config_path):
            return config

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load config {self.config_path}: {e}")
            return config

        if not isinstance(loaded, dict):
            logger.error(f"Config {self.config_path} must hold a JSON object, ignoring it")
            return config

        unknown = set(loaded) - set(DEFAULT_CONFIG)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")
        config.update({k: v for k, v in loaded.items() if k in DEFAULT_CONFIG})
        return config

    def save_config(self):
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(self.config, f, indent=2)

    @property
    def log_level(self) -> str:
        level = str(self.config.get("log_level", "INFO")).upper()
        if not isinstance(logging.getLevelName(level), int):
            logger.warning(f"Unknown log level {level!r}, using INFO")
            return "INFO"
        return level

    @log_level.setter
    def log_level(self, value: str):
        self.config["log_level"] = value

    @property
    def log_file(self) -> str:
        return self.config.get("log_file") or ""

    @log_file.setter
    def log_file(self, value: str):
        self.config["log_file"] = value

    @property
    def pretty_print(self) -> bool:
        return bool(self.config.get("pretty_print", True))

    @pretty_print.setter
    def pretty_print(self, value: bool):
        self.config["pretty_print"] = value


_settings: Optional[SettingsManager] = None


def get_settings() -> SettingsManager:
    """Returns the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = SettingsManager()
    return _settings


def reset_settings():
    """Forgets the cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
