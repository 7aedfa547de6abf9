import os
import json
import platform
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict

from ghkit.constants import (
    APP_NAME,
    DEFAULT_API_BASE_URL,
    DEFAULT_BRANCH,
    DEFAULT_REMOTE_NAME,
    EXTERNAL_REMOTE_NAME,
    FETCH_RETRY_DELAY,
    FETCH_RETRY_LIMIT,
)
from ghkit.errors import InvalidInputError

SETTINGS_FILE_NAME = "settings.json"


@dataclass
class Settings:
    """User-tunable settings persisted in settings.json"""

    log_level: str = "INFO"
    fetch_retry_delay: float = FETCH_RETRY_DELAY
    fetch_retry_limit: int = FETCH_RETRY_LIMIT
    remote_name: str = DEFAULT_REMOTE_NAME
    external_remote_name: str = EXTERNAL_REMOTE_NAME
    default_branch: str = DEFAULT_BRANCH
    api_base_url: str = DEFAULT_API_BASE_URL

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Build settings from a raw mapping, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ConfigStore:
    def __init__(self):
        self.base_dir = self._get_config_dir()
        self.settings_file = self.base_dir / SETTINGS_FILE_NAME
        self._ensure_config_dir()

    def _get_config_dir(self) -> Path:
        """Get platform-specific config directory"""
        system = platform.system()
        if system == "Windows":
            base_dir = os.environ.get("APPDATA", "")
            return Path(base_dir) / APP_NAME
        elif system == "Darwin":  # macOS
            return Path.home() / "Library" / "Application Support" / APP_NAME
        else:  # Linux and others
            xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
            if xdg_config:
                return Path(xdg_config) / APP_NAME
            return Path.home() / f".{APP_NAME}"

    def _ensure_config_dir(self):
        """Ensure config directory exists"""
        os.makedirs(self.base_dir, exist_ok=True)

    def load_settings(self) -> Settings:
        """Load settings, falling back to defaults for a missing or corrupt file"""
        if not self.settings_file.exists():
            return Settings()
        try:
            with open(self.settings_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError):
            return Settings()
        if not isinstance(data, dict):
            return Settings()
        try:
            return Settings.from_dict(data)
        except TypeError:
            return Settings()

    def save_settings(self, settings: Settings) -> None:
        with open(self.settings_file, "w", encoding="utf-8") as f:
            json.dump(settings.to_dict(), f, indent=2)

    def set_setting(self, key: str, raw_value: str) -> Settings:
        """
        Update one setting from its command-line string form.

        The value is coerced to the type of the field's default.

        Raises:
            InvalidInputError: unknown key or value of the wrong type
        """
        settings = self.load_settings()
        field_types = {f.name: type(getattr(settings, f.name)) for f in fields(settings)}
        if key not in field_types:
            raise InvalidInputError(
                f"Unknown setting '{key}'. Known settings: {', '.join(sorted(field_types))}"
            )

        target_type = field_types[key]
        try:
            value = target_type(raw_value)
        except ValueError:
            raise InvalidInputError(
                f"Setting '{key}' expects a {target_type.__name__}, got '{raw_value}'"
            )
        if key == "log_level":
            value = value.upper()
            if value not in ("DEBUG", "INFO", "WARNING", "ERROR"):
                raise InvalidInputError(f"Invalid log level '{raw_value}'")
        if key in ("fetch_retry_delay", "fetch_retry_limit") and value < 0:
            raise InvalidInputError(f"Setting '{key}' must not be negative")

        setattr(settings, key, value)
        self.save_settings(settings)
        return settings
