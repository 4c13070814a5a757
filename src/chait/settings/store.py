"""JSON persistence for chait settings.

Hides where the configuration lives and how it is written. Writes go
through a temporary file and os.replace so a crash never leaves a
half-written config behind.
"""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..errors import SettingsError
from .models import Settings

CONFIG_ENV_VAR = "CHAIT_CONFIG"


def default_config_path() -> Path:
    """Path of the config file: $CHAIT_CONFIG or ~/.config/chait/config.json."""
    override = os.getenv(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "chait" / "config.json"


def coerce_value(raw: str) -> Any:
    """Convert a command-line string to bool, int or float where it looks like one."""
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        return raw


class SettingsStore:
    """Reads and writes Settings as JSON."""

    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path) if path is not None else default_config_path()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Settings:
        """Load settings, returning defaults when the file does not exist.

        Raises:
            SettingsError: If the file exists but cannot be read or parsed
        """
        if not self._path.exists():
            return Settings()
        try:
            data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
            return Settings.model_validate(data)
        except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
            raise SettingsError(f"Cannot read config file {self._path}: {e}") from e

    def save(self, settings: Settings) -> None:
        """Persist settings atomically.

        Raises:
            SettingsError: If the file cannot be written
        """
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(settings.model_dump_json(indent=2), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise SettingsError(f"Cannot write config file {self._path}: {e}") from e

    def set_value(self, key: str, raw_value: str) -> Any:
        """Set a dotted key such as ``providers.deepseek.api_key``.

        Returns:
            The coerced value that was stored

        Raises:
            SettingsError: If the key path is invalid or the result fails validation
        """
        value = coerce_value(raw_value)
        data = self.load().model_dump()

        parts = [part for part in key.split(".") if part]
        if not parts:
            raise SettingsError("Config key must not be empty")

        node = data
        for part in parts[:-1]:
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                raise SettingsError(f"Config key '{key}' crosses a non-object value")
            node = child
        node[parts[-1]] = value

        try:
            settings = Settings.model_validate(data)
        except PydanticValidationError as e:
            raise SettingsError(f"Invalid value for '{key}': {e}") from e
        self.save(settings)
        return value
