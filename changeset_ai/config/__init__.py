"""Configuration Management Package

Looks for config in multiple places (in order):

1. .changesetrc in current directory (project-specific)
2. .changesetrc in home directory (global default)
3. Built-in defaults

Config format (JSON):
{
    "provider": "gemini",
    "model": "gemini-2.0-flash",
    "diff_timeout": 30
}
"""

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from changeset_ai.discovery import DEFAULT_MAX_MANIFESTS
from changeset_ai.git.diff_source import DEFAULT_MAX_BYTES, DEFAULT_TIMEOUT

# Valid configuration values
VALID_PROVIDERS = {"gemini", "claude"}
POSITIVE_INT_FIELDS = ("diff_timeout", "max_diff_bytes", "request_timeout", "max_manifests")


@dataclass
class Config:
    """User configuration with sensible defaults."""
    provider: str = "gemini"
    model: Optional[str] = None
    diff_timeout: int = DEFAULT_TIMEOUT
    max_diff_bytes: int = DEFAULT_MAX_BYTES
    request_timeout: int = 120
    max_manifests: int = DEFAULT_MAX_MANIFESTS

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if self.provider not in VALID_PROVIDERS:
            warnings.append(f"Invalid provider '{self.provider}', using '{defaults.provider}'")
            self.provider = defaults.provider

        if self.model is not None and (not isinstance(self.model, str) or not self.model.strip()):
            warnings.append(f"Invalid model '{self.model}', using provider default")
            self.model = None

        for name in POSITIVE_INT_FIELDS:
            value = getattr(self, name)
            # bool is an int subclass; "true" is not a timeout
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                default = getattr(defaults, name)
                warnings.append(f"Invalid {name} '{value}', using {default}")
                setattr(self, name, default)

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        # Validate and print warnings to stderr
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Manages loading and saving configuration."""

    CONFIG_FILENAME = ".changesetrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        for path in (Path.cwd() / self.CONFIG_FILENAME, Path.home() / self.CONFIG_FILENAME):
            if path.exists():
                self._config = self._load_from_file(path)
                self._config_path = path
                return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()
        if not isinstance(data, dict):
            print(f"Warning: Could not load {path}: expected a JSON object", file=sys.stderr)
            return Config()
        return Config.from_dict(data)

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
    "get_config_path",
    "VALID_PROVIDERS",
]
