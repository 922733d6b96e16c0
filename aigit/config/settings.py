"""
Configuration management with Pydantic validation and environment variable support.
"""

import json
import os
from pathlib import Path
from typing import Optional, Literal
from pydantic import Field, PrivateAttr, ValidationError
from pydantic_settings import BaseSettings
from loguru import logger

from ..exceptions import ConfigMissingError, ConfigInvalidError


PROVIDERS = ("openai", "claude", "google", "openrouter")
LANGUAGES = ("en", "zh")
CONFIG_KEYS = ("provider", "api_key", "model", "language", "base_url")
ENV_PREFIX = "AIGIT_"


class Settings(BaseSettings):
    """User configuration persisted to ~/.aigit/config.json."""

    provider: Literal["openai", "claude", "google", "openrouter"] = Field(
        default="openai",
        description="AI provider"
    )
    api_key: str = Field(
        default="",
        description="API key for the provider"
    )
    model: str = Field(
        default="",
        description="Model name (empty means provider default)"
    )
    language: Literal["en", "zh"] = Field(
        default="en",
        description="Output language"
    )
    base_url: Optional[str] = Field(
        default=None,
        description="Custom API base URL"
    )

    model_config = {
        "env_prefix": ENV_PREFIX,
        "case_sensitive": False,
        "extra": "ignore",
        "validate_assignment": True,
    }

    # Fields filled from AIGIT_* variables; never written back to the config file
    _env_fields: set = PrivateAttr(default_factory=set)

    def __init__(self, **values):
        super().__init__(**values)
        present = {name.upper() for name in os.environ}
        self._env_fields = {
            name for name in type(self).model_fields
            if name not in values and f"{ENV_PREFIX}{name.upper()}" in present
        }

    def __setattr__(self, name, value):
        super().__setattr__(name, value)
        if name in type(self).model_fields:
            self._env_fields.discard(name)

    @classmethod
    def from_file(cls, config_path: Path) -> "Settings":
        """Load settings from a configuration file."""
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigInvalidError(f"Invalid config file {config_path}: {e}")

        if not isinstance(config_data, dict):
            raise ConfigInvalidError(f"Invalid config file {config_path}: expected a JSON object")

        # Empty strings in the file mean "unset", as written by older configs
        if config_data.get("base_url") == "":
            config_data.pop("base_url")

        try:
            return cls(**config_data)
        except ValidationError as e:
            raise ConfigInvalidError(_describe_validation_error(e))

    def save_to_file(self, config_path: Path) -> None:
        """Save settings to a configuration file readable only by the user.

        Values that only came from the environment are left out.
        """
        config_path.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
        values = self.model_dump(exclude_none=True, exclude=set(self._env_fields))
        data = json.dumps(values, indent=2, ensure_ascii=False)

        fd = os.open(config_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        # O_CREAT mode is ignored when the file already exists
        os.chmod(config_path, 0o600)
        logger.debug(f"Saved configuration to {config_path}")

    def set_value(self, key: str, value: str) -> None:
        """Set a single configuration key, validating enum values."""
        if key not in CONFIG_KEYS:
            raise ConfigInvalidError(f"unknown config key: {key}")

        if key == "provider" and value not in PROVIDERS:
            raise ConfigInvalidError(f"invalid provider: {value} (use: {', '.join(PROVIDERS)})")
        if key == "language" and value not in LANGUAGES:
            raise ConfigInvalidError(f"invalid language: {value} (use: {', '.join(LANGUAGES)})")

        if key == "base_url" and not value:
            self.base_url = None
            return

        try:
            setattr(self, key, value)
        except ValidationError as e:
            raise ConfigInvalidError(_describe_validation_error(e))

    def display_items(self) -> list[tuple[str, str]]:
        """Key/value pairs for display, with the API key masked."""
        items = [
            ("provider", self.provider),
            ("api_key", mask_api_key(self.api_key)),
            ("model", self.model),
            ("language", self.language),
        ]
        if self.base_url:
            items.append(("base_url", self.base_url))
        return items


def _describe_validation_error(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "config"
        problems.append(f"{location}: {item['msg']}")
    return "Invalid configuration: " + "; ".join(problems)


def mask_api_key(key: str) -> str:
    """Mask an API key, keeping the first and last four characters of long keys."""
    if len(key) <= 8:
        return "****"
    return key[:4] + "****" + key[-4:]


def config_dir() -> Path:
    """Get the configuration directory."""
    return Path.home() / ".aigit"


def default_config_path() -> Path:
    """Get the default config file path."""
    return config_dir() / "config.json"


def cache_dir() -> Path:
    """Get the cache directory."""
    base = Path(os.environ.get("XDG_CACHE_HOME", "~/.cache"))
    return (base / "aigit").expanduser()


def log_file() -> Path:
    """Get the log file path."""
    return cache_dir() / "aigit.log"


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Load the configuration fresh from disk and require an API key."""
    path = config_path or default_config_path()
    if not path.exists():
        raise ConfigMissingError("config not found, please run 'aigit config' first")

    settings = Settings.from_file(path)
    if not settings.api_key:
        raise ConfigMissingError("api_key is required")

    logger.debug(f"Loaded configuration from {path} (provider={settings.provider})")
    return settings
