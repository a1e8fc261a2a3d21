"""
Settings management

Uses Pydantic Settings to load configuration, highest priority first:

1. keyword arguments
2. environment variables (``PAPER2NOTE_API_KEY``, ``PAPER2NOTE_DOWNLOAD_PATH``, ...)
3. a ``.env`` file in the working directory
4. the YAML settings file (``.paper2note.yaml`` by default)

Settings are immutable. ``update_settings`` writes the change to the YAML file
and returns a fresh instance; services receive the instance explicitly.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Literal, Tuple, Type, Union

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE = Path(".paper2note.yaml")

TargetLanguage = Literal["korean", "japanese", "chinese"]


class Settings(BaseSettings):
    """Runtime configuration shared by every command"""

    model_config = SettingsConfigDict(
        env_prefix="PAPER2NOTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        yaml_file=str(DEFAULT_SETTINGS_FILE),
        extra="ignore",
        frozen=True,
    )

    api_key: str = Field(default="", description="Gemini API key")
    download_path: str = Field(default="", description="Vault folder receiving downloaded PDFs")
    image_path: str = Field(default="", description="Vault folder for extracted figures")
    translate_enabled: bool = False
    target_language: TargetLanguage = "korean"
    model: str = "gemini-1.5-flash-latest"
    request_timeout: int = Field(default=30, ge=1)
    summary_timeout: int = Field(default=120, ge=1)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def load_settings(path: Union[str, Path] = DEFAULT_SETTINGS_FILE) -> Settings:
    """Load settings, reading the YAML layer from ``path`` (missing file is fine)"""

    class _FileSettings(Settings):
        model_config = SettingsConfigDict(yaml_file=str(path))

    try:
        return _FileSettings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings in {path}: {exc}") from exc


def save_settings(settings: Settings, path: Union[str, Path] = DEFAULT_SETTINGS_FILE) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as f:
        yaml.safe_dump(settings.model_dump(mode="json"), f, sort_keys=False, allow_unicode=True)
    logger.debug("Settings saved to %s", target)


def update_settings(path: Union[str, Path] = DEFAULT_SETTINGS_FILE, **changes: Any) -> Settings:
    """
    Persist ``changes`` to the settings file and return the reloaded settings

    Only the file layer is rewritten; values coming from the environment are
    not copied into it.

    Raises:
        ConfigError: if a key is unknown or a value does not validate
    """
    unknown = sorted(set(changes) - set(Settings.model_fields))
    if unknown:
        raise ConfigError(f"Unknown setting(s): {', '.join(unknown)}")

    stored = _read_settings_file(path)
    stored.update(changes)
    try:
        validated = Settings.model_validate(stored)
    except ValidationError as exc:
        raise ConfigError(f"Invalid setting value: {exc}") from exc

    save_settings(validated, path)
    return load_settings(path)


def _read_settings_file(path: Union[str, Path]) -> Dict[str, Any]:
    source = Path(path)
    if not source.exists():
        return {}
    with source.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {source} is not a mapping")
    return {key: value for key, value in data.items() if key in Settings.model_fields}
