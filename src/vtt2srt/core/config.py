"""Configuration system for vtt2srt.

Layered config loading (lowest to highest priority):
1. config/default.toml (shipped with package)
2. ~/.config/vtt2srt/config.toml (user-level)
3. ./vtt2srt.toml (project-level)
4. Environment variables (VTT2SRT_BATCH__MAX_WORKERS, etc.)
5. CLI flags
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PACKAGE_ROOT = Path(__file__).resolve().parent.parent.parent.parent
_DEFAULT_CONFIG = _PACKAGE_ROOT / "config" / "default.toml"
_USER_CONFIG = Path.home() / ".config" / "vtt2srt" / "config.toml"
_PROJECT_CONFIG = Path("vtt2srt.toml")

DEFAULT_FAILURE_MESSAGE = "Failed to read or parse file"


class BatchConfig(BaseModel):
    max_workers: int | None = Field(default=None, ge=1)  # None: executor default
    failure_message: str = DEFAULT_FAILURE_MESSAGE


class ExportConfig(BaseModel):
    output_dir: Path = Path(".")
    archive_prefix: str = "converted_subtitles"


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="VTT2SRT_",
        env_nested_delimiter="__",
    )

    batch: BatchConfig = BatchConfig()
    export: ExportConfig = ExportConfig()


def _read_toml_layer(path: Path) -> dict:
    """Parsed TOML table for one layer; a missing file is an empty layer."""
    if not path.is_file():
        return {}
    return tomllib.loads(path.read_text(encoding="utf-8"))


def _merge_layers(lower: dict, upper: dict) -> dict:
    """Return ``lower`` updated with ``upper``, merging nested sections key by key.

    Neither argument is modified.
    """
    result = dict(lower)
    for key, value in upper.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = _merge_layers(current, value)
        result[key] = value
    return result


def _set_dotted(data: dict, dotted_key: str, value: object) -> None:
    """Set ``data["batch"]["max_workers"]`` from ``"batch.max_workers"``."""
    *sections, leaf = dotted_key.split(".")
    for section in sections:
        data = data.setdefault(section, {})
    data[leaf] = value


def load_config(**cli_overrides: object) -> AppConfig:
    """Build the settings for one vtt2srt run.

    TOML layers are merged in priority order, then CLI flags are applied on
    top. ``VTT2SRT_*`` variables fill whatever the TOML layers leave unset.

    Args:
        **cli_overrides: Flag values keyed by dotted setting name
            (e.g. ``export.output_dir``). None means the flag was not given.
    """
    data: dict = {}
    for layer in (_DEFAULT_CONFIG, _USER_CONFIG, _PROJECT_CONFIG):
        data = _merge_layers(data, _read_toml_layer(layer))

    for dotted_key, value in cli_overrides.items():
        if value is not None:
            _set_dotted(data, dotted_key, value)

    return AppConfig(**data)
