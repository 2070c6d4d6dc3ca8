"""Configuration system for vidscribe.

Layered config loading (lowest to highest priority):
1. config/default.toml (shipped with package)
2. ~/.config/vidscribe/config.toml (user-level)
3. ./vidscribe.toml (project-level)
4. Environment variables (VIDSCRIBE_GEMINI__MODEL, etc.)
5. CLI flags
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from vidscribe.core.models import ProfanityMode

_PACKAGE_ROOT = Path(__file__).resolve().parent.parent.parent.parent
_DEFAULT_CONFIG = _PACKAGE_ROOT / "config" / "default.toml"
_USER_CONFIG = Path.home() / ".config" / "vidscribe" / "config.toml"
_PROJECT_CONFIG = Path("vidscribe.toml")


class GeminiConfig(BaseModel):
    model: str = "gemini-2.5-flash"
    api_key: str | None = None  # Falls back to GEMINI_API_KEY / GOOGLE_API_KEY
    poll_interval: float = 5.0  # seconds between file state checks
    poll_timeout: float | None = 900.0  # None waits forever
    max_upload_mb: int = 500
    profanity_mode: ProfanityMode = ProfanityMode.VERBATIM

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


class LLMConfig(BaseModel):
    model: str = "gemini/gemini-2.5-flash"
    api_base: str | None = None
    temperature: float = 0.2
    max_tokens: int = 65536


class PlayerConfig(BaseModel):
    sub_font_size: int = 40


class VidscribeConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="VIDSCRIBE_",
        env_nested_delimiter="__",
    )

    gemini: GeminiConfig = GeminiConfig()
    llm: LLMConfig = LLMConfig()
    player: PlayerConfig = PlayerConfig()
    workspace_dir: Path = Path("./vidscribe_workspace")


def _load_toml(path: Path) -> dict:
    """Load a TOML file if it exists, return empty dict otherwise."""
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(**cli_overrides: object) -> VidscribeConfig:
    """Load configuration from all layers and merge.

    Args:
        **cli_overrides: Direct overrides from CLI flags. Keys can be
            dot-separated (e.g. gemini.profanity_mode="mask").
    """
    config_data: dict = {}
    for path in (_DEFAULT_CONFIG, _USER_CONFIG, _PROJECT_CONFIG):
        layer = _load_toml(path)
        config_data = _deep_merge(config_data, layer)

    # Flatten 'general' section into top-level
    if "general" in config_data:
        general = config_data.pop("general")
        config_data = _deep_merge(config_data, general)

    for key, value in cli_overrides.items():
        if value is None:
            continue
        parts = key.split(".")
        target = config_data
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = value

    # Env vars are handled by Pydantic BaseSettings
    return VidscribeConfig(**config_data)
