"""Configuration management for pinyin_search.

Supports loading from config.yaml + environment variable overrides.
Environment variables take precedence over YAML values.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

DEFAULT_SEPARATORS = " _-.,!@#$%^&*()+=[]{}\\|;:\"'<>?/~"


class DictionaryConfig(BaseModel):
    """Pinyin dictionary provider configuration.

    provider = "pypinyin": readings come from the pypinyin library (default).
    provider = "json": readings come from JSON resources, first file wins.
    provider = "none": no readings, Chinese characters match literally only.
    """

    provider: Literal["pypinyin", "json", "none"] = "pypinyin"
    format: Literal["without_tone", "tone_mark", "tone_number"] = "without_tone"
    paths: list[str] = Field(default_factory=list)  # JSON resources, primary first


class TokenizerConfig(BaseModel):
    """Tokenizer boundary rules."""

    separators: str = DEFAULT_SEPARATORS
    include_hanzi: bool = False  # Also keep the character itself as a reading


class WeightConfig(BaseModel):
    """Ranking weight constants. Only relative order is meaningful.

    The start offset always dominates: match quality moves a weight by
    less than one ``start_penalty`` step. ``skip_penalty`` and
    ``match_bonus`` only balance each other inside that step.
    """

    base: float = 1000.0
    start_penalty: float = Field(default=100.0, gt=0)  # Per character before the first match
    skip_penalty: float = Field(default=1.0, ge=0)  # Per unmatched character inside a word's span
    match_bonus: float = Field(default=5.0, ge=0)  # Per confirmed matched character


class SearchConfig(BaseModel):
    """Index search configuration."""

    max_workers: int = Field(default=4, ge=1)
    parallel_threshold: int = Field(default=2000, ge=0)  # Entries before going parallel
    weights: WeightConfig = Field(default_factory=WeightConfig)


class CacheConfig(BaseModel):
    """Query result caching configuration."""

    enabled: bool = False
    max_size: int = Field(default=128, ge=1)
    ttl_seconds: int = Field(default=300, ge=0)


class Settings(BaseSettings):
    """Application settings.

    Loads from config.yaml, then overrides with environment variables.
    """

    dictionary: DictionaryConfig = Field(default_factory=DictionaryConfig)
    tokenizer: TokenizerConfig = Field(default_factory=TokenizerConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)

    model_config = SettingsConfigDict(
        env_prefix="PINYIN_SEARCH_",
        env_nested_delimiter="__",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Let environment variables override YAML-provided init values."""
        return (
            env_settings,
            init_settings,
            dotenv_settings,
            file_secret_settings,
        )


def _resolve_env_vars(value: str) -> str:
    """Resolve ${ENV_VAR} patterns in string values."""
    if not isinstance(value, str):
        return value
    if value.startswith("${") and value.endswith("}"):
        env_name = value[2:-1]
        return os.environ.get(env_name, "")
    return value


def _resolve_value(value):
    if isinstance(value, dict):
        return _resolve_dict(value)
    if isinstance(value, list):
        return [_resolve_value(v) for v in value]
    if isinstance(value, str):
        return _resolve_env_vars(value)
    return value


def _resolve_dict(d: dict) -> dict:
    """Recursively resolve environment variables in a dict."""
    return {k: _resolve_value(v) for k, v in d.items()}


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge override dict into base dict (override wins)."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return _resolve_dict(raw)


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from YAML config file(s) with environment variable overrides.

    Configuration layering (later layers override earlier ones):
      1. config.yaml          — defaults for the working directory
      2. config.local.yaml    — developer machine overrides (deep merged)
      3. Environment variables — highest priority (pydantic-settings)

    PINYIN_SEARCH_CONFIG_PATH or an explicit ``config_path`` replaces
    steps 1-2 with a single file.

    Args:
        config_path: Path to the YAML config file. If None, auto-detects.

    Returns:
        Fully resolved Settings instance.
    """
    if config_path is not None:
        yaml_data = _read_yaml(Path(config_path))
    else:
        env_path = os.environ.get("PINYIN_SEARCH_CONFIG_PATH")
        if env_path:
            yaml_data = _read_yaml(Path(env_path))
        else:
            yaml_data = _read_yaml(Path("config.yaml"))
            local_data = _read_yaml(Path("config.local.yaml"))
            if local_data:
                yaml_data = _deep_merge(yaml_data, local_data)

    # Environment variable overrides (e.g. PINYIN_SEARCH_CACHE__ENABLED)
    # are handled by pydantic-settings automatically
    return Settings(**yaml_data)


# Global settings singleton (lazy initialization)
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings singleton."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings singleton. Useful for testing."""
    global _settings
    _settings = None
