"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


def _check_range(name: str, value: float, low: float, high: float) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")


@dataclass(frozen=True)
class LLMConfig:
    model: str = "gemini-1.5-flash"
    base_url: str = DEFAULT_BASE_URL
    api_key_env: str = "GEMINI_API_KEY"
    timeout: float = 60
    max_attempts: int = 1
    temperature: float = 0.2
    max_output_tokens: int = 8192

    def __post_init__(self):
        _check_range("timeout", self.timeout, 1, 600)
        _check_range("max_attempts", self.max_attempts, 1, 10)
        _check_range("temperature", self.temperature, 0.0, 2.0)
        _check_range("max_output_tokens", self.max_output_tokens, 1, 65536)

    @property
    def api_key(self) -> str | None:
        return os.environ.get(self.api_key_env)


@dataclass(frozen=True)
class StorageConfig:
    db_path: str = "~/.recruitmaxxing/state.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidate = Path.cwd() / "config.yaml"
        if candidate.exists():
            path = candidate

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        storage=StorageConfig(**raw.get("storage", {})),
    )
