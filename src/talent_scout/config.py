"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from talent_scout.errors import ConfigurationError

API_KEY_ENV = "ANTHROPIC_API_KEY"
PEOPLE_SEARCH_URL = "https://www.linkedin.com/search/results/people/?keywords="


def _check_range(name: str, value: float, low: float, high: float) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-sonnet-4-5-20250929"
    timeout: int = 60
    max_retries: int = 0
    max_tokens: int = 8192

    def __post_init__(self) -> None:
        _check_range("timeout", self.timeout, 1, 600)
        _check_range("max_retries", self.max_retries, 0, 5)
        _check_range("max_tokens", self.max_tokens, 256, 64000)


@dataclass(frozen=True)
class SourcingConfig:
    candidate_count: int = 6
    delay_seconds: float = 4.5
    search_base_url: str = PEOPLE_SEARCH_URL

    def __post_init__(self) -> None:
        _check_range("candidate_count", self.candidate_count, 1, 20)
        _check_range("delay_seconds", self.delay_seconds, 0, 30)


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    sourcing: SourcingConfig = field(default_factory=SourcingConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        sourcing=SourcingConfig(**raw.get("sourcing", {})),
    )


def resolve_api_key(api_key: str | None = None) -> str:
    """Return the explicit key or the one from the environment.

    Raises ConfigurationError when neither is set. Called lazily at request
    time so the app can start without a key.
    """
    key = api_key or os.environ.get(API_KEY_ENV)
    if not key:
        raise ConfigurationError(
            f"Anthropic API key required. Set {API_KEY_ENV} env var or pass api_key."
        )
    return key
