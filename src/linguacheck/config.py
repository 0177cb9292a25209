"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


def _check_range(name: str, value: float, low: float, high: float | None = None) -> None:
    if value < low or (high is not None and value > high):
        bound = f">= {low}" if high is None else f"between {low} and {high}"
        raise ValueError(f"{name} must be {bound}, got {value!r}")


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-haiku-4-5-20251001"
    max_retries: int = 3
    timeout: int = 60
    max_tokens: int = 4096

    def __post_init__(self) -> None:
        _check_range("timeout", self.timeout, 1)
        _check_range("max_retries", self.max_retries, 1, 10)
        _check_range("max_tokens", self.max_tokens, 256)


@dataclass(frozen=True)
class SuggestionConfig:
    min_words: int = 5
    quiet_period_seconds: float = 1.5

    def __post_init__(self) -> None:
        _check_range("min_words", self.min_words, 1)
        if not 0 < self.quiet_period_seconds <= 30:
            raise ValueError(
                f"quiet_period_seconds must be in (0, 30], got {self.quiet_period_seconds!r}"
            )


@dataclass(frozen=True)
class DocumentConfig:
    max_upload_mb: int = 10

    def __post_init__(self) -> None:
        _check_range("max_upload_mb", self.max_upload_mb, 1, 50)

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


@dataclass(frozen=True)
class CacheConfig:
    enabled: bool = True
    ttl_days: int = 7
    db_path: str = "~/.linguacheck/cache.db"

    def __post_init__(self) -> None:
        _check_range("ttl_days", self.ttl_days, 1, 365)

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class UsageConfig:
    enabled: bool = True
    db_path: str = "~/.linguacheck/usage.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    suggestions: SuggestionConfig = field(default_factory=SuggestionConfig)
    document: DocumentConfig = field(default_factory=DocumentConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    usage: UsageConfig = field(default_factory=UsageConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults.

    Raises ValueError when a configured value is out of range.
    """
    if path is None:
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
            raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        suggestions=SuggestionConfig(**raw.get("suggestions", {})),
        document=DocumentConfig(**raw.get("document", {})),
        cache=CacheConfig(**raw.get("cache", {})),
        usage=UsageConfig(**raw.get("usage", {})),
    )
