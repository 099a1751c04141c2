"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


def _check_range(name: str, value: int, low: int, high: int | None = None) -> None:
    if value < low or (high is not None and value > high):
        bound = f"{low}-{high}" if high is not None else f">= {low}"
        raise ValueError(f"{name} must be {bound}, got {value}")


@dataclass(frozen=True)
class WebflowConfig:
    api_base: str = "https://api.webflow.com/v2"
    content_field: str = "post-body"
    timeout: int = 30

    def __post_init__(self) -> None:
        _check_range("timeout", self.timeout, 1, 600)
        if not self.api_base.startswith(("http://", "https://")):
            raise ValueError(f"api_base must be an http(s) URL, got {self.api_base!r}")


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-sonnet-4-5-20250929"
    timeout: int = 120
    max_tokens: int = 8192

    def __post_init__(self) -> None:
        _check_range("timeout", self.timeout, 1, 600)
        _check_range("max_tokens", self.max_tokens, 1)


@dataclass(frozen=True)
class EditorConfig:
    preview_length: int = 200
    output_dir: str = "./output"

    def __post_init__(self) -> None:
        _check_range("preview_length", self.preview_length, 1)

    @property
    def resolved_output_dir(self) -> Path:
        return Path(self.output_dir).expanduser()


@dataclass(frozen=True)
class CredentialsConfig:
    db_path: str = "~/.blog-fact-checker/credentials.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class AppConfig:
    webflow: WebflowConfig = field(default_factory=WebflowConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)
    credentials: CredentialsConfig = field(default_factory=CredentialsConfig)


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
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        webflow=WebflowConfig(**raw.get("webflow", {})),
        llm=LLMConfig(**raw.get("llm", {})),
        editor=EditorConfig(**raw.get("editor", {})),
        credentials=CredentialsConfig(**raw.get("credentials", {})),
    )
