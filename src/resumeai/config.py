"""Configuration models for the resume builder."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class GenerationSettings(BaseModel):
    """Settings for the hosted language model calls."""

    api_url: str = "https://api.anthropic.com/v1/messages"
    api_version: str = "2023-06-01"
    model: str = "claude-sonnet-4-20250514"
    resume_max_tokens: int = Field(4000, ge=1)
    section_max_tokens: int = Field(800, ge=1)
    cover_letter_max_tokens: int = Field(1200, ge=1)
    timeout_seconds: float = Field(45.0, gt=0.0)

    @field_validator("api_url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("api_url must be an http(s) URL")
        return value


class DraftSettings(BaseModel):
    """Where the in-progress form is cached between runs."""

    enabled: bool = True
    path: Path = Field(
        default_factory=lambda: Path("~/.resumeai/draft.json").expanduser(),
        description="JSON file holding the saved form draft",
    )

    @field_validator("path")
    @classmethod
    def _expand(cls, value: Path) -> Path:
        return value.expanduser()


class AppConfig(BaseModel):
    """Top level configuration."""

    generation: GenerationSettings = Field(default_factory=GenerationSettings)
    drafts: DraftSettings = Field(default_factory=DraftSettings)
    log_dir: Optional[Path] = Field(None, description="Directory for the session log file")

    @classmethod
    def from_file(cls, path: Path) -> "AppConfig":
        """Load configuration from a JSON or YAML file.

        A relative ``drafts.path`` is taken relative to the config file, so a
        project can keep its draft next to its settings.
        """
        path = path.expanduser()
        config = cls.model_validate(_read_mapping(path))
        draft_path = config.drafts.path
        if not draft_path.is_absolute():
            drafts = config.drafts.model_copy(update={"path": path.parent / draft_path})
            config = config.model_copy(update={"drafts": drafts})
        return config


def _read_mapping(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(path)
    content = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("YAML config needs the optional 'pyyaml' dependency") from exc
        data = yaml.safe_load(content)
    else:
        import json

        data = json.loads(content)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return data
