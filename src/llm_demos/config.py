"""Configuration models for the demo flows."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

_DEFAULT_RESOURCES_DIR = Path(__file__).resolve().parent / "resources"


class MetadataConfig(BaseModel):
    """Fixed metadata stamped on every record loaded from one file."""

    model_config = ConfigDict(frozen=True)

    author: str = Field(min_length=1)
    category: str = Field(min_length=1)
    doctype: str = Field(default="text", min_length=1)
    year: str = Field(default="2025", pattern=r"^\d{4}$")

    @field_validator("author", "category", "doctype")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def as_metadata(self) -> dict[str, str]:
        return {
            "author": self.author,
            "doctype": self.doctype,
            "category": self.category,
            "year": self.year,
        }


class SearchConfig(BaseModel):
    """Configures the interactive filtered-search loop."""

    min_score: float = Field(default=0.6, ge=0.0, le=1.0)
    max_results: int = Field(default=3, ge=1)
    filter_key: str = Field(default="author", min_length=1)
    exit_keywords: frozenset[str] = Field(
        default=frozenset({"exit", "quit", "bye"})
    )
    query_prompt: str = "String> "
    filter_prompt: str = "filter> "

    @field_validator("exit_keywords")
    @classmethod
    def _lowercase_keywords(cls, value: frozenset[str]) -> frozenset[str]:
        return frozenset(keyword.lower() for keyword in value)


class ChatConfig(BaseModel):
    """Configures the hosted streaming chat model."""

    model: str = Field(default="gpt-4o-mini", min_length=1)
    timeout_seconds: float = Field(default=60.0, gt=0.0)
    completion_marker: str = "Complete!"


class DemoSettings(BaseModel):
    """Process-level settings resolved from the environment."""

    openai_api_key: str | None = None
    chat_model: str = "gpt-4o-mini"
    embedding_model: str = "text-embedding-3-small"
    resources_dir: Path = _DEFAULT_RESOURCES_DIR
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "DemoSettings":
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            chat_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            embedding_model=os.getenv("OPENAI_EMBEDDING_MODEL", "text-embedding-3-small"),
            resources_dir=Path(
                os.getenv("LLM_DEMOS_RESOURCES_DIR", str(_DEFAULT_RESOURCES_DIR))
            ),
            log_level=os.getenv("LLM_DEMOS_LOG_LEVEL", "WARNING").upper(),
        )

    def chat_config(self, **overrides: object) -> ChatConfig:
        return ChatConfig.model_validate({"model": self.chat_model, **overrides})
