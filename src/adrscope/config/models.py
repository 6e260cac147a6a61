"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ``adrscope.toml`` only contains
overrides.  An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from adrscope.domain.frontmatter import FIELD_NAMES
from adrscope.domain.validation import DEFAULT_RECOMMENDED_FIELDS, DEFAULT_REQUIRED_FIELDS

Theme = Literal["auto", "light", "dark"]
StatsFormat = Literal["text", "json", "markdown"]

DEFAULT_INPUT_DIR = "docs/decisions"
DEFAULT_PATTERN = "**/*.md"


class GenerateConfig(BaseModel):
    """[generate] section."""

    model_config = {"frozen": True}

    input_dir: str = DEFAULT_INPUT_DIR
    pattern: str = DEFAULT_PATTERN
    output: str = "adrs.html"
    title: str = "Architecture Decision Records"
    theme: Theme = "auto"


class WikiConfig(BaseModel):
    """[wiki] section."""

    model_config = {"frozen": True}

    output_dir: str = "wiki"
    pages_url: str | None = None


class ValidateConfig(BaseModel):
    """[validation] section."""

    model_config = {"frozen": True}

    strict: bool = False
    required_fields: list[str] = Field(default_factory=lambda: list(DEFAULT_REQUIRED_FIELDS))
    recommended_fields: list[str] = Field(
        default_factory=lambda: list(DEFAULT_RECOMMENDED_FIELDS)
    )
    check_relationships: bool = False

    @field_validator("required_fields", "recommended_fields")
    @classmethod
    def _known_fields(cls, value: list[str]) -> list[str]:
        unknown = [name for name in value if name not in FIELD_NAMES]
        if unknown:
            raise ValueError(
                f"unknown frontmatter field(s) {', '.join(unknown)}; "
                f"expected one of: {', '.join(FIELD_NAMES)}"
            )
        return value


class StatsConfig(BaseModel):
    """[stats] section."""

    model_config = {"frozen": True}

    format: StatsFormat = "text"
