"""Configuration loading for staticdoc.

A single optional YAML file (staticdoc.yaml) controls template lookup and
markdown conversion. Every section is optional; an absent file means defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError

CONFIG_FILENAME = "staticdoc.yaml"

# Plugin names understood by mistune.create_markdown()
MARKDOWN_PLUGINS = {
    "abbr",
    "def_list",
    "footnotes",
    "insert",
    "mark",
    "math",
    "ruby",
    "spoiler",
    "strikethrough",
    "subscript",
    "superscript",
    "table",
    "task_lists",
    "url",
}


class MarkdownConfig(BaseModel):
    """Configuration for converting documentation comments to HTML."""

    plugins: list[str] = Field(default_factory=lambda: ["strikethrough", "table"])
    escape: bool = False  # Escape raw HTML instead of passing it through
    hard_wrap: bool = False

    @field_validator("plugins")
    @classmethod
    def check_plugins(cls, v: list[str]) -> list[str]:
        """Reject plugin names mistune does not ship."""
        unknown = [name for name in v if name not in MARKDOWN_PLUGINS]
        if unknown:
            raise ValueError(
                f"Unknown markdown plugin(s): {', '.join(unknown)}. "
                f"Valid plugins are: {', '.join(sorted(MARKDOWN_PLUGINS))}"
            )
        return v


class TemplateConfig(BaseModel):
    """Configuration for page templates."""

    directory: Path | None = None  # None = bundled templates


class StaticdocConfig(BaseModel):
    """Top-level staticdoc configuration."""

    templates: TemplateConfig = Field(default_factory=TemplateConfig)
    markdown: MarkdownConfig = Field(default_factory=MarkdownConfig)


def load_config(config_path: Path | str) -> StaticdocConfig:
    """Load configuration from a YAML file.

    A relative template directory is resolved against the config file's location.

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValidationError(f"Failed to parse config YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError("Config must contain a mapping at the root level")

    try:
        config = StaticdocConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid config: {e}") from e

    directory = config.templates.directory
    if directory is not None and not directory.is_absolute():
        config.templates.directory = config_path.parent / directory

    return config


def discover_config(
    document_path: Path | str,
    config_path: Path | None = None,
) -> StaticdocConfig:
    """Discover configuration from the usual locations.

    Search order:
    1. Explicit config_path argument
    2. Document directory / staticdoc.yaml
    3. Current directory / staticdoc.yaml

    Falls back to the defaults when nothing is found.
    """
    if config_path is not None:
        return load_config(config_path)

    dir_config = Path(document_path).parent / CONFIG_FILENAME
    if dir_config.exists():
        return load_config(dir_config)

    cwd_config = Path(CONFIG_FILENAME)
    if cwd_config.exists():
        return load_config(cwd_config)

    return StaticdocConfig()
