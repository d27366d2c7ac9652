"""
Configuration management for readpeace using Pydantic.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)


class ReadabilityConfig(BaseModel):
    """Knobs for the extraction pipeline."""

    light_clean: bool = Field(
        default=True,
        description="Use the lenient conditional-cleaning rules, preserving more borderline content.",
    )
    revert_forced_paragraphs: bool = Field(
        default=True,
        description="Turn paragraphs synthesized around loose div text back into plain text after cleaning.",
    )
    convert_links_to_footnotes: bool = Field(
        default=False, description="Rewrite inline links of the extracted content into numbered references."
    )
    footnote_url_pattern: str | None = Field(
        default=None,
        description="Only add footnotes when the source URL matches this pattern. None applies to every URL.",
    )
    debug: bool = Field(default=False, description="Emit a verbose diagnostic trace while extracting.")
    parser: Literal["lxml", "html.parser"] = Field(
        default="lxml", description="BeautifulSoup tree builder used for whole documents."
    )
    min_paragraph_length: int = Field(default=25, ge=0, description="Paragraphs shorter than this are not scored.")
    retry_length: int = Field(
        default=250, ge=0, description="Content shorter than this triggers a retry with looser heuristics."
    )

    @field_validator("footnote_url_pattern")
    @classmethod
    def validate_pattern(cls, v: str | None) -> str | None:
        """Reject patterns that would fail at extraction time."""
        if v is None:
            return v
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"footnote_url_pattern is not a valid regular expression: {e}") from e
        return v


class MonitoringConfig(BaseModel):
    """Configuration for logging output."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(default=None, description="Path to log file. If None, logs to the console.")
    json_logs: bool = Field(default=False, description="Render console logs as JSON instead of coloured text.")

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    readability: ReadabilityConfig = Field(default_factory=ReadabilityConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="READPEACE_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    for name in ("readpeace.yaml", "readpeace.yml"):
        path = current_dir / name
        if path.is_file():
            return path
    return None
