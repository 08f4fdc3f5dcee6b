"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    site_name:     str = "mdsite"
    content_dir:   str = Field(default="content", description="Root directory of markdown sources")
    output_dir:    str = Field(default="_site",   description="Directory for rendered HTML")
    static_dir:    str = Field(default="static",  description="Static assets copied verbatim when present")
    parser_config: str = Field(default="commonmark", pattern="^(commonmark|gfm-like|default|zero)$", description="MarkdownIt parser preset name")
    toc_depth:     int = Field(default=3, ge=0, le=6, description="Deepest heading listed in the page TOC; 0 disables")
    workers:       int = Field(default=1, ge=1, le=32, description="Documents processed in parallel")
    log_level:     str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDSITE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDSITE_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
