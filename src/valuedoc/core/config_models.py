"""
Pydantic configuration models for valuedoc.

This module provides Pydantic BaseModel classes for configuration validation,
type checking, and automatic serialization/deserialization.
"""

import logging
import re
from typing import Optional, Tuple

import yaml
from pydantic import BaseModel, Field, field_validator

from .config import (
    DEFAULT_FOOTER_PATTERN,
    DEFAULT_HEADER_PATTERN,
    DEFAULT_INPUT,
    DEFAULT_TEMPLATE,
)

logger = logging.getLogger(__name__)


class LoggingConfigModel(BaseModel):
    """Logging configuration model."""

    verbose: bool = Field(default=False, description="Enable debug logging")
    log_file: Optional[str] = Field(default=None, description="Optional log file path")


class GenerateConfigModel(BaseModel):
    """Configuration of the ``generate`` command."""

    input: str = Field(default=DEFAULT_INPUT, description="Annotated values file")
    output: Optional[str] = Field(
        default=None,
        description="File to inject the documentation into; printed when unset",
    )
    template: str = Field(
        default=DEFAULT_TEMPLATE,
        description="Template file or name of a built-in template",
    )
    header_pattern: str = Field(
        default=DEFAULT_HEADER_PATTERN,
        description="Regex marking the start of the generated block",
    )
    footer_pattern: str = Field(
        default=DEFAULT_FOOTER_PATTERN,
        description="Regex marking the end of the generated block",
    )
    logging: LoggingConfigModel = Field(default_factory=LoggingConfigModel)

    @field_validator("header_pattern", "footer_pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Validate that marker patterns are valid regular expressions."""
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid regular expression {v!r}: {e}") from e
        return v

    @field_validator("input", "template")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Value must not be empty")
        return v

    def compile_patterns(self) -> Tuple["re.Pattern[str]", "re.Pattern[str]"]:
        """Compile the header and footer patterns (``^``/``$`` match per line)."""
        return (
            re.compile(self.header_pattern, re.MULTILINE),
            re.compile(self.footer_pattern, re.MULTILINE),
        )

    def to_yaml(self, path: str) -> None:
        """Save configuration to YAML file."""
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False, sort_keys=False)
