"""Decoder, encoder and logging configuration loaded from environment variables.

Uses pydantic-settings so every field can be overridden via env vars.
"""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

_LINE_ENDINGS = {"lf": "\n", "crlf": "\r\n"}


class DecoderConfig(BaseSettings):
    """How multipart bodies are split into sections."""

    model_config = {"env_prefix": "MIME_DECODER_"}

    anchor_boundaries: bool = Field(
        default=False,
        description=(
            "Only treat whole '--boundary' / '--boundary--' lines as delimiters "
            "instead of splitting on the delimiter text anywhere in the body"
        ),
    )


class EncoderConfig(BaseSettings):
    """Output formatting for the encoder."""

    model_config = {"env_prefix": "MIME_ENCODER_"}

    newline: Literal["lf", "crlf"] = Field(
        default="lf",
        description="Line break written after headers, delimiters and bodies",
    )

    @property
    def line_ending(self) -> str:
        return _LINE_ENDINGS[self.newline]


class LoggingConfig(BaseSettings):
    """structlog output settings."""

    model_config = {"env_prefix": "MIME_LOG_"}

    renderer: Literal["json", "console"] = Field(
        default="json",
        description="JSON lines for machines, colourised console output for humans",
    )
    level: str = Field(default="INFO", description="Root log level name")

    @field_validator("level")
    @classmethod
    def normalise_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level


class MimeConfig(BaseSettings):
    """Root configuration; nested configs read their own env-var prefixes."""

    model_config = {"env_prefix": "MIME_"}

    decoder: DecoderConfig = Field(default_factory=DecoderConfig)
    encoder: EncoderConfig = Field(default_factory=EncoderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
