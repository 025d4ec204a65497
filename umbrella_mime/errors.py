"""Exceptions raised while decoding MIME content."""

from __future__ import annotations

from enum import Enum


class MimeErrorKind(str, Enum):
    """Machine-readable category of a decode failure."""

    INVALID_UTF8 = "invalid_utf8"
    NO_HEADERS = "no_headers"


class MimeError(Exception):
    """Base exception for MIME decoding errors."""

    kind: MimeErrorKind
    default_message = "MIME decoding failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidUTF8Error(MimeError):
    """Raised when input bytes cannot be decoded as UTF-8."""

    kind = MimeErrorKind.INVALID_UTF8
    default_message = "Data cannot be decoded as UTF-8"


class NoHeadersError(MimeError):
    """Raised when the top-level header block has no ``key: value`` lines."""

    kind = MimeErrorKind.NO_HEADERS
    default_message = "MIME message has no headers"
