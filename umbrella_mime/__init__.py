"""Umbrella MIME: recursive MIME decoder/encoder with an order-preserving header model.

Public API re-exported here for convenience::

    from umbrella_mime import decode, encode, Message, Leaf, Container
"""

from .attributes import HeaderAttributes
from .config import DecoderConfig, EncoderConfig, LoggingConfig, MimeConfig
from .decoder import MimeDecoder, decode
from .encoder import MimeEncoder, encode
from .errors import InvalidUTF8Error, MimeError, MimeErrorKind, NoHeadersError
from .headers import HeaderCollection, HeaderEntry
from .logging import setup_logging
from .part import Container, Leaf, Message, Part
from .validator import (
    HeaderExpectation,
    MimeValidator,
    ValidationIssue,
    ValidationIssueKind,
    ValidationResult,
)

__all__ = [
    "Container",
    "DecoderConfig",
    "EncoderConfig",
    "HeaderAttributes",
    "HeaderCollection",
    "HeaderEntry",
    "HeaderExpectation",
    "InvalidUTF8Error",
    "Leaf",
    "LoggingConfig",
    "Message",
    "MimeConfig",
    "MimeDecoder",
    "MimeEncoder",
    "MimeError",
    "MimeErrorKind",
    "MimeValidator",
    "NoHeadersError",
    "Part",
    "ValidationIssue",
    "ValidationIssueKind",
    "ValidationResult",
    "decode",
    "encode",
    "setup_logging",
]
