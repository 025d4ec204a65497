"""MIME encoder: the structural inverse of :mod:`umbrella_mime.decoder`.

Encoding never fails. Output is normalised (folded headers come out on one
line, blank lines around sections collapse), so ``decode(encode(m))``
reproduces the tree of ``m`` rather than the original bytes.
"""

from __future__ import annotations


from .config import EncoderConfig
from .headers import HeaderCollection
from .logging import get_logger
from .part import Container, Message, Part

logger = get_logger(__name__)


class MimeEncoder:
    """Serialise messages and parts; stateless apart from its config."""

    def __init__(self, config: EncoderConfig | None = None) -> None:
        self._config = config or EncoderConfig()
        self._nl = self._config.line_ending

    def encode(self, item: Message | Part) -> bytes:
        """Encode a message or a single part as UTF-8 bytes."""
        data = self.encode_text(item).encode("utf-8")
        logger.debug("mime_encoded", size=len(data))
        return data

    def encode_text(self, item: Message | Part) -> str:
        if isinstance(item, Message):
            return self._encode_message(item)
        return self._encode_part(item)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _encode_message(self, message: Message) -> str:
        envelope, *sections = message.parts
        if not sections:
            return self._encode_part(envelope)

        boundary = envelope.boundary
        if boundary is None:
            logger.warning("container_without_boundary", part_id=str(envelope.id))
            return self._encode_part(envelope)

        return self._encode_headers(envelope.headers) + self._encode_sections(sections, boundary)

    def _encode_part(self, part: Part) -> str:
        out = self._encode_headers(part.headers)
        if isinstance(part, Container):
            boundary = part.boundary
            if boundary is None:
                logger.warning("container_without_boundary", part_id=str(part.id))
                return out
            return out + self._encode_sections(part.children, boundary)

        return out + self._nl.join(part.body.split("\n")) + self._nl

    def _encode_headers(self, headers: HeaderCollection) -> str:
        lines = [f"{key}: {value}{self._nl}" for key, value in headers]
        return "".join(lines) + self._nl

    def _encode_sections(self, parts: list[Part] | tuple[Part, ...], boundary: str) -> str:
        delimiter = f"--{boundary}{self._nl}"
        chunks = [delimiter + self._encode_part(part) for part in parts]
        return "".join(chunks) + f"--{boundary}--{self._nl}"


_default_encoder = MimeEncoder()


def encode(item: Message | Part) -> bytes:
    """Encode *item* with the default configuration."""
    return _default_encoder.encode(item)
