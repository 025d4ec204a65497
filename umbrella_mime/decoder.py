"""Recursive-descent MIME decoder: raw bytes or text → :class:`Message`.

Each level works on a plain string: split off the header block, look for a
``boundary`` parameter on its Content-Type, and either keep the rest as an
opaque leaf body or split it into sections and recurse. No parser state is
carried between levels.
"""

from __future__ import annotations

import re

from .attributes import HeaderAttributes
from .config import DecoderConfig
from .constants import CONTENT_TYPE
from .errors import InvalidUTF8Error, MimeError, NoHeadersError
from .headers import HeaderCollection
from .logging import get_logger
from .part import Container, Leaf, Message, Part

logger = get_logger(__name__)

# Line breaks recognised when splitting text. Unlike str.splitlines, the
# \x1c-\x1e separators stay part of the line.
_LINE_BREAK = re.compile(r"\r\n|[\n\r\x0b\x0c\x85\u2028\u2029]")


def _lines(text: str) -> list[str]:
    """Split *text* into lines, without an empty entry after a final break."""
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def _is_blank(line: str) -> bool:
    return not line.strip()


def _split_head(lines: list[str], *, skip_leading_blank: bool = False) -> tuple[list[str], list[str]]:
    """Split *lines* at the first blank line into (header lines, body lines)."""
    index = 0
    if skip_leading_blank:
        while index < len(lines) and _is_blank(lines[index]):
            index += 1

    start = index
    while index < len(lines):
        if _is_blank(lines[index]):
            return lines[start:index], lines[index + 1 :]
        index += 1
    return lines[start:], []


def parse_headers(lines: list[str]) -> HeaderCollection:
    """Unfold header lines into a collection, keeping order and duplicates.

    Lines starting with whitespace continue the previous header. A line
    with no colon (or an empty name) closes the previous header and is
    dropped.
    """
    headers = HeaderCollection()
    key: str | None = None
    value = ""

    for line in lines:
        if line[:1].isspace():
            value += " " + line.strip()
            continue

        if key is not None:
            headers.add(key, value.strip())

        name, sep, rest = line.partition(":")
        if sep and name.strip():
            key, value = name.strip(), rest
        else:
            logger.debug("header_line_dropped", line=line)
            key, value = None, ""

    if key is not None:
        headers.add(key, value.strip())

    return headers


def _boundary_of(headers: HeaderCollection) -> str | None:
    content_type = headers.get(CONTENT_TYPE)
    boundary = HeaderAttributes.parse(content_type).get("boundary")
    if not boundary:
        if content_type and content_type.strip().lower().startswith("multipart/"):
            logger.warning("multipart_without_boundary", content_type=content_type)
        return None
    return boundary


class MimeDecoder:
    """Stateless decoder; safe to share between threads.

    With ``DecoderConfig.anchor_boundaries`` disabled (the default) a body
    is split wherever the text ``--boundary`` occurs, and the text before
    the first delimiter is a candidate section like any other. When
    enabled, only whole delimiter lines count, and both the preamble and
    the epilogue after the closing delimiter are ignored.
    """

    def __init__(self, config: DecoderConfig | None = None) -> None:
        self._config = config or DecoderConfig()

    def decode(self, data: bytes | bytearray | memoryview | str) -> Message:
        """Decode a complete message.

        Raises:
            InvalidUTF8Error: *data* is bytes that are not valid UTF-8.
            NoHeadersError: the top-level header block is empty.
        """
        try:
            text = self._to_text(data)
            message = self._decode_text(text)
        except MimeError as exc:
            logger.warning("mime_decode_failed", kind=exc.kind.value, error=str(exc))
            raise

        logger.debug(
            "mime_decoded",
            root_parts=len(message.parts),
            multipart=message.is_multipart,
        )
        return message

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _to_text(data: bytes | bytearray | memoryview | str) -> str:
        if isinstance(data, str):
            return data
        try:
            return bytes(data).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidUTF8Error() from exc

    def _decode_text(self, text: str) -> Message:
        header_lines, body_lines = _split_head(_lines(text))
        headers = parse_headers(header_lines)
        if not headers:
            raise NoHeadersError()

        body = "\n".join(body_lines)
        boundary = _boundary_of(headers)
        if boundary is None:
            return Message((Leaf(headers, body),))

        envelope = Leaf(headers, "")
        return Message((envelope, *self._parse_sections(body, boundary)))

    def _parse_sections(self, body: str, boundary: str) -> list[Part]:
        parts: list[Part] = []
        for section in self._split_sections(body, boundary):
            trimmed = section.strip()
            if not trimmed or trimmed.startswith("--"):
                continue
            parts.append(self._parse_section(section))
        return parts

    def _split_sections(self, body: str, boundary: str) -> list[str]:
        """Cut *body* at its delimiters into candidate sections."""
        delimiter = "--" + boundary
        if not self._config.anchor_boundaries:
            return body.split(delimiter)

        closing = delimiter + "--"
        sections: list[str] = []
        current: list[str] | None = None
        for line in _lines(body):
            marker = line.rstrip()
            if marker == closing:
                break
            if marker == delimiter:
                if current is not None:
                    sections.append("\n".join(current))
                current = []
            elif current is not None:
                current.append(line)

        if current is not None:
            sections.append("\n".join(current))
        return sections

    def _parse_section(self, section: str) -> Part:
        header_lines, body_lines = _split_head(_lines(section), skip_leading_blank=True)
        headers = parse_headers(header_lines)

        boundary = _boundary_of(headers)
        if boundary is not None:
            children = self._parse_sections("\n".join(body_lines), boundary)
            return Container(headers, tuple(children))

        while body_lines and (_is_blank(body_lines[-1]) or body_lines[-1].strip().startswith("--")):
            body_lines.pop()
        return Leaf(headers, "\n".join(body_lines))


_default_decoder = MimeDecoder()


def decode(data: bytes | bytearray | memoryview | str) -> Message:
    """Decode *data* with the default configuration."""
    return _default_decoder.decode(data)
