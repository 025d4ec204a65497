"""Entry point for the MIME package.

Usage::

    python -m umbrella_mime outline [PATH]     # print the part tree
    python -m umbrella_mime normalize [PATH]   # decode + re-encode to stdout
    python -m umbrella_mime validate [PATH]    # check against default expectations

Input is read from PATH, or from stdin when PATH is omitted.
"""

from __future__ import annotations

import sys
from pathlib import Path

from .config import LoggingConfig, MimeConfig
from .decoder import MimeDecoder
from .encoder import MimeEncoder
from .errors import MimeError
from .logging import setup_logging
from .part import Message, Part
from .validator import MimeValidator

USAGE = "Usage: python -m umbrella_mime <outline|normalize|validate> [PATH]"
MODES = ("outline", "normalize", "validate")


def _read_input(path: str | None) -> bytes:
    if path is None:
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def _outline_lines(part: Part, depth: int = 0) -> list[str]:
    indent = "  " * depth
    label = part.content_type or "(no content type)"
    if part.is_container:
        lines = [f"{indent}{label} [{len(part.children)} part(s)]"]
        for child in part.children:
            lines += _outline_lines(child, depth + 1)
        return lines
    return [f"{indent}{label} ({len(part.body.encode('utf-8'))} bytes)"]


def outline(message: Message) -> str:
    """Indented one-line-per-part rendering of *message*."""
    if len(message.parts) == 1:
        return "\n".join(_outline_lines(message.parts[0]))

    envelope, *sections = message.parts
    label = envelope.content_type or "(no content type)"
    lines = [f"{label} [{len(sections)} part(s)]"]
    for section in sections:
        lines += _outline_lines(section, 1)
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if not args or args[0] not in MODES or len(args) > 2:
        print(USAGE, file=sys.stderr)
        return 1

    mode = args[0]
    path = args[1] if len(args) == 2 else None

    config = MimeConfig()
    setup_logging(LoggingConfig(renderer="console", level=config.logging.level))

    try:
        message = MimeDecoder(config.decoder).decode(_read_input(path))
    except MimeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if mode == "outline":
        print(outline(message))
    elif mode == "normalize":
        sys.stdout.buffer.write(MimeEncoder(config.encoder).encode(message))
        sys.stdout.flush()
    else:
        result = MimeValidator.with_defaults().validate(message)
        print(result)
        return 0 if result.is_valid else 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
