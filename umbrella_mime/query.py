"""Convenience lookups over a decoded tree.

All helpers walk the whole tree depth-first, envelope and containers
included.
"""

from __future__ import annotations

from .constants import CONTENT_DISPOSITION, CONTENT_TYPE
from .part import Container, Message, Part


def parts_with_content_type(message: Message, content_type: str) -> list[Part]:
    """Parts whose Content-Type primary value equals *content_type* (any case)."""
    return message.all_parts(CONTENT_TYPE, content_type)


def first_part_with_content_type(message: Message, content_type: str) -> Part | None:
    return message.first_part(CONTENT_TYPE, content_type)


def has_part_with_content_type(message: Message, content_type: str) -> bool:
    return first_part_with_content_type(message, content_type) is not None


def parts_with_content_disposition_name(message: Message, name: str) -> list[Part]:
    """Parts whose Content-Disposition ``name`` parameter is exactly *name*.

    ``filename`` is not consulted.
    """
    return message.all_parts(CONTENT_DISPOSITION, name, attribute="name")


def first_part_with_content_disposition_name(message: Message, name: str) -> Part | None:
    return message.first_part(CONTENT_DISPOSITION, name, attribute="name")


def leaf_parts(message: Message) -> list[Part]:
    """Every leaf of the tree except the envelope of a multipart message."""
    parts = message.walk()
    if len(message.parts) > 1:
        next(parts)
    return [part for part in parts if not isinstance(part, Container)]
