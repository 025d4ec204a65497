"""The MIME tree: leaf and container parts, and the root-level message.

A part is either a :class:`Leaf` (opaque body text) or a :class:`Container`
(ordered child parts); both carry their own :class:`HeaderCollection`.
Parts are frozen dataclasses: every edit returns a new part, and each part
holds a private copy of the headers it was built from, so two trees never
share a collection.

``==`` compares content only. The ``id`` token is stable for the lifetime
of a part object and is excluded from comparison. Parts hold mutable
header collections, so they are unhashable.
"""

from __future__ import annotations

import dataclasses
import email.utils
import uuid
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Union

from .attributes import HeaderAttributes
from .constants import CONTENT_TYPE, DATE, MIME_VERSION
from .headers import HeaderCollection

HeadersLike = Union[HeaderCollection, Mapping[str, str], Iterable[tuple[str, str]], None]


def _owned_headers(headers: HeadersLike) -> HeaderCollection:
    return HeaderCollection(headers)


def _parse_date(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return email.utils.parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None


class _PartMixin:
    """Header-derived accessors and traversal shared by both part kinds."""

    headers: HeaderCollection

    def header_attributes(self, name: str) -> HeaderAttributes:
        """Parse header *name* into its primary value and parameters."""
        return HeaderAttributes.parse(self.headers.get(name))

    @property
    def content_type(self) -> str | None:
        if not self.headers.contains(CONTENT_TYPE):
            return None
        return self.header_attributes(CONTENT_TYPE).value

    @property
    def charset(self) -> str | None:
        return self.header_attributes(CONTENT_TYPE).get("charset")

    @property
    def boundary(self) -> str | None:
        return self.header_attributes(CONTENT_TYPE).get("boundary") or None

    @property
    def date(self) -> datetime | None:
        return _parse_date(self.headers.get(DATE))

    def walk(self) -> Iterator[Part]:
        """Yield this part, then every descendant, depth-first."""
        yield self  # type: ignore[misc]
        for child in self.children:  # type: ignore[attr-defined]
            yield from child.walk()

    def matches(
        self,
        header: str,
        value: str,
        *,
        attribute: str | None = None,
    ) -> bool:
        """Whether this part's *header* matches *value*.

        Without *attribute*, the header's primary value is compared to
        *value* case-insensitively (``text/html; charset=utf-8`` matches
        ``text/html``). With *attribute*, that parameter of the header is
        compared exactly.
        """
        if not self.headers.contains(header):
            return False
        parsed = self.header_attributes(header)
        if attribute is None:
            return parsed.value.lower() == value.lower()
        return parsed.get(attribute) == value

    def first_part(
        self,
        header: str,
        value: str,
        *,
        attribute: str | None = None,
    ) -> Part | None:
        for part in self.walk():
            if part.matches(header, value, attribute=attribute):
                return part
        return None

    def all_parts(
        self,
        header: str,
        value: str,
        *,
        attribute: str | None = None,
    ) -> list[Part]:
        return [part for part in self.walk() if part.matches(header, value, attribute=attribute)]


@dataclass(frozen=True)
class Leaf(_PartMixin):
    """A part whose content is body text."""

    headers: HeaderCollection = field(default_factory=HeaderCollection)
    body: str = ""
    id: uuid.UUID = field(default_factory=uuid.uuid4, compare=False, repr=False)

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _owned_headers(self.headers))

    @property
    def children(self) -> tuple[Part, ...]:
        return ()

    @property
    def is_container(self) -> bool:
        return False

    @property
    def decoded_body(self) -> str:
        """The body as text. Charset is reported, never applied."""
        return self.body

    def with_headers(self, headers: HeadersLike) -> Leaf:
        return dataclasses.replace(self, headers=_owned_headers(headers))

    def with_body(self, body: str) -> Leaf:
        return dataclasses.replace(self, body=body)


@dataclass(frozen=True)
class Container(_PartMixin):
    """A multipart part whose content is an ordered list of child parts."""

    headers: HeaderCollection = field(default_factory=HeaderCollection)
    children: tuple[Part, ...] = ()
    id: uuid.UUID = field(default_factory=uuid.uuid4, compare=False, repr=False)

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _owned_headers(self.headers))
        object.__setattr__(self, "children", tuple(self.children))

    @property
    def body(self) -> str:
        return ""

    @property
    def decoded_body(self) -> str:
        return ""

    @property
    def is_container(self) -> bool:
        return True

    def with_headers(self, headers: HeadersLike) -> Container:
        return dataclasses.replace(self, headers=_owned_headers(headers))

    def with_children(self, children: Iterable[Part]) -> Container:
        return dataclasses.replace(self, children=tuple(children))

    def append_child(self, child: Part) -> Container:
        return self.with_children((*self.children, child))

    def remove_child(self, child: Part | int) -> Container:
        """Drop a child by position, or by identity token when given a part.

        Raises ``IndexError`` / ``ValueError`` when there is no such child.
        """
        if isinstance(child, int):
            children = list(self.children)
            del children[child]
            return self.with_children(children)

        remaining = tuple(c for c in self.children if c.id != child.id)
        if len(remaining) == len(self.children):
            raise ValueError(f"Part {child.id} is not a child of this container")
        return self.with_children(remaining)


Part = Union[Leaf, Container]


@dataclass(frozen=True)
class Message:
    """Root-level parts of a decoded MIME message.

    For a multipart message ``parts[0]`` is the envelope carrying the
    message-level headers, followed by the top-level sections. A
    non-multipart message has exactly one part holding both the headers
    and the body.
    """

    parts: tuple[Part, ...]

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "parts", tuple(self.parts))

    @property
    def envelope(self) -> Part:
        return self.parts[0]

    @property
    def headers(self) -> HeaderCollection:
        return self.envelope.headers

    @property
    def is_multipart(self) -> bool:
        return len(self.parts) > 1 or self.envelope.boundary is not None

    @property
    def body(self) -> str | None:
        """Body of a single-part message; ``None`` when there are sections."""
        if len(self.parts) != 1:
            return None
        return self.parts[0].body

    @property
    def content_type(self) -> str | None:
        return self.headers.get(CONTENT_TYPE)

    @property
    def mime_version(self) -> str | None:
        return self.headers.get(MIME_VERSION)

    @property
    def date(self) -> datetime | None:
        return _parse_date(self.headers.get(DATE))

    def walk(self) -> Iterator[Part]:
        """Every part of the tree, depth-first, root parts in order."""
        for part in self.parts:
            yield from part.walk()

    def first_part(
        self,
        header: str,
        value: str,
        *,
        attribute: str | None = None,
    ) -> Part | None:
        """First part, depth-first, whose *header* matches *value*.

        See :meth:`Leaf.matches` for the comparison rules.
        """
        for part in self.walk():
            if part.matches(header, value, attribute=attribute):
                return part
        return None

    def all_parts(
        self,
        header: str,
        value: str,
        *,
        attribute: str | None = None,
    ) -> list[Part]:
        return [part for part in self.walk() if part.matches(header, value, attribute=attribute)]

    def with_parts(self, parts: Iterable[Part]) -> Message:
        return Message(tuple(parts))

    def append_part(self, part: Part) -> Message:
        return Message((*self.parts, part))
