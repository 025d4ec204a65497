"""Ordered, case-insensitive, duplicate-tolerant header collection.

Headers are kept as a plain list of ``(key, value)`` entries rather than a
dict: MIME headers repeat (``Received``), their order is significant, and
lookups ignore case while encoding must reproduce the original casing.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import NamedTuple


class HeaderEntry(NamedTuple):
    """A single header line: original-case key and its unfolded value."""

    key: str
    value: str


class HeaderCollection:
    """Ordered header store with case-insensitive lookup.

    Construction from a mapping applies :meth:`set` per pair; construction
    from an iterable of pairs applies :meth:`add`, so duplicates survive.

    Equality is literal: same length and the same ``(key, value)`` at every
    position, key casing included.
    """

    __slots__ = ("_entries",)

    def __init__(
        self,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
    ) -> None:
        self._entries: list[HeaderEntry] = []
        if headers is None:
            return
        if isinstance(headers, HeaderCollection):
            self._entries = list(headers._entries)
        elif isinstance(headers, Mapping):
            for key, value in headers.items():
                self.set(key, value)
        else:
            for key, value in headers:
                self.add(key, value)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, key: str, default: str | None = None) -> str | None:
        """Value of the first entry matching *key*, else *default*."""
        folded = key.lower()
        for entry in self._entries:
            if entry.key.lower() == folded:
                return entry.value
        return default

    def get_all(self, key: str) -> list[str]:
        """Values of every entry matching *key*, in original order."""
        folded = key.lower()
        return [entry.value for entry in self._entries if entry.key.lower() == folded]

    def contains(self, key: str) -> bool:
        folded = key.lower()
        return any(entry.key.lower() == folded for entry in self._entries)

    def keys(self) -> list[str]:
        return [entry.key for entry in self._entries]

    def values(self) -> list[str]:
        return [entry.value for entry in self._entries]

    @property
    def entries(self) -> tuple[HeaderEntry, ...]:
        return tuple(self._entries)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set(self, key: str, value: str | None) -> None:
        """Replace the first match and drop the others, or append.

        The surviving entry keeps its original position and key casing.
        ``set(key, None)`` removes every match.
        """
        if value is None:
            self.remove_all(key)
            return

        folded = key.lower()
        kept: list[HeaderEntry] = []
        replaced = False
        for entry in self._entries:
            if entry.key.lower() != folded:
                kept.append(entry)
            elif not replaced:
                kept.append(HeaderEntry(entry.key, value))
                replaced = True

        if not replaced:
            kept.append(HeaderEntry(key, value))
        self._entries = kept

    def add(self, key: str, value: str) -> None:
        """Append an entry, even when *key* is already present."""
        self._entries.append(HeaderEntry(key, value))

    def remove_all(self, key: str) -> None:
        folded = key.lower()
        self._entries = [entry for entry in self._entries if entry.key.lower() != folded]

    def copy(self) -> HeaderCollection:
        return HeaderCollection(self)

    # ------------------------------------------------------------------
    # Protocols
    # ------------------------------------------------------------------

    def __getitem__(self, key: str) -> str:
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: str) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        if not self.contains(key):
            raise KeyError(key)
        self.remove_all(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __iter__(self) -> Iterator[HeaderEntry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderCollection):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        pairs = ", ".join(f"{key!r}: {value!r}" for key, value in self._entries)
        return f"HeaderCollection([{pairs}])"

    def __str__(self) -> str:
        return "\n".join(f"{key}: {value}" for key, value in self._entries)
