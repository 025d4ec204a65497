"""Header parameter parsing: ``text/plain; charset="utf-8"; format=flowed``."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class HeaderAttributes:
    """Primary value of a header plus its ``name=value`` parameters.

    Parameter names are stored lowercased and looked up case-insensitively.
    """

    value: str = ""
    attributes: Mapping[str, str] = field(default_factory=dict)

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "attributes",
            {name.lower(): val for name, val in self.attributes.items()},
        )

    @classmethod
    def parse(cls, header_value: str | None) -> HeaderAttributes:
        """Parse a raw header value.

        The value is split on every ``;``, including one inside a quoted
        parameter value. Segments without ``=`` are dropped and a single
        pair of surrounding double quotes is removed from parameter values.
        """
        if header_value is None:
            return cls()

        primary, *segments = header_value.split(";")
        attributes: dict[str, str] = {}
        for segment in segments:
            name, sep, raw = segment.partition("=")
            if not sep:
                continue
            val = raw.strip()
            if len(val) >= 2 and val.startswith('"') and val.endswith('"'):
                val = val[1:-1]
            attributes[name.strip().lower()] = val

        return cls(value=primary.strip(), attributes=attributes)

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.attributes.get(name.lower(), default)

    @property
    def all(self) -> dict[str, str]:
        return dict(self.attributes)

    def __getitem__(self, name: str) -> str:
        return self.attributes[name.lower()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self.attributes
