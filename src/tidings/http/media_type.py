"""Media types for ``Accept`` and ``Content-Type``.

A deliberately small value type: parse, print, and the wildcard checks
the typed header accessors need. No quality-factor sorting.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from tidings.errors import InvalidMediaTypeError

WILDCARD = "*"

_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


@dataclass(frozen=True, slots=True)
class MediaType:
    """A ``type/subtype`` pair with optional parameters.

    Type and subtype are stored lower-cased. Parameters keep insertion
    order; quoted values keep their quotes so printing round-trips.
    """

    type: str
    subtype: str = WILDCARD
    parameters: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for part in (self.type, self.subtype):
            if not _TOKEN.fullmatch(part):
                msg = f"Invalid token {part!r} in media type"
                raise InvalidMediaTypeError(msg)
        if self.type == WILDCARD and self.subtype != WILDCARD:
            msg = "Wildcard type is legal only in '*/*' (all media types)"
            raise InvalidMediaTypeError(msg)
        object.__setattr__(self, "type", self.type.lower())
        object.__setattr__(self, "subtype", self.subtype.lower())
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    def __hash__(self) -> int:
        return hash((self.type, self.subtype, frozenset(self.parameters.items())))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MediaType):
            return NotImplemented
        return (
            self.type == other.type
            and self.subtype == other.subtype
            and dict(self.parameters) == dict(other.parameters)
        )

    @property
    def is_wildcard_type(self) -> bool:
        return self.type == WILDCARD

    @property
    def is_wildcard_subtype(self) -> bool:
        """True for ``*`` and for suffix wildcards such as ``*+xml``."""
        return self.subtype == WILDCARD or self.subtype.startswith("*+")

    def __str__(self) -> str:
        params = "".join(f";{name}={value}" for name, value in self.parameters.items())
        return f"{self.type}/{self.subtype}{params}"


def parse_media_type(text: str) -> MediaType:
    """Parse ``type/subtype;param=value`` into a :class:`MediaType`.

    A bare ``*`` is accepted as ``*/*``.
    """
    if not text or not text.strip():
        msg = "Media type must not be empty"
        raise InvalidMediaTypeError(msg)
    head, *params = _split_outside_quotes(text, ";")
    full_type = head.strip()
    if full_type == WILDCARD:
        full_type = "*/*"
    media_type, slash, subtype = full_type.partition("/")
    if not slash or not subtype:
        msg = f"Media type {text!r} does not contain '/'"
        raise InvalidMediaTypeError(msg)

    parameters: dict[str, str] = {}
    for param in params:
        param = param.strip()
        if not param:
            continue
        name, eq, value = param.partition("=")
        if not eq:
            msg = f"Media type parameter {param!r} does not contain '='"
            raise InvalidMediaTypeError(msg)
        parameters[name.strip().lower()] = value.strip()
    return MediaType(media_type.strip(), subtype.strip(), parameters)


def parse_media_types(text: str | None) -> list[MediaType]:
    """Parse a comma-separated list of media types; empty for a missing value."""
    if not text or not text.strip():
        return []
    return [parse_media_type(part) for part in _split_outside_quotes(text, ",") if part.strip()]


def media_types_to_string(media_types: Iterable[MediaType]) -> str:
    return ", ".join(str(media_type) for media_type in media_types)


def _split_outside_quotes(text: str, delimiter: str) -> list[str]:
    """Split on *delimiter*, ignoring delimiters inside double-quoted strings."""
    parts: list[str] = []
    current: list[str] = []
    quoted = False
    escaped = False
    for char in text:
        if escaped:
            escaped = False
        elif char == "\\" and quoted:
            escaped = True
        elif char == '"':
            quoted = not quoted
        elif char == delimiter and not quoted:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts
