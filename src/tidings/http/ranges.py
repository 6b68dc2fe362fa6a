"""Byte ranges for the ``Range`` header.

Two shapes, as in RFC 7233: ``first-last`` (``last`` optional) and the
suffix form ``-length`` meaning "the final *length* bytes".
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from tidings.errors import HeaderParseError, InvalidArgumentError

BYTE_RANGE_PREFIX = "bytes="

_RANGE_SPEC = re.compile(r"(\d*)-(\d*)")


@dataclass(frozen=True, slots=True)
class ByteRange:
    """A single byte range. Build with :meth:`of` or :meth:`suffix`."""

    first: int | None = None
    last: int | None = None
    suffix_length: int | None = None

    def __post_init__(self) -> None:
        if self.suffix_length is not None:
            if self.first is not None or self.last is not None:
                msg = "A suffix range cannot also have a first or last position"
                raise InvalidArgumentError(msg)
            if self.suffix_length < 0:
                msg = f"Suffix length must be non-negative, got {self.suffix_length}"
                raise InvalidArgumentError(msg)
            return
        if self.first is None or self.first < 0:
            msg = f"First position must be non-negative, got {self.first}"
            raise InvalidArgumentError(msg)
        if self.last is not None and self.last < self.first:
            msg = f"Last position {self.last} is before first position {self.first}"
            raise InvalidArgumentError(msg)

    @classmethod
    def of(cls, first: int, last: int | None = None) -> ByteRange:
        return cls(first=first, last=last)

    @classmethod
    def suffix(cls, length: int) -> ByteRange:
        return cls(suffix_length=length)

    @property
    def is_suffix(self) -> bool:
        return self.suffix_length is not None

    def __str__(self) -> str:
        if self.suffix_length is not None:
            return f"-{self.suffix_length}"
        if self.last is None:
            return f"{self.first}-"
        return f"{self.first}-{self.last}"


def parse_ranges(text: str | None, *, header: str = "Range") -> list[ByteRange]:
    """Parse ``bytes=0-499, -500`` into byte ranges; empty for a missing value."""
    if not text or not text.strip():
        return []
    value = text.strip()
    if not value.startswith(BYTE_RANGE_PREFIX):
        raise HeaderParseError(header, text, "range does not start with 'bytes='")

    ranges = []
    for spec in value[len(BYTE_RANGE_PREFIX) :].split(","):
        spec = spec.strip()
        if not spec:
            continue
        match = _RANGE_SPEC.fullmatch(spec)
        if match is None or match.group() == "-":
            raise HeaderParseError(header, text, f"invalid range {spec!r}")
        first, last = match.groups()
        try:
            if not first:
                ranges.append(ByteRange.suffix(int(last)))
            else:
                ranges.append(ByteRange.of(int(first), int(last) if last else None))
        except InvalidArgumentError as exc:
            raise HeaderParseError(header, text, str(exc)) from exc
    return ranges


def ranges_to_string(ranges: Iterable[ByteRange]) -> str:
    specs = [str(byte_range) for byte_range in ranges]
    if not specs:
        msg = "At least one byte range is required"
        raise InvalidArgumentError(msg)
    return BYTE_RANGE_PREFIX + ", ".join(specs)
