"""Tidings exception hierarchy.

Shared by the header store, the codecs, and the typed facade so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class TidingsError(Exception):
    """Base for all tidings-specific errors."""


class InvalidArgumentError(TidingsError, ValueError):
    """Raised for a contract violation, before any header is mutated.

    Covers wildcard ``Content-Type`` values, malformed ETags on write,
    unsupported RFC 5987 charsets, and similar caller mistakes.
    """


class InvalidMediaTypeError(InvalidArgumentError):
    """Raised when media type text cannot be parsed."""


class ReadOnlyHeadersError(TidingsError, TypeError):
    """Raised by every mutating call on a read-only header store."""


@dataclass(frozen=True, slots=True)
class HeaderParseError(TidingsError, ValueError):
    """A stored header value could not be interpreted by a typed getter.

    Raised under strict policy only: the ``Date`` header, ETag lists,
    and a handful of numeric and charset getters. Lenient getters
    return a sentinel instead.
    """

    header: str
    value: str
    reason: str = ""

    def __str__(self) -> str:
        message = f"Cannot parse value {self.value!r} for '{self.header}' header"
        if self.reason:
            return f"{message}: {self.reason}"
        return message
