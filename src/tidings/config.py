"""Codec configuration.

CodecConfig is a frozen dataclass: immutable after creation, no string-key
dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CodecConfig:
    """Knobs for the header value codecs. Immutable after creation.

    All fields have defaults matching common HTTP practice. Override what
    you need::

        config = CodecConfig(list_separator=",")
        headers = HttpHeaders(config=config)
    """

    # Dates: RFC 850 two-digit years land in the 100-year window that starts
    # this many years before the current year.
    two_digit_year_window: int = 80

    # RFC 5987 ext-value charsets accepted in addition to US-ASCII
    ext_value_charsets: tuple[str, ...] = ("UTF-8", "ISO-8859-1")

    # Lists: separator used when joining list-valued headers
    list_separator: str = ", "


DEFAULT_CONFIG = CodecConfig()
