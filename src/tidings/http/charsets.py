"""Charset name resolution.

Python codec names (``utf-8``, ``iso8859-1``, ``ascii``) differ from the
IANA names used on the wire (``UTF-8``, ``ISO-8859-1``, ``US-ASCII``).
Everything header-facing goes through :func:`canonical_charset`.
"""

import codecs

US_ASCII = "US-ASCII"
UTF_8 = "UTF-8"
ISO_8859_1 = "ISO-8859-1"

# Python codec name -> IANA preferred MIME name
_IANA_NAMES = {
    "ascii": US_ASCII,
    "utf-8": UTF_8,
    "latin-1": ISO_8859_1,
    "iso8859-1": ISO_8859_1,
    "utf-16": "UTF-16",
    "utf-16-be": "UTF-16BE",
    "utf-16-le": "UTF-16LE",
    "utf-32": "UTF-32",
    "cp1252": "windows-1252",
    "iso8859-15": "ISO-8859-15",
    "shift_jis": "Shift_JIS",
    "euc_jp": "EUC-JP",
    "gb2312": "GB2312",
    "big5": "Big5",
    "koi8-r": "KOI8-R",
}


def canonical_charset(name: str) -> str:
    """Return the IANA name for any codec alias Python knows.

    Raises ``LookupError`` for unknown names, like ``codecs.lookup``.
    """
    codec_name = codecs.lookup(name.strip()).name
    return _IANA_NAMES.get(codec_name, codec_name.upper())
