"""Tidings: typed accessors for HTTP headers.

An ordered, case-insensitive, multi-valued header store, plus a facade
that reads and writes header semantics (media types, dates, methods,
entity tags) without hand-tokenizing header text.

Basic usage::

    from tidings import HttpHeaders, MediaType

    headers = HttpHeaders()
    headers.content_type = MediaType("text", "html", {"charset": "utf-8"})
    headers.add("Vary", "Accept")
    headers.add("Vary", "Origin")

    headers.vary                 # ["Accept", "Origin"]
    headers.get("content-type")  # ["text/html;charset=utf-8"]

Read-only snapshots are safe to share between threads::

    frozen = HttpHeaders.read_only(headers)
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "ByteRange",
    "CodecConfig",
    "HeaderName",
    "HeaderParseError",
    "HeaderStore",
    "HttpHeaders",
    "InvalidArgumentError",
    "InvalidMediaTypeError",
    "MediaType",
    "ReadOnlyHeadersError",
    "TidingsError",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "ByteRange": "tidings.http.ranges",
    "CodecConfig": "tidings.config",
    "HeaderName": "tidings.http.names",
    "HeaderParseError": "tidings.errors",
    "HeaderStore": "tidings.http.store",
    "HttpHeaders": "tidings.http.headers",
    "InvalidArgumentError": "tidings.errors",
    "InvalidMediaTypeError": "tidings.errors",
    "MediaType": "tidings.http.media_type",
    "ReadOnlyHeadersError": "tidings.errors",
    "TidingsError": "tidings.errors",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import tidings`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
