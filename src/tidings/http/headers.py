"""Typed HTTP headers.

``HttpHeaders`` owns one :class:`~tidings.http.store.HeaderStore` and adds
properties for well-known header fields, so callers read and write media
types, timestamps, and HTTP methods instead of raw header text::

    headers = HttpHeaders()
    headers.content_type = MediaType("application", "json")
    headers.allow = {HTTPMethod.GET, HTTPMethod.HEAD}
    headers.last_modified = 784111777000

    headers.get_first("content-type")  # "application/json"
    headers.allow                      # frozenset({GET, HEAD})

The raw multi-value surface is still there: every store operation
(``get``, ``add``, ``set``, ``remove``, ...) is delegated.

Getters follow one of two policies. Lenient getters return a sentinel
(``-1``, ``None``, an empty collection) for absent or unparseable values.
Strict getters (``date``, the ETag lists, the numeric fields) raise
``HeaderParseError``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Mapping, Sequence
from http import HTTPMethod

import httpx

from tidings.config import DEFAULT_CONFIG, CodecConfig
from tidings.errors import HeaderParseError, InvalidArgumentError
from tidings.http.charsets import US_ASCII, canonical_charset
from tidings.http.codecs import (
    encode_ext_value,
    format_http_date,
    parse_etag_list,
    parse_http_date,
    to_comma_delimited_string,
    tokenize_comma_list,
)
from tidings.http.media_type import (
    MediaType,
    media_types_to_string,
    parse_media_type,
    parse_media_types,
)
from tidings.http.names import HeaderName
from tidings.http.ranges import ByteRange, parse_ranges, ranges_to_string
from tidings.http.store import HeaderStore

logger = logging.getLogger("tidings.headers")

# Returned by numeric and date getters when the header is absent
NOT_PRESENT = -1

_INTEGER = re.compile(r"[+-]?\d+")
_METHOD_ORDER = {method: index for index, method in enumerate(HTTPMethod)}


def resolve_method(token: str | None) -> HTTPMethod | None:
    """Return the ``HTTPMethod`` named exactly *token*, or ``None``."""
    if token is None:
        return None
    return HTTPMethod.__members__.get(token.strip())


def _method_name(method: HTTPMethod | str) -> str:
    resolved = resolve_method(str(method))
    if resolved is None:
        msg = f"Unknown HTTP method {method!r}"
        raise InvalidArgumentError(msg)
    return resolved.value


class HttpHeaders:
    """Header map with typed accessors for well-known fields.

    Construct empty, or from anything ``HeaderStore`` accepts (another
    store, a mapping, ``(name, value)`` pairs, or another ``HttpHeaders``).
    The facade always owns its store; construction copies.

    Use :meth:`read_only` for a frozen snapshot and :meth:`wrap` to adopt
    an existing store without copying.
    """

    __slots__ = ("_config", "_store")

    def __init__(
        self,
        initial: HttpHeaders
        | HeaderStore
        | Mapping[str, str | Sequence[str]]
        | Iterable[tuple[str, str]]
        | None = None,
        *,
        config: CodecConfig | None = None,
    ) -> None:
        if isinstance(initial, HttpHeaders):
            initial = initial._store
        self._store = HeaderStore(initial)
        self._config = config or DEFAULT_CONFIG

    @classmethod
    def wrap(cls, store: HeaderStore, *, config: CodecConfig | None = None) -> HttpHeaders:
        """Adopt *store* as the backing store, without copying it."""
        if not isinstance(store, HeaderStore):
            msg = f"Expected a HeaderStore, got {type(store).__name__}"
            raise InvalidArgumentError(msg)
        headers = cls.__new__(cls)
        headers._store = store
        headers._config = config or DEFAULT_CONFIG
        return headers

    @classmethod
    def read_only(cls, headers: HttpHeaders | HeaderStore) -> HttpHeaders:
        """Return a frozen copy of *headers*. Every setter on it raises."""
        if isinstance(headers, HeaderStore):
            return cls.wrap(HeaderStore.read_only(headers))
        if not isinstance(headers, HttpHeaders):
            msg = f"Expected HttpHeaders or a HeaderStore, got {type(headers).__name__}"
            raise InvalidArgumentError(msg)
        return cls.wrap(HeaderStore.read_only(headers._store), config=headers._config)

    @property
    def store(self) -> HeaderStore:
        return self._store

    @property
    def config(self) -> CodecConfig:
        return self._config

    # ------------------------------------------------------------------
    # Store delegation
    # ------------------------------------------------------------------

    def get(self, name: str) -> list[str] | None:
        return self._store.get(name)

    def get_first(self, name: str) -> str | None:
        return self._store.get_first(name)

    def add(self, name: str, value: str) -> None:
        self._store.add(name, value)

    def set(self, name: str, value: str) -> None:
        self._store.set(name, value)

    def set_all(self, values: Mapping[str, str]) -> None:
        self._store.set_all(values)

    def put(self, name: str, values: Sequence[str]) -> list[str] | None:
        return self._store.put(name, values)

    def put_all(self, other: HttpHeaders | HeaderStore | Mapping[str, Sequence[str]]) -> None:
        if isinstance(other, HttpHeaders):
            other = other._store
        self._store.put_all(other)

    def remove(self, name: str) -> list[str] | None:
        return self._store.remove(name)

    def clear(self) -> None:
        self._store.clear()

    def keys(self) -> list[str]:
        return self._store.keys()

    def values(self) -> list[list[str]]:
        return self._store.values()

    def items(self) -> list[tuple[str, list[str]]]:
        return self._store.items()

    def contains_key(self, name: object) -> bool:
        return self._store.contains_key(name)

    def contains_value(self, values: Sequence[str]) -> bool:
        return self._store.contains_value(values)

    def is_empty(self) -> bool:
        return self._store.is_empty()

    @property
    def is_read_only(self) -> bool:
        return self._store.is_read_only

    def to_single_value_map(self) -> dict[str, str]:
        return self._store.to_single_value_map()

    def __contains__(self, name: object) -> bool:
        return name in self._store

    def __iter__(self) -> Iterator[str]:
        return iter(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HttpHeaders):
            return NotImplemented
        return self._store == other._store

    def __hash__(self) -> int:
        return hash(self._store)

    def __repr__(self) -> str:
        items = ", ".join(f"{name!r}: {values!r}" for name, values in self._store.items())
        return f"HttpHeaders({{{items}}})"

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def format_date(self, name: str, epoch_millis: int) -> None:
        """Set *name* to *epoch_millis* formatted as an RFC 1123 GMT date."""
        self._store.set(name, format_http_date(epoch_millis))

    def parse_date(self, name: str, reject_invalid: bool) -> int:
        """Parse the first value of *name* as an HTTP date, in epoch millis.

        Returns ``-1`` when the header is absent. An unparseable value
        raises ``HeaderParseError`` when *reject_invalid* is true and
        returns ``-1`` otherwise.
        """
        value = self._store.get_first(name)
        if value is None:
            return NOT_PRESENT
        millis = parse_http_date(value, year_window=self._config.two_digit_year_window)
        if millis is not None:
            return millis
        if reject_invalid:
            raise HeaderParseError(name, value, "not an HTTP date")
        logger.debug("Ignoring unparseable %s header: %r", name, value)
        return NOT_PRESENT

    def get_first_date(self, name: str) -> int:
        """Strict date getter for any header: raises on unparseable values."""
        return self.parse_date(name, True)

    def get_values_as_list(self, name: str) -> list[str]:
        """All comma-separated tokens across every value stored under *name*."""
        values = self._store.get(name)
        if values is None:
            return []
        return [token for value in values for token in tokenize_comma_list(value)]

    def get_etag_values_as_list(self, name: str) -> list[str]:
        """Entity tags across every value stored under *name*.

        A value that contributes the first tag must contain at least one;
        otherwise ``HeaderParseError`` is raised.
        """
        values = self._store.get(name)
        if values is None:
            return []
        tags: list[str] = []
        for value in values:
            tags.extend(parse_etag_list(value))
            if not tags:
                raise HeaderParseError(name, value, "no valid entity tag")
        return tags

    def get_field_values(self, name: str) -> str | None:
        """All values of *name* joined into one string, or ``None``."""
        values = self._store.get(name)
        if values is None:
            return None
        return self._join(values)

    def set_content_disposition_form_data(
        self,
        name: str,
        filename: str | None = None,
        charset: str | None = None,
    ) -> None:
        """Set ``Content-Disposition`` for a ``multipart/form-data`` part.

        With a non-ASCII *charset* the filename is written in the RFC 5987
        ``filename*=`` form; otherwise as a quoted ``filename=``.
        """
        parts = [f'form-data; name="{name}"']
        if filename is not None:
            if charset is not None and self._charset(charset) != US_ASCII:
                encoded = encode_ext_value(
                    filename, charset, allowed=self._config.ext_value_charsets
                )
                parts.append(f"; filename*={encoded}")
            else:
                parts.append(f'; filename="{filename}"')
        self._store.set(HeaderName.CONTENT_DISPOSITION, "".join(parts))

    def _join(self, values: Iterable[str]) -> str:
        return to_comma_delimited_string(values, self._config.list_separator)

    def _set_text(self, name: str, value: str | None) -> None:
        if value is None:
            self._store.remove(name)
        else:
            self._store.set(name, value)

    def _set_list(self, name: str, values: str | Iterable[str] | None) -> None:
        if values is None or isinstance(values, str):
            self._set_text(name, values)
        else:
            self._store.set(name, self._join(values))

    def _set_date(self, name: str, epoch_millis: int | None) -> None:
        if epoch_millis is None:
            self._store.remove(name)
        else:
            self.format_date(name, epoch_millis)

    def _set_int(self, name: str, value: int | None) -> None:
        self._set_text(name, None if value is None else str(int(value)))

    def _get_int(self, name: str) -> int:
        value = self._store.get_first(name)
        if value is None:
            return NOT_PRESENT
        text = value.strip()
        if not _INTEGER.fullmatch(text):
            raise HeaderParseError(name, value, "not an integer")
        return int(text)

    def _get_methods(self, name: str) -> list[HTTPMethod]:
        value = self._store.get_first(name)
        if not value:
            return []
        methods = []
        for token in tokenize_comma_list(value):
            method = resolve_method(token)
            if method is None:
                logger.debug("Dropping unknown method %r from %s header", token, name)
            else:
                methods.append(method)
        return methods

    @staticmethod
    def _charset(charset: str) -> str:
        try:
            return canonical_charset(charset)
        except LookupError as exc:
            msg = f"Unknown charset {charset!r}"
            raise InvalidArgumentError(msg) from exc

    # ------------------------------------------------------------------
    # Content negotiation
    # ------------------------------------------------------------------

    @property
    def accept(self) -> list[MediaType]:
        """``Accept`` as media types; empty when absent."""
        return parse_media_types(self._store.get_first(HeaderName.ACCEPT))

    @accept.setter
    def accept(self, media_types: Iterable[MediaType] | None) -> None:
        if media_types is None:
            self._store.remove(HeaderName.ACCEPT)
        else:
            self._store.set(HeaderName.ACCEPT, media_types_to_string(media_types))

    @property
    def accept_charset(self) -> list[str]:
        """``Accept-Charset`` as canonical charset names; ``*`` is skipped."""
        value = self._store.get_first(HeaderName.ACCEPT_CHARSET)
        if value is None:
            return []
        charsets = []
        for token in tokenize_comma_list(value):
            name = token.partition(";")[0].strip()
            if name == "*":
                continue
            try:
                charsets.append(canonical_charset(name))
            except LookupError as exc:
                raise HeaderParseError(
                    HeaderName.ACCEPT_CHARSET, value, f"unknown charset {name!r}"
                ) from exc
        return charsets

    @accept_charset.setter
    def accept_charset(self, charsets: Iterable[str] | None) -> None:
        if charsets is None:
            self._store.remove(HeaderName.ACCEPT_CHARSET)
            return
        names = [self._charset(charset).lower() for charset in charsets]
        self._store.set(HeaderName.ACCEPT_CHARSET, self._join(names))

    @property
    def content_type(self) -> MediaType | None:
        value = self._store.get_first(HeaderName.CONTENT_TYPE)
        if not value:
            return None
        return parse_media_type(value)

    @content_type.setter
    def content_type(self, media_type: MediaType | str | None) -> None:
        if media_type is None:
            self._store.remove(HeaderName.CONTENT_TYPE)
            return
        if isinstance(media_type, str):
            media_type = parse_media_type(media_type)
        if media_type.is_wildcard_type:
            msg = "'Content-Type' cannot contain wildcard type '*'"
            raise InvalidArgumentError(msg)
        if media_type.is_wildcard_subtype:
            msg = "'Content-Type' cannot contain wildcard subtype '*'"
            raise InvalidArgumentError(msg)
        self._store.set(HeaderName.CONTENT_TYPE, str(media_type))

    @property
    def content_length(self) -> int:
        """``Content-Length`` in bytes, or ``-1`` when absent."""
        return self._get_int(HeaderName.CONTENT_LENGTH)

    @content_length.setter
    def content_length(self, length: int | None) -> None:
        self._set_int(HeaderName.CONTENT_LENGTH, length)

    @property
    def vary(self) -> list[str]:
        return self.get_values_as_list(HeaderName.VARY)

    @vary.setter
    def vary(self, names: str | Iterable[str] | None) -> None:
        self._set_list(HeaderName.VARY, names)

    # ------------------------------------------------------------------
    # CORS
    # ------------------------------------------------------------------

    @property
    def access_control_allow_credentials(self) -> bool:
        value = self._store.get_first(HeaderName.ACCESS_CONTROL_ALLOW_CREDENTIALS)
        return value is not None and value.strip().lower() == "true"

    @access_control_allow_credentials.setter
    def access_control_allow_credentials(self, allow: bool | None) -> None:
        self._set_text(
            HeaderName.ACCESS_CONTROL_ALLOW_CREDENTIALS,
            None if allow is None else ("true" if allow else "false"),
        )

    @property
    def access_control_allow_headers(self) -> list[str]:
        return self.get_values_as_list(HeaderName.ACCESS_CONTROL_ALLOW_HEADERS)

    @access_control_allow_headers.setter
    def access_control_allow_headers(self, names: str | Iterable[str] | None) -> None:
        self._set_list(HeaderName.ACCESS_CONTROL_ALLOW_HEADERS, names)

    @property
    def access_control_allow_methods(self) -> list[HTTPMethod]:
        """Methods in header order; unknown names are dropped."""
        return self._get_methods(HeaderName.ACCESS_CONTROL_ALLOW_METHODS)

    @access_control_allow_methods.setter
    def access_control_allow_methods(self, methods: Iterable[HTTPMethod | str] | None) -> None:
        if methods is None:
            self._store.remove(HeaderName.ACCESS_CONTROL_ALLOW_METHODS)
            return
        value = ",".join(_method_name(method) for method in methods)
        self._store.set(HeaderName.ACCESS_CONTROL_ALLOW_METHODS, value)

    @property
    def access_control_allow_origin(self) -> str | None:
        return self.get_field_values(HeaderName.ACCESS_CONTROL_ALLOW_ORIGIN)

    @access_control_allow_origin.setter
    def access_control_allow_origin(self, origin: str | None) -> None:
        self._set_text(HeaderName.ACCESS_CONTROL_ALLOW_ORIGIN, origin)

    @property
    def access_control_expose_headers(self) -> list[str]:
        return self.get_values_as_list(HeaderName.ACCESS_CONTROL_EXPOSE_HEADERS)

    @access_control_expose_headers.setter
    def access_control_expose_headers(self, names: str | Iterable[str] | None) -> None:
        self._set_list(HeaderName.ACCESS_CONTROL_EXPOSE_HEADERS, names)

    @property
    def access_control_max_age(self) -> int:
        """Preflight cache lifetime in seconds, or ``-1`` when absent."""
        return self._get_int(HeaderName.ACCESS_CONTROL_MAX_AGE)

    @access_control_max_age.setter
    def access_control_max_age(self, seconds: int | None) -> None:
        self._set_int(HeaderName.ACCESS_CONTROL_MAX_AGE, seconds)

    @property
    def access_control_request_headers(self) -> list[str]:
        return self.get_values_as_list(HeaderName.ACCESS_CONTROL_REQUEST_HEADERS)

    @access_control_request_headers.setter
    def access_control_request_headers(self, names: str | Iterable[str] | None) -> None:
        self._set_list(HeaderName.ACCESS_CONTROL_REQUEST_HEADERS, names)

    @property
    def access_control_request_method(self) -> HTTPMethod | None:
        return resolve_method(self._store.get_first(HeaderName.ACCESS_CONTROL_REQUEST_METHOD))

    @access_control_request_method.setter
    def access_control_request_method(self, method: HTTPMethod | str | None) -> None:
        self._set_text(
            HeaderName.ACCESS_CONTROL_REQUEST_METHOD,
            None if method is None else _method_name(method),
        )

    @property
    def origin(self) -> str | None:
        return self._store.get_first(HeaderName.ORIGIN)

    @origin.setter
    def origin(self, origin: str | None) -> None:
        self._set_text(HeaderName.ORIGIN, origin)

    # ------------------------------------------------------------------
    # Methods, connection, caching
    # ------------------------------------------------------------------

    @property
    def allow(self) -> frozenset[HTTPMethod]:
        """``Allow`` as a set of methods; empty when absent or blank."""
        return frozenset(self._get_methods(HeaderName.ALLOW))

    @allow.setter
    def allow(self, methods: Iterable[HTTPMethod | str] | None) -> None:
        if methods is None:
            self._store.remove(HeaderName.ALLOW)
            return
        resolved = {HTTPMethod(_method_name(method)) for method in methods}
        ordered = sorted(resolved, key=_METHOD_ORDER.__getitem__)
        self._store.set(HeaderName.ALLOW, ",".join(method.value for method in ordered))

    @property
    def connection(self) -> list[str]:
        return self.get_values_as_list(HeaderName.CONNECTION)

    @connection.setter
    def connection(self, connection: str | Iterable[str] | None) -> None:
        self._set_list(HeaderName.CONNECTION, connection)

    @property
    def upgrade(self) -> str | None:
        return self._store.get_first(HeaderName.UPGRADE)

    @upgrade.setter
    def upgrade(self, upgrade: str | None) -> None:
        self._set_text(HeaderName.UPGRADE, upgrade)

    @property
    def cache_control(self) -> str | None:
        return self.get_field_values(HeaderName.CACHE_CONTROL)

    @cache_control.setter
    def cache_control(self, directives: str | None) -> None:
        self._set_text(HeaderName.CACHE_CONTROL, directives)

    @property
    def pragma(self) -> str | None:
        return self._store.get_first(HeaderName.PRAGMA)

    @pragma.setter
    def pragma(self, pragma: str | None) -> None:
        self._set_text(HeaderName.PRAGMA, pragma)

    # ------------------------------------------------------------------
    # Dates (epoch milliseconds)
    # ------------------------------------------------------------------

    @property
    def date(self) -> int:
        """``Date`` in epoch millis; raises ``HeaderParseError`` if unparseable."""
        return self.get_first_date(HeaderName.DATE)

    @date.setter
    def date(self, epoch_millis: int | None) -> None:
        self._set_date(HeaderName.DATE, epoch_millis)

    @property
    def expires(self) -> int:
        return self.parse_date(HeaderName.EXPIRES, False)

    @expires.setter
    def expires(self, epoch_millis: int | None) -> None:
        self._set_date(HeaderName.EXPIRES, epoch_millis)

    @property
    def if_modified_since(self) -> int:
        return self.parse_date(HeaderName.IF_MODIFIED_SINCE, False)

    @if_modified_since.setter
    def if_modified_since(self, epoch_millis: int | None) -> None:
        self._set_date(HeaderName.IF_MODIFIED_SINCE, epoch_millis)

    @property
    def if_unmodified_since(self) -> int:
        return self.parse_date(HeaderName.IF_UNMODIFIED_SINCE, False)

    @if_unmodified_since.setter
    def if_unmodified_since(self, epoch_millis: int | None) -> None:
        self._set_date(HeaderName.IF_UNMODIFIED_SINCE, epoch_millis)

    @property
    def last_modified(self) -> int:
        return self.parse_date(HeaderName.LAST_MODIFIED, False)

    @last_modified.setter
    def last_modified(self, epoch_millis: int | None) -> None:
        self._set_date(HeaderName.LAST_MODIFIED, epoch_millis)

    # ------------------------------------------------------------------
    # Conditional requests
    # ------------------------------------------------------------------

    @property
    def etag(self) -> str | None:
        return self._store.get_first(HeaderName.ETAG)

    @etag.setter
    def etag(self, etag: str | None) -> None:
        if etag is not None:
            if not (etag.startswith('"') or etag.startswith("W/")):
                msg = f"Invalid ETag {etag!r}, does not start with W/ or \""
                raise InvalidArgumentError(msg)
            if not etag.endswith('"'):
                msg = f"Invalid ETag {etag!r}, does not end with \""
                raise InvalidArgumentError(msg)
        self._set_text(HeaderName.ETAG, etag)

    @property
    def if_match(self) -> list[str]:
        return self.get_etag_values_as_list(HeaderName.IF_MATCH)

    @if_match.setter
    def if_match(self, etags: str | Iterable[str] | None) -> None:
        self._set_list(HeaderName.IF_MATCH, etags)

    @property
    def if_none_match(self) -> list[str]:
        return self.get_etag_values_as_list(HeaderName.IF_NONE_MATCH)

    @if_none_match.setter
    def if_none_match(self, etags: str | Iterable[str] | None) -> None:
        self._set_list(HeaderName.IF_NONE_MATCH, etags)

    # ------------------------------------------------------------------
    # Location and ranges
    # ------------------------------------------------------------------

    @property
    def location(self) -> httpx.URL | None:
        value = self._store.get_first(HeaderName.LOCATION)
        if value is None:
            return None
        try:
            return httpx.URL(value)
        except httpx.InvalidURL as exc:
            raise HeaderParseError(HeaderName.LOCATION, value, str(exc)) from exc

    @location.setter
    def location(self, location: httpx.URL | str | None) -> None:
        if location is None:
            self._store.remove(HeaderName.LOCATION)
            return
        try:
            url = httpx.URL(location)
        except httpx.InvalidURL as exc:
            msg = f"Invalid Location {location!r}: {exc}"
            raise InvalidArgumentError(msg) from exc
        self._store.set(HeaderName.LOCATION, str(url))

    @property
    def range(self) -> list[ByteRange]:
        """``Range`` as byte ranges; empty when absent."""
        return parse_ranges(self._store.get_first(HeaderName.RANGE), header=HeaderName.RANGE)

    @range.setter
    def range(self, ranges: Iterable[ByteRange] | None) -> None:
        if ranges is None:
            self._store.remove(HeaderName.RANGE)
        else:
            self._store.set(HeaderName.RANGE, ranges_to_string(ranges))
