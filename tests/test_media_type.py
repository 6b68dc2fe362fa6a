"""Tests for tidings.http.media_type."""

import pytest

from tidings.errors import InvalidMediaTypeError
from tidings.http.media_type import (
    MediaType,
    media_types_to_string,
    parse_media_type,
    parse_media_types,
)


class TestMediaType:
    def test_lowercases_type_and_subtype(self) -> None:
        media_type = MediaType("Text", "HTML")
        assert media_type.type == "text"
        assert media_type.subtype == "html"

    def test_default_subtype_is_wildcard(self) -> None:
        media_type = MediaType("text")
        assert media_type.is_wildcard_subtype
        assert str(media_type) == "text/*"

    def test_wildcard_type_requires_wildcard_subtype(self) -> None:
        with pytest.raises(InvalidMediaTypeError):
            MediaType("*", "html")

    @pytest.mark.parametrize("bad", ["te xt", "", "text/html"])
    def test_invalid_token(self, bad: str) -> None:
        with pytest.raises(InvalidMediaTypeError):
            MediaType(bad, "plain")

    def test_suffix_wildcard(self) -> None:
        media_type = MediaType("application", "*+xml")
        assert media_type.is_wildcard_subtype
        assert not media_type.is_wildcard_type

    def test_parameters_immutable(self) -> None:
        params = {"charset": "utf-8"}
        media_type = MediaType("text", "plain", params)
        params["charset"] = "latin-1"
        assert media_type.parameters["charset"] == "utf-8"
        with pytest.raises(TypeError):
            media_type.parameters["q"] = "1"  # type: ignore[index]

    def test_equality_and_hash(self) -> None:
        a = MediaType("text", "html", {"a": "1", "b": "2"})
        b = MediaType("TEXT", "html", {"b": "2", "a": "1"})
        assert a == b
        assert hash(a) == hash(b)
        assert a != MediaType("text", "html")

    def test_str_with_parameters(self) -> None:
        media_type = MediaType("multipart", "form-data", {"boundary": '"a;b"'})
        assert str(media_type) == 'multipart/form-data;boundary="a;b"'


class TestParse:
    def test_simple(self) -> None:
        assert parse_media_type("application/json") == MediaType("application", "json")

    def test_parameters(self) -> None:
        media_type = parse_media_type("text/html; Charset=UTF-8; level=1")
        assert media_type.parameters == {"charset": "UTF-8", "level": "1"}

    def test_bare_wildcard(self) -> None:
        assert parse_media_type("*") == MediaType("*", "*")

    def test_quoted_parameter_keeps_delimiters(self) -> None:
        media_type = parse_media_type('multipart/mixed; boundary="x;y,z"')
        assert media_type.parameters["boundary"] == '"x;y,z"'

    @pytest.mark.parametrize("bad", ["", "   ", "text", "text/", "text/html; charset"])
    def test_invalid(self, bad: str) -> None:
        with pytest.raises(InvalidMediaTypeError):
            parse_media_type(bad)

    def test_list(self) -> None:
        media_types = parse_media_types("text/html, application/xml;q=0.9, */*;q=0.8")
        assert [str(media_type) for media_type in media_types] == [
            "text/html",
            "application/xml;q=0.9",
            "*/*;q=0.8",
        ]

    def test_list_empty(self) -> None:
        assert parse_media_types(None) == []
        assert parse_media_types("  ") == []

    def test_list_round_trip(self) -> None:
        text = "text/html, application/json;q=0.9"
        assert media_types_to_string(parse_media_types(text)) == text
