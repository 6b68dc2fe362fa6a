"""Tests for tidings.http.codecs: dates, lists, ETags, RFC 5987."""

import calendar

import pytest

from tidings.errors import InvalidArgumentError
from tidings.http.codecs import (
    encode_ext_value,
    format_http_date,
    parse_etag_list,
    parse_http_date,
    to_comma_delimited_string,
    tokenize_comma_list,
)

# Sun, 06 Nov 1994 08:49:37 GMT
RFC_EXAMPLE_MILLIS = 784111777000
# 10000-01-01 and 0001-01-01, both 00:00:00 GMT
YEAR_10000_MILLIS = 253402300800000
YEAR_1_MILLIS = -62135596800000


class TestFormatHttpDate:
    def test_rfc_example(self) -> None:
        assert format_http_date(RFC_EXAMPLE_MILLIS) == "Sun, 06 Nov 1994 08:49:37 GMT"

    def test_epoch(self) -> None:
        assert format_http_date(0) == "Thu, 01 Jan 1970 00:00:00 GMT"

    def test_drops_milliseconds(self) -> None:
        assert format_http_date(RFC_EXAMPLE_MILLIS + 999) == "Sun, 06 Nov 1994 08:49:37 GMT"

    def test_before_epoch(self) -> None:
        assert format_http_date(-1) == "Wed, 31 Dec 1969 23:59:59 GMT"

    def test_last_four_digit_year(self) -> None:
        assert format_http_date(YEAR_10000_MILLIS - 1000) == "Fri, 31 Dec 9999 23:59:59 GMT"

    def test_five_digit_year(self) -> None:
        assert format_http_date(YEAR_10000_MILLIS) == "Sat, 01 Jan 10000 00:00:00 GMT"

    def test_first_year(self) -> None:
        assert format_http_date(YEAR_1_MILLIS) == "Mon, 01 Jan 0001 00:00:00 GMT"

    def test_before_year_one_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError, match="before year 1"):
            format_http_date(YEAR_1_MILLIS - 1)


class TestParseHttpDate:
    @pytest.mark.parametrize(
        "value",
        [
            "Sun, 06 Nov 1994 08:49:37 GMT",
            "Sunday, 06-Nov-94 08:49:37 GMT",
            "Sun Nov  6 08:49:37 1994",
        ],
    )
    def test_three_formats_agree(self, value: str) -> None:
        assert parse_http_date(value) == RFC_EXAMPLE_MILLIS

    @pytest.mark.parametrize(
        "value",
        [
            "Sun, 06 Nov 1994 09:49:37 +0100",
            "Sun, 06 Nov 1994 00:49:37 PST",
            "Sun, 06 Nov 1994 08:49:37 UTC",
            "sun, 06 nov 1994 08:49:37 gmt",
            "  Sun, 06 Nov 1994 08:49:37 GMT  ",
            "Sun, 06-Nov-1994 08:49:37 GMT",
            "Sun Nov 06 08:49:37 1994",
        ],
    )
    def test_variants(self, value: str) -> None:
        assert parse_http_date(value) == RFC_EXAMPLE_MILLIS

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "ab",
            "yesterday",
            "Sun, 30 Feb 1994 08:49:37 GMT",
            "Sun, 06 Foo 1994 08:49:37 GMT",
            "Sun, 06 Nov 1994 25:49:37 GMT",
            "Sun, 06 Nov 1994 08:49:37 XYZ",
            "Funday, 06 Nov 1994 08:49:37 GMT",
            "Sun, 06 Nov 1994 08:49:37 GMT trailing",
            "Mon, 01 Jan 0000 00:00:00 GMT",
            "Sat Jan  1 00:00:00 0000",
        ],
    )
    def test_unparseable(self, value: str) -> None:
        assert parse_http_date(value) is None

    @pytest.mark.parametrize(
        "millis", [0, 1000, RFC_EXAMPLE_MILLIS, 1_700_000_000_123, YEAR_10000_MILLIS + 5]
    )
    def test_round_trip_truncates_to_seconds(self, millis: int) -> None:
        assert parse_http_date(format_http_date(millis)) == millis - millis % 1000

    def test_five_digit_year(self) -> None:
        assert parse_http_date("Sat, 01 Jan 10000 00:00:00 GMT") == YEAR_10000_MILLIS

    def test_year_window(self) -> None:
        expected = calendar.timegm((2094, 11, 6, 8, 49, 37)) * 1000
        assert parse_http_date("Saturday, 06-Nov-94 08:49:37 GMT", year_window=10) == expected


class TestCommaLists:
    def test_tokenize(self) -> None:
        assert tokenize_comma_list(" gzip ,deflate,  br ") == ["gzip", "deflate", "br"]

    def test_tokenize_drops_empty(self) -> None:
        assert tokenize_comma_list(",a,, ,b,") == ["a", "b"]

    def test_tokenize_empty(self) -> None:
        assert tokenize_comma_list("") == []

    def test_join(self) -> None:
        assert to_comma_delimited_string(["a", "b"]) == "a, b"
        assert to_comma_delimited_string(["a", "b"], ",") == "a,b"
        assert to_comma_delimited_string([]) == ""


class TestEtagList:
    def test_mixed(self) -> None:
        assert parse_etag_list('"xyzzy", W/"weak", *') == ['"xyzzy"', 'W/"weak"', "*"]

    def test_wildcard(self) -> None:
        assert parse_etag_list("*") == ["*"]

    def test_no_match(self) -> None:
        assert parse_etag_list("not-a-tag") == []

    def test_commas_inside_quotes(self) -> None:
        assert parse_etag_list('"a,b", "c"') == ['"a,b"', '"c"']

    def test_empty_tag(self) -> None:
        assert parse_etag_list('""') == ['""']


class TestEncodeExtValue:
    def test_utf8(self) -> None:
        assert encode_ext_value("€ rates", "UTF-8") == "UTF-8''%E2%82%AC%20rates"

    def test_charset_alias(self) -> None:
        assert encode_ext_value("€ rates", "utf8") == "UTF-8''%E2%82%AC%20rates"

    def test_iso_8859_1(self) -> None:
        assert encode_ext_value("ä.txt", "latin-1") == "ISO-8859-1''%E4.txt"

    def test_unreserved_marks_pass_through(self) -> None:
        marks = "!#$&+-.^_`|~"
        assert encode_ext_value(marks, "UTF-8") == "UTF-8''" + marks

    def test_reserved_ascii_encoded(self) -> None:
        assert encode_ext_value('a"b;c', "UTF-8") == "UTF-8''a%22b%3Bc"

    def test_us_ascii_unchanged(self) -> None:
        assert encode_ext_value("plain name.txt", "US-ASCII") == "plain name.txt"

    def test_unencodable_characters_replaced(self) -> None:
        assert encode_ext_value("€", "ISO-8859-1") == "ISO-8859-1''%3F"

    def test_unsupported_charset(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Charset should be"):
            encode_ext_value("x", "UTF-16")

    def test_unknown_charset(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Unknown charset"):
            encode_ext_value("x", "no-such-charset")

    def test_custom_allowed(self) -> None:
        with pytest.raises(InvalidArgumentError):
            encode_ext_value("x", "ISO-8859-1", allowed=("UTF-8",))
