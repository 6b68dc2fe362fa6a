"""Tests for tidings.http.ranges."""

import pytest

from tidings.errors import HeaderParseError, InvalidArgumentError
from tidings.http.ranges import ByteRange, parse_ranges, ranges_to_string


class TestByteRange:
    def test_closed(self) -> None:
        byte_range = ByteRange.of(0, 499)
        assert str(byte_range) == "0-499"
        assert not byte_range.is_suffix

    def test_open_ended(self) -> None:
        assert str(ByteRange.of(9500)) == "9500-"

    def test_suffix(self) -> None:
        byte_range = ByteRange.suffix(500)
        assert str(byte_range) == "-500"
        assert byte_range.is_suffix

    @pytest.mark.parametrize(
        "build",
        [
            lambda: ByteRange.of(-1),
            lambda: ByteRange.of(10, 5),
            lambda: ByteRange.suffix(-1),
            lambda: ByteRange(first=0, suffix_length=5),
            lambda: ByteRange(),
        ],
    )
    def test_invalid(self, build) -> None:
        with pytest.raises(InvalidArgumentError):
            build()


class TestParseRanges:
    def test_multiple(self) -> None:
        assert parse_ranges("bytes=0-499, 500-, -200") == [
            ByteRange.of(0, 499),
            ByteRange.of(500),
            ByteRange.suffix(200),
        ]

    def test_absent(self) -> None:
        assert parse_ranges(None) == []
        assert parse_ranges("") == []

    @pytest.mark.parametrize("bad", ["items=0-1", "bytes=-", "bytes=a-b", "bytes=5-1"])
    def test_invalid(self, bad: str) -> None:
        with pytest.raises(HeaderParseError) as excinfo:
            parse_ranges(bad)
        assert excinfo.value.header == "Range"
        assert excinfo.value.value == bad


class TestRangesToString:
    def test_join(self) -> None:
        ranges = [ByteRange.of(0, 0), ByteRange.suffix(1)]
        assert ranges_to_string(ranges) == "bytes=0-0, -1"

    def test_empty(self) -> None:
        with pytest.raises(InvalidArgumentError):
            ranges_to_string([])
