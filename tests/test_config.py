"""Tests for tidings.config: CodecConfig frozen dataclass."""

import pytest

from tidings.config import DEFAULT_CONFIG, CodecConfig


class TestCodecConfig:
    def test_defaults(self) -> None:
        cfg = CodecConfig()

        assert cfg.two_digit_year_window == 80
        assert cfg.ext_value_charsets == ("UTF-8", "ISO-8859-1")
        assert cfg.list_separator == ", "

    def test_override(self) -> None:
        cfg = CodecConfig(two_digit_year_window=50, list_separator=",")

        assert cfg.two_digit_year_window == 50
        assert cfg.list_separator == ","
        assert cfg.ext_value_charsets == ("UTF-8", "ISO-8859-1")

    def test_frozen(self) -> None:
        cfg = CodecConfig()

        with pytest.raises(AttributeError):
            cfg.list_separator = ","  # type: ignore[misc]

    def test_default_instance(self) -> None:
        assert DEFAULT_CONFIG == CodecConfig()

    def test_hashable(self) -> None:
        assert hash(CodecConfig()) == hash(CodecConfig())
