"""Tests for tidings.__init__: the lazy public API."""

import importlib

import pytest

import tidings


class TestRegistry:
    def test_registry_matches_all(self) -> None:
        assert set(tidings._LAZY_IMPORTS) == set(tidings.__all__)

    @pytest.mark.parametrize(("name", "module_name"), sorted(tidings._LAZY_IMPORTS.items()))
    def test_resolves_to_defining_module(self, name: str, module_name: str) -> None:
        """The top-level name is the very object its registered module defines."""
        module = importlib.import_module(module_name)
        assert getattr(tidings, name) is getattr(module, name)

    @pytest.mark.parametrize("name", tidings.__all__)
    def test_public_names_are_types(self, name: str) -> None:
        assert isinstance(getattr(tidings, name), type)


class TestLookupFailures:
    def test_unknown_name(self) -> None:
        with pytest.raises(AttributeError, match="has no attribute 'HttpResponse'"):
            tidings.HttpResponse  # noqa: B018

    def test_private_module_names_not_exported(self) -> None:
        with pytest.raises(AttributeError):
            tidings.__getattr__("DEFAULT_CONFIG")


class TestPublicApi:
    def test_version(self) -> None:
        assert tidings.__version__ == "0.1.0"

    def test_errors_share_root(self) -> None:
        for name in ("HeaderParseError", "InvalidArgumentError", "ReadOnlyHeadersError"):
            assert issubclass(getattr(tidings, name), tidings.TidingsError)

    def test_top_level_usage(self) -> None:
        headers = tidings.HttpHeaders()
        headers.content_type = tidings.MediaType("text", "plain")
        assert headers.get_first(tidings.HeaderName.CONTENT_TYPE) == "text/plain"
