"""Tests for tidings.http.names: the well-known header catalog."""

from tidings.http.names import HeaderName
from tidings.http.store import HeaderStore


class TestHeaderName:
    def test_canonical_spelling(self) -> None:
        assert HeaderName.CONTENT_TYPE == "Content-Type"
        assert HeaderName.ETAG == "ETag"
        assert HeaderName.WWW_AUTHENTICATE == "WWW-Authenticate"

    def test_members_are_strings(self) -> None:
        assert all(isinstance(name, str) for name in HeaderName)

    def test_values_unique_case_insensitively(self) -> None:
        folded = [name.lower() for name in HeaderName]
        assert len(folded) == len(set(folded))

    def test_usable_as_store_key(self) -> None:
        store = HeaderStore()
        store.set(HeaderName.ACCEPT, "*/*")
        assert store.get_first("accept") == "*/*"
