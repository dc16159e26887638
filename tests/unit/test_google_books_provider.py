# ABOUTME: Unit tests for GoogleBooksProvider and the volumes response parser.
# ABOUTME: Uses a FakeHttpClient to test queries, parsing, API keys, and error propagation.

from typing import Any

import pytest

from bookinfo.metadata.google_books import GoogleBooksProvider
from bookinfo.metadata.google_books_parser import parse_volumes_response
from bookinfo.metadata.http import MetadataFetchError
from bookinfo.metadata.provider import BookSearchProvider
from tests.fixtures.google_books_responses import (
    CLEAN_CODE_AUDIO_VOLUME,
    CLEAN_CODE_VOLUME,
    EMPTY_SEARCH_RESPONSE,
    ISBN_SEARCH_RESPONSE,
    PRAGMATIC_VOLUME,
    TITLE_SEARCH_RESPONSE,
)


class FakeHttpClient:
    """Fake HTTP client that returns canned responses based on the q= parameter."""

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self._responses = responses or {}
        self.request_log: list[tuple[str, dict[str, str] | None]] = []

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        self.request_log.append((url, params))
        query = (params or {}).get("q", "")
        for pattern, response in self._responses.items():
            if pattern in query:
                if isinstance(response, Exception):
                    raise response
                return response
        return EMPTY_SEARCH_RESPONSE


class TestGoogleBooksProviderProtocol:
    """Tests that GoogleBooksProvider satisfies BookSearchProvider."""

    def test_satisfies_protocol(self) -> None:
        """GoogleBooksProvider implements the BookSearchProvider protocol."""
        provider = GoogleBooksProvider(http_client=FakeHttpClient())
        assert isinstance(provider, BookSearchProvider)

    def test_name_property(self) -> None:
        """Provider name is 'googlebooks'."""
        provider = GoogleBooksProvider(http_client=FakeHttpClient())
        assert provider.name == "googlebooks"


class TestSearchByIsbn:
    """Tests for ISBN-based lookup."""

    def test_returns_volume_infos(self) -> None:
        """Every item's volumeInfo becomes a candidate record."""
        client = FakeHttpClient({"isbn:9780132350884": ISBN_SEARCH_RESPONSE})
        provider = GoogleBooksProvider(http_client=client)
        assert provider.search_by_isbn("9780132350884") == [
            CLEAN_CODE_VOLUME,
            CLEAN_CODE_AUDIO_VOLUME,
        ]

    def test_queries_volumes_endpoint_with_isbn(self) -> None:
        """The request targets the volumes endpoint with q=isbn:<isbn>."""
        client = FakeHttpClient()
        provider = GoogleBooksProvider(http_client=client)
        provider.search_by_isbn("0132350882")
        url, params = client.request_log[0]
        assert url == "https://www.googleapis.com/books/v1/volumes"
        assert params == {"q": "isbn:0132350882"}

    def test_no_items_returns_empty(self) -> None:
        """A response without items yields no candidates."""
        provider = GoogleBooksProvider(http_client=FakeHttpClient())
        assert provider.search_by_isbn("9780000000000") == []

    def test_fetch_error_propagates(self) -> None:
        """Request failures are left for the caller to handle."""
        client = FakeHttpClient({"isbn:": MetadataFetchError("HTTP 503")})
        provider = GoogleBooksProvider(http_client=client)
        with pytest.raises(MetadataFetchError):
            provider.search_by_isbn("9780132350884")

    def test_api_key_added_when_configured(self) -> None:
        """A configured API key is sent as the key parameter."""
        client = FakeHttpClient()
        provider = GoogleBooksProvider(http_client=client, api_key="gb-key")
        provider.search_by_isbn("9780132350884")
        _, params = client.request_log[0]
        assert params == {"q": "isbn:9780132350884", "key": "gb-key"}


class TestSearchByTitle:
    """Tests for title search."""

    def test_returns_volume_infos(self) -> None:
        """Title search returns the matching volumes."""
        client = FakeHttpClient({"intitle:The Pragmatic Programmer": TITLE_SEARCH_RESPONSE})
        provider = GoogleBooksProvider(http_client=client)
        assert provider.search_by_title("The Pragmatic Programmer") == [PRAGMATIC_VOLUME]

    def test_query_uses_intitle(self) -> None:
        """The title is sent as an intitle: query."""
        client = FakeHttpClient()
        provider = GoogleBooksProvider(http_client=client)
        provider.search_by_title("Example Book")
        _, params = client.request_log[0]
        assert params == {"q": "intitle:Example Book"}


class TestParseVolumesResponse:
    """Tests for parse_volumes_response."""

    def test_missing_items(self) -> None:
        """No items key yields an empty list."""
        assert parse_volumes_response(EMPTY_SEARCH_RESPONSE) == []

    def test_null_items(self) -> None:
        """A null items value yields an empty list."""
        assert parse_volumes_response({"items": None}) == []

    def test_items_without_volume_info_skipped(self) -> None:
        """Items lacking a volumeInfo dict are dropped."""
        data = {"items": [{"id": "x"}, {"volumeInfo": PRAGMATIC_VOLUME}, "junk"]}
        assert parse_volumes_response(data) == [PRAGMATIC_VOLUME]

    def test_preserves_order(self) -> None:
        """Records keep the API's order."""
        records = parse_volumes_response(ISBN_SEARCH_RESPONSE)
        assert [r["title"] for r in records] == ["Clean Code", "Clean Code (Audiobook)"]
