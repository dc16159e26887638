# ABOUTME: Google Books metadata provider implementation.
# ABOUTME: Searches the volumes API by ISBN or title and returns raw volumeInfo records.

import logging

from bookinfo.metadata.google_books_parser import (
    build_isbn_query,
    build_title_query,
    parse_volumes_response,
)
from bookinfo.metadata.http import HttpClient
from bookinfo.metadata.types import CandidateRecord

logger = logging.getLogger(__name__)

_VOLUMES_URL = "https://www.googleapis.com/books/v1/volumes"


class GoogleBooksProvider:
    """Book search provider backed by the Google Books volumes API.

    Uses dependency-injected HttpClient for testability. Request failures
    surface as MetadataFetchError; deciding whether to absorb them is left
    to the caller.
    """

    def __init__(self, http_client: HttpClient, api_key: str | None = None) -> None:
        self._http = http_client
        self._api_key = api_key

    @property
    def name(self) -> str:
        return "googlebooks"

    def search_by_isbn(self, isbn: str) -> list[CandidateRecord]:
        """Return every volume Google Books lists for an ISBN."""
        records = self._search(build_isbn_query(isbn))
        logger.debug("ISBN %s matched %d volume(s)", isbn, len(records))
        return records

    def search_by_title(self, title: str) -> list[CandidateRecord]:
        """Return volumes whose title matches the free-text title."""
        records = self._search(build_title_query(title))
        logger.debug("Title %r matched %d volume(s)", title, len(records))
        return records

    def _search(self, query: str) -> list[CandidateRecord]:
        params = {"q": query}
        if self._api_key:
            params["key"] = self._api_key
        data = self._http.get(_VOLUMES_URL, params=params)
        return parse_volumes_response(data)
