# ABOUTME: BookSearchProvider protocol defining the contract for book search sources.
# ABOUTME: Google Books implements it; the candidate fetcher only depends on this protocol.

from typing import Protocol, runtime_checkable

from bookinfo.metadata.types import CandidateRecord


@runtime_checkable
class BookSearchProvider(Protocol):
    """Protocol for book search services.

    Implementations return raw candidate records and raise
    MetadataFetchError when the request itself fails.
    """

    @property
    def name(self) -> str: ...

    def search_by_isbn(self, isbn: str) -> list[CandidateRecord]: ...

    def search_by_title(self, title: str) -> list[CandidateRecord]: ...
