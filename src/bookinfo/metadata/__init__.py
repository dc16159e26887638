# ABOUTME: Metadata package for book search providers and the pipeline's data types.
# ABOUTME: Exports ExtractionResult, BookInfo and the BookSearchProvider protocol.

from bookinfo.metadata.google_books import GoogleBooksProvider
from bookinfo.metadata.provider import BookSearchProvider
from bookinfo.metadata.types import BookInfo, CandidateRecord, ExtractionResult

__all__ = [
    "BookInfo",
    "BookSearchProvider",
    "CandidateRecord",
    "ExtractionResult",
    "GoogleBooksProvider",
]
