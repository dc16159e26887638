# ABOUTME: Core data structures for the extract -> search -> select -> assemble pipeline.
# ABOUTME: ExtractionResult comes from the LLM, BookInfo is the record printed to the user.

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any

# Output key names for BookInfo fields, matching the Google Books volumeInfo naming.
_OUTPUT_KEYS = {
    "published_date": "publishedDate",
    "page_count": "pageCount",
    "thumbnail_link": "thumbnailLink",
    "preview_link": "previewLink",
}

# A Google Books volumeInfo object, kept as the loosely-typed dict the API returns.
CandidateRecord = dict[str, Any]


@dataclass
class ExtractionResult:
    """Title, edition and ISBNs inferred from the first pages of a PDF.

    Only lives for the duration of one run. The edition here is the only
    source of the edition number in the final BookInfo; Google Books has no
    edition field.
    """

    title: str
    edition: int
    isbns: list[str] = field(default_factory=list)


@dataclass
class BookInfo:
    """Structured book record assembled from the selected candidate.

    Every field except edition is optional. None means the candidate did not
    carry that field; it is never replaced with a placeholder.
    """

    edition: int
    title: str | None = None
    subtitle: str | None = None
    authors: list[str] | None = None
    publisher: str | None = None
    published_date: date | None = None
    description: str | None = None
    isbn10: str | None = None
    isbn13: str | None = None
    page_count: int | None = None
    thumbnail_link: str | None = None
    preview_link: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-ready dict, dropping absent fields.

        Keys use the camelCase names of the printed record, e.g. publishedDate.
        """
        result: dict[str, Any] = {}
        for key, value in asdict(self).items():
            if value is None:
                continue
            if isinstance(value, date):
                value = value.isoformat()
            result[_OUTPUT_KEYS.get(key, key)] = value
        return result
