# ABOUTME: Converts a selected Google Books record into the BookInfo output record.
# ABOUTME: Copies present fields, splits ISBNs by label, and rewrites the description as Markdown.

import logging
import re
from datetime import date

from bookinfo.errors import BookinfoError
from bookinfo.llm.completion import CompletionError, StructuredCompletion
from bookinfo.metadata.types import BookInfo, CandidateRecord

logger = logging.getLogger(__name__)

DESCRIPTION_SYSTEM_PROMPT = (
    "You are a helpful assistant that can reorganize text into structured Markdown format."
)

# Reformatting is allowed to vary stylistically from run to run.
DESCRIPTION_TEMPERATURE = 0.7

# Google Books dates come as "2004", "2004-05" or "2004-05-12".
_PUBLISHED_DATE_RE = re.compile(r"^(\d{4})(?:-(\d{1,2}))?(?:-(\d{1,2}))?")


class FormattingError(BookinfoError):
    """Raised when the description cannot be reformatted."""


def parse_published_date(value: str) -> date | None:
    """Parse a Google Books publishedDate; partial dates fall on the first day.

    Returns None if the value is not a recognizable date.
    """
    match = _PUBLISHED_DATE_RE.match(value.strip())
    if not match:
        return None
    year, month, day = match.groups()
    try:
        return date(int(year), int(month or 1), int(day or 1))
    except ValueError:
        return None


def split_isbns(identifiers: list[dict[str, str]]) -> tuple[str | None, str | None]:
    """Return (isbn10, isbn13) from industryIdentifiers.

    When a label appears more than once, the last identifier wins.
    """
    isbn10 = None
    isbn13 = None
    for entry in identifiers:
        kind = entry.get("type")
        if kind == "ISBN_10":
            isbn10 = entry.get("identifier")
        elif kind == "ISBN_13":
            isbn13 = entry.get("identifier")
    return isbn10, isbn13


def build_description_prompt(description: str) -> str:
    return (
        "Given the following description of a book, restructure it into structured "
        "Markdown format.\n"
        'It should not include the title, authors, or a top level heading such as "Description".\n'
        f'"{description}"\n'
    )


def description_to_markdown(
    description: str,
    completion: StructuredCompletion,
    *,
    model: str | None = None,
) -> str:
    """Rewrite a free-text description as structured Markdown.

    Raises:
        FormattingError: If the model call fails.
    """
    try:
        return completion.complete(
            DESCRIPTION_SYSTEM_PROMPT,
            build_description_prompt(description),
            temperature=DESCRIPTION_TEMPERATURE,
            model=model,
        )
    except CompletionError as exc:
        raise FormattingError(f"Failed to convert description to markdown: {exc}") from exc


def assemble_book_info(
    candidate: CandidateRecord,
    edition: int,
    completion: StructuredCompletion,
    *,
    model: str | None = None,
    format_description: bool = True,
) -> BookInfo:
    """Map a candidate record onto BookInfo.

    Fields missing (or empty) on the candidate stay None. The edition always
    comes from the caller. If the description rewrite fails, the whole
    conversion fails rather than returning a record without it.

    Args:
        candidate: The selected Google Books volumeInfo.
        edition: Edition number from the initial extraction.
        completion: Model client for the description rewrite.
        model: Model used for the description rewrite.
        format_description: When False, copy the description unchanged.

    Raises:
        FormattingError: If the description rewrite fails.
    """
    info = BookInfo(edition=edition)

    if candidate.get("title"):
        info.title = candidate["title"]
    if candidate.get("subtitle"):
        info.subtitle = candidate["subtitle"]
    if candidate.get("authors"):
        info.authors = list(candidate["authors"])
    if candidate.get("publisher"):
        info.publisher = candidate["publisher"]
    if candidate.get("publishedDate"):
        info.published_date = parse_published_date(candidate["publishedDate"])
        if info.published_date is None:
            logger.warning("Ignoring unparsable publishedDate %r", candidate["publishedDate"])
    if candidate.get("pageCount"):
        info.page_count = candidate["pageCount"]
    if candidate.get("previewLink"):
        info.preview_link = candidate["previewLink"]

    image_links = candidate.get("imageLinks") or {}
    if image_links.get("thumbnail"):
        info.thumbnail_link = image_links["thumbnail"]

    if candidate.get("industryIdentifiers"):
        info.isbn10, info.isbn13 = split_isbns(candidate["industryIdentifiers"])

    if candidate.get("description"):
        if format_description:
            info.description = description_to_markdown(
                candidate["description"], completion, model=model
            )
        else:
            info.description = candidate["description"]

    return info
