# ABOUTME: PDF text extraction using pypdf.
# ABOUTME: Reads only the first N pages, since front matter is where ISBNs live.

import logging
from io import BytesIO
from pathlib import Path

# pypdf logs a warning for every malformed object reference it recovers from
logging.getLogger("pypdf").setLevel(logging.ERROR)

from pypdf import PdfReader  # noqa: E402
from pypdf.errors import PdfReadError  # noqa: E402

from bookinfo.errors import BookinfoError  # noqa: E402

logger = logging.getLogger(__name__)


class PdfParseError(BookinfoError):
    """Raised when a file cannot be parsed as a PDF."""


def _normalize_page_text(text: str) -> str:
    """Collapse all whitespace runs in a page's text to single spaces."""
    return " ".join(text.split())


def extract_text_from_pdf(path: Path, pages: int) -> str:
    """Return the text of the pages with index less than `pages`.

    Words within a page are joined by single spaces and pages are concatenated
    without a separator. Pages with no text layer contribute nothing.

    Raises:
        OSError: If the file cannot be read.
        PdfParseError: If the file is not a readable PDF.
    """
    data = Path(path).read_bytes()

    try:
        reader = PdfReader(BytesIO(data))
        page_count = min(pages, len(reader.pages))
        parts = [
            _normalize_page_text(reader.pages[index].extract_text() or "")
            for index in range(page_count)
        ]
    except PdfReadError as exc:
        raise PdfParseError(f"Could not parse {path}: {exc}") from exc

    logger.debug("Extracted %d page(s) from %s", len(parts), path)
    return "".join(parts)
