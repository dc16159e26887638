# ABOUTME: Page-count escalation loop around text extraction and ISBN inference.
# ABOUTME: Doubles the page budget (4 -> 8 -> 16) until the model reports at least one ISBN.

import logging
from collections.abc import Callable
from pathlib import Path

from bookinfo.config import DEFAULT_MAX_PAGES, DEFAULT_START_PAGES
from bookinfo.formats.pdf import extract_text_from_pdf
from bookinfo.llm.completion import StructuredCompletion
from bookinfo.llm.inference import infer_title_edition_isbns
from bookinfo.metadata.types import ExtractionResult

logger = logging.getLogger(__name__)

TextExtractor = Callable[[Path, int], str]


def extract_with_escalation(
    pdf_path: Path,
    completion: StructuredCompletion,
    *,
    start_pages: int = DEFAULT_START_PAGES,
    max_pages: int = DEFAULT_MAX_PAGES,
    text_extractor: TextExtractor = extract_text_from_pdf,
    model: str | None = None,
) -> ExtractionResult:
    """Extract title, edition and ISBNs, reading more pages until ISBNs appear.

    Each attempt reads the first `pages` pages and runs one inference call.
    The first attempt with a non-empty ISBN list wins. If the budget reaches
    `max_pages` without any ISBNs, the last result is returned as-is so the
    caller can fall back to a title search.

    Args:
        pdf_path: The PDF to read.
        completion: Model client for the inference calls.
        start_pages: Page budget for the first attempt.
        max_pages: Ceiling for the page budget.
        text_extractor: Reads text from the first N pages of a PDF.
        model: Overrides the completion client's default model.

    Returns:
        The ExtractionResult of the last attempt.
    """
    pages = start_pages
    while True:
        text = text_extractor(pdf_path, pages)
        result = infer_title_edition_isbns(text, completion, model=model)
        logger.info(
            "Read %d page(s) of %s: title=%r, %d ISBN(s)",
            pages,
            pdf_path,
            result.title,
            len(result.isbns),
        )

        if result.isbns:
            return result
        if pages >= max_pages:
            logger.warning(
                "No ISBNs found in the first %d pages of %s; searching by title",
                pages,
                pdf_path,
            )
            return result
        pages = min(pages * 2, max_pages)
