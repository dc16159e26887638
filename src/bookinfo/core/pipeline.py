# ABOUTME: End-to-end pipeline turning one PDF into a BookInfo record.
# ABOUTME: Extract with page escalation, fetch candidates, select the best match, assemble.

import logging
from pathlib import Path

from bookinfo.config import Settings
from bookinfo.core.assembler import assemble_book_info
from bookinfo.core.escalation import TextExtractor, extract_with_escalation
from bookinfo.core.fetcher import fetch_candidates
from bookinfo.core.selector import select_best_candidate
from bookinfo.formats.pdf import extract_text_from_pdf
from bookinfo.llm.completion import StructuredCompletion
from bookinfo.metadata.provider import BookSearchProvider
from bookinfo.metadata.types import BookInfo

logger = logging.getLogger(__name__)


def extract_book_info(
    pdf_path: Path,
    completion: StructuredCompletion,
    provider: BookSearchProvider,
    settings: Settings,
    *,
    format_description: bool = True,
    text_extractor: TextExtractor = extract_text_from_pdf,
) -> BookInfo:
    """Run the full extraction pipeline for a single PDF.

    Any stage failure propagates; there is no partial result.

    Args:
        pdf_path: The book to identify.
        completion: Model client shared by every LLM stage.
        provider: Book search backend.
        settings: Models and page budgets for this run.
        format_description: Rewrite the description as Markdown.
        text_extractor: Reads text from the first N pages of a PDF.
    """
    extraction = extract_with_escalation(
        pdf_path,
        completion,
        start_pages=settings.start_pages,
        max_pages=settings.max_pages,
        text_extractor=text_extractor,
        model=settings.extraction_model,
    )
    candidates = fetch_candidates(extraction.title, extraction.isbns, provider)
    selected = select_best_candidate(
        extraction.title,
        extraction.edition,
        candidates,
        completion,
        model=settings.extraction_model,
    )
    return assemble_book_info(
        selected,
        extraction.edition,
        completion,
        model=settings.formatting_model,
        format_description=format_description,
    )
