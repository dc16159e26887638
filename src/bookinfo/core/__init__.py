# ABOUTME: Core pipeline stages: page escalation, candidate fetch, selection, assembly.
# ABOUTME: extract_book_info wires them together for a single PDF.

from bookinfo.core.assembler import FormattingError, assemble_book_info
from bookinfo.core.escalation import extract_with_escalation
from bookinfo.core.fetcher import fetch_candidates
from bookinfo.core.pipeline import extract_book_info
from bookinfo.core.selector import SelectionError, select_best_candidate

__all__ = [
    "FormattingError",
    "SelectionError",
    "assemble_book_info",
    "extract_book_info",
    "extract_with_escalation",
    "fetch_candidates",
    "select_best_candidate",
]
