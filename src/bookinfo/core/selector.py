# ABOUTME: Picks the best candidate record for a title and edition with one LLM call.
# ABOUTME: The model answers with the 1-based number of the best record in a numbered list.

import json
import logging
import re

from bookinfo.errors import BookinfoError
from bookinfo.llm.completion import CompletionError, StructuredCompletion
from bookinfo.metadata.types import CandidateRecord

logger = logging.getLogger(__name__)

SELECTION_SYSTEM_PROMPT = """\
You are a helpful assistant that given a title and edition number can select the best matching record
from a list of possible matches generated by the google book search api.
You will return your result as the number of the best match record in the list, as an integer, without any markdown.
"""

_NON_DIGIT_RE = re.compile(r"\D")


class SelectionError(BookinfoError):
    """Raised when the best matching candidate cannot be determined."""


def format_candidate_list(candidates: list[CandidateRecord]) -> str:
    """Render candidates as 'Book N: <json>' entries separated by blank lines."""
    return "\n\n".join(
        f"Book {number}: {json.dumps(record, ensure_ascii=False)}"
        for number, record in enumerate(candidates, start=1)
    )


def build_selection_prompt(title: str, edition: int, candidates: list[CandidateRecord]) -> str:
    """Build the user prompt listing every candidate and the target book."""
    return (
        "Given the following list of possible matches\n"
        f"{format_candidate_list(candidates)}\n"
        "Find the best match for the following title and edition number:\n"
        f"Title: {title}\n"
        f"Edition: {edition}\n"
    )


def parse_choice(response: str) -> int:
    """Turn the model's answer into a zero-based index.

    All non-digit characters are dropped, so "Book 3" and "3." both give 2.

    Raises:
        SelectionError: If the response contains no digits.
    """
    digits = _NON_DIGIT_RE.sub("", response)
    if not digits:
        raise SelectionError(f"Model did not answer with a record number: {response[:80]!r}")
    return int(digits) - 1


def select_best_candidate(
    title: str,
    edition: int,
    candidates: list[CandidateRecord],
    completion: StructuredCompletion,
    *,
    model: str | None = None,
) -> CandidateRecord:
    """Ask the model which candidate best matches the title and edition.

    Raises:
        SelectionError: If there are no candidates, the model call fails,
            or the answer does not name a record in the list.
    """
    if not candidates:
        raise SelectionError(f"No candidate records found for {title!r}")

    try:
        response = completion.complete(
            SELECTION_SYSTEM_PROMPT,
            build_selection_prompt(title, edition, candidates),
            temperature=0.0,
            model=model,
        )
    except CompletionError as exc:
        raise SelectionError(f"Failed to find the best matching book: {exc}") from exc

    index = parse_choice(response)
    if not 0 <= index < len(candidates):
        raise SelectionError(
            f"Model chose record {index + 1}, but only {len(candidates)} were offered"
        )

    logger.info("Selected candidate %d of %d", index + 1, len(candidates))
    return candidates[index]
