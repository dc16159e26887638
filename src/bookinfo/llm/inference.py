# ABOUTME: Infers title, edition and ISBNs from raw book text with one LLM call.
# ABOUTME: Decoding the model's JSON is a separate step so it can be tested on its own.

import json
import logging
import re
from typing import Any

from bookinfo.errors import BookinfoError
from bookinfo.llm.completion import CompletionError, StructuredCompletion
from bookinfo.metadata.types import ExtractionResult

logger = logging.getLogger(__name__)

EXTRACTION_SYSTEM_PROMPT = """\
You are a helpful assistant that can find the title, edition number and ISBNs from the text of a book.
You will return your results as JSON without any markdown, using the keys "title", "edition" and "ISBNs".
You will return the edition number as an integer, separately from the title.
You will only return ISBNs that are actually present in the text, and that are in valid ISBN10 or ISBN13 format.
"""

# Matches a whole response wrapped in a ```json ... ``` fence.
_CODE_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```$", re.DOTALL)


class ExtractionError(BookinfoError):
    """Raised when title, edition and ISBNs cannot be extracted from the model."""


def build_extraction_prompt(text: str) -> str:
    """Build the user prompt embedding the extracted book text."""
    return (
        "Here is the text extracted from a book. "
        f"Can you extract the title, edition and ISBNs for me? {text}"
    )


def _strip_code_fence(raw: str) -> str:
    stripped = raw.strip()
    match = _CODE_FENCE_RE.match(stripped)
    return match.group(1).strip() if match else stripped


def decode_extraction(raw: str) -> ExtractionResult:
    """Parse a model response into an ExtractionResult.

    Expects a JSON object with a string "title", an integer "edition" and a
    list of strings under "ISBNs". A Markdown code fence around the object is
    tolerated; anything else that does not match raises ExtractionError.
    """
    try:
        data: Any = json.loads(_strip_code_fence(raw))
    except json.JSONDecodeError as exc:
        raise ExtractionError(f"Model response is not JSON: {raw[:80]!r}") from exc

    if not isinstance(data, dict):
        raise ExtractionError("Model response is not a JSON object")

    missing = [key for key in ("title", "edition", "ISBNs") if key not in data]
    if missing:
        raise ExtractionError(f"Model response is missing: {', '.join(missing)}")

    title = data["title"]
    edition = data["edition"]
    isbns = data["ISBNs"]

    if not isinstance(title, str):
        raise ExtractionError(f"title must be a string, got {type(title).__name__}")
    # bool is a subclass of int
    if isinstance(edition, bool) or not isinstance(edition, int):
        raise ExtractionError(f"edition must be an integer, got {edition!r}")
    if not isinstance(isbns, list) or not all(isinstance(isbn, str) for isbn in isbns):
        raise ExtractionError(f"ISBNs must be a list of strings, got {isbns!r}")

    return ExtractionResult(title=title, edition=edition, isbns=isbns)


def infer_title_edition_isbns(
    text: str,
    completion: StructuredCompletion,
    *,
    model: str | None = None,
) -> ExtractionResult:
    """Ask the model for the title, edition and ISBNs found in `text`.

    Runs at temperature 0 so repeated calls on the same text agree.

    Raises:
        ExtractionError: If the call fails or the response does not decode.
    """
    try:
        raw = completion.complete(
            EXTRACTION_SYSTEM_PROMPT,
            build_extraction_prompt(text),
            temperature=0.0,
            model=model,
        )
    except CompletionError as exc:
        raise ExtractionError(f"Failed to extract ISBN from the text: {exc}") from exc

    result = decode_extraction(raw)
    logger.debug(
        "Inferred title=%r edition=%d isbns=%s", result.title, result.edition, result.isbns
    )
    return result
