# ABOUTME: Language-model package: the completion client and title/edition/ISBN inference.
# ABOUTME: Everything that talks to the model goes through StructuredCompletion.

from bookinfo.llm.completion import CompletionError, OpenAICompletion, StructuredCompletion
from bookinfo.llm.inference import ExtractionError, infer_title_edition_isbns

__all__ = [
    "CompletionError",
    "ExtractionError",
    "OpenAICompletion",
    "StructuredCompletion",
    "infer_title_edition_isbns",
]
