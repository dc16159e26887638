# ABOUTME: Parsing functions for Google Books volumes API JSON responses.
# ABOUTME: Flattens search results into volumeInfo candidate records.

from typing import Any

from bookinfo.metadata.types import CandidateRecord


def parse_volumes_response(data: dict[str, Any]) -> list[CandidateRecord]:
    """Extract the volumeInfo objects from a volumes search response.

    A response with no matches omits "items" entirely, so missing, null or
    empty lists all yield an empty result. Items without a volumeInfo dict
    are skipped.
    """
    items = data.get("items") or []
    records: list[CandidateRecord] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        volume_info = item.get("volumeInfo")
        if isinstance(volume_info, dict):
            records.append(volume_info)
    return records


def build_isbn_query(isbn: str) -> str:
    """Build the q= value for an ISBN lookup."""
    return f"isbn:{isbn.strip()}"


def build_title_query(title: str) -> str:
    """Build the q= value for a title search."""
    return f"intitle:{title.strip()}"
