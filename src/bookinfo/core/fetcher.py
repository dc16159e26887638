# ABOUTME: Fetches candidate records for a book from a search provider.
# ABOUTME: Searches every ISBN concurrently, isolating failures, then falls back to a title search.

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed

from bookinfo.metadata.http import MetadataFetchError
from bookinfo.metadata.provider import BookSearchProvider
from bookinfo.metadata.types import CandidateRecord

logger = logging.getLogger(__name__)


def _search_isbn(provider: BookSearchProvider, isbn: str) -> list[CandidateRecord]:
    """Search one ISBN; a failed request counts as zero results."""
    try:
        return provider.search_by_isbn(isbn)
    except MetadataFetchError as exc:
        logger.warning("ISBN search failed for %s: %s", isbn, exc)
        return []


def fetch_candidates(
    title: str, isbns: list[str], provider: BookSearchProvider
) -> list[CandidateRecord]:
    """Collect candidate records for the given ISBNs, or for the title.

    One search per ISBN runs concurrently and all of them finish before this
    returns. Results are concatenated in completion order, each ISBN's records
    keeping their own order.

    The title search only runs when no per-ISBN result lists exist at all,
    i.e. when `isbns` is empty. ISBNs that all come back with zero records
    do not trigger it.
    """
    per_isbn: list[list[CandidateRecord]] = []

    if isbns:
        with ThreadPoolExecutor(max_workers=len(isbns)) as executor:
            futures = {executor.submit(_search_isbn, provider, isbn): isbn for isbn in isbns}
            for future in as_completed(futures):
                records = future.result()
                logger.debug("ISBN %s: %d candidate(s)", futures[future], len(records))
                per_isbn.append(records)

    if not per_isbn:
        try:
            per_isbn.append(provider.search_by_title(title))
        except MetadataFetchError as exc:
            logger.error("Title search failed for %r: %s", title, exc)

    candidates = [record for records in per_isbn for record in records]
    logger.info("Found %d candidate record(s) via %s", len(candidates), provider.name)
    return candidates
