# ABOUTME: The `bookinfo extract` command for identifying a book from its PDF.
# ABOUTME: Runs the extraction pipeline and prints the assembled record as a table or JSON.

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from bookinfo.config import Settings, load_settings
from bookinfo.core.assembler import FormattingError
from bookinfo.core.pipeline import extract_book_info
from bookinfo.core.selector import SelectionError
from bookinfo.errors import BookinfoError
from bookinfo.formats.pdf import PdfParseError
from bookinfo.llm.completion import CompletionError, OpenAICompletion, StructuredCompletion
from bookinfo.llm.inference import ExtractionError
from bookinfo.metadata.google_books import GoogleBooksProvider
from bookinfo.metadata.http import BookinfoHttpClient, MetadataFetchError
from bookinfo.metadata.provider import BookSearchProvider
from bookinfo.metadata.types import BookInfo

logger = logging.getLogger(__name__)

# Checked in order; the first matching type names the failure.
_ERROR_CATEGORIES: list[tuple[type[BaseException], str]] = [
    (PdfParseError, "Could not parse PDF"),
    (ExtractionError, "Failed to extract title, edition and ISBNs"),
    (SelectionError, "Failed to select the best matching book"),
    (FormattingError, "Failed to format the description"),
    (MetadataFetchError, "Book search failed"),
    (CompletionError, "Language model call failed"),
    (OSError, "Could not read PDF"),
]


def _create_completion(settings: Settings) -> StructuredCompletion:
    """Create the default completion client (OpenAI)."""
    return OpenAICompletion(
        settings.openai_api_key,
        model=settings.extraction_model,
        max_tokens=settings.max_tokens,
    )


def _create_http_client() -> BookinfoHttpClient:
    """Create the HTTP client shared by the book search provider."""
    return BookinfoHttpClient()


def _create_provider(settings: Settings, http_client: BookinfoHttpClient) -> BookSearchProvider:
    """Create the default book search provider (Google Books)."""
    return GoogleBooksProvider(http_client=http_client, api_key=settings.google_books_api_key)


def _error_category(exc: BaseException) -> str:
    for error_type, category in _ERROR_CATEGORIES:
        if isinstance(exc, error_type):
            return category
    return "Error extracting book information"


def _render_table(info: BookInfo, title: str) -> Table:
    # Record values come from Google Books and are printed literally, never as markup.
    table = Table(title=Text(title), show_header=False, pad_edge=False)
    table.add_column("Field", style="bold", width=14)
    table.add_column("Value")

    if info.title:
        table.add_row("Title", Text(info.title))
    if info.subtitle:
        table.add_row("Subtitle", Text(info.subtitle))
    table.add_row("Edition", Text(str(info.edition)))
    if info.authors:
        table.add_row("Authors", Text(", ".join(info.authors)))
    if info.publisher:
        table.add_row("Publisher", Text(info.publisher))
    if info.published_date:
        table.add_row("Published", Text(info.published_date.isoformat()))
    if info.isbn10:
        table.add_row("ISBN-10", Text(info.isbn10))
    if info.isbn13:
        table.add_row("ISBN-13", Text(info.isbn13))
    if info.page_count:
        table.add_row("Pages", Text(str(info.page_count)))
    if info.thumbnail_link:
        table.add_row("Thumbnail", Text(info.thumbnail_link))
    if info.preview_link:
        table.add_row("Preview", Text(info.preview_link))
    if info.description:
        table.add_row("Description", Markdown(info.description))
    return table


@click.command()
@click.argument("pdf_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the record as JSON.")
@click.option(
    "--raw-description",
    is_flag=True,
    default=False,
    help="Keep the description as returned by Google Books instead of reformatting it.",
)
def extract(pdf_path: Path, as_json: bool, raw_description: bool) -> None:
    """Extract book information given a PDF file of a book."""
    console = Console()
    err_console = Console(stderr=True)

    settings = load_settings()
    completion = _create_completion(settings)

    with _create_http_client() as http_client:
        provider = _create_provider(settings, http_client)
        try:
            info = extract_book_info(
                pdf_path,
                completion,
                provider,
                settings,
                format_description=not raw_description,
            )
        except (BookinfoError, OSError) as exc:
            logger.debug("Extraction failed", exc_info=True)
            err_console.print(f"[red]Error:[/red] {_error_category(exc)}: {escape(str(exc))}")
            raise SystemExit(1) from exc

    if as_json:
        click.echo(json.dumps(info.to_dict(), indent=2, ensure_ascii=False))
    else:
        console.print(_render_table(info, title=pdf_path.name))
