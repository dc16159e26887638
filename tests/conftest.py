# ABOUTME: Shared pytest fixtures for Bookinfo tests.
# ABOUTME: Provides generated PDF files (valid and corrupt) for testing.

from collections.abc import Callable
from pathlib import Path

import fitz
import pytest

CLEAN_CODE_ISBN13 = "978-0-13-235088-4"


def _build_pdf(pages: list[str]) -> bytes:
    """Build a text-only PDF with one page per string, using PyMuPDF."""
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text, fontname="helv", fontsize=12)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def make_pdf(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a PDF with the given page texts into tmp_path."""

    def _make(pages: list[str], name: str = "book.pdf") -> Path:
        filepath = tmp_path / name
        filepath.write_bytes(_build_pdf(pages))
        return filepath

    return _make


@pytest.fixture
def sample_pdf(make_pdf: Callable[..., Path]) -> Path:
    """A short book whose copyright page (page 2) carries an ISBN."""
    return make_pdf(
        [
            "Clean Code\nA Handbook of Agile Software Craftsmanship",
            f"Copyright 2009 Pearson Education\nISBN {CLEAN_CODE_ISBN13}",
            "Contents\nChapter 1 Clean Code",
            "Chapter 1\nThere will be code.",
        ],
        name="clean_code.pdf",
    )


@pytest.fixture
def late_isbn_pdf(make_pdf: Callable[..., Path]) -> Path:
    """A book whose only ISBN is on page 5, beyond the first 4-page budget."""
    pages = [f"Front matter page {number}" for number in range(1, 5)]
    pages.append(f"Copyright page\nISBN {CLEAN_CODE_ISBN13}")
    pages.extend(f"Chapter {number}" for number in range(1, 6))
    return make_pdf(pages, name="late_isbn.pdf")


@pytest.fixture
def no_isbn_pdf(make_pdf: Callable[..., Path]) -> Path:
    """A 20-page book with no ISBN anywhere."""
    pages = ["Example Book\nFirst Edition"]
    pages.extend(f"Page {number} of prose" for number in range(2, 21))
    return make_pdf(pages, name="example_book.pdf")


@pytest.fixture
def corrupt_pdf(tmp_path: Path) -> Path:
    """Create a corrupt file that is not a valid PDF."""
    filepath = tmp_path / "corrupt.pdf"
    filepath.write_text("this is not a valid pdf file")
    return filepath
