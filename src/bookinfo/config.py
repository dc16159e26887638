# ABOUTME: Runtime settings for Bookinfo, read once from the environment at startup.
# ABOUTME: The resulting Settings value is passed explicitly to the components that need it.

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

DEFAULT_EXTRACTION_MODEL = "gpt-4o-mini"
DEFAULT_FORMATTING_MODEL = "gpt-4o"
DEFAULT_MAX_TOKENS = 16000
DEFAULT_START_PAGES = 4
DEFAULT_MAX_PAGES = 16


@dataclass(frozen=True)
class Settings:
    """Configuration for one Bookinfo run.

    The API key may be None; that is only reported when the first model
    call is made.
    """

    openai_api_key: str | None = None
    extraction_model: str = DEFAULT_EXTRACTION_MODEL
    formatting_model: str = DEFAULT_FORMATTING_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    google_books_api_key: str | None = None
    start_pages: int = DEFAULT_START_PAGES
    max_pages: int = DEFAULT_MAX_PAGES


def load_settings(env_file: Path | None = None) -> Settings:
    """Build Settings from the process environment.

    Loads a .env file first (the given path, or one found from the current
    directory). Variables already set in the environment take precedence.
    """
    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv(find_dotenv(usecwd=True))

    return Settings(
        openai_api_key=os.environ.get("OPENAI_API_KEY") or None,
        extraction_model=os.environ.get("BOOKINFO_EXTRACTION_MODEL") or DEFAULT_EXTRACTION_MODEL,
        formatting_model=os.environ.get("BOOKINFO_FORMATTING_MODEL") or DEFAULT_FORMATTING_MODEL,
        google_books_api_key=os.environ.get("GOOGLE_BOOKS_API_KEY") or None,
    )
