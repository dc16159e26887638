# ABOUTME: Bookinfo extracts book metadata from a PDF using an LLM and Google Books.
# ABOUTME: The package root only carries the version string.

__version__ = "0.1.0"
