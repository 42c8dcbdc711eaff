"""Scraper package — single-page fetch & text extraction."""

from crawler.scraper.errors import FetchError, TransportError, UnexpectedStatusError
from crawler.scraper.extractor import extract
from crawler.scraper.fetcher import fetch
from crawler.scraper.models import Document, Metadata

__all__ = [
    "fetch",
    "extract",
    "Document",
    "Metadata",
    "FetchError",
    "TransportError",
    "UnexpectedStatusError",
]
