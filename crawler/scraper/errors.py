"""Exceptions raised by :func:`crawler.scraper.fetch`."""

from __future__ import annotations


class FetchError(Exception):
    """Base class for every failure to obtain a page."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class TransportError(FetchError):
    """DNS, connect, timeout or protocol failure while talking to the server."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(url, f"request to {url} failed: {reason}")
        self.reason = reason


class UnexpectedStatusError(FetchError):
    """The server answered with something other than ``200 OK``."""

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(url, f"unexpected status code {status_code} for {url}")
        self.status_code = status_code
