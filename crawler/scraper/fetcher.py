"""HTTP fetcher: one bounded-timeout GET, streamed straight into the extractor."""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Iterator

import httpx

from crawler.config import settings
from crawler.scraper.errors import TransportError, UnexpectedStatusError
from crawler.scraper.extractor import extract
from crawler.scraper.models import Document

logger = logging.getLogger(__name__)


def _default_headers() -> dict[str, str]:
    return {"User-Agent": settings.user_agent}


def _iter_until(response: httpx.Response, deadline: float) -> Iterator[str]:
    """Yield decoded body chunks, giving up once *deadline* has passed.

    httpx timeouts apply to each connect/read step on its own; this caps the
    whole exchange so a server dribbling bytes cannot hold the call open.
    """
    for chunk in response.iter_text():
        if time.monotonic() > deadline:
            raise httpx.ReadTimeout(
                "response body not received within the request timeout",
                request=response.request,
            )
        yield chunk


def fetch(url: str) -> Document:
    """Fetch *url* and return the extracted :class:`Document`.

    The body is never buffered as a whole: it is decoded and tokenized chunk
    by chunk while it streams in.  ``settings.request_timeout`` bounds the
    whole request, body included.  The response is closed before this
    function returns or raises.

    Raises:
        TransportError: Malformed URL, DNS, connect, timeout or protocol
            failure, including failures while the body is still being read.
        UnexpectedStatusError: The final response status is not 200.
    """
    timeout = settings.request_timeout
    deadline = time.monotonic() + timeout
    logger.info("Fetching %s (timeout=%.1fs)", url, timeout)

    try:
        with httpx.Client(
            headers=_default_headers(),
            timeout=timeout,
            follow_redirects=True,
        ) as client:
            with client.stream("GET", url) as response:
                if response.status_code != httpx.codes.OK:
                    logger.warning(
                        "Page returned status code %d: %s", response.status_code, url
                    )
                    raise UnexpectedStatusError(url, response.status_code)
                doc = extract(_iter_until(response, deadline))
                status_code = response.status_code
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        logger.warning("Request to %s failed: %s", url, exc)
        raise TransportError(url, str(exc) or type(exc).__name__) from exc

    return replace(doc, url=url, meta=replace(doc.meta, status_code=status_code))
