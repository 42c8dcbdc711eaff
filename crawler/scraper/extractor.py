"""Content extraction: turns an HTML stream into a :class:`Document`.

The extractor is a single pass over :func:`iter_tokens`.  Apart from the
text buffer and the metadata fields it tracks one piece of state: whether it
is currently suppressing the body of a ``script``/``noscript``/``style``
element.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Union

from crawler.scraper.models import Document, Metadata
from crawler.scraper.text import attr_equals, attrs_to_map, normalize_text
from crawler.scraper.tokenizer import Source, Token, TokenKind, iter_tokens

logger = logging.getLogger(__name__)

SKIP_TAGS = frozenset({"script", "noscript", "style"})
BLOCK_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6", "p", "div", "br"})

_LINE_BREAK = "\n"
_BULLET = "\n• "


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass(frozen=True)
class Normal:
    """Tokens are dispatched by kind."""


@dataclass(frozen=True)
class Suppressing:
    """Every token is dropped until the end tag named ``tag``."""

    tag: str

    def ends_with(self, token: Token) -> bool:
        return token.kind is TokenKind.END_TAG and token.data == self.tag


State = Union[Normal, Suppressing]
NORMAL = Normal()


class _Extraction:
    """Mutable working set for one :func:`extract` call."""

    def __init__(self, tokens: Iterator[Token]) -> None:
        self.tokens = tokens
        self.state: State = NORMAL
        self.parts: List[str] = []
        self.title: Optional[str] = None
        self.description = ""

    def run(self) -> None:
        for token in self.tokens:
            if isinstance(self.state, Suppressing):
                if self.state.ends_with(token):
                    self.state = NORMAL
                continue
            self.dispatch(token)

    def dispatch(self, token: Token) -> None:
        if token.is_tag:
            self.on_tag(token)
        elif token.kind is TokenKind.TEXT:
            self.on_text(token.data)

    def on_tag(self, token: Token) -> None:
        name = token.data
        if name == "title":
            self.on_title()
        elif name == "meta":
            self.on_meta(token)
        elif name in SKIP_TAGS:
            self.state = Suppressing(name)
        elif name in BLOCK_TAGS:
            self.parts.append(_LINE_BREAK)
        elif name == "li":
            self.parts.append(_BULLET)

    def on_title(self) -> None:
        following = next(self.tokens, None)
        if following is None:
            return
        if following.kind is not TokenKind.TEXT:
            self.dispatch(following)
            return
        # First <title> wins; later ones are read but ignored.
        if self.title is None:
            self.title = following.data

    def on_meta(self, token: Token) -> None:
        attr_map = attrs_to_map(token.attrs)
        if attr_equals(attr_map, "property", "og:description"):
            self.description = attr_map.get("content", "")
        elif attr_equals(attr_map, "name", "description") and not attr_equals(
            attr_map, "property", "og:description"
        ):
            self.description = attr_map.get("content", "")

    def on_text(self, data: str) -> None:
        text = data.strip()
        if text:
            self.parts.append(text)
            self.parts.append(" ")


def extract(stream: Source, encoding: Optional[str] = None) -> Document:
    """Extract normalized body text and metadata from an HTML *stream*.

    *stream* may be ``bytes``, ``str`` or an iterable of chunks of either.
    Malformed markup never raises; whatever was collected before the parser
    gave up is returned.

    The returned document has an empty ``url`` and a ``status_code`` of 200:
    callers are expected to have checked the HTTP status already and to fill
    in the URL themselves (see :func:`crawler.scraper.fetcher.fetch`).
    """
    work = _Extraction(iter_tokens(stream, encoding))
    work.run()

    text = normalize_text("".join(work.parts))
    logger.debug(
        "Extracted %d characters of text (title=%r)", len(text), work.title or ""
    )
    return Document(
        text=text,
        meta=Metadata(
            title=work.title or "",
            description=work.description,
            timestamp=_utc_timestamp(),
            status_code=200,
        ),
    )
