"""Lazy HTML token stream.

:func:`iter_tokens` turns a byte or character stream into a forward-only
sequence of :class:`Token` objects.  Input is consumed one chunk at a time and
tokens are handed out as soon as the parser has seen them, so a large page is
never held in memory as a token list.
"""

from __future__ import annotations

import codecs
import html.parser
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple, Union

Chunk = Union[bytes, bytearray, str]
Source = Union[Chunk, Iterable[Chunk]]
Attributes = Tuple[Tuple[str, str], ...]

logger = logging.getLogger(__name__)

# Newer html.parser releases already read <title> as escapable raw text.
_NATIVE_RCDATA_TITLE = "title" in getattr(html.parser.HTMLParser, "RCDATA_CONTENT_ELEMENTS", ())


class TokenKind(Enum):
    START_TAG = "start_tag"
    END_TAG = "end_tag"
    SELF_CLOSING_TAG = "self_closing_tag"
    TEXT = "text"
    COMMENT = "comment"
    DOCTYPE = "doctype"


@dataclass(frozen=True)
class Token:
    """One markup token.

    ``data`` is the lowercased tag name for tag tokens, and the decoded
    content for text, comment and doctype tokens.
    """

    kind: TokenKind
    data: str
    attrs: Attributes = ()

    @property
    def is_tag(self) -> bool:
        return self.kind in (TokenKind.START_TAG, TokenKind.SELF_CLOSING_TAG)


class _TokenCollector(html.parser.HTMLParser):
    """HTMLParser that queues tokens instead of acting on them.

    Consecutive text events are merged, so a text run split across two
    ``feed`` calls still comes out as a single TEXT token.  ``<title>``
    content is escapable raw text: markup inside it is kept as literal text
    up to ``</title>`` and character references are decoded.
    """

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self._queue: List[Token] = []
        self._text: List[str] = []
        self._escapable = False

    # -- HTMLParser callbacks -------------------------------------------------

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._push(Token(TokenKind.START_TAG, tag, _clean_attrs(attrs)))
        if tag == "title" and not _NATIVE_RCDATA_TITLE:
            self.set_cdata_mode(tag)
            self._escapable = True

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._push(Token(TokenKind.SELF_CLOSING_TAG, tag, _clean_attrs(attrs)))

    def handle_endtag(self, tag: str) -> None:
        self._escapable = False
        self._push(Token(TokenKind.END_TAG, tag))

    def handle_data(self, data: str) -> None:
        if self._escapable:
            data = html.unescape(data)
        if data:
            self._text.append(data)

    def handle_comment(self, data: str) -> None:
        self._push(Token(TokenKind.COMMENT, data))

    def handle_decl(self, decl: str) -> None:
        self._push(Token(TokenKind.DOCTYPE, decl))

    # -- queue management -----------------------------------------------------

    def _flush_text(self) -> None:
        if self._text:
            self._queue.append(Token(TokenKind.TEXT, "".join(self._text)))
            self._text = []

    def _push(self, token: Token) -> None:
        self._flush_text()
        self._queue.append(token)

    def drain(self, final: bool = False) -> List[Token]:
        """Hand over every completed token queued so far."""
        if final:
            self._flush_text()
        tokens, self._queue = self._queue, []
        return tokens


def _clean_attrs(attrs: list[tuple[str, str | None]]) -> Attributes:
    # Valueless attributes (``<input disabled>``) come through as None.
    return tuple((name, value if value is not None else "") for name, value in attrs)


def _iter_text(source: Source, encoding: str) -> Iterator[str]:
    """Yield decoded text chunks from *source*."""
    if isinstance(source, (bytes, bytearray, str)):
        source = (source,)

    decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
    for chunk in source:
        text = chunk if isinstance(chunk, str) else decoder.decode(bytes(chunk))
        if text:
            yield text
    tail = decoder.decode(b"", final=True)
    if tail:
        yield tail


def iter_tokens(source: Source, encoding: Optional[str] = None) -> Iterator[Token]:
    """Lazily tokenize *source*.

    Args:
        source: A complete document (``bytes`` or ``str``) or an iterable of
            chunks, e.g. ``response.iter_bytes()``.
        encoding: Codec used for byte chunks.  Defaults to UTF-8; undecodable
            bytes are replaced rather than raising.

    Yields:
        :class:`Token` objects in document order.  The stream ends when the
        input is exhausted.
    """
    parser = _TokenCollector()
    try:
        for text in _iter_text(source, encoding or "utf-8"):
            parser.feed(text)
            yield from parser.drain()
        parser.close()
    except AssertionError as exc:
        # Some html.parser releases assert on bogus marked sections
        # (``<![foo[``); the document ends at that point.
        logger.debug("Tokenizer stopped at malformed markup: %s", exc)
    yield from parser.drain(final=True)
