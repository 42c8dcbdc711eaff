"""Tests for the lazy HTML token stream."""

from __future__ import annotations

from typing import Iterator, List

from crawler.scraper.tokenizer import Token, TokenKind, iter_tokens


def _kinds(tokens: List[Token]) -> List[TokenKind]:
    return [t.kind for t in tokens]


class TestTokenKinds:
    def test_start_text_end(self) -> None:
        tokens = list(iter_tokens("<p>Hello</p>"))
        assert tokens == [
            Token(TokenKind.START_TAG, "p"),
            Token(TokenKind.TEXT, "Hello"),
            Token(TokenKind.END_TAG, "p"),
        ]

    def test_self_closing(self) -> None:
        tokens = list(iter_tokens("<br/>"))
        assert tokens == [Token(TokenKind.SELF_CLOSING_TAG, "br")]
        assert tokens[0].is_tag

    def test_comment_and_doctype(self) -> None:
        tokens = list(iter_tokens("<!DOCTYPE html><!-- note -->"))
        assert _kinds(tokens) == [TokenKind.DOCTYPE, TokenKind.COMMENT]
        assert tokens[1].data == " note "

    def test_tag_names_lowercased(self) -> None:
        tokens = list(iter_tokens("<DIV></DIV>"))
        assert [t.data for t in tokens] == ["div", "div"]

    def test_attributes(self) -> None:
        (token,) = list(iter_tokens('<input VALUE="x" disabled>'))
        assert token.kind is TokenKind.START_TAG
        assert token.attrs == (("value", "x"), ("disabled", ""))

    def test_entities_decoded(self) -> None:
        tokens = list(iter_tokens("<p>a &lt; b &amp; c</p>"))
        assert tokens[1] == Token(TokenKind.TEXT, "a < b & c")

    def test_script_body_is_single_text(self) -> None:
        tokens = list(iter_tokens("<script>if (a < b) { s = '<p>'; }</script>"))
        assert _kinds(tokens) == [TokenKind.START_TAG, TokenKind.TEXT, TokenKind.END_TAG]
        assert tokens[1].data == "if (a < b) { s = '<p>'; }"

    def test_empty_input(self) -> None:
        assert list(iter_tokens("")) == []
        assert list(iter_tokens([])) == []


class TestChunking:
    def test_text_split_across_chunks_is_one_token(self) -> None:
        tokens = list(iter_tokens(["<p>Hel", "lo wor", "ld</p>"]))
        assert tokens[1] == Token(TokenKind.TEXT, "Hello world")

    def test_tag_split_across_chunks(self) -> None:
        tokens = list(iter_tokens(["<d", "iv>T</d", "iv>"]))
        assert tokens == [
            Token(TokenKind.START_TAG, "div"),
            Token(TokenKind.TEXT, "T"),
            Token(TokenKind.END_TAG, "div"),
        ]

    def test_multibyte_character_split_across_byte_chunks(self) -> None:
        tokens = list(iter_tokens([b"<p>caf\xc3", b"\xa9</p>"]))
        assert tokens[1].data == "café"

    def test_invalid_bytes_replaced(self) -> None:
        tokens = list(iter_tokens(b"<p>bad \xff byte</p>"))
        assert tokens[1].data == "bad \ufffd byte"

    def test_trailing_text_flushed_at_end(self) -> None:
        tokens = list(iter_tokens(["<p>tail"]))
        assert tokens[-1] == Token(TokenKind.TEXT, "tail")

    def test_stream_is_lazy(self) -> None:
        pulled: List[str] = []

        def chunks() -> Iterator[str]:
            for chunk in ("<p>a</p>", "<p>b</p>", "<p>c</p>"):
                pulled.append(chunk)
                yield chunk

        tokens = iter_tokens(chunks())
        first = next(tokens)

        assert first == Token(TokenKind.START_TAG, "p")
        assert pulled == ["<p>a</p>"]


class TestMalformed:
    def test_bogus_marked_section_does_not_raise(self) -> None:
        tokens = list(iter_tokens("<p>before</p><![bogus[ x ]]><p>after</p>"))
        assert tokens[:3] == [
            Token(TokenKind.START_TAG, "p"),
            Token(TokenKind.TEXT, "before"),
            Token(TokenKind.END_TAG, "p"),
        ]

    def test_stray_angle_brackets_are_text(self) -> None:
        tokens = list(iter_tokens("<p>1 < 2</p>"))
        assert Token(TokenKind.TEXT, "1 < 2") in tokens


class TestTitleText:
    def test_markup_inside_title_is_literal_text(self) -> None:
        tokens = list(iter_tokens("<title>A <b>B</b></title><p>x</p>"))
        assert tokens[:3] == [
            Token(TokenKind.START_TAG, "title"),
            Token(TokenKind.TEXT, "A <b>B</b>"),
            Token(TokenKind.END_TAG, "title"),
        ]
        assert tokens[3] == Token(TokenKind.START_TAG, "p")

    def test_title_entities_decoded_once(self) -> None:
        tokens = list(iter_tokens("<title>a &amp;lt; b &amp; c</title>"))
        assert tokens[1] == Token(TokenKind.TEXT, "a &lt; b & c")

    def test_title_split_across_chunks(self) -> None:
        tokens = list(iter_tokens(["<title>Hel", "lo <i>wo", "rld</i></title>"]))
        assert tokens == [
            Token(TokenKind.START_TAG, "title"),
            Token(TokenKind.TEXT, "Hello <i>world</i>"),
            Token(TokenKind.END_TAG, "title"),
        ]
