"""Crawler CLI — fetch a single page and report what was extracted.

Usage:
    python cli/main.py --help
    python cli/main.py crawl https://example.com
    python cli/main.py crawl https://example.com --json
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from crawler.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from typing import Optional

import typer

from crawler.config import settings
from crawler.scraper import Document, FetchError, fetch

app = typer.Typer(
    name="crawler",
    help="Single-page crawler CLI.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Fetch one web page and extract its text and metadata."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def render_report(doc: Document, chars: int) -> str:
    """Human-readable summary of *doc*, text cut to *chars* characters."""
    lines = [
        f"🌐 URL: {doc.url}",
        f"📝 Title: {doc.meta.title or '(none)'}",
        f"📊 Status: {doc.meta.status_code}",
        f"⏰ Time: {doc.meta.timestamp}",
        f"📄 Text: {doc.preview(chars)}",
    ]
    return "\n".join(lines)


@app.command("crawl")
def crawl(
    url: Optional[str] = typer.Argument(None, help="URL to fetch (defaults to CRAWLER_DEFAULT_URL)."),
    as_json: bool = typer.Option(False, "--json", help="Print the indexer message as JSON."),
    chars: Optional[int] = typer.Option(None, help="Characters of text to show in the report."),
) -> None:
    """Fetch URL and print its title, status, timestamp and a text preview."""
    target = url or settings.default_url
    try:
        doc = fetch(target)
    except FetchError as exc:
        typer.echo(f"[crawl] Error: {exc}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(doc.to_json())
        return
    typer.echo(render_report(doc, settings.preview_chars if chars is None else chars))


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
