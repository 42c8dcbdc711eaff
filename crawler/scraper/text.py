"""Text normalisation and tag-attribute helpers used by the extractor."""

from __future__ import annotations

import re
from typing import Dict, Iterable, Mapping, Optional, Tuple

_NEWLINES = re.compile(r"\n+")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Lowercase *text* and squeeze every whitespace run to a single space.

    Newline runs are collapsed first and then folded into the general
    whitespace pass, so block separators inserted during extraction end up
    as plain spaces.
    """
    if not text:
        return ""

    text = text.lower()
    text = _NEWLINES.sub("\n", text)
    text = _WHITESPACE.sub(" ", text)
    return text.strip()


def attrs_to_map(attrs: Iterable[Tuple[str, Optional[str]]]) -> Dict[str, str]:
    """Build a name -> value lookup for one tag's attributes.

    When a name repeats, the last occurrence wins.
    """
    return {name: value if value is not None else "" for name, value in attrs}


def attr_equals(attr_map: Mapping[str, str], key: str, value: str) -> bool:
    """Return ``True`` if *key* is present and maps exactly to *value*."""
    return key in attr_map and attr_map[key] == value
