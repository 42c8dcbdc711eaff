"""Data models for the crawler pipeline."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class Metadata:
    """Page-level facts gathered alongside the body text."""

    title: str = ""
    description: str = ""
    timestamp: str = ""  # RFC3339, UTC
    status_code: int = 0


@dataclass(frozen=True)
class Document:
    """The extracted text and metadata for a single fetched URL."""

    url: str = ""
    text: str = ""
    meta: Metadata = field(default_factory=Metadata)

    def preview(self, limit: int = 100) -> str:
        """Return at most *limit* characters of :attr:`text`."""
        if limit <= 0:
            return ""
        return self.text[:limit]

    def to_message(self) -> Dict[str, Any]:
        """Return the document in the shape the indexer consumes."""
        return {
            "url": self.url,
            "text": self.text,
            "metadata": {
                "title": self.meta.title,
                "description": self.meta.description,
                "timestamp": self.meta.timestamp,
                "status_code": self.meta.status_code,
            },
        }

    def to_json(self) -> str:
        return json.dumps(self.to_message(), indent=2, ensure_ascii=False)
