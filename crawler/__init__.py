"""Single-page web crawler: fetch one URL, extract its text and metadata."""
