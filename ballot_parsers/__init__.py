"""Parsers that rebuild table rows from the text runs in canvass and application PDFs."""
