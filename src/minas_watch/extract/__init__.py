"""Lenient RSS/Atom extraction."""

from minas_watch.extract.feed import FeedFormat, detect_format, extract_entries
from minas_watch.extract.markup import clean_text, decode_entities

__all__ = [
    "FeedFormat",
    "clean_text",
    "decode_entities",
    "detect_format",
    "extract_entries",
]
