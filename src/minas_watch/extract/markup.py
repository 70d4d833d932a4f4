"""Tolerant tag matching and text cleaning for feed markup.

Real-world feeds are often not well-formed XML, so this works on raw text
with regular expressions: find blocks by tag name, read an attribute, clean
the inner text. Nothing here raises on malformed input; an unmatched pattern
just yields an empty string.
"""

import re
from functools import lru_cache

_NAMED_ENTITIES: dict[str, str] = {
    "amp": "&",
    "apos": "'",
    "gt": ">",
    "lt": "<",
    "quot": '"',
}

_ENTITY = re.compile(r"&(#[xX][0-9a-fA-F]+|#[0-9]+|[a-zA-Z]+);")
_CDATA = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.DOTALL)
_TAG = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")
_HREF_DOUBLE = re.compile(r"\bhref=\"([^\"]+)\"", re.IGNORECASE)
_HREF_SINGLE = re.compile(r"\bhref='([^']+)'", re.IGNORECASE)

_MAX_CODE_POINT = 0x10FFFF


def _decode_entity(match: re.Match[str]) -> str:
    entity = match.group(1)
    if entity.startswith("#"):
        try:
            if entity[1:2] in ("x", "X"):
                code_point = int(entity[2:], 16)
            else:
                code_point = int(entity[1:])
        except ValueError:
            # digit run too long to convert
            return ""
        if code_point > _MAX_CODE_POINT or 0xD800 <= code_point <= 0xDFFF:
            return ""
        return chr(code_point)
    return _NAMED_ENTITIES.get(entity.lower(), "")


def decode_entities(value: str) -> str:
    """Decode numeric and the five XML named entities; drop anything else."""
    if not value:
        return ""
    return _ENTITY.sub(_decode_entity, value)


def clean_text(raw: object) -> str:
    """Unwrap CDATA, strip tags, decode entities and collapse whitespace."""
    if not raw or not isinstance(raw, str):
        return ""
    text = _CDATA.sub(r"\1", raw)
    text = _TAG.sub(" ", text)
    text = decode_entities(text)
    return _WHITESPACE.sub(" ", text).strip()


@lru_cache(maxsize=64)
def _block_pattern(tag_name: str) -> re.Pattern[str]:
    name = re.escape(tag_name)
    return re.compile(rf"<{name}(?:\s[^>]*)?>(.*?)</{name}>", re.IGNORECASE | re.DOTALL)


@lru_cache(maxsize=64)
def _open_tag_pattern(tag_name: str) -> re.Pattern[str]:
    return re.compile(rf"<{re.escape(tag_name)}\b([^>]*)/?>", re.IGNORECASE)


def extract_blocks(markup: str, tag_name: str) -> list[str]:
    """Return every ``<tag ...>...</tag>`` block, including the tags themselves."""
    return [match.group(0) for match in _block_pattern(tag_name).finditer(markup)]


def extract_first_block(markup: str, tag_name: str) -> str:
    match = _block_pattern(tag_name).search(markup)
    return match.group(0) if match else ""


def extract_tag_text(markup: str, tag_name: str) -> str:
    """Cleaned inner text of the first ``tag_name`` element, or ``""``."""
    match = _block_pattern(tag_name).search(markup)
    return clean_text(match.group(1)) if match else ""


def extract_tag_href(markup: str, tag_name: str) -> str:
    """Cleaned ``href`` attribute of the first ``tag_name`` tag, or ``""``."""
    match = _open_tag_pattern(tag_name).search(markup)
    if not match:
        return ""
    attrs = match.group(1) or ""
    href = _HREF_DOUBLE.search(attrs) or _HREF_SINGLE.search(attrs)
    return clean_text(href.group(1)) if href else ""


def has_tag(markup: str, tag_name: str) -> bool:
    """Whether an opening ``tag_name`` tag appears anywhere in ``markup``."""
    return re.search(rf"<{re.escape(tag_name)}\b", markup, re.IGNORECASE) is not None
