"""Display-label inference for feed URLs."""

import re
from urllib.parse import parse_qs, urlsplit

from minas_watch.url import decode_url_part

_HOST_LABEL_OVERRIDES: dict[str, str] = {
    "bbci": "BBC",
    "bbc": "BBC",
}

# Host parts that never identify the outlet
_HOST_PART_BLACKLIST = frozenset({"www", "feeds", "feed", "news", "rss", "com", "net", "org", "co", "uk"})

_ACRONYM = re.compile(r"^[A-Z0-9]{2,}$")
_RSS_SEGMENT = re.compile(r"^rss(?:\.xml)?$", re.IGNORECASE)


def to_label_case(value: str) -> str:
    """Turn ``middle_east`` or ``israel-iran war`` into ``Middle East`` / ``Israel Iran War``.

    Words that are already all caps or digits (``BBC``, ``UN``) are kept.
    """
    words = re.sub(r"[-_]+", " ", value).split()
    labelled: list[str] = []
    for word in words:
        if _ACRONYM.match(word):
            labelled.append(word)
        else:
            labelled.append(word.lower().capitalize())
    return " ".join(labelled)


def _is_google_news(hostname: str) -> bool:
    return "news.google." in hostname


def build_feed_label(feed_url: str) -> str:
    """Infer a human-readable label from a feed URL.

    Google News search feeds use their ``q`` parameter; everything else is
    ``<Outlet> - <Last path segment>``.

    Args:
        feed_url: The feed URL.

    Returns:
        The inferred label, ``"Feed"`` for an empty URL.
    """
    if not feed_url:
        return "Feed"

    try:
        parts = urlsplit(feed_url)
    except ValueError:
        return to_label_case(feed_url)
    hostname = (parts.hostname or "").lower()
    if not parts.scheme or not hostname:
        return to_label_case(feed_url)
    if hostname.startswith("www."):
        hostname = hostname[4:]

    if _is_google_news(hostname):
        query = parse_qs(parts.query).get("q", [""])[0]
        label = to_label_case(decode_url_part(query))
        return f"Google News: {label}" if label else "Google News"

    host_parts = hostname.split(".")
    host_token = next(
        (part for part in host_parts if part not in _HOST_PART_BLACKLIST),
        host_parts[0],
    )
    base_label = _HOST_LABEL_OVERRIDES.get(host_token) or to_label_case(host_token or hostname)

    path_tokens = [
        to_label_case(decode_url_part(segment)) for segment in parts.path.split("/") if segment
    ]
    path_tokens = [token for token in path_tokens if token and not _RSS_SEGMENT.match(token)]
    path_token = path_tokens[-1] if path_tokens else ""

    return " - ".join(part for part in (base_label, path_token) if part)
