"""Tests for URL utilities."""

from minas_watch.url import canonicalize_url, decode_url_part


class TestCanonicalizeUrl:
    """Tests for canonicalize_url."""

    def test_strips_tracking_params_and_fragment(self):
        """Should drop utm_* and Google tracking params and the fragment."""
        url = "https://example.com/a?utm_source=rss&UTM_Medium=x&id=7&ved=abc&oc=5#top"
        assert canonicalize_url(url) == "https://example.com/a?id=7"

    def test_lowercases_scheme_and_host_only(self):
        """Should lowercase scheme and host but keep the path as-is."""
        assert canonicalize_url("HTTPS://News.Example.COM/Story/ABC") == "https://news.example.com/Story/ABC"

    def test_empty_path_becomes_root(self):
        """Should give a bare host a root path."""
        assert canonicalize_url("https://example.com?gws_rd=ssl") == "https://example.com/"

    def test_relative_or_garbage_returned_trimmed(self):
        """Should return non-absolute input trimmed but otherwise untouched."""
        assert canonicalize_url("  /news/item?utm_source=x  ") == "/news/item?utm_source=x"
        assert canonicalize_url("not a url") == "not a url"

    def test_empty(self):
        """Should return empty string for empty input."""
        assert canonicalize_url("") == ""

    def test_same_link_different_tracking_is_equal(self):
        """Should map tracking variants of one link to the same string."""
        a = canonicalize_url("https://example.com/story?utm_campaign=a")
        b = canonicalize_url("https://example.com/story?utm_campaign=b#comments")
        assert a == b == "https://example.com/story"


class TestDecodeUrlPart:
    """Tests for decode_url_part."""

    def test_plus_and_percent(self):
        """Should decode + as space and percent escapes."""
        assert decode_url_part("Israel+Iran%20war") == "Israel Iran war"

    def test_invalid_utf8_falls_back(self):
        """Should fall back to replacing + when the escape is not valid UTF-8."""
        assert decode_url_part("a+%FF") == "a %FF"
