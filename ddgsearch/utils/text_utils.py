"""
Text Utilities
Whitespace, URL and continuation-cue helpers for scraped result fields
"""
import re
from urllib.parse import urldefrag, urljoin, urlparse, parse_qs


_WHITESPACE_RE = re.compile(r"\s+")

DDG_BASE_URL = "https://duckduckgo.com/"


def normalize_text(text: str) -> str:
    """
    Collapse every run of whitespace into a single space

    Args:
        text: Raw text pulled from markup or JSON

    Returns:
        Trimmed text with single spaces ("" for None/empty input)
    """
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_url(url: str) -> str:
    """Drop the fragment from a URL, leaving everything else untouched."""
    if not url:
        return ""
    try:
        return urldefrag(url).url
    except ValueError:
        return url


def unwrap_redirect(href: str) -> str:
    """
    Decode a DuckDuckGo click wrapper (``//duckduckgo.com/l/?uddg=<target>``)

    Any other href is returned unchanged.
    """
    if not href:
        return ""
    try:
        parsed = urlparse(urljoin(DDG_BASE_URL, href))
    except ValueError:
        return href
    host = (parsed.netloc or "").lower()
    if not (host == "duckduckgo.com" or host.endswith(".duckduckgo.com")):
        return href
    if not parsed.path.startswith("/l/"):
        return href
    # parse_qs already percent-decodes the value
    target = parse_qs(parsed.query).get("uddg")
    if target and target[0].strip():
        return target[0].strip()
    return href


def extract_next_s(next_cue: str) -> str:
    """Return the ``s`` query parameter of a JSON endpoint's ``next`` cue, or ""."""
    if not next_cue:
        return ""
    try:
        query = urlparse(next_cue).query
    except ValueError:
        return ""
    values = parse_qs(query).get("s")
    if values:
        return values[0]
    return ""
