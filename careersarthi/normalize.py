from urllib.parse import urlparse

from bs4 import BeautifulSoup


def normalize_text(s: str) -> str:
    return " ".join(s.strip().lower().split())


def collapse_whitespace(s: str) -> str:
    return " ".join(s.split())


def strip_html(s: str) -> str:
    """Drop markup from API-supplied text, keeping the visible words."""
    if not s or "<" not in s:
        return collapse_whitespace(s or "")
    soup = BeautifulSoup(s, "html.parser")
    return collapse_whitespace(soup.get_text(" "))


def canonical_url(url: str) -> str:
    parsed = urlparse(url)
    path = parsed.path.rstrip("/")
    # Drop query and fragment to avoid source-specific tracking
    return f"{parsed.scheme}://{parsed.netloc}{path}" if parsed.scheme and parsed.netloc else path
