"""Shared requests session and the fetch-and-render helper used by the gatherers."""
from dataclasses import dataclass

import requests
from bs4 import BeautifulSoup

DEFAULT_UA = "IntellectualEventsBot/1.0 (+https://example.com)"
DEFAULT_TIMEOUT = 10


@dataclass
class ScrapedPage:
    url: str
    text: str


def create_session(user_agent: str = DEFAULT_UA):
    s = requests.Session()
    s.headers.update({"User-Agent": user_agent})
    return s


def render_text(html: str) -> str:
    """
    Flatten an HTML document into readable lines for pattern extraction.
    Links become ``[label](href)`` and headings ``# label``; blank lines are dropped.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript", "template"]):
        tag.decompose()
    for a in soup.find_all("a", href=True):
        label = a.get_text(" ", strip=True)
        a.replace_with(f"[{label}]({a['href']})" if label else "")
    for level in range(1, 7):
        for h in soup.find_all(f"h{level}"):
            h.replace_with(f"{'#' * level} {h.get_text(' ', strip=True)}")
    lines = (line.strip() for line in soup.get_text("\n").splitlines())
    return "\n".join(line for line in lines if line)


class PageFetcher:
    """Fetch a URL and return its text rendering. No retries, no robots checks."""

    def __init__(self, session=None, timeout: int = DEFAULT_TIMEOUT):
        self.session = session or create_session()
        self.timeout = timeout

    def scrape(self, url: str) -> ScrapedPage:
        resp = self.session.get(url, timeout=self.timeout)
        resp.raise_for_status()
        return ScrapedPage(url=url, text=render_text(resp.text))
