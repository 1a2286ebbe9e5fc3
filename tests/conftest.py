import random
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Ensure the repository root is on sys.path when pytest collects tests so
# imports like `import app` and `from scrapers import ...` work reliably.
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from events.store import EventStore  # noqa: E402
from scrapers.session import ScrapedPage  # noqa: E402
from scrapers.synthetic import SyntheticEventGenerator  # noqa: E402

FIXED_NOW = datetime(2025, 1, 24, 10, 0, 0, tzinfo=timezone.utc)


class DummyFetcher:
    """Returns canned page text per URL; unknown URLs get ``default``."""

    def __init__(self, pages=None, default="", error=None):
        self.pages = pages or {}
        self.default = default
        self.error = error
        self.urls = []

    def scrape(self, url):
        self.urls.append(url)
        if self.error:
            raise self.error
        return ScrapedPage(url=url, text=self.pages.get(url, self.default))


def make_row(**overrides):
    row = {
        "id": "local_1",
        "title": "Weekend Chess Tournament",
        "description": "Rapid games for all levels.",
        "date": "2025-01-27",
        "time": "10:00",
        "venue": "India Habitat Centre",
        "location": "Lodhi Road, Delhi",
        "city": "Delhi",
        "price": 0,
        "is_free": True,
        "category": "Chess",
        "organizer": "Delhi Chess Society",
        "registration_url": "https://forms.google.com/register",
        "tags": ["chess", "delhi", "community"],
        "source_platform": "Local Community",
        "scraped_at": "2025-01-24T09:00:00.000Z",
    }
    row.update(overrides)
    return row


@pytest.fixture
def store():
    return EventStore("sqlite://")


@pytest.fixture
def generator():
    return SyntheticEventGenerator(random.Random(42), clock=lambda: FIXED_NOW)
