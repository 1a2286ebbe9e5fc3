from datetime import date, timedelta
from unittest.mock import patch

import requests

from conftest import FIXED_NOW, DummyFetcher
from scrapers import eventbrite, local, meetup, session
from scrapers.synthetic import infer_category, infer_city


class DummyResp:
    def __init__(self, text):
        self.text = text
        self.status_code = 200

    def raise_for_status(self):
        return None


class DummySession:
    def __init__(self, text):
        self._text = text

    def get(self, url, timeout=10):
        return DummyResp(self._text)


SAMPLE_HTML = """
<html><head><style>.x{}</style><script>var a = 1;</script></head><body>
<h2><a href="/delhi-chess/events/1">Delhi Chess Club Blitz</a></h2>
<p>Saturday <span>6:00 PM</span></p>
<a href="https://www.meetup.com/gurgaon-board-games/">Gurgaon Board Game Night</a>
<a href="/img"><img src="x.png"></a>
</body></html>
"""

MEETUP_TEXT = "\n".join(
    [f"[Event {i}](https://www.meetup.com/e/{i})" for i in range(7)]
)

EVENTBRITE_TEXT = """
# Chess Nights Delhi
Sat, Feb 1, 6:00 PM
₹499
[Gurugram Board Game Evening](https://www.eventbrite.com/e/123)
Free
₹100
"""

TODAY = FIXED_NOW.date()


@patch("scrapers.session.create_session")
def test_page_fetcher_renders_links_and_headings(mock_session):
    mock_session.return_value = DummySession(SAMPLE_HTML)
    page = session.PageFetcher().scrape("https://example.com")
    lines = page.text.splitlines()
    assert "## [Delhi Chess Club Blitz](/delhi-chess/events/1)" in lines
    assert "[Gurgaon Board Game Night](https://www.meetup.com/gurgaon-board-games/)" in lines
    assert "var a" not in page.text
    assert "" not in lines


def test_infer_category_and_city():
    assert infer_category("Sunday Chess Blitz") == "Chess"
    assert infer_category("Board Game Night") == "Board Games"
    assert infer_category("Games & Pizza") == "Board Games"
    assert infer_category("Slow Reading Society") == "Book Club"
    assert infer_category("Philosophy Cafe") == "Discussion"
    assert infer_city("Gurugram Thinkers") == "Gurgaon"
    assert infer_city("GURGAON debate") == "Gurgaon"
    assert infer_city("Philosophy Cafe") == "Delhi"


def test_meetup_caps_links_per_query(generator):
    fetcher = DummyFetcher(default=MEETUP_TEXT)
    items = meetup.scrape_meetup(fetcher, generator)
    assert len(fetcher.urls) == len(meetup.SEARCH_QUERIES)
    assert "keywords=chess%20delhi" in fetcher.urls[0]
    assert len(items) == len(meetup.SEARCH_QUERIES) * meetup.MAX_PER_QUERY
    assert len({e["id"] for e in items}) == len(items)


def test_meetup_event_fields(generator):
    fetcher = DummyFetcher(default="[Gurgaon Chess Meetup](/gurgaon-chess/events/9)")
    items = meetup.scrape_meetup(fetcher, generator)
    ev = items[0]
    assert ev["id"].startswith("meetup_")
    assert ev["category"] == "Chess"
    assert ev["city"] == "Gurgaon"
    assert ev["location"] == "Cyber City, Gurgaon"
    assert ev["venue"] == "Chess Hub Gurgaon"
    assert ev["organizer"] == "Gurgaon Chess Community"
    assert ev["registration_url"] == "https://meetup.com/gurgaon-chess/events/9"
    assert ev["tags"] == ["chess", "gurgaon", "community"]
    assert ev["time"] in meetup.TIME_SLOTS
    assert TODAY <= date.fromisoformat(ev["date"]) <= TODAY + timedelta(days=7)
    for e in items:
        if e["is_free"]:
            assert e["price"] == 0
        else:
            assert 100 <= e["price"] <= 599


def test_eventbrite_closes_events_on_price_lines(generator):
    items = eventbrite.parse_listing(EVENTBRITE_TEXT, generator)
    assert [e["title"] for e in items] == ["Chess Nights Delhi", "Gurugram Board Game Evening"]

    chess, board = items
    assert chess["price"] == 499
    assert chess["is_free"] is False
    assert chess["category"] == "Chess"
    assert chess["registration_url"] == eventbrite.FALLBACK_REGISTRATION_URL

    assert board["price"] == 0
    assert board["is_free"] is True
    assert board["category"] == "Board Games"
    assert board["registration_url"] == "https://www.eventbrite.com/e/123"

    for e in items:
        assert e["location"] == eventbrite.LOCATIONS[e["city"]]
        assert e["time"] in eventbrite.TIME_SLOTS
        assert TODAY <= date.fromisoformat(e["date"]) <= TODAY + timedelta(days=14)


def test_eventbrite_price_with_thousands_separator():
    assert eventbrite.parse_price("From ₹1,500") == 1500
    assert eventbrite.is_price_line("Freestyle chess") is False


def test_local_events_are_generated_from_catalog(generator):
    items = local.generate_local_events(generator)
    assert len(items) == 12
    assert items[0]["id"].endswith("_0") and items[-1]["id"].endswith("_11")
    venues = {v["name"]: v for v in local.VENUES}
    titles = {t["category"]: t["titles"] for t in local.EVENT_TYPES}
    for e in items:
        venue = venues[e["venue"]]
        assert e["city"] == venue["city"]
        assert e["location"] == venue["location"]
        assert e["title"] in titles[e["category"]]
        assert e["time"] in local.TIME_SLOTS
        assert TODAY <= date.fromisoformat(e["date"]) <= TODAY + timedelta(days=21)
        if e["is_free"]:
            assert e["price"] == 0
        else:
            assert 200 <= e["price"] <= 999


def test_same_seed_same_events():
    import random
    from scrapers.synthetic import SyntheticEventGenerator

    def build():
        return local.generate_local_events(SyntheticEventGenerator(random.Random(7), clock=lambda: FIXED_NOW))

    assert build() == build()


def test_fetch_failures_yield_empty_lists(generator):
    fetcher = DummyFetcher(error=requests.ConnectionError("boom"))
    assert meetup.scrape_meetup(fetcher, generator) == []
    assert eventbrite.scrape_eventbrite(fetcher, generator) == []
