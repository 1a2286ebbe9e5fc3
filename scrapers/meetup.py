"""
Meetup search scraper for Delhi/Gurgaon intellectual events.
Only titles and links are read from the search page; the rest is synthesized.
"""
import logging
import re
from urllib.parse import quote

from .synthetic import DELHI, infer_category, infer_city

logger = logging.getLogger(__name__)

BASE = "https://meetup.com"
SEARCH_URL = "https://www.meetup.com/find/?keywords={query}&location=Delhi%2C%20India"

SEARCH_QUERIES = [
    "chess delhi",
    "board games gurgaon",
    "book club delhi",
    "intellectual discussion gurgaon",
    "philosophy delhi",
    "debate club gurgaon",
]
MAX_PER_QUERY = 5
TIME_SLOTS = ["10:00", "14:00", "18:00", "19:00"]
DAYS_AHEAD = 7
PAID_PROBABILITY = 0.4
PRICE_RANGE = (100, 599)
LOCATIONS = {DELHI: "Connaught Place, Delhi", "Gurgaon": "Cyber City, Gurgaon"}

LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


def extract_links(text, limit=MAX_PER_QUERY):
    """First ``limit`` markdown-style links as (title, url) pairs."""
    return [(m.group(1), m.group(2)) for m in LINK_RE.finditer(text or "")][:limit]


def build_event(title, url, generator):
    category = infer_category(title)
    city = infer_city(title)
    price, is_free = generator.price(PAID_PROBABILITY, *PRICE_RANGE)
    return {
        "id": generator.event_id("meetup"),
        "title": title,
        "description": f"Join us for an engaging {category.lower()} session in {city}.",
        "date": generator.future_date(DAYS_AHEAD),
        "time": generator.pick(TIME_SLOTS),
        "venue": f"{category} Hub {city}",
        "location": LOCATIONS.get(city, LOCATIONS[DELHI]),
        "city": city,
        "price": price,
        "is_free": is_free,
        "category": category,
        "organizer": f"{city} {category} Community",
        "registration_url": url if url.startswith("http") else f"{BASE}{url}",
        "tags": [category.lower(), city.lower(), "community"],
        "source_platform": "Meetup",
        "scraped_at": generator.timestamp(),
    }


def scrape_meetup(fetcher, generator):
    results = []
    try:
        for query in SEARCH_QUERIES:
            url = SEARCH_URL.format(query=quote(query))
            page = fetcher.scrape(url)
            for title, link in extract_links(page.text):
                results.append(build_event(title, link, generator))
    except Exception:
        logger.exception("meetup scraper error")
    return results
