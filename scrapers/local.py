"""Synthetic community events at known Delhi/Gurgaon venues."""
import logging

from .synthetic import BOARD_GAMES, BOOK_CLUB, CHESS, DELHI, DISCUSSION, GURGAON

logger = logging.getLogger(__name__)

VENUES = [
    {"name": "India Habitat Centre", "location": "Lodhi Road, Delhi", "city": DELHI},
    {"name": "DLF CyberHub", "location": "Cyber City, Gurgaon", "city": GURGAON},
    {"name": "Khan Market Community Center", "location": "Khan Market, Delhi", "city": DELHI},
    {"name": "Ambience Mall", "location": "Ambience Island, Gurgaon", "city": GURGAON},
    {"name": "Connaught Place Chess Club", "location": "CP, Delhi", "city": DELHI},
]

EVENT_TYPES = [
    {"category": CHESS, "titles": ["Delhi Chess Championship", "Weekend Chess Tournament", "Rapid Chess Battle"]},
    {"category": BOARD_GAMES, "titles": ["Board Game Cafe Meetup", "Strategy Games Night", "Tabletop Gaming Session"]},
    {"category": BOOK_CLUB, "titles": ["Philosophy Book Discussion", "Contemporary Literature Club", "Non-Fiction Reading Circle"]},
    {"category": DISCUSSION, "titles": ["Tech Talk: AI & Society", "Startup Founders Meetup", "Philosophy Cafe Discussion"]},
]

EVENT_COUNT = 12
TIME_SLOTS = ["10:00", "14:00", "16:00", "18:00", "19:30"]
DAYS_AHEAD = 21
PAID_PROBABILITY = 0.6
PRICE_RANGE = (200, 999)
REGISTRATION_URL = "https://forms.google.com/register"


def build_event(index, venue, event_type, generator):
    category = event_type["category"]
    price, is_free = generator.price(PAID_PROBABILITY, *PRICE_RANGE)
    return {
        "id": generator.event_id("local", suffix=index),
        "title": generator.pick(event_type["titles"]),
        "description": (
            f"Join us for an engaging {category.lower()} session at {venue['name']}. "
            "Perfect for enthusiasts and beginners alike."
        ),
        "date": generator.future_date(DAYS_AHEAD),
        "time": generator.pick(TIME_SLOTS),
        "venue": venue["name"],
        "location": venue["location"],
        "city": venue["city"],
        "price": price,
        "is_free": is_free,
        "category": category,
        "organizer": f"{venue['city']} {category} Society",
        "registration_url": REGISTRATION_URL,
        "tags": [category.lower(), venue["city"].lower(), "community", "intellectual"],
        "source_platform": "Local Community",
        "scraped_at": generator.timestamp(),
    }


def generate_local_events(generator, count=EVENT_COUNT):
    results = []
    try:
        for i in range(count):
            venue = generator.pick(VENUES)
            event_type = generator.pick(EVENT_TYPES)
            results.append(build_event(i, venue, event_type, generator))
    except Exception:
        logger.exception("local event generator error")
    return results
