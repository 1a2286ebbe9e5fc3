"""HTTP client for the events API with a bundled fallback dataset."""
import logging

import requests

from scrapers.session import DEFAULT_TIMEOUT, create_session

from .config import Settings
from .filters import build_query, to_view_model

logger = logging.getLogger(__name__)

_STAMP = "2025-01-24T10:00:00Z"

PLACEHOLDER_EVENTS = [
    {
        "id": "1",
        "title": "Delhi Chess Championship - Weekly Tournament",
        "description": "Join us for an exciting weekly chess tournament featuring players of all skill levels. Prizes for top 3 winners and rating points for all participants.",
        "category": "chess",
        "date": "2025-01-27",
        "time": "6:00 PM - 10:00 PM",
        "location": "Connaught Place",
        "venue": "Chess Academy Delhi, CP Metro Station",
        "city": "delhi",
        "price": 200,
        "priceType": "paid",
        "organizer": "Delhi Chess Club",
        "registrationUrl": "https://example.com/register",
        "tags": ["tournament", "rated", "prizes"],
        "createdAt": _STAMP,
        "updatedAt": _STAMP,
    },
    {
        "id": "2",
        "title": "Board Game Cafe Meetup - Strategy Night",
        "description": "Explore modern board games in a cozy cafe setting. We have Catan, Ticket to Ride, Azul, and many more. Perfect for beginners and experienced players.",
        "category": "boardgames",
        "date": "2025-01-25",
        "time": "7:00 PM - 11:00 PM",
        "location": "Cyber Hub",
        "venue": "Game Theory Cafe, Cyber Hub",
        "city": "gurgaon",
        "price": None,
        "priceType": "free",
        "organizer": "Gurgaon Board Game Society",
        "registrationUrl": "https://example.com/register",
        "tags": ["strategy", "social", "beginners-welcome"],
        "createdAt": _STAMP,
        "updatedAt": _STAMP,
    },
    {
        "id": "3",
        "title": 'Philosophy Book Club - "Sapiens" Discussion',
        "description": "Monthly discussion on Yuval Noah Harari's \"Sapiens\". We'll explore chapters 10-15 focusing on the Agricultural Revolution and its impact on human society.",
        "category": "bookclub",
        "date": "2025-01-26",
        "time": "4:00 PM - 6:00 PM",
        "location": "Khan Market",
        "venue": "Cafe Turtle, Khan Market",
        "city": "delhi",
        "price": 150,
        "priceType": "paid",
        "organizer": "Delhi Philosophy Circle",
        "registrationUrl": "https://example.com/register",
        "tags": ["philosophy", "history", "discussion"],
        "createdAt": _STAMP,
        "updatedAt": _STAMP,
    },
    {
        "id": "4",
        "title": "AI & Future of Work - Open Discussion",
        "description": "Join tech professionals and enthusiasts for an engaging discussion about artificial intelligence and its impact on the future of work. Share insights and network.",
        "category": "discussion",
        "date": "2025-01-28",
        "time": "7:30 PM - 9:30 PM",
        "location": "Sector 29",
        "venue": "WeWork Galaxy, Sector 29",
        "city": "gurgaon",
        "price": None,
        "priceType": "free",
        "organizer": "Tech Talks Gurgaon",
        "registrationUrl": "https://example.com/register",
        "tags": ["technology", "AI", "networking", "career"],
        "createdAt": _STAMP,
        "updatedAt": _STAMP,
    },
    {
        "id": "5",
        "title": "Speed Chess Tournament - Blitz Format",
        "description": "Fast-paced chess tournament with 5+3 time control. Open to all ratings. Entry includes refreshments and analysis session with a master.",
        "category": "chess",
        "date": "2025-01-29",
        "time": "2:00 PM - 6:00 PM",
        "location": "Lajpat Nagar",
        "venue": "Chess Point Academy",
        "city": "delhi",
        "price": 300,
        "priceType": "paid",
        "organizer": "Speed Chess Delhi",
        "registrationUrl": "https://example.com/register",
        "tags": ["blitz", "tournament", "all-levels"],
        "createdAt": _STAMP,
        "updatedAt": _STAMP,
    },
    {
        "id": "6",
        "title": "Dungeons & Dragons Beginner Session",
        "description": "New to D&D? Join our beginner-friendly session with pre-made characters and an experienced DM. All materials provided. Adventure awaits!",
        "category": "boardgames",
        "date": "2025-01-30",
        "time": "6:00 PM - 10:00 PM",
        "location": "Golf Course Road",
        "venue": "The Boardroom Cafe",
        "city": "gurgaon",
        "price": 400,
        "priceType": "paid",
        "organizer": "Gurgaon RPG Guild",
        "registrationUrl": "https://example.com/register",
        "tags": ["RPG", "beginners", "storytelling"],
        "createdAt": _STAMP,
        "updatedAt": _STAMP,
    },
]


def placeholder_events():
    return [dict(e, tags=list(e["tags"])) for e in PLACEHOLDER_EVENTS]


def _event_list(data):
    """The ``events`` list of a well-formed success body, else None."""
    if not isinstance(data, dict) or not data.get("success"):
        return None
    events = data.get("events")
    if not isinstance(events, list) or not all(isinstance(e, dict) for e in events):
        return None
    return events


class EventsClient:
    def __init__(self, base_url=None, session=None, timeout=DEFAULT_TIMEOUT):
        base_url = base_url or Settings.from_env().api_url
        self.base_url = base_url.rstrip("/")
        self.session = session or create_session()
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings, session=None):
        return cls(settings.api_url, session=session, timeout=settings.fetch_timeout)

    def load_events(self, state):
        """View models for ``state``; the placeholder dataset whenever the API can't deliver."""
        try:
            resp = self.session.get(f"{self.base_url}/api/events", params=build_query(state), timeout=self.timeout)
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Error loading events: %s", e)
            return placeholder_events()
        events = _event_list(data)
        if events is None:
            error = data.get("error") if isinstance(data, dict) else "unexpected response body"
            logger.warning("API failed, using placeholder data: %s", error)
            return placeholder_events()
        return [to_view_model(e) for e in events]

    def refresh(self):
        """Trigger an ingestion run and return the decoded response body."""
        try:
            resp = self.session.post(f"{self.base_url}/api/scrape", timeout=self.timeout)
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Error triggering scrape: %s", e)
            return {"success": False, "error": str(e), "message": "Failed to scrape events"}
        if not isinstance(data, dict):
            logger.error("Scraping failed: unexpected response body")
            return {"success": False, "error": "unexpected response body", "message": "Failed to scrape events"}
        if data.get("success"):
            logger.info("Successfully scraped %s events", data.get("events_count"))
        else:
            logger.error("Scraping failed: %s", data.get("error"))
        return data
