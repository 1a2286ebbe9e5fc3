"""
Client-side view of the events list.

The presentation layer keeps a FilterState, turns it into the query sent to
GET /api/events, reshapes the returned events into view models and filters
them again locally on every change.
"""
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple

from .retrieval import is_free, split_tags

MAX_PRICE = 5000

CATEGORY_TOKENS = {
    "Chess": "chess",
    "Board Games": "boardgames",
    "Book Club": "bookclub",
    "Discussion": "discussion",
}
CATEGORY_LABELS = {token: label for label, token in CATEGORY_TOKENS.items()}
CITY_TOKENS = {"Gurgaon": "gurgaon", "Delhi": "delhi"}
CITY_LABELS = {token: label for label, token in CITY_TOKENS.items()}


def current_week(today: Optional[date] = None) -> Tuple[date, date]:
    """Monday..Sunday of the week containing ``today``."""
    today = today or date.today()
    start = today - timedelta(days=today.weekday())
    return start, start + timedelta(days=6)


def _toggle(values, value):
    return [v for v in values if v != value] if value in values else values + [value]


@dataclass
class FilterState:
    categories: List[str] = field(default_factory=list)
    cities: List[str] = field(default_factory=list)
    price_range: Tuple[int, int] = (0, MAX_PRICE)
    date_range: Tuple[date, date] = field(default_factory=current_week)
    search_query: str = ""

    def toggle_category(self, token):
        return replace(self, categories=_toggle(self.categories, token))

    def toggle_city(self, token):
        return replace(self, cities=_toggle(self.cities, token))

    def cleared(self):
        """Reset everything except the date range."""
        return FilterState(date_range=self.date_range)

    @property
    def has_active_filters(self):
        return bool(
            self.categories
            or self.cities
            or self.search_query
            or self.price_range[0] > 0
            or self.price_range[1] < MAX_PRICE
        )


def build_query(state: FilterState) -> dict:
    """Query parameters for GET /api/events; only the first category/city is sent."""
    start, end = state.date_range
    params = {"startDate": start.isoformat(), "endDate": end.isoformat()}
    if state.categories:
        token = state.categories[0]
        params["category"] = CATEGORY_LABELS.get(token, token)
    if state.cities:
        token = state.cities[0]
        params["city"] = CITY_LABELS.get(token, token.title())
    if state.price_range[1] < MAX_PRICE:
        params["maxPrice"] = str(state.price_range[1])
    if state.search_query:
        params["search"] = state.search_query
    return params


def to_view_model(event: dict) -> dict:
    """Reshape one API event (snake_case or camelCase) for display."""
    if "is_free" in event or "isFree" in event:
        free = is_free(event)
    else:
        free = event.get("priceType") == "free"
    category = event.get("category") or ""
    scraped = event.get("scraped_at") or event.get("scrapedAt")
    return {
        "id": event.get("id"),
        "title": event.get("title"),
        "description": event.get("description"),
        "category": CATEGORY_TOKENS.get(category, category.lower()),
        "date": event.get("date"),
        "time": event.get("time"),
        "location": event.get("location"),
        "venue": event.get("venue"),
        "city": (event.get("city") or "").lower(),
        "price": None if free else event.get("price"),
        "priceType": "free" if free else "paid",
        "organizer": event.get("organizer"),
        "registrationUrl": event.get("registration_url") or event.get("registrationUrl"),
        "tags": split_tags(event.get("tags")),
        "createdAt": scraped,
        "updatedAt": scraped,
    }


def _event_date(event):
    value = event.get("date")
    if not value:
        return None
    try:
        return datetime.strptime(value[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def matches(event: dict, state: FilterState) -> bool:
    start, end = state.date_range
    day = _event_date(event)
    if day is None or not (start <= day <= end):
        return False

    if state.categories and event.get("category") not in state.categories:
        return False

    if state.cities and event.get("city") not in state.cities:
        return False

    price = event.get("price") or 0
    low, high = state.price_range
    if price < low or price > high:
        return False

    if state.search_query:
        text = " ".join(
            [event.get(k) or "" for k in ("title", "description", "venue", "organizer")]
            + list(event.get("tags") or [])
        ).lower()
        if state.search_query.lower() not in text:
            return False

    return True


def apply_filters(events, state: FilterState):
    return [e for e in events if matches(e, state)]


def summarize(events):
    return {
        "total": len(events),
        "free": sum(1 for e in events if e.get("priceType") == "free"),
        "organizers": len({e.get("organizer") for e in events}),
        "venues": len({e.get("venue") for e in events}),
    }
