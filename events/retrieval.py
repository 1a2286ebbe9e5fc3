"""
Retrieval service: read events from the store, apply the query filters and
reshape every row into the JSON shape served by GET /api/events.

Only category and city reach the store query. Date range, price and search
are applied afterwards to the (at most ``limit``) rows the store returned.
"""
import logging
import math
import re
from datetime import date

from .results import ServiceResult

logger = logging.getLogger(__name__)

ALL = "All"
QUERY_KEYS = ("startDate", "endDate", "category", "city", "maxPrice", "search")
SEARCH_FIELDS = ("title", "description", "venue", "organizer")

# output field -> accepted source keys, first non-empty wins
FIELD_ALIASES = {
    "registrationUrl": ("registrationUrl", "registration_url"),
    "sourcePlatform": ("sourcePlatform", "source_platform"),
    "scrapedAt": ("scrapedAt", "scraped_at"),
    "createdAt": ("createdAt", "created_at"),
}
FREE_FLAG_KEYS = ("isFree", "is_free")

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value):
    """Leading-integer parse in the manner of parseInt; None when nothing parses."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if value is None:
        return None
    m = _LEADING_INT.match(str(value))
    return int(m.group(1)) if m else None


def coerce_price(value):
    price = parse_int(value if value not in (None, "") else 0)
    return max(price or 0, 0)


def _as_number(value):
    if isinstance(value, (bool, int, float)):
        return float(value)
    try:
        return float(str(value).strip() or 0)
    except ValueError:
        return 0.0


def is_free(row):
    flag = None
    for key in FREE_FLAG_KEYS:
        if row.get(key):
            flag = row[key]
            break
    return _as_number(flag or 0) > 0


def split_tags(tags):
    if tags is None:
        return []
    if isinstance(tags, str):
        return [t.strip() for t in tags.split(",") if t.strip()]
    return list(tags)


def _first(row, keys):
    for key in keys:
        value = row.get(key)
        if value:
            return value
    return None


def normalize_event(row):
    event = {
        "id": row.get("id"),
        "title": row.get("title"),
        "description": row.get("description"),
        "date": row.get("date"),
        "time": row.get("time"),
        "venue": row.get("venue"),
        "location": row.get("location"),
        "city": row.get("city"),
        "price": coerce_price(row.get("price")),
        "priceType": "free" if is_free(row) else "paid",
        "category": row.get("category"),
        "organizer": row.get("organizer"),
        "tags": split_tags(row.get("tags")),
    }
    for out, keys in FIELD_ALIASES.items():
        event[out] = _first(row, keys)
    return event


def read_query(params):
    """Pull the known keys out of a mapping such as request.args; blanks become None."""
    query = {}
    for key in QUERY_KEYS:
        value = params.get(key)
        query[key] = value if value not in (None, "") else None
    return query


def store_predicate(query):
    where = {}
    for key in ("category", "city"):
        value = query.get(key)
        if value and value != ALL:
            where[key] = value
    return where


def filter_by_date(rows, start, end):
    if not (start and end):
        return rows
    return [r for r in rows if r.get("date") and start <= r["date"] <= end]


def filter_by_price(rows, max_price):
    if max_price is None:
        return rows
    limit = parse_int(max_price)
    if limit is None:
        # an unparseable bound compares false against every price
        return []
    return [r for r in rows if coerce_price(r.get("price")) <= limit]


def filter_by_search(rows, search):
    if not search:
        return rows
    needle = search.lower()
    return [
        r for r in rows
        if any(needle in (r.get(f) or "").lower() for f in SEARCH_FIELDS)
    ]


def has_valid_date(row):
    value = row.get("date")
    if not isinstance(value, str) or not ISO_DATE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def select_events(rows, query):
    """Post-fetch filters, in order: date range, price, free text."""
    # rows with a missing or malformed date are never served
    rows = [r for r in rows if has_valid_date(r)]
    rows = filter_by_date(rows, query.get("startDate"), query.get("endDate"))
    rows = filter_by_price(rows, query.get("maxPrice"))
    rows = filter_by_search(rows, query.get("search"))
    return rows


def get_events(store, params, limit=100):
    try:
        query = read_query(params)
        logger.info("Query params: %s", query)
        where = store_predicate(query)
        rows = store.list(where=where or None, order_by="date", limit=limit)
        logger.debug("Fetched %d rows from store (where=%s)", len(rows), where)
        events = [normalize_event(r) for r in select_events(rows, query)]
        logger.info("Returning %d events", len(events))
        return ServiceResult.ok(events=events, count=len(events))
    except Exception as e:
        logger.exception("Error fetching events")
        return ServiceResult.failure(e, events=[], count=0)
