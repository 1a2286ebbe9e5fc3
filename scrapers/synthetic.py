"""
Synthetic event generator.

Sources rarely expose dates, times or prices as structured data, so those
fields are fabricated from fixed ranges. Randomness and the clock are
injected so tests can seed them.
"""
import random
import string
from datetime import datetime, timedelta, timezone

from events.store import utc_timestamp

CHESS = "Chess"
BOARD_GAMES = "Board Games"
BOOK_CLUB = "Book Club"
DISCUSSION = "Discussion"

DELHI = "Delhi"
GURGAON = "Gurgaon"

_ID_ALPHABET = string.digits + string.ascii_lowercase


def infer_category(title):
    t = (title or "").lower()
    if "chess" in t:
        return CHESS
    if "board" in t or "game" in t:
        return BOARD_GAMES
    if "book" in t or "read" in t:
        return BOOK_CLUB
    return DISCUSSION


def infer_city(title):
    t = (title or "").lower()
    if "gurgaon" in t or "gurugram" in t:
        return GURGAON
    return DELHI


class SyntheticEventGenerator:
    def __init__(self, rng=None, clock=None):
        self.rng = rng or random.Random()
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def now(self):
        return self.clock()

    def future_date(self, days):
        """ISO date somewhere in the next ``days`` days (today included)."""
        offset = timedelta(seconds=self.rng.random() * days * 24 * 60 * 60)
        return (self.now() + offset).date().isoformat()

    def pick(self, options):
        return self.rng.choice(options)

    def price(self, paid_probability, low, high):
        """Return (price, is_free); free events always carry price 0."""
        if self.rng.random() < paid_probability:
            return self.rng.randint(low, high), False
        return 0, True

    def token(self, length=9):
        return "".join(self.rng.choice(_ID_ALPHABET) for _ in range(length))

    def millis(self):
        return int(self.now().timestamp() * 1000)

    def event_id(self, prefix, suffix=None):
        return f"{prefix}_{self.millis()}_{self.token() if suffix is None else suffix}"

    def timestamp(self):
        return utc_timestamp(self.now())
