"""SQLAlchemy-backed event store exposing list / delete_many / create_many."""
import logging
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, Integer, String, Text, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

DB_PATH = "sqlite:///events.db"

Base = declarative_base()


def utc_timestamp(dt=None):
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2025-01-24T10:00:00.000Z"""
    dt = dt or datetime.now(timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Event(Base):
    __tablename__ = "events"
    id = Column(String(128), primary_key=True)
    title = Column(String(512), nullable=False)
    description = Column(Text)
    date = Column(String(10), index=True)
    time = Column(String(64))
    venue = Column(String(512))
    location = Column(String(512))
    city = Column(String(128))
    price = Column(Integer, default=0)
    is_free = Column(Boolean, default=False)
    category = Column(String(128))
    organizer = Column(String(512))
    registration_url = Column(String(1024), nullable=True)
    tags = Column(Text)
    source_platform = Column(String(128))
    scraped_at = Column(String(32), index=True)
    created_at = Column(String(32))

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": self.date,
            "time": self.time,
            "venue": self.venue,
            "location": self.location,
            "city": self.city,
            "price": self.price,
            "is_free": self.is_free,
            "category": self.category,
            "organizer": self.organizer,
            "registration_url": self.registration_url,
            "tags": self.tags,
            "source_platform": self.source_platform,
            "scraped_at": self.scraped_at,
            "created_at": self.created_at,
        }


COLUMNS = frozenset(c.name for c in Event.__table__.columns)

_RANGE_OPS = {
    "lt": lambda col, v: col < v,
    "lte": lambda col, v: col <= v,
    "gt": lambda col, v: col > v,
    "gte": lambda col, v: col >= v,
}


def _column(name):
    if name not in COLUMNS:
        raise ValueError(f"unknown event field: {name}")
    return getattr(Event, name)


def build_conditions(where):
    """Translate {"city": "Delhi", "scraped_at": {"lt": "..."}} into SQL expressions."""
    conditions = []
    for name, value in (where or {}).items():
        col = _column(name)
        if isinstance(value, dict):
            for op, operand in value.items():
                if op not in _RANGE_OPS:
                    raise ValueError(f"unsupported operator for {name}: {op}")
                conditions.append(_RANGE_OPS[op](col, operand))
        else:
            conditions.append(col == value)
    return conditions


def _to_row(data, now):
    row = {k: v for k, v in data.items() if k in COLUMNS}
    tags = row.get("tags")
    if isinstance(tags, (list, tuple)):
        row["tags"] = ", ".join(str(t) for t in tags)
    row.setdefault("created_at", now)
    return row


class EventStore:
    """Long-lived handle over the events table; built once and handed to the services."""

    def __init__(self, url=DB_PATH):
        kwargs = {}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # one shared connection, otherwise every checkout sees an empty database
                kwargs["poolclass"] = StaticPool
        self.url = url
        self.engine = create_engine(url, **kwargs)
        self.Session = sessionmaker(bind=self.engine)
        Base.metadata.create_all(self.engine)

    def list(self, where=None, order_by="date", limit=100):
        db = self.Session()
        try:
            q = db.query(Event)
            for cond in build_conditions(where):
                q = q.filter(cond)
            q = q.order_by(_column(order_by).asc())
            if limit:
                q = q.limit(limit)
            return [e.to_dict() for e in q.all()]
        finally:
            db.close()

    def delete_many(self, where):
        conditions = build_conditions(where)
        db = self.Session()
        try:
            q = db.query(Event)
            for cond in conditions:
                q = q.filter(cond)
            removed = q.delete(synchronize_session=False)
            db.commit()
            logger.info("Deleted %d events", removed)
            return removed
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def create_many(self, rows):
        now = utc_timestamp()
        db = self.Session()
        try:
            db.add_all([Event(**_to_row(r, now)) for r in rows])
            db.commit()
            logger.info("Inserted %d events", len(rows))
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
