"""Scrapers package"""
from .eventbrite import scrape_eventbrite
from .local import generate_local_events
from .meetup import scrape_meetup
from .session import PageFetcher, create_session
from .synthetic import SyntheticEventGenerator

__all__ = [
	"scrape_meetup",
	"scrape_eventbrite",
	"generate_local_events",
	"PageFetcher",
	"create_session",
	"SyntheticEventGenerator",
]
