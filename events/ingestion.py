"""
Ingestion service: run the three gatherers concurrently, purge rows scraped
more than ``purge_age`` ago and insert the new batch.

The purge and the insert are two separate store calls. Overlapping runs can
interleave and rows gathered within the purge window are never deduplicated.
"""
import logging
import random
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import datetime, timedelta, timezone

from scrapers.eventbrite import scrape_eventbrite
from scrapers.local import generate_local_events
from scrapers.meetup import scrape_meetup
from scrapers.synthetic import SyntheticEventGenerator

from .results import ServiceResult
from .store import utc_timestamp

logger = logging.getLogger(__name__)

PURGE_AGE = timedelta(hours=24)


def _gatherers(fetcher):
    return {
        "meetup": lambda gen: scrape_meetup(fetcher, gen),
        "eventbrite": lambda gen: scrape_eventbrite(fetcher, gen),
        "local": lambda gen: generate_local_events(gen),
    }


def gather(fetcher, rng=None, clock=None):
    """Run every gatherer and wait for all of them; a failing one contributes []."""
    rng = rng or random.Random()
    gatherers = _gatherers(fetcher)
    # seeds drawn up front so results do not depend on thread scheduling
    generators = {
        name: SyntheticEventGenerator(random.Random(rng.getrandbits(64)), clock)
        for name in gatherers
    }
    collected = {}
    with ThreadPoolExecutor(max_workers=len(gatherers)) as executor:
        futures = {
            name: executor.submit(fn, generators[name])
            for name, fn in gatherers.items()
        }
        wait(futures.values())
    for name, future in futures.items():
        exc = future.exception()
        if exc is not None:
            logger.error("Gatherer %s failed: %s", name, exc, exc_info=exc)
            collected[name] = []
        else:
            collected[name] = future.result() or []
        logger.info("Gatherer %s produced %d events", name, len(collected[name]))
    return collected


def run_ingestion(store, fetcher, rng=None, clock=None, purge_age=PURGE_AGE):
    clock = clock or (lambda: datetime.now(timezone.utc))
    try:
        logger.info("Starting event scraping...")
        collected = gather(fetcher, rng=rng, clock=clock)
        batch = collected["meetup"] + collected["eventbrite"] + collected["local"]
        logger.info("Scraped %d events total", len(batch))

        if batch:
            cutoff = utc_timestamp(clock() - purge_age)
            store.delete_many({"scraped_at": {"lt": cutoff}})
            store.create_many(batch)
            logger.info("Events stored in database successfully")

        return ServiceResult.ok(
            message=f"Successfully scraped and stored {len(batch)} events",
            events_count=len(batch),
            sources={name: len(events) for name, events in collected.items()},
        )
    except Exception as e:
        logger.exception("Error in scrape-events run")
        return ServiceResult.failure(e, message="Failed to scrape events")
