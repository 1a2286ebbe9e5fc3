import logging
from datetime import timedelta

from flask import Flask, jsonify, request
from flask_cors import CORS

from apscheduler.schedulers.background import BackgroundScheduler

from events.config import Settings, setup_logging
from events.ingestion import run_ingestion
from events.retrieval import get_events
from events.store import EventStore
from scrapers.session import PageFetcher

logger = logging.getLogger(__name__)


def create_app(store=None, fetcher=None, settings=None):
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    app = Flask(__name__)
    CORS(
        app,
        resources={r"/api/*": {"origins": "*"}},
        send_wildcard=True,
        methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # one store and one fetcher per process, shared by both services
    app.config["SETTINGS"] = settings
    app.config["EVENT_STORE"] = store or EventStore(settings.db_path)
    app.config["PAGE_FETCHER"] = fetcher or PageFetcher(timeout=settings.fetch_timeout)

    @app.route("/api/events", methods=["GET"])
    def list_events():
        result = get_events(app.config["EVENT_STORE"], request.args, limit=settings.retrieval_limit)
        body, status = result.to_response()
        return jsonify(body), status

    @app.route("/api/scrape", methods=["POST"])
    def trigger_scrape():
        body, status = ingest(app).to_response()
        return jsonify(body), status

    if settings.enable_scheduler:
        app.config["SCHEDULER"] = build_scheduler(app, settings.scrape_interval_minutes)
        app.config["SCHEDULER"].start()

    return app


def ingest(app):
    settings = app.config["SETTINGS"]
    return run_ingestion(
        app.config["EVENT_STORE"],
        app.config["PAGE_FETCHER"],
        purge_age=timedelta(hours=settings.purge_age_hours),
    )


def build_scheduler(app, minutes=30):
    logger.info("Scheduling ingestion every %d minutes", minutes)
    scheduler = BackgroundScheduler()
    scheduler.add_job(func=ingest, args=[app], trigger="interval", minutes=minutes, id="scrape-events")
    return scheduler


if __name__ == "__main__":
    app = create_app()
    # initial run
    ingest(app)
    if "SCHEDULER" not in app.config:
        build_scheduler(app, app.config["SETTINGS"].scrape_interval_minutes).start()
    app.run(host="0.0.0.0", port=5000)
