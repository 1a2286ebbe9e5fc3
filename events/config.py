"""Environment-driven settings and logging setup."""
import logging
import os
from dataclasses import dataclass


def _env_flag(name, default="0"):
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    db_path: str = "sqlite:///events.db"
    scrape_interval_minutes: int = 30
    enable_scheduler: bool = False
    fetch_timeout: int = 10
    retrieval_limit: int = 100
    purge_age_hours: int = 24
    log_level: str = "INFO"
    api_url: str = "http://localhost:5000"

    @classmethod
    def from_env(cls):
        return cls(
            db_path=os.environ.get("DB_PATH", cls.db_path),
            scrape_interval_minutes=int(os.environ.get("SCRAPE_INTERVAL_MINUTES", str(cls.scrape_interval_minutes))),
            enable_scheduler=_env_flag("ENABLE_SCHEDULER"),
            fetch_timeout=int(os.environ.get("FETCH_TIMEOUT", str(cls.fetch_timeout))),
            retrieval_limit=int(os.environ.get("RETRIEVAL_LIMIT", str(cls.retrieval_limit))),
            purge_age_hours=int(os.environ.get("PURGE_AGE_HOURS", str(cls.purge_age_hours))),
            log_level=os.environ.get("LOG_LEVEL", cls.log_level),
            api_url=os.environ.get("EVENTS_API_URL", cls.api_url),
        )


def setup_logging(level="INFO"):
    """Configure the root logger once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
