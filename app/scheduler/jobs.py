"""
app/scheduler/jobs.py

APScheduler-based scheduler for the daily sellers.json crawl.

Schedule (UTC)
--------------
  daily_sellers_crawl : SELLERS_SCHEDULE_HOUR:SELLERS_SCHEDULE_MINUTE every day
                        (04:00 by default)

Lifecycle
---------
Call ``build_scheduler()`` once to get a configured ``BackgroundScheduler``.
The API starts it on boot when ``SELLERS_SCHEDULER_ENABLED`` is true and
shuts it down on exit.
"""

from __future__ import annotations

import logging

from apscheduler.schedulers.background import BackgroundScheduler

from app.sellers.config import SellersPipelineSettings, get_sellers_pipeline_settings
from app.sellers.engine import SellersPipelineEngine

logger = logging.getLogger(__name__)


def run_daily_sellers_crawl(settings: SellersPipelineSettings | None = None) -> None:
    """
    Run the full pipeline once. Failures are logged, never raised into the scheduler.
    """
    logger.info("Scheduler: daily_sellers_crawl starting")
    try:
        summary = SellersPipelineEngine(settings=settings or get_sellers_pipeline_settings()).run()
    except Exception as exc:  # noqa: BLE001
        logger.warning("Scheduler: daily_sellers_crawl failed: %s", exc)
        return

    logger.info(
        "Scheduler: daily_sellers_crawl complete status=%s sources_fetched=%s "
        "unique_url_count=%s",
        summary.status,
        summary.sources_fetched,
        summary.unique_url_count,
    )


def build_scheduler(settings: SellersPipelineSettings | None = None) -> BackgroundScheduler:
    """
    Build and register the daily crawl job.

    Returns a configured but *not yet started* ``BackgroundScheduler``.
    """
    resolved = settings or get_sellers_pipeline_settings()
    scheduler = BackgroundScheduler(timezone="UTC")

    scheduler.add_job(
        run_daily_sellers_crawl,
        trigger="cron",
        hour=resolved.schedule_hour,
        minute=resolved.schedule_minute,
        kwargs={"settings": resolved},
        id="daily_sellers_crawl",
        name="Daily sellers.json crawl",
        replace_existing=True,
        misfire_grace_time=3600,
    )

    return scheduler
