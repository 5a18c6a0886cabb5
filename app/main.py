from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI

from app.config import get_app_settings
from app.sellers.logging_utils import configure_logging


def _validate_settings() -> None:
    """
    Validate pipeline configuration at startup.

    Raises RuntimeError listing every problem so the operator can fix all of
    them in one restart cycle.
    """

    from app.sellers.config import get_sellers_pipeline_settings

    errors: list[str] = []
    try:
        settings = get_sellers_pipeline_settings()
    except (FileNotFoundError, ValueError) as exc:
        errors.append(f"SELLERS_SOURCES_PATH could not be loaded: {exc}")
    else:
        if not settings.sources:
            errors.append("No sellers.json sources configured. Check SELLERS_SOURCES_PATH.")

    if errors:
        raise RuntimeError(
            "Startup validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Start the daily crawl scheduler on boot when enabled; shut it down on exit."""
    if not get_app_settings().scheduler_enabled:
        yield
        return

    from app.scheduler.jobs import build_scheduler

    scheduler = build_scheduler()
    scheduler.start()
    logging.getLogger(__name__).info("Scheduler started with %d jobs", len(scheduler.get_jobs()))
    try:
        yield
    finally:
        scheduler.shutdown(wait=True)
        logging.getLogger(__name__).info("Scheduler shut down")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_settings()
    configure_logging(get_app_settings().log_level)

    application = FastAPI(
        title="Sellers Domain Crawler API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from app.api.routers import sellers_pipeline_router

    application.include_router(sellers_pipeline_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
