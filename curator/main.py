from __future__ import annotations

import logging
import time
from typing import Any

from fastapi import FastAPI
from redis import Redis
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from curator.api.routers.curation import router as curation_router
from curator.api.routers.discovery import router as discovery_router
from curator.core.config import settings
from curator.core.db import engine
from curator.core.logging import configure_logging

configure_logging(settings.LOG_LEVEL)
log = logging.getLogger("curator")

app = FastAPI(title=settings.APP_NAME)


def _ping_database() -> None:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def wait_for_database(attempts: int, *, max_sleep_s: float) -> bool:
    """Ping the database until it answers, doubling the pause from 0.5s up to ``max_sleep_s``."""

    sleep_s = 0.5
    for attempt in range(1, attempts + 1):
        try:
            _ping_database()
        except SQLAlchemyError as e:
            log.warning("Startup: database not ready (attempt %s/%s): %s", attempt, attempts, e)
            if attempt < attempts:
                time.sleep(sleep_s)
                sleep_s = min(max_sleep_s, sleep_s * 2)
        else:
            return True
    log.error("Startup: giving up on the database after %s attempts; curation calls will fail", attempts)
    return False


def _check_database() -> bool:
    try:
        _ping_database()
        return True
    except Exception:
        return False


def _check_redis() -> bool:
    try:
        r = Redis.from_url(settings.REDIS_URL, socket_connect_timeout=1, socket_timeout=1)
        return bool(r.ping())
    except Exception:
        return False


@app.on_event("startup")
def _startup() -> None:
    # Do not crash API if deps are temporarily unavailable.
    if not settings.ENSURE_EXTERNAL_DEPS_ON_STARTUP:
        log.info("Startup: ENSURE_EXTERNAL_DEPS_ON_STARTUP=false; skipping database wait")
        return

    wait_for_database(settings.STARTUP_DB_WAIT_ATTEMPTS, max_sleep_s=settings.STARTUP_DB_WAIT_MAX_SLEEP_S)


@app.get("/health")
def health() -> dict[str, Any]:
    deps = {
        "database": _check_database(),
        "redis": _check_redis(),
    }
    return {"ok": all(deps.values()), "deps": deps, "app": settings.APP_NAME}


app.include_router(curation_router, prefix="/curation", tags=["curation"])
app.include_router(discovery_router, prefix="/discovery", tags=["discovery"])
