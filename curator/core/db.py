from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from curator.core.config import settings


def engine_options(url: str) -> dict[str, Any]:
    options: dict[str, Any] = {"pool_pre_ping": True}
    if url.startswith("sqlite"):
        # In-memory SQLite (tests) only exists on one connection, shared by every session and thread.
        options.update(connect_args={"check_same_thread": False}, poolclass=StaticPool)
    return options


engine = create_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

# Sessions are units of work: the curation and index services commit or roll back themselves.
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
