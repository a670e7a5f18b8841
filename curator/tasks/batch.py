from __future__ import annotations

from curator.core.config import settings
from curator.core.db import SessionLocal
from curator.models.tables import Item


def pick_item_ids(item_ids: list[str] | None = None, limit: int | None = None) -> list[str]:
    """Explicit ids as given, else the first ``limit`` items by handle."""

    if item_ids:
        return list(item_ids)
    with SessionLocal() as db:
        rows = db.query(Item.id).order_by(Item.handle.asc()).limit(limit or settings.CURATION_BATCH_LIMIT).all()
        return [r[0] for r in rows]
