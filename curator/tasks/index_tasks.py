from __future__ import annotations

import logging

from curator.core.celery_app import celery
from curator.core.db import SessionLocal
from curator.core.errors import ContentStoreFault
from curator.discovery.service import index_item
from curator.tasks.batch import pick_item_ids

log = logging.getLogger("curator.tasks")


@celery.task(name="index_items")
def index_items(item_ids: list[str] | None = None, limit: int | None = None) -> dict:
    """(Re)build search documents for a batch of items.

    A store fault aborts the document for that item only; the old document is kept.
    """

    ids = pick_item_ids(item_ids, limit)

    indexed = 0
    missing = 0
    failed: dict[str, str] = {}
    for item_id in ids:
        with SessionLocal() as db:
            try:
                row = index_item(db, item_id=item_id)
            except ContentStoreFault as e:
                db.rollback()
                log.warning("Indexing failed for item %s: %s", item_id, e)
                failed[item_id] = str(e)
                continue
        if row is None:
            missing += 1
        else:
            indexed += 1

    return {"ok": not failed, "total": len(ids), "indexed": indexed, "missing": missing, "failed": failed}
