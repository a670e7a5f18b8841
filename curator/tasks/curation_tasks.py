from __future__ import annotations

import logging

from curator.core.celery_app import celery
from curator.core.db import SessionLocal
from curator.curate.outcome import CurationStatus
from curator.curate.service import curate_item
from curator.tasks.batch import pick_item_ids

log = logging.getLogger("curator.tasks")


@celery.task(name="curate_items")
def curate_items(item_ids: list[str] | None = None, limit: int | None = None) -> dict:
    """Run the dc.format curation task over a batch of items.

    One session (unit of work) and one outcome per item; an error on one item
    never stops the batch. Items are processed sequentially, so two batches
    must not be run against the same items at once.
    """

    ids = pick_item_ids(item_ids, limit)

    counts = {s.value.lower(): 0 for s in CurationStatus if s != CurationStatus.UNSET}
    results: dict[str, str] = {}
    for item_id in ids:
        with SessionLocal() as db:
            outcome = curate_item(db, item_id=item_id)
        counts[outcome.status.value.lower()] += 1
        results[item_id] = outcome.status.value
        if outcome.status == CurationStatus.ERROR:
            log.warning("Curation error for item %s: %s", item_id, outcome.result)

    log.info("Curation batch done: %s", counts)
    return {"ok": True, "total": len(ids), **counts, "results": results}
