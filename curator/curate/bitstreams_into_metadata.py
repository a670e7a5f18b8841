from __future__ import annotations

import logging
from typing import Any

from curator.content.store import ContentStore
from curator.curate.metadata_sink import apply_metadata
from curator.curate.outcome import CurationOutcome, CurationStatus
from curator.models.tables import Item
from curator.projection.projector import project_metadata
from curator.projection.walker import walk

log = logging.getLogger("curator.curate")

TASK_NAME = "bitstreams_into_metadata"


def bitstreams_into_metadata(store: ContentStore, obj: Any) -> CurationOutcome:
    """Record every ORIGINAL/THUMBNAIL bitstream of an item as a dc.format value.

    Anything that is not an item is skipped.
    """

    if not isinstance(obj, Item):
        log.debug("%s: skipping non-item %s", TASK_NAME, type(obj).__name__)
        return CurationOutcome(status=CurationStatus.SKIP, result=f"Not an item: {type(obj).__name__}")

    log.debug("%s: target item is %s", TASK_NAME, obj.id)

    graph = walk(store, obj)
    records = (rec for role, bitstream in graph for rec in project_metadata(store, obj, role, bitstream))
    outcome = apply_metadata(store, obj, records, graph=graph)

    log.debug("%s: %s %s", TASK_NAME, outcome.status.value, outcome.result)
    return outcome
