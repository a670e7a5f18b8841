from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from curator.content.store import ANY, ContentStore
from curator.core.errors import AuthorizationFault, DataAccessFault
from curator.curate.outcome import CurationOutcome, CurationStatus
from curator.projection.projector import FORMAT_ELEMENT, FORMAT_LANGUAGE, FORMAT_SCHEMA
from curator.projection.records import MetadataField, ProjectionRecord
from curator.projection.walker import GraphWalk

log = logging.getLogger("curator.curate")


def _owned_fields(records: list[ProjectionRecord]) -> list[MetadataField]:
    fields = [MetadataField.parse(rec.key) for rec in records]
    for rec, field in zip(records, fields):
        if (field.schema, field.element) != (FORMAT_SCHEMA, FORMAT_ELEMENT):
            raise ValueError(f"record key {rec.key!r} is outside {FORMAT_SCHEMA}.{FORMAT_ELEMENT}")
    return fields


def apply_metadata(
    store: ContentStore, item: Any, records: Iterable[ProjectionRecord], *, graph: GraphWalk | None = None
) -> CurationOutcome:
    """Replace the item's dc.format values with ``records``.

    Records are drained before anything is written, so a fault raised while
    walking/projecting leaves the item untouched. When ``graph`` is the walk
    the records came from, an item with recognized but empty bundles still
    has its dc.format values cleared. Nothing recognized -> SKIP without any
    store-modifying call. Faults become an ERROR outcome; rolling back the
    session is up to the caller.

    Every record key must name a dc.format field; anything else is a
    ValueError raised before the clear.
    """

    try:
        pending = list(records)
        fields = _owned_fields(pending)
        recognized = graph.recognized_bundles if graph is not None else len(pending)
        if not recognized:
            return CurationOutcome(status=CurationStatus.SKIP, result="No ORIGINAL/THUMBNAIL bitstreams")

        store.clear_metadata(item, FORMAT_SCHEMA, FORMAT_ELEMENT, ANY, ANY)
        for rec, field in zip(pending, fields):
            store.add_metadata(item, field.schema, field.element, field.qualifier, FORMAT_LANGUAGE, rec.value)
        store.update_item(item)
    except (AuthorizationFault, DataAccessFault) as e:
        if log.isEnabledFor(logging.DEBUG):
            log.debug("dc.format projection failed for %s: %s", getattr(item, "id", item), e)
        return CurationOutcome(status=CurationStatus.ERROR, result=str(e))

    if not pending:
        result = f"{FORMAT_SCHEMA}.{FORMAT_ELEMENT} cleared, no bitstreams left"
    else:
        result = f"{len(pending)} {FORMAT_SCHEMA}.{FORMAT_ELEMENT} value(s) written"
    return CurationOutcome(status=CurationStatus.SUCCESS, result=result, records=tuple(pending))
