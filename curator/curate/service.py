from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from curator.content.store import Authorizer, SqlContentStore
from curator.curate.bitstreams_into_metadata import TASK_NAME, bitstreams_into_metadata
from curator.curate.outcome import CurationOutcome, CurationStatus
from curator.models.tables import AuditLog, Item
from curator.util.ids import new_uuid
from curator.util.time import now_utc

log = logging.getLogger("curator.curate")

# audit_log.message column width
AUDIT_MESSAGE_MAX = 1000

_SEVERITY = {
    CurationStatus.SUCCESS: "INFO",
    CurationStatus.SKIP: "INFO",
    CurationStatus.FAIL: "WARNING",
    CurationStatus.ERROR: "ERROR",
    CurationStatus.UNSET: "WARNING",
}


def audit(
    db: Session,
    *,
    item_id: str | None,
    event_type: str,
    severity: str,
    message: str,
    context: dict,
) -> None:
    db.add(
        AuditLog(
            id=new_uuid(),
            item_id=item_id,
            event_type=event_type,
            severity=severity,
            message=message,
            context=context or {},
            created_at=now_utc(),
        )
    )


def _run(db: Session, item_id: str, authorizer: Authorizer | None) -> CurationOutcome:
    try:
        item: Item | None = db.get(Item, item_id)
    except SQLAlchemyError as e:
        db.rollback()
        return CurationOutcome(status=CurationStatus.ERROR, result=f"load item {item_id}: {e}")
    if not item:
        return CurationOutcome(status=CurationStatus.FAIL, result=f"Item not found: {item_id}")

    outcome = bitstreams_into_metadata(SqlContentStore(db, authorizer=authorizer), item)
    if outcome.status != CurationStatus.SUCCESS:
        db.rollback()
        return outcome

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        return CurationOutcome(status=CurationStatus.ERROR, result=f"commit {item_id}: {e}")
    return outcome


def curate_item(db: Session, *, item_id: str, authorizer: Authorizer | None = None) -> CurationOutcome:
    """Run the dc.format curation task on one item as one unit of work.

    SUCCESS commits; any other outcome rolls back whatever the task touched.
    A failed commit rolls back and reports ERROR. The audit row is committed
    afterwards on a best-effort basis: if it cannot be written it is logged
    and the outcome is still returned.
    """

    outcome = _run(db, item_id, authorizer)

    try:
        audit(
            db,
            item_id=item_id,
            event_type=f"curate.{TASK_NAME}",
            severity=_SEVERITY[outcome.status],
            message=(outcome.result or outcome.status.value)[:AUDIT_MESSAGE_MAX],
            context={"status": outcome.status.value, "code": outcome.status.code, "values": len(outcome.records)},
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        log.warning("audit row for item %s not written: %s", item_id, e)

    return outcome
