from __future__ import annotations

import pytest

from tests.utils_content import SCAN_PDF, seed_item, set_test_env


@pytest.fixture()
def db(monkeypatch):
    set_test_env(monkeypatch)

    from curator.core.db import SessionLocal, engine
    from curator.models.base import Base

    Base.metadata.create_all(bind=engine)
    with SessionLocal() as s:
        yield s


def test_batch_reports_one_outcome_per_item(db):
    from curator.tasks.curation_tasks import curate_items
    from curator.util.ids import new_uuid

    ok_id = seed_item(db, handle=f"300/{new_uuid()[:8]}", bundles=[("ORIGINAL", [SCAN_PDF])])
    skip_id = seed_item(db, handle=f"300/{new_uuid()[:8]}", bundles=[])

    out = curate_items(item_ids=[ok_id, skip_id, "missing"])

    assert out["ok"] is True
    assert out["total"] == 3
    assert (out["success"], out["skip"], out["fail"], out["error"]) == (1, 1, 1, 0)
    assert out["results"] == {ok_id: "SUCCESS", skip_id: "SKIP", "missing": "FAIL"}


def test_batch_continues_after_error(db, monkeypatch):
    from curator.content.store import SqlContentStore
    from curator.core.errors import DataAccessFault
    from curator.models.tables import MetadataValue
    from curator.tasks.curation_tasks import curate_items
    from curator.util.ids import new_uuid

    bad_id = seed_item(db, handle=f"300/{new_uuid()[:8]}", bundles=[("ORIGINAL", [dict(SCAN_PDF, checksum="bad")])])
    good_id = seed_item(db, handle=f"300/{new_uuid()[:8]}", bundles=[("ORIGINAL", [SCAN_PDF])])

    real = SqlContentStore.get_checksum

    def flaky(self, bitstream):
        value = real(self, bitstream)
        if value == "bad":
            raise DataAccessFault("checksum table unavailable")
        return value

    monkeypatch.setattr(SqlContentStore, "get_checksum", flaky)

    out = curate_items(item_ids=[bad_id, good_id])

    assert out["results"] == {bad_id: "ERROR", good_id: "SUCCESS"}
    assert db.query(MetadataValue).filter(MetadataValue.item_id == bad_id).count() == 0
    assert db.query(MetadataValue).filter(MetadataValue.item_id == good_id).count() == 1


def test_status_codes_match_curation_runner_codes():
    from curator.curate.outcome import CurationStatus

    assert {s.value: s.code for s in CurationStatus} == {
        "UNSET": -3,
        "SUCCESS": 0,
        "FAIL": 1,
        "SKIP": 2,
        "ERROR": -1,
    }


def test_failed_commit_is_error_and_batch_moves_on(db, monkeypatch):
    from sqlalchemy.exc import OperationalError
    from sqlalchemy.orm import Session

    from curator.models.tables import AuditLog, MetadataValue
    from curator.tasks.curation_tasks import curate_items
    from curator.util.ids import new_uuid

    first_id = seed_item(db, handle=f"300/{new_uuid()[:8]}", bundles=[("ORIGINAL", [SCAN_PDF])])
    second_id = seed_item(db, handle=f"300/{new_uuid()[:8]}", bundles=[("ORIGINAL", [SCAN_PDF])])

    real_commit = Session.commit
    state = {"failures": 1}

    def locked_once(self):
        if state["failures"]:
            state["failures"] -= 1
            raise OperationalError("COMMIT", None, Exception("database is locked"))
        return real_commit(self)

    monkeypatch.setattr(Session, "commit", locked_once)

    out = curate_items(item_ids=[first_id, second_id])

    assert out["results"] == {first_id: "ERROR", second_id: "SUCCESS"}
    assert (out["success"], out["error"]) == (1, 1)
    assert db.query(MetadataValue).filter(MetadataValue.item_id == first_id).count() == 0
    assert db.query(MetadataValue).filter(MetadataValue.item_id == second_id).count() == 1

    audit = db.query(AuditLog).filter(AuditLog.item_id == first_id).one()
    assert audit.severity == "ERROR"
    assert "database is locked" in audit.message


def test_failed_audit_write_keeps_the_outcome(db, monkeypatch, caplog):
    from sqlalchemy.exc import OperationalError

    from curator.curate import service
    from curator.curate.service import curate_item
    from curator.models.tables import AuditLog, MetadataValue
    from curator.util.ids import new_uuid

    item_id = seed_item(db, handle=f"300/{new_uuid()[:8]}", bundles=[("ORIGINAL", [SCAN_PDF])])

    def broken_audit(db, **kwargs):
        raise OperationalError("INSERT INTO audit_log", None, Exception("disk full"))

    monkeypatch.setattr(service, "audit", broken_audit)

    with caplog.at_level("WARNING", logger="curator.curate"):
        outcome = curate_item(db, item_id=item_id)

    assert outcome.status.value == "SUCCESS"
    assert db.query(MetadataValue).filter(MetadataValue.item_id == item_id).count() == 1
    assert db.query(AuditLog).filter(AuditLog.item_id == item_id).count() == 0
    assert any("disk full" in r.getMessage() for r in caplog.records)


def test_long_error_is_truncated_to_the_audit_column(db, monkeypatch):
    from curator.content.store import SqlContentStore
    from curator.core.errors import DataAccessFault
    from curator.curate.service import AUDIT_MESSAGE_MAX, curate_item
    from curator.models.tables import AuditLog
    from curator.util.ids import new_uuid

    item_id = seed_item(db, handle=f"300/{new_uuid()[:8]}", bundles=[("ORIGINAL", [SCAN_PDF])])

    def noisy(self, bitstream):
        raise DataAccessFault("x" * 5000)

    monkeypatch.setattr(SqlContentStore, "get_checksum", noisy)

    outcome = curate_item(db, item_id=item_id)

    assert len(outcome.result) == 5000
    audit = db.query(AuditLog).filter(AuditLog.item_id == item_id).one()
    assert len(audit.message) == AUDIT_MESSAGE_MAX


def test_both_batches_select_items_the_same_way(db):
    from curator.models.tables import Item
    from curator.tasks.batch import pick_item_ids
    from curator.tasks.index_tasks import index_items
    from curator.util.ids import new_uuid

    seed_item(db, handle=f"300/{new_uuid()[:8]}", bundles=[])
    seed_item(db, handle=f"300/{new_uuid()[:8]}", bundles=[])

    assert pick_item_ids(["b", "a"]) == ["b", "a"]

    first_two = [r[0] for r in db.query(Item.id).order_by(Item.handle.asc()).limit(2)]
    assert pick_item_ids(limit=2) == first_two
    assert index_items(limit=2)["total"] == 2
