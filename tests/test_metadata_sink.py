from __future__ import annotations

import logging

import pytest

from curator.core.errors import AuthorizationFault, DataAccessFault
from curator.curate.metadata_sink import apply_metadata
from curator.curate.outcome import CurationStatus
from curator.projection.projector import project_metadata
from curator.projection.records import ProjectionRecord
from curator.projection.walker import walk
from tests.utils_content import WRITE_CALLS, FakeBitstream, FakeBundle, FakeItem, FakeStore


def _apply(store, item):
    graph = walk(store, item)
    records = (rec for role, bs in graph for rec in project_metadata(store, item, role, bs))
    return apply_metadata(store, item, records, graph=graph)


def _item() -> FakeItem:
    return FakeItem(
        handle="10/20",
        bundles=[
            FakeBundle("ORIGINAL", [FakeBitstream("a.pdf", "application/pdf", 10, 1, "c1", "first")]),
            FakeBundle("THUMBNAIL", [FakeBitstream("a.pdf.jpg", "image/jpeg", 5, 2, "c2")]),
        ],
        metadata=[
            ("dc", "format", "original", "en", "stale"),
            ("dc", "format", None, None, "unqualified stale"),
            ("dc", "title", None, "en", "A title"),
        ],
    )


def test_apply_replaces_format_values_in_walk_order():
    store = FakeStore()
    item = _item()

    outcome = _apply(store, item)

    assert outcome.status is CurationStatus.SUCCESS
    assert outcome.status.code == 0
    assert item.metadata == [
        ("dc", "title", None, "en", "A title"),
        ("dc", "format", "original", "en", "application/pdf##a.pdf##10##10/20##1##c1##first"),
        ("dc", "format", "thumbnail", "en", "image/jpeg##a.pdf.jpg##5##10/20##2##c2##"),
    ]
    assert store.calls[-1] == "update_item"


def test_apply_twice_is_not_cumulative():
    store = FakeStore()
    item = _item()

    _apply(store, item)
    once = list(item.metadata)
    _apply(store, item)

    assert item.metadata == once


def test_no_recognized_bundles_is_skip_without_writes():
    store = FakeStore()
    item = FakeItem(
        handle="10/21",
        bundles=[FakeBundle("TEXT", [FakeBitstream("a.txt", "text/plain", 1, 1, "c")])],
        metadata=[("dc", "format", "original", "en", "kept")],
    )

    outcome = _apply(store, item)

    assert outcome.status is CurationStatus.SKIP
    assert not WRITE_CALLS.intersection(store.calls)
    assert item.metadata == [("dc", "format", "original", "en", "kept")]


def test_empty_original_bundle_clears_stale_format_values():
    store = FakeStore()
    item = FakeItem(
        handle="10/22",
        bundles=[FakeBundle("ORIGINAL", [])],
        metadata=[
            ("dc", "format", "original", "en", "application/pdf##gone.pdf##1##10/22##1##c##"),
            ("dc", "title", None, "en", "A title"),
        ],
    )

    outcome = _apply(store, item)

    assert outcome.status is CurationStatus.SUCCESS
    assert outcome.records == ()
    assert item.metadata == [("dc", "title", None, "en", "A title")]
    assert store.calls[-2:] == ["clear_metadata", "update_item"]
    assert "add_metadata" not in store.calls


def test_records_without_a_graph_skip_only_when_empty():
    store = FakeStore()
    item = _item()

    outcome = apply_metadata(store, item, [])

    assert outcome.status is CurationStatus.SKIP
    assert not WRITE_CALLS.intersection(store.calls)


def test_records_outside_dc_format_are_rejected_before_clearing():
    store = FakeStore()
    item = _item()
    before = list(item.metadata)
    records = [
        ProjectionRecord(key="dc.format.original", value="ok"),
        ProjectionRecord(key="dc.title.alternative", value="not mine"),
    ]

    with pytest.raises(ValueError, match="dc.title.alternative"):
        apply_metadata(store, item, records)

    assert not WRITE_CALLS.intersection(store.calls)
    assert item.metadata == before


def test_fault_while_walking_second_bundle_is_error_before_any_write():
    item = _item()
    store = FakeStore(deny={id(item.bundles[1])})
    before = list(item.metadata)

    outcome = _apply(store, item)

    assert outcome.status is CurationStatus.ERROR
    assert outcome.status.code == -1
    assert "denied" in outcome.result
    assert not WRITE_CALLS.intersection(store.calls)
    assert item.metadata == before


class _FailingUpdateStore(FakeStore):
    def update_item(self, item):
        raise DataAccessFault("connection reset")


def test_fault_during_commit_is_error():
    store = _FailingUpdateStore()
    item = _item()

    outcome = _apply(store, item)

    assert outcome.status is CurationStatus.ERROR
    assert outcome.result == "connection reset"
    assert outcome.records == ()


def test_error_detail_is_logged_only_at_debug(caplog):
    item = _item()
    store = FakeStore(deny={id(item)})

    with caplog.at_level(logging.INFO, logger="curator.curate"):
        _apply(store, item)
    assert caplog.records == []

    with caplog.at_level(logging.DEBUG, logger="curator.curate"):
        _apply(store, item)
    assert any("denied" in r.getMessage() for r in caplog.records)


def test_other_exceptions_are_not_swallowed():
    store = FakeStore()
    item = _item()
    bad = [ProjectionRecord(key="format", value="x")]

    with pytest.raises(ValueError):
        apply_metadata(store, item, bad)


def test_authorization_fault_class_is_a_store_fault():
    from curator.core.errors import ContentStoreFault

    assert issubclass(AuthorizationFault, ContentStoreFault)
    assert issubclass(DataAccessFault, ContentStoreFault)
