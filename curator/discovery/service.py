from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from curator.content.store import Authorizer, ContentStore, SqlContentStore
from curator.core.config import settings
from curator.discovery import file_info  # noqa: F401  (registers plugin)
from curator.discovery.document import ITEM, IndexableObject, SearchDocument
from curator.discovery.plugins import INDEX_PLUGINS, parse_plugin_names
from curator.models.tables import IndexedDocument, Item
from curator.util.ids import new_uuid
from curator.util.time import now_utc

log = logging.getLogger("curator.discovery")


def enabled_plugins() -> list[str]:
    names = parse_plugin_names(settings.DISCOVERY_PLUGINS)
    unknown = [n for n in names if n not in INDEX_PLUGINS]
    if unknown:
        raise ValueError(f"Unknown index plugin(s): {', '.join(unknown)}")
    return names


def build_search_document(
    store: ContentStore, indexable: IndexableObject, *, plugins: list[str] | None = None
) -> SearchDocument:
    doc = SearchDocument()
    doc.add_field("search.resourcetype", indexable.type)
    doc.add_field("search.resourceid", indexable.id)
    doc.add_field("search.uniqueid", indexable.unique_index_id)
    if indexable.type == ITEM:
        doc.add_field("handle", store.get_handle(indexable.indexed_object))

    for name in enabled_plugins() if plugins is None else plugins:
        INDEX_PLUGINS[name](store, indexable, doc)
    return doc


def index_item(db: Session, *, item_id: str, authorizer: Authorizer | None = None) -> IndexedDocument | None:
    """Rebuild and store the search document for one item.

    The stored document is replaced as a whole. Store faults propagate and
    nothing is written.
    """

    item: Item | None = db.get(Item, item_id)
    if not item:
        return None

    indexable = IndexableObject.for_item(item)
    doc = build_search_document(SqlContentStore(db, authorizer=authorizer), indexable)

    db.query(IndexedDocument).filter(IndexedDocument.item_id == item_id).delete(synchronize_session=False)
    row = IndexedDocument(
        id=new_uuid(),
        item_id=item_id,
        unique_id=indexable.unique_index_id,
        resource_type=indexable.type,
        fields=doc.to_dict(),
        indexed_at=now_utc(),
    )
    db.add(row)
    db.commit()

    log.info("Indexed %s (%s values)", indexable.unique_index_id, doc.value_count())
    return row


def get_indexed_document(db: Session, *, item_id: str) -> IndexedDocument | None:
    return db.query(IndexedDocument).filter(IndexedDocument.item_id == item_id).one_or_none()
