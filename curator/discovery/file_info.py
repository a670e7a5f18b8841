"""Adds filenames and descriptions of ORIGINAL bitstreams to the search document.

Each value is added three times: the analyzed field plus ``_keyword`` and
``_filter`` copies, which faceting and filter queries need.

Enable by listing ``file_info`` in DISCOVERY_PLUGINS, then reindex.
"""

from __future__ import annotations

from curator.content.store import ContentStore
from curator.discovery.document import ITEM, IndexableObject, SearchDocument
from curator.discovery.plugins import register
from curator.projection.projector import project_index
from curator.projection.roles import BundleRole
from curator.projection.walker import walk

BUNDLE_ROLE = BundleRole.ORIGINAL


@register("file_info")
def file_info_plugin(store: ContentStore, indexable: IndexableObject, document: SearchDocument) -> None:
    if indexable.type != ITEM:
        return

    item = indexable.indexed_object
    for role, bitstream in walk(store, item, roles=(BUNDLE_ROLE,)):
        for rec in project_index(store, role, bitstream):
            document.add_field(rec.key, rec.value)
