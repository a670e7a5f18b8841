from __future__ import annotations

from collections.abc import Collection, Iterator
from typing import Any

from curator.content.store import ContentStore
from curator.projection.roles import BundleRole, resolve_role


class GraphWalk:
    """Iterable of (role, bitstream) for every bitstream of every recognized bundle.

    Bundles and bitstreams come out in store order. Bundles whose name has no
    role, or whose role is not in ``roles`` (when given), are skipped.
    Nothing is read until iteration starts, and each iteration starts over.
    Store faults propagate.

    ``recognized_bundles`` counts the bundles the last iteration accepted,
    including ones with no bitstreams.
    """

    def __init__(self, store: ContentStore, item: Any, *, roles: Collection[BundleRole] | None = None) -> None:
        self.store = store
        self.item = item
        self.roles = roles
        self.recognized_bundles = 0

    def __iter__(self) -> Iterator[tuple[BundleRole, Any]]:
        self.recognized_bundles = 0
        for bundle in self.store.get_bundles(self.item):
            role = resolve_role(self.store.get_bundle_name(bundle))
            if role is None:
                continue
            if self.roles is not None and role not in self.roles:
                continue
            self.recognized_bundles += 1
            for bitstream in self.store.get_bitstreams(bundle):
                yield role, bitstream


def walk(store: ContentStore, item: Any, *, roles: Collection[BundleRole] | None = None) -> GraphWalk:
    return GraphWalk(store, item, roles=roles)
