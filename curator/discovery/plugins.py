from __future__ import annotations

from collections.abc import Callable

# (store, indexable, document) -> None; plugins only ever add fields.
IndexPlugin = Callable[..., None]

INDEX_PLUGINS: dict[str, IndexPlugin] = {}


def register(name: str):
    def _wrap(fn: IndexPlugin) -> IndexPlugin:
        INDEX_PLUGINS[name] = fn
        return fn

    return _wrap


def parse_plugin_names(raw: str) -> list[str]:
    return [x.strip() for x in (raw or "").split(",") if x.strip()]
