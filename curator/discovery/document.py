from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

ITEM = "Item"
COLLECTION = "Collection"
COMMUNITY = "Community"


@dataclass
class SearchDocument:
    """Multi-valued field bag handed to the search backend.

    Values keep insertion order per field.
    """

    fields: dict[str, list[Any]] = field(default_factory=dict)

    def add_field(self, name: str, value: Any) -> None:
        self.fields.setdefault(name, []).append(value)

    def get_field_values(self, name: str) -> list[Any]:
        return list(self.fields.get(name, []))

    def field_names(self) -> list[str]:
        return list(self.fields)

    def value_count(self) -> int:
        return sum(len(v) for v in self.fields.values())

    def to_dict(self) -> dict[str, list[Any]]:
        return {k: list(v) for k, v in self.fields.items()}


@dataclass(frozen=True)
class IndexableObject:
    type: str  # Item/Collection/Community
    indexed_object: Any

    @property
    def id(self) -> str:
        return str(getattr(self.indexed_object, "id", ""))

    @property
    def unique_index_id(self) -> str:
        return f"{self.type}-{self.id}"

    @classmethod
    def for_item(cls, item: Any) -> "IndexableObject":
        return cls(type=ITEM, indexed_object=item)
