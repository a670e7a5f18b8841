from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FieldRole(str, Enum):
    PRIMARY = "primary"
    FACET = "facet"  # unanalyzed copy for faceting
    FILTER = "filter"  # unanalyzed copy for filter queries


FIELD_ROLE_SUFFIX: dict[FieldRole, str] = {
    FieldRole.PRIMARY: "",
    FieldRole.FACET: "_keyword",
    FieldRole.FILTER: "_filter",
}


@dataclass(frozen=True)
class ProjectionRecord:
    key: str
    value: str
    role: FieldRole = FieldRole.PRIMARY


@dataclass(frozen=True)
class MetadataField:
    schema: str
    element: str
    qualifier: str | None = None

    @property
    def key(self) -> str:
        parts = [self.schema, self.element]
        if self.qualifier:
            parts.append(self.qualifier)
        return ".".join(parts)

    @classmethod
    def parse(cls, key: str) -> "MetadataField":
        parts = key.split(".", 2)
        if len(parts) < 2 or not all(parts):
            raise ValueError(f"Not a metadata field key: {key!r}")
        return cls(schema=parts[0], element=parts[1], qualifier=parts[2] if len(parts) == 3 else None)
