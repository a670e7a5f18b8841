from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


class CurationRunOut(BaseModel):
    item_id: str
    status: Literal["UNSET", "SUCCESS", "FAIL", "SKIP", "ERROR"]
    code: int
    result: str
    values: list[str] = Field(default_factory=list)


class MetadataValueOut(BaseModel):
    key: str
    value: str
    language: str | None = None
    place: int


class ItemMetadataOut(BaseModel):
    item_id: str
    handle: str
    metadata: list[MetadataValueOut] = Field(default_factory=list)


class BatchRequest(BaseModel):
    item_ids: list[str] | None = None
    limit: int | None = Field(default=None, ge=1)


class BatchOut(BaseModel):
    task_id: str
    status: str


class IndexedDocumentOut(BaseModel):
    item_id: str
    unique_id: str
    resource_type: str
    fields: dict[str, list[Any]]
    indexed_at: datetime
