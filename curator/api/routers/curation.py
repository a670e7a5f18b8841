from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from curator.api.deps import get_db
from curator.content.store import SqlContentStore
from curator.curate.service import curate_item
from curator.models.tables import Item
from curator.projection.projector import FORMAT_ELEMENT, FORMAT_SCHEMA
from curator.projection.records import MetadataField
from curator.schemas.api_v1 import BatchOut, BatchRequest, CurationRunOut, ItemMetadataOut, MetadataValueOut
from curator.tasks.curation_tasks import curate_items

router = APIRouter()


@router.post("/items/{item_id}/bitstreams-into-metadata", response_model=CurationRunOut)
def run_bitstreams_into_metadata(item_id: str, db: Session = Depends(get_db)) -> CurationRunOut:
    outcome = curate_item(db, item_id=item_id)
    return CurationRunOut(
        item_id=item_id,
        status=outcome.status.value,
        code=outcome.status.code,
        result=outcome.result,
        values=[r.value for r in outcome.records],
    )


@router.get("/items/{item_id}/metadata", response_model=ItemMetadataOut)
def get_format_metadata(item_id: str, db: Session = Depends(get_db)) -> ItemMetadataOut:
    item: Item | None = db.get(Item, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")

    values = SqlContentStore(db).get_metadata(item, FORMAT_SCHEMA, FORMAT_ELEMENT)
    return ItemMetadataOut(
        item_id=item.id,
        handle=item.handle,
        metadata=[
            MetadataValueOut(
                key=MetadataField(mv.schema, mv.element, mv.qualifier).key,
                value=mv.value,
                language=mv.language,
                place=mv.place,
            )
            for mv in values
        ],
    )


@router.post("/batch", response_model=BatchOut)
def run_batch(payload: BatchRequest) -> BatchOut:
    res = curate_items.delay(item_ids=payload.item_ids, limit=payload.limit)
    return BatchOut(task_id=res.id, status=res.status)
