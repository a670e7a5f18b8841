from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from curator.api.deps import get_db
from curator.core.errors import AuthorizationFault, DataAccessFault
from curator.discovery.service import get_indexed_document, index_item
from curator.models.tables import IndexedDocument
from curator.schemas.api_v1 import IndexedDocumentOut

router = APIRouter()


def _doc_out(row: IndexedDocument) -> IndexedDocumentOut:
    return IndexedDocumentOut(
        item_id=row.item_id,
        unique_id=row.unique_id,
        resource_type=row.resource_type,
        fields=row.fields or {},
        indexed_at=row.indexed_at,
    )


@router.post("/items/{item_id}/reindex", response_model=IndexedDocumentOut)
def reindex_item(item_id: str, db: Session = Depends(get_db)) -> IndexedDocumentOut:
    try:
        row = index_item(db, item_id=item_id)
    except AuthorizationFault as e:
        db.rollback()
        raise HTTPException(status_code=403, detail=str(e))
    except DataAccessFault as e:
        db.rollback()
        raise HTTPException(status_code=503, detail=str(e))
    if row is None:
        raise HTTPException(status_code=404, detail="Item not found")
    return _doc_out(row)


@router.get("/items/{item_id}", response_model=IndexedDocumentOut)
def get_item_document(item_id: str, db: Session = Depends(get_db)) -> IndexedDocumentOut:
    row = get_indexed_document(db, item_id=item_id)
    if not row:
        raise HTTPException(status_code=404, detail="Item not indexed")
    return _doc_out(row)
