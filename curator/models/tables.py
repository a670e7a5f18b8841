from __future__ import annotations

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

# Use JSONB on Postgres, fallback to JSON for SQLite/test environments.
JSONType = JSON().with_variant(JSONB, "postgresql")

from curator.models.base import Base


class Item(Base):
    __tablename__ = "items"
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    handle: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), nullable=False)
    last_modified: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), nullable=False)


class Bundle(Base):
    __tablename__ = "bundles"
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    item_id: Mapped[str] = mapped_column(String(36), ForeignKey("items.id"), nullable=False)
    name: Mapped[str | None] = mapped_column(String(64), nullable=True)  # ORIGINAL/THUMBNAIL/TEXT/LICENSE/...
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), nullable=False)


class BitstreamFormat(Base):
    __tablename__ = "bitstream_formats"
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    short_description: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    mime_type: Mapped[str] = mapped_column(String(255), nullable=False)


class Bitstream(Base):
    __tablename__ = "bitstreams"
    __table_args__ = (UniqueConstraint("bundle_id", "sequence_id", name="uq_bitstreams_bundle_sequence"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    bundle_id: Mapped[str] = mapped_column(String(36), ForeignKey("bundles.id"), nullable=False)
    format_id: Mapped[str] = mapped_column(String(36), ForeignKey("bitstream_formats.id"), nullable=False)

    name: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    size_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False)
    sequence_id: Mapped[int] = mapped_column(Integer, nullable=False)
    checksum: Mapped[str] = mapped_column(String(64), nullable=False)
    checksum_algorithm: Mapped[str] = mapped_column(String(20), nullable=False, default="MD5")

    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), nullable=False)


class MetadataValue(Base):
    __tablename__ = "metadata_values"
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    item_id: Mapped[str] = mapped_column(String(36), ForeignKey("items.id"), nullable=False)

    schema: Mapped[str] = mapped_column(String(32), nullable=False)  # dc
    element: Mapped[str] = mapped_column(String(64), nullable=False)  # format
    qualifier: Mapped[str | None] = mapped_column(String(64), nullable=True)  # original/thumbnail
    language: Mapped[str | None] = mapped_column(String(24), nullable=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    place: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), nullable=False)


class IndexedDocument(Base):
    __tablename__ = "indexed_documents"
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    item_id: Mapped[str] = mapped_column(String(36), ForeignKey("items.id"), nullable=False, unique=True)
    unique_id: Mapped[str] = mapped_column(String(100), nullable=False)  # e.g. Item-<uuid>
    resource_type: Mapped[str] = mapped_column(String(50), nullable=False)
    fields: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    indexed_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), nullable=False)


class AuditLog(Base):
    __tablename__ = "audit_log"
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    item_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    event_type: Mapped[str] = mapped_column(String(100), nullable=False)
    severity: Mapped[str] = mapped_column(String(20), nullable=False)
    message: Mapped[str] = mapped_column(String(1000), nullable=False)
    context: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), nullable=False)
