"""init (items, bundles, bitstreams, metadata, index documents, audit)

Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "items",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("handle", sa.String(length=100), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_modified", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "bundles",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("item_id", sa.String(length=36), sa.ForeignKey("items.id"), nullable=False),
        sa.Column("name", sa.String(length=64), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_bundles_item_position", "bundles", ["item_id", "position"], unique=False)

    op.create_table(
        "bitstream_formats",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("short_description", sa.String(length=128), nullable=False, unique=True),
        sa.Column("mime_type", sa.String(length=255), nullable=False),
    )

    op.create_table(
        "bitstreams",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("bundle_id", sa.String(length=36), sa.ForeignKey("bundles.id"), nullable=False),
        sa.Column("format_id", sa.String(length=36), sa.ForeignKey("bitstream_formats.id"), nullable=False),
        sa.Column("name", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("size_bytes", sa.BigInteger(), nullable=False),
        sa.Column("sequence_id", sa.Integer(), nullable=False),
        sa.Column("checksum", sa.String(length=64), nullable=False),
        sa.Column("checksum_algorithm", sa.String(length=20), nullable=False, server_default="MD5"),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("bundle_id", "sequence_id", name="uq_bitstreams_bundle_sequence"),
    )
    op.create_index("ix_bitstreams_bundle_position", "bitstreams", ["bundle_id", "position"], unique=False)

    op.create_table(
        "metadata_values",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("item_id", sa.String(length=36), sa.ForeignKey("items.id"), nullable=False),
        sa.Column("schema", sa.String(length=32), nullable=False),
        sa.Column("element", sa.String(length=64), nullable=False),
        sa.Column("qualifier", sa.String(length=64), nullable=True),
        sa.Column("language", sa.String(length=24), nullable=True),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column("place", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_metadata_values_item_field",
        "metadata_values",
        ["item_id", "schema", "element", "qualifier"],
        unique=False,
    )

    op.create_table(
        "indexed_documents",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("item_id", sa.String(length=36), sa.ForeignKey("items.id"), nullable=False, unique=True),
        sa.Column("unique_id", sa.String(length=100), nullable=False),
        sa.Column("resource_type", sa.String(length=50), nullable=False),
        sa.Column("fields", sa.JSON(), nullable=False, server_default=sa.text("'{}'")),
        sa.Column("indexed_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "audit_log",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("item_id", sa.String(length=36), nullable=True),
        sa.Column("event_type", sa.String(length=100), nullable=False),
        sa.Column("severity", sa.String(length=20), nullable=False),
        sa.Column("message", sa.String(length=1000), nullable=False),
        sa.Column("context", sa.JSON(), nullable=False, server_default=sa.text("'{}'")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_audit_log_item_created_at", "audit_log", ["item_id", "created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_audit_log_item_created_at", table_name="audit_log")
    op.drop_table("audit_log")
    op.drop_table("indexed_documents")
    op.drop_index("ix_metadata_values_item_field", table_name="metadata_values")
    op.drop_table("metadata_values")
    op.drop_index("ix_bitstreams_bundle_position", table_name="bitstreams")
    op.drop_table("bitstreams")
    op.drop_table("bitstream_formats")
    op.drop_index("ix_bundles_item_position", table_name="bundles")
    op.drop_table("bundles")
    op.drop_table("items")
