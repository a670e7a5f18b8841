from __future__ import annotations

from typing import Any

from curator.content.store import ContentStore
from curator.core.errors import DataAccessFault
from curator.projection.records import FIELD_ROLE_SUFFIX, FieldRole, MetadataField, ProjectionRecord
from curator.projection.roles import BundleRole

DELIMITER = "##"

FORMAT_SCHEMA = "dc"
FORMAT_ELEMENT = "format"
FORMAT_LANGUAGE = "en"

# Index field stems per bundle role. Roles without a stem produce no index fields.
INDEX_FIELD_STEMS: dict[BundleRole, str] = {
    BundleRole.ORIGINAL: "original_bundle",
}


def _required(value: Any, what: str, bitstream: Any) -> Any:
    if value is None:
        raise DataAccessFault(f"{what} missing on bitstream {getattr(bitstream, 'id', bitstream)!r}")
    return value


def format_bitstream_value(store: ContentStore, item: Any, bitstream: Any) -> str:
    """MIME##name##size##handle##sequence##checksum## plus the description, if any.

    The delimiter after the checksum is always present.
    """

    size = int(_required(store.get_size_bytes(bitstream), "size", bitstream))
    if size < 0:
        raise DataAccessFault(f"negative size {size} on bitstream {getattr(bitstream, 'id', bitstream)!r}")

    parts = [
        _required(store.get_mime_type(bitstream), "MIME type", bitstream),
        _required(store.get_name(bitstream), "name", bitstream),
        str(size),
        _required(store.get_handle(item), "item handle", bitstream),
        str(_required(store.get_sequence_id(bitstream), "sequence id", bitstream)),
        _required(store.get_checksum(bitstream), "checksum", bitstream),
    ]
    value = "".join(f"{p}{DELIMITER}" for p in parts)

    description = store.get_description(bitstream)
    if description:
        value += description
    return value


def project_metadata(store: ContentStore, item: Any, role: BundleRole, bitstream: Any) -> list[ProjectionRecord]:
    field = MetadataField(FORMAT_SCHEMA, FORMAT_ELEMENT, role.value)
    return [ProjectionRecord(key=field.key, value=format_bitstream_value(store, item, bitstream))]


def _fan_out(field_name: str, value: str) -> list[ProjectionRecord]:
    # base / _keyword / _filter, in that order
    return [ProjectionRecord(key=field_name + FIELD_ROLE_SUFFIX[r], value=value, role=r) for r in FieldRole]


def project_index(store: ContentStore, role: BundleRole, bitstream: Any) -> list[ProjectionRecord]:
    stem = INDEX_FIELD_STEMS.get(role)
    if stem is None:
        return []

    out = _fan_out(f"{stem}_filenames", _required(store.get_name(bitstream), "name", bitstream))

    description = store.get_description(bitstream)
    if description:
        out.extend(_fan_out(f"{stem}_descriptions", description))
    return out
