from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import Any, Protocol

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from curator.core.errors import AuthorizationFault, DataAccessFault
from curator.models.tables import Bitstream, BitstreamFormat, Bundle, Item, MetadataValue
from curator.util.ids import new_uuid
from curator.util.time import now_utc

# Wildcard for qualifier/language when clearing metadata.
ANY = "*"

READ = "READ"
WRITE = "WRITE"

# (action, node) -> allowed?
Authorizer = Callable[[str, Any], bool]


class ContentStore(Protocol):
    """What the projection pipeline needs from the repository.

    Every call may raise AuthorizationFault or DataAccessFault.
    """

    def get_bundles(self, item: Any) -> Sequence[Any]: ...

    def get_bundle_name(self, bundle: Any) -> str | None: ...

    def get_bitstreams(self, bundle: Any) -> Sequence[Any]: ...

    def get_name(self, bitstream: Any) -> str: ...

    def get_mime_type(self, bitstream: Any) -> str: ...

    def get_size_bytes(self, bitstream: Any) -> int: ...

    def get_sequence_id(self, bitstream: Any) -> int: ...

    def get_checksum(self, bitstream: Any) -> str: ...

    def get_description(self, bitstream: Any) -> str | None: ...

    def get_handle(self, item: Any) -> str: ...

    def clear_metadata(self, item: Any, schema: str, element: str, qualifier: str = ANY, language: str = ANY) -> None: ...

    def add_metadata(
        self, item: Any, schema: str, element: str, qualifier: str | None, language: str | None, value: str
    ) -> None: ...

    def update_item(self, item: Any) -> None: ...


@contextmanager
def _db_errors(what: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as e:
        raise DataAccessFault(f"{what}: {e}") from e


def _describe(node: Any) -> str:
    return f"{type(node).__name__}({getattr(node, 'id', '?')})"


class SqlContentStore:
    """ContentStore over a SQLAlchemy session.

    The session is the caller's unit of work: this class flushes but never
    commits or rolls back.
    """

    def __init__(self, db: Session, *, authorizer: Authorizer | None = None) -> None:
        self.db = db
        self.authorizer = authorizer

    def _authorize(self, action: str, node: Any) -> None:
        if self.authorizer is not None and not self.authorizer(action, node):
            raise AuthorizationFault(f"{action} denied on {_describe(node)}")

    def _read(self, node: Any, attr: str) -> Any:
        self._authorize(READ, node)
        with _db_errors(f"read {attr} of {_describe(node)}"):
            return getattr(node, attr)

    # -- graph -----------------------------------------------------------

    def get_bundles(self, item: Item) -> list[Bundle]:
        self._authorize(READ, item)
        with _db_errors(f"list bundles of {_describe(item)}"):
            return (
                self.db.query(Bundle)
                .filter(Bundle.item_id == item.id)
                .order_by(Bundle.position.asc(), Bundle.created_at.asc())
                .all()
            )

    def get_bundle_name(self, bundle: Bundle) -> str | None:
        return self._read(bundle, "name")

    def get_bitstreams(self, bundle: Bundle) -> list[Bitstream]:
        self._authorize(READ, bundle)
        with _db_errors(f"list bitstreams of {_describe(bundle)}"):
            return (
                self.db.query(Bitstream)
                .filter(Bitstream.bundle_id == bundle.id)
                .order_by(Bitstream.position.asc(), Bitstream.sequence_id.asc())
                .all()
            )

    # -- bitstream attributes --------------------------------------------

    def get_name(self, bitstream: Bitstream) -> str:
        return self._read(bitstream, "name")

    def get_mime_type(self, bitstream: Bitstream) -> str:
        format_id = self._read(bitstream, "format_id")
        with _db_errors(f"load format of {_describe(bitstream)}"):
            fmt = self.db.get(BitstreamFormat, format_id)
        if fmt is None:
            raise DataAccessFault(f"{_describe(bitstream)} references missing format {format_id}")
        return fmt.mime_type

    def get_size_bytes(self, bitstream: Bitstream) -> int:
        return self._read(bitstream, "size_bytes")

    def get_sequence_id(self, bitstream: Bitstream) -> int:
        return self._read(bitstream, "sequence_id")

    def get_checksum(self, bitstream: Bitstream) -> str:
        return self._read(bitstream, "checksum")

    def get_description(self, bitstream: Bitstream) -> str | None:
        return self._read(bitstream, "description")

    def get_handle(self, item: Item) -> str:
        return self._read(item, "handle")

    # -- metadata --------------------------------------------------------

    def get_metadata(self, item: Item, schema: str, element: str, qualifier: str = ANY) -> list[MetadataValue]:
        self._authorize(READ, item)
        with _db_errors(f"read metadata of {_describe(item)}"):
            q = self.db.query(MetadataValue).filter(
                MetadataValue.item_id == item.id,
                MetadataValue.schema == schema,
                MetadataValue.element == element,
            )
            if qualifier != ANY:
                q = q.filter(MetadataValue.qualifier == qualifier)
            return q.order_by(MetadataValue.place.asc()).all()

    def clear_metadata(self, item: Item, schema: str, element: str, qualifier: str = ANY, language: str = ANY) -> None:
        self._authorize(WRITE, item)
        with _db_errors(f"clear {schema}.{element} on {_describe(item)}"):
            q = self.db.query(MetadataValue).filter(
                MetadataValue.item_id == item.id,
                MetadataValue.schema == schema,
                MetadataValue.element == element,
            )
            if qualifier != ANY:
                q = q.filter(MetadataValue.qualifier == qualifier)
            if language != ANY:
                q = q.filter(MetadataValue.language == language)
            for mv in q.all():
                self.db.delete(mv)
            self.db.flush()

    def add_metadata(
        self, item: Item, schema: str, element: str, qualifier: str | None, language: str | None, value: str
    ) -> None:
        self._authorize(WRITE, item)
        with _db_errors(f"add {schema}.{element} on {_describe(item)}"):
            last_place = (
                self.db.query(func.max(MetadataValue.place))
                .filter(
                    MetadataValue.item_id == item.id,
                    MetadataValue.schema == schema,
                    MetadataValue.element == element,
                )
                .scalar()
            )
            self.db.add(
                MetadataValue(
                    id=new_uuid(),
                    item_id=item.id,
                    schema=schema,
                    element=element,
                    qualifier=qualifier,
                    language=language,
                    value=value,
                    place=0 if last_place is None else last_place + 1,
                    created_at=now_utc(),
                )
            )
            self.db.flush()

    def update_item(self, item: Item) -> None:
        self._authorize(WRITE, item)
        with _db_errors(f"update {_describe(item)}"):
            item.last_modified = now_utc()
            self.db.flush()
