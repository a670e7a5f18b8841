from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from curator.projection.records import ProjectionRecord


class CurationStatus(str, Enum):
    UNSET = "UNSET"
    SUCCESS = "SUCCESS"
    FAIL = "FAIL"
    SKIP = "SKIP"
    ERROR = "ERROR"

    @property
    def code(self) -> int:
        """Numeric status as reported by curation runners."""
        return _CODES[self]


_CODES = {
    CurationStatus.UNSET: -3,
    CurationStatus.ERROR: -1,
    CurationStatus.SUCCESS: 0,
    CurationStatus.FAIL: 1,
    CurationStatus.SKIP: 2,
}


@dataclass(frozen=True)
class CurationOutcome:
    status: CurationStatus
    result: str = ""
    records: tuple[ProjectionRecord, ...] = ()
