from __future__ import annotations

from enum import Enum


class BundleRole(str, Enum):
    """Role of a bundle in projection; the value doubles as the dc.format qualifier."""

    ORIGINAL = "original"
    THUMBNAIL = "thumbnail"


# Bundle name -> role. Exact, case-sensitive match; anything else is ignored.
BUNDLE_ROLES: dict[str, BundleRole] = {
    "ORIGINAL": BundleRole.ORIGINAL,
    "THUMBNAIL": BundleRole.THUMBNAIL,
}


def resolve_role(bundle_name: str | None) -> BundleRole | None:
    if bundle_name is None:
        return None
    return BUNDLE_ROLES.get(bundle_name)
