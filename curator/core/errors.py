from __future__ import annotations


class ContentStoreFault(Exception):
    """Raised by a content store when a node cannot be read or modified."""


class AuthorizationFault(ContentStoreFault):
    """Caller lacks permission to read/modify a node."""


class DataAccessFault(ContentStoreFault):
    """Underlying store unreachable or inconsistent."""
