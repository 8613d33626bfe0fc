"""Exception hierarchy shared by every Bugzilla client component."""

from __future__ import annotations

from typing import Any


class BugzillaError(Exception):
    """Base exception for all errors raised by the Bugzilla client."""


class MissingFieldError(BugzillaError):
    """Raised when a locally constructed entity lacks a required key."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing key/value pair: {field}")
        self.field = field


class BuilderSessionError(BugzillaError):
    """Raised when a builder is used outside of an open session."""


class FieldTypeError(BugzillaError, TypeError):
    """Raised when a stored value cannot be read as the accessor's type."""

    def __init__(self, field: str, expected: str, value: Any) -> None:
        super().__init__(
            f"Field '{field}' expected {expected}, got {type(value).__name__}: {value!r}"
        )
        self.field = field
        self.expected = expected
        self.value = value


class EntityInstantiationError(BugzillaError):
    """Raised when an entity variant cannot be constructed by a factory."""


class TransportError(BugzillaError):
    """Raised when the remote call fails at the network or protocol level."""


class BugzillaRPCError(TransportError):
    """Raised when the server answers a call with an RPC fault."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(f"Bugzilla RPC error {code}: {message}" if code is not None else message)
        self.code = code


class UnexpectedUpdateCountError(BugzillaError):
    """Raised when Bug.update reports a number of modified bugs other than one."""
