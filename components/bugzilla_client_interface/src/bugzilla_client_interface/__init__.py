"""Contracts for the Bugzilla client: entities, remote methods and transports."""

from bugzilla_client_interface.entity import Entity, check_required_fields
from bugzilla_client_interface.errors import (
    BugzillaError,
    BugzillaRPCError,
    BuilderSessionError,
    EntityInstantiationError,
    FieldTypeError,
    MissingFieldError,
    TransportError,
    UnexpectedUpdateCountError,
)
from bugzilla_client_interface.method import BugzillaMethod, MethodState
from bugzilla_client_interface.transport import Transport

__all__ = [
    "BugzillaError",
    "BugzillaMethod",
    "BugzillaRPCError",
    "BuilderSessionError",
    "Entity",
    "EntityInstantiationError",
    "FieldTypeError",
    "MethodState",
    "MissingFieldError",
    "Transport",
    "TransportError",
    "UnexpectedUpdateCountError",
    "check_required_fields",
]
