"""Entity contract - key/value record with typed accessors.

Responses from the Bugzilla RPC API arrive as loosely typed dicts. Rather
than unpacking every field at the call site, each entity keeps the whole
record and its properties pick out (and check) what they need.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from bugzilla_client_interface.errors import FieldTypeError, MissingFieldError

__all__ = ["Entity", "check_required_fields"]


def check_required_fields(state: Mapping[str, Any], required_keys: Iterable[str]) -> None:
    """Raise MissingFieldError naming the first required key absent from state.

    Only key presence is checked; a blank or None value still counts.
    """
    for key in required_keys:
        if key not in state:
            raise MissingFieldError(key)


class Entity:
    """Typed wrapper over a mutable key/value record.

    Passing ``state`` to the constructor is the path for locally authored
    entities and is validated against ``required_keys``. Factories build
    response-derived entities with no state and install the record through
    ``internal_state``, which skips validation.
    """

    required_keys: ClassVar[tuple[str, ...]] = ()

    def __init__(self, state: Mapping[str, Any] | None = None) -> None:
        self._state: dict[str, Any] = {}
        if state is not None:
            check_required_fields(state, self.required_keys)
            self._state = dict(state)

    # ------------------------------------------------------------------
    # Raw record access
    # ------------------------------------------------------------------

    @property
    def internal_state(self) -> dict[str, Any]:
        return self._state

    @internal_state.setter
    def internal_state(self, state: dict[str, Any]) -> None:
        self._state = state

    def get(self, field: str, default: Any = None) -> Any:
        """Return the raw stored value for field, or default when absent."""
        return self._state.get(field, default)

    def set(self, field: str, value: Any) -> None:
        """Store value under field. No validation is performed."""
        self._state[field] = value

    def as_export_map(self) -> Mapping[str, Any]:
        """Return a read-only shallow snapshot of the record for outbound calls."""
        return MappingProxyType(dict(self._state))

    # ------------------------------------------------------------------
    # Checked accessors
    # ------------------------------------------------------------------

    def _get_int(self, field: str) -> int | None:
        value = self._state.get(field)
        if value is None:
            return None
        # bool is an int subclass but never a valid id/sort key
        if isinstance(value, bool) or not isinstance(value, int):
            raise FieldTypeError(field, "int", value)
        return value

    def _get_str(self, field: str) -> str | None:
        value = self._state.get(field)
        if value is None:
            return None
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        raise FieldTypeError(field, "str", value)

    def _get_bool(self, field: str) -> bool | None:
        value = self._state.get(field)
        if value is None:
            return None
        if not isinstance(value, bool):
            raise FieldTypeError(field, "bool", value)
        return value

    def _get_records(self, field: str) -> list[dict[str, Any]] | None:
        """Return a list of nested records, or None when the field is absent."""
        value = self._state.get(field)
        if value is None:
            return None
        if not isinstance(value, (list, tuple)):
            raise FieldTypeError(field, "list", value)
        for item in value:
            if not isinstance(item, Mapping):
                raise FieldTypeError(field, "list of records", value)
        return [dict(item) for item in value]

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._state == other._state

    # records are mutable, so entities compare by value and are unhashable
    __hash__ = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._state!r}>"
