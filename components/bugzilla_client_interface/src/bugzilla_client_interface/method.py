"""Remote operation contract - a method name, its parameters and its response."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from typing import Any

__all__ = ["BugzillaMethod", "MethodState"]


class MethodState(str, Enum):
    UNSENT = "unsent"
    SENT = "sent"
    DECODED = "decoded"


class BugzillaMethod(ABC):
    """Abstract base class for one remote call against the Bugzilla API.

    A method instance is used for exactly one call. It starts UNSENT holding
    only its outbound parameters, is marked SENT by whoever executes it, and
    becomes DECODED once the response has been handed to set_result_map().
    """

    def __init__(self) -> None:
        self._result: dict[str, Any] = {}
        self._state = MethodState.UNSENT

    @property
    @abstractmethod
    def method_name(self) -> str:
        """Return the remote method identifier, e.g. 'Bug.get'."""
        raise NotImplementedError

    @property
    @abstractmethod
    def parameter_map(self) -> Mapping[str, Any]:
        """Return the parameters to send with the call."""
        raise NotImplementedError

    @property
    def state(self) -> MethodState:
        return self._state

    def mark_sent(self) -> None:
        self._state = MethodState.SENT

    def set_result_map(self, result: Mapping[str, Any] | None) -> None:
        """Store the response record. Calling again replaces the previous one."""
        self._result = dict(result) if result else {}
        self._state = MethodState.DECODED

    def _result_records(self, key: str) -> list[dict[str, Any]]:
        """Return the records listed under key, or [] when the key is absent or empty."""
        records = self._result.get(key)
        if not records:
            return []
        return [dict(record) for record in records]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.method_name} state={self._state.value}>"
