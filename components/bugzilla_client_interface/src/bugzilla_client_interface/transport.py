"""Transport contract - the boundary that actually performs a remote call."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

__all__ = ["Transport"]


class Transport(ABC):
    """Executes a single remote procedure call."""

    @abstractmethod
    def execute(self, method_name: str, parameters: Mapping[str, Any]) -> dict[str, Any]:
        """Call method_name with parameters and return the response record.

        Raises:
            TransportError: On network or protocol failure. Implementations
                must not retry; the error propagates to the caller.

        """
        raise NotImplementedError
