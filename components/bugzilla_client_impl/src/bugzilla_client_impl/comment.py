"""Bug comment value."""

from __future__ import annotations

from bugzilla_client_interface.entity import Entity

__all__ = ["Comment"]


class Comment(Entity):
    """A comment on a bug, either read from the server or authored locally."""

    def __init__(self, text: str | None = None, *, is_private: bool = False) -> None:
        super().__init__()
        if text is not None:
            self.set("text", text)
            self.set("is_private", is_private)

    @property
    def id(self) -> int | None:
        return self._get_int("id")

    @property
    def text(self) -> str | None:
        return self._get_str("text")

    @text.setter
    def text(self, text: str) -> None:
        self.set("text", text)

    @property
    def creator(self) -> str | None:
        return self._get_str("creator")

    @property
    def is_private(self) -> bool | None:
        return self._get_bool("is_private")

    @is_private.setter
    def is_private(self, is_private: bool) -> None:
        self.set("is_private", is_private)
