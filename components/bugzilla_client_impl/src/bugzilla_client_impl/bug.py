"""Bugzilla bug implementation."""

from __future__ import annotations

from typing import Any, ClassVar

from bugzilla_client_interface.entity import Entity

__all__ = ["BugBase", "Bug", "BuildTrackingBug", "DEFAULT_PRIORITY"]

DEFAULT_PRIORITY = 3

_VALID_PRIORITIES = frozenset(range(1, 6))


# ------------------------------------------------------------------
# Bug implementation
# ------------------------------------------------------------------
class BugBase(Entity):
    """Fields common to every bug schema.

    Properties read from the backing record on every access; setters write
    straight through to it without re-validating.
    """

    @property
    def id(self) -> int | None:
        """Return the bug id, or None if the bug has not been saved yet."""
        return self._get_int("id")

    @property
    def alias(self) -> str | None:
        """Return the alias. Aliases are unique and at most 20 characters by convention."""
        return self._get_str("alias")

    @alias.setter
    def alias(self, alias: str) -> None:
        self.set("alias", alias)

    @property
    def summary(self) -> str | None:
        return self._get_str("summary")

    @summary.setter
    def summary(self, summary: str) -> None:
        self.set("summary", summary)

    @property
    def assigned_to(self) -> str | None:
        return self._get_str("assigned_to")

    @assigned_to.setter
    def assigned_to(self, assignee: str) -> None:
        self.set("assigned_to", assignee)

    @property
    def is_open(self) -> bool | None:
        """Return whether the bug is open, or None if the server did not say."""
        return self._get_bool("is_open")

    @is_open.setter
    def is_open(self, is_open: bool | None) -> None:
        self.set("is_open", is_open)

    @property
    def product(self) -> str | None:
        return self._get_str("product")

    @product.setter
    def product(self, product: str) -> None:
        self.set("product", product)

    @property
    def component(self) -> str | None:
        """Return the component.

        Some responses list several components for one bug. Those are
        flattened into a single newline separated string.
        """
        component = self.get("component")
        if isinstance(component, (list, tuple)):
            return "\n".join(str(element) for element in component)
        return self._get_str("component")

    @component.setter
    def component(self, component: str) -> None:
        self.set("component", component)

    @property
    def version(self) -> str | None:
        return self._get_str("version")

    @version.setter
    def version(self, version: str) -> None:
        self.set("version", version)

    @property
    def status(self) -> str | None:
        return self._get_str("status")

    @status.setter
    def status(self, status: str) -> None:
        self.set("status", status)

    @property
    def resolution(self) -> str | None:
        return self._get_str("resolution")

    @resolution.setter
    def resolution(self, resolution: str) -> None:
        self.set("resolution", resolution)

    @property
    def operating_system(self) -> str | None:
        return self._get_str("op_sys")

    @operating_system.setter
    def operating_system(self, os_name: str) -> None:
        self.set("op_sys", os_name)

    @property
    def platform(self) -> str | None:
        return self._get_str("platform")

    @platform.setter
    def platform(self, platform: str) -> None:
        self.set("platform", platform)

    @property
    def priority(self) -> int:
        """Return the priority level from 1 to 5.

        Bugzilla sends priority as a string. Anything missing, unparseable or
        out of range reads as the default level 3.
        """
        return _parse_priority(self.get("priority"))

    @priority.setter
    def priority(self, priority: int) -> None:
        self.set("priority", str(priority))

    @property
    def description(self) -> str | None:
        return self._get_str("description")

    @description.setter
    def description(self, description: str) -> None:
        self.set("description", description)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.get('id')!r} summary={self.get('summary')!r}>"


class Bug(BugBase):
    """A bug on a stock Bugzilla installation."""

    required_keys: ClassVar[tuple[str, ...]] = ("product", "component", "summary", "version")


class BuildTrackingBug(BugBase):
    """A bug on an installation whose schema tracks the build a bug was found in.

    Only the product is required locally, and search results carry the
    identifier under ``bug_id`` instead of ``id``.
    """

    required_keys: ClassVar[tuple[str, ...]] = ("product",)

    @property
    def id(self) -> int | None:
        # get-by-id responses use "id", search responses use "bug_id"
        if "id" in self.internal_state:
            return self._get_int("id")
        return self._get_int("bug_id")

    @property
    def build_id(self) -> str | None:
        return self._get_str("cf_build_id")

    @build_id.setter
    def build_id(self, build_id: str) -> None:
        self.set("cf_build_id", build_id)


def _parse_priority(value: Any) -> int:
    if isinstance(value, bool):
        return DEFAULT_PRIORITY
    try:
        level = int(value)
    except (TypeError, ValueError):
        return DEFAULT_PRIORITY
    return level if level in _VALID_PRIORITIES else DEFAULT_PRIORITY
