"""Bug field metadata returned by Bug.fields."""

from __future__ import annotations

from bugzilla_client_interface.entity import Entity

__all__ = ["BugField", "BugFieldValue"]


class BugFieldValue(Entity):
    """One legal value of a select-type bug field."""

    @property
    def id(self) -> int | None:
        return self._get_int("id")

    @property
    def name(self) -> str | None:
        return self._get_str("name")

    @name.setter
    def name(self, name: str) -> None:
        self.set("name", name)

    @property
    def description(self) -> str | None:
        return self._get_str("description")

    @description.setter
    def description(self, description: str) -> None:
        self.set("description", description)

    @property
    def is_active(self) -> bool | None:
        return self._get_bool("is_active")

    @is_active.setter
    def is_active(self, is_active: bool | None) -> None:
        self.set("is_active", is_active)

    @property
    def sort_key(self) -> int | None:
        return self._get_int("sort_key")

    @sort_key.setter
    def sort_key(self, sort_key: int | None) -> None:
        self.set("sort_key", sort_key)


class BugField(Entity):
    """Definition of a standard or custom bug field."""

    @property
    def id(self) -> int | None:
        return self._get_int("id")

    @property
    def name(self) -> str | None:
        return self._get_str("name")

    @name.setter
    def name(self, name: str) -> None:
        self.set("name", name)

    @property
    def display_name(self) -> str | None:
        return self._get_str("display_name")

    @display_name.setter
    def display_name(self, display_name: str) -> None:
        self.set("display_name", display_name)

    @property
    def is_mandatory(self) -> bool | None:
        return self._get_bool("is_mandatory")

    @is_mandatory.setter
    def is_mandatory(self, is_mandatory: bool | None) -> None:
        self.set("is_mandatory", is_mandatory)

    @property
    def is_custom(self) -> bool | None:
        return self._get_bool("is_custom")

    @is_custom.setter
    def is_custom(self, is_custom: bool | None) -> None:
        self.set("is_custom", is_custom)

    @property
    def type(self) -> int | None:
        """Return Bugzilla's numeric field type code."""
        return self._get_int("type")

    @type.setter
    def type(self, type_code: int | None) -> None:
        self.set("type", type_code)

    @property
    def values(self) -> list[BugFieldValue]:
        """Return the legal values for the field, empty when it has none."""
        records = self._get_records("values") or []
        built = []
        for record in records:
            value = BugFieldValue()
            value.internal_state = record
            built.append(value)
        return built

    def __repr__(self) -> str:
        return f"<BugField id={self.get('id')!r} name={self.get('name')!r}>"
