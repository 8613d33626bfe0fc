"""Bugzilla product implementation and the records a product owns."""

from __future__ import annotations

from bugzilla_client_interface.entity import Entity

__all__ = [
    "Product",
    "ProductComponent",
    "ProductMilestone",
    "ProductRelease",
    "ProductVersion",
]


class _NamedRecord(Entity):
    """Shared accessors for the small id/name/is_active records."""

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
    def is_active(self) -> bool | None:
        return self._get_bool("is_active")

    @is_active.setter
    def is_active(self, is_active: bool | None) -> None:
        self.set("is_active", is_active)


class _SortedRecord(_NamedRecord):
    @property
    def sort_key(self) -> int | None:
        return self._get_int("sort_key")

    @sort_key.setter
    def sort_key(self, sort_key: int | None) -> None:
        self.set("sort_key", sort_key)


class ProductVersion(_SortedRecord):
    """A version of a product that bugs can be filed against."""


class ProductMilestone(_SortedRecord):
    """A target milestone of a product."""


class ProductRelease(_SortedRecord):
    """A release of a product."""


class ProductComponent(_SortedRecord):
    """A component of a product."""

    @property
    def description(self) -> str | None:
        return self._get_str("description")

    @description.setter
    def description(self, description: str) -> None:
        self.set("description", description)


class Product(_NamedRecord):
    """A Bugzilla product.

    The child collections are decoded from the nested records on every
    access; they are owned by value and hold no reference back to the
    product. Each returns None when the server did not send the collection.
    """

    @property
    def description(self) -> str | None:
        return self._get_str("description")

    @description.setter
    def description(self, description: str) -> None:
        self.set("description", description)

    @property
    def classification(self) -> str | None:
        return self._get_str("classification")

    @property
    def default_milestone(self) -> str | None:
        return self._get_str("default_milestone")

    @property
    def versions(self) -> list[ProductVersion] | None:
        return self._children("versions", ProductVersion)

    @property
    def components(self) -> list[ProductComponent] | None:
        return self._children("components", ProductComponent)

    @property
    def releases(self) -> list[ProductRelease] | None:
        return self._children("releases", ProductRelease)

    @property
    def milestones(self) -> list[ProductMilestone] | None:
        return self._children("milestones", ProductMilestone)

    def _children(self, field: str, record_type: type[Entity]) -> list | None:
        records = self._get_records(field)
        if records is None:
            return None
        built = []
        for record in records:
            child = record_type()
            child.internal_state = record
            built.append(child)
        return built

    def __repr__(self) -> str:
        return f"<Product id={self.get('id')!r} name={self.get('name')!r}>"
