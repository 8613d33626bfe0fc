"""Entity factories.

A factory builds entities of one variant in two ways:

* ``create(record)`` wraps a record received from the server. The record is
  copied and installed as-is; required keys are not checked because
  responses legitimately omit fields the query did not ask for.
* ``begin()`` opens a builder session. Its setters accumulate fields and
  ``finish()`` checks the variant's required keys before handing back the
  new entity. A factory allows one open session at a time.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from bugzilla_client_interface.entity import Entity, check_required_fields
from bugzilla_client_interface.errors import BuilderSessionError, EntityInstantiationError

from bugzilla_client_impl.bug import Bug, BugBase
from bugzilla_client_impl.product import Product, ProductMilestone, ProductRelease

__all__ = [
    "BugBuilder",
    "BugFactory",
    "EntityBuilder",
    "EntityFactory",
    "ProductBuilder",
    "ProductFactory",
]

EntityT = TypeVar("EntityT", bound=Entity)
BugT = TypeVar("BugT", bound=BugBase)


class EntityBuilder(Generic[EntityT]):
    """One builder session. Closed until its factory opens it, closed again by finish()."""

    def __init__(self, factory: EntityFactory[EntityT]) -> None:
        self._factory = factory
        self._properties: dict[str, Any] | None = None

    @property
    def is_open(self) -> bool:
        return self._properties is not None

    def _open(self) -> None:
        self._properties = {}

    def _put(self, field: str, value: Any):
        if self._properties is None:
            raise BuilderSessionError("Must call begin() first!")
        self._properties[field] = value
        return self

    def finish(self) -> EntityT:
        """Validate the accumulated fields and return the new entity.

        Raises:
            BuilderSessionError: If the session is not open.
            MissingFieldError: If a required key was never set. The session
                stays open so the missing field can still be supplied.

        """
        if self._properties is None:
            raise BuilderSessionError("Must call begin() first!")
        entity = self._factory._instantiate()
        check_required_fields(self._properties, entity.required_keys)
        properties, self._properties = self._properties, None
        entity.internal_state = properties
        return entity


class EntityFactory(Generic[EntityT]):
    """Builds entities through a constructor supplied per variant."""

    builder_type: type[EntityBuilder] = EntityBuilder

    def __init__(self, constructor: Callable[[], EntityT]) -> None:
        self._constructor = constructor
        self._session: EntityBuilder[EntityT] | None = None

    def _instantiate(self) -> EntityT:
        try:
            entity = self._constructor()
        except TypeError as exc:
            raise EntityInstantiationError(f"Cannot instantiate {self._constructor!r}: {exc}") from exc
        if not isinstance(entity, Entity):
            raise EntityInstantiationError(f"{self._constructor!r} did not produce an Entity")
        return entity

    def create(self, properties: Mapping[str, Any]) -> EntityT:
        """Wrap a copy of a received record without checking required keys."""
        entity = self._instantiate()
        entity.internal_state = dict(properties)
        return entity

    def begin(self):
        """Open a builder session.

        Raises:
            BuilderSessionError: If this factory already has an open session.

        """
        if self._session is not None and self._session.is_open:
            raise BuilderSessionError(f"Already creating a new {self._name()}!")
        self._session = self.builder_type(self)
        self._session._open()
        return self._session

    def _name(self) -> str:
        return getattr(self._constructor, "__name__", "entity")


# ---------------------------------------------------------------------------
# Bugs
# ---------------------------------------------------------------------------

class BugBuilder(EntityBuilder[BugT]):
    def set_alias(self, alias: str) -> BugBuilder[BugT]:
        return self._put("alias", alias)

    def set_operating_system(self, os_name: str) -> BugBuilder[BugT]:
        return self._put("op_sys", os_name)

    def set_platform(self, platform: str) -> BugBuilder[BugT]:
        return self._put("platform", platform)

    def set_priority(self, priority: int) -> BugBuilder[BugT]:
        return self._put("priority", str(priority))

    def set_product(self, product: str) -> BugBuilder[BugT]:
        return self._put("product", product)

    def set_component(self, component: str) -> BugBuilder[BugT]:
        return self._put("component", component)

    def set_summary(self, summary: str) -> BugBuilder[BugT]:
        return self._put("summary", summary)

    def set_version(self, version: str) -> BugBuilder[BugT]:
        return self._put("version", version)

    def set_description(self, description: str) -> BugBuilder[BugT]:
        return self._put("description", description)


class BugFactory(EntityFactory[BugT]):
    """Factory for one bug variant, ``Bug`` unless told otherwise.

    Example:
        bug = BugFactory().begin().set_product("Widgets").set_component("UI") \\
            .set_summary("Button is blue").set_version("1.0").finish()
    """

    builder_type = BugBuilder

    def __init__(self, bug_class: Callable[[], BugT] = Bug) -> None:
        super().__init__(bug_class)

    def begin(self) -> BugBuilder[BugT]:
        return super().begin()


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

class ProductBuilder(EntityBuilder[Product]):
    def set_name(self, name: str) -> ProductBuilder:
        return self._put("name", name)

    def set_description(self, description: str) -> ProductBuilder:
        return self._put("description", description)

    def set_classification(self, classification: str) -> ProductBuilder:
        return self._put("classification", classification)

    def set_default_milestone(self, milestone: ProductMilestone) -> ProductBuilder:
        return self._put("default_milestone", milestone.name)

    def set_default_release(self, release: ProductRelease) -> ProductBuilder:
        return self._put("default_release", release.name)


class ProductFactory(EntityFactory[Product]):
    builder_type = ProductBuilder

    def __init__(self) -> None:
        super().__init__(Product)

    def begin(self) -> ProductBuilder:
        return super().begin()
