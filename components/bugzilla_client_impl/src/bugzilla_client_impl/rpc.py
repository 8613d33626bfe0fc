"""Bugzilla remote methods.

Each class pairs a remote method name with its outbound parameters and
knows how to decode that method's response. Every decoder treats a missing
or empty result collection as "no results" instead of failing, because the
response shape varies across Bugzilla versions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any, Generic, TypeVar

from bugzilla_client_interface.errors import FieldTypeError, UnexpectedUpdateCountError
from bugzilla_client_interface.method import BugzillaMethod

from bugzilla_client_impl.bug import Bug, BugBase
from bugzilla_client_impl.comment import Comment
from bugzilla_client_impl.factory import BugFactory, ProductFactory
from bugzilla_client_impl.field import BugField
from bugzilla_client_impl.product import Product

__all__ = [
    "BugFields",
    "BugSearch",
    "CommentBug",
    "GetBug",
    "GetBugField",
    "GetProduct",
    "SearchLimiter",
    "UpdateBug",
]

logger = logging.getLogger(__name__)

BugT = TypeVar("BugT", bound=BugBase)

NO_COMMENT_ID = -1


def _ids_or_names(item_id: int | None, name: str | None) -> dict[str, Any]:
    if (item_id is None) == (name is None):
        raise ValueError("Exactly one of an id or a name must be given")
    if item_id is not None:
        return {"ids": item_id}
    return {"names": name}


# ---------------------------------------------------------------------------
# Bug.get
# ---------------------------------------------------------------------------

class GetBug(BugzillaMethod, Generic[BugT]):
    """Fetch one bug by numeric id or by alias."""

    def __init__(self, id_or_alias: int | str, bug_class: Callable[[], BugT] = Bug) -> None:
        super().__init__()
        self._factory = BugFactory(bug_class)
        self._params = {"ids": id_or_alias}

    @property
    def method_name(self) -> str:
        return "Bug.get"

    @property
    def parameter_map(self) -> Mapping[str, Any]:
        return self._params

    @property
    def bug(self) -> BugT | None:
        """Return the fetched bug, or None if the server returned none.

        If the server returned several, the last one wins.
        """
        result = None
        for record in self._result_records("bugs"):
            if "version" not in record:
                # older servers only report the version inside "internals"
                internals = record.get("internals") or {}
                version = internals.get("version")
                if version is not None:
                    record["version"] = str(version)
            result = self._factory.create(record)
        return result


# ---------------------------------------------------------------------------
# Bug.search
# ---------------------------------------------------------------------------

class SearchLimiter(str, Enum):
    """Field names Bug.search accepts as constraints."""

    OWNER = "assigned_to"
    REPORTER = "reporter"
    STATUS = "status"
    RESOLUTION = "resolution"
    PRIORITY = "priority"
    PRODUCT = "product"
    COMPONENT = "component"
    OPERATING_SYSTEM = "op_sys"
    PLATFORM = "platform"
    SUMMARY = "summary"
    VERSION = "version"
    ALIAS = "alias"


class BugSearch(BugzillaMethod, Generic[BugT]):
    """Search for bugs matching every given constraint (AND logic, no OR).

    Constraints can be passed as keywords on construction or added one at a
    time with add_query_param(). Setting the same field twice keeps the
    last value.
    """

    def __init__(
        self,
        bug_class: Callable[[], BugT] = Bug,
        *,
        assignee: str | None = None,
        reporter: str | None = None,
        status: str | None = None,
        resolution: str | None = None,
        priority: str | None = None,
        product: str | None = None,
        component: str | None = None,
        operating_system: str | None = None,
        platform: str | None = None,
        summary: str | None = None,
        version: str | None = None,
        alias: str | None = None,
    ) -> None:
        super().__init__()
        self._factory = BugFactory(bug_class)
        self._params: dict[str, Any] = {}
        named = {
            SearchLimiter.OWNER: assignee,
            SearchLimiter.REPORTER: reporter,
            SearchLimiter.STATUS: status,
            SearchLimiter.RESOLUTION: resolution,
            SearchLimiter.PRIORITY: priority,
            SearchLimiter.PRODUCT: product,
            SearchLimiter.COMPONENT: component,
            SearchLimiter.OPERATING_SYSTEM: operating_system,
            SearchLimiter.PLATFORM: platform,
            SearchLimiter.SUMMARY: summary,
            SearchLimiter.VERSION: version,
            SearchLimiter.ALIAS: alias,
        }
        for limiter, value in named.items():
            if value is not None:
                self.add_query_param(limiter, value)

    def add_query_param(self, field: SearchLimiter | str, value: Any) -> BugSearch[BugT]:
        key = field.value if isinstance(field, SearchLimiter) else field
        self._params[key] = value
        return self

    @property
    def method_name(self) -> str:
        return "Bug.search"

    @property
    def parameter_map(self) -> Mapping[str, Any]:
        return self._params

    @property
    def search_results(self) -> list[BugT]:
        return [self._factory.create(record) for record in self._result_records("bugs")]


# ---------------------------------------------------------------------------
# Bug.update
# ---------------------------------------------------------------------------

# fields copied from the bug when they hold a value, in wire names
_UPDATABLE_FIELDS = ("assigned_to", "op_sys", "platform", "priority", "product", "status", "summary")


class UpdateBug(BugzillaMethod):
    """Push the locally changed fields of a previously fetched bug to the server.

    The response only reports which bugs changed, so no entity is rebuilt
    from it.
    """

    def __init__(self, bug: BugBase, comment: str | None = None, is_comment_private: bool = False) -> None:
        super().__init__()
        if bug.id is None:
            raise ValueError("Cannot update a bug that has no id")
        self.bug = bug
        self.comment = comment
        self.is_comment_private = is_comment_private

    @property
    def method_name(self) -> str:
        return "Bug.update"

    @property
    def parameter_map(self) -> Mapping[str, Any]:
        state = self.bug.as_export_map()
        params: dict[str, Any] = {"ids": self.bug.id}

        for field in _UPDATABLE_FIELDS:
            if state.get(field) is not None:
                params[field] = state[field]
        if state.get("component") is not None:
            params["component"] = self.bug.component
        if state.get("version") is not None:
            params["version"] = self.bug.version

        # resolution is only meaningful when closing
        status = self.bug.status
        if status is not None and status.lower() == "closed" and state.get("resolution") is not None:
            params["resolution"] = state["resolution"]

        if self.comment is not None:
            params["comment"] = {"body": self.comment, "is_private": self.is_comment_private}
        return params

    def set_result_map(self, result: Mapping[str, Any] | None) -> None:
        """Check that exactly one bug was modified and discard the rest.

        Raises:
            UnexpectedUpdateCountError: If the server reports any other count.

        """
        super().set_result_map(result)
        modified = self._result.get("bugs") or []
        if len(modified) != 1:
            raise UnexpectedUpdateCountError(
                f"Expected Bug.update to modify exactly one bug, server reported {len(modified)}"
            )
        logger.debug("Bug %s updated", self.bug.id)


# ---------------------------------------------------------------------------
# Bug.add_comment
# ---------------------------------------------------------------------------

class CommentBug(BugzillaMethod):
    """Add a comment to a bug given as an entity or a bare id.

    Only the text of a Comment is sent; its is_private flag is not.
    """

    def __init__(self, bug: BugBase | int, comment: Comment | str) -> None:
        super().__init__()
        bug_id = bug.id if isinstance(bug, BugBase) else bug
        if bug_id is None:
            raise ValueError("Cannot comment on a bug that has no id")
        text = comment.text if isinstance(comment, Comment) else comment
        self._params = {"id": bug_id, "comment": text}

    @property
    def method_name(self) -> str:
        return "Bug.add_comment"

    @property
    def parameter_map(self) -> Mapping[str, Any]:
        return self._params

    @property
    def comment_id(self) -> int:
        """Return the new comment's id, or -1 if the server did not report one."""
        comment_id = self._result.get("id")
        if comment_id is None:
            return NO_COMMENT_ID
        if isinstance(comment_id, bool) or not isinstance(comment_id, int):
            raise FieldTypeError("id", "int", comment_id)
        return comment_id


# ---------------------------------------------------------------------------
# Product.get
# ---------------------------------------------------------------------------

class GetProduct(BugzillaMethod):
    """Fetch one product by id or by name."""

    def __init__(self, *, product_id: int | None = None, name: str | None = None) -> None:
        super().__init__()
        self._factory = ProductFactory()
        self._params = _ids_or_names(product_id, name)

    @property
    def method_name(self) -> str:
        return "Product.get"

    @property
    def parameter_map(self) -> Mapping[str, Any]:
        return self._params

    @property
    def product(self) -> Product | None:
        """Return the fetched product, or None. If several arrive, the last one wins."""
        result = None
        for record in self._result_records("products"):
            result = self._factory.create(record)
        return result


# ---------------------------------------------------------------------------
# Bug.fields
# ---------------------------------------------------------------------------

class BugFields(BugzillaMethod):
    """Fetch field definitions by id or by name."""

    def __init__(self, *, field_id: int | None = None, name: str | None = None) -> None:
        super().__init__()
        self._params = _ids_or_names(field_id, name)

    @property
    def method_name(self) -> str:
        return "Bug.fields"

    @property
    def parameter_map(self) -> Mapping[str, Any]:
        return self._params

    def _decode_fields(self) -> list[BugField]:
        fields = []
        for record in self._result_records("fields"):
            field = BugField()
            field.internal_state = record
            fields.append(field)
        return fields

    @property
    def bug_fields(self) -> list[BugField]:
        return self._decode_fields()


class GetBugField(BugFields):
    """Fetch a single field definition. If several arrive, the last one wins."""

    @property
    def bug_field(self) -> BugField | None:
        fields = self._decode_fields()
        return fields[-1] if fields else None
