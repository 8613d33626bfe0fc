"""Bugzilla client implementation: entities, factories, remote methods and a JSON-RPC client."""

from bugzilla_client_impl.bug import Bug, BugBase, BuildTrackingBug
from bugzilla_client_impl.bugzilla_impl import BugzillaClient, JsonRpcTransport, get_client
from bugzilla_client_impl.comment import Comment
from bugzilla_client_impl.factory import BugFactory, ProductFactory
from bugzilla_client_impl.field import BugField, BugFieldValue
from bugzilla_client_impl.product import (
    Product,
    ProductComponent,
    ProductMilestone,
    ProductRelease,
    ProductVersion,
)
from bugzilla_client_impl.rpc import (
    BugFields,
    BugSearch,
    CommentBug,
    GetBug,
    GetBugField,
    GetProduct,
    SearchLimiter,
    UpdateBug,
)

__all__ = [
    "Bug",
    "BugBase",
    "BugFactory",
    "BugField",
    "BugFieldValue",
    "BugFields",
    "BugSearch",
    "BugzillaClient",
    "BuildTrackingBug",
    "Comment",
    "CommentBug",
    "GetBug",
    "GetBugField",
    "GetProduct",
    "JsonRpcTransport",
    "Product",
    "ProductComponent",
    "ProductFactory",
    "ProductMilestone",
    "ProductRelease",
    "ProductVersion",
    "SearchLimiter",
    "UpdateBug",
    "get_client",
]
