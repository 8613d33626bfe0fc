"""Unit tests for the remote method descriptors: parameters out, entities in."""

import pytest

from bugzilla_client_impl.bug import Bug, BuildTrackingBug
from bugzilla_client_impl.comment import Comment
from bugzilla_client_impl.field import BugField
from bugzilla_client_impl.product import Product
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
from bugzilla_client_interface.errors import FieldTypeError, UnexpectedUpdateCountError
from bugzilla_client_interface.method import MethodState


def _fetched_bug(**fields):
    bug = Bug()
    bug.internal_state = {"id": 12, **fields}
    return bug


#-------------------------- GetBug --------------------------

@pytest.mark.parametrize("key", [12, "blue-button"])
def test_get_bug_parameters(key):
    method = GetBug(key)

    assert method.method_name == "Bug.get"
    assert method.parameter_map == {"ids": key}
    assert method.state == MethodState.UNSENT


def test_get_bug_decodes_bug():
    method = GetBug(12)
    method.set_result_map({"bugs": [{"id": 12, "summary": "Crash", "version": "1.0"}]})

    bug = method.bug

    assert isinstance(bug, Bug)
    assert bug.id == 12
    assert bug.version == "1.0"
    assert method.state == MethodState.DECODED


@pytest.mark.parametrize("response", [{}, {"bugs": []}])
def test_get_bug_without_bugs_is_none(response):
    method = GetBug(12)
    method.set_result_map(response)

    assert method.bug is None


def test_get_bug_promotes_internals_version():
    # Setup: an old server reports the version only inside "internals"
    method = GetBug(12)
    method.set_result_map({"bugs": [{"id": 12, "internals": {"version": 7.0}}]})

    # Assert: the numeric version is promoted as a string
    assert method.bug.version == "7.0"
    assert method.bug.get("version") == "7.0"


def test_get_bug_keeps_outer_version():
    method = GetBug(12)
    method.set_result_map({"bugs": [{"id": 12, "version": "2.0", "internals": {"version": 7.0}}]})

    assert method.bug.version == "2.0"


def test_get_bug_without_any_version_is_left_alone():
    method = GetBug(12)
    method.set_result_map({"bugs": [{"id": 12}]})

    assert method.bug.version is None


def test_get_bug_does_not_mutate_response():
    response = {"bugs": [{"id": 12, "internals": {"version": 7.0}}]}
    method = GetBug(12)
    method.set_result_map(response)

    method.bug

    assert "version" not in response["bugs"][0]


def test_get_bug_last_one_wins():
    method = GetBug(12)
    method.set_result_map({"bugs": [{"id": 1, "version": "a"}, {"id": 2, "version": "b"}]})

    assert method.bug.id == 2


def test_get_bug_with_variant():
    method = GetBug(42, BuildTrackingBug)
    method.set_result_map({"bugs": [{"bug_id": 42, "version": "1"}]})

    assert isinstance(method.bug, BuildTrackingBug)
    assert method.bug.id == 42


#-------------------------- BugSearch --------------------------

def test_bug_search_accumulates_constraints():
    # Act: add constraints one at a time
    search = BugSearch()
    search.add_query_param(SearchLimiter.PRODUCT, "Widgets")
    search.add_query_param("creation_time", "2024-01-01")
    search.add_query_param(SearchLimiter.STATUS, "NEW")

    # Assert
    assert search.method_name == "Bug.search"
    assert search.parameter_map == {"product": "Widgets", "creation_time": "2024-01-01", "status": "NEW"}


def test_bug_search_keyword_constraints():
    search = BugSearch(assignee="dev@example.org", operating_system="Linux", alias="x")

    assert search.parameter_map == {"assigned_to": "dev@example.org", "op_sys": "Linux", "alias": "x"}


def test_bug_search_same_field_keeps_last_value():
    search = BugSearch(status="NEW").add_query_param(SearchLimiter.STATUS, "ASSIGNED")

    assert search.parameter_map == {"status": "ASSIGNED"}


def test_bug_search_results():
    search = BugSearch(product="Widgets")
    search.set_result_map({"bugs": [{"id": 1}, {"id": 2, "component": ["UI", "API"]}]})

    results = search.search_results

    assert [bug.id for bug in results] == [1, 2]
    assert results[1].component == "UI\nAPI"


def test_bug_search_does_not_apply_version_fallback():
    search = BugSearch()
    search.set_result_map({"bugs": [{"id": 1, "internals": {"version": 7.0}}]})

    assert search.search_results[0].version is None


@pytest.mark.parametrize("response", [{}, {"bugs": []}, {"bugs": None}])
def test_bug_search_without_bugs_is_empty_list(response):
    search = BugSearch()
    search.set_result_map(response)

    assert search.search_results == []


def test_bug_search_with_variant():
    search = BugSearch(BuildTrackingBug, product="Widgets")
    search.set_result_map({"bugs": [{"bug_id": 42}]})

    assert search.search_results[0].id == 42


#-------------------------- UpdateBug --------------------------

def test_update_bug_sends_only_set_fields():
    # Setup: a fetched bug where some fields are None
    bug = _fetched_bug(
        assigned_to="dev@example.org",
        component=["UI", "API"],
        op_sys=None,
        priority="2",
        product="Widgets",
        summary="Crash",
        version="1.0",
    )

    # Act
    params = UpdateBug(bug).parameter_map

    # Assert
    assert params == {
        "ids": 12,
        "assigned_to": "dev@example.org",
        "component": "UI\nAPI",
        "priority": "2",
        "product": "Widgets",
        "summary": "Crash",
        "version": "1.0",
    }


def test_update_bug_method_name():
    assert UpdateBug(_fetched_bug()).method_name == "Bug.update"


def test_update_bug_includes_resolution_when_closing():
    bug = _fetched_bug(status="CLOSED", resolution="FIXED")

    params = UpdateBug(bug).parameter_map

    assert params["status"] == "CLOSED"
    assert params["resolution"] == "FIXED"


def test_update_bug_closed_check_ignores_case():
    bug = _fetched_bug(status="Closed", resolution="WONTFIX")

    assert UpdateBug(bug).parameter_map["resolution"] == "WONTFIX"


def test_update_bug_omits_resolution_when_not_closing():
    bug = _fetched_bug(status="NEW", resolution="FIXED")

    params = UpdateBug(bug).parameter_map

    assert params["status"] == "NEW"
    assert "resolution" not in params


def test_update_bug_with_comment():
    bug = _fetched_bug(status="NEW")

    params = UpdateBug(bug, "Triaged", is_comment_private=True).parameter_map

    assert params["comment"] == {"body": "Triaged", "is_private": True}


def test_update_bug_comment_can_be_changed():
    method = UpdateBug(_fetched_bug(), "first")
    method.comment = "second"

    assert method.parameter_map["comment"] == {"body": "second", "is_private": False}


def test_update_bug_without_comment():
    assert "comment" not in UpdateBug(_fetched_bug()).parameter_map


def test_update_bug_reflects_later_changes_to_bug():
    bug = _fetched_bug(status="NEW")
    method = UpdateBug(bug)

    bug.status = "ASSIGNED"

    assert method.parameter_map["status"] == "ASSIGNED"


def test_update_bug_requires_id():
    unsaved = Bug({"product": "P", "component": "C", "summary": "S", "version": "V"})

    with pytest.raises(ValueError):
        UpdateBug(unsaved)


def test_update_bug_accepts_single_modified_bug():
    method = UpdateBug(_fetched_bug())

    method.set_result_map({"bugs": [{"id": 12, "changes": {}}]})

    assert method.state == MethodState.DECODED


@pytest.mark.parametrize("response", [{}, {"bugs": []}, {"bugs": [{"id": 1}, {"id": 2}]}])
def test_update_bug_rejects_other_counts(response):
    method = UpdateBug(_fetched_bug())

    with pytest.raises(UnexpectedUpdateCountError):
        method.set_result_map(response)


#-------------------------- CommentBug --------------------------

@pytest.mark.parametrize("bug, comment", [
    (_fetched_bug(), "hello"),
    (12, "hello"),
    (_fetched_bug(), Comment("hello")),
    (12, Comment("hello")),
])
def test_comment_bug_parameters(bug, comment):
    method = CommentBug(bug, comment)

    assert method.method_name == "Bug.add_comment"
    assert method.parameter_map == {"id": 12, "comment": "hello"}


def test_comment_bug_returns_comment_id():
    method = CommentBug(12, "hello")
    method.set_result_map({"id": 99})

    assert method.comment_id == 99


def test_comment_bug_without_id_returns_sentinel():
    method = CommentBug(12, "hello")
    method.set_result_map({})

    assert method.comment_id == -1


def test_comment_bug_rejects_non_integer_id():
    method = CommentBug(12, "hello")
    method.set_result_map({"id": "99"})

    with pytest.raises(FieldTypeError):
        method.comment_id


def test_comment_bug_requires_saved_bug():
    # Setup: a locally built bug has no id yet
    unsaved = Bug({"product": "P", "component": "C", "summary": "S", "version": "V"})

    with pytest.raises(ValueError):
        CommentBug(unsaved, "hi")


def test_comment_bug_sends_only_comment_text():
    method = CommentBug(12, Comment("secret", is_private=True))

    assert method.parameter_map == {"id": 12, "comment": "secret"}


#-------------------------- GetProduct --------------------------

def test_get_product_by_id():
    method = GetProduct(product_id=3)

    assert method.method_name == "Product.get"
    assert method.parameter_map == {"ids": 3}


def test_get_product_by_name():
    assert GetProduct(name="Widgets").parameter_map == {"names": "Widgets"}


@pytest.mark.parametrize("kwargs", [{}, {"product_id": 3, "name": "Widgets"}])
def test_get_product_needs_exactly_one_key(kwargs):
    with pytest.raises(ValueError):
        GetProduct(**kwargs)


def test_get_product_decodes_last_product():
    method = GetProduct(name="Widgets")
    method.set_result_map({"products": [{"id": 2, "name": "Old"}, {"id": 3, "name": "Widgets"}]})

    product = method.product

    assert isinstance(product, Product)
    assert product.id == 3


@pytest.mark.parametrize("response", [{}, {"products": []}])
def test_get_product_without_products_is_none(response):
    method = GetProduct(product_id=3)
    method.set_result_map(response)

    assert method.product is None


#-------------------------- BugFields / GetBugField --------------------------

FIELDS_RESPONSE = {
    "fields": [
        {"id": 1, "name": "bug_status", "is_custom": False},
        {"id": 50, "name": "cf_build_id", "is_custom": True},
    ],
}


def test_bug_fields_parameters():
    assert BugFields(field_id=1).parameter_map == {"ids": 1}
    assert BugFields(name="bug_status").parameter_map == {"names": "bug_status"}
    assert BugFields(name="bug_status").method_name == "Bug.fields"
    assert GetBugField(field_id=1).method_name == "Bug.fields"


def test_bug_fields_decodes_all():
    method = BugFields(name="bug_status")
    method.set_result_map(FIELDS_RESPONSE)

    fields = method.bug_fields

    assert all(isinstance(field, BugField) for field in fields)
    assert [field.name for field in fields] == ["bug_status", "cf_build_id"]


def test_get_bug_field_decodes_last():
    method = GetBugField(name="cf_build_id")
    method.set_result_map(FIELDS_RESPONSE)

    assert method.bug_field.id == 50
    assert method.bug_field.is_custom is True


@pytest.mark.parametrize("response", [{}, {"fields": []}])
def test_bug_fields_without_fields(response):
    many = BugFields(field_id=1)
    one = GetBugField(field_id=1)
    many.set_result_map(response)
    one.set_result_map(response)

    assert many.bug_fields == []
    assert one.bug_field is None


def test_bug_fields_needs_exactly_one_key():
    with pytest.raises(ValueError):
        GetBugField()
