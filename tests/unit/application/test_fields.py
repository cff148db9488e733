from zammad_node.application.fields import (
    compose,
    field_to_load_option,
    filter_by_resource,
    get_custom_fields,
    get_group_custom_fields,
    get_organization_custom_fields,
    get_ticket_custom_fields,
    get_ticket_fields,
    get_user_custom_fields,
    is_customer,
    is_relevant_group,
    is_relevant_org,
    prettify_display_name,
)
from zammad_node.domain.models import Field, Group, LoadOption, Organization, User
import pytest


FIELDS = [
    Field(name="title", display="Title", object="Ticket", created_by_id=1),
    Field(name="customer_ref", display="Customer Ref", object="Ticket", created_by_id=7),
    Field(name="firstname", display="firstname", object="User", created_by_id=1),
    Field(name="shoe_size", display="Shoe size", object="User", created_by_id=3),
    Field(name="vat_id", display="VAT", object="Organization", created_by_id=2),
    Field(name="note", display="Note", object="Group", created_by_id=1),
    Field(name="region", display="Region", object="Group", created_by_id=4),
]


def test_prettify_display_name_replaces_first_occurrence_only() -> None:
    assert prettify_display_name("username") == "user Name"
    assert prettify_display_name("namename") == " Namename"
    assert prettify_display_name("Name") == "Name"
    assert prettify_display_name("Title") == "Title"

def test_field_to_load_option() -> None:
    field = Field(name="username", display="username", object="User", created_by_id=1)

    assert field_to_load_option(field) == LoadOption(name="user Name", value="username")

def test_filter_by_resource() -> None:
    assert [f.name for f in get_ticket_fields(FIELDS)] == ["title", "customer_ref"]
    assert [f.name for f in filter_by_resource("User")(FIELDS)] == ["firstname", "shoe_size"]

def test_filter_by_resource_rejects_unknown_resource() -> None:
    with pytest.raises(ValueError):
        filter_by_resource("Article")                                                                                       # type: ignore[arg-type]

def test_get_custom_fields_excludes_system_fields() -> None:
    custom = get_custom_fields(FIELDS)

    assert all(f.created_by_id != 1 for f in custom)
    assert len(custom) == len([f for f in FIELDS if f.created_by_id != 1])

def test_per_resource_custom_fields() -> None:
    assert [f.name for f in get_ticket_custom_fields(FIELDS)] == ["customer_ref"]
    assert [f.name for f in get_user_custom_fields(FIELDS)] == ["shoe_size"]
    assert [f.name for f in get_organization_custom_fields(FIELDS)] == ["vat_id"]
    assert [f.name for f in get_group_custom_fields(FIELDS)] == ["region"]

def test_compose_applies_filters_in_order() -> None:
    only_first = compose(get_custom_fields, lambda fields: list(fields)[:1])

    assert only_first(FIELDS) == [FIELDS[1]]

def test_is_customer() -> None:
    assert is_customer(User(role_ids=frozenset({3}), email="a@other.com")) is True
    assert is_customer(User(role_ids=frozenset({3}), email="a@zammad.org")) is False
    assert is_customer(User(role_ids=frozenset({1, 2}), email="a@other.com")) is False

def test_is_relevant_org() -> None:
    assert is_relevant_org(Organization(name="ACME", active=True)) is True
    assert is_relevant_org(Organization(name="ACME", active=False)) is False
    assert is_relevant_org(Organization(name="Zammad Foundation", active=True)) is False

def test_is_relevant_group_only_checks_active() -> None:
    assert is_relevant_group(Group(name="Zammad Foundation", active=True)) is True
    assert is_relevant_group(Group(name="Users", active=False)) is False
