from __future__ import annotations
from typing import Callable, List, Sequence
from zammad_node.domain.models import (
    RESOURCES,
    Field,
    Group,
    LoadOption,
    Organization,
    Resource,
    User,
)


FieldFilter = Callable[[Sequence[Field]], List[Field]]

# created_by_id of attributes shipped by the Zammad initializer
SYSTEM_USER_ID = 1
CUSTOMER_ROLE_ID = 3
SYSTEM_EMAIL_DOMAIN = "@zammad.org"
FOUNDATION_ORG_NAME = "Zammad Foundation"


def compose(*filters: FieldFilter) -> FieldFilter:
    """Chain field filters left to right."""

    def composed(fields: Sequence[Field]) -> List[Field]:
        result = list(fields)
        for f in filters:
            result = f(result)
        return result

    return composed

def prettify_display_name(field_name: str) -> str:
    return field_name.replace("name", " Name", 1)

def field_to_load_option(field: Field) -> LoadOption:
    return LoadOption(name=prettify_display_name(field.display), value=field.name)

def filter_by_resource(resource: Resource) -> FieldFilter:
    if resource not in RESOURCES:
        raise ValueError(f"Unknown Zammad resource: {resource!r}")

    def by_resource(fields: Sequence[Field]) -> List[Field]:
        return [f for f in fields if f.object == resource]

    return by_resource

def get_custom_fields(fields: Sequence[Field]) -> List[Field]:
    return [f for f in fields if f.created_by_id != SYSTEM_USER_ID]

get_group_fields = filter_by_resource("Group")
get_organization_fields = filter_by_resource("Organization")
get_user_fields = filter_by_resource("User")
get_ticket_fields = filter_by_resource("Ticket")

get_group_custom_fields = compose(get_group_fields, get_custom_fields)
get_organization_custom_fields = compose(get_organization_fields, get_custom_fields)
get_user_custom_fields = compose(get_user_fields, get_custom_fields)
get_ticket_custom_fields = compose(get_ticket_fields, get_custom_fields)

def is_customer(user: User) -> bool:
    return CUSTOMER_ROLE_ID in user.role_ids and not user.email.endswith(SYSTEM_EMAIL_DOMAIN)

def is_relevant_org(org: Organization) -> bool:
    return org.name != FOUNDATION_ORG_NAME and org.active

# no name check here, Zammad ships no built-in group to hide
def is_relevant_group(group: Group) -> bool:
    return group.active
