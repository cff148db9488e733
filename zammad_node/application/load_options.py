from __future__ import annotations
import logging
from typing import Any, Callable, List, Mapping, TypeVar
from zammad_node.application import fields as f
from zammad_node.domain.models import Field, Group, LoadOption, Organization, Resource, User
from zammad_node.infrastructure.zammad_client import ZammadClient
from zammad_node.shared.errors import NodeApiError


logger = logging.getLogger(__name__)

T = TypeVar("T")

_RESOURCE_FILTERS: Mapping[Resource, f.FieldFilter] = {
    "Group": f.get_group_fields,
    "Organization": f.get_organization_fields,
    "User": f.get_user_fields,
    "Ticket": f.get_ticket_fields,
}

_CUSTOM_FILTERS: Mapping[Resource, f.FieldFilter] = {
    "Group": f.get_group_custom_fields,
    "Organization": f.get_organization_custom_fields,
    "User": f.get_user_custom_fields,
    "Ticket": f.get_ticket_custom_fields,
}


class ZammadLoadOptions:
    """Dropdown loaders for the Zammad node.
        Fetches attributes, groups, organizations and users fresh on every
        call and reshapes them into LoadOption pairs.
        """

    def __init__(self, client: ZammadClient) -> None:
        self._client = client

    def get_all_fields(self) -> List[Field]:
        data = self._client.request("GET", "/object_manager_attributes")
        return self._map_items(data, _to_field, "object manager attribute")

    def get_fields(self, resource: Resource, custom_only: bool = False) -> List[LoadOption]:
        filters = _CUSTOM_FILTERS if custom_only else _RESOURCE_FILTERS
        if resource not in filters:
            raise ValueError(f"Unknown Zammad resource: {resource!r}")

        selected = filters[resource](self.get_all_fields())
        logger.debug("Selected %d %s fields (custom_only=%s)", len(selected), resource, custom_only)
        return [f.field_to_load_option(field) for field in selected]

    def get_group_fields(self) -> List[LoadOption]:
        return self.get_fields("Group")

    def get_organization_fields(self) -> List[LoadOption]:
        return self.get_fields("Organization")

    def get_user_fields(self) -> List[LoadOption]:
        return self.get_fields("User")

    def get_ticket_fields(self) -> List[LoadOption]:
        return self.get_fields("Ticket")

    def get_group_custom_fields(self) -> List[LoadOption]:
        return self.get_fields("Group", custom_only=True)

    def get_organization_custom_fields(self) -> List[LoadOption]:
        return self.get_fields("Organization", custom_only=True)

    def get_user_custom_fields(self) -> List[LoadOption]:
        return self.get_fields("User", custom_only=True)

    def get_ticket_custom_fields(self) -> List[LoadOption]:
        return self.get_fields("Ticket", custom_only=True)

    def get_groups(self) -> List[LoadOption]:
        data = self._client.request_all_items("GET", "/groups")
        groups = self._map_items(data, _to_group, "group")
        return [LoadOption(name=g.name, value=g.id) for g in groups if f.is_relevant_group(g)]

    def get_organizations(self) -> List[LoadOption]:
        data = self._client.request_all_items("GET", "/organizations")
        orgs = self._map_items(data, _to_organization, "organization")
        return [LoadOption(name=o.name, value=o.id) for o in orgs if f.is_relevant_org(o)]

    def get_customers(self) -> List[LoadOption]:
        data = self._client.request_all_items("GET", "/users")
        users = self._map_items(data, _to_user, "user")
        return [LoadOption(name=_customer_label(u), value=u.id) for u in users if f.is_customer(u)]

    def _map_items(
        self,
        data: Any,
        mapper: Callable[[Mapping[str, Any]], T],
        kind: str,
    ) -> List[T]:
        if not isinstance(data, list):
            msg = f"Unexpected response shape from Zammad API: {kind} list expected"
            logger.error("%s, got %s", msg, type(data).__name__)
            raise NodeApiError(self._client.node, msg)

        try:
            return [mapper(item) for item in data]
        except (KeyError, TypeError, ValueError) as exc:
            msg = f"Unexpected {kind} shape in Zammad API response"
            logger.error("%s: %s", msg, exc)
            raise NodeApiError(self._client.node, msg) from exc


def _to_field(item: Mapping[str, Any]) -> Field:
    return Field(
        name=str(item["name"]),
        display=str(item["display"]),
        object=str(item["object"]),
        created_by_id=int(item["created_by_id"]),
    )

def _to_user(item: Mapping[str, Any]) -> User:
    return User(
        role_ids=frozenset(int(r) for r in item["role_ids"]),
        email=str(item.get("email") or ""),
        id=item.get("id"),
        firstname=item.get("firstname"),
        lastname=item.get("lastname"),
    )

def _customer_label(user: User) -> str:
    full_name = " ".join(p for p in (user.firstname, user.lastname) if p)
    return f"{full_name} ({user.email})" if full_name else user.email

def _to_organization(item: Mapping[str, Any]) -> Organization:
    return Organization(name=str(item["name"]), active=bool(item["active"]), id=item.get("id"))

def _to_group(item: Mapping[str, Any]) -> Group:
    return Group(name=str(item["name"]), active=bool(item["active"]), id=item.get("id"))
