from __future__ import annotations
from dataclasses import dataclass
from typing import FrozenSet, Literal, Optional


Resource = Literal["Group", "Organization", "Ticket", "User"]

RESOURCES: tuple[Resource, ...] = ("Group", "Organization", "Ticket", "User")


@dataclass(frozen=True)
class Node:
    name: str
    type: str = "zammad"

@dataclass(frozen=True)
class Field:
    name: str
    display: str
    object: str
    created_by_id: int

@dataclass(frozen=True)
class User:
    role_ids: FrozenSet[int]
    email: str
    id: Optional[int] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None

@dataclass(frozen=True)
class Organization:
    name: str
    active: bool
    id: Optional[int] = None

@dataclass(frozen=True)
class Group:
    name: str
    active: bool
    id: Optional[int] = None

@dataclass(frozen=True)
class LoadOption:
    """A {name, value} pair shown in a dropdown of the host UI."""

    name: str
    value: str | int
