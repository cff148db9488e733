from __future__ import annotations
from dataclasses import dataclass, field
from typing import Literal, Union


# credentials
@dataclass(frozen=True)
class BasicAuthCredentials:
    base_url: str
    username: str
    password: str
    allow_unauthorized_certs: bool = False
    auth_type: Literal["basicAuth"] = field(default="basicAuth", init=False)

@dataclass(frozen=True)
class TokenAuthCredentials:
    base_url: str
    access_token: str
    allow_unauthorized_certs: bool = False
    auth_type: Literal["tokenAuth"] = field(default="tokenAuth", init=False)

ZammadCredentials = Union[BasicAuthCredentials, TokenAuthCredentials]

# client
@dataclass(frozen=True)
class ZammadClientConfig:
    timeout_seconds: float = 10.0
