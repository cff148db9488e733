from __future__ import annotations
import os
from typing import Any, Mapping
from dotenv import load_dotenv
from zammad_node.config import (
    BasicAuthCredentials,
    TokenAuthCredentials,
    ZammadClientConfig,
    ZammadCredentials,
)
from zammad_node.shared.errors import CredentialsError


load_dotenv()

_TRUTHY = ("1", "true", "yes", "y")

def _get_required_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise CredentialsError(f"Environment variable {name} is required but not set")
    return value

def _parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)

def _require(data: Mapping[str, Any], key: str) -> Any:
    value = data.get(key)
    if value is None or value == "":
        raise CredentialsError(f"Zammad credentials field {key!r} is required but not set")
    return value

def credentials_from_mapping(data: Mapping[str, Any]) -> ZammadCredentials:
    """Build credentials from the mapping the host engine stores for a node."""

    auth_type = data.get("authType")
    allow_unauthorized = _parse_bool(data.get("allowUnauthorizedCerts", False))

    if auth_type == "basicAuth":
        return BasicAuthCredentials(
            base_url=str(_require(data, "baseUrl")),
            username=str(_require(data, "username")),
            password=str(_require(data, "password")),
            allow_unauthorized_certs=allow_unauthorized,
        )

    if auth_type == "tokenAuth":
        return TokenAuthCredentials(
            base_url=str(_require(data, "baseUrl")),
            access_token=str(_require(data, "accessToken")),
            allow_unauthorized_certs=allow_unauthorized,
        )

    raise CredentialsError(f"Unsupported Zammad authType: {auth_type!r}")

def load_zammad_credentials() -> ZammadCredentials:
    auth_type = os.getenv("ZAMMAD_AUTH_TYPE", "tokenAuth")
    base_url = _get_required_env("ZAMMAD_BASE_URL")
    allow_unauthorized = (
        os.getenv("ZAMMAD_ALLOW_UNAUTHORIZED_CERTS", "false").lower() in _TRUTHY
    )

    if auth_type == "basicAuth":
        return BasicAuthCredentials(
            base_url=base_url,
            username=_get_required_env("ZAMMAD_USERNAME"),
            password=_get_required_env("ZAMMAD_PASSWORD"),
            allow_unauthorized_certs=allow_unauthorized,
        )

    if auth_type == "tokenAuth":
        return TokenAuthCredentials(
            base_url=base_url,
            access_token=_get_required_env("ZAMMAD_ACCESS_TOKEN"),
            allow_unauthorized_certs=allow_unauthorized,
        )

    raise CredentialsError("ZAMMAD_AUTH_TYPE must be 'basicAuth' or 'tokenAuth'")

def load_client_config() -> ZammadClientConfig:
    timeout_str = os.getenv("ZAMMAD_TIMEOUT_SECONDS", "10")
    try:
        timeout_seconds = float(timeout_str)
    except ValueError as exc:
        raise CredentialsError("ZAMMAD_TIMEOUT_SECONDS must be a number") from exc

    return ZammadClientConfig(timeout_seconds=timeout_seconds)
