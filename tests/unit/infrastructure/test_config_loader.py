import pytest
from zammad_node.config import BasicAuthCredentials, TokenAuthCredentials
from zammad_node.infrastructure.config_loader import (
    credentials_from_mapping,
    load_client_config,
    load_zammad_credentials,
)
from zammad_node.shared.errors import CredentialsError


def test_credentials_from_mapping_basic_auth() -> None:
    credentials = credentials_from_mapping(
        {
            "authType": "basicAuth",
            "baseUrl": "https://h",
            "username": "agent",
            "password": "secret",
            "allowUnauthorizedCerts": True,
        }
    )

    assert isinstance(credentials, BasicAuthCredentials)
    assert credentials.auth_type == "basicAuth"
    assert credentials.allow_unauthorized_certs is True

def test_credentials_from_mapping_token_auth() -> None:
    credentials = credentials_from_mapping(
        {"authType": "tokenAuth", "baseUrl": "https://h", "accessToken": "abc"}
    )

    assert isinstance(credentials, TokenAuthCredentials)
    assert credentials.access_token == "abc"
    assert credentials.allow_unauthorized_certs is False

def test_credentials_from_mapping_rejects_unknown_auth_type() -> None:
    with pytest.raises(CredentialsError):
        credentials_from_mapping({"authType": "oAuth2", "baseUrl": "https://h"})

def test_credentials_from_mapping_requires_fields() -> None:
    with pytest.raises(CredentialsError):
        credentials_from_mapping({"authType": "tokenAuth", "baseUrl": "https://h"})

def test_load_zammad_credentials_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ZAMMAD_AUTH_TYPE", "basicAuth")
    monkeypatch.setenv("ZAMMAD_BASE_URL", "https://h/")
    monkeypatch.setenv("ZAMMAD_USERNAME", "agent")
    monkeypatch.setenv("ZAMMAD_PASSWORD", "secret")
    monkeypatch.setenv("ZAMMAD_ALLOW_UNAUTHORIZED_CERTS", "yes")

    credentials = load_zammad_credentials()

    assert credentials == BasicAuthCredentials(
        base_url="https://h/",
        username="agent",
        password="secret",
        allow_unauthorized_certs=True,
    )

def test_load_zammad_credentials_missing_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ZAMMAD_AUTH_TYPE", "tokenAuth")
    monkeypatch.setenv("ZAMMAD_BASE_URL", "https://h")
    monkeypatch.delenv("ZAMMAD_ACCESS_TOKEN", raising=False)

    with pytest.raises(CredentialsError):
        load_zammad_credentials()

def test_load_client_config_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ZAMMAD_TIMEOUT_SECONDS", "2.5")
    assert load_client_config().timeout_seconds == 2.5

    monkeypatch.setenv("ZAMMAD_TIMEOUT_SECONDS", "soon")
    with pytest.raises(CredentialsError):
        load_client_config()

def test_credentials_from_mapping_parses_string_flag() -> None:
    base = {"authType": "tokenAuth", "baseUrl": "https://h", "accessToken": "abc"}

    assert credentials_from_mapping({**base, "allowUnauthorizedCerts": "false"}).allow_unauthorized_certs is False
    assert credentials_from_mapping({**base, "allowUnauthorizedCerts": "True"}).allow_unauthorized_certs is True
    assert credentials_from_mapping({**base, "allowUnauthorizedCerts": False}).allow_unauthorized_certs is False
