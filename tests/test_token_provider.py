import asyncio

import pytest
from azure.core.credentials import AccessToken
from azure.core.exceptions import ClientAuthenticationError

from customer_lookup import token_provider


class DummyCredential:
    """Stands in for the async azure-identity credentials."""

    instances = []

    def __init__(self, error=None, **kwargs):
        self.kwargs = kwargs
        self.error = error
        self.scopes = []
        self.closed = False
        DummyCredential.instances.append(self)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True

    async def get_token(self, *scopes):
        self.scopes.extend(scopes)
        if self.error is not None:
            raise self.error
        return AccessToken("secret-token", 1700000000)


@pytest.fixture(autouse=True)
def reset_instances():
    DummyCredential.instances = []
    yield


def test_managed_identity_requests_scope(monkeypatch):
    """Fetches a token for the scope and closes the credential"""
    monkeypatch.setattr(token_provider, "ManagedIdentityCredential", DummyCredential)
    provider = token_provider.ManagedIdentityTokenProvider(client_id="client-123")
    token = asyncio.run(provider.acquire_token("https://d365.example.com/.default"))
    assert token == "secret-token"
    credential = DummyCredential.instances[0]
    assert credential.kwargs == {"client_id": "client-123"}
    assert credential.scopes == ["https://d365.example.com/.default"]
    assert credential.closed


def test_new_credential_per_call(monkeypatch):
    """Does not cache tokens between invocations"""
    monkeypatch.setattr(token_provider, "ManagedIdentityCredential", DummyCredential)
    provider = token_provider.ManagedIdentityTokenProvider()
    asyncio.run(provider.acquire_token("scope/.default"))
    asyncio.run(provider.acquire_token("scope/.default"))
    assert len(DummyCredential.instances) == 2


def test_managed_identity_error_propagates(monkeypatch):
    def failing(**kwargs):
        return DummyCredential(error=ClientAuthenticationError("no identity"), **kwargs)

    monkeypatch.setattr(token_provider, "ManagedIdentityCredential", failing)
    provider = token_provider.ManagedIdentityTokenProvider()
    with pytest.raises(ClientAuthenticationError):
        asyncio.run(provider.acquire_token("scope/.default"))
    assert DummyCredential.instances[0].closed


def test_default_azure_credential_gets_client_id(monkeypatch):
    monkeypatch.setattr(token_provider, "DefaultAzureCredential", DummyCredential)
    provider = token_provider.DefaultAzureTokenProvider(client_id="client-123")
    assert asyncio.run(provider.acquire_token("scope/.default")) == "secret-token"
    assert DummyCredential.instances[0].kwargs == {"managed_identity_client_id": "client-123"}


def test_static_provider_without_token():
    """Fails at acquisition time when no token is configured"""
    provider = token_provider.StaticTokenProvider()
    with pytest.raises(ValueError):
        asyncio.run(provider.acquire_token("scope/.default"))


def test_static_provider_returns_token():
    provider = token_provider.StaticTokenProvider("abc")
    assert asyncio.run(provider.acquire_token("scope/.default")) == "abc"
