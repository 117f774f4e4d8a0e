"""Beschaffung von Bearer-Tokens für Dynamics 365."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from azure.identity.aio import DefaultAzureCredential, ManagedIdentityCredential

from customer_lookup.settings import settings


class TokenProvider(ABC):
    """Abstrakte Basis für alle Token-Quellen."""

    @abstractmethod
    async def acquire_token(self, scope: str) -> str:
        """Gibt ein Bearer-Token für den angegebenen Scope zurück."""
        raise NotImplementedError


class ManagedIdentityTokenProvider(TokenProvider):
    """Verwendet die Managed Identity der Function App."""

    def __init__(self, client_id: Optional[str] = None) -> None:
        self.client_id = client_id

    async def acquire_token(self, scope: str) -> str:
        # Pro Aufruf ein neues Credential; es wird nichts zwischengespeichert.
        async with ManagedIdentityCredential(client_id=self.client_id) as credential:
            access_token = await credential.get_token(scope)
        return access_token.token


class DefaultAzureTokenProvider(TokenProvider):
    """Credential-Kette von azure-identity, praktisch für lokale Entwicklung."""

    def __init__(self, client_id: Optional[str] = None) -> None:
        self.client_id = client_id

    async def acquire_token(self, scope: str) -> str:
        async with DefaultAzureCredential(
            managed_identity_client_id=self.client_id
        ) as credential:
            access_token = await credential.get_token(scope)
        return access_token.token


class StaticTokenProvider(TokenProvider):
    """Liefert ein fest konfiguriertes Token (nur für Tests und lokal)."""

    def __init__(self, token: Optional[str] = None) -> None:
        self.token = token

    async def acquire_token(self, scope: str) -> str:
        if not self.token:
            raise ValueError("D365_ACCESS_TOKEN not set")
        return self.token


def _static_from_settings() -> StaticTokenProvider:
    secret = settings.d365_access_token
    return StaticTokenProvider(secret.get_secret_value() if secret else None)


_TOKEN_PROVIDERS = {
    "managed_identity": lambda: ManagedIdentityTokenProvider(settings.azure_client_id),
    "default": lambda: DefaultAzureTokenProvider(settings.azure_client_id),
    "static": _static_from_settings,
}


def select_token_provider() -> TokenProvider:
    """Ermittelt anhand der Einstellungen die zu nutzende Implementierung."""
    try:
        factory = _TOKEN_PROVIDERS[settings.token_provider]
    except KeyError:
        raise ValueError(f"Unsupported TOKEN_PROVIDER {settings.token_provider}")
    return factory()
