"""Datenmodelle für Konfiguration und Antworten des Proxys."""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import urlsplit

from pydantic import BaseModel

DEFAULT_BASE_URL = "https://d365.example.com"


def scope_for(base_url: str) -> str:
    """Leitet den OAuth-Scope aus dem Origin der Basis-URL ab."""
    parts = urlsplit(base_url)
    if not parts.scheme or not parts.netloc:
        # Keine absolute URL; der Aufruf selbst schlägt dann fehl.
        return f"{base_url.rstrip('/')}/.default"
    return f"{parts.scheme}://{parts.netloc}/.default"


class LookupConfig(BaseModel):
    """Explizit übergebene Konfiguration des Handlers."""

    base_url: str = DEFAULT_BASE_URL
    scope: str = f"{DEFAULT_BASE_URL}/.default"

    @classmethod
    def from_settings(cls, settings: Any) -> "LookupConfig":
        """Baut die Konfiguration aus den Umgebungseinstellungen.

        Leere Werte zählen wie nicht gesetzte Variablen.
        """
        base_url = settings.d365_api_baseurl or DEFAULT_BASE_URL
        scope = settings.d365_scope or scope_for(base_url)
        return cls(base_url=base_url, scope=scope)


class ErrorBody(BaseModel):
    """Fehlerobjekt im Antwort-Body."""

    error: str
    details: Optional[str] = None


class ResponseEnvelope(BaseModel):
    """HTTP-Status plus JSON-Body, wie ihn der Handler zurückgibt."""

    status: int
    body: Any

    @classmethod
    def ok(cls, payload: Any) -> "ResponseEnvelope":
        return cls(status=200, body=payload)

    @classmethod
    def error(
        cls, status: int, error: str, details: Optional[str] = None
    ) -> "ResponseEnvelope":
        body = ErrorBody(error=error, details=details)
        return cls(status=status, body=body.model_dump(exclude_none=True))
