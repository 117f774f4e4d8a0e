"""Kernlogik: Kunden-ID auflösen, Token holen, Dynamics 365 abfragen."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from customer_lookup.d365 import fetch_customers
from customer_lookup.errors import MissingCustomerIdError, UpstreamError
from customer_lookup.models import LookupConfig, ResponseEnvelope
from customer_lookup.token_provider import TokenProvider

logger = logging.getLogger(__name__)


def resolve_customer_id(query: Mapping[str, Any], body: Any) -> str:
    """Liest ``id`` aus der Query, sonst aus dem JSON-Body.

    Leere Werte gelten als nicht vorhanden. Ein Body, der kein JSON-Objekt
    ist, wird ignoriert.
    """
    customer_id = query.get("id")
    if not customer_id and isinstance(body, dict):
        customer_id = body.get("id")
    if not customer_id:
        raise MissingCustomerIdError()
    return str(customer_id)


async def lookup_customer(
    customer_id: str,
    config: LookupConfig,
    token_provider: TokenProvider,
    client: httpx.AsyncClient,
) -> Any:
    """Ein einzelner Versuch ohne Retries; jeder Fehler wird zu ``UpstreamError``."""
    try:
        token = await token_provider.acquire_token(config.scope)
        return await fetch_customers(client, config.base_url, customer_id, token)
    except Exception as exc:
        raise UpstreamError.from_exception(exc) from exc


async def get_customer(
    query: Mapping[str, Any],
    body: Any,
    config: LookupConfig,
    token_provider: TokenProvider,
    client: httpx.AsyncClient,
) -> ResponseEnvelope:
    """Hauptschnittstelle: beantwortet eine Anfrage mit einem Envelope."""
    logger.info("get-customer invoked")
    try:
        customer_id = resolve_customer_id(query, body)
    except MissingCustomerIdError as exc:
        return ResponseEnvelope.error(400, str(exc))

    try:
        payload = await lookup_customer(customer_id, config, token_provider, client)
    except UpstreamError as exc:
        logger.exception("Error calling D365: %s", exc.details)
        return ResponseEnvelope.error(502, "upstream error", exc.details)
    return ResponseEnvelope.ok(payload)
