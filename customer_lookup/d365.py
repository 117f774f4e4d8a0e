"""Zugriff auf die OData-Schnittstelle von Dynamics 365."""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


def build_customers_url(base_url: str, customer_id: str) -> str:
    """URL für die Kundensuche über alle Mandanten."""
    # Die ID wird unverändert in den Filter eingesetzt.
    return (
        f"{base_url.rstrip('/')}/data/CustomersV3"
        f"?cross-company=true&$filter=AccountNumber eq '{customer_id}'"
    )


async def fetch_customers(
    client: httpx.AsyncClient, base_url: str, customer_id: str, token: str
) -> Any:
    """Führt die GET-Anfrage aus und liefert den JSON-Body unverändert zurück."""
    url = build_customers_url(base_url, customer_id)
    logger.debug("GET %s", url)
    response = await client.get(
        url,
        headers={
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        },
    )
    response.raise_for_status()
    return response.json()
