import json
import logging
from typing import AsyncIterator
from uuid import uuid4

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

# Die eigentliche Logik steckt im Handler; hier werden nur Konfiguration,
# Token-Provider und HTTP-Client bereitgestellt.
from customer_lookup.handler import get_customer
from customer_lookup.logging_config import configure_logging, request_id_ctx_var
from customer_lookup.models import LookupConfig
from customer_lookup.settings import settings
from customer_lookup.token_provider import TokenProvider, select_token_provider

# Einmalig beim Import die Standard-Logging-Konfiguration anwenden.
configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI()


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    # Eine vom Aufrufer mitgeschickte ID übernehmen, sonst eine neue vergeben.
    request_id = request.headers.get("X-Request-ID") or str(uuid4())
    token = request_id_ctx_var.set(request_id)
    try:
        response = await call_next(request)
    finally:
        request_id_ctx_var.reset(token)
    response.headers["X-Request-ID"] = request_id
    return response


def get_lookup_config() -> LookupConfig:
    return LookupConfig.from_settings(settings)


def get_token_provider() -> TokenProvider:
    return select_token_provider()


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Ein Client pro Aufruf; wird nach der Antwort geschlossen."""
    # Kein Timeout: der Aufruf läuft, bis D365 antwortet oder abbricht.
    async with httpx.AsyncClient(timeout=None) as client:
        yield client


async def _read_json_body(request: Request):
    """Liefert den JSON-Body oder ``None``, wenn keiner lesbar ist."""
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.debug("Ignoring non-JSON request body")
        return None


@app.get("/")
def read_root():
    """Simple health/info endpoint for the API root."""
    return {
        "message": "Customer lookup proxy läuft",
        "usage": "GET /api/get-customer?id=<AccountNumber>",
    }


@app.api_route("/api/get-customer", methods=["GET", "POST"])
async def get_customer_endpoint(
    request: Request,
    config: LookupConfig = Depends(get_lookup_config),
    token_provider: TokenProvider = Depends(get_token_provider),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Sucht einen Kunden in Dynamics 365 über ``id`` (Query oder Body)."""
    body = await _read_json_body(request)
    envelope = await get_customer(
        request.query_params, body, config, token_provider, client
    )
    return JSONResponse(status_code=envelope.status, content=envelope.body)
