import logging
import inspect
import sys
import os
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
import httpx

from customer_lookup.token_provider import TokenProvider


@pytest.fixture(autouse=True)
def log_test_start(request):
    doc = inspect.getdoc(request.node.obj) if hasattr(request.node, "obj") else None
    if doc:
        first_line = doc.splitlines()[0]
        logging.info(f"START {request.node.name} - {first_line}")
    else:
        logging.info(f"START {request.node.name}")
    yield
    logging.info(f"END {request.node.name}")


class DummyTokenProvider(TokenProvider):
    """Gibt ein festes Token zurück oder wirft den konfigurierten Fehler."""

    def __init__(self, token="test-token", error=None):
        self.token = token
        self.error = error
        self.scopes = []

    async def acquire_token(self, scope):
        self.scopes.append(scope)
        if self.error is not None:
            raise self.error
        return self.token


class DummyUpstream:
    """Records requests and answers them like Dynamics 365 would."""

    def __init__(self, status_code=200, payload=None, error=None, text=None):
        self.status_code = status_code
        self.payload = payload if payload is not None else {"value": []}
        self.error = error
        self.text = text
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.payload)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def token_provider():
    return DummyTokenProvider()


@pytest.fixture
def upstream():
    return DummyUpstream(payload={"value": [{"AccountNumber": "ABC123", "Name": "Contoso"}]})
