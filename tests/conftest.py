import os

# Pas de Redis pendant les tests: le lifespan désactive proprement le rate limiting
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import httpx
import pytest
from typing import Any, Callable, Generator, List
from fastapi.testclient import TestClient

from storefront import config
from storefront.app import app as fastapi_app
from storefront.catalog.products import get_product

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)
        elif "/functional/" in nodeid:
            item.add_marker(pytest.mark.functional)

@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

# Environnement neutre: pas de clé Primer ni de fallback rate limit hérités du shell/.env
@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    monkeypatch.delenv("PRIMER_API_KEY", raising=False)
    monkeypatch.delenv("LOCAL_RATE_LIMIT_FALLBACK", raising=False)

@pytest.fixture
def primer_key(monkeypatch) -> str:
    monkeypatch.setenv("PRIMER_API_KEY", "sk_test_primer_123")
    return "sk_test_primer_123"

@pytest.fixture
def mock_primer(monkeypatch) -> Callable[[Callable[[httpx.Request], httpx.Response]], List[httpx.Request]]:
    """
    Remplace le client HTTP Primer par un httpx.MockTransport.
    Usage: calls = mock_primer(handler) -> liste des requêtes sortantes interceptées.
    """
    def install(handler: Callable[[httpx.Request], httpx.Response]) -> List[httpx.Request]:
        calls: List[httpx.Request] = []

        def _recording(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return handler(request)

        transport = httpx.MockTransport(_recording)
        monkeypatch.setattr(
            "storefront.payments.primer_client._client",
            lambda: httpx.Client(base_url=config.PRIMER_API_URL, transport=transport, timeout=config.PRIMER_TIMEOUT_SECONDS),
        )
        return calls
    return install

@pytest.fixture
def headphones():
    return get_product("1")

@pytest.fixture
def coffee_maker():
    return get_product("3")

def session_ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"clientToken": "client_tok_abc", "orderId": "order-1"})

@pytest.fixture
def primer_session_ok() -> Callable[[httpx.Request], Any]:
    return session_ok
