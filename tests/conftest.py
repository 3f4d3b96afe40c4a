import os

# Clés factices et limiter désactivé AVANT l'import de l'application
os.environ.setdefault("PAGOPAR_PUBLIC_KEY", "test-public-key")
os.environ.setdefault("PAGOPAR_PRIVATE_KEY", "test-private-key")
os.environ["DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS"] = "1"

import pytest
import requests
from typing import Any, Generator, List, Optional
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from backend.app import app as fastapi_app
from backend.pagopar import PagoPar
from backend.pagopar.dependencies import get_pagopar

PAYMENT_URL = "https://www.pagopar.com/pagos/abc123"
TRANSACTION_TOKEN = "abc123"

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)
        elif "/tests/functional/" in nodeid:
            item.add_marker(pytest.mark.functional)


class FakeResponse:
    """Réponse HTTP minimale compatible avec ce que le client PagoPar utilise."""

    def __init__(self, status_code: int = 200, json_body: Any = None, text: str = ""):
        self.status_code = status_code
        self._json = json_body
        self.text = text

    def json(self):
        if self._json is None:
            raise ValueError("No JSON object could be decoded")
        return self._json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Remplace requests.Session: enregistre les POST et rejoue une réponse ou une exception."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None):
        self.response = response or FakeResponse(200, {"respuesta": True})
        self.error = error
        self.calls: List[dict] = []
        self.closed = False

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


@pytest.fixture
def make_response():
    return FakeResponse

@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()

@pytest.fixture
def pagopar_logger() -> MagicMock:
    return MagicMock()

@pytest.fixture
def pagopar_client(fake_session, pagopar_logger) -> PagoPar:
    return PagoPar(
        "test-public-key",
        "test-private-key",
        base_url="https://api.pagopar.test/api",
        session=fake_session,
        logger=pagopar_logger,
    )

@pytest.fixture
def fake_pagopar() -> MagicMock:
    """Client PagoPar simulé pour les routes (aucun appel réseau)."""
    client = MagicMock(spec=PagoPar)
    client.public_key = "test-public-key"
    client.create_transaction.return_value = {
        "url_pago": PAYMENT_URL,
        "token_transaccion": TRANSACTION_TOKEN,
    }
    return client

@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

# Toutes les routes utilisent le client simulé
@pytest.fixture(autouse=True)
def _override_pagopar(app, fake_pagopar):
    app.dependency_overrides[get_pagopar] = lambda: fake_pagopar
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_pagopar, None)
