"""Shared fixtures: a fake requests session so no test touches the network."""

import json
from typing import List, Optional

import pytest
import requests

from validador_cnpj.config import RegistryConfig
from validador_cnpj.ingestion.registry_client import RegistryClient


class FakeResponse:
    def __init__(self, status_code: int = 200, body: str = "", reason: str = "OK"):
        self.status_code = status_code
        self.text = body
        self.reason = reason

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeSession:
    """Records requests and answers with a canned response or exception."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Exception = None):
        self.response = response or FakeResponse()
        self.error = error
        self.headers = {}
        self.calls: List[dict] = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append({"url": url, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False


class SessionFactory:
    """Builds a fresh FakeSession per lookup, like requests.Session would."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Exception = None):
        self.response = response
        self.error = error
        self.sessions: List[FakeSession] = []

    def __call__(self) -> FakeSession:
        session = FakeSession(self.response, self.error)
        self.sessions.append(session)
        return session

    @property
    def calls(self) -> List[dict]:
        return [call for session in self.sessions for call in session.calls]


ACTIVE_COMPANY = {
    "status": "OK",
    "cnpj": "11.222.333/0001-81",
    "nome": "EMPRESA EXEMPLO LTDA",
    "fantasia": "EXEMPLO",
    "situacao": "ATIVA",
    "logradouro": "RUA DAS FLORES",
    "numero": "100",
    "complemento": "SALA 2",
    "bairro": "CENTRO",
    "municipio": "SAO PAULO",
    "uf": "SP",
    "cep": "01.001-000",
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "CNPJ_REGISTRY_URL",
        "CNPJ_CONNECT_TIMEOUT",
        "CNPJ_READ_TIMEOUT",
        "CNPJ_MAX_WORKERS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_client():
    """Build a RegistryClient answering with the given payload, status or error."""

    def _make(payload=None, body: str = None, status_code: int = 200,
              reason: str = "OK", error: Exception = None):
        if body is None:
            body = json.dumps(payload if payload is not None else ACTIVE_COMPANY)
        factory = SessionFactory(FakeResponse(status_code, body, reason), error)
        client = RegistryClient(RegistryConfig(), session_factory=factory)
        return client, factory

    return _make


@pytest.fixture
def timeout_error():
    return requests.ReadTimeout("Read timed out. (read timeout=10)")


@pytest.fixture
def active_company():
    return dict(ACTIVE_COMPANY)
