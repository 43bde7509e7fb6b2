"""Tests for the ReceitaWS client, using a fake requests session."""

import requests

from validador_cnpj.config import RegistryConfig
from validador_cnpj.ingestion.registry_client import RegistryClient
from validador_cnpj.models import CNPJ, QueryStatus

CNPJ_OK = CNPJ("11222333000181")


def test_issues_single_get_to_lookup_url(make_client):
    client, factory = make_client()

    outcome = client.fetch(CNPJ_OK)

    assert outcome.status is QueryStatus.SUCCESS
    assert factory.calls == [{
        "url": "https://www.receitaws.com.br/v1/cnpj/11222333000181",
        "timeout": (10.0, 10.0),
    }]


def test_session_is_per_lookup_and_closed(make_client):
    client, factory = make_client()

    client.fetch(CNPJ_OK)
    client.fetch(CNPJ_OK)

    assert len(factory.sessions) == 2
    assert all(session.closed for session in factory.sessions)
    assert factory.sessions[0].headers["Accept"] == "application/json"
    assert factory.sessions[0].headers["User-Agent"].startswith("validador-cnpj/")


def test_non_2xx_is_transport_error(make_client):
    client, factory = make_client(body="", status_code=429, reason="Too Many Requests")

    outcome = client.fetch(CNPJ_OK)

    assert outcome.status is QueryStatus.TRANSPORT_ERROR
    assert outcome.message == "429 - Too Many Requests"
    assert outcome.http_status == 429
    assert len(factory.calls) == 1


def test_timeout_is_not_retried(make_client, timeout_error):
    client, factory = make_client(error=timeout_error)

    outcome = client.fetch(CNPJ_OK)

    assert outcome.status is QueryStatus.TIMEOUT
    assert len(factory.calls) == 1


def test_connect_timeout_is_timeout(make_client):
    client, _ = make_client(error=requests.ConnectTimeout("connect timed out"))

    assert client.fetch(CNPJ_OK).status is QueryStatus.TIMEOUT


def test_connection_failure_is_transport_error(make_client):
    client, _ = make_client(error=requests.ConnectionError("Name or service not known"))

    outcome = client.fetch(CNPJ_OK)

    assert outcome.status is QueryStatus.TRANSPORT_ERROR
    assert "Name or service not known" in outcome.message
    assert outcome.http_status is None


def test_api_error_payload(make_client):
    client, _ = make_client({"status": "ERROR", "message": "CNPJ rejeitado pela Receita Federal"})

    outcome = client.fetch(CNPJ_OK)

    assert outcome.status is QueryStatus.API_ERROR
    assert outcome.message == "CNPJ rejeitado pela Receita Federal"


def test_malformed_body(make_client):
    client, _ = make_client(body="<html>gateway</html>")

    assert client.fetch(CNPJ_OK).status is QueryStatus.MALFORMED_RESPONSE


def test_configured_base_url_and_timeouts(monkeypatch):
    monkeypatch.setenv("CNPJ_REGISTRY_URL", "http://localhost:8080/v1/cnpj/")
    monkeypatch.setenv("CNPJ_READ_TIMEOUT", "3")
    calls = []

    class Session:
        headers = {}

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def get(self, url, timeout=None):
            calls.append((url, timeout))
            raise requests.ReadTimeout()

    client = RegistryClient(RegistryConfig(), session_factory=Session)
    client.fetch(CNPJ_OK)

    assert calls == [("http://localhost:8080/v1/cnpj/11222333000181", (10.0, 3.0))]


def test_body_read_timeout_detection():
    from urllib3.exceptions import ReadTimeoutError

    from validador_cnpj.ingestion.registry_client import is_body_read_timeout

    wrapped = requests.ConnectionError(ReadTimeoutError(None, None, "Read timed out."))

    assert is_body_read_timeout(wrapped)
    assert not is_body_read_timeout(requests.ConnectionError("Connection reset by peer"))
    assert not is_body_read_timeout(requests.ConnectionError())


def test_wrapped_read_timeout_is_timeout(make_client):
    from urllib3.exceptions import ReadTimeoutError

    error = requests.ConnectionError(ReadTimeoutError(None, None, "Read timed out."))
    client, _ = make_client(error=error)

    assert client.fetch(CNPJ_OK).status is QueryStatus.TIMEOUT
