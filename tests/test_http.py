from urllib.parse import parse_qs, urlparse

import pytest
import requests
from urllib3.exceptions import InsecureRequestWarning

from criteo_client.config import ClientConfig
from criteo_client.exceptions import TransportError
from criteo_client.http import HttpTransport


def test_verbs_send_body_and_headers(requests_mock):
    transport = HttpTransport(ClientConfig())
    matcher = requests_mock.put("https://api.criteo.com/things/1", text="ok")

    response = transport.put(
        "/things/1",
        body='{"name": "x"}',
        headers={"Content-Type": "application/json", "X-Test": "1"},
    )

    assert response.status_code == 200
    assert response.body == "ok"
    assert matcher.last_request.json() == {"name": "x"}
    assert matcher.last_request.headers["X-Test"] == "1"


def test_query_parameters_are_url_encoded(requests_mock):
    transport = HttpTransport(ClientConfig())
    matcher = requests_mock.get("https://api.criteo.com/search", json=[])

    transport.get("/search", query={"advertiser-id": "12 34", "pageIndex": 0})

    query = parse_qs(urlparse(matcher.last_request.url).query)
    assert query == {"advertiser-id": ["12 34"], "pageIndex": ["0"]}


def test_error_statuses_are_returned_not_raised(requests_mock):
    transport = HttpTransport(ClientConfig())
    requests_mock.delete("https://api.criteo.com/things/1", status_code=404, text="missing")

    response = transport.delete("/things/1")

    assert response.status_code == 404
    assert response.body == "missing"


def test_endpoint_prefix_and_protocol_build_url(requests_mock):
    transport = HttpTransport(ClientConfig(host="localhost:8080", protocol="http", endpoint="/mock/"))
    matcher = requests_mock.patch("http://localhost:8080/mock/things", text="")

    transport.patch("things")

    assert matcher.called


def test_timeout_is_reported(requests_mock):
    transport = HttpTransport(ClientConfig(timeout=2.5))
    requests_mock.get("https://api.criteo.com/slow", exc=requests.exceptions.ReadTimeout)

    with pytest.raises(TransportError) as excinfo:
        transport.get("/slow")

    assert str(excinfo.value) == "Request timed out after 2.5 seconds."


def test_transport_error_includes_root_cause():
    class ExplodingSession:
        def request(self, *args, **kwargs):  # pragma: no cover - helper
            raise requests.exceptions.SSLError("CERTIFICATE_VERIFY_FAILED")

        def close(self):  # pragma: no cover - helper
            pass

    transport = HttpTransport(ClientConfig(), session=ExplodingSession())

    with pytest.raises(TransportError) as excinfo:
        transport.post("/oauth2/token", body="grant_type=client_credentials")

    assert "CERTIFICATE_VERIFY_FAILED" in str(excinfo.value)
    assert excinfo.value.status_code is None


def test_timeout_and_verify_are_forwarded():
    captured: dict[str, object] = {}

    class RecordingSession:
        def request(self, **kwargs):
            captured.update(kwargs)
            response = requests.Response()
            response.status_code = 204
            response._content = b""
            return response

        def close(self):  # pragma: no cover - helper
            pass

    transport = HttpTransport(
        ClientConfig(timeout=5.0, verify_ssl="/etc/ca.pem"), session=RecordingSession()
    )

    response = transport.get("/ping")

    assert response.status_code == 204
    assert captured["timeout"] == 5.0
    assert captured["verify"] == "/etc/ca.pem"
    assert captured["data"] is None


def test_disables_insecure_warning_when_verify_disabled(monkeypatch):
    captured: list[object] = []

    def fake_disable(warning):  # pragma: no cover - helper
        captured.append(warning)

    monkeypatch.setattr("criteo_client.http.urllib3.disable_warnings", fake_disable)

    HttpTransport(ClientConfig(verify_ssl=False))

    assert captured and captured[0] is InsecureRequestWarning


def test_text_without_charset_is_decoded_as_utf8(requests_mock):
    transport = HttpTransport(ClientConfig())
    raw = "name,spend\nCafé,1.5\n".encode("utf-8")
    requests_mock.get(
        "https://api.criteo.com/export", content=raw, headers={"Content-Type": "text/csv"}
    )

    response = transport.get("/export")

    assert response.body == "name,spend\nCafé,1.5\n"
    assert response.content == raw


def test_declared_charset_is_honoured(requests_mock):
    transport = HttpTransport(ClientConfig())
    requests_mock.get(
        "https://api.criteo.com/export",
        content="Café".encode("latin-1"),
        headers={"Content-Type": "text/csv; charset=ISO-8859-1"},
    )

    assert transport.get("/export").body == "Café"
