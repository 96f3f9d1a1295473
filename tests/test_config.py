import pytest

from criteo_client.config import ClientConfig, Credentials, parse_bool


def test_defaults():
    config = ClientConfig()

    assert config.base_url == "https://api.criteo.com"
    assert config.timeout == 12.0
    assert config.verify_ssl is True


def test_resolved_headers_merge_overrides():
    config = ClientConfig(api_version="2023-04", default_headers={"Accept": "text/csv"})

    headers = config.resolved_headers()

    assert headers == {
        "Accept": "text/csv",
        "Content-Type": "application/*+json",
        "User-Agent": "criteo-api-python-client/v2023-04",
    }


def test_protocol_is_normalized():
    assert ClientConfig(protocol="HTTP:").base_url == "http://api.criteo.com"


def test_unknown_protocol_is_rejected():
    with pytest.raises(ValueError):
        ClientConfig(protocol="ftp")


def test_credentials_require_both_values():
    with pytest.raises(ValueError):
        Credentials("id", "")


def test_from_env(monkeypatch):
    monkeypatch.setenv("CRITEO_CLIENT_ID", "env-id")
    monkeypatch.setenv("CRITEO_CLIENT_SECRET", "env-secret")
    monkeypatch.setenv("CRITEO_HOST", "api.preprod.criteo.com")
    monkeypatch.setenv("CRITEO_TIMEOUT", "30")
    monkeypatch.setenv("CRITEO_VERIFY_SSL", "no")

    credentials = Credentials.from_env()
    config = ClientConfig.from_env()

    assert credentials == Credentials("env-id", "env-secret")
    assert config.host == "api.preprod.criteo.com"
    assert config.timeout == 30.0
    assert config.verify_ssl is False


def test_from_env_names_missing_variable(monkeypatch):
    monkeypatch.delenv("CRITEO_CLIENT_ID", raising=False)
    monkeypatch.setenv("CRITEO_CLIENT_SECRET", "env-secret")

    with pytest.raises(ValueError, match="CRITEO_CLIENT_ID"):
        Credentials.from_env()


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, True), ("", True), ("0", False), ("off", False), ("FALSE", False), ("1", True), ("yes", True)],
)
def test_parse_bool(value, expected):
    assert parse_bool(value, default=True) is expected
