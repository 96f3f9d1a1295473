import json

import pytest
import typer
from typer.testing import CliRunner

from criteo_client.cli import _build_client, app

runner = CliRunner()

TOKEN_URL = "https://api.criteo.com/oauth2/token"
BASE = "https://api.criteo.com/preview/retail-media"
CREDENTIALS = ["--client-id", "cid", "--client-secret", "csecret"]


def test_accounts_list_renders_table(requests_mock):
    requests_mock.post(TOKEN_URL, json={"access_token": "T1"})
    requests_mock.get(
        f"{BASE}/accounts",
        json={
            "data": [
                {"id": "11", "attributes": {"name": "Acme", "currency": "EUR"}},
                {"id": "12", "attributes": {"name": "Bolt", "currency": "USD"}},
            ]
        },
    )

    result = runner.invoke(app, ["accounts", "list", *CREDENTIALS])

    assert result.exit_code == 0
    assert "Retail Media Accounts" in result.stdout
    assert "Acme" in result.stdout
    assert result.stdout.index("Acme") < result.stdout.index("Bolt")


def test_accounts_list_json_output(requests_mock):
    requests_mock.post(TOKEN_URL, json={"access_token": "T1"})
    requests_mock.get(f"{BASE}/accounts", json={"data": [{"id": "11"}]})

    result = runner.invoke(app, ["accounts", "list", "--json", *CREDENTIALS])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"data": [{"id": "11"}]}


def test_campaigns_list_passes_paging(requests_mock):
    requests_mock.post(TOKEN_URL, json={"access_token": "T1"})
    matcher = requests_mock.get(f"{BASE}/accounts/42/campaigns", json={"data": []})

    result = runner.invoke(
        app,
        ["campaigns", "list", "42", "--page-index", "1", "--page-size", "25", "--json", *CREDENTIALS],
    )

    assert result.exit_code == 0
    assert "pageIndex=1" in matcher.last_request.url
    assert "pageSize=25" in matcher.last_request.url


def test_credentials_are_read_from_environment(requests_mock):
    auth = requests_mock.post(TOKEN_URL, json={"access_token": "T1"})

    result = runner.invoke(
        app,
        ["auth", "check"],
        env={"CRITEO_CLIENT_ID": "env-id", "CRITEO_CLIENT_SECRET": "env-secret"},
    )

    assert result.exit_code == 0
    assert "Authenticated as env-id." in result.stdout
    assert "client_id=env-id" in auth.last_request.text
    assert "T1" not in result.stdout


def test_authentication_failure_exits_non_zero(requests_mock):
    requests_mock.post(TOKEN_URL, status_code=401, text='{"error": "invalid_client"}')

    result = runner.invoke(app, ["auth", "check", *CREDENTIALS])

    assert result.exit_code == 1
    assert "status 401" in result.stderr


def test_request_failure_exits_non_zero(requests_mock):
    requests_mock.post(TOKEN_URL, json={"access_token": "T1"})
    requests_mock.get(f"{BASE}/campaigns/cmp1", status_code=404, text="not found")

    result = runner.invoke(app, ["campaigns", "get", "cmp1", *CREDENTIALS])

    assert result.exit_code == 1
    assert "Request failed (status 404)" in result.stderr


def test_report_output_to_file(requests_mock, tmp_path):
    requests_mock.post(TOKEN_URL, json={"access_token": "T1"})
    requests_mock.get(f"{BASE}/reports/rep1/output", text="date,clicks\n")
    target = tmp_path / "rep1.csv"

    result = runner.invoke(app, ["reports", "output", "rep1", "--output", str(target), *CREDENTIALS])

    assert result.exit_code == 0
    assert "Results saved to" in result.stdout
    assert target.read_text(encoding="utf-8") == "date,clicks\n"


def test_report_request_reads_payload_file(requests_mock, tmp_path):
    requests_mock.post(TOKEN_URL, json={"access_token": "T1"})
    matcher = requests_mock.post(f"{BASE}/reports/line-items", json={"data": {"id": "rep9"}})
    payload = tmp_path / "query.json"
    payload.write_text(json.dumps({"id": "li1", "format": "csv"}), encoding="utf-8")

    result = runner.invoke(
        app, ["reports", "request", "line-items", "--payload", str(payload), *CREDENTIALS]
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout)["data"]["id"] == "rep9"
    assert matcher.last_request.json()["data"]["attributes"] == {"id": "li1", "format": "csv"}


def test_report_request_rejects_unknown_type(requests_mock, tmp_path):
    payload = tmp_path / "query.json"
    payload.write_text("{}", encoding="utf-8")

    result = runner.invoke(
        app, ["reports", "request", "keywords", "--payload", str(payload), *CREDENTIALS]
    )

    assert result.exit_code != 0
    assert not requests_mock.called


def test_build_client_requires_credentials():
    with pytest.raises(typer.BadParameter):
        _build_client(None, "secret", "api.criteo.com", 12.0, True)


def test_build_client_applies_options():
    client = _build_client("cid", "secret", "api.preprod.criteo.com", 3.0, False)

    assert client.config.base_url == "https://api.preprod.criteo.com"
    assert client.config.timeout == 3.0
    assert client.config.verify_ssl is False
    client.close()


def test_stats_report_prints_parsed_json(requests_mock, tmp_path):
    requests_mock.post(TOKEN_URL, json={"access_token": "T1"})
    matcher = requests_mock.post(
        "https://api.criteo.com/2021-01/statistics/report", json={"Rows": [{"Clicks": 3}]}
    )
    payload = tmp_path / "query.json"
    payload.write_text(
        json.dumps({"startDate": "2021-01-01", "endDate": "2021-01-31", "format": "json"}),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["stats", "report", "--payload", str(payload), *CREDENTIALS])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"Rows": [{"Clicks": 3}]}
    assert matcher.last_request.json()["startDate"] == "2021-01-01T00:00:00.000Z"


def test_stats_report_rejects_bad_dates(requests_mock, tmp_path):
    payload = tmp_path / "query.json"
    payload.write_text(
        json.dumps({"startDate": "yesterday", "endDate": "2021-01-31"}), encoding="utf-8"
    )

    result = runner.invoke(app, ["stats", "report", "--payload", str(payload), *CREDENTIALS])

    assert result.exit_code != 0
    assert not requests_mock.called
