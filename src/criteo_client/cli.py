"""Command-line interface for the Criteo retail media API."""
from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import typer

try:  # pragma: no cover - exercised in runtime environments
    from rich import box
    from rich.console import Console
    from rich.table import Table
except ImportError as exc:  # pragma: no cover - optional dependency guard
    raise RuntimeError(
        "The CLI requires Rich for table rendering. Install the CLI extras via "
        "'pip install criteo-api-client[cli]' to enable this command."
    ) from exc

from . import CriteoClient
from .cli_schema import CLI_TABLE_VIEWS, TableView
from .config import DEFAULT_HOST, DEFAULT_TIMEOUT, ClientConfig, parse_bool
from .exceptions import CriteoError

app = typer.Typer(help="Criteo retail media CLI.", no_args_is_help=True)

auth_app = typer.Typer(help="Credential checks.")
accounts_app = typer.Typer(help="Account operations.")
catalogs_app = typer.Typer(help="Catalog export operations.")
campaigns_app = typer.Typer(help="Campaign operations.")
line_items_app = typer.Typer(help="Line item operations.")
reports_app = typer.Typer(help="Report operations.")
stats_app = typer.Typer(help="Statistics reports.")
app.add_typer(auth_app, name="auth")
app.add_typer(accounts_app, name="accounts")
app.add_typer(catalogs_app, name="catalogs")
app.add_typer(campaigns_app, name="campaigns")
app.add_typer(line_items_app, name="line-items")
app.add_typer(reports_app, name="reports")
app.add_typer(stats_app, name="stats")


def _build_client(
    client_id: str | None,
    client_secret: str | None,
    host: str,
    timeout: float,
    verify_ssl: bool,
    verbose: bool = False,
) -> CriteoClient:
    if not client_id or not client_secret:
        raise typer.BadParameter("--client-id and --client-secret are required.")
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    config = ClientConfig(host=host, timeout=timeout, verify_ssl=verify_ssl)
    return CriteoClient(client_id, client_secret, config=config)


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2))


console = Console(force_terminal=False, color_system=None)


def _render_rich_table(view: TableView, rows: Sequence[Mapping[str, Any]]) -> None:
    table = Table(title=view.title, box=box.SIMPLE, header_style="bold cyan")
    for column in view.columns:
        table.add_column(column.header, justify=column.justify)
    if view.sort_key:
        rows = sorted(rows, key=view.sort_key)
    for row in rows:
        table.add_row(*(column.render(row) for column in view.columns))
    console.print(table)


def _present_output(payload: Any, *, view_id: str | None, json_output: bool) -> None:
    if json_output or view_id is None:
        _echo_json(payload)
        return
    view = CLI_TABLE_VIEWS.get(view_id)
    data = payload.get("data") if isinstance(payload, Mapping) else None
    if not view or not isinstance(data, list):
        _echo_json(payload)
        return
    rows = [item for item in data if isinstance(item, Mapping)]
    if not rows:
        _echo_json(payload)
        return
    _render_rich_table(view, rows)


def _handle_error(exc: CriteoError) -> None:
    message = f"{exc.__class__.__name__}: {exc}"
    if exc.status_code is not None:
        message = f"Request failed (status {exc.status_code}): {exc}"
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def _load_payload(path: Path) -> dict[str, Any]:
    try:
        payload = json.loads(path.expanduser().read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(f"Unable to read JSON payload from {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise typer.BadParameter("Payload file must contain a JSON object.")
    return payload


def _shared_options() -> dict[str, Any]:  # pragma: no cover - helper indirection
    # Respect CRITEO_VERIFY_SSL when present, accepting 1/0, true/false, yes/no.
    default_verify = parse_bool(os.getenv("CRITEO_VERIFY_SSL"), default=True)

    return {
        "client_id": typer.Option(
            None,
            "--client-id",
            envvar="CRITEO_CLIENT_ID",
            help="API application client id.",
        ),
        "client_secret": typer.Option(
            None,
            "--client-secret",
            envvar="CRITEO_CLIENT_SECRET",
            help="API application client secret.",
            hide_input=True,
        ),
        "host": typer.Option(
            DEFAULT_HOST,
            "--host",
            envvar="CRITEO_HOST",
            help="Criteo API host name.",
            show_default=True,
        ),
        "timeout": typer.Option(
            DEFAULT_TIMEOUT,
            "--timeout",
            envvar="CRITEO_TIMEOUT",
            help="Request timeout (seconds).",
            show_default=True,
        ),
        "verify_ssl": typer.Option(
            default_verify,
            "--verify/--no-verify",
            envvar="CRITEO_VERIFY_SSL",
            help="Enable or disable TLS certificate verification.",
            show_default=True,
        ),
        "verbose": typer.Option(
            False,
            "--verbose",
            "-v",
            help="Log each request to stderr.",
        ),
        "output_json": typer.Option(
            False,
            "--json",
            "-j",
            help="Return raw JSON instead of rendering a table.",
        ),
        "page_index": typer.Option(None, "--page-index", min=0, help="Zero-based page."),
        "page_size": typer.Option(None, "--page-size", min=1, help="Rows per page."),
    }


_SHARED_OPTIONS = _shared_options()


@auth_app.command("check")
def auth_check(
    client_id: str | None = _SHARED_OPTIONS["client_id"],
    client_secret: str | None = _SHARED_OPTIONS["client_secret"],
    host: str = _SHARED_OPTIONS["host"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    verbose: bool = _SHARED_OPTIONS["verbose"],
) -> None:
    """Exchange the credentials for a token without calling any endpoint."""

    with _build_client(client_id, client_secret, host, timeout, verify_ssl, verbose) as client:
        try:
            client.authenticate()
        except CriteoError as exc:
            _handle_error(exc)
            return

    typer.secho(f"Authenticated as {client_id}.", fg=typer.colors.GREEN)


@accounts_app.command("list")
def accounts_list(
    client_id: str | None = _SHARED_OPTIONS["client_id"],
    client_secret: str | None = _SHARED_OPTIONS["client_secret"],
    host: str = _SHARED_OPTIONS["host"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    verbose: bool = _SHARED_OPTIONS["verbose"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List the retail media accounts available to the application."""

    with _build_client(client_id, client_secret, host, timeout, verify_ssl, verbose) as client:
        try:
            payload = client.accounts.list()
        except CriteoError as exc:
            _handle_error(exc)
            return

    _present_output(payload, view_id="accounts.list", json_output=output_json)


@accounts_app.command("catalogs")
def accounts_catalogs(
    account_id: str = typer.Argument(..., help="Retail media account id."),
    client_id: str | None = _SHARED_OPTIONS["client_id"],
    client_secret: str | None = _SHARED_OPTIONS["client_secret"],
    host: str = _SHARED_OPTIONS["host"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    verbose: bool = _SHARED_OPTIONS["verbose"],
) -> None:
    """Request a catalog export for an account."""

    with _build_client(client_id, client_secret, host, timeout, verify_ssl, verbose) as client:
        try:
            payload = client.accounts.catalogs(account_id)
        except CriteoError as exc:
            _handle_error(exc)
            return

    _echo_json(payload)


@catalogs_app.command("output")
def catalogs_output(
    catalog_id: str = typer.Argument(..., help="Catalog export id."),
    client_id: str | None = _SHARED_OPTIONS["client_id"],
    client_secret: str | None = _SHARED_OPTIONS["client_secret"],
    host: str = _SHARED_OPTIONS["host"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    verbose: bool = _SHARED_OPTIONS["verbose"],
) -> None:
    """Print a finished catalog export (newline-delimited JSON)."""

    with _build_client(client_id, client_secret, host, timeout, verify_ssl, verbose) as client:
        try:
            output = client.catalogs.output(catalog_id)
        except CriteoError as exc:
            _handle_error(exc)
            return

    typer.echo("" if output is True else output)


@campaigns_app.command("list")
def campaigns_list(
    account_id: str = typer.Argument(..., help="Retail media account id."),
    page_index: int | None = _SHARED_OPTIONS["page_index"],
    page_size: int | None = _SHARED_OPTIONS["page_size"],
    client_id: str | None = _SHARED_OPTIONS["client_id"],
    client_secret: str | None = _SHARED_OPTIONS["client_secret"],
    host: str = _SHARED_OPTIONS["host"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    verbose: bool = _SHARED_OPTIONS["verbose"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List the campaigns of an account."""

    with _build_client(client_id, client_secret, host, timeout, verify_ssl, verbose) as client:
        try:
            payload = client.campaigns.list(
                account_id, page_index=page_index, page_size=page_size
            )
        except CriteoError as exc:
            _handle_error(exc)
            return

    _present_output(payload, view_id="campaigns.list", json_output=output_json)


@campaigns_app.command("get")
def campaigns_get(
    campaign_id: str = typer.Argument(..., help="Campaign id."),
    client_id: str | None = _SHARED_OPTIONS["client_id"],
    client_secret: str | None = _SHARED_OPTIONS["client_secret"],
    host: str = _SHARED_OPTIONS["host"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    verbose: bool = _SHARED_OPTIONS["verbose"],
) -> None:
    """Show a single campaign."""

    with _build_client(client_id, client_secret, host, timeout, verify_ssl, verbose) as client:
        try:
            payload = client.campaigns.get(campaign_id)
        except CriteoError as exc:
            _handle_error(exc)
            return

    _echo_json(payload)


@line_items_app.command("list")
def line_items_list(
    campaign_id: str = typer.Argument(..., help="Campaign id."),
    page_index: int | None = _SHARED_OPTIONS["page_index"],
    page_size: int | None = _SHARED_OPTIONS["page_size"],
    client_id: str | None = _SHARED_OPTIONS["client_id"],
    client_secret: str | None = _SHARED_OPTIONS["client_secret"],
    host: str = _SHARED_OPTIONS["host"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    verbose: bool = _SHARED_OPTIONS["verbose"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List the line items of a campaign."""

    with _build_client(client_id, client_secret, host, timeout, verify_ssl, verbose) as client:
        try:
            payload = client.line_items.list(
                campaign_id, page_index=page_index, page_size=page_size
            )
        except CriteoError as exc:
            _handle_error(exc)
            return

    _present_output(payload, view_id="line-items.list", json_output=output_json)


@line_items_app.command("get")
def line_items_get(
    line_item_id: str = typer.Argument(..., help="Line item id."),
    client_id: str | None = _SHARED_OPTIONS["client_id"],
    client_secret: str | None = _SHARED_OPTIONS["client_secret"],
    host: str = _SHARED_OPTIONS["host"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    verbose: bool = _SHARED_OPTIONS["verbose"],
) -> None:
    """Show a single line item."""

    with _build_client(client_id, client_secret, host, timeout, verify_ssl, verbose) as client:
        try:
            payload = client.line_items.get(line_item_id)
        except CriteoError as exc:
            _handle_error(exc)
            return

    _echo_json(payload)


@reports_app.command("request")
def reports_request(
    report_type: str = typer.Argument(..., help="campaigns or line-items."),
    payload_file: Path = typer.Option(
        ..., "--payload", help="Path to a JSON file with the report attributes."
    ),
    client_id: str | None = _SHARED_OPTIONS["client_id"],
    client_secret: str | None = _SHARED_OPTIONS["client_secret"],
    host: str = _SHARED_OPTIONS["host"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    verbose: bool = _SHARED_OPTIONS["verbose"],
) -> None:
    """Ask the API to generate a report."""

    query = _load_payload(payload_file)
    with _build_client(client_id, client_secret, host, timeout, verify_ssl, verbose) as client:
        try:
            payload = client.reports.request(report_type, query)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
        except CriteoError as exc:
            _handle_error(exc)
            return

    _echo_json(payload)


@reports_app.command("status")
def reports_status(
    report_id: str = typer.Argument(..., help="Report id."),
    client_id: str | None = _SHARED_OPTIONS["client_id"],
    client_secret: str | None = _SHARED_OPTIONS["client_secret"],
    host: str = _SHARED_OPTIONS["host"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    verbose: bool = _SHARED_OPTIONS["verbose"],
) -> None:
    """Show the generation status of a report."""

    with _build_client(client_id, client_secret, host, timeout, verify_ssl, verbose) as client:
        try:
            payload = client.reports.status(report_id)
        except CriteoError as exc:
            _handle_error(exc)
            return

    _echo_json(payload)


@reports_app.command("output")
def reports_output(
    report_id: str = typer.Argument(..., help="Report id."),
    output_path: Path | None = typer.Option(
        None, "--output", "-o", help="Write the report to this file instead of stdout."
    ),
    client_id: str | None = _SHARED_OPTIONS["client_id"],
    client_secret: str | None = _SHARED_OPTIONS["client_secret"],
    host: str = _SHARED_OPTIONS["host"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    verbose: bool = _SHARED_OPTIONS["verbose"],
) -> None:
    """Download a finished report."""

    target = output_path.expanduser() if output_path else None
    with _build_client(client_id, client_secret, host, timeout, verify_ssl, verbose) as client:
        try:
            output = client.reports.output(report_id, target)
        except CriteoError as exc:
            _handle_error(exc)
            return

    if target is not None:
        typer.secho(str(output), fg=typer.colors.GREEN)
    else:
        typer.echo("" if output is True else output)


@stats_app.command("report")
def stats_report(
    payload_file: Path = typer.Option(
        ..., "--payload", help="Path to a JSON file with the report query."
    ),
    output_path: Path | None = typer.Option(
        None, "--output", "-o", help="Write the report to this file instead of stdout."
    ),
    client_id: str | None = _SHARED_OPTIONS["client_id"],
    client_secret: str | None = _SHARED_OPTIONS["client_secret"],
    host: str = _SHARED_OPTIONS["host"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    verbose: bool = _SHARED_OPTIONS["verbose"],
) -> None:
    """Run an ad set statistics report."""

    query = _load_payload(payload_file)
    target = output_path.expanduser() if output_path else None
    with _build_client(client_id, client_secret, host, timeout, verify_ssl, verbose) as client:
        try:
            output = client.statistics.report(query, target)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
        except CriteoError as exc:
            _handle_error(exc)
            return

    if target is not None:
        typer.secho(str(output), fg=typer.colors.GREEN)
    elif isinstance(output, str):
        typer.echo(output)
    else:
        _echo_json(output)


def main() -> None:  # pragma: no cover - console script entry point
    app()
