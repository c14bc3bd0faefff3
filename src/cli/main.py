"""CLI de sfind (Typer).

Comandos:
- `sfind find <query> [--json]`: resuelve y muestra la cuenta.
- `sfind config`: edita `config.toml` con el editor por defecto.
- `sfind doctor`: diagnósticos de entorno (ver `cli.doctor`).

Cada fallo se reporta en stderr con un prefijo que indica la etapa y termina
con exit code 1.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import NoReturn

import click
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from adapters.json_exporter import account_to_json, export_account_json
from adapters.salesforce import connect
from cli import doctor
from cli.ui_components import print_account
from core.config import AppSettings, SearchConfig, edit_search_config, load_search_config
from core.domain.models import Account
from core.errors import AuthenticationError, ConfigError, SfindError
from core.logging import setup_logging
from core.services.finder import find_account

_EPILOG = """\
Examples: `sfind find 0012500001Lhk3hAAB` (by id), `sfind find who@example.com`
(by contact email), `sfind find 0012500001Lhk3hAAB --json` (JSON output).

Authentication: set SFDC_CLIENT_ID, SFDC_CLIENT_SECRET, SFDC_USERNAME,
SFDC_PASSWORD, SFDC_SECRET_TOKEN and optionally SFDC_SANDBOX.

Configuration: `sfind config` opens the configuration in the default editor.
`fields` lists additional object fields to report, `search` lists string fields
to match when searching, e.g. fields = ['Account.Foo__c', 'Contact.Birthdate']
and search = ['Account.Name', 'Opportunity.LeadSource'].
"""

app = typer.Typer(
    no_args_is_help=True,
    help=(
        "Quickly find entities in Salesforce, and show the matching account, "
        "assets, opportunities and contacts."
    ),
    epilog=_EPILOG,
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _fail(prefix: str, exc: Exception) -> NoReturn:
    _err_console.print(f"[red]{prefix}:[/red] {escape(str(exc))}")
    raise typer.Exit(code=1)


def _load_settings() -> AppSettings:
    try:
        return AppSettings()
    except ValidationError as exc:
        _fail("cannot retrieve environment info", exc)


async def _find(settings: AppSettings, query: str, search_config: SearchConfig) -> Account:
    async with connect(settings) as client:
        return await find_account(client, query, search_config)


@app.command()
def find(
    query: str = typer.Argument(..., help="Salesforce id, contact email or configured search value."),
    json_output: bool = typer.Option(False, "--json", help="Print the account as JSON."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Also write the JSON to this file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log lookup steps and SOQL queries."),
) -> None:
    """Find the account matching QUERY and show it with its related records."""

    settings = _load_settings()
    setup_logging("DEBUG" if verbose else settings.log_level)

    try:
        settings.credentials()
    except ConfigError as exc:
        _fail("cannot retrieve environment info", exc)

    try:
        search_config = load_search_config(settings.search_config_path)
    except ConfigError as exc:
        _fail("cannot parse config", exc)

    try:
        account = asyncio.run(_find(settings, query, search_config))
    except AuthenticationError as exc:
        _fail("cannot instantiate sf client", exc)
    except SfindError as exc:
        _fail("cannot find sf entities", exc)

    if output is not None:
        try:
            export_account_json(account=account, output_path=output)
        except OSError as exc:
            _fail("cannot serialize account", exc)

    if json_output:
        _console.print_json(account_to_json(account))
    else:
        print_account(_console, account)


def _open_editor(text: str) -> str | None:
    try:
        return click.edit(text, extension=".toml")
    except click.ClickException as exc:
        raise ConfigError(f"cannot open default editor: {exc.format_message()}") from exc


@app.command()
def config() -> None:
    """Edit the search configuration with the default editor."""

    settings = _load_settings()
    setup_logging(settings.log_level)
    path = settings.search_config_path

    try:
        saved = edit_search_config(path, _open_editor)
    except ConfigError as exc:
        _fail("cannot edit config", exc)

    if saved:
        _err_console.print(f"[green]config saved successfully:[/green] {path}")
    else:
        _err_console.print("[yellow]config unchanged[/yellow]")


def run() -> None:
    app()
