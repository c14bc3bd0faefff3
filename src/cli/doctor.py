"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from adapters.salesforce import connect
from core.config import AppSettings, load_search_config, write_user_env_vars
from core.errors import SfindError

app = typer.Typer(help="Environment diagnostics and credential setup.")

_console = Console()


async def _check_login(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with connect(settings) as client:
            await client.query("SELECT Id FROM Account LIMIT 1")
        return True, "Login and query OK"
    except SfindError as exc:
        return False, str(exc)


@app.callback(invoke_without_command=True)
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    if ctx.invoked_subcommand is not None:
        return

    try:
        settings = AppSettings()
    except ValidationError as exc:
        _console.print(f"[red]Invalid SFDC_* settings:[/red] {exc}")
        raise typer.Exit(code=1)

    table = Table(title="sfind Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Credenciales
    try:
        settings.credentials()
        ok_env, detail_env = True, f"Login URL {settings.resolved_login_url}"
    except SfindError as exc:
        ok_env, detail_env = False, str(exc)
    table.add_row("Credentials", "OK" if ok_env else "FAIL", detail_env)

    # Config de búsqueda
    path = settings.search_config_path
    try:
        search_config = load_search_config(path)
        detail_conf = (
            f"{path} ({len(search_config.additional_fields)} fields, "
            f"{len(search_config.search_fields)} search)"
        )
        table.add_row("Search config", "OK", detail_conf)
    except SfindError as exc:
        table.add_row("Search config", "FAIL", f"{path}: {exc}")

    # Conectividad (solo si hay credenciales)
    if ok_env:
        ok_login, detail_login = asyncio.run(_check_login(settings))
        table.add_row("Salesforce", "OK" if ok_login else "FAIL", detail_login)
    else:
        table.add_row("Salesforce", "SKIPPED", "Missing credentials")

    _console.print(table)

    if not ok_env:
        _console.print(
            "\n[yellow]Note:[/yellow] run `sfind doctor setup` to store credentials in the user config .env."
        )


@app.command()
def setup() -> None:
    """Interactive credential setup (stores config in the user config .env).

    Designed for non-Python users: no manual .env editing.
    """

    client_id = typer.prompt("Connected app client id").strip()
    client_secret = typer.prompt("Connected app client secret", hide_input=True).strip()
    username = typer.prompt("Username").strip()
    password = typer.prompt("Password", hide_input=True).strip()
    secret_token = typer.prompt("Security token", hide_input=True, default="", show_default=False).strip()
    sandbox = typer.confirm("Is this a sandbox org?", default=False)

    if not client_id or not username:
        raise typer.BadParameter("client id and username are required")

    env_path = write_user_env_vars(
        {
            "SFDC_CLIENT_ID": client_id,
            "SFDC_CLIENT_SECRET": client_secret,
            "SFDC_USERNAME": username,
            "SFDC_PASSWORD": password,
            "SFDC_SECRET_TOKEN": secret_token,
            "SFDC_SANDBOX": "true" if sandbox else "false",
        }
    )

    _console.print(f"[green]Saved credentials to:[/green] {env_path}")
