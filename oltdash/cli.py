"""Typer CLI entrypoint."""

from __future__ import annotations

import asyncio
import json

import typer
from rich.console import Console

from oltdash.api import Client
from oltdash.core.catalog import QueryCatalog
from oltdash.core.config import Settings
from oltdash.core.errors import OltdashError
from oltdash.core.log import setup_logging
from oltdash.core.model import ConnectionContext
from oltdash.core.validation import validate_connection
from oltdash.render.console import result_renderable

app = typer.Typer(help="Terminal dashboard for OLTs behind the stateless SNMP query API")
console = Console()

_EXIT_WORDS = {"quit", "exit", "q"}


def _build_client(api_url: str | None = None) -> Client:
    client = Client(settings=Settings.from_env(api_url=api_url))
    for warning in client.load_warnings:
        typer.echo(f"Warning: {warning}", err=True)
    return client


def _connect(
    host: str,
    port: int,
    community: str,
    model: str,
    username: str,
    password: str,
) -> ConnectionContext:
    return validate_connection(host, port, community, model, username, password)


def _print_catalog(catalog: QueryCatalog, category_id: str | None = None) -> None:
    for category in catalog.categories():
        if category_id and category.id != category_id:
            continue
        typer.echo(f"{category.name} ({category.id})")
        for descriptor in catalog.in_category(category.id):
            needs = [
                flag
                for flag, required in (("onu_id", descriptor.requires_onu_id), ("name", descriptor.requires_name))
                if required
            ]
            suffix = f" [{', '.join(needs)}]" if needs else ""
            typer.echo(f"  {descriptor.id}: {descriptor.display_name}{suffix}")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    try:
        level = Settings.from_env().log_level
    except OltdashError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None
    setup_logging("DEBUG" if verbose else level)


@app.command("queries")
def list_queries(
    category: str | None = typer.Option(None, "--category", help="Only show one category ID"),
) -> None:
    """List catalogued queries grouped by category."""
    try:
        client = _build_client()
        if category and not client.catalog.in_category(category):
            known = ", ".join(c.id for c in client.catalog.categories())
            typer.echo(f"Error: Unknown category '{category}'. Available: {known}", err=True)
            raise typer.Exit(code=1)
        _print_catalog(client.catalog, category)
    except OltdashError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("health")
def health(
    api_url: str | None = typer.Option(None, "--api-url", help="Query API base URL"),
) -> None:
    """Probe the query API liveness endpoint."""
    try:
        client = _build_client(api_url)
        state = client.health()
        typer.echo(f"API {client.settings.api_url}: {state.value}")
    except OltdashError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("query")
def run_query(
    query_id: str = typer.Argument(..., help="Query identifier, see 'oltdash queries'"),
    host: str = typer.Option(..., "--host", help="OLT IP address"),
    port: int = typer.Option(161, "--port", help="OLT SNMP port"),
    community: str = typer.Option("public", "--community", help="SNMP community"),
    model: str = typer.Option("C320", "--model", help="Device model (C300, C320, C600)"),
    username: str = typer.Option(..., "--username", envvar="OLTDASH_USERNAME", prompt=True),
    password: str = typer.Option(..., "--password", envvar="OLTDASH_PASSWORD", prompt=True, hide_input=True),
    board: int = typer.Option(1, "--board", min=1, help="Board (line card) number"),
    pon: int = typer.Option(1, "--pon", min=1, help="PON port number"),
    onu_id: int | None = typer.Option(None, "--onu-id", min=1, help="ONU ID"),
    name: str | None = typer.Option(None, "--name", help="ONU name for create/rename"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result data as JSON"),
    api_url: str | None = typer.Option(None, "--api-url", help="Query API base URL"),
) -> None:
    """Run a single query and render its result."""
    try:
        client = _build_client(api_url)
        connection = _connect(host, port, community, model, username, password)
        descriptor = client.lookup(query_id)
        if descriptor is None:
            typer.echo(f"Warning: '{query_id}' is not in the query catalog; sending it as-is", err=True)

        result = client.query(connection, query_id, board=board, pon=pon, onu_id=onu_id, name=name)
        if as_json:
            typer.echo(json.dumps(result.data, indent=2, ensure_ascii=False, default=str))
            return
        title = descriptor.display_name if descriptor else query_id
        console.print(result_renderable(title, result, client.render(query_id, result.data)))
    except OltdashError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("dashboard")
def dashboard(
    host: str = typer.Option(..., "--host", help="OLT IP address"),
    port: int = typer.Option(161, "--port", help="OLT SNMP port"),
    community: str = typer.Option("public", "--community", help="SNMP community"),
    model: str = typer.Option("C320", "--model", help="Device model (C300, C320, C600)"),
    username: str = typer.Option(..., "--username", envvar="OLTDASH_USERNAME", prompt=True),
    password: str = typer.Option(..., "--password", envvar="OLTDASH_PASSWORD", prompt=True, hide_input=True),
    api_url: str | None = typer.Option(None, "--api-url", help="Query API base URL"),
) -> None:
    """Interactive session: connect once, then run queries until 'quit' or 'disconnect'."""
    try:
        client = _build_client(api_url)
        connection = _connect(host, port, community, model, username, password)
    except OltdashError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None

    session = client.session()
    session.connect(connection)
    typer.echo(f"Connected to {connection.host}:{connection.port} ({connection.model.value})")
    typer.echo(f"API {client.settings.api_url}: {client.health().value}")

    while session.connection is not None:
        choice = typer.prompt("Query (ID, 'list', 'disconnect' or 'quit')").strip()
        if not choice:
            continue
        if choice in _EXIT_WORDS:
            break
        if choice == "disconnect":
            session.disconnect()
            typer.echo("Disconnected")
            break
        if choice == "list":
            _print_catalog(client.catalog)
            continue

        descriptor = client.catalog.requirements_for(choice)
        board = typer.prompt("Board", default=1, type=int)
        pon = typer.prompt("PON", default=1, type=int)
        onu_id = typer.prompt("ONU ID", default=1, type=int) if descriptor.requires_onu_id else None
        name = typer.prompt("Name", default="", show_default=False) if descriptor.requires_name else None

        try:
            outcome = asyncio.run(session.run(choice, board=board, pon=pon, onu_id=onu_id, name=name))
        except OltdashError as exc:
            typer.echo(f"Error: {exc}", err=True)
            continue
        if outcome is None:
            continue
        console.print(result_renderable(outcome.descriptor.display_name, outcome.result, outcome.view))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
