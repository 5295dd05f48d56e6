# nms_trade/cli/main_cli.py
import json
import typer
from pathlib import Path
from typing import Optional
from typing_extensions import Annotated

from . import db_cli, resources_cli
from .utils_cli import make_api_request, resolve_cli_token

app = typer.Typer(
    name="nms-trade",
    help="NMS Trade Command Line Interface.",
    no_args_is_help=True
)

app.add_typer(db_cli.app, name="db")
app.add_typer(resources_cli.items_app, name="items")
app.add_typer(resources_cli.stations_app, name="stations")
app.add_typer(resources_cli.demands_app, name="demands")


@app.callback()
def main_callback():
    """
    NMS Trade main CLI application.
    Use 'nms-trade db --help' for local database commands.
    """
    pass


@app.command("migrate")
def migrate(
    export_file: Annotated[
        Path,
        typer.Argument(help="JSON export with 'items' and 'stations' arrays.", exists=True, dir_okay=False)
    ],
    user_token: Annotated[
        Optional[str],
        typer.Option("--user-token", help="Tenant token. Defaults to the file's userToken, then NMS_TRADE_USER_TOKEN.")
    ] = None
):
    """Upload a whole dataset through the /migrate endpoint (not atomic)."""
    try:
        payload = json.loads(export_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        typer.secho(f"Error: {export_file} is not valid JSON: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    if not isinstance(payload, dict):
        typer.secho("Error: The export must be a JSON object.", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    token = resolve_cli_token(user_token or payload.get("userToken"))
    payload["userToken"] = token
    make_api_request("POST", "/migrate", user_token=token, json_payload=payload)


def cli_entry_point():
    """Entry point function for console script registration in pyproject.toml"""
    app()


if __name__ == "__main__":
    cli_entry_point()
