# nms_trade/cli/db_cli.py
import asyncio
import typer
from typing import Optional
from typing_extensions import Annotated

from ..errors import StorageFailureError
from ..settings import settings
from ..storage.schema import init_schema, get_schema_version
from ..storage.sqlite_base import SQLiteDatabase

app = typer.Typer(
    name="db",
    help="Manage the local SQLite database.",
    no_args_is_help=True
)


async def _initialize(db_path: str) -> Optional[str]:
    db = SQLiteDatabase(db_path, timeout=settings.sqlite_timeout_seconds)
    try:
        await init_schema(db)
        return await get_schema_version(db)
    finally:
        await db.close()


@app.command("init")
def init_database(
    db_path: Annotated[
        Optional[str],
        typer.Option("--db-path", help="SQLite file to initialize. Defaults to SQLITE_DB_PATH.")
    ] = None
):
    """Create the Items, Stations and Demands tables if they do not exist yet."""
    target = db_path or settings.sqlite_db_path
    try:
        version = asyncio.run(_initialize(target))
    except StorageFailureError as e:
        typer.secho(f"CLI: Error - Could not initialize {target}: {e.error}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.secho(f"CLI: Schema ready at {target} (version {version}).", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
