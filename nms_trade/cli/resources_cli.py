# nms_trade/cli/resources_cli.py
import typer
from typing import Optional
from typing_extensions import Annotated

from .utils_cli import make_api_request, resolve_cli_token

UserTokenOption = Annotated[
    Optional[str],
    typer.Option("--user-token", help="Tenant token. Defaults to NMS_TRADE_USER_TOKEN.")
]


def _build_list_app(resource: str, help_text: str) -> typer.Typer:
    resource_app = typer.Typer(name=resource, help=help_text, no_args_is_help=True)

    @resource_app.command("list")
    def list_resources(user_token: UserTokenOption = None):
        """List every entry of the tenant."""
        make_api_request("GET", f"/{resource}", user_token=resolve_cli_token(user_token))

    return resource_app


items_app = _build_list_app("items", "Inspect items via the API.")
stations_app = _build_list_app("stations", "Inspect stations via the API.")
demands_app = _build_list_app("demands", "Inspect demand levels via the API.")
