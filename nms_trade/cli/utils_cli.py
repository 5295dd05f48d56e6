# nms_trade/cli/utils_cli.py
import requests
import typer
import json
from typing import Optional, Dict, Any, Union, List

from . import config


def resolve_cli_token(user_token: Optional[str]) -> str:
    """Return the token given on the command line, else NMS_TRADE_USER_TOKEN; exit if neither is set."""
    token = user_token or config.NMS_TRADE_USER_TOKEN
    if not token:
        typer.secho(
            "CLI: Error - No user token. Pass --user-token or set NMS_TRADE_USER_TOKEN.",
            fg=typer.colors.RED
        )
        raise typer.Exit(code=1)
    return token


def make_api_request(
    method: str,
    endpoint: str,
    user_token: str,
    json_payload: Optional[Dict[str, Any]] = None,
    params_payload: Optional[Dict[str, Any]] = None,
    expected_status: Union[int, List[int]] = 200,
) -> Any:
    """
    Call the trade API as the given tenant and print the outcome.

    Exits with code 1 on connection failures, unexpected status codes and
    undecodable responses.
    """
    full_url = f"{config.NMS_TRADE_API_BASE_URL.rstrip('/')}{endpoint}"
    headers = {"Authorization": f"Bearer {user_token}"}

    typer.echo(f"CLI: {method.upper()} {full_url}")
    if params_payload:
        typer.echo(f"CLI: Query Params: {params_payload}")

    try:
        response = requests.request(
            method,
            full_url,
            json=json_payload,
            params=params_payload,
            headers=headers,
            timeout=30
        )
    except requests.exceptions.ConnectionError as e:
        typer.secho(
            f"CLI: Connection Error - Could not connect to API at {full_url}. Is the server running? Error: {e}",
            fg=typer.colors.RED
        )
        raise typer.Exit(code=1)
    except requests.exceptions.RequestException as e:
        typer.secho(f"CLI: Request Error - {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    typer.echo(f"CLI: Response Status: {response.status_code}")
    expected_statuses = [expected_status] if isinstance(expected_status, int) else expected_status

    if response.status_code not in expected_statuses:
        err_msg = f"CLI: API Error - Expected status {expected_status}, got {response.status_code}."
        try:
            err_msg += f" Error: {response.json().get('error', response.text)}"
        except (json.JSONDecodeError, ValueError, AttributeError):
            err_msg += f" Raw response: {response.text}"
        typer.secho(err_msg, fg=typer.colors.RED)
        raise typer.Exit(code=1)

    try:
        data = response.json()
    except (json.JSONDecodeError, ValueError):
        typer.secho(
            f"CLI: Error - Could not decode JSON response. Raw text: {response.text}",
            fg=typer.colors.RED
        )
        raise typer.Exit(code=1)

    typer.echo(typer.style("CLI: Response JSON:", fg=typer.colors.CYAN))
    typer.echo(json.dumps(data, indent=2))
    return data
