"""Device commands: list the account's devices and show a device's state."""

from __future__ import annotations

import click
from requests import Response
from rich.console import Console

from .context import CLIContext

console = Console()


def _print_json(response: Response) -> None:
    """Pretty-print a JSON response body, failing on non-2xx answers."""
    with response:
        if not response.ok:
            raise click.ClickException(
                f"MELCloud answered {response.status_code}: {response.text[:200]}"
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise click.ClickException(
                f"MELCloud returned an undecodable body: {exc}") from exc
    console.print_json(data=payload)


@click.group()
def devices() -> None:
    """Query devices registered on the MELCloud account."""
    pass


@devices.command(name="list")
@click.pass_obj
def list_devices(cli_context: CLIContext) -> None:
    """Print the raw device list as JSON."""
    with cli_context.session() as session:
        _print_json(session.get_device_list())


@devices.command(name="info")
@click.argument("device_id")
@click.argument("building_id")
@click.pass_obj
def device_info(cli_context: CLIContext, device_id: str, building_id: str) -> None:
    """Print the state of DEVICE_ID in BUILDING_ID as JSON."""
    with cli_context.session() as session:
        _print_json(session.get_device_information(device_id, building_id))
