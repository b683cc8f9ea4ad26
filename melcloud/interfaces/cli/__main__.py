"""Entry point for running the melcloud CLI.

This module defines the top-level Click group. Executing
``python -m melcloud.interfaces.cli`` (or the ``melcloud`` console script)
invokes it.
"""

import logging

import click
from rich.console import Console

from melcloud.infrastructure.http import MelcloudError
from melcloud.infrastructure.observability import configure_logging

from .context import CLIContext
from .devices import devices

console = Console(stderr=True)


class MelcloudGroup(click.Group):
    """Click group that reports MELCloud failures instead of tracebacks."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except MelcloudError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            ctx.exit(1)


@click.group(
    cls=MelcloudGroup,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=str),
    envvar="MELCLOUD_CONFIG",
    help="Optional JSON file with email, password, timeout and max_reauth_attempts.",
)
@click.option("--email", help="MELCloud account email (or MELCLOUD_EMAIL).")
@click.option(
    "--password",
    help="MELCloud account password (or MELCLOUD_PASSWORD; prompted if omitted).",
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Per-request timeout in seconds.",
)
@click.option(
    "--verbose/--no-verbose",
    default=False,
    show_default=True,
    help="Enable debug logging of MELCloud requests.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    email: str | None,
    password: str | None,
    timeout: float | None,
    verbose: bool,
) -> None:
    """Command-line client for the MELCloud device API."""
    configure_logging(level=logging.DEBUG if verbose else logging.WARNING)
    cli_context = ctx.ensure_object(CLIContext)
    cli_context.config_path = config_path
    cli_context.email = email
    cli_context.password = password
    cli_context.timeout = timeout


@cli.command(name="login")
@click.pass_obj
def login_cmd(cli_context: CLIContext) -> None:
    """Check that the configured credentials are accepted."""
    with cli_context.session() as session:
        click.echo(f"Authenticated as {session.credentials.email}")


cli.add_command(devices)


if __name__ == "__main__":
    cli()
