"""
CLI: info, info url, wait.
Registry settings come from EUREKA_SERVER_* env vars, global options on top,
and are passed down explicitly.
"""

import asyncio
from typing import Any, Coroutine, Optional, TypeVar

import typer

from eureka_cli.cli.templates import render_instances
from eureka_cli.core.config import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_REQUEST_TIMEOUT, RegistryConfig
from eureka_cli.core.log import configure_logging
from eureka_cli.discovery.errors import RegistryError
from eureka_cli.discovery.eureka import EurekaClient
from eureka_cli.discovery.protocol import InstanceRecord, RegistrySession
from eureka_cli.discovery.resolver import QueryFilter, Resolver
from eureka_cli.discovery.waiter import Found, TimedOut, WaitOutcome, Waiter

T = TypeVar("T")

REGISTRY_ERROR_CODE = 1
TIMEOUT_ERROR_CODE = 2
INSTANCE_NOT_FOUND_CODE = 3
ID_EMPTY_ERROR_CODE = 4
APP_NAME_EMPTY_ERROR_CODE = 5

DEFAULT_WAIT_TIME = 30

app = typer.Typer(
    name="eureka",
    help="A command-line interface to perform with netflix eureka.",
    add_completion=False,
    no_args_is_help=True,
)
info_app = typer.Typer(help="Query info about instances.")
app.add_typer(info_app, name="info")


def make_client(config: RegistryConfig) -> RegistrySession:
    """Registry client for one command; used as an async context manager."""
    return EurekaClient(config)


def _run(coro: Coroutine[Any, Any, T]) -> T:
    try:
        return asyncio.run(coro)
    except RegistryError as e:
        typer.echo(f"Registry request failed: {e}", err=True)
        raise typer.Exit(REGISTRY_ERROR_CODE)


def _require_ids(ctx: typer.Context, app_name: str, instance_id: str) -> None:
    if not app_name:
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(APP_NAME_EMPTY_ERROR_CODE)
    if not instance_id:
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(ID_EMPTY_ERROR_CODE)


@app.callback()
def main_callback(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(
        None,
        "--host",
        "-u",
        help=f"IP host address of eureka server [env: EUREKA_SERVER_HOST; default: {DEFAULT_HOST}]",
    ),
    port: Optional[int] = typer.Option(
        None,
        "--port",
        "-p",
        help=f"Port of eureka server [env: EUREKA_SERVER_PORT; default: {DEFAULT_PORT}]",
    ),
    request_timeout: Optional[float] = typer.Option(
        None,
        "--request-timeout",
        help=(
            "Seconds to wait for a single registry response "
            f"[env: EUREKA_SERVER_REQUEST_TIMEOUT; default: {DEFAULT_REQUEST_TIMEOUT}]"
        ),
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr"),
) -> None:
    configure_logging("DEBUG" if verbose else "WARNING")
    try:
        ctx.obj = RegistryConfig.from_env(host=host, port=port, request_timeout=request_timeout)
    except ValueError as e:
        raise typer.BadParameter(str(e))


async def _resolve(config: RegistryConfig, query: QueryFilter) -> list[InstanceRecord]:
    async with make_client(config) as client:
        return await Resolver(client).resolve(query)


async def _wait(config: RegistryConfig, app_name: str, instance_id: str, timeout: int) -> WaitOutcome:
    async with make_client(config) as client:
        return await Waiter(Resolver(client)).wait(app_name, instance_id, timeout)


@info_app.callback(invoke_without_command=True)
def info(
    ctx: typer.Context,
    app_name: str = typer.Option(
        "",
        "--app-name",
        "-a",
        envvar="INFO_SPRING_APPLICATION_NAME",
        help="Application name registered in Eureka server",
    ),
    instance_id: str = typer.Option(
        "",
        "--id",
        "-i",
        envvar="INFO_EUREKA_INSTANCE_INSTANCE_ID",
        help="Instance ID registered in Eureka server",
    ),
) -> None:
    """Query info about instances. Sample: eureka info -a $APP_NAME -i $INSTANCE_ID"""
    if ctx.invoked_subcommand is not None:
        return
    instances = _run(_resolve(ctx.obj, QueryFilter(app_name, instance_id)))
    typer.echo(render_instances(instances), nl=False)


@info_app.command("url")
def url(
    ctx: typer.Context,
    app_name: str = typer.Argument("", metavar="APP_NAME"),
    instance_id: str = typer.Argument("", metavar="INSTANCE_ID"),
) -> None:
    """Get url of concrete instance."""
    _require_ids(ctx, app_name, instance_id)
    instances = _run(_resolve(ctx.obj, QueryFilter(app_name, instance_id)))
    if not instances:
        typer.echo(f'Instance with App name: "{app_name}", and Id: "{instance_id}" not found', err=True)
        raise typer.Exit(INSTANCE_NOT_FOUND_CODE)
    typer.echo(instances[0].url)


@app.command("wait")
def wait(
    ctx: typer.Context,
    app_name: str = typer.Argument("", metavar="APP_NAME"),
    instance_id: str = typer.Argument("", metavar="INSTANCE_ID"),
    wait_time: int = typer.Option(
        DEFAULT_WAIT_TIME,
        "--time",
        "-t",
        min=0,
        envvar="EUREKA_WAIT_TIME",
        help="Time in seconds to wait for",
    ),
) -> None:
    """Wait for UP instance status."""
    _require_ids(ctx, app_name, instance_id)
    if wait_time > 0:
        typer.echo(f'Wait for instanceID: "{instance_id}" app name: "{app_name}"...')

    outcome = _run(_wait(ctx.obj, app_name, instance_id, wait_time))

    if isinstance(outcome, Found):
        if outcome.elapsed is not None:
            typer.echo(f"It took: {outcome.elapsed:.3f}s")
        typer.echo(render_instances([outcome.instance]), nl=False)
        return
    if isinstance(outcome, TimedOut):
        typer.echo("Wait timeout exit", err=True)
    else:
        typer.echo("Not found", err=True)
    raise typer.Exit(TIMEOUT_ERROR_CODE)


def main() -> None:
    """Entry point for the eureka console command."""
    app()


if __name__ == "__main__":
    main()
