"""hostbot command line."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from loguru import logger

from hostbot.channels.telegram import TelegramChannel, TelegramConfig
from hostbot.config import Config, parse_file
from hostbot.core import HelpReply, resolve_action
from hostbot.dispatcher import Dispatcher
from hostbot.errors import ConfigError, ExecutionError
from hostbot.logging_utils import configure_logging
from hostbot.remote import SSHExecutor
from hostbot.settings import AppSettings, load_settings

app = typer.Typer(name="hostbot", help="Run whitelisted remote commands from chat.", add_completion=False)


def _load(config_path: Path | None) -> tuple[AppSettings, Config]:
    settings = load_settings(config=config_path)
    configure_logging(profile=settings.log_profile, level=settings.log_level)
    if settings.config is None:
        typer.echo("error: no config given, use --config or HOSTBOT_CONFIG", err=True)
        raise typer.Exit(1)
    try:
        config = parse_file(settings.config)
    except ConfigError as exc:
        typer.echo(f"error parsing '{settings.config}': {exc}", err=True)
        raise typer.Exit(1) from exc
    return settings, config


@app.command()
def run(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config path"),  # noqa: B008
) -> None:
    """Start the Telegram bot."""

    settings, config = _load(config_path)
    token = settings.telegram_token or config.settings.token
    channel = TelegramChannel(Dispatcher(config, SSHExecutor()), TelegramConfig(token=token))
    try:
        asyncio.run(_serve(channel))
    except KeyboardInterrupt:
        logger.info("hostbot.interrupted")


async def _serve(channel: TelegramChannel) -> None:
    try:
        await channel.start()
    finally:
        await channel.stop()


@app.command()
def check(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config path"),  # noqa: B008
) -> None:
    """Compile the config and print the root help."""

    _, config = _load(config_path)
    typer.echo(config.help)


@app.command()
def resolve(
    action: str = typer.Argument("", help="Action text, e.g. 'group host command arg'"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config path"),  # noqa: B008
) -> None:
    """Resolve an action without running it."""

    _, config = _load(config_path)
    resolution = resolve_action(action, config)
    if isinstance(resolution, HelpReply):
        typer.echo(resolution.text)
        raise typer.Exit(1)
    host = resolution.host
    typer.echo(f"host: {host.id} ({host.address}:{host.port})")
    typer.echo(f"command: {resolution.raw_command}")


@app.command("exec")
def exec_action(
    action: str = typer.Argument(..., help="Action text"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config path"),  # noqa: B008
) -> None:
    """Resolve an action, run it and print the chat messages it would produce."""

    _, config = _load(config_path)
    resolution = resolve_action(action, config)
    if isinstance(resolution, HelpReply):
        typer.echo(resolution.text)
        raise typer.Exit(1)

    executor = SSHExecutor()
    dispatcher = Dispatcher(config, executor)
    try:
        output = executor.run(resolution)
    except ExecutionError as exc:
        typer.echo(f"error execution action: {exc}", err=True)
        raise typer.Exit(1) from exc
    for message in dispatcher.render(resolution, output):
        typer.echo(message)
