"""Load the declarative TOML source and compile it into a :class:`Config`."""

from __future__ import annotations

import re
import tomllib
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Final

from loguru import logger
from pydantic import ValidationError

from hostbot.core.formatter import check_template
from hostbot.errors import CommandFormatError, ConfigError

from .help import render_argument_help, render_command_help, render_group_help, render_root_help
from .model import (
    DEFAULT_TIMEOUT,
    Argument,
    Auth,
    Command,
    Config,
    Group,
    Host,
    Item,
    PasswordAuth,
    PublicKeyAuth,
    Settings,
)
from .schema import RawArgument, RawCommand, RawConfig, RawGroup, RawHost, RawPasswordAuth, RawSettings

_DURATION_TERM: Final = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_DURATION_UNITS: Final[dict[str, float]] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def parse_duration(text: str) -> float:
    """Parse a duration such as ``"30s"``, ``"2m"`` or ``"1h30m"`` into seconds."""

    raw = text.strip()
    sign = 1.0
    if raw and raw[0] in "+-":
        sign = -1.0 if raw[0] == "-" else 1.0
        raw = raw[1:]
    if raw == "0":
        return 0.0
    if not raw:
        raise ConfigError(f"invalid duration {text!r}")

    total = 0.0
    pos = 0
    while pos < len(raw):
        match = _DURATION_TERM.match(raw, pos)
        if match is None:
            raise ConfigError(f"invalid duration {text!r}")
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    return sign * total


def parse_file(config_path: str | Path) -> Config:
    """Read and compile the config file at ``config_path``."""

    path = Path(config_path).expanduser()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read config {str(path)!r}: {exc}") from exc
    return parse(text)


def parse(text: str) -> Config:
    """Compile config from TOML text."""

    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"malformed config: {exc}") from exc
    return compile_config(data)


def compile_config(data: Mapping[str, Any]) -> Config:
    """Validate an already decoded source and compile it."""

    try:
        raw = RawConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc

    settings = _compile_settings(raw.settings)
    hosts = _compile_hosts(raw.hosts)
    _ensure_unique("group", (group.id for group in raw.groups))
    groups = {group.id: _compile_group(group, settings, hosts) for group in raw.groups}

    logger.info("config.compiled hosts={} groups={}", len(hosts), len(groups))
    return Config(
        settings=settings,
        hosts=MappingProxyType(hosts),
        groups=MappingProxyType(groups),
        help=render_root_help(raw.settings, raw.groups),
    )


def _ensure_unique(kind: str, ids: Iterable[str]) -> None:
    seen: set[str] = set()
    for item_id in ids:
        if item_id in seen:
            raise ConfigError(f"duplicate {kind} id {item_id!r}")
        seen.add(item_id)


def _compile_settings(raw: RawSettings) -> Settings:
    return Settings(
        token=raw.token,
        description=raw.description,
        timeout=parse_duration(raw.timeout or DEFAULT_TIMEOUT),
        max_symbols_per_message=raw.max_symbols_per_message,
        max_messages=raw.max_messages,
        arguments_trim_cut_set=raw.arguments_trim_cut_set,
        channels=frozenset(raw.channels),
        users=frozenset(raw.users),
        admins=frozenset(raw.admins),
        strict_references=raw.strict_references,
        report_truncation=raw.report_truncation,
        output_mode=raw.output_mode,
    )


def _compile_auth(raw: RawHost) -> Auth:
    auth = raw.auth
    if isinstance(auth, RawPasswordAuth):
        return PasswordAuth(username=auth.username, password=auth.password)
    return PublicKeyAuth(
        username=auth.username,
        private_key_path=auth.private_key_path,
        passphrase=auth.passphrase,
    )


def _compile_hosts(raw_hosts: list[RawHost]) -> dict[str, Host]:
    _ensure_unique("host", (host.id for host in raw_hosts))
    return {
        host.id: Host(id=host.id, address=host.address, port=host.port, auth=_compile_auth(host))
        for host in raw_hosts
    }


def _compile_argument(raw: RawArgument) -> Argument:
    _ensure_unique(f"item in argument {raw.id!r}", (item.name for item in raw.items))
    return Argument(
        id=raw.id,
        help=render_argument_help(raw),
        items=tuple(Item(name=item.name, value=item.value) for item in raw.items),
    )


def _compile_group(raw: RawGroup, settings: Settings, hosts: Mapping[str, Host]) -> Group:
    _ensure_unique(f"host reference in group {raw.id!r}", raw.hosts)
    _ensure_unique(f"command in group {raw.id!r}", (command.id for command in raw.commands))
    _ensure_unique(f"argument in group {raw.id!r}", (argument.id for argument in raw.arguments))

    group_hosts: dict[str, Host | None] = {}
    for host_id in raw.hosts:
        host = hosts.get(host_id)
        if host is None:
            if settings.strict_references:
                raise ConfigError(f"group {raw.id!r} references unknown host {host_id!r}")
            logger.warning("config.unresolved_host group={} host={}", raw.id, host_id)
        group_hosts[host_id] = host

    arguments = {argument.id: _compile_argument(argument) for argument in raw.arguments}
    commands = {command.id: _compile_command(raw.id, command, arguments, settings) for command in raw.commands}
    return Group(
        id=raw.id,
        help=render_group_help(raw),
        hosts=MappingProxyType(group_hosts),
        commands=MappingProxyType(commands),
    )


def _compile_command(
    group_id: str,
    raw: RawCommand,
    arguments: Mapping[str, Argument],
    settings: Settings,
) -> Command:
    bound: list[Argument] = []
    for argument_id in raw.arguments:
        argument = arguments.get(argument_id)
        if argument is None:
            raise ConfigError(f"command {group_id}/{raw.id} references unknown argument {argument_id!r}")
        if not argument.items:
            raise ConfigError(f"argument {argument_id!r} of command {group_id}/{raw.id} has no items")
        bound.append(argument)

    try:
        check_template(raw.format, len(bound))
    except CommandFormatError as exc:
        raise ConfigError(f"command {group_id}/{raw.id}: {exc}") from exc

    return Command(
        id=raw.id,
        help=render_command_help(group_id, raw, [argument.help for argument in bound]),
        template=raw.format,
        arguments=tuple(bound),
        timeout=parse_duration(raw.timeout) if raw.timeout else settings.timeout,
        max_symbols_per_message=raw.max_symbols_per_message or settings.max_symbols_per_message,
        max_messages=raw.max_messages or settings.max_messages,
    )
