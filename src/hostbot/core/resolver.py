"""Action text resolution.

An action is whitespace separated::

    <group> [<host>] <command> [<argument> ...] [help]

Resolution walks a small state machine, one decision method per state. Every
method either advances the cursor to the next state or stops with a
:class:`HelpReply` carrying the precompiled help text of the scope it stopped
in.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from loguru import logger

from hostbot.config.model import Command, Config, Group, Host

from .formatter import format_command
from .types import HelpReply, Invocation, Resolution

HELP_TOKEN = "help"


class ResolveState(Enum):
    EXPECT_GROUP = "expect_group"
    EXPECT_HOST_OR_COMMAND = "expect_host_or_command"
    EXPECT_COMMAND = "expect_command"
    EXPECT_ARGUMENTS = "expect_arguments"


@dataclass
class ResolveCursor:
    """Mutable state of one resolution run."""

    tokens: tuple[str, ...]
    group: Group | None = None
    host: Host | None = None
    command: Command | None = None
    command_index: int = 1

    def token(self, index: int) -> str | None:
        if index < len(self.tokens):
            return self.tokens[index]
        return None


Step = ResolveState | Resolution


class ActionResolver:
    """Resolve action text against a compiled config."""

    def __init__(self, config: Config) -> None:
        self._config = config
        self._handlers = {
            ResolveState.EXPECT_GROUP: self.expect_group,
            ResolveState.EXPECT_HOST_OR_COMMAND: self.expect_host_or_command,
            ResolveState.EXPECT_COMMAND: self.expect_command,
            ResolveState.EXPECT_ARGUMENTS: self.expect_arguments,
        }

    @property
    def config(self) -> Config:
        return self._config

    def resolve(self, action: str) -> Resolution:
        logger.debug("resolver.resolve action={!r}", action)
        cursor = ResolveCursor(tokens=tuple(action.split()))
        step: Step = ResolveState.EXPECT_GROUP
        while isinstance(step, ResolveState):
            step = self._handlers[step](cursor)
        if isinstance(step, HelpReply):
            logger.debug("resolver.stopped scope={}", step.scope)
        return step

    def expect_group(self, cursor: ResolveCursor) -> Step:
        tokens = cursor.tokens
        if not tokens or tokens == (HELP_TOKEN,):
            return self._root_help()

        group = self._config.groups.get(tokens[0])
        if group is None:
            return self._root_help(f"group *{tokens[0]}* not found")
        if len(tokens) < 2:
            return HelpReply(group.help, "group")
        cursor.group = group
        return ResolveState.EXPECT_HOST_OR_COMMAND

    def expect_host_or_command(self, cursor: ResolveCursor) -> Step:
        group = _required(cursor.group)
        tokens = cursor.tokens
        host_or_command = tokens[1]

        # "<group> <command> help" answers before any host is looked at.
        if len(tokens) == 3 and tokens[2] == HELP_TOKEN:
            command = group.commands.get(host_or_command)
            if command is not None:
                return HelpReply(command.help, "command")

        if not group.hosts:
            return HelpReply(f"hosts for group *{group.id}* not found\n{group.help}", "group")
        if len(group.hosts) == 1:
            host = next(iter(group.hosts.values()))
        else:
            if host_or_command not in group.hosts:
                return HelpReply(f"host *{host_or_command}* not found,\n{group.help}", "group")
            host = group.hosts[host_or_command]
        if host is None:
            return self._root_help(f"host or command *{host_or_command}* not found")
        cursor.host = host

        if host.id == host_or_command:
            if len(tokens) < 3:
                return HelpReply(f"command *{host_or_command}* not found\n{group.help}", "group")
            cursor.command_index = 2
        else:
            cursor.command_index = 1
        return ResolveState.EXPECT_COMMAND

    def expect_command(self, cursor: ResolveCursor) -> Step:
        group = _required(cursor.group)
        command_id = cursor.tokens[cursor.command_index]
        command = group.commands.get(command_id)
        if command is None:
            return HelpReply(f"command *{command_id}* not found\n{group.help}", "group")
        if cursor.token(cursor.command_index + 1) == HELP_TOKEN:
            return HelpReply(command.help, "command")
        cursor.command = command
        return ResolveState.EXPECT_ARGUMENTS

    def expect_arguments(self, cursor: ResolveCursor) -> Step:
        command = _required(cursor.command)
        cut_set = self._config.settings.arguments_trim_cut_set
        values: list[str] = []
        for position, argument in enumerate(command.arguments, start=1):
            token = cursor.token(cursor.command_index + position)
            if token is None:
                return HelpReply(f"*{position}* argument not found\n{command.help}", "argument")
            item = argument.match(token.strip(cut_set) if cut_set else token)
            if item is None:
                return HelpReply(f"argument value *{token}* not found\n{command.help}", "argument")
            values.append(item.value)

        raw_command = format_command(command.template, values)
        host = _required(cursor.host)
        logger.info("resolver.resolved command={} host={}", command.id, host.id)
        return Invocation(raw_command=raw_command, command=command, host=host)

    def _root_help(self, prefix: str | None = None) -> HelpReply:
        if prefix is None:
            return HelpReply(self._config.help, "root")
        return HelpReply(f"{prefix}\n{self._config.help}", "root")


T = TypeVar("T")


def _required(value: T | None) -> T:
    if value is None:
        raise RuntimeError("resolver state visited out of order")
    return value


def resolve_action(action: str, config: Config) -> Resolution:
    """Resolve one action against ``config``."""

    return ActionResolver(config).resolve(action)
