"""Shared core dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from hostbot.config.model import Command, Host

HelpScope = Literal["root", "group", "command", "argument"]


@dataclass(frozen=True)
class Invocation:
    """A fully resolved action, ready for remote execution."""

    raw_command: str
    command: Command
    host: Host


@dataclass(frozen=True)
class HelpReply:
    """Help or error text returned when resolution stops early."""

    text: str
    scope: HelpScope


Resolution = Invocation | HelpReply
