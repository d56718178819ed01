"""Compiled, read-only configuration model."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal

OutputMode = Literal["chunks", "single"]

DEFAULT_TIMEOUT = "30s"


def _empty_mapping() -> Mapping:
    return MappingProxyType({})


@dataclass(frozen=True)
class Settings:
    """Bot-wide settings and command defaults."""

    token: str = ""
    description: str = ""
    timeout: float = 30.0
    max_symbols_per_message: int = 0
    max_messages: int = 0
    arguments_trim_cut_set: str = ""
    channels: frozenset[str] = frozenset()
    users: frozenset[str] = frozenset()
    admins: frozenset[str] = frozenset()
    strict_references: bool = False
    report_truncation: bool = False
    output_mode: OutputMode = "chunks"


@dataclass(frozen=True)
class PasswordAuth:
    username: str
    password: str = field(default="", repr=False)

    type: Literal["password"] = "password"


@dataclass(frozen=True)
class PublicKeyAuth:
    username: str
    private_key_path: str
    passphrase: str = field(default="", repr=False)

    type: Literal["publickey"] = "publickey"


Auth = PasswordAuth | PublicKeyAuth


@dataclass(frozen=True)
class Host:
    id: str
    address: str
    port: int
    auth: Auth


@dataclass(frozen=True)
class Item:
    """One user-selectable value of an argument."""

    name: str
    value: str


@dataclass(frozen=True)
class Argument:
    id: str
    help: str
    items: tuple[Item, ...]

    def match(self, token: str) -> Item | None:
        for item in self.items:
            if item.name == token:
                return item
        return None


@dataclass(frozen=True)
class Command:
    """A command template with its arguments and output limits."""

    id: str
    help: str
    template: str
    arguments: tuple[Argument, ...] = ()
    timeout: float = 30.0
    max_symbols_per_message: int = 0
    max_messages: int = 0


@dataclass(frozen=True)
class Group:
    """A named set of commands exposed on a set of hosts.

    ``hosts`` maps every declared host id to the shared :class:`Host`, or to
    ``None`` when the reference could not be resolved at compile time.
    """

    id: str
    help: str
    hosts: Mapping[str, Host | None] = field(default_factory=_empty_mapping)
    commands: Mapping[str, Command] = field(default_factory=_empty_mapping)


@dataclass(frozen=True)
class Config:
    settings: Settings
    hosts: Mapping[str, Host]
    groups: Mapping[str, Group]
    help: str
