"""Help text rendering for every scope of the config.

All renderers are pure functions of the declared fields and keep the
declaration order, so compiling the same source twice yields identical text.
Markup follows chat markdown: ``_italic_``, ``*bold*`` and code spans.
"""

from __future__ import annotations

from collections.abc import Sequence

from .schema import RawArgument, RawCommand, RawGroup, RawSettings


def render_argument_help(argument: RawArgument) -> str:
    names = "".join(f" `{item.name}`" for item in argument.items)
    return f"`{argument.id}`   _{argument.description}:_{names}"


def render_command_help(group_id: str, command: RawCommand, argument_helps: Sequence[str]) -> str:
    placeholders = "".join(f" <{argument_id}>" for argument_id in command.arguments)
    lines = [
        f"_{command.description}_",
        "_*Format:*_",
        f"```{group_id} [host] {command.id}{placeholders}```",
        *argument_helps,
    ]
    return "\n".join(lines)


def render_group_help(group: RawGroup) -> str:
    hosts = "".join(f" `{host_id}`" for host_id in group.hosts)
    lines = [
        f"_{group.description}_",
        f"_*Hosts:*_{hosts}",
        "_*Commands:*_",
    ]
    lines.extend(f"`{command.id}`   _{command.description}_" for command in group.commands)
    return "\n".join(lines)


def render_root_help(settings: RawSettings, groups: Sequence[RawGroup]) -> str:
    lines = [settings.description] if settings.description else []
    lines.append("_*Groups:*_")
    lines.extend(f"`{group.id}`   _{group.description}_" for group in groups)
    return "\n".join(lines)
