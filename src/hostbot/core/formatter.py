"""Command template substitution."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Final

from hostbot.errors import CommandFormatError

_PLACEHOLDER: Final = re.compile(r"%(?:\([^)]*\))?[#0 +-]*(?:\*|\d+)?(?:\.(?:\*|\d+))?[hlL]?[diouxXeEfFgGcrsa%]")


def format_command(template: str, values: Sequence[str]) -> str:
    """Substitute argument values into a printf-style template.

    Templates of commands without arguments are used verbatim, so a literal
    ``%`` needs no escaping there.
    """

    if not values:
        return template
    try:
        return template % tuple(values)
    except (TypeError, ValueError, KeyError) as exc:
        raise CommandFormatError(f"cannot format {template!r} with {len(values)} value(s): {exc}") from exc


def placeholders(template: str) -> list[str]:
    """Return the conversion specifiers of ``template``, ``%%`` excluded."""

    return [match.group() for match in _PLACEHOLDER.finditer(template) if match.group() != "%%"]


def check_template(template: str, arity: int) -> None:
    """Fail unless ``template`` accepts exactly ``arity`` string values."""

    if arity == 0:
        found = placeholders(template)
        if found:
            raise CommandFormatError(f"{template!r} has placeholder(s) {' '.join(found)} but takes no arguments")
        return
    format_command(template, ["x"] * arity)
