"""hostbot - run whitelisted remote commands from chat."""

from .config import Config, parse, parse_file
from .core import ActionResolver, HelpReply, Invocation, chunk_output, resolve_action

__version__ = "0.1.0"

__all__ = [
    "ActionResolver",
    "Config",
    "HelpReply",
    "Invocation",
    "chunk_output",
    "parse",
    "parse_file",
    "resolve_action",
]
