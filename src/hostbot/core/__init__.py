"""Action resolution, command formatting and output chunking."""

from .chunker import ChunkedOutput, chunk_output, fence_output, split_output
from .formatter import check_template, format_command, placeholders
from .resolver import ActionResolver, ResolveCursor, ResolveState, resolve_action
from .types import HelpReply, Invocation, Resolution

__all__ = [
    "ActionResolver",
    "ChunkedOutput",
    "HelpReply",
    "Invocation",
    "ResolveCursor",
    "ResolveState",
    "Resolution",
    "check_template",
    "chunk_output",
    "fence_output",
    "format_command",
    "placeholders",
    "resolve_action",
    "split_output",
]
