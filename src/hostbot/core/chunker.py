"""Split command output into chat-sized messages."""

from __future__ import annotations

from dataclasses import dataclass

LINE_BREAK = "\n"
FENCE = "```"
TRIMMED_MARKER = "...trimmed"


@dataclass(frozen=True)
class ChunkedOutput:
    chunks: tuple[str, ...]
    truncated: bool = False


def split_output(output: str, max_symbols: int, max_chunks: int) -> ChunkedOutput:
    """Split ``output`` into chunks of at most ``max_symbols`` code points.

    A full window is cut after its last line break; the line break itself is
    dropped and the text after it starts the next window. Windows without a
    line break are emitted as they are. Emission stops after ``max_chunks``
    chunks and the rest of the output is discarded. Non-positive limits mean
    unbounded.
    """

    chunks: list[str] = []
    window = ""
    pos = 0
    while pos < len(output):
        if max_symbols > 0:
            take = max_symbols - len(window)
            window += output[pos : pos + take]
            pos += take
        else:
            window += output[pos:]
            pos = len(output)

        if pos >= len(output):
            last = window.removesuffix(LINE_BREAK)
            window = ""
            if last:
                chunks.append(last)
        else:
            cut = window.rfind(LINE_BREAK)
            if cut == -1:
                chunks.append(window)
                window = ""
            else:
                if cut > 0:
                    chunks.append(window[:cut])
                window = window[cut + 1 :]

        if 0 < max_chunks <= len(chunks):
            return ChunkedOutput(tuple(chunks), truncated=bool(window) or pos < len(output))

    return ChunkedOutput(tuple(chunks))


def chunk_output(output: str, max_symbols: int, max_chunks: int) -> list[str]:
    """Return only the chunks of :func:`split_output`."""

    return list(split_output(output, max_symbols, max_chunks).chunks)


def fence_output(output: str, max_symbols: int) -> str:
    """Render ``output`` as one code block, trimmed to ``max_symbols`` code points."""

    if 0 < max_symbols < len(output):
        output = f"{output[:max_symbols]}\n{TRIMMED_MARKER}"
    return f"{FENCE}\n{output}\n{FENCE}"
