from __future__ import annotations

import pytest

from hostbot.core import ChunkedOutput, chunk_output, fence_output, split_output


def test_splits_at_last_line_break() -> None:
    assert chunk_output("0123456789\n0123456789", 12, 5) == ["0123456789", "0123456789"]


def test_empty_output() -> None:
    assert chunk_output("", 10, 5) == []
    assert split_output("", 10, 5) == ChunkedOutput(())


def test_short_output_is_one_chunk() -> None:
    assert chunk_output("line1\nline2", 100, 5) == ["line1\nline2"]


def test_unbounded_symbols() -> None:
    output = "x" * 10_000 + "\ntail"
    assert chunk_output(output, 0, 0) == [output]
    assert chunk_output(output, -1, 1) == [output]


def test_trailing_line_break_is_excluded() -> None:
    assert chunk_output("abc\n", 100, 0) == ["abc"]
    assert chunk_output("abc\ndef\n", 4, 0) == ["abc", "def"]


def test_window_without_line_break_is_cut_hard() -> None:
    assert chunk_output("abcdefghij", 4, 0) == ["abcd", "efgh", "ij"]


def test_leading_line_break_produces_no_empty_chunk() -> None:
    assert chunk_output("\nabcdef", 4, 0) == ["abcd", "ef"]


def test_counts_code_points() -> None:
    assert chunk_output("ééééé", 2, 0) == ["éé", "éé", "é"]
    assert chunk_output("日本\n語", 3, 0) == ["日本", "語"]


def test_chunks_never_exceed_limit() -> None:
    output = "\n".join(f"line {i} " + "x" * (i % 7) for i in range(200))
    for chunk in chunk_output(output, 25, 0):
        assert 0 < len(chunk) <= 25


def test_rejoining_chunks_restores_lines() -> None:
    output = "line1\nline2\nline3\n"
    chunks = chunk_output(output, 8, 0)
    assert chunks == ["line1", "line2", "line3"]
    assert "\n".join(chunks) == output.rstrip("\n")


def test_max_chunks_truncates_silently() -> None:
    result = split_output("a\nb\nc\nd", 2, 2)
    assert result.chunks == ("a", "b")
    assert result.truncated is True


def test_max_chunks_reached_with_input_exhausted() -> None:
    result = split_output("ab", 1, 2)
    assert result == ChunkedOutput(("a", "b"), truncated=False)


def test_single_chunk_is_degenerate_case() -> None:
    result = split_output("first line\nsecond line\nthird line", 12, 1)
    assert result.chunks == ("first line",)
    assert result.truncated is True


def test_deterministic() -> None:
    output = "alpha\nbeta gamma delta\n" * 40
    assert split_output(output, 17, 9) == split_output(output, 17, 9)


@pytest.mark.parametrize(
    ("output", "cap", "expected"),
    [
        ("abc", 10, "```\nabc\n```"),
        ("abcdef", 3, "```\nabc\n...trimmed\n```"),
        ("abcdef", 0, "```\nabcdef\n```"),
    ],
)
def test_fence_output(output: str, cap: int, expected: str) -> None:
    assert fence_output(output, cap) == expected
