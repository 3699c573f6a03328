"""Splitting a command line into words and operator tokens."""
from __future__ import annotations

from collections.abc import Iterator

OPERATOR_CHARS = "|<>"
QUOTES = "'\""


def _skip_quote(text: str, i: int) -> int:
    end = text.find(text[i], i + 1)
    return len(text) if end == -1 else end + 1


def token_length(text: str, start: int) -> int:
    """Length of the token that begins at ``start``."""
    if start >= len(text):
        return 0
    ch = text[start]
    if ch in OPERATOR_CHARS:
        if ch in "<>" and text[start + 1:start + 2] == ch:
            return 2
        return 1
    i = start
    n = len(text)
    while i < n and text[i] != " " and text[i] not in OPERATOR_CHARS:
        i = _skip_quote(text, i) if text[i] in QUOTES else i + 1
    return i - start


def _spans(text: str) -> Iterator[tuple[int, int]]:
    i = 0
    n = len(text)
    while True:
        while i < n and text[i] == " ":
            i += 1
        if i >= n:
            return
        length = token_length(text, i)
        yield i, i + length
        i += length


def count_tokens(text: str) -> int:
    """Number of tokens in ``text``."""
    return sum(1 for _ in _spans(text))


def tokenize(text: str) -> list[str]:
    """Split ``text`` into tokens, keeping quotes inside words."""
    return [text[a:b] for a, b in _spans(text)]