"""Syntax checks on a token list before parsing."""
from __future__ import annotations

OPERATORS = frozenset({"|", "<", ">", ">>", "<<"})
REDIRECTS = OPERATORS - {"|"}


class ShellSyntaxError(Exception):
    """A command line that cannot be parsed."""


def is_operator(token: str) -> bool:
    """True for pipe and redirection tokens."""
    return token in OPERATORS


def check_syntax(tokens) -> None:
    """Raise ShellSyntaxError if ``tokens`` cannot form a command line."""
    tokens = list(tokens)
    if not tokens:
        return
    first = tokens[0]
    if is_operator(first):
        heredoc_ok = first == "<<" and len(tokens) > 1 and not is_operator(tokens[1])
        if not heredoc_ok:
            if first == "|":
                raise ShellSyntaxError("syntax error near unexpected token `|'")
            if first == "<<":
                raise ShellSyntaxError("syntax error near unexpected token `<<'")
            raise ShellSyntaxError("syntax error near unexpected token")
    for token, following in zip(tokens, tokens[1:] + [None]):
        if token in REDIRECTS and (following is None or is_operator(following)):
            raise ShellSyntaxError("syntax error near unexpected token `newline'")