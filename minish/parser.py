"""Turning a token list into a sequence of piped commands."""
from __future__ import annotations

import sys
from dataclasses import dataclass, field

from .state import ShellState
from .syntax import REDIRECTS, ShellSyntaxError


@dataclass
class Command:
    """One stage of a pipeline with its arguments and redirections."""

    args: list[str] = field(default_factory=list)
    infile: str | None = None
    outfile: str | None = None
    append: bool = False
    heredoc: bool = False
    heredoc_delims: list[str] = field(default_factory=list)


def is_redirect(token: str) -> bool:
    """True for ``<``, ``>``, ``>>`` and ``<<``."""
    return token in REDIRECTS


def quote_trim(token: str) -> str:
    """Remove quote characters, keeping what they enclose."""
    parts: list[str] = []
    i = 0
    n = len(token)
    while i < n:
        ch = token[i]
        if ch in "'\"":
            end = token.find(ch, i + 1)
            if end == -1:
                parts.append(token[i + 1:])
                break
            parts.append(token[i + 1:end])
            i = end + 1
        else:
            parts.append(ch)
            i += 1
    return "".join(parts)


def copy_args(tokens, start: int, end: int) -> list[str]:
    """Words of ``tokens[start:end]`` that are neither redirections nor their targets."""
    args: list[str] = []
    words = iter(list(tokens)[start:end])
    for token in words:
        if token in REDIRECTS:
            next(words, None)
        else:
            args.append(token)
    return args


def _prepare_outfile(path: str, append: bool) -> None:
    try:
        with open(path, "a" if append else "w"):
            pass
    except OSError as exc:
        print(f"{path}: {exc.strerror}", file=sys.stderr)


def _parse_redirect(command: Command, tokens: list[str], i: int, state: ShellState) -> int:
    """Apply the redirection at ``i`` to ``command``; return the next index."""
    operator = tokens[i]
    if i + 1 >= len(tokens):
        raise ShellSyntaxError("syntax error near unexpected token `newline'")
    target = tokens[i + 1]
    if operator == "<":
        command.infile = target
    elif operator == ">":
        command.outfile = target
        _prepare_outfile(target, append=False)
        command.append = False
    elif operator == ">>":
        command.outfile = target
        _prepare_outfile(target, append=True)
        command.append = True
    else:
        command.heredoc_delims.append(quote_trim(target))
        state.heredoc_index += 1
        command.heredoc = True
    return i + 2


def parse(tokens, state: ShellState) -> list[Command]:
    """Split ``tokens`` on pipes into commands, applying redirections."""
    tokens = list(tokens)
    commands: list[Command] = []
    i = 0
    n = len(tokens)
    while i < n:
        command = Command()
        start = i
        while i < n and tokens[i] != "|":
            if tokens[i] in REDIRECTS:
                i = _parse_redirect(command, tokens, i, state)
            else:
                i += 1
        command.args = copy_args(tokens, start, i)
        commands.append(command)
        i += 1
    return commands


def format_commands(commands) -> str:
    """Readable description of parsed commands, for debugging."""
    lines: list[str] = []
    for command in commands:
        lines.append("🟦 Command:")
        lines.extend(f"  arg[{index}]: {arg}" for index, arg in enumerate(command.args))
        if command.infile:
            lines.append(f"  infile: {command.infile}")
        if command.outfile:
            lines.append(f"  outfile: {command.outfile} (append: {int(command.append)})")
        if command.heredoc:
            lines.append("  heredoc: yes")
    return "".join(line + "\n" for line in lines)