"""Reading here-document bodies from the user."""
from __future__ import annotations

import sys
from collections.abc import Callable

from .expand import expand_heredoc_line
from .state import ShellState

PROMPT = "heredoc> "

LineReader = Callable[[str], "str | None"]


class HeredocInterrupted(Exception):
    """The user interrupted here-document input."""


def _read_prompt(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def is_quoted_delim(state: ShellState) -> bool:
    """True when the ``<<`` numbered ``state.heredoc_index`` has a quoted delimiter."""
    text = state.raw_input
    index = 1
    pos = 0
    while True:
        found = text.find("<<", pos)
        if found == -1:
            return False
        if index == state.heredoc_index:
            rest = text[found + 2:].lstrip(" \t")
            return rest[:1] in ("'", '"')
        index += 1
        pos = found + 2


def read_heredoc(delim: str, state: ShellState, quoted: bool, read_line=None) -> str:
    """Read lines up to ``delim`` and return them, expanded unless ``quoted``."""
    reader = read_line or _read_prompt
    lines: list[str] = []
    while True:
        try:
            line = reader(PROMPT)
        except KeyboardInterrupt:
            sys.stdout.write("\n")
            sys.stdout.flush()
            state.last_exit = 130
            raise HeredocInterrupted(delim) from None
        if line is None or line == delim:
            break
        lines.append(line if quoted else expand_heredoc_line(line, state))
    return "".join(line + "\n" for line in lines)


def collect_heredocs(command, state: ShellState, read_line=None) -> str | None:
    """Read every here-document of ``command``; return the body of the last one."""
    body = None
    for delim in command.heredoc_delims:
        body = read_heredoc(delim, state, is_quoted_delim(state), read_line)
    return body