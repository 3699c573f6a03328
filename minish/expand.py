"""Variable, exit-status and tilde expansion of tokens and here-document lines."""
from __future__ import annotations

from .state import ShellState


def _is_name_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == "_")


def _name_end(text: str, start: int) -> int:
    i = start
    while i < len(text) and _is_name_char(text[i]):
        i += 1
    return i


def get_env_value(state: ShellState, name: str) -> str:
    """Value of ``name`` in the session environment; "$" for an empty name."""
    if not name:
        return "$"
    prefix = name + "="
    for entry in state.env:
        if entry.startswith(prefix):
            return entry[len(prefix):]
    return ""


def _expand_dollar(token: str, i: int, state: ShellState) -> tuple[str, int]:
    """Expand the ``$`` at ``i``; return the text and the next index."""
    following = token[i + 1:i + 2]
    if following == "?":
        return str(state.last_exit), i + 2
    if following and _is_name_char(following):
        end = _name_end(token, i + 1)
        return get_env_value(state, token[i + 1:end]), end
    return "$", i + 1


def _expand_tilde(token: str, state: ShellState) -> str | None:
    if not token.startswith("~"):
        return None
    if len(token) > 1 and token[1] != "/":
        return None
    return get_env_value(state, "HOME") + token[1:]


def expand_token(token: str, state: ShellState) -> str:
    """Expand quotes, ``$?``, ``$NAME`` and a leading ``~`` in one token."""
    home = _expand_tilde(token, state)
    if home is not None:
        return home
    parts: list[str] = []
    i = 0
    n = len(token)
    while i < n:
        ch = token[i]
        if ch == "'":
            end = token.find("'", i + 1)
            if end == -1:
                end = n
            parts.append(token[i + 1:end])
            i = end + 1
        elif ch == '"':
            i += 1
            while i < n and token[i] != '"':
                if token[i] == "$":
                    text, i = _expand_dollar(token, i, state)
                    parts.append(text)
                else:
                    parts.append(token[i])
                    i += 1
            if i < n:
                i += 1
        elif ch == "$":
            text, i = _expand_dollar(token, i, state)
            parts.append(text)
        else:
            start = i
            while i < n and token[i] not in "$'\"":
                i += 1
            parts.append(token[start:i])
    return "".join(parts)


def expand_tokens(tokens, state: ShellState) -> list[str]:
    """Expand every token; the first one is also split on spaces when unquoted."""
    result: list[str] = []
    for index, token in enumerate(tokens):
        expanded = expand_token(token, state)
        quoted = token[:1] in ("'", '"')
        if not expanded and not quoted:
            continue
        if index == 0 and not quoted and (" " in expanded or "\t" in expanded):
            result.extend(piece for piece in expanded.split(" ") if piece)
        else:
            result.append(expanded)
    return result


def expand_heredoc_line(line: str, state: ShellState) -> str:
    """Expand ``$?`` and ``$NAME`` in a here-document line; quotes are literal."""
    parts: list[str] = []
    i = 0
    n = len(line)
    while i < n:
        following = line[i + 1:i + 2]
        if line[i] == "$" and following == "?":
            parts.append(str(state.last_exit))
            i += 2
        elif line[i] == "$" and following and (
            (following.isascii() and following.isalpha()) or following == "_"
        ):
            end = _name_end(line, i + 1)
            parts.append(get_env_value(state, line[i + 1:end]))
            i = end
        else:
            end = line.find("$", i + 1)
            if end == -1:
                end = n
            parts.append(line[i:end])
            i = end
    return "".join(parts)