"""The export and unset built-ins and the environment edits behind them."""
from __future__ import annotations

from .expand import get_env_value
from .state import ShellState

_QUOTES = ("'", '"')


def _is_name_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == "_")


def has_equal(text: str) -> bool:
    """True when ``text`` contains ``=``."""
    return "=" in text


def has_plus_equal(text: str) -> bool:
    """True when ``text`` contains ``+=``."""
    return "+=" in text


def is_valid_identifier(text: str) -> bool:
    """True when the name part of an export argument is a valid identifier."""
    if not text or ("0" <= text[0] <= "9"):
        return False
    for index, ch in enumerate(text):
        if ch == "=":
            break
        if ch == "+" and text[index + 1:index + 2] == "=":
            break
        if not _is_name_char(ch):
            return False
    return True


def _is_valid_unset_name(text: str) -> bool:
    if not text or ("0" <= text[0] <= "9"):
        return False
    return all(_is_name_char(ch) for ch in text)


def _remove_quotes(value: str) -> str:
    if value and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def clean_export_arg(arg: str) -> str:
    """Strip one pair of surrounding quotes from the value of ``KEY=value``."""
    key, sep, value = arg.partition("=")
    if not sep:
        return arg
    return key + "=" + _remove_quotes(value)


def update_env(state: ShellState, arg: str) -> None:
    """Set ``KEY=value`` in the environment, replacing an entry with the same key."""
    clean = clean_export_arg(arg)
    eq = clean.find("=")
    if eq != -1:
        prefix = clean[:eq + 1]
        for index, entry in enumerate(state.env):
            if entry.startswith(prefix):
                state.env[index] = clean
                return
    state.env.append(clean)


def _update_env_append(state: ShellState, arg: str) -> None:
    key = arg[:arg.find("+=")]
    value = arg[arg.find("=") + 1:]
    update_env(state, key + "=" + get_env_value(state, key) + value)


def add_to_export_only(state: ShellState, arg: str) -> None:
    """Remember a name exported without a value, once."""
    if arg not in state.export_only:
        state.export_only.append(arg)


def remove_from_export_only(state: ShellState, arg: str) -> None:
    """Forget a name exported without a value."""
    state.export_only = [name for name in state.export_only if name != arg]


def _key_defined(entries: list[str], key: str) -> bool:
    prefix = key + "="
    return any(entry.startswith(prefix) for entry in entries)


def print_export(state: ShellState, out) -> None:
    """Print every exported name, sorted, in ``declare -x`` form."""
    combined = list(state.env)
    for name in state.export_only:
        if not _key_defined(combined, name):
            combined.append(name)
    for entry in sorted(combined):
        key, sep, value = entry.partition("=")
        if sep:
            out.write(f'declare -x {key}="{value}"\n')
        else:
            out.write(f"declare -x {entry}\n")


def export(args, state: ShellState, out, err) -> int:
    """Export variables; with no arguments, list them."""
    args = list(args)
    if len(args) < 2:
        print_export(state, out)
        return 0
    for arg in args[1:]:
        if not is_valid_identifier(arg):
            err.write("minishell: export: not a valid identifier\n")
            state.last_exit = 1
            return 1
        if has_plus_equal(arg):
            _update_env_append(state, arg)
        elif has_equal(arg):
            remove_from_export_only(state, arg[:arg.find("=")])
            update_env(state, arg)
        else:
            add_to_export_only(state, arg)
    return 0


def unset(args, state: ShellState, err) -> int:
    """Remove variables from the environment and the export-only list."""
    for name in list(args)[1:]:
        if not _is_valid_unset_name(name):
            err.write("minishell: unset: not a valid identifier\n")
            return 1
        prefix = name + "="
        state.env = [entry for entry in state.env if not entry.startswith(prefix)]
        remove_from_export_only(state, name)
    return 0