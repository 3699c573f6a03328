"""Built-in commands: echo, pwd, env, cd and exit."""
from __future__ import annotations

import os

from .expand import get_env_value
from .state import ShellExit, ShellState

_LONG_MAX = 2**63 - 1


def echo(args, out) -> int:
    """Print the arguments separated by spaces; ``-n`` drops the newline."""
    words = list(args)[1:]
    newline = True
    if words and words[0] == "-n":
        newline = False
        words = words[1:]
    out.write(" ".join(words))
    if newline:
        out.write("\n")
    return 0


def pwd(out, err) -> int:
    """Print the current working directory."""
    try:
        cwd = os.getcwd()
    except OSError as exc:
        err.write(f"pwd: {exc.strerror}\n")
        return 1
    out.write(cwd + "\n")
    return 0


def print_env(env, out) -> int:
    """Print each environment entry on its own line."""
    for entry in env:
        out.write(entry + "\n")
    return 0


def cd_check_args(args, state: ShellState, err) -> bool:
    """Report and return True when ``cd`` was given too many arguments."""
    args = list(args)
    if len(args) > 2 and (args[1] != "--" or len(args) > 3):
        err.write("minishell: cd: too many arguments\n")
        state.last_exit = 1
        return True
    return False


def _set_env(state: ShellState, key: str, value: str) -> None:
    prefix = key + "="
    entry = prefix + value
    for index, existing in enumerate(state.env):
        if existing.startswith(prefix):
            state.env[index] = entry
            return
    state.env.append(entry)


def _cd_target(args: list[str], state: ShellState, out, err) -> str | None:
    if len(args) < 2:
        return get_env_value(state, "HOME")
    if args[1] == "--":
        return args[2] if len(args) > 2 else get_env_value(state, "HOME")
    if args[1] == "-":
        previous_dir = get_env_value(state, "OLDPWD")
        if not previous_dir:
            err.write("minishell: cd: OLDPWD not set\n")
            return None
        out.write(previous_dir + "\n")
        return previous_dir
    return args[1]


def cd(args, state: ShellState, out, err) -> int:
    """Change directory and keep PWD and OLDPWD up to date."""
    args = list(args)
    if cd_check_args(args, state, err):
        return 1
    try:
        start_dir = os.getcwd()
    except OSError as exc:
        err.write(f"getcwd: {exc.strerror}\n")
        return 1
    target = _cd_target(args, state, out, err)
    if target is None:
        return 1
    try:
        os.chdir(target)
    except OSError as exc:
        err.write(f"cd: {exc.strerror}\n")
        return 1
    _set_env(state, "OLDPWD", start_dir)
    try:
        _set_env(state, "PWD", os.getcwd())
    except OSError:
        pass
    return 0


def _is_numeric(text: str) -> bool:
    body = text[1:] if text[:1] in ("-", "+") else text
    return all("0" <= ch <= "9" for ch in body)


def _parse_long(text: str) -> int | None:
    """Signed value of ``text``, or None when its magnitude overflows a long."""
    sign = 1
    if text[:1] in ("-", "+"):
        if text[0] == "-":
            sign = -1
        text = text[1:]
    result = 0
    for ch in text:
        if not "0" <= ch <= "9":
            break
        digit = ord(ch) - ord("0")
        if result > (_LONG_MAX - digit) // 10:
            return None
        result = result * 10 + digit
    return result * sign


def exit_builtin(args, state: ShellState, out, err) -> int:
    """Leave the shell by raising ShellExit; return 1 on too many arguments."""
    args = list(args)
    out.write("exit\n")
    if len(args) < 2:
        raise ShellExit(state.last_exit)
    trimmed = args[1].strip(" \t\n\r\v\f")
    if not _is_numeric(trimmed):
        err.write("minishell: exit: numeric argument required\n")
        raise ShellExit(2)
    if len(args) > 2:
        err.write("minishell: exit: too many arguments\n")
        return 1
    code = _parse_long(trimmed)
    if code is None:
        err.write("minishell: exit: numeric argument required\n")
        raise ShellExit(2)
    raise ShellExit(code % 256)