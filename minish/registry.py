"""Recognising built-in command names and dispatching to them."""
from __future__ import annotations

from .builtins import cd, echo, exit_builtin, print_env, pwd
from .exports import export, unset
from .state import ShellState

BUILTINS = frozenset({"echo", "pwd", "env", "cd", "export", "unset", "exit"})


def is_builtin(name) -> bool:
    """True when ``name`` is handled by the shell itself."""
    return bool(name) and name in BUILTINS


def run_builtin(command, state: ShellState, out, err) -> int:
    """Run the built-in named by ``command.args[0]`` and return its status."""
    if command is None or not command.args:
        return 1
    args = command.args
    name = args[0]
    if name == "echo":
        return echo(args, out)
    if name == "pwd":
        return pwd(out, err)
    if name == "env":
        if len(args) > 1:
            err.write("env: too many arguments\n")
            return 127
        return print_env(state.env, out)
    if name == "cd":
        return cd(args, state, out, err)
    if name == "exit":
        return exit_builtin(args, state, out, err)
    if name == "export":
        return export(args, state, out, err)
    if name == "unset":
        return unset(args, state, err)
    return 1