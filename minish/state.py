"""Shell session state and its initialisation from the process environment."""
from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_PATH = "/usr/local/sbin:/usr/local/bin:/usr/sbin:/usr/bin:/sbin:/bin"
MAX_CMDS = 256


@dataclass
class ShellState:
    """Everything a shell session carries between command lines."""

    env: list[str] = field(default_factory=list)
    last_exit: int = 0
    raw_input: str = ""
    export_only: list[str] = field(default_factory=list)
    heredoc_index: int = 0


class ShellExit(Exception):
    """Raised when the shell is asked to terminate with a given status."""

    def __init__(self, code: int) -> None:
        super().__init__(code)
        self.code = code


def init_shell(envp=None) -> ShellState:
    """Build a session from ``envp``, or from a minimal default environment."""
    if envp:
        return ShellState(env=list(envp))
    try:
        cwd = os.getcwd()
    except OSError:
        return ShellState()
    return ShellState(
        env=[
            "PATH=" + DEFAULT_PATH,
            "PWD=" + cwd,
            "SHLVL=1",
            "_=/usr/bin/env",
        ]
    )