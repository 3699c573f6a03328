"""The interactive read-evaluate loop and the program entry point."""
from __future__ import annotations

import os
import signal
import sys
import threading

from .executor import execute
from .expand import expand_tokens
from .lexer import tokenize
from .parser import parse
from .state import ShellExit, ShellState, init_shell
from .syntax import ShellSyntaxError, check_syntax

PROMPT = "minishell$ "


def _read_prompt(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def _on_quit(signum, frame) -> None:
    """Keep the prompt alive on SIGQUIT; only pending output is flushed."""
    sys.stdout.flush()


def _install_signals() -> None:
    sigquit = getattr(signal, "SIGQUIT", None)
    if sigquit is not None and threading.current_thread() is threading.main_thread():
        signal.signal(sigquit, _on_quit)


def contains_heredoc(tokens) -> bool:
    """True when ``tokens`` holds a ``<<`` operator."""
    return "<<" in tokens


def process_line(line: str, state: ShellState) -> None:
    """Tokenize, check, expand, parse and run one command line."""
    try:
        tokens = tokenize(line)
        check_syntax(tokens)
        if contains_heredoc(tokens):
            commands = parse(tokens, state)
        else:
            expanded = expand_tokens(tokens, state)
            check_syntax(expanded)
            commands = parse(expanded, state)
    except ShellSyntaxError as exc:
        sys.stderr.write(f"{exc}\n")
        state.last_exit = 2
        return
    execute(commands, state)


def run_loop(state: ShellState, read_line=None) -> None:
    """Read and run command lines until end of input."""
    reader = read_line or _read_prompt
    while True:
        state.heredoc_index = 0
        try:
            raw = reader(PROMPT)
        except KeyboardInterrupt:
            sys.stdout.write("\n")
            continue
        if raw is None:
            sys.stdout.write("\nexit\n")
            sys.stdout.flush()
            return
        state.raw_input = raw
        for line in raw.split("\n"):
            if not line:
                continue
            try:
                process_line(line, state)
            except KeyboardInterrupt:
                sys.stdout.write("\n")


def main(argv=None) -> int:
    """Start an interactive shell session."""
    if argv is None:
        argv = sys.argv[1:]
    if argv:
        print("Minishell does not accept arguments!")
        return 1
    _install_signals()
    if sys.stdin.isatty():
        try:
            import readline  # noqa: F401  (enables line editing for input())
        except ImportError:
            pass
    state = init_shell([f"{key}={value}" for key, value in os.environ.items()])
    try:
        run_loop(state)
    except ShellExit as exc:
        sys.stdout.flush()
        return exc.code
    return 0