"""Running parsed commands: redirections, single commands and pipelines."""
from __future__ import annotations

import copy
import errno
import io
import os
import signal
import subprocess
import sys
import tempfile
import threading
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from typing import IO

from .heredoc import HeredocInterrupted, collect_heredocs
from .registry import is_builtin, run_builtin
from .state import MAX_CMDS, ShellExit, ShellState

_CHILD_SIGNALS = ("SIGINT", "SIGQUIT")


class _RedirectError(Exception):
    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status


@dataclass
class _Streams:
    stdin_file: IO | None = None
    stdin_data: bytes | None = None
    stdout_file: IO | None = None


def _signal_numbers():
    for name in _CHILD_SIGNALS:
        signum = getattr(signal, name, None)
        if signum is not None:
            yield signum


def _child_defaults() -> None:
    for signum in _signal_numbers():
        signal.signal(signum, signal.SIG_DFL)


@contextmanager
def _parent_ignores_signals():
    """Ignore interrupts in the shell while a child runs."""
    saved = {}
    if threading.current_thread() is threading.main_thread():
        for signum in _signal_numbers():
            previous = signal.getsignal(signum)
            if previous is not None:
                saved[signum] = previous
                signal.signal(signum, signal.SIG_IGN)
    try:
        yield
    finally:
        for signum, handler in saved.items():
            signal.signal(signum, handler)


def _env_dict(env) -> dict[str, str]:
    result = {}
    for entry in env:
        key, sep, value = entry.partition("=")
        if sep:
            result[key] = value
    return result


def find_path(name: str, env) -> str | None:
    """Locate the executable for ``name`` using the PATH in ``env``."""
    if "/" in name:
        return name
    path_value = next((entry[5:] for entry in env if entry.startswith("PATH=")), None)
    if path_value is None:
        return None
    for directory in filter(None, path_value.split(":")):
        candidate = directory + "/" + name
        if os.access(candidate, os.X_OK):
            return candidate
    return None


def _open_or_fail(path: str, mode: str, stack: ExitStack) -> IO:
    try:
        if "b" in mode:
            handle = open(path, mode)
        else:
            handle = open(path, mode, encoding="utf-8", newline="")
    except OSError as exc:
        sys.stderr.write(f"{path}: {exc.strerror}\n")
        raise _RedirectError(1) from None
    return stack.enter_context(handle)


def _open_redirections(command, state: ShellState, stack: ExitStack) -> _Streams:
    streams = _Streams()
    if command.heredoc:
        try:
            body = collect_heredocs(command, state)
        except HeredocInterrupted:
            state.last_exit = 130
            raise _RedirectError(130) from None
        if body is not None:
            streams.stdin_data = body.encode()
    if command.infile:
        streams.stdin_file = _open_or_fail(command.infile, "rb", stack)
    if command.outfile:
        mode = "a" if command.append else "w"
        streams.stdout_file = _open_or_fail(command.outfile, mode, stack)
    return streams


def _as_stdin(source, stack: ExitStack):
    if isinstance(source, bytes):
        holder = stack.enter_context(tempfile.TemporaryFile())
        holder.write(source)
        holder.seek(0)
        return holder
    return source


def _stdin_source(streams: _Streams, upstream):
    if streams.stdin_file is not None:
        return streams.stdin_file
    if streams.stdin_data is not None:
        return streams.stdin_data
    return upstream


def _run_child_builtin(command, state: ShellState, out) -> int:
    """Run a built-in as a child would: its changes do not reach ``state``."""
    child = copy.deepcopy(state)
    try:
        saved_cwd = os.getcwd()
    except OSError:
        saved_cwd = None
    try:
        return run_builtin(command, child, out, sys.stderr)
    except ShellExit as exc:
        return exc.code
    finally:
        out.flush()
        if saved_cwd is not None:
            try:
                os.chdir(saved_cwd)
            except OSError:
                pass


def _not_found(name: str) -> int:
    sys.stderr.write(f"minishell: {name}: command not found\n")
    return 127


def _exec_failure(name: str, exc: OSError) -> int:
    sys.stderr.write(f"minishell: {name}: {exc.strerror}\n")
    return 127 if exc.errno == errno.ENOENT else 126


def _spawn(args, path: str, state: ShellState, stdin, stdout) -> subprocess.Popen:
    return subprocess.Popen(
        args,
        executable=path,
        env=_env_dict(state.env),
        stdin=stdin,
        stdout=stdout,
        preexec_fn=_child_defaults if os.name == "posix" else None,
    )


def run_single(command, state: ShellState) -> int:
    """Run one command with its redirections and record its exit status."""
    sys.stdout.flush()
    with ExitStack() as stack:
        try:
            streams = _open_redirections(command, state, stack)
        except _RedirectError as exc:
            state.last_exit = exc.status
            return state.last_exit
        args = command.args
        if not args or not args[0]:
            state.last_exit = 0
            return 0
        if is_builtin(args[0]):
            out = streams.stdout_file if streams.stdout_file is not None else sys.stdout
            state.last_exit = _run_child_builtin(command, state, out)
            return state.last_exit
        path = find_path(args[0], state.env)
        if path is None:
            state.last_exit = _not_found(args[0])
            return state.last_exit
        stdin = _as_stdin(_stdin_source(streams, None), stack)
        try:
            with _parent_ignores_signals():
                process = _spawn(args, path, state, stdin, streams.stdout_file)
                returncode = process.wait()
        except OSError as exc:
            state.last_exit = _exec_failure(args[0], exc)
            return state.last_exit
        if returncode >= 0:
            state.last_exit = returncode
    return state.last_exit


def _launch_stage(command, state: ShellState, upstream, last: bool, stack: ExitStack):
    """Start one pipeline stage; return its process or status and its output."""
    try:
        streams = _open_redirections(command, state, stack)
    except _RedirectError as exc:
        return exc.status, b""
    args = command.args
    if not args:
        sys.stderr.write("minishell: invalid command\n")
        return 1, b""
    if is_builtin(args[0]):
        if streams.stdout_file is not None:
            return _run_child_builtin(command, state, streams.stdout_file), b""
        if last:
            return _run_child_builtin(command, state, sys.stdout), None
        buffer = io.StringIO()
        status = _run_child_builtin(command, state, buffer)
        return status, buffer.getvalue().encode()
    path = find_path(args[0], state.env)
    if path is None:
        return _not_found(args[0]), b""
    stdin = _as_stdin(_stdin_source(streams, upstream), stack)
    if streams.stdout_file is not None:
        stdout = streams.stdout_file
    else:
        stdout = None if last else subprocess.PIPE
    try:
        with _parent_ignores_signals():
            process = _spawn(args, path, state, stdin, stdout)
    except OSError as exc:
        return _exec_failure(args[0], exc), b""
    if stdout is subprocess.PIPE:
        return process, process.stdout
    return process, None if last else b""


def run_pipeline(commands, state: ShellState) -> int:
    """Run piped commands; the status recorded is that of the first stage."""
    commands = list(commands)
    if len(commands) - 1 > MAX_CMDS:
        sys.stderr.write("minishell: too many piped commands\n")
        return 1
    sys.stdout.flush()
    outcomes = []
    with ExitStack() as stack:
        upstream = None
        for index, command in enumerate(commands):
            last = index == len(commands) - 1
            outcome, following = _launch_stage(command, state, upstream, last, stack)
            if hasattr(upstream, "close"):
                upstream.close()
            upstream = following
            outcomes.append(outcome)
        with _parent_ignores_signals():
            codes = [
                outcome.wait() if isinstance(outcome, subprocess.Popen) else outcome
                for outcome in outcomes
            ]
    first = codes[0]
    state.last_exit = first if first >= 0 else 1
    return state.last_exit


def execute(commands, state: ShellState) -> None:
    """Run parsed commands, in the shell itself for plain built-ins."""
    commands = list(commands)
    if not commands:
        return
    first = commands[0]
    if not first.args and not first.heredoc:
        return
    if len(commands) > 1:
        run_pipeline(commands, state)
        return
    if (
        first.args
        and is_builtin(first.args[0])
        and not first.infile
        and not first.outfile
        and not first.heredoc
    ):
        state.last_exit = run_builtin(first, state, sys.stdout, sys.stderr)
        return
    run_single(first, state)