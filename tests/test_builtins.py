import io
import os

import pytest

from minish.builtins import cd, cd_check_args, echo, exit_builtin, print_env, pwd
from minish.state import ShellExit, ShellState


@pytest.fixture
def streams():
    return io.StringIO(), io.StringIO()


def test_echo_joins_args():
    out = io.StringIO()
    assert echo(["echo", "a", "b"], out) == 0
    assert out.getvalue() == "a b\n"


def test_echo_no_newline():
    out = io.StringIO()
    echo(["echo", "-n", "x", "y"], out)
    assert out.getvalue() == "x y"


def test_echo_empty():
    out = io.StringIO()
    echo(["echo"], out)
    assert out.getvalue() == "\n"


def test_print_env():
    out = io.StringIO()
    assert print_env(["A=1", "B=2"], out) == 0
    assert out.getvalue() == "A=1\nB=2\n"


def test_pwd(tmp_path, monkeypatch, streams):
    out, err = streams
    monkeypatch.chdir(tmp_path)
    assert pwd(out, err) == 0
    assert out.getvalue() == os.getcwd() + "\n"


def test_cd_check_args_too_many(streams):
    _, err = streams
    state = ShellState()
    assert cd_check_args(["cd", "a", "b"], state, err) is True
    assert state.last_exit == 1
    assert err.getvalue() == "minishell: cd: too many arguments\n"


def test_cd_check_args_double_dash_ok(streams):
    _, err = streams
    state = ShellState()
    assert cd_check_args(["cd", "--", "dir"], state, err) is False
    assert cd_check_args(["cd", "--", "a", "b"], state, err) is True


def test_cd_changes_directory(tmp_path, monkeypatch, streams):
    out, err = streams
    start = tmp_path / "start"
    dest = tmp_path / "dest"
    start.mkdir()
    dest.mkdir()
    monkeypatch.chdir(start)
    before = os.getcwd()
    state = ShellState(env=["PWD=" + before])
    assert cd(["cd", str(dest)], state, out, err) == 0
    assert os.path.samefile(os.getcwd(), dest)
    assert "OLDPWD=" + before in state.env
    assert "PWD=" + os.getcwd() in state.env


def test_cd_home(tmp_path, monkeypatch, streams):
    out, err = streams
    monkeypatch.chdir(tmp_path)
    home = tmp_path / "home"
    home.mkdir()
    state = ShellState(env=["HOME=" + str(home)])
    assert cd(["cd"], state, out, err) == 0
    assert os.path.samefile(os.getcwd(), home)


def test_cd_dash_prints_oldpwd(tmp_path, monkeypatch, streams):
    out, err = streams
    monkeypatch.chdir(tmp_path)
    other = tmp_path / "other"
    other.mkdir()
    state = ShellState(env=["OLDPWD=" + str(other)])
    assert cd(["cd", "-"], state, out, err) == 0
    assert out.getvalue() == str(other) + "\n"
    assert os.path.samefile(os.getcwd(), other)


def test_cd_dash_without_oldpwd(tmp_path, monkeypatch, streams):
    out, err = streams
    monkeypatch.chdir(tmp_path)
    assert cd(["cd", "-"], ShellState(), out, err) == 1
    assert err.getvalue() == "minishell: cd: OLDPWD not set\n"


def test_cd_missing_directory(tmp_path, monkeypatch, streams):
    out, err = streams
    monkeypatch.chdir(tmp_path)
    state = ShellState()
    assert cd(["cd", str(tmp_path / "missing")], state, out, err) == 1
    assert err.getvalue().startswith("cd: ")
    assert os.path.samefile(os.getcwd(), tmp_path)
    assert state.env == []


def test_exit_without_args_uses_last_exit(streams):
    out, err = streams
    state = ShellState(last_exit=3)
    with pytest.raises(ShellExit) as info:
        exit_builtin(["exit"], state, out, err)
    assert info.value.code == 3
    assert out.getvalue() == "exit\n"


@pytest.mark.parametrize(
    "arg, code",
    [("42", 42), ("256", 0), ("-1", 255), (" 7 ", 7), ("+5", 5)],
)
def test_exit_numeric(arg, code, streams):
    out, err = streams
    with pytest.raises(ShellExit) as info:
        exit_builtin(["exit", arg], ShellState(), out, err)
    assert info.value.code == code


def test_exit_non_numeric(streams):
    out, err = streams
    with pytest.raises(ShellExit) as info:
        exit_builtin(["exit", "abc"], ShellState(), out, err)
    assert info.value.code == 2
    assert err.getvalue() == "minishell: exit: numeric argument required\n"


def test_exit_overflow(streams):
    out, err = streams
    with pytest.raises(ShellExit) as info:
        exit_builtin(["exit", "99999999999999999999"], ShellState(), out, err)
    assert info.value.code == 2


def test_exit_too_many_arguments(streams):
    out, err = streams
    assert exit_builtin(["exit", "1", "2"], ShellState(), out, err) == 1
    assert err.getvalue() == "minishell: exit: too many arguments\n"