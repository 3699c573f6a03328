import pytest

from minish.expand import (
    expand_heredoc_line,
    expand_token,
    expand_tokens,
    get_env_value,
)
from minish.state import init_shell

HOME = "/home/tester"
USER = "tester"


@pytest.fixture
def state():
    st = init_shell(
        [
            "HOME=" + HOME,
            "USERNAME=other",
            "USER=" + USER,
            "EMPTY=",
            "SPACED=a  b c",
        ]
    )
    st.last_exit = 42
    return st


def test_get_env_value(state):
    assert get_env_value(state, "USER") == USER
    assert get_env_value(state, "USERNAME") == "other"
    assert get_env_value(state, "MISSING") == ""
    assert get_env_value(state, "EMPTY") == ""
    assert get_env_value(state, "") == "$"


def test_plain_variable(state):
    assert expand_token("$USER", state) == USER
    assert expand_token("x$USER", state) == "x" + USER


def test_single_quotes_are_literal(state):
    assert expand_token("'$USER'", state) == "$USER"


def test_double_quotes_expand(state):
    assert expand_token('"$USER"', state) == USER
    assert expand_token('"hi $USER!"', state) == "hi " + USER + "!"


def test_exit_status(state):
    assert expand_token("$?", state) == str(state.last_exit)
    assert expand_token('"$?"', state) == str(state.last_exit)


@pytest.mark.parametrize("token", ["$", "a$", '"$"', "$-"])
def test_lone_dollar_kept(token, state):
    assert expand_token(token, state) == token.replace('"', "")


def test_tilde(state):
    assert expand_token("~", state) == HOME
    assert expand_token("~/docs", state) == HOME + "/docs"
    assert expand_token("~x", state) == "~x"


def test_mixed_quoting(state):
    token = "pre'$USER'\"$USER\"$USER"
    assert expand_token(token, state) == "pre" + "$USER" + USER + USER


def test_first_token_is_split(state):
    assert expand_tokens(["$SPACED", "x"], state) == ["a", "b", "c", "x"]


def test_later_tokens_not_split(state):
    assert expand_tokens(["echo", "$SPACED"], state) == ["echo", "a  b c"]


def test_empty_unquoted_expansions_dropped(state):
    assert expand_tokens(["$NOPE", "ls"], state) == ["ls"]
    assert expand_tokens(["echo", "$NOPE"], state) == ["echo"]


def test_empty_quoted_kept(state):
    assert expand_tokens(["echo", '""', "''"], state) == ["echo", "", ""]


def test_expand_tokens_keeps_order(state):
    tokens = ["echo", "one", "two", "three"]
    assert expand_tokens(tokens, state) == tokens


def test_heredoc_variables(state):
    assert expand_heredoc_line("hi $USER", state) == "hi " + USER
    assert expand_heredoc_line("'$USER'", state) == "'" + USER + "'"
    assert expand_heredoc_line("$?", state) == str(state.last_exit)


@pytest.mark.parametrize("line", ["$1x", "$", "cost $ 5", "plain text", ""])
def test_heredoc_literal_dollar(line, state):
    assert expand_heredoc_line(line, state) == line