import pytest

from minish.lexer import count_tokens, token_length, tokenize


def test_simple_words():
    assert tokenize("echo hello world") == ["echo", "hello", "world"]


def test_operators_split_words():
    assert tokenize("ls|wc") == ["ls", "|", "wc"]
    assert tokenize("cat<<EOF>>out") == ["cat", "<<", "EOF", ">>", "out"]
    assert tokenize("a<b>c") == ["a", "<", "b", ">", "c"]


def test_triple_angle_is_double_then_single():
    assert tokenize("<<<") == ["<<", "<"]


def test_double_pipe_is_two_tokens():
    assert tokenize("a||b") == ["a", "|", "|", "b"]


def test_quotes_keep_spaces_and_operators():
    assert tokenize("echo 'a b' \"c | d\"") == ["echo", "'a b'", '"c | d"']


def test_adjacent_quotes_form_one_word():
    assert tokenize('x\'a"b c\'d"e f"') == ['x\'a"b c\'d"e f"']


def test_unterminated_quote_runs_to_end():
    assert tokenize("echo 'abc def") == ["echo", "'abc def"]


def test_tab_is_not_a_separator():
    assert tokenize("a\tb") == ["a\tb"]


@pytest.mark.parametrize("text", ["", "   ", " "])
def test_blank_input_has_no_tokens(text):
    assert tokenize(text) == []
    assert count_tokens(text) == 0


@pytest.mark.parametrize(
    "text",
    ["echo hi", "  ls -l | grep x > out ", "cat << 'E O F'", "a|b|c", "'x' \"y\" z"],
)
def test_count_matches_tokenize(text):
    assert count_tokens(text) == len(tokenize(text))


@pytest.mark.parametrize("text", ["ls -l|wc -c", "a >> b << c", "x y  z"])
def test_tokens_rebuild_text_without_spaces(text):
    assert "".join(tokenize(text)) == text.replace(" ", "")


def test_token_length_values():
    assert token_length("echo hi", 0) == len("echo")
    assert token_length(">>x", 0) == len(">>")
    assert token_length("|x", 0) == len("|")
    assert token_length("abc", 3) == 0