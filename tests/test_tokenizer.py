import pytest

from pipex.tokenizer import (
    QuoteState,
    count_tokens,
    is_in_quotes,
    is_space,
    process_token,
    shell_split,
    skip_spaces,
    strip_quotes,
    token_end,
    unescape_quotes,
)


@pytest.mark.parametrize("char", [" ", "\t", "\n", "\r", "\v", "\f"])
def test_is_space_true(char):
    assert is_space(char) is True


@pytest.mark.parametrize("char", ["a", "-", "'", ""])
def test_is_space_false(char):
    assert is_space(char) is False


def test_is_in_quotes_inside_single():
    s = "a 'b c' d"
    assert is_in_quotes(s, s.index("c") - 1) is True
    assert is_in_quotes(s, 1) is False
    assert is_in_quotes(s, len(s) - 2) is False


def test_is_in_quotes_ignores_escaped_quote():
    s = "\\'a b"
    assert is_in_quotes(s, s.index(" ")) is False


def test_skip_spaces():
    assert skip_spaces("   x", 0) == "   x".index("x")
    assert skip_spaces("x", 0) == 0
    assert skip_spaces("  ", 0) == len("  ")


def test_token_end_plain_and_quoted():
    assert token_end("ab cd", 0) == "ab cd".index(" ")
    s = "'a b' c"
    assert token_end(s, 0) == s.rindex(" ")


def test_token_end_updates_state():
    state = QuoteState()
    end = token_end('"ab', 0, state)
    assert end == len('"ab')
    assert state.double is True
    assert state.single is False


def test_count_tokens_matches_split():
    for s in ["grep a", "  wc   -l ", "tr '[:upper:]' '[:lower:]'", "cat"]:
        assert count_tokens(s) == len(shell_split(s))


def test_count_tokens_empty():
    assert count_tokens("") == 0
    assert count_tokens("   ") == 0


def test_strip_quotes():
    assert strip_quotes('"abc"') == "abc"
    assert strip_quotes("'abc'") == "abc"
    assert strip_quotes("'abc") == "'abc"
    assert strip_quotes('"') == '"'
    assert strip_quotes("'abc\"") == "'abc\""


def test_unescape_quotes():
    assert unescape_quotes('a\\"b') == 'a"b'
    assert unescape_quotes("a\\b") == "a\\b"


def test_process_token_slices_and_unquotes():
    s = "x 'y z'"
    assert process_token(s, 2, len(s)) == "y z"


def test_shell_split_simple():
    assert shell_split("grep a") == ["grep", "a"]
    assert shell_split("  wc   -l ") == ["wc", "-l"]


def test_shell_split_quoted_arguments():
    assert shell_split("tr '[:upper:]' '[:lower:]'") == ["tr", "[:upper:]", "[:lower:]"]
    assert shell_split('grep "a b"') == ["grep", "a b"]


def test_shell_split_empty():
    assert shell_split("") == []
    assert shell_split(" \t ") == []


def test_shell_split_escaped_double_quotes():
    assert shell_split('echo \\"hi\\"') == ["echo", '"hi"']


def test_shell_split_quoted_awk_is_split_again():
    assert shell_split("\"awk '{print $1}'\"") == ["awk", "{print $1}"]


def test_shell_split_absolute_path():
    assert shell_split("/usr/bin/wc -c") == ["/usr/bin/wc", "-c"]


def test_shell_split_tokens_have_no_unquoted_spaces():
    for token in shell_split("cut -d: -f1"):
        assert token.strip() == token
        assert token