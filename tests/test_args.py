"""Tests for argument tokenizing."""

import pytest

from chat_cmdlib.utils.args import (
    ArgType,
    has_unescaped_pipe,
    parse_args,
    parse_args_spaces,
    separator_pattern,
    split_escaped,
    tokenize,
)


class TestParseArgs:
    def test_splits_on_pipes_and_trims(self):
        assert parse_args("a | b\\|c | d") == ["a", "b|c", "d"]

    def test_keeps_empty_segments(self):
        assert parse_args("a||b") == ["a", "", "b"]

    def test_empty_string_is_one_empty_argument(self):
        assert parse_args("") == [""]

    def test_no_pipe_is_single_argument(self):
        assert parse_args("  hello world ") == ["hello world"]

    def test_trailing_escaped_pipe(self):
        assert parse_args("x \\|") == ["x |"]


class TestParseArgsSpaces:
    def test_quotes_group_words(self):
        assert parse_args_spaces('a "b c" d') == ["a", "b c", "d"]

    def test_escaped_pipe_and_quote(self):
        assert parse_args_spaces('a\\|b "c\\"d"') == ["a|b", 'c"d']

    def test_quoted_text_is_not_trimmed(self):
        assert parse_args_spaces('"  x  " y') == ["  x  ", "y"]

    def test_empty_quotes_give_empty_argument(self):
        assert parse_args_spaces('a "" b') == ["a", "", "b"]

    def test_whitespace_runs_are_collapsed(self):
        assert parse_args_spaces("a   b\tc ") == ["a", "b", "c"]

    def test_unbalanced_quote_takes_rest(self):
        assert parse_args_spaces('a "b  c') == ["a", "b  c"]

    def test_empty_string_has_no_arguments(self):
        assert parse_args_spaces("") == []

    def test_escaped_quote_outside_quotes(self):
        assert parse_args_spaces('say \\"hi\\"') == ["say", '"hi"']


class TestSplitEscaped:
    def test_custom_punctuation_separator(self):
        assert split_escaped("a,b\\,c", ",") == ["a", "b,c"]

    def test_alphanumeric_separator_used_verbatim(self):
        assert separator_pattern("x") == "x"
        assert split_escaped("1x2\\x3", "x") == ["1", "2x3"]

    def test_punctuation_is_escaped(self):
        assert separator_pattern("|") == "\\|"
        assert separator_pattern(".") == "\\."

    def test_only_first_character_counts(self):
        assert separator_pattern("|;") == "\\|"


class TestTokenize:
    def test_auto_uses_pipes_when_unescaped_pipe_present(self):
        assert tokenize("x | y z") == ["x", "y z"]

    def test_auto_uses_spaces_when_pipes_escaped(self):
        assert tokenize("x \\| y") == ["x", "|", "y"]

    def test_has_unescaped_pipe(self):
        assert has_unescaped_pipe("a|b")
        assert has_unescaped_pipe("a\\|b|c")
        assert not has_unescaped_pipe("a\\|b")
        assert not has_unescaped_pipe("a b")

    def test_one_returns_whole_string(self):
        assert tokenize('a | "b" c', ArgType.ONE) == ['a | "b" c']
        assert tokenize("", ArgType.ONE) == [""]

    def test_explicit_pipes(self):
        assert tokenize("a b", ArgType.PIPES) == ["a b"]

    def test_explicit_spaces(self):
        assert tokenize("a|b c", ArgType.SPACES) == ["a|b", "c"]


class TestArgType:
    def test_parse_values(self):
        assert ArgType.parse(None) is ArgType.AUTO
        assert ArgType.parse("PIPES") is ArgType.PIPES
        assert ArgType.parse("one") is ArgType.ONE
        assert ArgType.parse(ArgType.SPACES) is ArgType.SPACES

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            ArgType.parse("commas")
