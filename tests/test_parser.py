"""Tests for the command line tokenizer."""

from linecmd.shell.parser import LineTokenizer, tokenize_line


class TestTokenizer:
    """Test quote-aware tokenization."""

    def test_plain_words(self):
        """Test splitting on whitespace."""
        assert tokenize_line("create thisIsTheUri thisIsTheValue") == [
            "create", "thisIsTheUri", "thisIsTheValue"
        ]

    def test_quoted_run_is_one_token(self):
        """Test quoted text keeps its inner spaces and loses its quotes."""
        assert tokenize_line('set "hello world" 3') == ["set", "hello world", "3"]

    def test_adjacent_fragments_join(self):
        """Test unquoted and quoted fragments without a space form one token."""
        assert tokenize_line('foo"bar baz"') == ["foobar baz"]
        assert tokenize_line('a"b c"d e') == ["ab cd", "e"]

    def test_repeated_whitespace(self):
        """Test tabs and runs of spaces separate tokens."""
        assert tokenize_line("  write\t/1/0   42  ") == ["write", "/1/0", "42"]

    def test_empty_line_has_no_tokens(self):
        """Test empty input signals no tokens."""
        assert tokenize_line("") is None

    def test_whitespace_line_has_no_tokens(self):
        """Test whitespace-only input signals no tokens."""
        assert tokenize_line("   \t ") is None

    def test_quoted_empty_string(self):
        """Test a pair of quotes yields an empty token."""
        assert tokenize_line('set ""') == ["set", ""]

    def test_unterminated_quote_is_dropped(self):
        """Test a lone quote is skipped and the rest is split normally."""
        assert tokenize_line('say "hello world') == ["say", "hello", "world"]

    def test_tokenizer_instance(self):
        """Test the tokenizer class gives the same result as the helper."""
        tokenizer = LineTokenizer()
        assert tokenizer.tokenize('read "/3/0" 1') == ["read", "/3/0", "1"]
