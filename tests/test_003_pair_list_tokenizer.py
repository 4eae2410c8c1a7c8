"""
Copyright (c) Microsoft Corporation.
Licensed under the MIT license.

Unit tests for _PairListTokenizer (internal).
"""

import pytest

from connection_string.connection_string_parser import _PairListTokenizer
from connection_string.constants import Dialect
from connection_string.exceptions import (
    EmptyKey,
    MalformedPair,
    UnterminatedBrace,
    UnterminatedQuote,
)


class TestPairListTokenizer:
    """Unit tests for _PairListTokenizer."""

    def test_empty_string(self):
        """Test that an empty body has no pairs."""
        assert _PairListTokenizer()._tokenize("") == []

    def test_whitespace_only(self):
        """Test that a whitespace-only body has no pairs."""
        assert _PairListTokenizer()._tokenize("   \t ") == []

    def test_simple_pairs(self):
        """Test simple key=value pairs."""
        result = _PairListTokenizer()._tokenize("Server=localhost;Database=mydb")
        assert result == [("Server", "localhost"), ("Database", "mydb")]

    def test_trailing_semicolon(self):
        """Test that a trailing semicolon is ignored."""
        assert _PairListTokenizer()._tokenize("Server=localhost;") == [("Server", "localhost")]
        assert _PairListTokenizer()._tokenize("Server=localhost; ") == [("Server", "localhost")]

    def test_braced_value_with_semicolons(self):
        """Test a brace-literal holding separators."""
        result = _PairListTokenizer()._tokenize("Server={;local;host};Database=mydb")
        assert result == [("Server", ";local;host"), ("Database", "mydb")]

    def test_inline_brace_markers(self):
        """Test values with inline brace fragments."""
        result = _PairListTokenizer()._tokenize(
            "server=tcp:localhost,1433;user=SA;password=a{;;}new{;;}password"
        )
        assert result == [
            ("server", "tcp:localhost,1433"),
            ("user", "SA"),
            ("password", "a;;new;;password"),
        ]

    def test_escaped_right_brace(self):
        """Test }} inside a brace-literal."""
        assert _PairListTokenizer()._tokenize("PWD={p}}w;}") == [("PWD", "p}w;")]

    def test_braced_key(self):
        """Test that keys may be brace-escaped."""
        assert _PairListTokenizer()._tokenize("{a=b}=c") == [("a=b", "c")]

    def test_equals_in_value(self):
        """Test that only the first top-level = separates key and value."""
        assert _PairListTokenizer()._tokenize("a=b=c") == [("a", "b=c")]

    def test_empty_value(self):
        """Test that empty values are allowed."""
        assert _PairListTokenizer()._tokenize("a=;b=2") == [("a", ""), ("b", "2")]

    def test_whitespace_is_trimmed(self):
        """Test whitespace around keys and values."""
        result = _PairListTokenizer()._tokenize("  user id = musti naukio ;x=1")
        assert result == [("user id", "musti naukio"), ("x", "1")]

    def test_multiline(self):
        """Test a connection string spread over lines."""
        result = _PairListTokenizer()._tokenize(
            "Persist Security Info=False;Integrated Security=true;\n"
            "Initial Catalog=AdventureWorks;Server=MSSQL1"
        )
        assert [key for key, _ in result] == [
            "Persist Security Info",
            "Integrated Security",
            "Initial Catalog",
            "Server",
        ]

    def test_backslash_in_value(self):
        """Test a named instance in an ADO value."""
        result = _PairListTokenizer()._tokenize("Data Source=MySqlServer\\MSSQL1;")
        assert result == [("Data Source", "MySqlServer\\MSSQL1")]

    def test_duplicates_are_returned_in_order(self):
        """Test that duplicate keys are not merged by the tokenizer."""
        assert _PairListTokenizer()._tokenize("a=1;A=2") == [("a", "1"), ("A", "2")]

    def test_missing_equals(self):
        """Test that a segment without = raises MalformedPair."""
        with pytest.raises(MalformedPair) as exc_info:
            _PairListTokenizer()._tokenize("foo;bar=1")
        assert exc_info.value.offset == 0
        assert "foo" in str(exc_info.value)

    def test_empty_segment(self):
        """Test that an empty segment in the middle raises MalformedPair."""
        with pytest.raises(MalformedPair) as exc_info:
            _PairListTokenizer()._tokenize("a=1;;b=2")
        assert exc_info.value.offset == 4

    def test_leading_semicolon(self):
        """Test that a leading semicolon raises MalformedPair."""
        with pytest.raises(MalformedPair):
            _PairListTokenizer()._tokenize(";a=1")

    def test_empty_key(self):
        """Test that an empty key raises EmptyKey."""
        with pytest.raises(EmptyKey) as exc_info:
            _PairListTokenizer()._tokenize("a=1; =v")
        assert exc_info.value.offset == 4

    def test_empty_braced_key(self):
        """Test that a key decoding to nothing raises EmptyKey."""
        with pytest.raises(EmptyKey):
            _PairListTokenizer()._tokenize("{}=v")

    def test_unterminated_brace(self):
        """Test that an unclosed brace raises UnterminatedBrace."""
        with pytest.raises(UnterminatedBrace) as exc_info:
            _PairListTokenizer()._tokenize("a={b;c=d")
        assert exc_info.value.offset == 2

    def test_base_offset(self):
        """Test that error offsets are relative to the full string."""
        with pytest.raises(UnterminatedBrace) as exc_info:
            _PairListTokenizer()._tokenize("a={b", base_offset=10)
        assert exc_info.value.offset == 12


class TestQuotedValues:
    """Quoted values are recognised in the ADO dialect only."""

    def test_double_quoted(self):
        """Test that ; inside double quotes is literal."""
        result = _PairListTokenizer(Dialect.ADO)._tokenize('a="x;y";b=2')
        assert result == [("a", "x;y"), ("b", "2")]

    def test_single_quoted_with_escape(self):
        """Test a doubled quote inside single quotes."""
        result = _PairListTokenizer(Dialect.ADO)._tokenize("a='it''s';b=2")
        assert result == [("a", "it's"), ("b", "2")]

    def test_quote_after_whitespace(self):
        """Test a quoted value preceded by blanks."""
        result = _PairListTokenizer(Dialect.ADO)._tokenize('a =  "x;y" ')
        assert result == [("a", "x;y")]

    def test_quote_inside_value(self):
        """Test that a quote after the first character is literal."""
        result = _PairListTokenizer(Dialect.ADO)._tokenize("name=O'Brien;x=1")
        assert result == [("name", "O'Brien"), ("x", "1")]

    def test_unterminated_quote(self):
        """Test that an unclosed quote raises UnterminatedQuote."""
        with pytest.raises(UnterminatedQuote) as exc_info:
            _PairListTokenizer(Dialect.ADO)._tokenize('a="x;y')
        assert exc_info.value.offset == 2

    def test_jdbc_does_not_quote(self):
        """Test that quotes do not protect separators in the JDBC dialect."""
        with pytest.raises(MalformedPair):
            _PairListTokenizer(Dialect.JDBC)._tokenize('a="x;y";b=2')

    def test_quoted_run_followed_by_text(self):
        """Test a quoted run that closes before the value ends."""
        result = _PairListTokenizer(Dialect.ADO)._tokenize('a="x;y"z;b=1')
        assert result == [("a", "x;yz"), ("b", "1")]

    def test_brace_inside_quoted_run(self):
        """Test that a brace inside a quoted run does not open a brace-literal."""
        result = _PairListTokenizer(Dialect.ADO)._tokenize('a="{"x;b=1')
        assert result == [("a", "{x"), ("b", "1")]

    def test_quoted_key(self):
        """Test that separators inside a quoted key are literal."""
        result = _PairListTokenizer(Dialect.ADO)._tokenize("'k;y'=1;' k=z '=2")
        assert result == [("k;y", "1"), (" k=z ", "2")]

    def test_unterminated_quoted_key(self):
        """Test that an unclosed quote in a key raises UnterminatedQuote."""
        with pytest.raises(UnterminatedQuote) as exc_info:
            _PairListTokenizer(Dialect.ADO)._tokenize("a=1; 'k=2")
        assert exc_info.value.offset == 5
