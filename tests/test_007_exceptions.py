"""
Copyright (c) Microsoft Corporation.
Licensed under the MIT license.

Tests for the exception hierarchy.
"""

import pytest

from connection_string.exceptions import (
    AuthorityError,
    EmptyKey,
    Error,
    InvalidPort,
    MalformedAuthority,
    MalformedPair,
    MissingScheme,
    PairSyntaxError,
    ParseError,
    UnterminatedBrace,
    UnterminatedQuote,
)


@pytest.mark.parametrize("exc_class,parent", [
    (MissingScheme, AuthorityError),
    (MalformedAuthority, AuthorityError),
    (InvalidPort, AuthorityError),
    (MalformedPair, PairSyntaxError),
    (EmptyKey, PairSyntaxError),
    (UnterminatedBrace, PairSyntaxError),
    (UnterminatedQuote, PairSyntaxError),
])
def test_hierarchy(exc_class, parent):
    """Test that every error kind sits under its family and ParseError"""
    assert issubclass(exc_class, parent)
    assert issubclass(exc_class, ParseError)
    assert issubclass(exc_class, Error)


@pytest.mark.parametrize("exc_class", [
    MissingScheme, MalformedAuthority, InvalidPort,
    MalformedPair, EmptyKey, UnterminatedBrace, UnterminatedQuote,
])
def test_kind_names_the_class(exc_class):
    """Test that kind matches the taxonomy name"""
    assert exc_class.kind == exc_class.__name__


def test_default_message():
    """Test default messages"""
    error = EmptyKey()
    assert error.message == "Key must not be empty"
    assert error.offset is None
    assert str(error) == "Key must not be empty"


def test_offset_in_message():
    """Test that the offset is appended to the message"""
    error = UnterminatedBrace(offset=7)
    assert error.offset == 7
    assert str(error) == "Unclosed braced value at position 7"
    assert error.message == "Unclosed braced value"


def test_custom_message():
    """Test a custom message with an offset"""
    error = InvalidPort("Invalid port 'abc'", offset=22)
    assert str(error) == "Invalid port 'abc' at position 22"
