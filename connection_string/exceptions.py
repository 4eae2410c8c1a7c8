"""
Copyright (c) Microsoft Corporation.
Licensed under the MIT license.
This module defines the exceptions raised while parsing connection strings.
"""

from typing import Optional


class Error(Exception):
    """
    Base class for all connection string errors.
    It can be used to catch any exception raised by this package.
    """

    kind = "Error"

    def __init__(self, message="An error occurred", offset: Optional[int] = None) -> None:
        self.message = message
        self.offset = offset
        if offset is not None:
            message = f"{message} at position {offset}"
        super().__init__(message)


class ParseError(Error):
    """
    Base class for errors raised by parse().
    Parsing is atomic: when one of these is raised no connection string is produced.
    """

    kind = "ParseError"

    def __init__(self, message="Invalid connection string", offset: Optional[int] = None) -> None:
        super().__init__(message, offset)


class AuthorityError(ParseError):
    """
    Error in the jdbc:<subprotocol>://server[\\instance][:port] prefix.
    Only raised for the JDBC dialect.
    """

    kind = "AuthorityError"


class MissingScheme(AuthorityError):
    """The text does not begin with the expected jdbc:<subprotocol>:// prefix."""

    kind = "MissingScheme"

    def __init__(self, message="Invalid JDBC sub-protocol", offset: Optional[int] = None) -> None:
        super().__init__(message, offset)


class MalformedAuthority(AuthorityError):
    """A '\\' or ':' in the authority is not followed by any content."""

    kind = "MalformedAuthority"

    def __init__(self, message="Malformed authority", offset: Optional[int] = None) -> None:
        super().__init__(message, offset)


class InvalidPort(AuthorityError):
    """The port is not numeric or is outside 0-65535."""

    kind = "InvalidPort"

    def __init__(self, message="Invalid port", offset: Optional[int] = None) -> None:
        super().__init__(message, offset)


class PairSyntaxError(ParseError):
    """
    Error in the key=value list.
    Raised for both dialects.
    """

    kind = "PairSyntaxError"


class MalformedPair(PairSyntaxError):
    """A segment of the pair list has no top-level '='."""

    kind = "MalformedPair"

    def __init__(self, message="Key-value pairs must be joined by a '='", offset: Optional[int] = None) -> None:
        super().__init__(message, offset)


class EmptyKey(PairSyntaxError):
    """A pair has an empty or whitespace-only key."""

    kind = "EmptyKey"

    def __init__(self, message="Key must not be empty", offset: Optional[int] = None) -> None:
        super().__init__(message, offset)


class UnterminatedBrace(PairSyntaxError):
    """A '{' was opened and never closed."""

    kind = "UnterminatedBrace"

    def __init__(self, message="Unclosed braced value", offset: Optional[int] = None) -> None:
        super().__init__(message, offset)


class UnterminatedQuote(PairSyntaxError):
    """A quoted ADO value was opened and never closed."""

    kind = "UnterminatedQuote"

    def __init__(self, message="Unclosed quoted value", offset: Optional[int] = None) -> None:
        super().__init__(message, offset)
