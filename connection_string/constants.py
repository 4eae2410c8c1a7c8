"""
Copyright (c) Microsoft Corporation.
Licensed under the MIT license.
This module contains the constants shared by the connection string engine.
"""

from enum import Enum


class Dialect(Enum):
    """
    Connection string grammars understood by the engine.

    JDBC: jdbc:<subprotocol>://server[\\instance][:port][;key=value]...
    ADO:  key=value[;key=value]...
    """

    JDBC = "jdbc"
    ADO = "ado"

    @classmethod
    def from_value(cls, value) -> "Dialect":
        """Resolve a Dialect member from a member, its value or its name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if lowered in (member.value, member.name.lower()):
                    return member
        raise ValueError(
            f"Unknown dialect: {value!r}. "
            f"Must be one of: {', '.join(m.value for m in cls)}"
        )


# Characters with syntactic meaning in every dialect
PAIR_SEPARATOR = ";"
KEY_VALUE_SEPARATOR = "="
OPEN_BRACE = "{"
CLOSE_BRACE = "}"
RESERVED_CHARACTERS = frozenset(";={}")

# Authority delimiters (JDBC only)
SCHEME = "jdbc"
AUTHORITY_PREFIX = "://"
INSTANCE_SEPARATOR = "\\"
PORT_SEPARATOR = ":"
AUTHORITY_RESERVED_CHARACTERS = RESERVED_CHARACTERS | frozenset("\\:")

# Quote characters recognised at the start of an ADO value
QUOTE_CHARACTERS = ("\"", "'")

MIN_PORT = 0
MAX_PORT = 65535

# Escape styles accepted by the codec
ESCAPE_INLINE = "inline"
ESCAPE_BRACED = "braced"
ESCAPE_STYLES = (ESCAPE_INLINE, ESCAPE_BRACED)
