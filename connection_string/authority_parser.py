"""
Copyright (c) Microsoft Corporation.
Licensed under the MIT license.

Authority parser for JDBC connection strings.

Reads the prefix of

    jdbc:<subprotocol>://[serverName[\\instanceName][:portNumber]][;property=value...]

and reports where the property list begins.
"""

import re
from typing import NamedTuple, Optional

from connection_string.constants import (
    AUTHORITY_PREFIX,
    Dialect,
    INSTANCE_SEPARATOR,
    MAX_PORT,
    MIN_PORT,
    OPEN_BRACE,
    PAIR_SEPARATOR,
    PORT_SEPARATOR,
    SCHEME,
)
from connection_string.escaping import decode, read_braced
from connection_string.exceptions import InvalidPort, MalformedAuthority, MissingScheme

_SCHEME_PATTERN = re.compile(
    r"\s*" + SCHEME + r":([A-Za-z0-9][A-Za-z0-9+.\-]*)" + re.escape(AUTHORITY_PREFIX),
    re.IGNORECASE,
)
_PORT_PATTERN = re.compile(r"[0-9]+")


class Authority(NamedTuple):
    """Fields of a parsed JDBC authority."""

    subprotocol: str
    server_name: str
    instance_name: Optional[str]
    port: Optional[int]
    # Offset at which the property list starts (just after the ';')
    body_offset: int


class _AuthorityParser:
    """
    Internal parser for the JDBC authority. Not part of public API.

    Server and instance names may contain brace-literals, so delimiters
    inside braces do not end them.
    """

    def __init__(self, subprotocol: Optional[str] = None):
        """
        Initialize the parser.

        Args:
            subprotocol: Sub-protocol the text must use (case-insensitive).
                         If None, any sub-protocol is accepted.
        """
        self._subprotocol = subprotocol

    def _parse(self, connection_str: str) -> Authority:
        """
        Parse the authority at the start of a JDBC connection string.

        Args:
            connection_str: Full JDBC connection string

        Returns:
            Authority with the decoded fields and the property list offset

        Raises:
            MissingScheme: If the jdbc:<subprotocol>:// prefix is absent or unexpected
            MalformedAuthority: If '\\' or ':' has nothing after it
            InvalidPort: If the port is not an integer in 0-65535
            UnterminatedBrace: If a '{' in the server or instance name is never closed
        """
        match = _SCHEME_PATTERN.match(connection_str)
        if match is None:
            raise MissingScheme(
                f"Connection string must begin with '{SCHEME}:<subprotocol>{AUTHORITY_PREFIX}'",
                offset=0,
            )

        subprotocol = match.group(1)
        if self._subprotocol is not None and subprotocol.lower() != self._subprotocol.lower():
            raise MissingScheme(
                f"Invalid JDBC sub-protocol '{subprotocol}', expected '{self._subprotocol}'",
                offset=match.start(1),
            )

        str_len = len(connection_str)
        current_pos = match.end()

        # serverName
        name_start = current_pos
        current_pos = self._scan_name(
            connection_str, current_pos, (INSTANCE_SEPARATOR, PORT_SEPARATOR, PAIR_SEPARATOR)
        )
        server_name = decode(connection_str[name_start:current_pos], Dialect.JDBC, name_start)

        # \instanceName
        instance_name = None
        if current_pos < str_len and connection_str[current_pos] == INSTANCE_SEPARATOR:
            separator_pos = current_pos
            name_start = current_pos + 1
            current_pos = self._scan_name(connection_str, name_start, (PORT_SEPARATOR, PAIR_SEPARATOR))
            raw_instance = connection_str[name_start:current_pos]
            if not raw_instance.strip():
                raise MalformedAuthority("Missing instance name after '\\'", offset=separator_pos)
            instance_name = decode(raw_instance, Dialect.JDBC, name_start)

        # :portNumber
        port = None
        if current_pos < str_len and connection_str[current_pos] == PORT_SEPARATOR:
            separator_pos = current_pos
            port_start = current_pos + 1
            current_pos = self._scan_name(connection_str, port_start, (PAIR_SEPARATOR,))
            raw_port = connection_str[port_start:current_pos].strip()
            if not raw_port:
                raise MalformedAuthority("Missing port number after ':'", offset=separator_pos)
            port = self._parse_port(raw_port, port_start)

        # Anything left is the property list, introduced by ';'
        body_offset = current_pos + 1 if current_pos < str_len else str_len

        return Authority(subprotocol, server_name, instance_name, port, body_offset)

    @staticmethod
    def _scan_name(connection_str: str, start_pos: int, stop_chars) -> int:
        """Advance past a name, skipping brace-literals, until a stop character or the end."""
        str_len = len(connection_str)
        current_pos = start_pos
        while current_pos < str_len:
            ch = connection_str[current_pos]
            if ch in stop_chars:
                break
            if ch == OPEN_BRACE:
                _, current_pos = read_braced(connection_str, current_pos)
                continue
            current_pos += 1
        return current_pos

    @staticmethod
    def _parse_port(raw_port: str, offset: int) -> int:
        if not _PORT_PATTERN.fullmatch(raw_port):
            raise InvalidPort(f"Invalid port '{raw_port}'", offset=offset)
        port = int(raw_port)
        if not MIN_PORT <= port <= MAX_PORT:
            raise InvalidPort(
                f"Port {port} is out of range ({MIN_PORT}-{MAX_PORT})", offset=offset
            )
        return port
