"""
Copyright (c) Microsoft Corporation.
Licensed under the MIT license.
This module defines the ConnectionString classes, the parsed form of a JDBC or ADO
connection string, and the parse() function that creates them.

Parsing is atomic: either a complete ConnectionString is returned or a ParseError
is raised. After parsing, properties can be read and changed with get(), set() and
remove(), and serialize() renders the current state back to text.
"""

from typing import Iterator, List, Optional, Tuple, Union

from connection_string.authority_parser import _AuthorityParser
from connection_string.connection_string_builder import _ConnectionStringBuilder
from connection_string.connection_string_parser import _PairListTokenizer
from connection_string.constants import Dialect
from connection_string.helpers import get_settings, sanitize_connection_string
from connection_string.logging import logger
from connection_string.property_map import PropertyMap


class ConnectionString:
    """
    Base class for parsed connection strings.

    Properties keep their insertion order and are looked up case-insensitively.
    Use parse(), JdbcString.parse() or AdoNetString.parse() to create instances.

    Methods:
        get(key) -> Optional[str]
        set(key, value) -> Optional[str]
        remove(key) -> Optional[str]
        keys() -> List[str]
        serialize() -> str
    """

    dialect: Dialect = None

    def __init__(self, properties: Optional[PropertyMap] = None) -> None:
        if self.dialect is None:
            raise TypeError(
                "ConnectionString cannot be instantiated directly; "
                "use parse(), JdbcString or AdoNetString"
            )
        self._properties = properties if properties is not None else PropertyMap()

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Return the value of a property, ignoring key case.

        Args:
            key (str): Property name.
            default: Value returned when the property is absent.

        Returns:
            Optional[str]: The decoded value, or default.
        """
        return self._properties.get(key, default)

    def set(self, key: str, value: str) -> Optional[str]:
        """
        Set a property. An existing property keeps its position, a new one is appended.

        Args:
            key (str): Property name.
            value (str): Literal value, stored as str.

        Returns:
            Optional[str]: The previous value, or None if the property is new.
        """
        logger.debug("Setting property '%s' on %s connection string", key, self.dialect.value)
        return self._properties.set(str(key), str(value))

    def remove(self, key: str) -> Optional[str]:
        """
        Remove a property.

        Args:
            key (str): Property name.

        Returns:
            Optional[str]: The removed value, or None if the property was absent.
        """
        logger.debug("Removing property '%s' from %s connection string", key, self.dialect.value)
        return self._properties.remove(key)

    def keys(self) -> List[str]:
        """Return the property names in their current order."""
        return self._properties.keys()

    def items(self) -> List[Tuple[str, str]]:
        """Return (key, value) tuples in their current order."""
        return self._properties.items()

    def serialize(self, escape_style: Optional[str] = None) -> str:
        """
        Render the connection string with its current properties and order.

        Args:
            escape_style (str): 'inline' or 'braced'; defaults to the escape_style setting.

        Returns:
            str: The connection string text.
        """
        builder = self._builder(escape_style)
        conn_str = builder.build()
        logger.debug("Serialized %s connection string: %s", self.dialect.value, conn_str)
        return conn_str

    def _builder(self, escape_style: Optional[str]) -> _ConnectionStringBuilder:
        return _ConnectionStringBuilder(self.dialect, self._properties, escape_style)

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {sanitize_connection_string(self.serialize())!r}>"

    def __len__(self) -> int:
        return len(self._properties)

    def __contains__(self, key) -> bool:
        return key in self._properties

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ConnectionString):
            return NotImplemented
        return type(self) is type(other) and self._properties == other._properties


class JdbcString(ConnectionString):
    """
    A parsed JDBC connection string.

    Format:
        jdbc:<subprotocol>://[serverName[\\instanceName][:portNumber]][;property=value...]

    The authority fields are exposed as read-only attributes and are never
    part of the properties.
    """

    dialect = Dialect.JDBC

    def __init__(
        self,
        subprotocol: str,
        server_name: str = "",
        instance_name: Optional[str] = None,
        port: Optional[int] = None,
        properties: Optional[PropertyMap] = None,
    ) -> None:
        super().__init__(properties)
        self._subprotocol = subprotocol
        self._server_name = server_name
        self._instance_name = instance_name
        self._port = port

    @classmethod
    def parse(cls, connection_str: str, subprotocol: Optional[str] = None) -> 'JdbcString':
        """
        Parse a JDBC connection string.

        Args:
            connection_str (str): Text such as 'jdbc:sqlserver://host\\inst:1433;user=sa'.
            subprotocol (str): Required sub-protocol. Defaults to the subprotocol
                setting; None accepts any.

        Returns:
            JdbcString: The parsed connection string.

        Raises:
            MissingScheme, MalformedAuthority, InvalidPort: For authority errors.
            MalformedPair, EmptyKey, UnterminatedBrace: For property list errors.
        """
        _check_text(connection_str)
        if subprotocol is None:
            subprotocol = get_settings().subprotocol
        logger.debug("Parsing jdbc connection string: %s", connection_str)

        authority = _AuthorityParser(subprotocol)._parse(connection_str)
        pairs = _PairListTokenizer(Dialect.JDBC)._tokenize(
            connection_str[authority.body_offset:], authority.body_offset
        )

        conn = cls(
            authority.subprotocol,
            authority.server_name,
            authority.instance_name,
            authority.port,
            PropertyMap(pairs),
        )
        logger.debug("Parsed jdbc connection string with %d properties", len(conn))
        return conn

    @property
    def subprotocol(self) -> str:
        """The sub-protocol, e.g. 'sqlserver'."""
        return self._subprotocol

    @property
    def server_name(self) -> str:
        """The server name; empty when the authority has no host."""
        return self._server_name

    @property
    def instance_name(self) -> Optional[str]:
        """The instance name, or None."""
        return self._instance_name

    @property
    def port(self) -> Optional[int]:
        """The port number, or None."""
        return self._port

    def _builder(self, escape_style: Optional[str]) -> _ConnectionStringBuilder:
        return super()._builder(escape_style).with_authority(
            self._subprotocol, self._server_name, self._instance_name, self._port
        )

    def __eq__(self, other) -> bool:
        result = super().__eq__(other)
        if result is not True:
            return result
        return (
            self._subprotocol.lower() == other._subprotocol.lower()
            and self._server_name == other._server_name
            and self._instance_name == other._instance_name
            and self._port == other._port
        )


class AdoNetString(ConnectionString):
    """
    A parsed ADO.NET style connection string.

    Format:
        key=value[;key=value]...[;]

    Values may be brace-literals ({a;b}) or quoted ("a;b", 'a;b').
    """

    dialect = Dialect.ADO

    @classmethod
    def parse(cls, connection_str: str) -> 'AdoNetString':
        """
        Parse an ADO connection string.

        Args:
            connection_str (str): Text such as 'Server=tcp:localhost,1433;User ID=sa'.

        Returns:
            AdoNetString: The parsed connection string.

        Raises:
            MalformedPair, EmptyKey, UnterminatedBrace, UnterminatedQuote: For syntax errors.
        """
        _check_text(connection_str)
        logger.debug("Parsing ado connection string: %s", connection_str)

        pairs = _PairListTokenizer(Dialect.ADO)._tokenize(connection_str)

        conn = cls(PropertyMap(pairs))
        logger.debug("Parsed ado connection string with %d properties", len(conn))
        return conn


def _check_text(connection_str) -> None:
    if not isinstance(connection_str, str):
        raise TypeError(
            f"Connection string must be a str, got {type(connection_str).__name__}"
        )


def parse(
    dialect: Union[Dialect, str],
    connection_str: str,
    subprotocol: Optional[str] = None,
) -> ConnectionString:
    """
    Parse a connection string in the given dialect.

    Args:
        dialect (Dialect or str): Dialect.JDBC / 'jdbc' or Dialect.ADO / 'ado'.
        connection_str (str): The connection string text.
        subprotocol (str): JDBC only, see JdbcString.parse().

    Returns:
        ConnectionString: A JdbcString or an AdoNetString.

    Raises:
        ValueError: If the dialect is unknown.
        ParseError: If the text is not valid for the dialect.

    Examples:
        >>> conn = parse("jdbc", "jdbc:sqlserver://localhost:1433;database=master")
        >>> conn.port, conn.get("DATABASE")
        (1433, 'master')
    """
    dialect = Dialect.from_value(dialect)
    if dialect is Dialect.JDBC:
        return JdbcString.parse(connection_str, subprotocol)
    return AdoNetString.parse(connection_str)
