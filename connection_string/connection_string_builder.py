"""
Copyright (c) Microsoft Corporation.
Licensed under the MIT license.

Connection string builder for connection_string.

Reconstructs JDBC and ADO connection strings from properties with
proper escaping, in the properties' current order.
"""

from typing import Iterable, Optional, Tuple, Union

from connection_string.constants import (
    AUTHORITY_PREFIX,
    AUTHORITY_RESERVED_CHARACTERS,
    Dialect,
    INSTANCE_SEPARATOR,
    KEY_VALUE_SEPARATOR,
    PAIR_SEPARATOR,
    PORT_SEPARATOR,
    SCHEME,
)
from connection_string.escaping import encode
from connection_string.property_map import PropertyMap


class _ConnectionStringBuilder:
    """
    Internal builder for connection strings. Not part of public API.

    Handles escaping of reserved characters and the JDBC authority prefix.
    """

    def __init__(
        self,
        dialect: Union[Dialect, str],
        initial_params: Optional[Union[PropertyMap, Iterable[Tuple[str, str]]]] = None,
        escape_style: Optional[str] = None,
    ):
        """
        Initialize the builder with optional initial parameters.

        Args:
            dialect: Dialect to emit
            initial_params: PropertyMap or iterable of (key, value) pairs
            escape_style: 'inline' or 'braced'; defaults to the escape_style setting
        """
        self._dialect = Dialect.from_value(dialect)
        if isinstance(initial_params, PropertyMap):
            self._params = initial_params.copy()
        else:
            self._params = PropertyMap(initial_params)
        self._escape_style = escape_style
        self._authority: Optional[Tuple[str, str, Optional[str], Optional[int]]] = None

    def with_authority(
        self,
        subprotocol: str,
        server_name: str = "",
        instance_name: Optional[str] = None,
        port: Optional[int] = None,
    ) -> '_ConnectionStringBuilder':
        """
        Set the JDBC authority.

        Args:
            subprotocol: Sub-protocol, e.g. 'sqlserver'
            server_name: Server name (may be empty)
            instance_name: Optional instance name
            port: Optional port number

        Returns:
            Self for method chaining
        """
        self._authority = (subprotocol, server_name, instance_name, port)
        return self

    def build(self) -> str:
        """
        Build the final connection string.

        Returns:
            JDBC or ADO formatted connection string with proper escaping

        Raises:
            ValueError: If a JDBC string is built without an authority
        """
        parts = [
            f"{self._escape_value(key)}{KEY_VALUE_SEPARATOR}{self._escape_value(value)}"
            for key, value in self._params.items()
        ]

        if self._dialect is Dialect.ADO:
            return PAIR_SEPARATOR.join(parts)

        if self._authority is None:
            raise ValueError("A JDBC connection string requires an authority (call with_authority())")
        return self._build_authority() + ''.join(PAIR_SEPARATOR + part for part in parts)

    def _build_authority(self) -> str:
        subprotocol, server_name, instance_name, port = self._authority
        authority = [f"{SCHEME}:{subprotocol}{AUTHORITY_PREFIX}", self._escape_authority(server_name)]
        if instance_name is not None:
            authority.append(INSTANCE_SEPARATOR + self._escape_authority(instance_name))
        if port is not None:
            authority.append(f"{PORT_SEPARATOR}{port}")
        return ''.join(authority)

    def _escape_value(self, value: str) -> str:
        """
        Escape a key or value if it contains special characters.

        Examples:
            >>> builder = _ConnectionStringBuilder('ado')
            >>> builder._escape_value("localhost")
            'localhost'
            >>> builder._escape_value("local;host")
            'local{;}host'
        """
        return encode(value, self._dialect, self._escape_style)

    def _escape_authority(self, name: str) -> str:
        return encode(name, Dialect.JDBC, self._escape_style, AUTHORITY_RESERVED_CHARACTERS)
