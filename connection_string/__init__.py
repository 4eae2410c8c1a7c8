"""
Copyright (c) Microsoft Corporation.
Licensed under the MIT license.
This module initializes the connection_string package.
"""

__version__ = "0.1.0"

# Exceptions
from .exceptions import (
    Error,
    ParseError,
    AuthorityError,
    MissingScheme,
    MalformedAuthority,
    InvalidPort,
    PairSyntaxError,
    MalformedPair,
    EmptyKey,
    UnterminatedBrace,
    UnterminatedQuote,
)

# Dialects
from .constants import Dialect

# Escaping
from .escaping import decode, encode

# Properties
from .property_map import PropertyMap

# Connection String Objects
from .connection_string import ConnectionString, JdbcString, AdoNetString, parse

# Settings
from .helpers import Settings, get_settings, reset_settings, sanitize_connection_string

# Logging Configuration
from .logging import logger, setup_logging

__all__ = [
    "__version__",
    "Error",
    "ParseError",
    "AuthorityError",
    "MissingScheme",
    "MalformedAuthority",
    "InvalidPort",
    "PairSyntaxError",
    "MalformedPair",
    "EmptyKey",
    "UnterminatedBrace",
    "UnterminatedQuote",
    "Dialect",
    "decode",
    "encode",
    "PropertyMap",
    "ConnectionString",
    "JdbcString",
    "AdoNetString",
    "parse",
    "Settings",
    "get_settings",
    "reset_settings",
    "sanitize_connection_string",
    "logger",
    "setup_logging",
]
