"""
Copyright (c) Microsoft Corporation.
Licensed under the MIT license.
This module provides helper functions and settings for the connection_string package.
"""

import re
import threading
from typing import Optional

from connection_string.constants import ESCAPE_INLINE

# Value of a sensitive key: a quoted literal, or any run of brace-literals and
# characters up to the next top-level ';'
_SENSITIVE_PAIR = re.compile(
    r"(\b(?:password|pwd|token|access\s*token|api_?key)\s*=\s*)"
    r"(\"(?:[^\"]|\"\")*\"|'(?:[^']|'')*'|(?:\{(?:[^}]|\}\})*\}|[^;])*)",
    re.IGNORECASE,
)


def sanitize_connection_string(conn_str: str) -> str:
    """
    Sanitize the connection string by removing sensitive information.

    Brace-literal and quoted values are masked as a whole, so a password
    such as {my;secret} does not leak past its first ';'.

    Args:
        conn_str (str): The connection string to sanitize.
    Returns:
        str: The sanitized connection string.
    """
    return _SENSITIVE_PAIR.sub(r"\1***", conn_str)


class Settings:
    """
    Settings class for connection_string package configuration.

    This class holds global defaults that affect parsing and serialization,
    including the escape style used when encoding values and the JDBC
    sub-protocol that parse() insists on.
    """
    def __init__(self) -> None:
        self.escape_style: str = ESCAPE_INLINE
        # None accepts any sub-protocol
        self.subprotocol: Optional[str] = None


# Global settings instance
_settings: Settings = Settings()
_settings_lock: threading.Lock = threading.Lock()


def get_settings() -> Settings:
    """Return the global settings object"""
    with _settings_lock:
        return _settings


def reset_settings() -> Settings:
    """Restore the global settings to their defaults and return them"""
    with _settings_lock:
        _settings.__init__()
        return _settings
