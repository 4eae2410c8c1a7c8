"""
Copyright (c) Microsoft Corporation.
Licensed under the MIT license.

Escaping codec for connection string keys and values.

Handles the brace syntax shared by both dialects:
- Brace-literal: {value}, content taken verbatim
- Escaped right brace inside a brace-literal: }} → }
- Inline fragments: a{;}b → a;b
- Quoted values (ADO only): "value" or 'value', doubled quote → quote

decode(encode(v)) == v holds for every literal v and both escape styles.
"""

from typing import Iterable, List, Optional, Tuple

from connection_string.constants import (
    CLOSE_BRACE,
    Dialect,
    ESCAPE_BRACED,
    ESCAPE_STYLES,
    OPEN_BRACE,
    QUOTE_CHARACTERS,
    RESERVED_CHARACTERS,
)
from connection_string.exceptions import UnterminatedBrace, UnterminatedQuote
from connection_string.helpers import get_settings


def read_braced(text: str, start_pos: int, base_offset: int = 0) -> Tuple[str, int]:
    """
    Read a brace-literal starting at an opening '{'.

    Braces do not nest: '{' inside the literal is an ordinary character and
    '}}' is the only escape.

    Args:
        text: The text being scanned
        start_pos: Position of the opening '{'
        base_offset: Offset of text within the full connection string, used in errors

    Returns:
        Tuple of (literal content, position just after the closing '}')

    Raises:
        UnterminatedBrace: If the literal is not closed before the end of text
    """
    str_len = len(text)
    pos = start_pos + 1
    value = []

    while pos < str_len:
        ch = text[pos]
        if ch == CLOSE_BRACE:
            if pos + 1 < str_len and text[pos + 1] == CLOSE_BRACE:
                value.append(CLOSE_BRACE)
                pos += 2
            else:
                return ''.join(value), pos + 1
        else:
            value.append(ch)
            pos += 1

    raise UnterminatedBrace(offset=base_offset + start_pos)


def read_quoted(text: str, start_pos: int, base_offset: int = 0) -> Tuple[str, int]:
    """
    Read a quoted literal starting at an opening quote character.

    Args:
        text: The text being scanned
        start_pos: Position of the opening quote
        base_offset: Offset of text within the full connection string, used in errors

    Returns:
        Tuple of (literal content, position just after the closing quote)

    Raises:
        UnterminatedQuote: If the quote is not closed before the end of text
    """
    quote = text[start_pos]
    str_len = len(text)
    pos = start_pos + 1
    value = []

    while pos < str_len:
        ch = text[pos]
        if ch == quote:
            if pos + 1 < str_len and text[pos + 1] == quote:
                value.append(quote)
                pos += 2
            else:
                return ''.join(value), pos + 1
        else:
            value.append(ch)
            pos += 1

    raise UnterminatedQuote(offset=base_offset + start_pos)


def decode(raw: str, dialect: Dialect = Dialect.JDBC, offset: int = 0) -> str:
    """
    Decode a raw key or value into its literal text.

    Whitespace outside brace-literals at either end is dropped. A value wholly
    enclosed in braces yields its content; otherwise every inline '{X}'
    fragment is replaced by X and other characters pass through. In the ADO
    dialect a leading quoted run is unquoted and the rest is read as usual.

    Args:
        raw: Raw text as spelled in the connection string
        dialect: Dialect whose grammar applies
        offset: Offset of raw within the full connection string, used in errors

    Returns:
        The decoded literal

    Raises:
        UnterminatedBrace: If a '{' is never closed
        UnterminatedQuote: If an ADO quoted value is never closed

    Examples:
        >>> decode("{my_password;123}")
        'my_password;123'
        >>> decode("a{;;}new{;;}password")
        'a;;new;;password'
        >>> decode("{p}}w}")
        'p}w'
    """
    stripped = raw.strip()
    offset += len(raw) - len(raw.lstrip())

    literal = []
    pos = 0
    if dialect is Dialect.ADO and stripped[:1] in QUOTE_CHARACTERS:
        value, pos = read_quoted(stripped, 0, offset)
        literal.append(value)

    str_len = len(stripped)
    while pos < str_len:
        ch = stripped[pos]
        if ch == OPEN_BRACE:
            value, pos = read_braced(stripped, pos, offset)
            literal.append(value)
        else:
            literal.append(ch)
            pos += 1
    return ''.join(literal)


def _escape_mask(literal: str, dialect: Dialect, reserved: Iterable[str]) -> List[bool]:
    """Flag each character of literal that has to sit inside braces."""
    content_start = len(literal) - len(literal.lstrip())
    content_end = len(literal.rstrip())
    quoted_start = dialect is Dialect.ADO

    mask = []
    for pos, ch in enumerate(literal):
        mask.append(
            ch in reserved
            or pos < content_start
            or pos >= content_end
            or (quoted_start and pos == content_start and ch in QUOTE_CHARACTERS)
        )
    return mask


def _wrap(run: str) -> str:
    return OPEN_BRACE + run.replace(CLOSE_BRACE, CLOSE_BRACE * 2) + CLOSE_BRACE


def encode(
    literal: str,
    dialect: Dialect = Dialect.JDBC,
    style: Optional[str] = None,
    reserved: Iterable[str] = RESERVED_CHARACTERS,
) -> str:
    """
    Encode a literal so that it survives tokenizing and decode().

    Safe literals (no reserved characters, no leading or trailing whitespace)
    are returned unchanged.

    Args:
        literal: The literal text
        dialect: Dialect whose grammar applies
        style: 'inline' wraps only the runs that need escaping, 'braced' wraps the
               whole value. Defaults to the escape_style setting.
        reserved: Characters that must be escaped

    Returns:
        The encoded text

    Raises:
        ValueError: If style is not a known escape style

    Examples:
        >>> encode("localhost")
        'localhost'
        >>> encode("a;;new;;password")
        'a{;;}new{;;}password'
        >>> encode("a;;new;;password", style="braced")
        '{a;;new;;password}'
    """
    if style is None:
        style = get_settings().escape_style
    if style not in ESCAPE_STYLES:
        raise ValueError(
            f"Invalid escape style: {style}. Must be one of: {', '.join(ESCAPE_STYLES)}"
        )

    mask = _escape_mask(literal, dialect, reserved)
    if not any(mask):
        return literal

    if style == ESCAPE_BRACED:
        return _wrap(literal)

    parts = []
    run = []
    for ch, needs_escape in zip(literal, mask):
        if needs_escape:
            run.append(ch)
            continue
        if run:
            parts.append(_wrap(''.join(run)))
            run = []
        parts.append(ch)
    if run:
        parts.append(_wrap(''.join(run)))
    return ''.join(parts)
