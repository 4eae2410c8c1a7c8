"""
Copyright (c) Microsoft Corporation.
Licensed under the MIT license.

Pair-list tokenizer for connection strings.

Splits a semicolon-separated key=value body into decoded pairs:
- ';' and '=' only count outside brace-literals (and ADO quoted keys and values)
- The first top-level '=' of a segment separates key from value
- A single trailing ';' is ignored
- Any error aborts tokenizing immediately
"""

from typing import List, Tuple

from connection_string.constants import (
    Dialect,
    KEY_VALUE_SEPARATOR,
    OPEN_BRACE,
    PAIR_SEPARATOR,
    QUOTE_CHARACTERS,
)
from connection_string.escaping import decode, read_braced, read_quoted
from connection_string.exceptions import EmptyKey, MalformedPair


class _PairListTokenizer:
    """
    Internal tokenizer for key=value lists. Not part of public API.

    Used on the whole text for the ADO dialect and on the text after the
    authority for the JDBC dialect.
    """

    def __init__(self, dialect: Dialect = Dialect.ADO):
        """
        Initialize the tokenizer.

        Args:
            dialect: Dialect whose grammar applies. Quoted values are only
                     recognised for Dialect.ADO.
        """
        self._dialect = Dialect.from_value(dialect)

    def _tokenize(self, body: str, base_offset: int = 0) -> List[Tuple[str, str]]:
        """
        Split a body into decoded (key, value) pairs in textual order.

        Duplicate keys are returned as they occur; the caller decides how they merge.

        Args:
            body: The pair list
            base_offset: Offset of body within the full connection string, used in errors

        Returns:
            List of (key, value) tuples

        Raises:
            MalformedPair: If a segment has no top-level '='
            EmptyKey: If a key is empty
            UnterminatedBrace: If a '{' is never closed
            UnterminatedQuote: If an ADO quoted value is never closed

        Examples:
            >>> _PairListTokenizer()._tokenize("Server={;local;};PWD={p}}w}")
            [('Server', ';local;'), ('PWD', 'p}w')]
        """
        pairs = []
        current_pos = 0
        str_len = len(body)

        while current_pos < str_len:
            segment_start = current_pos
            separator_pos, current_pos = self._scan_segment(body, current_pos, base_offset)

            if separator_pos is None:
                incomplete_text = body[segment_start:current_pos].strip()
                if incomplete_text:
                    raise MalformedPair(
                        f"Incomplete specification: '{incomplete_text}' has no value (missing '=')",
                        offset=base_offset + segment_start,
                    )
                if current_pos < str_len:
                    raise MalformedPair("Empty key-value pair", offset=base_offset + segment_start)
                # Whitespace after the final ';'
                break

            raw_key = body[segment_start:separator_pos]
            key = decode(raw_key, self._dialect, base_offset + segment_start)
            if not key:
                raise EmptyKey(offset=base_offset + segment_start)

            value_start = separator_pos + 1
            value = decode(body[value_start:current_pos], self._dialect, base_offset + value_start)
            pairs.append((key, value))

            # Skip the ';'
            current_pos += 1

        return pairs

    def _scan_segment(self, body: str, start_pos: int, base_offset: int):
        """
        Scan one segment up to the next top-level ';' or end of body.

        Returns:
            Tuple of (position of the first top-level '=' or None,
                      position of the terminating ';' or len(body))
        """
        str_len = len(body)
        current_pos = start_pos
        separator_pos = None
        # True until the key, and again the value, has a non-blank character
        at_start = True

        while current_pos < str_len:
            ch = body[current_pos]

            if ch == PAIR_SEPARATOR:
                break

            if ch == OPEN_BRACE:
                _, current_pos = read_braced(body, current_pos, base_offset)
                at_start = False
                continue

            if at_start and not ch.isspace():
                at_start = False
                if self._dialect is Dialect.ADO and ch in QUOTE_CHARACTERS:
                    _, current_pos = read_quoted(body, current_pos, base_offset)
                    continue

            if separator_pos is None and ch == KEY_VALUE_SEPARATOR:
                separator_pos = current_pos
                at_start = True

            current_pos += 1

        return separator_pos, current_pos
