"""
Single-pass delimited text scanner.

Responsibilities:
- validate the delimiter / quote pair once, at construction
- walk the text left to right, splitting records on CR, LF or CRLF
  without normalizing line endings first
- extract quoted fields (doubled quotes unescaped, embedded newlines kept)
  and unquoted fields (taken verbatim)
- decide the trailing empty field / trailing record at end of input
"""

from __future__ import annotations

import logging
from typing import List, Optional, Set, Tuple

from .errors import ConfigurationError, InvalidInputError, UnterminatedQuoteError
from .rules import CR, CSV_DELIMITER, DEFAULT_QUOTE, LF, LINE_TERMINATORS

logger = logging.getLogger(__name__)

Record = List[str]


def _check_char(name: str, value: object) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{name} must be a string, got {type(value).__name__}")
    if len(value) != 1:
        raise ConfigurationError(f"{name} must be exactly one character, got {value!r}")
    return value


class Parser:
    """
    Parse delimited text with a fixed delimiter and quote character.

    An instance holds nothing but its configuration, so it can be reused
    for any number of parse() calls, from any number of threads.

    With strict=False (the default) an unterminated quoted field is not an
    error: the opening quote is skipped and scanning resumes on the next
    character. strict=True raises UnterminatedQuoteError instead.
    """

    __slots__ = ("_delimiter", "_quote", "_strict")

    def __init__(self, delimiter: str = CSV_DELIMITER, quote: str = DEFAULT_QUOTE, *, strict: bool = False) -> None:
        delimiter = _check_char("delimiter", delimiter)
        quote = _check_char("quote", quote)
        if delimiter == quote:
            raise ConfigurationError(f"delimiter and quote must differ, both are {delimiter!r}")
        self._delimiter = delimiter
        self._quote = quote
        self._strict = bool(strict)

    @property
    def delimiter(self) -> str:
        return self._delimiter

    @property
    def quote(self) -> str:
        return self._quote

    @property
    def strict(self) -> bool:
        return self._strict

    def __repr__(self) -> str:
        return f"Parser(delimiter={self._delimiter!r}, quote={self._quote!r}, strict={self._strict})"

    def parse(self, text: str) -> List[Record]:
        """
        Split text into records of fields.

        Always returns one more record than there are line terminators in
        text (CRLF counts once); the last record may be empty.
        """
        if not isinstance(text, str):
            raise InvalidInputError(f"text must be a string, got {type(text).__name__}")

        delimiter = self._delimiter
        records: List[Record] = []
        record: Record = []
        length = len(text)
        skipped = 0
        # closing-quote candidates already known to lead to an unterminated field
        dead: Set[int] = set()
        i = 0

        while i < length:
            current = text[i]

            if current in LINE_TERMINATORS:
                if i > 0 and text[i - 1] == delimiter:
                    record.append("")
                records.append(record)
                record = []
                if current == CR and i + 1 < length and text[i + 1] == LF:
                    i += 2
                else:
                    i += 1
                continue

            if current == self._quote:
                match = self._quoted_field(text, i, dead)
                if match is None:
                    if self._strict:
                        raise UnterminatedQuoteError(i)
                    # lenient: drop the opening quote and rescan from the next character
                    logger.debug("Unterminated quoted field at %d, skipping one character", i)
                    skipped += 1
                    i += 1
                    continue
            else:
                match = self._unquoted_field(text, i)

            value, i = match
            record.append(value)

        if i > 0 and text[i - 1] == delimiter:
            record.append("")
        records.append(record)

        logger.debug("Parsed %d chars into %d records (%d chars skipped)", length, len(records), skipped)
        return records

    def _quoted_field(self, text: str, start: int, dead: Set[int]) -> Optional[Tuple[str, int]]:
        """
        Match a quoted field opening at text[start].

        Returns (value, end) where end is just past the closing quote, or past
        the delimiter when one follows it. Returns None when no closing quote
        is followed by a delimiter, a line terminator or end of text.

        What happens from a given candidate quote onward depends only on the
        text, so every candidate seen by a failed match is added to dead and
        later matches stop as soon as they reach one.
        """
        quote = self._quote
        delimiter = self._delimiter
        length = len(text)
        seen: List[int] = []
        pos = start + 1

        while True:
            close = text.find(quote, pos)
            if close < 0 or close in dead:
                break
            seen.append(close)
            after = close + 1

            if after < length and text[after] == quote:
                # doubled quote stands for one literal quote
                pos = after + 1
                continue

            if after == length or text[after] in LINE_TERMINATORS:
                end = after
            elif text[after] == delimiter:
                end = after + 1
            else:
                # a lone quote inside the content
                break
            return text[start + 1:close].replace(quote * 2, quote), end

        dead.update(seen)
        return None

    def _unquoted_field(self, text: str, start: int) -> Tuple[str, int]:
        """Match an unquoted field; it runs to the next delimiter, line terminator or end of text."""
        delimiter = self._delimiter
        length = len(text)
        end = start
        while end < length:
            char = text[end]
            if char == delimiter:
                return text[start:end], end + 1
            if char in LINE_TERMINATORS:
                break
            end += 1
        return text[start:end], end


def parse(text: str, delimiter: str = CSV_DELIMITER, quote: str = DEFAULT_QUOTE, *, strict: bool = False) -> List[Record]:
    """One-shot helper: build a Parser and parse text with it."""
    return Parser(delimiter, quote, strict=strict).parse(text)
