# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Identifier grammar shared by declaration, property and enum value names."""

from __future__ import annotations

import unicodedata

# ###############
# Public Interface
# ###############

RESERVED_IDENTIFIERS: frozenset[str] = frozenset({"null", "true", "false"})


def is_identifier_start(ch: str) -> bool:
    """Return True if *ch* may begin an identifier (escapes excluded)."""
    return ch in "$_" or unicodedata.category(ch) in _START_CATEGORIES


def is_identifier_part(ch: str) -> bool:
    """Return True if *ch* may continue an identifier (escapes excluded)."""
    if ch in "$_" or ch in _JOINERS:
        return True
    return unicodedata.category(ch) in _PART_CATEGORIES


def escape_length(text: str, pos: int) -> int:
    """Return 6 if a ``\\uXXXX`` escape starts at *pos* in *text*, else 0."""
    if text.startswith("\\u", pos) and len(text) >= pos + 6:
        digits = text[pos + 2 : pos + 6]
        if all(c in _HEX_DIGITS for c in digits):
            return 6
    return 0


def is_valid_identifier(name: str) -> bool:
    """Check *name* against the identifier grammar.

    The name must not equal a reserved word. Its first character must be a
    Unicode letter, ``$``, ``_`` or a ``\\uXXXX`` escape; later characters may
    also be combining marks, decimal digits, connector punctuation or
    zero-width (non-)joiners.
    """
    if not name or name in RESERVED_IDENTIFIERS:
        return False
    pos = 0
    while pos < len(name):
        step = escape_length(name, pos)
        if step:
            pos += step
            continue
        ch = name[pos]
        if pos == 0:
            if not is_identifier_start(ch):
                return False
        elif not is_identifier_part(ch):
            return False
        pos += 1
    return True


# ################
# Implementation
# ################

_START_CATEGORIES = frozenset({"Lu", "Ll", "Lt", "Lm", "Lo", "Nl"})
_PART_CATEGORIES = _START_CATEGORIES | {"Mn", "Mc", "Nd", "Pc"}
_JOINERS = "\u200c\u200d"
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
