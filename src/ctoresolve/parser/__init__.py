# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer, parser and printer for .cto files."""

from ctoresolve.parser.lexer import LexerError
from ctoresolve.parser.parser import ParseError, parse
from ctoresolve.parser.printer import to_cto

__all__ = [
    "parse",
    "ParseError",
    "LexerError",
    "to_cto",
]
