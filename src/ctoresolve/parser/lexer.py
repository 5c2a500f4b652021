# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for .cto model files.

Produces the token stream consumed by :mod:`ctoresolve.parser.parser`.
"""

import enum
from dataclasses import dataclass

from ctoresolve.model.identifiers import escape_length, is_identifier_part, is_identifier_start

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the CTO lexer."""

    # Keywords
    NAMESPACE = "namespace"
    IMPORT = "import"
    FROM = "from"
    ABSTRACT = "abstract"
    CONCEPT = "concept"
    ASSET = "asset"
    PARTICIPANT = "participant"
    TRANSACTION = "transaction"
    EVENT = "event"
    ENUM = "enum"
    EXTENDS = "extends"
    IDENTIFIED = "identified"
    BY = "by"
    O = "o"
    DEFAULT = "default"
    REGEX = "regex"
    RANGE = "range"
    OPTIONAL = "optional"
    TRUE = "true"
    FALSE = "false"

    # Symbols and operators
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    DOT = "."
    EQUALS = "="
    AT = "@"
    STAR = "*"
    ARROW = "-->"

    # Literals
    STRING = "STRING"
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    REGEX_LITERAL = "REGEX_LITERAL"
    URI = "URI"

    # Identifiers
    IDENTIFIER = "IDENTIFIER"

    # End of file
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """One scanned token and where it starts in the source.

    Attributes:
        type: The kind of token.
        value: The raw text of the token. STRING tokens hold the decoded
            string content; REGEX_LITERAL tokens hold ``pattern/flags``.
        line: Line of the first character, counted from 1.
        column: Column of the first character, counted from 1.
    """

    type: TokenType
    value: str
    line: int
    column: int


class LexerError(Exception):
    """Raised for characters the CTO grammar does not allow and for unclosed literals or comments.

    Attributes:
        line: Line of the offending character, counted from 1.
        column: Column of the offending character, counted from 1.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def tokenize(source: str) -> list[Token]:
    """Split CTO source text into tokens.

    Whitespace and comments produce no tokens.

    Args:
        source: The full text of a .cto file.

    Returns:
        The tokens in source order, terminated by exactly one EOF token.

    Raises:
        LexerError: On unexpected characters, unterminated string or regex
            literals, or unterminated block comments.
    """
    return _Lexer(source).tokenize()


# ################
# Implementation
# ################

_KEYWORDS: dict[str, TokenType] = {
    "namespace": TokenType.NAMESPACE,
    "import": TokenType.IMPORT,
    "from": TokenType.FROM,
    "abstract": TokenType.ABSTRACT,
    "concept": TokenType.CONCEPT,
    "asset": TokenType.ASSET,
    "participant": TokenType.PARTICIPANT,
    "transaction": TokenType.TRANSACTION,
    "event": TokenType.EVENT,
    "enum": TokenType.ENUM,
    "extends": TokenType.EXTENDS,
    "identified": TokenType.IDENTIFIED,
    "by": TokenType.BY,
    "o": TokenType.O,
    "default": TokenType.DEFAULT,
    "regex": TokenType.REGEX,
    "range": TokenType.RANGE,
    "optional": TokenType.OPTIONAL,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "=": TokenType.EQUALS,
    "@": TokenType.AT,
    "*": TokenType.STAR,
}

# Tokens that can never occur inside an import statement.
_STATEMENT_BOUNDARIES: frozenset[TokenType] = frozenset(
    {TokenType.O, TokenType.ARROW, TokenType.AT, TokenType.URI, TokenType.NAMESPACE}
)

_STRING_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
    "'": "'",
}


class _Lexer:
    """Character-level scanner over one source string."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._column = 1
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Scan the whole source and return its tokens."""
        while self._pos < len(self._source):
            self._skip_whitespace_and_comments()
            if self._pos >= len(self._source):
                break
            self._scan_token()
        self._tokens.append(Token(TokenType.EOF, "", self._line, self._column))
        return self._tokens

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character under the cursor (empty at the end)."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self, offset: int = 1) -> str:
        """Return the character *offset* positions ahead, or '' past the end."""
        if self._pos + offset < len(self._source):
            return self._source[self._pos + offset]
        return ""

    def _advance(self) -> str:
        """Move past the character under the cursor and return it."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    def _previous_types(self, count: int) -> tuple[TokenType, ...]:
        """Return the types of the last *count* emitted tokens, oldest first."""
        return tuple(tok.type for tok in self._tokens[-count:])

    def _in_import_statement(self) -> bool:
        """Return True if the tokens since the last statement boundary form an import."""
        for index in range(len(self._tokens) - 1, -1, -1):
            tok_type = self._tokens[index].type
            if tok_type == TokenType.IMPORT:
                return True
            if tok_type in _STATEMENT_BOUNDARIES:
                return False
            if tok_type == TokenType.LBRACE and (index == 0 or self._tokens[index - 1].type != TokenType.DOT):
                return False
        return False

    # ------------------------------------------------------------------
    # Trivia
    # ------------------------------------------------------------------

    def _skip_whitespace_and_comments(self) -> None:
        """Move the cursor past any whitespace and comments."""
        while self._pos < len(self._source):
            ch = self._current()
            if ch in " \t\r\n\ufeff":
                self._advance()
            elif ch == "/" and self._peek() == "/":
                self._skip_line_comment()
            elif ch == "/" and self._peek() == "*":
                self._skip_block_comment()
            else:
                break

    def _skip_line_comment(self) -> None:
        """Skip a line comment, leaving the newline in place."""
        while self._pos < len(self._source) and self._current() != "\n":
            self._advance()

    def _skip_block_comment(self) -> None:
        """Skip a block comment including its closing delimiter."""
        start_line = self._line
        start_col = self._column
        self._advance()  # /
        self._advance()  # *
        while self._pos < len(self._source):
            if self._current() == "*" and self._peek() == "/":
                self._advance()  # *
                self._advance()  # /
                return
            self._advance()
        raise LexerError("Unterminated block comment", start_line, start_col)

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        """Scan one token, chosen by the character under the cursor."""
        ch = self._current()
        line = self._line
        col = self._column

        if self._previous_types(1) == (TokenType.FROM,) and self._in_import_statement():
            self._scan_uri(line, col)
        elif ch == "/" and self._previous_types(2) == (TokenType.REGEX, TokenType.EQUALS):
            self._scan_regex(line, col)
        elif ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            self._tokens.append(Token(_SINGLE_CHAR_TOKENS[ch], ch, line, col))
        elif ch == "-":
            if self._peek() == "-" and self._peek(2) == ">":
                self._advance()  # -
                self._advance()  # -
                self._advance()  # >
                self._tokens.append(Token(TokenType.ARROW, "-->", line, col))
            elif self._peek().isdigit():
                self._scan_number(line, col)
            else:
                raise LexerError("Unexpected character: '-'", line, col)
        elif ch in "\"'":
            self._scan_string(line, col)
        elif ch.isdigit():
            self._scan_number(line, col)
        elif is_identifier_start(ch) or escape_length(self._source, self._pos):
            self._scan_identifier_or_keyword(line, col)
        else:
            raise LexerError(f"Unexpected character: {ch!r}", line, col)

    # ------------------------------------------------------------------
    # Literal scanners
    # ------------------------------------------------------------------

    def _scan_string(self, line: int, col: int) -> None:
        """Scan a single- or double-quoted string literal with escape sequences."""
        quote = self._advance()
        chars: list[str] = []
        while self._pos < len(self._source):
            ch = self._current()
            if ch == quote:
                self._advance()  # closing quote
                self._tokens.append(Token(TokenType.STRING, "".join(chars), line, col))
                return
            if ch == "\n":
                raise LexerError("Unterminated string literal", line, col)
            if ch == "\\":
                self._advance()
                if self._pos >= len(self._source):
                    raise LexerError("Unterminated string literal", line, col)
                esc = self._current()
                if esc not in _STRING_ESCAPES:
                    raise LexerError(
                        f"Invalid escape sequence: '\\{esc}'",
                        self._line,
                        self._column,
                    )
                chars.append(_STRING_ESCAPES[esc])
                self._advance()
            else:
                chars.append(ch)
                self._advance()
        raise LexerError("Unterminated string literal", line, col)

    def _scan_regex(self, line: int, col: int) -> None:
        """Scan ``/pattern/flags``; the pattern text is kept verbatim."""
        self._advance()  # opening /
        start = self._pos
        while self._pos < len(self._source):
            ch = self._current()
            if ch == "\n":
                break
            if ch == "\\" and self._peek():
                self._advance()
                self._advance()
                continue
            if ch == "/":
                pattern = self._source[start : self._pos]
                self._advance()  # closing /
                flag_start = self._pos
                while self._pos < len(self._source) and self._current().isalpha():
                    self._advance()
                flags = self._source[flag_start : self._pos]
                self._tokens.append(Token(TokenType.REGEX_LITERAL, f"{pattern}/{flags}", line, col))
                return
            self._advance()
        raise LexerError("Unterminated regular expression literal", line, col)

    def _scan_uri(self, line: int, col: int) -> None:
        """Scan the unquoted URI that follows ``from`` in an import."""
        start = self._pos
        while self._pos < len(self._source) and not self._current().isspace():
            self._advance()
        self._tokens.append(Token(TokenType.URI, self._source[start : self._pos], line, col))

    def _scan_number(self, line: int, col: int) -> None:
        """Scan an integer or floating-point literal with optional sign and exponent.

        A decimal point must have digits on both sides.
        """
        start = self._pos
        is_float = False
        if self._current() == "-":
            self._advance()
        while self._pos < len(self._source) and self._current().isdigit():
            self._advance()

        if self._current() == "." and self._peek().isdigit():
            is_float = True
            self._advance()  # consume the '.'
            while self._pos < len(self._source) and self._current().isdigit():
                self._advance()

        if self._current() in ("e", "E"):
            sign = 1 if self._peek() in ("+", "-") else 0
            if self._peek(1 + sign).isdigit():
                is_float = True
                for _ in range(1 + sign):
                    self._advance()
                while self._pos < len(self._source) and self._current().isdigit():
                    self._advance()

        value = self._source[start : self._pos]
        token_type = TokenType.FLOAT if is_float else TokenType.INTEGER
        self._tokens.append(Token(token_type, value, line, col))

    def _scan_identifier_or_keyword(self, line: int, col: int) -> None:
        """Scan a name, emitting a keyword token when it is reserved by the grammar."""
        start = self._pos
        while self._pos < len(self._source):
            step = escape_length(self._source, self._pos)
            if step:
                for _ in range(step):
                    self._advance()
            elif is_identifier_part(self._current()):
                self._advance()
            else:
                break
        value = self._source[start : self._pos]
        token_type = _KEYWORDS.get(value, TokenType.IDENTIFIER)
        self._tokens.append(Token(token_type, value, line, col))
