# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for .cto files.

Converts a token stream produced by the lexer into a :class:`Model` tree.
Parsed nodes carry no source ``location``.
"""

from typing import Any

from ctoresolve.model.entities import (
    AssetDeclaration,
    BooleanProperty,
    ConceptDeclaration,
    DateTimeProperty,
    Declaration,
    DoubleProperty,
    EnumDeclaration,
    EnumProperty,
    EventDeclaration,
    Import,
    ImportAll,
    ImportType,
    IntegerProperty,
    LongProperty,
    Model,
    ObjectProperty,
    ParticipantDeclaration,
    Property,
    RelationshipProperty,
    StringProperty,
    TransactionDeclaration,
)
from ctoresolve.model.identifiers import RESERVED_IDENTIFIERS
from ctoresolve.model.types import (
    Decorator,
    DecoratorBoolean,
    DecoratorLiteral,
    DecoratorNumber,
    DecoratorString,
    DecoratorTypeReference,
    DoubleDomainValidator,
    Identified,
    IdentifiedBy,
    IntegerDomainValidator,
    LongDomainValidator,
    StringRegexValidator,
    TypeIdentifier,
)
from ctoresolve.parser.lexer import Token, TokenType, tokenize

# ###############
# Public Interface
# ###############


class ParseError(Exception):
    """Raised when the token stream does not form a valid CTO model.

    Attributes:
        line: Line of the offending token, counted from 1.
        column: Column of the offending token, counted from 1.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def parse(source: str) -> Model:
    """Parse CTO source text into a metamodel :class:`Model`.

    Args:
        source: The full text of a .cto file.

    Returns:
        A Model instance whose type references are all unresolved.

    Raises:
        LexerError: If the source contains invalid characters or unterminated literals.
        ParseError: If the source is syntactically invalid.
    """
    tokens = tokenize(source)
    return _Parser(tokens).parse()


# ################
# Implementation
# ################

# Keywords that may still be used where a property or namespace segment name
# is expected (e.g. ``o String namespace``).
_NAME_KEYWORDS: frozenset[TokenType] = frozenset(
    {
        TokenType.NAMESPACE,
        TokenType.IMPORT,
        TokenType.FROM,
        TokenType.ABSTRACT,
        TokenType.CONCEPT,
        TokenType.ASSET,
        TokenType.PARTICIPANT,
        TokenType.TRANSACTION,
        TokenType.EVENT,
        TokenType.ENUM,
        TokenType.EXTENDS,
        TokenType.IDENTIFIED,
        TokenType.BY,
        TokenType.O,
        TokenType.DEFAULT,
        TokenType.REGEX,
        TokenType.RANGE,
        TokenType.OPTIONAL,
    }
)

_CONCEPT_KEYWORDS: dict[TokenType, type[ConceptDeclaration]] = {
    TokenType.CONCEPT: ConceptDeclaration,
    TokenType.ASSET: AssetDeclaration,
    TokenType.PARTICIPANT: ParticipantDeclaration,
    TokenType.TRANSACTION: TransactionDeclaration,
    TokenType.EVENT: EventDeclaration,
}

_NUMBER_TOKENS = (TokenType.INTEGER, TokenType.FLOAT)


class _Parser:
    """Recursive-descent parser for CTO token streams."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def parse(self) -> Model:
        """Parse the full token stream and return a Model."""
        concerto_version = self._parse_version_statement()
        self._expect(TokenType.NAMESPACE)
        namespace = self._parse_qualified_name()
        imports: list[Import] = []
        while self._check(TokenType.IMPORT):
            imports.extend(self._parse_import())
        declarations: list[Declaration] = []
        while not self._at_end():
            declarations.append(self._parse_declaration())
        return Model(
            namespace=namespace,
            concerto_version=concerto_version,
            imports=imports,
            declarations=declarations,
        )

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        """Return the token under the cursor."""
        return self._tokens[self._pos]

    def _peek_type(self) -> TokenType:
        """Return the type of the token under the cursor."""
        return self._tokens[self._pos].type

    def _at_end(self) -> bool:
        """Return True once only EOF remains."""
        return self._peek_type() == TokenType.EOF

    def _advance(self) -> Token:
        """Return the token under the cursor and move on; the cursor never passes EOF."""
        tok = self._tokens[self._pos]
        if self._pos < len(self._tokens) - 1:
            self._pos += 1
        return tok

    def _expect(self, *types: TokenType) -> Token:
        """Consume a token of one of *types*, or raise ParseError naming what was expected."""
        tok = self._current()
        if tok.type not in types:
            expected = ", ".join(repr(t.value) for t in types)
            raise ParseError(
                f"Expected {expected}, got {tok.value!r}",
                tok.line,
                tok.column,
            )
        return self._advance()

    def _check(self, *types: TokenType) -> bool:
        """Return True if the token under the cursor is one of *types*."""
        return self._peek_type() in types

    def _error(self, message: str, tok: Token | None = None) -> ParseError:
        tok = tok or self._current()
        return ParseError(message, tok.line, tok.column)

    def _expect_identifier(self) -> Token:
        """Consume a plain identifier used as a declaration or type name."""
        tok = self._expect(TokenType.IDENTIFIER)
        if tok.value in RESERVED_IDENTIFIERS:
            raise self._error(f"'{tok.value}' is a reserved word and cannot be used as a name", tok)
        return tok

    def _expect_name_token(self) -> Token:
        """Consume a token that may serve as a name.

        Accepts identifiers and keywords used in name positions (e.g. a
        property named 'namespace'). Raises ParseError for structural tokens,
        reserved words and EOF.
        """
        tok = self._current()
        if tok.type != TokenType.IDENTIFIER and tok.type not in _NAME_KEYWORDS:
            raise ParseError(
                f"Expected identifier, got {tok.value!r}",
                tok.line,
                tok.column,
            )
        if tok.value in RESERVED_IDENTIFIERS:
            raise self._error(f"'{tok.value}' is a reserved word and cannot be used as a name", tok)
        return self._advance()

    # ------------------------------------------------------------------
    # Header: version, namespace and imports
    # ------------------------------------------------------------------

    def _parse_version_statement(self) -> str | None:
        """Parse an optional leading ``concerto version "<range>"`` statement."""
        tok = self._current()
        if tok.type != TokenType.IDENTIFIER or tok.value != "concerto":
            return None
        self._advance()
        version_tok = self._expect(TokenType.IDENTIFIER)
        if version_tok.value != "version":
            raise self._error(f"Expected 'version', got {version_tok.value!r}", version_tok)
        return self._expect(TokenType.STRING).value

    def _parse_qualified_name(self) -> str:
        """Parse a dotted name such as ``org.acme.hr``."""
        parts = [self._expect_name_token().value]
        while self._check(TokenType.DOT):
            self._advance()  # consume .
            parts.append(self._expect_name_token().value)
        return ".".join(parts)

    def _parse_import(self) -> list[Import]:
        """Parse: import <ns>.* | import <ns>.<Name> | import <ns>.{<A>, <B>} [from <uri>]"""
        import_tok = self._expect(TokenType.IMPORT)
        parts = [self._expect_name_token().value]
        wildcard = False
        names: list[str] = []
        while self._check(TokenType.DOT):
            self._advance()  # consume .
            if self._check(TokenType.STAR):
                self._advance()
                wildcard = True
                break
            if self._check(TokenType.LBRACE):
                names = self._parse_import_name_list()
                break
            parts.append(self._expect_name_token().value)

        if not wildcard and not names:
            if len(parts) < 2:
                raise self._error("Import must name a namespace and a declaration", import_tok)
            names = [parts.pop()]
        namespace = ".".join(parts)

        uri: str | None = None
        if self._check(TokenType.FROM):
            self._advance()
            uri = self._expect(TokenType.URI).value

        if wildcard:
            return [ImportAll(namespace=namespace, uri=uri)]
        return [ImportType(namespace=namespace, name=name, uri=uri) for name in names]

    def _parse_import_name_list(self) -> list[str]:
        """Parse: { <Name> [, <Name>]* }"""
        self._expect(TokenType.LBRACE)
        names = [self._expect_identifier().value]
        while self._check(TokenType.COMMA):
            self._advance()  # consume ,
            names.append(self._expect_identifier().value)
        self._expect(TokenType.RBRACE)
        return names

    # ------------------------------------------------------------------
    # Decorators
    # ------------------------------------------------------------------

    def _parse_decorators(self) -> list[Decorator] | None:
        """Parse zero or more ``@Name[(args)]`` decorators."""
        decorators: list[Decorator] = []
        while self._check(TokenType.AT):
            decorators.append(self._parse_decorator())
        return decorators or None

    def _parse_decorator(self) -> Decorator:
        self._expect(TokenType.AT)
        name_tok = self._expect_name_token()
        arguments: list[DecoratorLiteral] | None = None
        if self._check(TokenType.LPAREN):
            self._advance()  # consume (
            arguments = []
            if not self._check(TokenType.RPAREN):
                arguments.append(self._parse_decorator_literal())
                while self._check(TokenType.COMMA):
                    self._advance()  # consume ,
                    arguments.append(self._parse_decorator_literal())
            self._expect(TokenType.RPAREN)
        return Decorator(name=name_tok.value, arguments=arguments)

    def _parse_decorator_literal(self) -> DecoratorLiteral:
        tok = self._current()
        if tok.type == TokenType.STRING:
            self._advance()
            return DecoratorString(value=tok.value)
        if tok.type in _NUMBER_TOKENS:
            self._advance()
            return DecoratorNumber(value=float(tok.value))
        if tok.type in (TokenType.TRUE, TokenType.FALSE):
            self._advance()
            return DecoratorBoolean(value=tok.type == TokenType.TRUE)
        if tok.type == TokenType.IDENTIFIER:
            name = self._expect_identifier().value
            return DecoratorTypeReference(type=TypeIdentifier(name=name), is_array=self._parse_array_marker())
        raise self._error(f"Unexpected token {tok.value!r} in decorator arguments")

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _parse_declaration(self) -> Declaration:
        """Parse one top-level enum or concept-like declaration."""
        decorators = self._parse_decorators()
        is_abstract = False
        if self._check(TokenType.ABSTRACT):
            self._advance()
            is_abstract = True

        tok = self._current()
        if tok.type == TokenType.ENUM:
            if is_abstract:
                raise self._error("An enum cannot be abstract", tok)
            return self._parse_enum(decorators)
        if tok.type in _CONCEPT_KEYWORDS:
            return self._parse_concept(_CONCEPT_KEYWORDS[tok.type], decorators, is_abstract)
        raise self._error(f"Unexpected token {tok.value!r} at top level")

    def _parse_enum(self, decorators: list[Decorator] | None) -> EnumDeclaration:
        """Parse: enum <Name> { [@decorators] o <Value>* }"""
        self._expect(TokenType.ENUM)
        name_tok = self._expect_identifier()
        self._expect(TokenType.LBRACE)
        values: list[EnumProperty] = []
        while not self._check(TokenType.RBRACE, TokenType.EOF):
            value_decorators = self._parse_decorators()
            self._expect(TokenType.O)
            value_tok = self._expect_name_token()
            values.append(EnumProperty(name=value_tok.value, decorators=value_decorators))
        self._expect(TokenType.RBRACE)
        return EnumDeclaration(name=name_tok.value, decorators=decorators, properties=values)

    def _parse_concept(
        self,
        declaration_class: type[ConceptDeclaration],
        decorators: list[Decorator] | None,
        is_abstract: bool,
    ) -> ConceptDeclaration:
        """Parse: <kind> <Name> [identified [by <field>]] [extends <Super>] { property* }"""
        self._advance()  # consume the declaration keyword
        name_tok = self._expect_identifier()
        identified: Identified | IdentifiedBy | None = None
        super_type: TypeIdentifier | None = None
        while self._check(TokenType.IDENTIFIED, TokenType.EXTENDS):
            clause = self._advance()
            if clause.type == TokenType.EXTENDS:
                if super_type is not None:
                    raise self._error("Duplicate 'extends' clause", clause)
                super_type = TypeIdentifier(name=self._expect_identifier().value)
                continue
            if identified is not None:
                raise self._error("Duplicate 'identified' clause", clause)
            if self._check(TokenType.BY):
                self._advance()
                identified = IdentifiedBy(name=self._expect_name_token().value)
            else:
                identified = Identified()

        self._expect(TokenType.LBRACE)
        properties: list[Property] = []
        while not self._check(TokenType.RBRACE, TokenType.EOF):
            properties.append(self._parse_property())
        self._expect(TokenType.RBRACE)
        return declaration_class(
            name=name_tok.value,
            decorators=decorators,
            is_abstract=is_abstract,
            identified=identified,
            super_type=super_type,
            properties=properties,
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def _parse_property(self) -> Property:
        """Parse: [@decorators] (o | -->) <Type>[[]] <name> [modifiers]"""
        decorators = self._parse_decorators()
        marker = self._expect(TokenType.O, TokenType.ARROW)
        type_tok = self._expect_identifier()
        is_array = self._parse_array_marker()
        name_tok = self._expect_name_token()
        fields: dict[str, Any] = {
            "name": name_tok.value,
            "is_array": is_array,
            "decorators": decorators,
        }

        if marker.type == TokenType.ARROW:
            fields["is_optional"] = self._parse_modifiers(type_tok, allowed=())
            return RelationshipProperty(type=TypeIdentifier(name=type_tok.value), **fields)

        type_name = type_tok.value
        if type_name == "String":
            fields["is_optional"] = self._parse_modifiers(type_tok, allowed=("default", "regex"), into=fields)
            return StringProperty(**fields)
        if type_name == "Boolean":
            fields["is_optional"] = self._parse_modifiers(type_tok, allowed=("default",), into=fields)
            return BooleanProperty(**fields)
        if type_name == "DateTime":
            fields["is_optional"] = self._parse_modifiers(type_tok, allowed=())
            return DateTimeProperty(**fields)
        if type_name == "Double":
            fields["is_optional"] = self._parse_modifiers(type_tok, allowed=("default", "range"), into=fields)
            return DoubleProperty(**fields)
        if type_name == "Integer":
            fields["is_optional"] = self._parse_modifiers(type_tok, allowed=("default", "range"), into=fields)
            return IntegerProperty(**fields)
        if type_name == "Long":
            fields["is_optional"] = self._parse_modifiers(type_tok, allowed=("default", "range"), into=fields)
            return LongProperty(**fields)
        fields["is_optional"] = self._parse_modifiers(type_tok, allowed=("default",), into=fields)
        return ObjectProperty(type=TypeIdentifier(name=type_name), **fields)

    def _parse_array_marker(self) -> bool:
        """Consume an optional ``[]`` suffix and return whether it was present."""
        if not self._check(TokenType.LBRACKET):
            return False
        self._advance()
        self._expect(TokenType.RBRACKET)
        return True

    def _parse_modifiers(
        self,
        type_tok: Token,
        allowed: tuple[str, ...],
        into: dict[str, Any] | None = None,
    ) -> bool:
        """Parse trailing ``default=``/``regex=``/``range=``/``optional`` modifiers.

        Values are stored in *into*. Returns True if ``optional`` was present.
        """
        is_optional = False
        seen: set[str] = set()
        while self._check(TokenType.DEFAULT, TokenType.REGEX, TokenType.RANGE, TokenType.OPTIONAL):
            tok = self._advance()
            keyword = tok.value
            if keyword in seen:
                raise self._error(f"Duplicate '{keyword}' modifier", tok)
            seen.add(keyword)
            if tok.type == TokenType.OPTIONAL:
                is_optional = True
                continue
            if keyword not in allowed or into is None:
                raise self._error(f"'{keyword}' is not allowed on a property of type {type_tok.value}", tok)
            self._expect(TokenType.EQUALS)
            if tok.type == TokenType.DEFAULT:
                into["default_value"] = self._parse_default_value(type_tok.value)
            elif tok.type == TokenType.REGEX:
                into["validator"] = self._parse_regex_validator()
            else:
                into["validator"] = self._parse_range_validator(type_tok.value)
        return is_optional

    def _parse_default_value(self, type_name: str) -> Any:
        tok = self._current()
        if type_name == "Boolean":
            self._expect(TokenType.TRUE, TokenType.FALSE)
            return tok.type == TokenType.TRUE
        if type_name in ("Integer", "Long"):
            return int(self._expect(TokenType.INTEGER).value)
        if type_name == "Double":
            return float(self._expect(*_NUMBER_TOKENS).value)
        return self._expect(TokenType.STRING).value

    def _parse_regex_validator(self) -> StringRegexValidator:
        tok = self._expect(TokenType.REGEX_LITERAL)
        pattern, _, flags = tok.value.rpartition("/")
        return StringRegexValidator(pattern=pattern, flags=flags)

    def _parse_range_validator(
        self, type_name: str
    ) -> DoubleDomainValidator | IntegerDomainValidator | LongDomainValidator:
        """Parse: [ [lower] , [upper] ]"""
        self._expect(TokenType.LBRACKET)
        lower = None if self._check(TokenType.COMMA) else self._parse_bound(type_name)
        self._expect(TokenType.COMMA)
        upper = None if self._check(TokenType.RBRACKET) else self._parse_bound(type_name)
        self._expect(TokenType.RBRACKET)
        if type_name == "Double":
            return DoubleDomainValidator(lower=lower, upper=upper)
        if type_name == "Integer":
            return IntegerDomainValidator(lower=lower, upper=upper)
        return LongDomainValidator(lower=lower, upper=upper)

    def _parse_bound(self, type_name: str) -> int | float:
        if type_name == "Double":
            return float(self._expect(*_NUMBER_TOKENS).value)
        return int(self._expect(TokenType.INTEGER).value)
