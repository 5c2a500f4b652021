# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Render a metamodel :class:`Model` back to CTO source text.

The output is accepted by :func:`ctoresolve.parser.parse`, and parsing it
yields a model equal to the input apart from ``location`` fields and
resolved type namespaces, which CTO source does not carry.
"""

from ctoresolve.model.entities import (
    BooleanProperty,
    ConceptDeclaration,
    DateTimeProperty,
    Declaration,
    DoubleProperty,
    EnumDeclaration,
    EnumProperty,
    Import,
    ImportAll,
    IntegerProperty,
    LongProperty,
    Model,
    ObjectProperty,
    Property,
    RelationshipProperty,
    StringProperty,
)
from ctoresolve.model.types import (
    METAMODEL_NAMESPACE,
    Decorator,
    DecoratorBoolean,
    DecoratorLiteral,
    DecoratorNumber,
    DecoratorString,
    DoubleDomainValidator,
    IdentifiedBy,
    IntegerDomainValidator,
    LongDomainValidator,
)

# ###############
# Public Interface
# ###############


def to_cto(model: Model) -> str:
    """Return the CTO source for *model*.

    Args:
        model: The model to render. Resolved type namespaces are dropped,
            since CTO source names types by their simple names.

    Returns:
        CTO text ending with a single newline.
    """
    blocks: list[str] = []
    header: list[str] = []
    if model.concerto_version is not None:
        header.append(f"concerto version {_quote(model.concerto_version)}")
    header.append(f"namespace {model.namespace}")
    blocks.append("\n".join(header))

    if model.imports:
        blocks.append("\n".join(_format_import(imp) for imp in model.imports))

    for decl in model.declarations:
        blocks.append(_format_declaration(decl))

    return "\n\n".join(blocks) + "\n"


# ################
# Implementation
# ################

_INDENT = "  "

_STRING_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}

_PRIMITIVE_TYPE_NAMES: dict[type, str] = {
    BooleanProperty: "Boolean",
    DateTimeProperty: "DateTime",
    StringProperty: "String",
    DoubleProperty: "Double",
    IntegerProperty: "Integer",
    LongProperty: "Long",
}

_DECLARATION_KEYWORDS: dict[str, str] = {
    f"{METAMODEL_NAMESPACE}.ConceptDeclaration": "concept",
    f"{METAMODEL_NAMESPACE}.AssetDeclaration": "asset",
    f"{METAMODEL_NAMESPACE}.ParticipantDeclaration": "participant",
    f"{METAMODEL_NAMESPACE}.TransactionDeclaration": "transaction",
    f"{METAMODEL_NAMESPACE}.EventDeclaration": "event",
}


def _quote(value: str) -> str:
    return '"' + "".join(_STRING_ESCAPES.get(ch, ch) for ch in value) + '"'


def _format_number(value: float) -> str:
    return repr(float(value))


def _escape_regex(pattern: str) -> str:
    """Escape each unescaped slash so the pattern fits between regex delimiters."""
    out: list[str] = []
    escaped = False
    for ch in pattern:
        if ch == "/" and not escaped:
            out.append("\\")
        out.append(ch)
        escaped = ch == "\\" and not escaped
    return "".join(out)


def _format_import(imp: Import) -> str:
    if isinstance(imp, ImportAll):
        text = f"import {imp.namespace}.*"
    else:
        text = f"import {imp.namespace}.{imp.name}"
    if imp.uri is not None:
        text += f" from {imp.uri}"
    return text


def _format_literal(literal: DecoratorLiteral) -> str:
    if isinstance(literal, DecoratorString):
        return _quote(literal.value)
    if isinstance(literal, DecoratorNumber):
        return _format_number(literal.value)
    if isinstance(literal, DecoratorBoolean):
        return "true" if literal.value else "false"
    return literal.type.name + ("[]" if literal.is_array else "")


def _format_decorator(decorator: Decorator) -> str:
    if decorator.arguments is None:
        return f"@{decorator.name}"
    args = ", ".join(_format_literal(arg) for arg in decorator.arguments)
    return f"@{decorator.name}({args})"


def _decorator_lines(decorators: list[Decorator] | None, indent: str) -> list[str]:
    return [indent + _format_decorator(d) for d in decorators or []]


def _format_declaration(decl: Declaration) -> str:
    lines = _decorator_lines(decl.decorators, "")
    if isinstance(decl, EnumDeclaration):
        lines.append(f"enum {decl.name} {{")
        for value in decl.properties:
            lines.extend(_format_enum_value(value))
    else:
        lines.append(_format_concept_header(decl) + " {")
        for prop in decl.properties:
            lines.extend(_format_property(prop))
    lines.append("}")
    return "\n".join(lines)


def _format_concept_header(decl: ConceptDeclaration) -> str:
    parts: list[str] = []
    if decl.is_abstract:
        parts.append("abstract")
    parts.append(_DECLARATION_KEYWORDS[decl.class_])
    parts.append(decl.name)
    if decl.super_type is not None:
        parts.append(f"extends {decl.super_type.name}")
    if isinstance(decl.identified, IdentifiedBy):
        parts.append(f"identified by {decl.identified.name}")
    elif decl.identified is not None:
        parts.append("identified")
    return " ".join(parts)


def _format_enum_value(value: EnumProperty) -> list[str]:
    lines = _decorator_lines(value.decorators, _INDENT)
    lines.append(f"{_INDENT}o {value.name}")
    return lines


def _format_property(prop: Property) -> list[str]:
    lines = _decorator_lines(prop.decorators, _INDENT)
    array = "[]" if prop.is_array else ""
    if isinstance(prop, RelationshipProperty):
        text = f"--> {prop.type.name}{array} {prop.name}"
    elif isinstance(prop, ObjectProperty):
        text = f"o {prop.type.name}{array} {prop.name}"
    else:
        text = f"o {_PRIMITIVE_TYPE_NAMES[type(prop)]}{array} {prop.name}"
    text += "".join(_format_modifiers(prop))
    lines.append(_INDENT + text)
    return lines


def _format_modifiers(prop: Property) -> list[str]:
    modifiers: list[str] = []
    default = getattr(prop, "default_value", None)
    if default is not None:
        modifiers.append(f" default={_format_default(prop, default)}")
    validator = getattr(prop, "validator", None)
    if isinstance(prop, StringProperty) and validator is not None:
        modifiers.append(f" regex=/{_escape_regex(validator.pattern)}/{validator.flags}")
    elif isinstance(validator, (DoubleDomainValidator, IntegerDomainValidator, LongDomainValidator)):
        lower = "" if validator.lower is None else _format_bound(prop, validator.lower)
        upper = "" if validator.upper is None else _format_bound(prop, validator.upper)
        modifiers.append(f" range=[{lower},{upper}]")
    if prop.is_optional:
        modifiers.append(" optional")
    return modifiers


def _format_default(prop: Property, value: object) -> str:
    if isinstance(prop, BooleanProperty):
        return "true" if value else "false"
    if isinstance(prop, DoubleProperty):
        return _format_number(value)  # type: ignore[arg-type]
    if isinstance(prop, (IntegerProperty, LongProperty)):
        return str(value)
    return _quote(str(value))


def _format_bound(prop: Property, value: float) -> str:
    if isinstance(prop, DoubleProperty):
        return _format_number(value)
    return str(value)
