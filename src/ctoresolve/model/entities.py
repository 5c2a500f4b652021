# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declarations, properties, imports and models of the metamodel."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field as _Field
from pydantic import field_validator

from ctoresolve.model.identifiers import is_valid_identifier
from ctoresolve.model.types import (
    Decorator,
    DoubleDomainValidator,
    IdentifiedMarker,
    IntegerDomainValidator,
    LongDomainValidator,
    MetaNode,
    Range,
    StringRegexValidator,
    TypeIdentifier,
)

# ###############
# Public Interface
# ###############


class _NamedNode(MetaNode):
    """A node whose ``name`` must satisfy the identifier grammar."""

    name: str
    decorators: list[Decorator] | None = None
    location: Range | None = None

    @field_validator("name")
    @classmethod
    def _check_identifier(cls, value: str) -> str:
        if not is_valid_identifier(value):
            raise ValueError(f"'{value}' is not a valid identifier")
        return value


# ------------------------------------------------------------------
# Properties
# ------------------------------------------------------------------


class _PropertyBase(_NamedNode):
    is_array: bool = False
    is_optional: bool = False


class ObjectProperty(_PropertyBase):
    """A property holding an instance of another declared type."""

    class_: Literal["concerto.metamodel.ObjectProperty"] = _Field(
        "concerto.metamodel.ObjectProperty", alias="$class"
    )
    type: TypeIdentifier
    default_value: str | None = None


class RelationshipProperty(_PropertyBase):
    """A ``-->`` property pointing at an identified declaration by reference."""

    class_: Literal["concerto.metamodel.RelationshipProperty"] = _Field(
        "concerto.metamodel.RelationshipProperty", alias="$class"
    )
    type: TypeIdentifier


class BooleanProperty(_PropertyBase):
    class_: Literal["concerto.metamodel.BooleanProperty"] = _Field(
        "concerto.metamodel.BooleanProperty", alias="$class"
    )
    default_value: bool | None = None


class DateTimeProperty(_PropertyBase):
    class_: Literal["concerto.metamodel.DateTimeProperty"] = _Field(
        "concerto.metamodel.DateTimeProperty", alias="$class"
    )


class StringProperty(_PropertyBase):
    class_: Literal["concerto.metamodel.StringProperty"] = _Field(
        "concerto.metamodel.StringProperty", alias="$class"
    )
    default_value: str | None = None
    validator: StringRegexValidator | None = None


class DoubleProperty(_PropertyBase):
    class_: Literal["concerto.metamodel.DoubleProperty"] = _Field(
        "concerto.metamodel.DoubleProperty", alias="$class"
    )
    default_value: float | None = None
    validator: DoubleDomainValidator | None = None


class IntegerProperty(_PropertyBase):
    class_: Literal["concerto.metamodel.IntegerProperty"] = _Field(
        "concerto.metamodel.IntegerProperty", alias="$class"
    )
    default_value: int | None = None
    validator: IntegerDomainValidator | None = None


class LongProperty(_PropertyBase):
    class_: Literal["concerto.metamodel.LongProperty"] = _Field(
        "concerto.metamodel.LongProperty", alias="$class"
    )
    default_value: int | None = None
    validator: LongDomainValidator | None = None


# Properties whose value is a primitive; none of them carries a type reference.
PrimitiveProperty = (
    BooleanProperty | DateTimeProperty | StringProperty | DoubleProperty | IntegerProperty | LongProperty
)

# A property of a concept-like declaration, selected by its `$class` tag.
Property = Annotated[
    ObjectProperty
    | RelationshipProperty
    | BooleanProperty
    | DateTimeProperty
    | StringProperty
    | DoubleProperty
    | IntegerProperty
    | LongProperty,
    _Field(discriminator="class_"),
]


class EnumProperty(_NamedNode):
    """One value of an enumeration."""

    class_: Literal["concerto.metamodel.EnumProperty"] = _Field(
        "concerto.metamodel.EnumProperty", alias="$class"
    )


# ------------------------------------------------------------------
# Declarations
# ------------------------------------------------------------------


class EnumDeclaration(_NamedNode):
    """An enumeration and its values."""

    class_: Literal["concerto.metamodel.EnumDeclaration"] = _Field(
        "concerto.metamodel.EnumDeclaration", alias="$class"
    )
    properties: list[EnumProperty] = _Field(default_factory=list)


class ConceptDeclaration(_NamedNode):
    """A class-like declaration with an optional super type and typed properties."""

    class_: Literal["concerto.metamodel.ConceptDeclaration"] = _Field(
        "concerto.metamodel.ConceptDeclaration", alias="$class"
    )
    is_abstract: bool = False
    identified: IdentifiedMarker | None = None
    super_type: TypeIdentifier | None = None
    properties: list[Property] = _Field(default_factory=list)


class AssetDeclaration(ConceptDeclaration):
    class_: Literal["concerto.metamodel.AssetDeclaration"] = _Field(
        "concerto.metamodel.AssetDeclaration", alias="$class"
    )


class ParticipantDeclaration(ConceptDeclaration):
    class_: Literal["concerto.metamodel.ParticipantDeclaration"] = _Field(
        "concerto.metamodel.ParticipantDeclaration", alias="$class"
    )


class TransactionDeclaration(ConceptDeclaration):
    class_: Literal["concerto.metamodel.TransactionDeclaration"] = _Field(
        "concerto.metamodel.TransactionDeclaration", alias="$class"
    )


class EventDeclaration(ConceptDeclaration):
    class_: Literal["concerto.metamodel.EventDeclaration"] = _Field(
        "concerto.metamodel.EventDeclaration", alias="$class"
    )


# A top-level declaration of a model, selected by its `$class` tag.
Declaration = Annotated[
    ConceptDeclaration
    | AssetDeclaration
    | ParticipantDeclaration
    | TransactionDeclaration
    | EventDeclaration
    | EnumDeclaration,
    _Field(discriminator="class_"),
]


# ------------------------------------------------------------------
# Imports and models
# ------------------------------------------------------------------


class ImportAll(MetaNode):
    """``import ns.*``: every declaration of a namespace."""

    class_: Literal["concerto.metamodel.ImportAll"] = _Field("concerto.metamodel.ImportAll", alias="$class")
    namespace: str
    uri: str | None = None


class ImportType(MetaNode):
    """``import ns.Name``: a single named declaration of a namespace."""

    class_: Literal["concerto.metamodel.ImportType"] = _Field("concerto.metamodel.ImportType", alias="$class")
    namespace: str
    name: str
    uri: str | None = None


# An import statement. Imports are applied in order; later ones override.
Import = Annotated[ImportAll | ImportType, _Field(discriminator="class_")]


class Model(MetaNode):
    """The declarations of a single namespace together with its imports."""

    class_: Literal["concerto.metamodel.Model"] = _Field("concerto.metamodel.Model", alias="$class")
    namespace: str
    source_uri: str | None = None
    concerto_version: str | None = None
    imports: list[Import] = _Field(default_factory=list)
    declarations: list[Declaration] = _Field(default_factory=list)

    def declaration_names(self) -> list[str]:
        """Return the names of the local declarations in declaration order."""
        return [decl.name for decl in self.declarations]


class Models(MetaNode):
    """An ordered collection of models, the unit of bulk import and export."""

    class_: Literal["concerto.metamodel.Models"] = _Field("concerto.metamodel.Models", alias="$class")
    models: list[Model] = _Field(default_factory=list)
