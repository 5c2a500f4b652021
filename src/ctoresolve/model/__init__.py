# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Metamodel node types (models, declarations, properties, decorators) and schema checks."""

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
    Models,
    ObjectProperty,
    ParticipantDeclaration,
    PrimitiveProperty,
    Property,
    RelationshipProperty,
    StringProperty,
    TransactionDeclaration,
)
from ctoresolve.model.identifiers import RESERVED_IDENTIFIERS, is_valid_identifier
from ctoresolve.model.schema import (
    METAMODEL_CTO,
    dump_node,
    get_metamodel_cto,
    load_metamodel,
    load_model,
    load_models,
    validate_metamodel,
    validate_model,
    validate_models,
)
from ctoresolve.model.types import (
    METAMODEL_NAMESPACE,
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
    MetaNode,
    Position,
    Range,
    StringRegexValidator,
    TypeIdentifier,
)

__all__ = [
    # Leaf nodes
    "METAMODEL_NAMESPACE",
    "MetaNode",
    "Position",
    "Range",
    "TypeIdentifier",
    "DecoratorString",
    "DecoratorNumber",
    "DecoratorBoolean",
    "DecoratorTypeReference",
    "DecoratorLiteral",
    "Decorator",
    "Identified",
    "IdentifiedBy",
    "StringRegexValidator",
    "DoubleDomainValidator",
    "IntegerDomainValidator",
    "LongDomainValidator",
    # Properties
    "ObjectProperty",
    "RelationshipProperty",
    "BooleanProperty",
    "DateTimeProperty",
    "StringProperty",
    "DoubleProperty",
    "IntegerProperty",
    "LongProperty",
    "PrimitiveProperty",
    "Property",
    "EnumProperty",
    # Declarations
    "ConceptDeclaration",
    "AssetDeclaration",
    "ParticipantDeclaration",
    "TransactionDeclaration",
    "EventDeclaration",
    "EnumDeclaration",
    "Declaration",
    # Imports and models
    "ImportAll",
    "ImportType",
    "Import",
    "Model",
    "Models",
    # Schema
    "RESERVED_IDENTIFIERS",
    "is_valid_identifier",
    "METAMODEL_CTO",
    "get_metamodel_cto",
    "dump_node",
    "load_metamodel",
    "load_model",
    "load_models",
    "validate_metamodel",
    "validate_model",
    "validate_models",
]
