# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Structural validation of metamodel trees against the fixed schema.

The schema is the set of node types in :mod:`ctoresolve.model.entities` and
:mod:`ctoresolve.model.types`. Validation accepts JSON-shaped data (or an
existing node tree), checks field presence, field types, ``$class`` tags and
the identifier grammar, and returns a canonical, independent copy.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, TypeVar

from pydantic import Field as _Field
from pydantic import TypeAdapter, ValidationError

from ctoresolve.errors import StructuralError
from ctoresolve.model.entities import Model, Models
from ctoresolve.model.types import MetaNode

# ###############
# Public Interface
# ###############


def dump_node(node: MetaNode) -> dict[str, Any]:
    """Return the JSON form of *node*, omitting absent optional fields."""
    return node.model_dump(by_alias=True, exclude_none=True, mode="json")


def validate_metamodel(data: Mapping[str, Any] | MetaNode) -> dict[str, Any]:
    """Validate a ``Model`` or ``Models`` tree and return its canonical JSON.

    Args:
        data: JSON-shaped data tagged with ``$class``, or a node tree.

    Returns:
        A new JSON dict equivalent to *data*, with defaults filled in.

    Raises:
        StructuralError: If *data* does not conform to the schema.
    """
    if isinstance(data, MetaNode):
        data = dump_node(data)
    return dump_node(_validate(_ROOT_ADAPTER, data, "metamodel"))


def load_model(data: Mapping[str, Any]) -> Model:
    """Build a :class:`Model` from JSON data, raising StructuralError on mismatch."""
    return _validate(_MODEL_ADAPTER, data, "model")


def load_models(data: Mapping[str, Any]) -> Models:
    """Build a :class:`Models` collection from JSON data, raising StructuralError on mismatch."""
    return _validate(_MODELS_ADAPTER, data, "models")


def load_metamodel(data: Mapping[str, Any]) -> Model | Models:
    """Build a :class:`Model` or :class:`Models` from JSON data, selected by its ``$class`` tag."""
    return _validate(_ROOT_ADAPTER, data, "metamodel")


def validate_model(model: Model) -> Model:
    """Re-validate an existing model tree and return an independent copy."""
    return load_model(dump_node(model))


def validate_models(models: Models) -> Models:
    """Re-validate an existing collection and return an independent copy."""
    return load_models(dump_node(models))


def get_metamodel_cto() -> str:
    """Return the schema of the metamodel written as CTO source."""
    return METAMODEL_CTO


METAMODEL_CTO = r"""namespace concerto.metamodel

concept Position {
  o Integer line
  o Integer column
  o Integer offset
}

concept Range {
  o Position start
  o Position end
  o String source optional
}

concept TypeIdentifier {
  o String name
  o String namespace optional
}

abstract concept DecoratorLiteral {
  o Range location optional
}

concept DecoratorString extends DecoratorLiteral {
  o String value
}

concept DecoratorNumber extends DecoratorLiteral {
  o Double value
}

concept DecoratorBoolean extends DecoratorLiteral {
  o Boolean value
}

concept DecoratorTypeReference extends DecoratorLiteral {
  o TypeIdentifier type
  o Boolean isArray default=false
}

concept Decorator {
  o String name
  o DecoratorLiteral[] arguments optional
  o Range location optional
}

concept Identified {
}

concept IdentifiedBy extends Identified {
  o String name
}

abstract concept Declaration {
  o String name regex=/^(?!null|true|false)(\p{Lu}|\p{Ll}|\p{Lt}|\p{Lm}|\p{Lo}|\p{Nl}|\$|_|\\u[0-9A-Fa-f]{4})(?:\p{Lu}|\p{Ll}|\p{Lt}|\p{Lm}|\p{Lo}|\p{Nl}|\$|_|\\u[0-9A-Fa-f]{4}|\p{Mn}|\p{Mc}|\p{Nd}|\p{Pc}|\u200C|\u200D)*$/u
  o Decorator[] decorators optional
  o Range location optional
}

concept EnumDeclaration extends Declaration {
  o EnumProperty[] properties
}

concept EnumProperty {
  o String name regex=/^(?!null|true|false)(\p{Lu}|\p{Ll}|\p{Lt}|\p{Lm}|\p{Lo}|\p{Nl}|\$|_|\\u[0-9A-Fa-f]{4})(?:\p{Lu}|\p{Ll}|\p{Lt}|\p{Lm}|\p{Lo}|\p{Nl}|\$|_|\\u[0-9A-Fa-f]{4}|\p{Mn}|\p{Mc}|\p{Nd}|\p{Pc}|\u200C|\u200D)*$/u
  o Decorator[] decorators optional
  o Range location optional
}

concept ConceptDeclaration extends Declaration {
  o Boolean isAbstract default=false
  o Identified identified optional
  o TypeIdentifier superType optional
  o Property[] properties
}

concept AssetDeclaration extends ConceptDeclaration {
}

concept ParticipantDeclaration extends ConceptDeclaration {
}

concept TransactionDeclaration extends ConceptDeclaration {
}

concept EventDeclaration extends ConceptDeclaration {
}

abstract concept Property {
  o String name regex=/^(?!null|true|false)(\p{Lu}|\p{Ll}|\p{Lt}|\p{Lm}|\p{Lo}|\p{Nl}|\$|_|\\u[0-9A-Fa-f]{4})(?:\p{Lu}|\p{Ll}|\p{Lt}|\p{Lm}|\p{Lo}|\p{Nl}|\$|_|\\u[0-9A-Fa-f]{4}|\p{Mn}|\p{Mc}|\p{Nd}|\p{Pc}|\u200C|\u200D)*$/u
  o Boolean isArray default=false
  o Boolean isOptional default=false
  o Decorator[] decorators optional
  o Range location optional
}

concept RelationshipProperty extends Property {
  o TypeIdentifier type
}

concept ObjectProperty extends Property {
  o String defaultValue optional
  o TypeIdentifier type
}

concept BooleanProperty extends Property {
  o Boolean defaultValue optional
}

concept DateTimeProperty extends Property {
}

concept StringProperty extends Property {
  o String defaultValue optional
  o StringRegexValidator validator optional
}

concept StringRegexValidator {
  o String pattern
  o String flags
}

concept DoubleProperty extends Property {
  o Double defaultValue optional
  o DoubleDomainValidator validator optional
}

concept DoubleDomainValidator {
  o Double lower optional
  o Double upper optional
}

concept IntegerProperty extends Property {
  o Integer defaultValue optional
  o IntegerDomainValidator validator optional
}

concept IntegerDomainValidator {
  o Integer lower optional
  o Integer upper optional
}

concept LongProperty extends Property {
  o Long defaultValue optional
  o LongDomainValidator validator optional
}

concept LongDomainValidator {
  o Long lower optional
  o Long upper optional
}

abstract concept Import {
  o String namespace
  o String uri optional
}

concept ImportAll extends Import {
}

concept ImportType extends Import {
  o String name
}

concept Model {
  o String namespace
  o String sourceUri optional
  o String concertoVersion optional
  o Import[] imports optional
  o Declaration[] declarations optional
}

concept Models {
  o Model[] models
}
"""


# ################
# Implementation
# ################

_T = TypeVar("_T")

_MODEL_ADAPTER: TypeAdapter[Model] = TypeAdapter(Model)
_MODELS_ADAPTER: TypeAdapter[Models] = TypeAdapter(Models)
_ROOT_ADAPTER: TypeAdapter[Model | Models] = TypeAdapter(
    Annotated[Model | Models, _Field(discriminator="class_")]
)


def _validate(adapter: TypeAdapter[_T], data: Any, what: str) -> _T:
    """Run *adapter* over *data*, translating pydantic failures to StructuralError."""
    try:
        return adapter.validate_python(data)
    except ValidationError as exc:
        problems = [_format_problem(err) for err in exc.errors()]
        raise StructuralError(f"Invalid {what}: {len(problems)} schema violation(s)", problems) from exc


def _format_problem(err: Any) -> str:
    location = ".".join(str(part) for part in err["loc"]) or "<root>"
    return f"{location}: {err['msg']}"
