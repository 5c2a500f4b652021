# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type references, decorators and other leaf nodes of the metamodel."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field
from pydantic.alias_generators import to_camel

# ###############
# Public Interface
# ###############

METAMODEL_NAMESPACE = "concerto.metamodel"


class MetaNode(BaseModel):
    """Base class of every metamodel node.

    Attributes are snake_case in Python and camelCase in JSON. The ``$class``
    tag of each node is exposed as ``class_``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class Position(MetaNode):
    """A point in a source file."""

    class_: Literal["concerto.metamodel.Position"] = _Field("concerto.metamodel.Position", alias="$class")
    line: int
    column: int
    offset: int


class Range(MetaNode):
    """A span in a source file, used as the ``location`` of a node."""

    class_: Literal["concerto.metamodel.Range"] = _Field("concerto.metamodel.Range", alias="$class")
    start: Position
    end: Position
    source: str | None = None


class TypeIdentifier(MetaNode):
    """A reference to a declaration by short name.

    The reference is unresolved while ``namespace`` is None and becomes
    fully qualified once the resolver fills it in.
    """

    class_: Literal["concerto.metamodel.TypeIdentifier"] = _Field(
        "concerto.metamodel.TypeIdentifier", alias="$class"
    )
    name: str
    namespace: str | None = None


class DecoratorString(MetaNode):
    """A string decorator argument."""

    class_: Literal["concerto.metamodel.DecoratorString"] = _Field(
        "concerto.metamodel.DecoratorString", alias="$class"
    )
    value: str
    location: Range | None = None


class DecoratorNumber(MetaNode):
    """A numeric decorator argument."""

    class_: Literal["concerto.metamodel.DecoratorNumber"] = _Field(
        "concerto.metamodel.DecoratorNumber", alias="$class"
    )
    value: float
    location: Range | None = None


class DecoratorBoolean(MetaNode):
    """A boolean decorator argument."""

    class_: Literal["concerto.metamodel.DecoratorBoolean"] = _Field(
        "concerto.metamodel.DecoratorBoolean", alias="$class"
    )
    value: bool
    location: Range | None = None


class DecoratorTypeReference(MetaNode):
    """A decorator argument naming a type; the only literal that needs resolution."""

    class_: Literal["concerto.metamodel.DecoratorTypeReference"] = _Field(
        "concerto.metamodel.DecoratorTypeReference", alias="$class"
    )
    type: TypeIdentifier
    is_array: bool = False
    location: Range | None = None


# A decorator argument. The `$class` tag selects the variant.
DecoratorLiteral = Annotated[
    DecoratorString | DecoratorNumber | DecoratorBoolean | DecoratorTypeReference,
    _Field(discriminator="class_"),
]


class Decorator(MetaNode):
    """An ``@Name(args...)`` annotation attached to a declaration or property.

    ``arguments`` is None for a bare ``@Name`` and a (possibly empty) list
    when parentheses were written.
    """

    class_: Literal["concerto.metamodel.Decorator"] = _Field("concerto.metamodel.Decorator", alias="$class")
    name: str
    arguments: list[DecoratorLiteral] | None = None
    location: Range | None = None


class Identified(MetaNode):
    """Marks a concept as identified by a system-generated identifier."""

    class_: Literal["concerto.metamodel.Identified"] = _Field("concerto.metamodel.Identified", alias="$class")


class IdentifiedBy(MetaNode):
    """Marks a concept as identified by one of its own properties."""

    class_: Literal["concerto.metamodel.IdentifiedBy"] = _Field("concerto.metamodel.IdentifiedBy", alias="$class")
    name: str


# The `identified` marker of a concept declaration.
IdentifiedMarker = Annotated[Identified | IdentifiedBy, _Field(discriminator="class_")]


class StringRegexValidator(MetaNode):
    """A ``regex=/pattern/flags`` constraint on a string property."""

    class_: Literal["concerto.metamodel.StringRegexValidator"] = _Field(
        "concerto.metamodel.StringRegexValidator", alias="$class"
    )
    pattern: str
    flags: str = ""


class DoubleDomainValidator(MetaNode):
    """A ``range=[lower, upper]`` constraint on a double property."""

    class_: Literal["concerto.metamodel.DoubleDomainValidator"] = _Field(
        "concerto.metamodel.DoubleDomainValidator", alias="$class"
    )
    lower: float | None = None
    upper: float | None = None


class IntegerDomainValidator(MetaNode):
    """A ``range=[lower, upper]`` constraint on an integer property."""

    class_: Literal["concerto.metamodel.IntegerDomainValidator"] = _Field(
        "concerto.metamodel.IntegerDomainValidator", alias="$class"
    )
    lower: int | None = None
    upper: int | None = None


class LongDomainValidator(MetaNode):
    """A ``range=[lower, upper]`` constraint on a long property."""

    class_: Literal["concerto.metamodel.LongDomainValidator"] = _Field(
        "concerto.metamodel.LongDomainValidator", alias="$class"
    )
    lower: int | None = None
    upper: int | None = None


# Resolve forward references for models that nest other nodes.
Range.model_rebuild()
DecoratorTypeReference.model_rebuild()
Decorator.model_rebuild()
