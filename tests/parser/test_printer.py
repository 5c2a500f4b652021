# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for rendering metamodel trees back to CTO source."""

import pytest

from ctoresolve.model import (
    ConceptDeclaration,
    Decorator,
    DecoratorNumber,
    DecoratorString,
    DoubleDomainValidator,
    DoubleProperty,
    EnumDeclaration,
    EnumProperty,
    IdentifiedBy,
    ImportAll,
    ImportType,
    Model,
    ObjectProperty,
    StringProperty,
    StringRegexValidator,
    TypeIdentifier,
)
from ctoresolve.parser import parse, to_cto

# ###############
# Test Helpers
# ###############

_FULL_SOURCE = """\
concerto version "^3.0.0"
namespace org.acme.hr

import org.acme.base.Address from https://models.acme.org/base.cto
import org.acme.common.*

@Entity("person", 2.5, true)
@Marker
@Empty()
abstract participant Person extends Party identified by email {
  o String email regex=/^[^@]+@[^@]+$/i
  o String[] nicknames optional
  o Integer age default=30 range=[0,150]
  o Double height range=[,3.0]
  o Long salary range=[-10,10] optional
  o Boolean active default=true
  o DateTime hired
  o Address address default="home"
  --> Person manager optional
  @Ref(Person[], Address)
  o Person[] reports optional
}

asset Car identified {
  o String vin
}

event Hired {
}

enum Color {
  @Hex("#f00")
  o RED
  o GREEN
}
"""


# ###############
# Rendering
# ###############


class TestToCto:
    def test_minimal_model(self) -> None:
        assert to_cto(Model(namespace="org.acme")) == "namespace org.acme\n"

    def test_layout(self) -> None:
        model = Model(
            namespace="org.acme",
            imports=[ImportAll(namespace="org.base"), ImportType(namespace="org.x", name="Y", uri="https://x.org")],
            declarations=[
                ConceptDeclaration(
                    name="Person",
                    identified=IdentifiedBy(name="id"),
                    super_type=TypeIdentifier(name="Base", namespace="org.base"),
                    properties=[
                        StringProperty(name="id"),
                        ObjectProperty(name="home", type=TypeIdentifier(name="Address"), is_optional=True),
                    ],
                ),
                EnumDeclaration(name="Color", properties=[EnumProperty(name="RED")]),
            ],
        )
        assert to_cto(model) == (
            "namespace org.acme\n"
            "\n"
            "import org.base.*\n"
            "import org.x.Y from https://x.org\n"
            "\n"
            "concept Person extends Base identified by id {\n"
            "  o String id\n"
            "  o Address home optional\n"
            "}\n"
            "\n"
            "enum Color {\n"
            "  o RED\n"
            "}\n"
        )

    def test_decorators(self) -> None:
        decl = ConceptDeclaration(
            name="A",
            decorators=[
                Decorator(name="Plain"),
                Decorator(name="Args", arguments=[DecoratorString(value='say "hi"'), DecoratorNumber(value=1)]),
            ],
        )
        text = to_cto(Model(namespace="n", declarations=[decl]))
        assert '@Plain\n@Args("say \\"hi\\"", 1.0)\nconcept A {\n}\n' in text

    def test_double_range(self) -> None:
        prop = DoubleProperty(name="x", default_value=0.5, validator=DoubleDomainValidator(lower=-1, upper=None))
        text = to_cto(Model(namespace="n", declarations=[ConceptDeclaration(name="A", properties=[prop])]))
        assert "  o Double x default=0.5 range=[-1.0,]\n" in text

    @pytest.mark.parametrize(
        ("pattern", "printed"),
        [
            ("a/b", r"a\/b"),
            (r"a\/b", r"a\/b"),
            (r"a\\/b", r"a\\\/b"),
            ("^/+$", r"^\/+$"),
        ],
    )
    def test_regex_slashes_are_escaped(self, pattern: str, printed: str) -> None:
        prop = StringProperty(name="path", validator=StringRegexValidator(pattern=pattern, flags="i"))
        model = Model(namespace="n", declarations=[ConceptDeclaration(name="A", properties=[prop])])
        text = to_cto(model)
        assert f"  o String path regex=/{printed}/i\n" in text
        reparsed = parse(text).declarations[0].properties[0]
        assert isinstance(reparsed, StringProperty)
        assert reparsed.validator == StringRegexValidator(pattern=printed, flags="i")


# ###############
# Round Trip
# ###############


class TestRoundTrip:
    def test_parse_of_printed_model_is_equal(self) -> None:
        model = parse(_FULL_SOURCE)
        assert parse(to_cto(model)) == model

    def test_printing_is_stable(self) -> None:
        printed = to_cto(parse(_FULL_SOURCE))
        assert to_cto(parse(printed)) == printed

    def test_resolved_namespaces_are_dropped(self) -> None:
        model = parse("namespace a\nconcept A {\n  o B b\n}\nconcept B {}")
        resolved = model.model_copy(deep=True)
        resolved.declarations[0].properties[0].type.namespace = "a"  # type: ignore[union-attr]
        assert to_cto(resolved) == to_cto(model)

    @pytest.mark.parametrize("value", ["tab\there", "line\nbreak", "back\\slash", "it's"])
    def test_string_escapes(self, value: str) -> None:
        decl = ConceptDeclaration(name="A", decorators=[Decorator(name="D", arguments=[DecoratorString(value=value)])])
        model = Model(namespace="n", declarations=[decl])
        assert parse(to_cto(model)) == model
