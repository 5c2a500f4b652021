# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the CTO recursive-descent parser."""

import pytest

from ctoresolve.model import (
    AssetDeclaration,
    BooleanProperty,
    ConceptDeclaration,
    DateTimeProperty,
    DecoratorBoolean,
    DecoratorNumber,
    DecoratorString,
    DecoratorTypeReference,
    DoubleDomainValidator,
    DoubleProperty,
    EnumDeclaration,
    EventDeclaration,
    Identified,
    IdentifiedBy,
    ImportAll,
    ImportType,
    IntegerDomainValidator,
    IntegerProperty,
    LongDomainValidator,
    LongProperty,
    Model,
    ObjectProperty,
    ParticipantDeclaration,
    RelationshipProperty,
    StringProperty,
    StringRegexValidator,
    TransactionDeclaration,
    TypeIdentifier,
)
from ctoresolve.parser import LexerError, ParseError, parse

# ###############
# Test Helpers
# ###############

_HR_SOURCE = """\
namespace org.acme.hr

import org.acme.base.Address from https://models.acme.org/base.cto
import org.acme.common.*

@Entity("person", 2, true)
abstract participant Person identified by email {
  o String email regex=/^[^@]+@[^@]+$/i
  o String[] nicknames optional
  o Integer age range=[0,150] default=30
  o Double height range=[,3.0]
  o Long salary optional
  o Boolean active default=true
  o DateTime hired
  o Address address
  --> Person manager optional
  @Ref(Person[])
  o Person[] reports optional
}

enum Color {
  @Hex("#f00")
  o RED
  o GREEN
}
"""


def _parse_body(body: str) -> Model:
    """Parse declarations placed below a fixed namespace header."""
    return parse(f"namespace test\n\n{body}")


def _single_property(prop_source: str) -> object:
    model = _parse_body(f"concept C {{\n  {prop_source}\n}}")
    decl = model.declarations[0]
    assert isinstance(decl, ConceptDeclaration)
    return decl.properties[0]


# ###############
# Header
# ###############


class TestHeader:
    def test_namespace(self) -> None:
        model = parse("namespace org.acme.hr")
        assert model == Model(namespace="org.acme.hr")

    def test_namespace_segments_may_be_keywords(self) -> None:
        assert parse("namespace org.event.asset").namespace == "org.event.asset"

    def test_concerto_version(self) -> None:
        model = parse('concerto version "^3.0.0"\nnamespace a')
        assert model.concerto_version == "^3.0.0"

    def test_missing_namespace(self) -> None:
        with pytest.raises(ParseError):
            parse("concept A {}")

    def test_empty_source(self) -> None:
        with pytest.raises(ParseError):
            parse("")

    def test_second_namespace_is_rejected(self) -> None:
        with pytest.raises(ParseError):
            parse("namespace a\nnamespace b")


class TestImports:
    def test_single_type_with_uri(self) -> None:
        model = parse(_HR_SOURCE)
        assert model.imports[0] == ImportType(
            namespace="org.acme.base",
            name="Address",
            uri="https://models.acme.org/base.cto",
        )

    def test_wildcard(self) -> None:
        model = parse(_HR_SOURCE)
        assert model.imports[1] == ImportAll(namespace="org.acme.common")

    def test_brace_list_expands_to_one_import_per_name(self) -> None:
        model = parse("namespace a\nimport org.base.{Foo, Bar}")
        assert model.imports == [
            ImportType(namespace="org.base", name="Foo"),
            ImportType(namespace="org.base", name="Bar"),
        ]

    def test_order_is_preserved(self) -> None:
        model = parse("namespace a\nimport x.*\nimport y.Foo\nimport z.*")
        assert [imp.namespace for imp in model.imports] == ["x", "y", "z"]

    def test_import_needs_namespace_and_name(self) -> None:
        with pytest.raises(ParseError):
            parse("namespace a\nimport Foo")

    def test_from_requires_uri(self) -> None:
        with pytest.raises(ParseError):
            parse("namespace a\nimport b.Foo from")


# ###############
# Declarations
# ###############


class TestDeclarations:
    @pytest.mark.parametrize(
        ("keyword", "declaration_class"),
        [
            ("concept", ConceptDeclaration),
            ("asset", AssetDeclaration),
            ("participant", ParticipantDeclaration),
            ("transaction", TransactionDeclaration),
            ("event", EventDeclaration),
        ],
    )
    def test_declaration_kinds(self, keyword: str, declaration_class: type) -> None:
        decl = _parse_body(f"{keyword} Thing {{}}").declarations[0]
        assert type(decl) is declaration_class
        assert decl.name == "Thing"

    def test_abstract_identified_by(self) -> None:
        decl = parse(_HR_SOURCE).declarations[0]
        assert isinstance(decl, ParticipantDeclaration)
        assert decl.is_abstract
        assert decl.identified == IdentifiedBy(name="email")

    def test_identified_without_field(self) -> None:
        decl = _parse_body("asset Car identified {}").declarations[0]
        assert isinstance(decl, AssetDeclaration)
        assert decl.identified == Identified()

    @pytest.mark.parametrize(
        "header",
        ["asset Car extends Vehicle identified by vin", "asset Car identified by vin extends Vehicle"],
    )
    def test_clauses_in_either_order(self, header: str) -> None:
        decl = _parse_body(header + " {}").declarations[0]
        assert isinstance(decl, AssetDeclaration)
        assert decl.super_type == TypeIdentifier(name="Vehicle")
        assert decl.identified == IdentifiedBy(name="vin")

    def test_duplicate_extends(self) -> None:
        with pytest.raises(ParseError):
            _parse_body("concept A extends B extends C {}")

    def test_enum(self) -> None:
        decl = parse(_HR_SOURCE).declarations[1]
        assert isinstance(decl, EnumDeclaration)
        assert [value.name for value in decl.properties] == ["RED", "GREEN"]
        assert decl.properties[0].decorators is not None
        assert decl.properties[0].decorators[0].arguments == [DecoratorString(value="#f00")]
        assert decl.properties[1].decorators is None

    def test_abstract_enum_is_rejected(self) -> None:
        with pytest.raises(ParseError):
            _parse_body("abstract enum E {}")

    @pytest.mark.parametrize("name", ["null", "true"])
    def test_reserved_declaration_name(self, name: str) -> None:
        with pytest.raises(ParseError):
            _parse_body(f"concept {name} {{}}")

    def test_unexpected_top_level_token(self) -> None:
        with pytest.raises(ParseError):
            _parse_body("o String name")

    def test_error_position(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("namespace a\n\nconcept A {\n  o String\n}")
        assert exc_info.value.line == 5
        assert exc_info.value.column == 1

    def test_lexer_errors_propagate(self) -> None:
        with pytest.raises(LexerError):
            _parse_body("concept A { o String # }")


# ###############
# Decorators
# ###############


class TestDecorators:
    def test_literal_arguments(self) -> None:
        decl = parse(_HR_SOURCE).declarations[0]
        assert decl.decorators is not None
        decorator = decl.decorators[0]
        assert decorator.name == "Entity"
        assert decorator.arguments == [
            DecoratorString(value="person"),
            DecoratorNumber(value=2.0),
            DecoratorBoolean(value=True),
        ]

    def test_type_reference_argument(self) -> None:
        decl = parse(_HR_SOURCE).declarations[0]
        assert isinstance(decl, ConceptDeclaration)
        reports = decl.properties[-1]
        assert reports.decorators is not None
        assert reports.decorators[0].arguments == [
            DecoratorTypeReference(type=TypeIdentifier(name="Person"), is_array=True)
        ]

    def test_without_parentheses(self) -> None:
        decl = _parse_body("@Abstract\nconcept A {}").declarations[0]
        assert decl.decorators is not None
        assert decl.decorators[0].arguments is None

    def test_with_empty_parentheses(self) -> None:
        decl = _parse_body("@Flag()\nconcept A {}").declarations[0]
        assert decl.decorators is not None
        assert decl.decorators[0].arguments == []

    def test_several_decorators(self) -> None:
        decl = _parse_body('@A\n@B(-1.5, "x")\nconcept C {}').declarations[0]
        assert decl.decorators is not None
        assert [d.name for d in decl.decorators] == ["A", "B"]
        assert decl.decorators[1].arguments == [DecoratorNumber(value=-1.5), DecoratorString(value="x")]

    def test_no_decorators(self) -> None:
        assert _parse_body("concept A {}").declarations[0].decorators is None

    def test_invalid_argument(self) -> None:
        with pytest.raises(ParseError):
            _parse_body("@A({})\nconcept C {}")


# ###############
# Properties
# ###############


class TestProperties:
    def test_every_kind(self) -> None:
        decl = parse(_HR_SOURCE).declarations[0]
        assert isinstance(decl, ConceptDeclaration)
        kinds = [type(prop) for prop in decl.properties]
        assert kinds == [
            StringProperty,
            StringProperty,
            IntegerProperty,
            DoubleProperty,
            LongProperty,
            BooleanProperty,
            DateTimeProperty,
            ObjectProperty,
            RelationshipProperty,
            ObjectProperty,
        ]

    def test_string_regex(self) -> None:
        prop = _single_property("o String email regex=/^[^@]+@[^@]+$/i")
        assert isinstance(prop, StringProperty)
        assert prop.validator == StringRegexValidator(pattern="^[^@]+@[^@]+$", flags="i")

    def test_string_default(self) -> None:
        prop = _single_property('o String greeting default="hi"')
        assert isinstance(prop, StringProperty)
        assert prop.default_value == "hi"

    def test_array_and_optional(self) -> None:
        prop = _single_property("o String[] nicknames optional")
        assert isinstance(prop, StringProperty)
        assert prop.is_array
        assert prop.is_optional

    def test_integer_range_and_default(self) -> None:
        prop = _single_property("o Integer age range=[0,150] default=30")
        assert isinstance(prop, IntegerProperty)
        assert prop.default_value == 30
        assert prop.validator == IntegerDomainValidator(lower=0, upper=150)

    def test_open_double_range(self) -> None:
        prop = _single_property("o Double height range=[,3.0]")
        assert isinstance(prop, DoubleProperty)
        assert prop.validator == DoubleDomainValidator(lower=None, upper=3.0)

    def test_long_range(self) -> None:
        prop = _single_property("o Long id range=[-5,]")
        assert isinstance(prop, LongProperty)
        assert prop.validator == LongDomainValidator(lower=-5)

    def test_double_default_accepts_integer_literal(self) -> None:
        prop = _single_property("o Double ratio default=1")
        assert isinstance(prop, DoubleProperty)
        assert prop.default_value == 1.0

    def test_boolean_default(self) -> None:
        prop = _single_property("o Boolean active default=false")
        assert isinstance(prop, BooleanProperty)
        assert prop.default_value is False

    def test_object_property(self) -> None:
        prop = _single_property('o Address home default="none"')
        assert isinstance(prop, ObjectProperty)
        assert prop.type == TypeIdentifier(name="Address")
        assert prop.default_value == "none"

    def test_relationship(self) -> None:
        prop = _single_property("--> Person[] friends optional")
        assert isinstance(prop, RelationshipProperty)
        assert prop.type == TypeIdentifier(name="Person")
        assert prop.is_array
        assert prop.is_optional

    def test_keyword_property_names(self) -> None:
        model = _parse_body("concept C {\n  o String namespace\n  o Identified identified\n  o String from\n}")
        decl = model.declarations[0]
        assert isinstance(decl, ConceptDeclaration)
        assert [p.name for p in decl.properties] == ["namespace", "identified", "from"]

    @pytest.mark.parametrize(
        "prop_source",
        [
            "o Boolean flag regex=/x/",
            "o DateTime at default=1",
            '--> Person p default="x"',
            "o Integer n default=1.5",
            "o Integer n range=[0.5,1]",
            'o Boolean b default="yes"',
            "o String s optional optional",
            "o String true",
            "o Person[ p",
        ],
    )
    def test_invalid_property(self, prop_source: str) -> None:
        with pytest.raises(ParseError):
            _single_property(prop_source)
