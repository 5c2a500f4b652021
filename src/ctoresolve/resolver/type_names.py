# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Attach declaring namespaces to the type references of a metamodel tree."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ctoresolve.errors import UnresolvedNameError
from ctoresolve.model.entities import (
    ConceptDeclaration,
    EnumDeclaration,
    EnumProperty,
    Model,
    ObjectProperty,
    PrimitiveProperty,
    RelationshipProperty,
)
from ctoresolve.model.types import (
    Decorator,
    DecoratorBoolean,
    DecoratorNumber,
    DecoratorString,
    DecoratorTypeReference,
    TypeIdentifier,
)
from ctoresolve.workspace.config import DEFAULT_CONFIG, ResolverConfig

# ###############
# Public Interface
# ###############


def resolve_name(name: str, table: Mapping[str, str]) -> str:
    """Return the namespace that declares *name*.

    Raises:
        UnresolvedNameError: If *name* is not in *table*.
    """
    namespace = table.get(name)
    if not namespace:
        raise UnresolvedNameError(name)
    return namespace


def resolve_type_names(node: Any, table: Mapping[str, str], *, config: ResolverConfig | None = None) -> Any:
    """Resolve every type reference reachable from *node* in place.

    Each visited :class:`TypeIdentifier` gets its ``namespace`` set from
    *table*; nothing else is modified. Already-resolved identifiers are
    resolved again by name, so applying this twice yields the same tree.

    Args:
        node: A Model, declaration, property, enum value, decorator or
            decorator literal.
        table: Name table built by
            :func:`~ctoresolve.resolver.name_table.build_name_table`.
        config: Controls whether enum value decorators are visited.

    Returns:
        *node* itself.

    Raises:
        UnresolvedNameError: On the first reference missing from *table*.
            Identifiers visited before it keep their new namespace.
        TypeError: If *node* (or a nested node) is not a metamodel node.
    """
    _Resolver(table, config or DEFAULT_CONFIG).visit(node)
    return node


# ################
# Implementation
# ################

_PLAIN_LITERALS = (DecoratorString, DecoratorNumber, DecoratorBoolean)


class _Resolver:
    """Walks a metamodel tree and fills in type identifier namespaces."""

    def __init__(self, table: Mapping[str, str], config: ResolverConfig) -> None:
        self._table = table
        self._config = config

    def visit(self, node: Any) -> None:
        if isinstance(node, Model):
            for decl in node.declarations:
                self.visit(decl)
        elif isinstance(node, ConceptDeclaration):
            if node.super_type is not None:
                self._resolve(node.super_type)
            for prop in node.properties:
                self.visit(prop)
            self._visit_decorators(node.decorators)
        elif isinstance(node, EnumDeclaration):
            self._visit_decorators(node.decorators)
            if self._config.resolve_enum_property_decorators:
                for value in node.properties:
                    self.visit(value)
        elif isinstance(node, (ObjectProperty, RelationshipProperty)):
            self._resolve(node.type)
            self._visit_decorators(node.decorators)
        elif isinstance(node, PrimitiveProperty | EnumProperty):
            self._visit_decorators(node.decorators)
        elif isinstance(node, Decorator):
            for argument in node.arguments or []:
                self.visit(argument)
        elif isinstance(node, DecoratorTypeReference):
            self._resolve(node.type)
        elif isinstance(node, _PLAIN_LITERALS):
            pass
        else:
            raise TypeError(f"Cannot resolve type names of {type(node).__name__}")

    def _visit_decorators(self, decorators: list[Decorator] | None) -> None:
        for decorator in decorators or []:
            self.visit(decorator)

    def _resolve(self, identifier: TypeIdentifier) -> None:
        identifier.namespace = resolve_name(identifier.name, self._table)
