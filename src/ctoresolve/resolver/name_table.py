# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Construction of the per-model name table.

The name table maps every simple type name visible inside a model to the
namespace that declares it. Visibility comes from three sources, applied in
this order so that later writes override earlier ones:

1. the built-in base declarations (``Concept``, ``Asset``, ...),
2. the model's imports, in declaration order,
3. the model's own declarations.
"""

from __future__ import annotations

import logging
from typing import Protocol

from ctoresolve.errors import UnresolvedImportError
from ctoresolve.model.entities import ImportAll, ImportType, Model
from ctoresolve.workspace.config import DEFAULT_CONFIG, ResolverConfig

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

# Base declarations every model may reference without an import.
BUILTIN_DECLARATIONS: tuple[str, ...] = ("Concept", "Asset", "Participant", "Transaction", "Event")

# Key that older releases seeded in place of "Transaction".
LEGACY_TRANSACTION_KEY = "Transaction "


class NamespaceRegistry(Protocol):
    """Read-only view of the models known to a registry."""

    def has_namespace(self, namespace: str) -> bool: ...

    def has_local_declaration(self, namespace: str, name: str) -> bool: ...

    def local_declaration_names(self, namespace: str) -> list[str]: ...


def build_name_table(
    registry: NamespaceRegistry,
    model: Model,
    *,
    config: ResolverConfig | None = None,
) -> dict[str, str]:
    """Return the mapping from simple type names to declaring namespaces.

    Args:
        registry: Answers which declarations each imported namespace holds.
        model: The model whose visible names are collected. Not modified.
        config: Selects the built-in namespace and the legacy seed; defaults
            to :data:`~ctoresolve.workspace.config.DEFAULT_CONFIG`.

    Returns:
        An insertion-ordered snapshot. Later entries already reflect
        overrides: ``ImportType`` after ``ImportAll`` wins, locals win last.

    Raises:
        UnresolvedImportError: If an ``ImportType`` names a declaration the
            registry does not hold, or an ``ImportAll`` names an unknown
            namespace.
    """
    config = config or DEFAULT_CONFIG

    table: dict[str, str] = {}
    for name in BUILTIN_DECLARATIONS:
        if name == "Transaction" and config.legacy_transaction_seed:
            name = LEGACY_TRANSACTION_KEY
        table[name] = config.builtin_namespace

    for imp in model.imports:
        if isinstance(imp, ImportType):
            if not registry.has_local_declaration(imp.namespace, imp.name):
                raise UnresolvedImportError(imp.name, imp.namespace)
            table[imp.name] = imp.namespace
        elif isinstance(imp, ImportAll):
            if not registry.has_namespace(imp.namespace):
                raise UnresolvedImportError(None, imp.namespace)
            for name in registry.local_declaration_names(imp.namespace):
                table[name] = imp.namespace

    for name in model.declaration_names():
        table[name] = model.namespace

    logger.debug("Built name table for %s with %d entries", model.namespace, len(table))
    return table

