# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Errors raised while validating and resolving metamodel trees."""

from __future__ import annotations

# ###############
# Public Interface
# ###############


class MetaModelError(Exception):
    """Base class for all structural and name-resolution failures."""


class StructuralError(MetaModelError):
    """Raised when a tree does not conform to the metamodel schema.

    Attributes:
        errors: One ``"<location>: <message>"`` entry per schema violation.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = list(errors or [])
        if self.errors:
            message = message + "\n" + "\n".join(f"  {e}" for e in self.errors)
        super().__init__(message)


class UnresolvedImportError(MetaModelError):
    """Raised when an import names a declaration or namespace the registry lacks.

    Attributes:
        name: The imported declaration name, or ``None`` for a wildcard import
            of an unknown namespace.
        namespace: The namespace the import claims to read from.
    """

    def __init__(self, name: str | None, namespace: str) -> None:
        if name is None:
            message = f"Namespace {namespace} not found"
        else:
            message = f"Declaration {name} in namespace {namespace} not found"
        super().__init__(message)
        self.name = name
        self.namespace = namespace


class UnresolvedNameError(MetaModelError):
    """Raised when a type reference has no entry in the name table.

    Attributes:
        name: The short name that could not be resolved.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"Name {name} not found")
        self.name = name
