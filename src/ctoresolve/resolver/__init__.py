# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Name resolution for metamodel trees: name tables, type references, export and import."""

from ctoresolve.resolver.artifact import (
    ARTIFACT_SUFFIX,
    deserialize_model,
    deserialize_models,
    read_artifact,
    serialize,
    write_artifact,
)
from ctoresolve.resolver.metamodel import export_all, export_model, import_all, resolve_model
from ctoresolve.resolver.name_table import (
    BUILTIN_DECLARATIONS,
    LEGACY_TRANSACTION_KEY,
    NamespaceRegistry,
    build_name_table,
)
from ctoresolve.resolver.type_names import resolve_name, resolve_type_names

__all__ = [
    "BUILTIN_DECLARATIONS",
    "LEGACY_TRANSACTION_KEY",
    "NamespaceRegistry",
    "build_name_table",
    "resolve_name",
    "resolve_type_names",
    "resolve_model",
    "export_model",
    "export_all",
    "import_all",
    "ARTIFACT_SUFFIX",
    "serialize",
    "deserialize_model",
    "deserialize_models",
    "write_artifact",
    "read_artifact",
]
