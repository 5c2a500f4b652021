# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""In-memory store of model files keyed by namespace."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from ctoresolve.model.entities import Model
from ctoresolve.model.schema import validate_model
from ctoresolve.parser import parse
from ctoresolve.resolver.name_table import build_name_table
from ctoresolve.resolver.type_names import resolve_type_names
from ctoresolve.workspace.config import DEFAULT_CONFIG, ResolverConfig

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class RegistryError(Exception):
    """Raised when a model cannot be added to or looked up in a registry."""


@dataclass
class ModelFile:
    """A model held by a registry together with where it came from.

    Attributes:
        model: The stored tree. Type references are left unresolved.
        source: The CTO text the model was parsed from, if any.
        file_name: Name of the file the source was read from, if any.
    """

    model: Model
    source: str | None = None
    file_name: str | None = None

    @property
    def namespace(self) -> str:
        return self.model.namespace


class ModelRegistry:
    """Holds one model file per namespace, in the order they were added.

    The registry is the name lookup used while building name tables: it
    answers which namespaces exist and which declarations each one holds.
    """

    def __init__(self, *, config: ResolverConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self._files: dict[str, ModelFile] = {}

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[ModelFile]:
        return iter(list(self._files.values()))

    def add_model(self, source: str, file_name: str | None = None, validate: bool = True) -> ModelFile:
        """Parse CTO *source* and add the resulting model.

        Args:
            source: CTO text of one namespace.
            file_name: Recorded on the model file for diagnostics.
            validate: Check the model against the current registry before
                adding it (see :meth:`add_model_tree`).

        Returns:
            The stored model file.

        Raises:
            LexerError: If the source contains invalid characters.
            ParseError: If the source is syntactically invalid.
            RegistryError: If the namespace is already registered.
            UnresolvedImportError: If validating and an import has no target.
            UnresolvedNameError: If validating and a type reference is dangling.
        """
        model = parse(source)
        return self.add_model_tree(model, source=source, file_name=file_name, validate=validate)

    def add_model_tree(
        self,
        model: Model,
        source: str | None = None,
        file_name: str | None = None,
        validate: bool = True,
    ) -> ModelFile:
        """Add an already-built model. The registry keeps its own copy.

        With *validate*, the model is checked structurally and its imports
        and type references must resolve against the models registered so
        far. A failed check leaves the registry unchanged.

        Raises:
            RegistryError: If the namespace is already registered.
            StructuralError: If validating and the tree violates the schema.
            UnresolvedImportError: If validating and an import has no target.
            UnresolvedNameError: If validating and a type reference is dangling.
        """
        if model.namespace in self._files:
            raise RegistryError(f"Namespace {model.namespace} is already registered")
        if validate:
            stored = validate_model(model)
            self._check_resolution(stored)
        else:
            stored = model.model_copy(deep=True)
        model_file = ModelFile(model=stored, source=source, file_name=file_name)
        self._files[stored.namespace] = model_file
        logger.debug(
            "Registered namespace %s with %d declaration(s)%s",
            stored.namespace,
            len(stored.declarations),
            f" from {file_name}" if file_name else "",
        )
        return model_file

    def has_namespace(self, namespace: str) -> bool:
        return namespace in self._files

    def has_local_declaration(self, namespace: str, name: str) -> bool:
        model_file = self._files.get(namespace)
        return model_file is not None and name in model_file.model.declaration_names()

    def local_declaration_names(self, namespace: str) -> list[str]:
        """Return the names declared in *namespace*, in declaration order.

        Raises:
            RegistryError: If the namespace is not registered.
        """
        return self.get_model_file(namespace).model.declaration_names()

    def namespaces(self) -> list[str]:
        return list(self._files)

    def model_files(self) -> list[ModelFile]:
        return list(self._files.values())

    def get_model_file(self, namespace: str) -> ModelFile:
        """Return the model file registered for *namespace*.

        Raises:
            RegistryError: If the namespace is not registered.
        """
        try:
            return self._files[namespace]
        except KeyError:
            raise RegistryError(f"Namespace {namespace} is not registered") from None

    def validate_all(self) -> None:
        """Check every registered model against the whole registry.

        Run once after adding models with validation disabled, so that
        models may import namespaces added after them.

        Raises:
            StructuralError: If a stored tree violates the schema.
            UnresolvedImportError: If an import has no target.
            UnresolvedNameError: If a type reference is dangling.
        """
        for model_file in self._files.values():
            self._check_resolution(validate_model(model_file.model))
        logger.debug("Validated %d model file(s)", len(self._files))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_resolution(self, model: Model) -> None:
        """Resolve a throwaway copy of *model* against this registry."""
        table = build_name_table(self, model, config=self.config)
        resolve_type_names(model.model_copy(deep=True), table, config=self.config)
