# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resolution, export and import of whole metamodel trees.

These operations combine the structural validator, the name table and the
type reference resolver. None of them modifies the trees or registries it
is given: resolution always works on a copy.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ctoresolve.model.entities import Model, Models
from ctoresolve.model.schema import load_models, validate_model, validate_models
from ctoresolve.parser.printer import to_cto
from ctoresolve.resolver.name_table import NamespaceRegistry, build_name_table
from ctoresolve.resolver.type_names import resolve_type_names
from ctoresolve.workspace.config import DEFAULT_CONFIG, ResolverConfig

if TYPE_CHECKING:
    from ctoresolve.registry.model_registry import ModelFile, ModelRegistry

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def resolve_model(
    registry: NamespaceRegistry,
    model: Model,
    validate: bool = True,
    *,
    config: ResolverConfig | None = None,
) -> Model:
    """Return a copy of *model* with every type reference resolved.

    Args:
        registry: Supplies the declarations of imported namespaces.
        model: The tree to resolve. Not modified.
        validate: Check *model* against the schema before resolving.
        config: Resolution settings; defaults to the registry's
            ``config`` attribute when it has one, else the defaults.

    Returns:
        An independent tree in which each reachable TypeIdentifier carries
        the namespace that declares it.

    Raises:
        StructuralError: If *validate* is set and *model* violates the schema.
        UnresolvedImportError: If an import has no target in *registry*.
        UnresolvedNameError: If a type reference is not visible in *model*.
    """
    config = config or getattr(registry, "config", None) or DEFAULT_CONFIG
    resolved = validate_model(model) if validate else model.model_copy(deep=True)
    table = build_name_table(registry, resolved, config=config)
    resolve_type_names(resolved, table, config=config)
    logger.debug("Resolved model %s", resolved.namespace)
    return resolved


def export_model(model_file: ModelFile, validate: bool = True) -> Model:
    """Return a copy of the tree stored in a registry model file.

    Type references are left as stored (unresolved).

    Raises:
        StructuralError: If *validate* is set and the tree violates the schema.
    """
    model = model_file.model
    return validate_model(model) if validate else model.model_copy(deep=True)


def export_all(
    registry: ModelRegistry,
    resolve_names: bool = False,
    validate: bool = True,
    *,
    config: ResolverConfig | None = None,
) -> Models:
    """Export every model of *registry* as one :class:`Models` collection.

    Args:
        registry: The registry to export, in registration order.
        resolve_names: Resolve each model's type references first.
        validate: Check the assembled collection against the schema.
        config: Resolution settings; defaults to the registry's config.

    Raises:
        StructuralError: If *validate* is set and the collection violates the schema.
        UnresolvedImportError: If resolving and an import has no target.
        UnresolvedNameError: If resolving and a type reference is dangling.
    """
    config = config or registry.config
    models: list[Model] = []
    for model_file in registry.model_files():
        model = export_model(model_file, validate=False)
        if resolve_names:
            model = resolve_model(registry, model, validate=False, config=config)
        models.append(model)

    collection = Models(models=models)
    if validate:
        collection = validate_models(collection)
    logger.debug("Exported %d model(s)%s", len(models), " with resolved names" if resolve_names else "")
    return collection


def import_all(
    models: Models | Mapping[str, Any],
    validate: bool = True,
    *,
    config: ResolverConfig | None = None,
) -> ModelRegistry:
    """Build a new registry holding the given models.

    Each model is rendered to CTO and added to a fresh registry without
    per-model checks; the whole registry is then validated once, so models
    may import namespaces that appear later in the collection.

    Args:
        models: A Models tree or its JSON form.
        validate: Check the collection against the schema first.
        config: Configuration of the new registry.

    Returns:
        The new registry.

    Raises:
        StructuralError: If the collection violates the schema.
        RegistryError: If two models share a namespace.
        UnresolvedImportError: If an import has no target in the collection.
        UnresolvedNameError: If a type reference is dangling.
    """
    from ctoresolve.registry.model_registry import ModelRegistry

    if not isinstance(models, Models):
        models = load_models(models)
    elif validate:
        models = validate_models(models)

    registry = ModelRegistry(config=config)
    for model in models.models:
        registry.add_model(to_cto(model), validate=False)
    registry.validate_all()
    logger.debug("Imported %d model(s)", len(registry))
    return registry
