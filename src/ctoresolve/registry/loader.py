# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Load .cto source files from disk into a model registry.

All files are parsed and registered first; the registry is validated once
afterwards, so files may import namespaces defined in files loaded later.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from ctoresolve.errors import StructuralError
from ctoresolve.parser import LexerError, ParseError
from ctoresolve.registry.model_registry import ModelRegistry, RegistryError
from ctoresolve.workspace.config import ResolverConfig, find_resolver_config

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class LoaderError(Exception):
    """Raised when a model file cannot be read, parsed or registered."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


def load_files(
    files: Iterable[Path],
    registry: ModelRegistry | None = None,
    *,
    validate: bool = True,
    config: ResolverConfig | None = None,
) -> ModelRegistry:
    """Parse each file and add its model to a registry.

    Args:
        files: Paths of the .cto files to load.
        registry: Registry to add to; a new one is created if omitted.
        validate: Validate the whole registry once every file is added.
        config: Configuration for a newly created registry.

    Returns:
        The registry holding the loaded models.

    Raises:
        LoaderError: If a file cannot be read or parsed, or declares a
            namespace that is already registered.
        UnresolvedImportError: If validating and an import has no target.
        UnresolvedNameError: If validating and a type reference is dangling.
    """
    if registry is None:
        registry = ModelRegistry(config=config)
    for path in files:
        _load_file(path, registry)
    if validate:
        registry.validate_all()
    return registry


def load_directory(
    directory: Path,
    registry: ModelRegistry | None = None,
    *,
    validate: bool = True,
    config: ResolverConfig | None = None,
) -> ModelRegistry:
    """Load every model file below *directory*, in sorted path order.

    Without an explicit *config*, the ``.ctoresolve.yaml`` file in
    *directory* is used when present.

    Raises:
        LoaderError: If *directory* is not a directory, or on any file failure.
        ResolverConfigError: If the directory's config file is invalid.
        UnresolvedImportError: If validating and an import has no target.
        UnresolvedNameError: If validating and a type reference is dangling.
    """
    if not directory.is_dir():
        raise LoaderError(f"Model directory '{directory}' does not exist")
    if config is None:
        config = registry.config if registry is not None else find_resolver_config(directory)
    files = sorted(p for p in directory.rglob(f"*{config.source_suffix}") if p.is_file())
    logger.debug("Found %d model file(s) under %s", len(files), directory)
    return load_files(files, registry, validate=validate, config=config)


# ################
# Implementation
# ################


def _load_file(path: Path, registry: ModelRegistry) -> None:
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LoaderError(f"Cannot read model file '{path}': {exc}") from exc

    try:
        registry.add_model(source, file_name=str(path), validate=False)
    except (LexerError, ParseError) as exc:
        raise LoaderError(f"Parse error in '{path}': {exc}") from exc
    except (RegistryError, StructuralError) as exc:
        raise LoaderError(f"Cannot register '{path}': {exc}") from exc
