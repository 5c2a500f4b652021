# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Model registry and loading of .cto files from disk."""

from ctoresolve.registry.loader import LoaderError, load_directory, load_files
from ctoresolve.registry.model_registry import ModelFile, ModelRegistry, RegistryError

__all__ = [
    "ModelFile",
    "ModelRegistry",
    "RegistryError",
    "LoaderError",
    "load_files",
    "load_directory",
]
