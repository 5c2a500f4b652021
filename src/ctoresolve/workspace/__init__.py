# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resolver configuration for ctoresolve."""

from ctoresolve.workspace.config import (
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG,
    ResolverConfig,
    ResolverConfigError,
    find_resolver_config,
    load_resolver_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_CONFIG",
    "ResolverConfig",
    "ResolverConfigError",
    "find_resolver_config",
    "load_resolver_config",
]
