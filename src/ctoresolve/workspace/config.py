# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the resolver configuration file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".ctoresolve.yaml"


class ResolverConfigError(Exception):
    """Raised when a resolver configuration file is invalid or cannot be loaded."""


@dataclass(frozen=True)
class ResolverConfig:
    """Settings that adjust name resolution and model loading.

    Attributes:
        builtin_namespace: Namespace of the base declarations (``Concept``,
            ``Asset``, ``Participant``, ``Transaction``, ``Event``).
        resolve_enum_property_decorators: Whether decorators on enum values
            are resolved along with the enum's own decorators.
        legacy_transaction_seed: Seed the built-in ``Transaction`` under the
            key ``"Transaction "`` (trailing space) as older releases did.
        source_suffix: File suffix of model source files.
    """

    builtin_namespace: str = "concerto"
    resolve_enum_property_decorators: bool = True
    legacy_transaction_seed: bool = False
    source_suffix: str = ".cto"


DEFAULT_CONFIG = ResolverConfig()


def load_resolver_config(path: Path) -> ResolverConfig:
    """Load and parse a resolver configuration file.

    Args:
        path: Path to the `.ctoresolve.yaml` file.

    Returns:
        A ResolverConfig with defaults for every key the file omits.

    Raises:
        ResolverConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ResolverConfigError(f"Resolver config file not found: {path}") from None
    except OSError as exc:
        raise ResolverConfigError(f"Cannot read resolver config file: {exc}") from exc

    return _parse_resolver_config(text, source_label=str(path))


def find_resolver_config(directory: Path) -> ResolverConfig:
    """Return the config stored in *directory*, or the defaults if it has none."""
    path = directory / CONFIG_FILE_NAME
    if not path.is_file():
        return DEFAULT_CONFIG
    return load_resolver_config(path)


# ################
# Implementation
# ################

_STRING_KEYS = {
    "builtin-namespace": "builtin_namespace",
    "source-suffix": "source_suffix",
}

_BOOLEAN_KEYS = {
    "resolve-enum-property-decorators": "resolve_enum_property_decorators",
    "legacy-transaction-seed": "legacy_transaction_seed",
}


def _parse_resolver_config(text: str, source_label: str = "<string>") -> ResolverConfig:
    """Parse resolver config YAML text into a ResolverConfig.

    An empty document yields the defaults.

    Raises:
        ResolverConfigError: If the YAML is invalid, a key is unknown or a
            value has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ResolverConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return DEFAULT_CONFIG
    if not isinstance(data, dict):
        raise ResolverConfigError(f"{source_label}: resolver config must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _STRING_KEYS and key not in _BOOLEAN_KEYS)
    if unknown:
        raise ResolverConfigError(f"{source_label}: unknown field(s) {', '.join(repr(k) for k in unknown)}")

    values: dict[str, str | bool] = {}
    for key, attr in _STRING_KEYS.items():
        if key in data:
            values[attr] = _require_string(data, key, source_label)
    for key, attr in _BOOLEAN_KEYS.items():
        if key in data:
            values[attr] = _require_bool(data, key, source_label)

    suffix = values.get("source_suffix")
    if isinstance(suffix, str) and not suffix.startswith("."):
        raise ResolverConfigError(f"{source_label}: 'source-suffix' must start with '.'")

    return ResolverConfig(**values)  # type: ignore[arg-type]


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a non-empty string field from a mapping, raising ResolverConfigError otherwise."""
    value = mapping[key]
    if not isinstance(value, str) or not value:
        raise ResolverConfigError(f"{source_label}: '{key}' must be a non-empty string")
    return value


def _require_bool(mapping: dict[str, object], key: str, source_label: str) -> bool:
    value = mapping[key]
    if not isinstance(value, bool):
        raise ResolverConfigError(f"{source_label}: '{key}' must be true or false")
    return value
