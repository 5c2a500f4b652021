# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of metamodel JSON artifacts.

An artifact holds either a single ``Model`` or a ``Models`` collection in
the metamodel's JSON form, tagged with ``$class``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ctoresolve.errors import StructuralError
from ctoresolve.model.entities import Model, Models
from ctoresolve.model.schema import dump_node, load_metamodel, load_model, load_models
from ctoresolve.model.types import MetaNode

# ###############
# Public Interface
# ###############

ARTIFACT_SUFFIX = ".metamodel.json"


def serialize(node: MetaNode, indent: int | None = None) -> str:
    """Serialize a metamodel node to JSON, compact unless *indent* is given."""
    separators = (",", ":") if indent is None else None
    return json.dumps(dump_node(node), indent=indent, separators=separators, ensure_ascii=False)


def deserialize_models(data: str) -> Models:
    """Deserialize a ``Models`` collection from a JSON string.

    Raises:
        StructuralError: If the text is not JSON or does not describe a Models tree.
    """
    return load_models(_decode(data))


def deserialize_model(data: str) -> Model:
    """Deserialize a single ``Model`` from a JSON string.

    Raises:
        StructuralError: If the text is not JSON or does not describe a Model.
    """
    return load_model(_decode(data))


def write_artifact(node: Model | Models, path: Path, indent: int | None = 2) -> None:
    """Write an artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(node, indent=indent) + "\n", encoding="utf-8")


def read_artifact(path: Path) -> Model | Models:
    """Read an artifact from *path*; its ``$class`` selects Model or Models."""
    return load_metamodel(_decode(path.read_text(encoding="utf-8")))


# ################
# Implementation
# ################


def _decode(data: str) -> Any:
    try:
        obj = json.loads(data)
    except json.JSONDecodeError as exc:
        raise StructuralError(f"Invalid JSON: {exc}") from exc
    if not isinstance(obj, dict):
        raise StructuralError("Invalid metamodel: expected a JSON object")
    return obj
