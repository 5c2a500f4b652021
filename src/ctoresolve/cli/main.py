# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the ctoresolve command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from ctoresolve.errors import MetaModelError
from ctoresolve.model.entities import Models
from ctoresolve.model.schema import get_metamodel_cto
from ctoresolve.parser import LexerError, ParseError, to_cto
from ctoresolve.registry import LoaderError, ModelRegistry, RegistryError, load_directory
from ctoresolve.resolver import export_all, import_all, read_artifact, resolve_model, serialize, write_artifact
from ctoresolve.workspace.config import ResolverConfigError

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the ctoresolve CLI."""
    parser = argparse.ArgumentParser(
        prog="ctoresolve",
        description="ctoresolve: name resolution for CTO metamodels",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug messages to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check that all models resolve",
        description="Load every model file in a directory and validate the registry.",
    )
    check_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the model files (default: current directory)",
    )

    # resolve subcommand
    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Print the resolved metamodel of one namespace",
        description="Resolve the type references of one model and print it as JSON.",
    )
    resolve_parser.add_argument("namespace", help="Namespace of the model to resolve")
    resolve_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the model files (default: current directory)",
    )

    # export subcommand
    export_parser = subparsers.add_parser(
        "export",
        help="Export all models as one metamodel JSON document",
        description="Export every model in a directory as a Models collection.",
    )
    export_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the model files (default: current directory)",
    )
    export_parser.add_argument(
        "--resolve",
        action="store_true",
        help="Resolve type references before exporting",
    )
    export_parser.add_argument(
        "--no-validate",
        dest="validate",
        action="store_false",
        help="Skip the structural check of the exported collection",
    )
    export_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the JSON to this file instead of stdout",
    )

    # import subcommand
    import_parser = subparsers.add_parser(
        "import",
        help="Convert a metamodel JSON document back to .cto files",
        description="Import a Models collection and write one .cto file per namespace.",
    )
    import_parser.add_argument("artifact", type=Path, help="Path to the metamodel JSON file")
    import_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("."),
        help="Directory to write the .cto files to (default: current directory)",
    )
    import_parser.add_argument(
        "--no-validate",
        dest="validate",
        action="store_false",
        help="Skip the structural check of the imported collection",
    )

    # metamodel subcommand
    subparsers.add_parser(
        "metamodel",
        help="Print the metamodel schema as CTO",
        description="Print the CTO source describing the metamodel itself.",
    )

    args = parser.parse_args()
    _configure_logging(args.verbose)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Failures reported as "Error: ..." with exit status 1.
_USER_ERRORS = (MetaModelError, LoaderError, RegistryError, ResolverConfigError, LexerError, ParseError)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=_LOG_FORMAT,
        stream=sys.stderr,
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    try:
        if args.command == "check":
            return _cmd_check(args)
        if args.command == "resolve":
            return _cmd_resolve(args)
        if args.command == "export":
            return _cmd_export(args)
        if args.command == "import":
            return _cmd_import(args)
        if args.command == "metamodel":
            return _cmd_metamodel(args)
    except _USER_ERRORS as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def _load_registry(directory: Path) -> ModelRegistry:
    return load_directory(directory.resolve())


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    directory = Path(args.directory)
    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    registry = _load_registry(directory)
    if not len(registry):
        print("No model files found.")
        return 0
    print(f"Checked {len(registry)} model file(s): all names resolve.")
    return 0


def _cmd_resolve(args: argparse.Namespace) -> int:
    """Handle the resolve subcommand."""
    registry = _load_registry(Path(args.directory))
    model_file = registry.get_model_file(args.namespace)
    resolved = resolve_model(registry, model_file.model, config=registry.config)
    print(serialize(resolved, indent=2))
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    """Handle the export subcommand."""
    registry = _load_registry(Path(args.directory))
    models = export_all(registry, resolve_names=args.resolve, validate=args.validate)
    if args.output is None:
        print(serialize(models, indent=2))
    else:
        write_artifact(models, args.output)
        print(f"Wrote {len(models.models)} model(s) to '{args.output}'.")
    return 0


def _cmd_import(args: argparse.Namespace) -> int:
    """Handle the import subcommand."""
    try:
        artifact = read_artifact(args.artifact)
    except OSError as exc:
        print(f"Error: cannot read '{args.artifact}': {exc}", file=sys.stderr)
        return 1
    models = artifact if isinstance(artifact, Models) else Models(models=[artifact])

    registry = import_all(models, validate=args.validate)
    output: Path = args.output
    output.mkdir(parents=True, exist_ok=True)
    for model_file in registry.model_files():
        target = output / f"{model_file.namespace}{registry.config.source_suffix}"
        target.write_text(model_file.source or to_cto(model_file.model), encoding="utf-8")
        print(f"Wrote '{target}'.")
    return 0


def _cmd_metamodel(args: argparse.Namespace) -> int:
    """Handle the metamodel subcommand."""
    print(get_metamodel_cto(), end="")
    return 0
