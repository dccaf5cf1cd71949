"""
Command-line interface for circuit generator batch operations.

Inspect and check saved circuits without the GUI.

Usage::

    python -m cli types
    python -m cli describe circuit.json
    python -m cli describe circuit.json --output circuit.txt
    python -m cli validate circuit.json
    python -m cli connections circuit.json R1
"""

import argparse
import json
import sys
from pathlib import Path

from controllers.circuit_controller import CircuitController
from controllers.file_controller import validate_circuit_data
from models.circuit import CircuitModel
from models.errors import CircuitError
from models.registry import build_default_registry

__version__ = "0.1.0"


def try_load_circuit(filepath: str) -> tuple[CircuitModel | None, str]:
    """Load and validate a circuit JSON file without exiting.

    Returns:
        (model, "") on success, or (None, error_message) on failure.
    """
    path = Path(filepath)
    if not path.exists():
        return None, f"file not found: {filepath}"

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        return None, f"invalid JSON in {filepath}: {e}"

    try:
        validate_circuit_data(data)
    except ValueError as e:
        return None, f"invalid circuit file: {e}"

    try:
        return CircuitModel.from_dict(data, build_default_registry()), ""
    except CircuitError as e:
        return None, f"rejected circuit: {e}"


def load_circuit(filepath: str) -> CircuitModel:
    """Load and validate a circuit JSON file.

    Raises:
        SystemExit: On file read or validation errors.
    """
    model, error = try_load_circuit(filepath)
    if model is None:
        print(f"Error: {error}", file=sys.stderr)
        sys.exit(1)
    return model


def cmd_types(args: argparse.Namespace) -> int:
    """List registered element types."""
    for type_name in build_default_registry().get_types():
        print(type_name)
    return 0


def cmd_describe(args: argparse.Namespace) -> int:
    """Print or write the plain-text description of a circuit."""
    model = load_circuit(args.circuit)
    text = model.describe()

    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
        print(f"Description written to {args.output}", file=sys.stderr)
    else:
        print(text)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Load a circuit, replaying its connections, and report what was found."""
    model, error = try_load_circuit(args.circuit)
    if model is None:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    print(
        f"{args.circuit}: OK - {len(model.elements)} elements, "
        f"{len(model.links)} links, {len(model.connections)} connection points"
    )
    return 0


def cmd_connections(args: argparse.Namespace) -> int:
    """Print the ids of elements connected to one element."""
    model = load_circuit(args.circuit)
    controller = CircuitController(model)

    try:
        connected = controller.find_connections(args.element_id)
    except CircuitError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for element in connected:
        print(element.element_id)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="circuit-cli",
        description="Circuit generator batch operations: describe and validate saved circuits.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("types", help="List the element types that can be placed")

    desc_parser = subparsers.add_parser("describe", help="Print a plain-text description of a circuit")
    desc_parser.add_argument("circuit", help="Path to circuit JSON file")
    desc_parser.add_argument("--output", "-o", help="Write the description to a file instead of stdout")

    val_parser = subparsers.add_parser("validate", help="Check that a circuit file loads and its connections hold")
    val_parser.add_argument("circuit", help="Path to circuit JSON file")

    conn_parser = subparsers.add_parser("connections", help="List elements connected to an element")
    conn_parser.add_argument("circuit", help="Path to circuit JSON file")
    conn_parser.add_argument("element_id", help="Id of the element, e.g. R1")

    return parser


def main(argv=None) -> int:
    """CLI entry point. Returns exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    handlers = {
        "types": cmd_types,
        "describe": cmd_describe,
        "validate": cmd_validate,
        "connections": cmd_connections,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
