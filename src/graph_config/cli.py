"""CLI entry point for graph-config.

Usage:
    graph-config bind template.dot values.json                 # Descriptors as JSON
    graph-config bind template.dot values.json --format cypher # Cypher statements
    graph-config bind body.dot values.json --kind digraph      # Wrap body in digraph { }
    graph-config parse template.dot                            # Summarise a template
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from graph_config.config import FACTORY_PRESETS, get_factories, log_level_from_env
from graph_config.errors import GraphConfigError

KINDS = ("dot", "graph", "digraph")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="graph-config",
        description="Bind DOT graph templates to data",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log binding diagnostics (default level from GRAPH_CONFIG_LOG_LEVEL)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- bind command ---
    bind_parser = subparsers.add_parser("bind", help="Bind a template to a JSON value bundle")
    bind_parser.add_argument("template", type=str, help="Path to the DOT template")
    bind_parser.add_argument("values", type=str, help="Path to a JSON file with the values")
    bind_parser.add_argument(
        "--kind",
        choices=KINDS,
        default="dot",
        help="How to wrap the template text (default: dot, i.e. as written)",
    )
    bind_parser.add_argument(
        "--format",
        choices=sorted(FACTORY_PRESETS),
        default="descriptors",
        help="Statement format (default: descriptors)",
    )

    # --- parse command ---
    parse_parser = subparsers.add_parser("parse", help="Parse a template and summarise it")
    parse_parser.add_argument("template", type=str, help="Path to the DOT template")
    parse_parser.add_argument("--kind", choices=KINDS, default="dot")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level="DEBUG" if args.verbose else log_level_from_env(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "bind":
        _cmd_bind(args.template, args.values, args.kind, args.format)
    elif args.command == "parse":
        _cmd_parse(args.template, args.kind)


def _read(path_str: str) -> str:
    path = Path(path_str)
    if not path.exists():
        print(f"Error: File not found: {path_str}")
        sys.exit(1)
    return path.read_text(encoding="utf-8")


def _cmd_bind(template_path: str, values_path: str, kind: str, output_format: str) -> None:
    """Bind a template file against a values file and print the statements."""
    from graph_config.template import GraphConfig

    source = _read(template_path)
    try:
        values: Any = json.loads(_read(values_path))
    except json.JSONDecodeError as e:
        print(f"Error: {values_path} is not valid JSON: {e}")
        sys.exit(1)
    if not isinstance(values, dict):
        print(f"Error: {values_path} must hold a JSON object")
        sys.exit(1)

    config = GraphConfig(get_factories(output_format))
    try:
        result = config.template(kind, source).bind(values)
    except GraphConfigError as e:
        print(f"{type(e).__name__}: {e}")
        sys.exit(1)

    statements = [s.model_dump(mode="json") for s in result.statements]
    print(json.dumps(statements, indent=2))


def _cmd_parse(template_path: str, kind: str) -> None:
    """Parse a template file and print what binding will see."""
    from graph_config.template import GraphConfig
    from graph_config.walker import GraphWalker

    source = _read(template_path)
    try:
        template = GraphConfig().template(kind, source)
    except GraphConfigError as e:
        print(f"{type(e).__name__}: {e}")
        sys.exit(1)

    for graph in template.graphs:
        walker = GraphWalker(graph)
        name = f" {graph.name}" if graph.name else ""
        print(
            f"{graph.kind}{name}: {len(walker.node_declarations)} node declaration(s), "
            f"{len(walker.edge_declarations)} edge declaration(s)"
        )
        implied = walker.implied_node_names()
        if implied:
            print(f"  Implied nodes: {', '.join(implied)}")


if __name__ == "__main__":
    main()
