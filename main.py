"""
Entry point: load a dependency graph and print a summary.

Usage:
    python main.py <build_id> <source> [--json] [--log-level DEBUG]

<source> is either a URL (cached in DEPGRAPH_CACHE_DIR) or a local file.
"""

import argparse
import sys

from src.depgraph.loader import GraphLoader
from src.depgraph.models import Graph
from src.shared.config import DepGraphSettings
from src.shared.exceptions import DepGraphError
from src.shared.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Load and summarize a dependency graph.")
    parser.add_argument("build_id", help="Build identifier to stamp on the graph")
    parser.add_argument("source", help="URL or local path of the graph document")
    parser.add_argument("--json", action="store_true", help="Print the loaded graph as JSON")
    parser.add_argument("--log-level", default=None, help="Override DEPGRAPH_LOG_LEVEL")
    return parser


def summarize(graph: Graph) -> str:
    lines = [
        f"build:  {graph.build_id or '-'}",
        f"nodes:  {len(graph.nodes)}",
    ]
    for kind, count in graph.node_types().items():
        lines.append(f"  {kind or '(untyped)'}: {count}")
    targets = sum(len(edge.to_nodes) for edge in graph.edges)
    lines.append(f"edges:  {len(graph.edges)} groups, {targets} targets")
    for kind, count in graph.edge_types().items():
        lines.append(f"  {kind or '(untyped)'}: {count} targets")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = DepGraphSettings()
    setup_logging("depgraph", level=args.log_level or settings.log_level)

    try:
        with GraphLoader(settings=settings) as loader:
            graph = loader.load(args.build_id, args.source)
    except DepGraphError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(graph.to_json(indent=2) if args.json else summarize(graph))
    return 0


if __name__ == "__main__":
    sys.exit(main())
