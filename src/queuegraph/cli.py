"""Command line utilities for mapping message-queue traffic in a project."""

from __future__ import annotations

import argparse
import asyncio
import sys
from dataclasses import replace
from pathlib import Path
from typing import Iterable

from .analyze import OutcomeState, run_analysis
from .config import AnalyzerConfig, load_config
from .errors import AnalysisError
from .graph.export import summarize, to_dot, to_json
from .log import set_verbose

EXIT_CODES = {
    OutcomeState.GRAPH: 0,
    OutcomeState.EMPTY: 0,
    OutcomeState.NO_INPUT: 2,
    OutcomeState.INVALID_PATH: 2,
    OutcomeState.INACCESSIBLE: 1,
    OutcomeState.PROJECT_ERROR: 1,
}

RENDERERS = {
    "json": to_json,
    "dot": to_dot,
    "summary": summarize,
}


def _override_config(args: argparse.Namespace) -> AnalyzerConfig | None:
    if args.workers is None:
        return None
    base = load_config(args.config) if args.config is not None else AnalyzerConfig()
    return replace(base, workers=args.workers)


def _analyze(args: argparse.Namespace) -> int:
    if args.verbose:
        set_verbose()

    try:
        config = _override_config(args)
        outcome = run_analysis(args.path, config, config_path=args.config)
    except AnalysisError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if not outcome.succeeded:
        print(f"Error: {outcome.message}", file=sys.stderr)
        return EXIT_CODES[outcome.state]

    if outcome.state is OutcomeState.EMPTY:
        print(outcome.message, file=sys.stderr)

    rendered = RENDERERS[args.format](outcome.graph)
    if args.output is not None:
        args.output.write_text(rendered, encoding="utf-8")
        print(f"{outcome.message}; wrote {args.format} to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(rendered)
        if not rendered.endswith("\n"):
            sys.stdout.write("\n")
    return EXIT_CODES[outcome.state]


def _serve_mcp(args: argparse.Namespace) -> int:
    """Start the MCP server."""
    from .mcp.server import create_server

    config = load_config(args.config) if args.config is not None else None

    print("Starting queuegraph MCP server on stdio. Use Ctrl+C to stop.", file=sys.stderr)
    try:
        server = create_server(config)
        asyncio.run(server.run())
    except KeyboardInterrupt:
        print("\nShutting down server...", file=sys.stderr)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="queuegraph", description=__doc__)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze", help="Build the sender -> listener graph of a project"
    )
    analyze_parser.add_argument(
        "path",
        nargs="?",
        help="Absolute path of the project root (the directory holding tsconfig.json)",
    )
    analyze_parser.add_argument(
        "--config",
        type=Path,
        help="Settings file (defaults to <root>/.queuegraph.yml when present)",
    )
    analyze_parser.add_argument(
        "--format",
        choices=sorted(RENDERERS),
        default="json",
        help="Output encoding",
    )
    analyze_parser.add_argument("--output", type=Path, help="Write output to this file")
    analyze_parser.add_argument(
        "--workers",
        type=int,
        help="Threads used for per-file extraction",
    )
    analyze_parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    analyze_parser.set_defaults(func=_analyze)

    serve_parser = subparsers.add_parser("serve", help="Start the MCP server")
    serve_parser.add_argument("--config", type=Path, help="Settings applied to every request")
    serve_parser.set_defaults(func=_serve_mcp)

    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
