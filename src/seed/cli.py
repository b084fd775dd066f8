"""CLI entry point for seed.

Usage:
    seed expr.sexp                      # DOT document on stdout
    seed expr.sexp --format json        # Arena and roots as JSON
    seed expr.sexp --graph-name AST     # digraph AST { ... }
    seed expr.sexp -v                   # Debug logging on stderr

Exit status is 0 on success, 1 on a load or syntax error (reported as
``error: <line>:<col>: <message>`` on stderr), and 2 on bad usage.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import NoReturn

from pydantic import ValidationError

from seed.config import SeedConfig
from seed.errors import SeedError
from seed.loader import read_source
from seed.parser import parse
from seed.render import render_result

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seed",
        usage="seed <file> [options]",
        description="Render S-expressions as a Graphviz DOT graph",
    )
    parser.add_argument("file", type=str, help="Path to the S-expression source file")
    parser.add_argument(
        "--format",
        choices=("dot", "json"),
        default="dot",
        help="Output format (default: dot)",
    )
    parser.add_argument(
        "--graph-name",
        type=str,
        default=None,
        help="Name written after the digraph keyword",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Deepest permitted expression nesting",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    return parser


def _load_config(args: argparse.Namespace) -> SeedConfig:
    """Environment first, then command-line overrides."""
    base = SeedConfig.from_env()
    data = base.model_dump()
    if args.graph_name is not None:
        data["render"]["graph_name"] = args.graph_name
    if args.max_depth is not None:
        data["parse"]["max_depth"] = args.max_depth
    if args.verbose:
        data["log_level"] = "DEBUG"
    return SeedConfig.model_validate(data)


def _fail(message: str, status: int = 1) -> NoReturn:
    print(f"error: {message}", file=sys.stderr)
    sys.exit(status)


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = _load_config(args)
    except ValidationError as e:
        _fail(f"invalid configuration: {e.errors()[0]['msg']}", status=2)

    logging.basicConfig(
        level=config.log_level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        source = read_source(args.file)
        result = parse(source, max_depth=config.parse.max_depth)
    except SeedError as e:
        logger.debug("Aborting on %s", type(e).__name__)
        _fail(str(e))

    if args.format == "json":
        sys.stdout.write(json.dumps(result.to_dict(), indent=2) + "\n")
    else:
        sys.stdout.write(render_result(result, config.render))


if __name__ == "__main__":
    main()
