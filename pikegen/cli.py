"""
Command line driver.

Reads a type graph document (JSON or YAML) and writes the generated Pike
source to a file or to standard output.
"""

import argparse
import sys
from typing import List, Optional

import pikegen
from .codegen.pike import PikeRenderer
from .config.config import PikegenConfig
from .graph.loader import load_type_graph
from .utils.exceptions import PikegenError
from .utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pikegen",
        description="Generate Pike declarations and conversion stubs from a type graph document",
    )
    parser.add_argument("input", help="Type graph document (.json, .yaml or .yml)")
    parser.add_argument("-o", "--output", help="Output file (default: standard output)")
    parser.add_argument("--config", help="Configuration file (JSON or YAML)")
    parser.add_argument("--indent", type=int, help="Indentation width in spaces")
    parser.add_argument(
        "--no-leading-comments",
        action="store_true",
        help="Omit the generated-by comment block at the top of the output",
    )
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    parser.add_argument("--version", action="version", version=f"pikegen {pikegen.__version__}")
    return parser


def run(args: argparse.Namespace) -> int:
    config = PikegenConfig(args.config)
    if args.indent is not None:
        if args.indent < 0:
            raise PikegenError("Indentation width must be non-negative", {"indent": args.indent})
        config.output.indent_size = args.indent
    if args.no_leading_comments:
        config.output.leading_comments = False

    log_file = config.logging.log_file if config.logging.enable_file_logging else None
    setup_logging(args.log_level or config.logging.level, log_file)

    graph = load_type_graph(args.input)
    result = PikeRenderer(graph, config).render()

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(result.text)
        logger.info(
            f"Wrote {result.declaration_count} declarations and "
            f"{result.top_level_count} conversion pairs to {args.output}"
        )
    else:
        sys.stdout.write(result.text)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the pikegen command."""
    args = build_arg_parser().parse_args(argv)
    try:
        return run(args)
    except PikegenError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"Cannot write output: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
