"""
thompson_viz.cli - Command-line interface.

Reads one regular expression from standard input and writes the verbatim
("naive") and canonical ("smart") Thompson automata as Graphviz files.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from thompson_viz.builder import build_automaton
from thompson_viz.errors import ExportError, RegexSyntaxError
from thompson_viz.export import ExportConfig, export_views

logger = logging.getLogger(__name__)

PROMPT = "Enter a regular expression: "


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="thompson-viz",
        description="Draw the Thompson NFA of a regular expression",
        epilog=(
            "Alphabet: ASCII letters and digits, operators * | ( ). "
            "Any other argument makes the program do nothing."
        ),
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory for the generated files (default: current directory)",
        metavar="PATH",
    )
    parser.add_argument(
        "--format",
        default="png",
        help="Image format passed to Graphviz (default: png)",
    )
    parser.add_argument(
        "--no-render",
        action="store_true",
        help="Only write .dot files, do not invoke Graphviz",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args, leftover = parser.parse_known_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Any argument besides the options above turns the run into a no-op.
    if leftover:
        logger.info("arguments given, nothing to do: %s", leftover)
        return 0

    config = ExportConfig(
        output_dir=args.output_dir,
        image_format=args.format,
        render_images=not args.no_render,
    )

    print(PROMPT, end="", flush=True)
    line = sys.stdin.readline()

    try:
        automaton = build_automaton(line)
    except RegexSyntaxError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    try:
        result = export_views(automaton, config)
    except ExportError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    for path in result.dot_files + result.images:
        print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
