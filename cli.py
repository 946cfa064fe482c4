#!/usr/bin/env python3
"""
React Mapper CLI

A tool for scanning JavaScript/TypeScript projects, classifying their files
as components, state modules or utilities, and generating import graphs.
"""

import argparse
import logging
import sys
from pathlib import Path

from exporters import save_project_json, to_ascii, to_json
from scanner.builder import READ_ERROR_RAISE, READ_ERROR_SKIP, scan_project
from scanner.discovery import ScanError


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="reactmap",
        description="Scan a JavaScript/TypeScript project and generate its component and import graph.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  reactmap .                         # JSON graph of the current directory
  reactmap ./app -f tree             # Directory tree with file roles
  reactmap . -f tree --show-imports  # Tree with imports and importers
  reactmap . -o graph.json           # JSON output to file
  reactmap . --save                  # Also keep a timestamped copy
  reactmap . --strict                # Abort on unreadable files
        """,
    )

    # Positional arguments
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root directory (default: current directory)",
    )

    # Output options
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "-f", "--format",
        choices=["json", "tree"],
        default="json",
        help="Output format (default: json)",
    )

    parser.add_argument(
        "--ascii-style",
        choices=["tree", "ascii"],
        default="tree",
        help="Tree output style: 'tree' (Unicode) or 'ascii' (pure ASCII)",
    )

    parser.add_argument(
        "--show-imports",
        action="store_true",
        help="List each file's imports and importers in tree output",
    )

    # Persistence options
    parser.add_argument(
        "--save",
        action="store_true",
        help="Save the JSON graph as a new timestamped file in the data directory",
    )

    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Directory for saved graphs (default: $REACTMAP_DATA_DIR or ~/.local/reactmap)",
    )

    # Scanning options
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort the scan when a file cannot be read (default: skip it)",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )

    return parser.parse_args(args)


def configure_logging(verbosity: int) -> None:
    """Configure root logging for the given -v count."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)
    configure_logging(parsed.verbose)

    root = Path(parsed.root).resolve()
    if not root.is_dir():
        print(f"Error: '{parsed.root}' is not a directory", file=sys.stderr)
        return 1

    # Build the graph
    try:
        project = scan_project(
            root=root,
            on_read_error=READ_ERROR_RAISE if parsed.strict else READ_ERROR_SKIP,
        )
    except ScanError as e:
        print(f"Error scanning project: {e}", file=sys.stderr)
        return 1

    if parsed.save:
        try:
            saved = save_project_json(project, data_dir=parsed.data_dir)
            print(f"Graph saved to: {saved}", file=sys.stderr)
        except OSError as e:
            print(f"Error saving graph: {e}", file=sys.stderr)
            return 1

    # Generate output
    if parsed.format == "tree":
        output = to_ascii(
            project=project,
            style=parsed.ascii_style,
            show_imports=parsed.show_imports,
        )
    else:  # json (default)
        output = to_json(project)

    # Write output
    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output, encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
