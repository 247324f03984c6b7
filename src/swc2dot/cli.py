# src/swc2dot/cli.py
"""Command-line interface for swc2dot.

Converts SWC neuron morphologies to the DOT graph language, either one file
at a time or a whole directory tree.

Usage (after install):

    swc2dot cell.swc -o cell.dot
    swc2dot cell.swc -o cell.dot --table cell.csv
    swc2dot traces/ --output-dir dot/ --keep-going
    python -m swc2dot --help
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from . import __version__
from .config import make_config
from .core import Converter
from .exceptions import Swc2DotError


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="swc2dot",
        description="Convert SWC neuron morphologies to DOT graph language.",
    )
    p.add_argument("input", metavar="INPUT", help="SWC neuron morphology file, or a directory of SWC files")
    p.add_argument("-o", "--output", metavar="FILE", help="Output file for morphology in DOT format")
    p.add_argument("--output-dir", metavar="DIR", help="Output directory when INPUT is a directory")
    p.add_argument("-c", "--config", metavar="FILE", help="YAML file overriding the default vertex styles")
    p.add_argument("--table", metavar="FILE", help="Also write the parsed SWC table as CSV (file mode)")
    p.add_argument("--line-width", type=int, default=None, help="Wrap output lines at this width (default: 80)")
    p.add_argument("--no-overwrite", action="store_true", help="Keep existing output files (directory mode)")
    p.add_argument("--keep-going", action="store_true", help="Continue after a failed file (directory mode)")
    p.add_argument("-q", "--quiet", action="store_true", help="Do not print status lines")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    input_path = Path(args.input)
    batch = input_path.is_dir()
    if batch and not args.output_dir:
        parser.error("--output-dir is required when INPUT is a directory")
    if not batch and not args.output:
        parser.error("-o/--output is required when INPUT is a file")
    if batch and args.table:
        parser.error("--table is only supported when INPUT is a file")

    try:
        cfg = make_config(
            args.config,
            line_width=args.line_width,
            overwrite=not args.no_overwrite,
            keep_going=args.keep_going,
            quiet=args.quiet,
        )
        converter = Converter(cfg)

        if not batch:
            converter.convert_file(
                input_path,
                Path(args.output),
                table_path=Path(args.table) if args.table else None,
            )
            return 0

        result = converter.convert_directory(input_path, Path(args.output_dir))
    except Swc2DotError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for path, message in result.failed.items():
        print(f"error: {path}: {message}", file=sys.stderr)
    return 0 if result.ok else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
