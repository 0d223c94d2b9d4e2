# -*- coding: utf-8 -*-

"""
Command-line entry point for grayscale-svg.

    grayscale-svg convert logo.svg -o logo-gray.svg --method luminance
    grayscale-svg batch svgs/ output/ --compare compare.html
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from grayscale_svg.config import ConfigManager
from grayscale_svg.core.exceptions import GrayscaleError
from grayscale_svg.core.models import GrayscaleMethod, GrayscaleOptions
from grayscale_svg.core.services import (
    BatchConversionService,
    GrayscaleConversionService,
    write_compare_page,
)
from grayscale_svg.logging_config import setup_logging
from grayscale_svg.version import get_app_version

logger = logging.getLogger(__name__)


def _strength(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid strength {value!r}: expected an integer 0-100")
    if not 0 <= number <= 100:
        raise argparse.ArgumentTypeError(f"invalid strength {number}: expected 0-100")
    return number


def build_parser(defaults: Optional[dict] = None) -> argparse.ArgumentParser:
    defaults = defaults or {}
    parser = argparse.ArgumentParser(
        prog="grayscale-svg",
        description="Convert the colors of SVG documents to grayscale, keeping them vector.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_app_version()}")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    convert = sub.add_parser("convert", help="convert a single SVG file")
    convert.add_argument("input", type=Path, help="SVG file to convert")
    convert.add_argument("-o", "--output", type=Path, help="output file (default: stdout)")
    convert.add_argument("--method", choices=[m.value for m in GrayscaleMethod],
                         default=str(defaults.get("method", GrayscaleMethod.HSL.value)),
                         help="grayscale algorithm (default: %(default)s)")
    convert.add_argument("--strength", type=_strength, default=defaults.get("strength", 100),
                         help="desaturation amount 0-100, hsl method only (default: %(default)s)")

    batch = sub.add_parser("batch", help="convert every SVG in a directory with both methods")
    batch.add_argument("input_dir", type=Path)
    batch.add_argument("output_dir", type=Path)
    batch.add_argument("--strength", type=_strength, default=defaults.get("strength", 100),
                       help="desaturation amount for the hsl outputs (default: %(default)s)")
    batch.add_argument("--compare", type=Path, metavar="PAGE",
                       help="also write an HTML comparison page to PAGE")
    return parser


def _run_convert(args: argparse.Namespace) -> int:
    options = GrayscaleOptions(method=args.method, strength=args.strength)
    service = GrayscaleConversionService()
    result = service.convert_file(args.input, args.output, options)
    if args.output is None:
        sys.stdout.write(result.content)
        if not result.content.endswith("\n"):
            sys.stdout.write("\n")
    else:
        logger.info("Wrote %s (%d attribute(s) converted)", args.output, result.converted_attributes)
    return 0


def _run_batch(args: argparse.Namespace, defaults: dict) -> int:
    batch = BatchConversionService(config=defaults)
    report = batch.convert_directory(args.input_dir, args.output_dir, strength=args.strength)
    for item in report.items:
        if item.ok:
            print(f"{item.method.value}: {item.source.name} -> {item.output.name} "
                  f"(original size: {item.original_kb:.2f} KB, out: {item.output_kb:.2f} KB)")
        else:
            print(f"{item.method.value}: {item.source.name} FAILED: {item.error}", file=sys.stderr)

    if args.compare is not None:
        page = write_compare_page(
            args.input_dir, args.output_dir, args.compare,
            title=defaults.get("compare_page_title"),
            hsl_prefix=defaults.get("output_prefix_hsl", "grayscale-hsl-"),
            luminance_prefix=defaults.get("output_prefix_luminance", "grayscale-lum-"),
        )
        print(f"compare page generated at: {page}")
    return 1 if report.failed else 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Configure logging, parse arguments and run the requested command.
    """
    defaults = ConfigManager().get_conversion_defaults()
    parser = build_parser(defaults)
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)

    try:
        if args.command == "convert":
            return _run_convert(args)
        return _run_batch(args, defaults)
    except (GrayscaleError, FileNotFoundError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
