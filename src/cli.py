"""
Command-line interface for rewriting bundled chunks into flat-global scripts.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from rich.logging import RichHandler

from bundle import BundleResult, OutputPolicy, load_bundle, run_bundle, write_bundle
from transformer import DEFAULT_NAMESPACE, ConfigurationError, RewriteError, RewriteOptions

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Root logging level.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _print_diagnostics(messages: List[str]) -> None:
    for message in messages:
        sys.stderr.write(message + "\n")


def _collect_diagnostics(result: BundleResult) -> List[str]:
    diagnostics: List[str] = []
    for report in result.reports:
        for message in report.rewrite.diagnostics:
            diagnostics.append(f"WARNING {report.file_name}: {message}")
        if report.validation is not None:
            for error in report.validation.errors:
                loc = f":{error.line}" if error.line is not None else ""
                diagnostics.append(f"ERROR {report.output_name}{loc}: {error.description}")
    return diagnostics


def _read_banner(args: argparse.Namespace) -> str | None:
    if args.banner_file:
        return Path(args.banner_file).read_text(encoding="utf-8").rstrip("\n")
    return args.banner


def rewrite_command(args: argparse.Namespace) -> int:
    input_dir = Path(args.input).resolve()
    if not input_dir.is_dir():
        sys.stderr.write(f"ERROR: Bundle directory not found: {input_dir}\n")
        return 1

    try:
        banner = _read_banner(args)
    except (OSError, UnicodeDecodeError) as exc:
        sys.stderr.write(f"ERROR: Failed to read banner file: {exc}\n")
        return 1

    try:
        options = RewriteOptions(
            namespace=args.namespace,
            banner=banner,
            preserve_signatures=args.preserve_signatures,
        )
    except ConfigurationError as exc:
        sys.stderr.write(f"ERROR: {exc}\n")
        return 1

    policy = OutputPolicy(
        replace_file=not args.keep_original,
        new_file_name=args.new_file_name,
    )

    try:
        bundle = load_bundle(input_dir)
        result = run_bundle(bundle, options, policy=policy, validate=args.validate)
        out_dir = Path(args.out_dir) if args.out_dir else input_dir
        written = write_bundle(result, out_dir)
    except RewriteError as exc:
        sys.stderr.write(f"ERROR: {exc}\n")
        return 1

    logger.info(
        "Rewrite complete (chunks=%d written=%d)",
        sum(1 for unit in bundle.values() if unit.is_chunk),
        len(written),
    )

    diagnostics = _collect_diagnostics(result)
    _print_diagnostics(diagnostics)

    if args.strict and diagnostics:
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="appscript-rewrite",
        description="Rewrite bundled ES module chunks for flat-global script hosts",
    )
    subparsers = parser.add_subparsers(dest="command")

    rewrite_parser = subparsers.add_parser(
        "rewrite", help="Rewrite every chunk in a build output directory"
    )
    rewrite_parser.add_argument("input", help="Build output directory containing chunks")
    rewrite_parser.add_argument(
        "--out-dir",
        help="Directory for rewritten files (defaults to the input directory)",
    )
    rewrite_parser.add_argument(
        "--namespace",
        default=DEFAULT_NAMESPACE,
        help="Identifier holding the isolated chunk scope",
    )
    banner_group = rewrite_parser.add_mutually_exclusive_group()
    banner_group.add_argument("--banner", help="Text prepended to every rewritten chunk")
    banner_group.add_argument("--banner-file", help="File whose contents are used as banner")
    rewrite_parser.add_argument(
        "--keep-original",
        action="store_true",
        help="Write rewritten chunks to a new file instead of replacing the original.",
    )
    rewrite_parser.add_argument(
        "--new-file-name",
        help="Output file name used with --keep-original (defaults to modified-<name>)",
    )
    rewrite_parser.add_argument(
        "--preserve-signatures",
        action="store_true",
        help="Emit forwarding functions that keep doc comments and parameter lists.",
    )
    rewrite_parser.add_argument(
        "--validate",
        action="store_true",
        help="Parse rewritten chunks as scripts and report syntax errors.",
    )
    rewrite_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any diagnostic is reported.",
    )
    rewrite_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    rewrite_parser.set_defaults(func=rewrite_command)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1
    if args.new_file_name and not args.keep_original:
        parser.error("--new-file-name requires --keep-original")
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
