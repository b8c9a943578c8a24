"""
Command-line interface for docsynth.

Usage:
    docsynth render blocks.json -o report.pdf --title "Board meeting"
    docsynth text notes.txt -o notes.pdf --title "Notes"
    docsynth version
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .exceptions import DocSynthError
from .utils.logger import configure_logging

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="docsynth",
        description="docsynth - paginated report pages and hand-assembled PDF files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  docsynth render minutes.json -o minutes.pdf --title "Minutes" --organization "Acme Group"
  docsynth render minutes.json --logo https://example.org/logo.png
  docsynth text notes.txt -o notes.pdf --title "Notes"
  docsynth version
        """,
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Log level (default: WARNING)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Shortcut for --log-level DEBUG"
    )
    parser.add_argument(
        "--plain-logs",
        action="store_true",
        help="Plain log lines instead of rich output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    render_parser = subparsers.add_parser("render", help="Render JSON content blocks to a raster PDF")
    render_parser.add_argument("input", help="JSON file with an array of blocks")
    render_parser.add_argument(
        "-o", "--output",
        help="Output PDF path (default: input name with .pdf)"
    )
    render_parser.add_argument("--title", default="", help="Document title shown in the header")
    render_parser.add_argument("--organization", default="", help="Organisation name shown in the header")
    render_parser.add_argument("--logo", help="Logo URL, data URL or local image path")
    render_parser.add_argument("--generated-by", default="docsynth", help="Name used in the footer")
    render_parser.add_argument("--generated-on", default="", help="Date label used in the footer")
    render_parser.add_argument("--no-header", action="store_true", help="Omit the page header")
    render_parser.add_argument(
        "--quality",
        type=float,
        help="JPEG quality between 0 and 1 (default: from config, 0.92)"
    )
    render_parser.add_argument("--config", help="JSON configuration file")

    text_parser = subparsers.add_parser("text", help="Write a text file as a Helvetica text PDF")
    text_parser.add_argument("input", help="UTF-8 text file, one line per PDF line")
    text_parser.add_argument(
        "-o", "--output",
        help="Output PDF path (default: input name with .pdf)"
    )
    text_parser.add_argument("--title", help="Document title (default: input file stem)")
    text_parser.add_argument(
        "--no-paginate",
        action="store_true",
        help="Drop lines below the bottom margin instead of adding pages"
    )
    text_parser.add_argument("--no-wrap", action="store_true", help="Do not wrap long lines")
    text_parser.add_argument(
        "--max-chars",
        type=int,
        help="Wrap by character count instead of Helvetica width"
    )
    text_parser.add_argument("--config", help="JSON configuration file")

    subparsers.add_parser("version", help="Show version information")

    return parser


def _load_config(path: Optional[str]):
    from .config import DocSynthConfig, load_config

    return load_config(path) if path else DocSynthConfig()


def _output_path(args) -> Path:
    if args.output:
        return Path(args.output)
    return Path(args.input).with_suffix(".pdf")


def cmd_render(args) -> int:
    """Handle render command."""
    from .engine.blocks import load_blocks
    from .report import build_report_file

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    config = _load_config(args.config)
    output_path = _output_path(args)
    blocks = load_blocks(input_path)

    pdf = asyncio.run(build_report_file(
        blocks,
        file_name=output_path.name,
        title=args.title,
        organization=args.organization,
        logo_url=args.logo,
        quality=args.quality,
        config=config,
        generated_by=args.generated_by,
        generated_on=args.generated_on,
        show_header=not args.no_header,
    ))
    pdf.save(output_path)
    print(f"Saved: {output_path} ({pdf.size:,} bytes)")
    return 0


def cmd_text(args) -> int:
    """Handle text command."""
    from dataclasses import replace

    from .pdfcompiler.text_document import build_text_pdf_file

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    config = _load_config(args.config)
    if args.no_paginate:
        config = config.with_overrides(text=replace(config.text, paginate=False))
    if args.max_chars is not None:
        config = config.with_overrides(text=replace(config.text, wrap_mode="chars", max_chars=args.max_chars))

    output_path = _output_path(args)
    lines = input_path.read_text(encoding="utf-8").splitlines()
    pdf = build_text_pdf_file(args.title or input_path.stem, lines, file_name=output_path.name,
                              config=config, wrap=not args.no_wrap)
    pdf.save(output_path)
    print(f"Saved: {output_path} ({pdf.size:,} bytes)")
    return 0


def cmd_version(args=None) -> int:
    """Handle version command."""
    from .version import __version__
    print(f"docsynth v{__version__}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    level = "DEBUG" if args.verbose else args.log_level
    configure_logging(level, use_rich=not args.plain_logs)

    commands = {
        "render": cmd_render,
        "text": cmd_text,
        "version": cmd_version,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args)
    except (DocSynthError, OSError, UnicodeDecodeError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
