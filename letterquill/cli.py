"""
Command-line interface for letterquill.

Usage:
    letterquill render letter.html --recipient anna.json --output anna.pdf
    letterquill batch recipients.json --templates templates.json --output letters.zip
    letterquill blocks letter.html
    letterquill version
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .utils.logger import LOG_LEVELS, configure_logging

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="letterquill",
        description="letterquill - personalised one-page letters with QR landing links",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  letterquill render letter.html --recipient anna.json -o anna.pdf
  letterquill batch recipients.json --templates templates.json --workers 4
  letterquill blocks letter.html
  letterquill version
        """,
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        default="WARNING",
        help="Log level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Render command
    render_parser = subparsers.add_parser("render", help="Render one letter to PDF")
    render_parser.add_argument("input", help="Letter HTML file")
    render_parser.add_argument(
        "-r", "--recipient",
        required=True,
        help="Recipient JSON object"
    )
    render_parser.add_argument(
        "-o", "--output",
        help="Output PDF path (default: <LastName>_<Company>_<token>.pdf)"
    )
    render_parser.add_argument(
        "--intro",
        help="Text substituted for {{personalized_intro}}"
    )
    render_parser.add_argument(
        "--base-url",
        help="Landing page base URL encoded in the QR code"
    )

    # Batch command
    batch_parser = subparsers.add_parser("batch", help="Render letters for many recipients into a ZIP")
    batch_parser.add_argument("input", help="Recipients JSON array")
    batch_parser.add_argument(
        "-t", "--templates",
        required=True,
        help="Templates JSON array"
    )
    batch_parser.add_argument(
        "-o", "--output",
        help="Output ZIP path (default: letters-<date>.zip)"
    )
    batch_parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Concurrent renders (default: 1)"
    )
    batch_parser.add_argument(
        "--base-url",
        help="Landing page base URL encoded in the QR codes"
    )

    # Blocks command
    blocks_parser = subparsers.add_parser("blocks", help="Print parsed letter blocks as JSON")
    blocks_parser.add_argument("input", help="Letter HTML file")

    # Version command
    subparsers.add_parser("version", help="Show version information")

    return parser


class InputError(Exception):
    """Unreadable or malformed command line input."""


def _read_text(path: str) -> str:
    input_path = Path(path)
    if not input_path.exists():
        raise InputError(f"File not found: {input_path}")
    return input_path.read_text(encoding="utf-8")


def _read_json(path: str):
    text = _read_text(path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise InputError(f"Invalid JSON in {path}: {exc}") from exc


def _read_records(path: str, key: str) -> list:
    data = _read_json(path)
    if isinstance(data, dict):
        data = data.get(key, [data])
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise InputError(f"Expected a JSON array of objects in {path}")
    return data


def cmd_render(args):
    """Handle render command."""
    from .api import generate_letter_pdf, letter_filename
    from .config import LetterConfig
    from .models.recipient import Recipient

    letter_html = _read_text(args.input)
    data = _read_json(args.recipient)
    if not isinstance(data, dict):
        raise InputError(f"Expected a JSON object in {args.recipient}")

    recipient = Recipient.from_mapping(data)
    config = LetterConfig.from_env(base_url=args.base_url)
    output_path = Path(args.output) if args.output else Path(letter_filename(recipient))

    pdf = generate_letter_pdf(letter_html, recipient, config=config, personalized_intro=args.intro)
    output_path.write_bytes(pdf)

    print(f"✅ Saved: {output_path} ({len(pdf):,} bytes)")
    return 0


def cmd_batch(args):
    """Handle batch command."""
    from .config import LetterConfig
    from .export import BatchLetterExporter
    from .models.recipient import LetterTemplate

    recipients = _read_records(args.input, "recipients")
    templates = [LetterTemplate.from_mapping(item) for item in _read_records(args.templates, "templates")]
    if not recipients:
        raise InputError(f"No recipients in {args.input}")

    config = LetterConfig.from_env(base_url=args.base_url)
    exporter = BatchLetterExporter(templates, config=config)

    print(f"📄 Rendering {len(recipients)} letters...")
    result = exporter.export(recipients, max_workers=max(1, args.workers))

    for error in result.errors:
        print(f"   ⚠️  {error}", file=sys.stderr)

    if result.generated == 0:
        print("Error: No letters generated", file=sys.stderr)
        return 1

    output_path = Path(args.output) if args.output else Path(result.filename)
    output_path.write_bytes(result.archive)
    print(f"✅ Saved: {output_path}")
    print(f"   Generated: {result.generated}")
    print(f"   Failed: {result.failed}")
    return 0


def cmd_blocks(args):
    """Handle blocks command."""
    from .parser import parse_to_blocks

    blocks = parse_to_blocks(_read_text(args.input))
    print(json.dumps([block.to_dict() for block in blocks], indent=2, ensure_ascii=False))
    return 0


def cmd_version(args=None):
    """Handle version command."""
    from .version import __version__
    print(f"letterquill v{__version__}")
    print("Personalised one-page letters with QR landing links")
    return 0


def main(argv=None):
    """Main entry point for CLI."""
    from .exceptions import LetterError

    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    commands = {
        "render": cmd_render,
        "batch": cmd_batch,
        "blocks": cmd_blocks,
        "version": cmd_version,
    }
    handler = commands.get(args.command)
    if handler is None:
        # No command specified, show help
        parser.print_help()
        return 0

    try:
        return handler(args)
    except InputError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except LetterError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
