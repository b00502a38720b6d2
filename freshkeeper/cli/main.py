#!/usr/bin/env python3
"""Unified command-line interface for FreshKeeper.

Usage:
    fk scan <image> [--ocr-url URL] [--no-save]
    fk parse <text-file|->
    fk add <name> <expiry> [--purchase-date] [--barcode]
    fk list
    fk alerts
    fk consume <id>
    fk remove <id>
    fk discount <id>
    fk offers [--limit N]
    fk barcode <code> [--no-nutrition]
    fk serve [--host] [--port]
"""

import argparse
import logging
from collections.abc import Callable, Sequence


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_command(command: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> int:
    """
    Normalize command handlers that call sys.exit().

    This keeps process termination centralized in this module's entrypoint.
    """
    try:
        command(args)
    except SystemExit as exc:
        return _coerce_exit_code(exc.code)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fk",
        description="FreshKeeper food expiry tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  scan <image>               OCR a product label and record its expiry date
  parse <file|->             Parse already-recognized label text
  add <name> <expiry>        Add an item by hand (expiry as YYYY-MM-DD)
  list                       List pantry items with expiry status
  alerts                     Show expired and use-soon items
  consume <id>               Mark an item as consumed
  remove <id>                Delete an item from the pantry
  discount <id>              Toggle the near-expiry discount on an item
  offers                     Show discounted items that have not expired
  barcode <code>             Look up a product barcode
  serve [--port]             Start the HTTP server

Statuses:
  expired   = past the expiry date
  use-soon  = expiring within the use-soon window (default 3 days)
  safe      = everything else
""",
    )

    parser.add_argument("--debug", action="store_true", help="Enable debug logging (same as FRESHKEEPER_LOG_LEVEL=DEBUG)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    scan_parser = subparsers.add_parser("scan", help="OCR a product label image")
    scan_parser.add_argument("image", help="Path to label image")
    scan_parser.add_argument(
        "--ocr-url", default="http://localhost:8001", help="OCR service URL (default: http://localhost:8001)"
    )
    scan_parser.add_argument("--no-save", action="store_true", help="Only show what was parsed; store nothing")

    parse_parser = subparsers.add_parser("parse", help="Parse recognized label text")
    parse_parser.add_argument("text_file", help="Text file with OCR output, or - for stdin")
    parse_parser.add_argument("--no-save", action="store_true", help="Only show what was parsed; store nothing")

    add_parser = subparsers.add_parser("add", help="Add an item by hand")
    add_parser.add_argument("name", help="Product name")
    add_parser.add_argument("expiry", help="Expiry date (YYYY-MM-DD)")
    add_parser.add_argument("--purchase-date", default=None, help="Purchase date (YYYY-MM-DD, default: today)")
    add_parser.add_argument("--barcode", default=None, help="Product barcode")

    subparsers.add_parser("list", help="List pantry items")
    subparsers.add_parser("alerts", help="Show expired and use-soon items")

    consume_parser = subparsers.add_parser("consume", help="Mark an item as consumed")
    consume_parser.add_argument("item_id", help="Pantry item id")

    remove_parser = subparsers.add_parser("remove", help="Delete an item")
    remove_parser.add_argument("item_id", help="Pantry item id")

    discount_parser = subparsers.add_parser("discount", help="Toggle near-expiry discount")
    discount_parser.add_argument("item_id", help="Pantry item id")

    offers_parser = subparsers.add_parser("offers", help="Show discounted offers")
    offers_parser.add_argument("--limit", type=int, default=10, help="Maximum offers to show (default: 10)")

    barcode_parser = subparsers.add_parser("barcode", help="Look up a product barcode")
    barcode_parser.add_argument("code", help="EAN/UPC barcode digits")
    barcode_parser.add_argument("--no-nutrition", action="store_true", help="Skip the Open Food Facts lookup")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        from freshkeeper.runtime import set_log_level

        set_log_level(logging.DEBUG)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "scan":
        from freshkeeper.cli.label import cmd_scan

        return _run_command(cmd_scan, args)
    elif args.command == "parse":
        from freshkeeper.cli.label import cmd_parse

        return _run_command(cmd_parse, args)
    elif args.command == "serve":
        from freshkeeper.cli.label import cmd_serve

        return _run_command(cmd_serve, args)
    elif args.command == "add":
        from freshkeeper.cli.pantry import cmd_add

        return _run_command(cmd_add, args)
    elif args.command == "list":
        from freshkeeper.cli.pantry import cmd_list

        return _run_command(cmd_list, args)
    elif args.command == "alerts":
        from freshkeeper.cli.pantry import cmd_alerts

        return _run_command(cmd_alerts, args)
    elif args.command == "consume":
        from freshkeeper.cli.pantry import cmd_consume

        return _run_command(cmd_consume, args)
    elif args.command == "remove":
        from freshkeeper.cli.pantry import cmd_remove

        return _run_command(cmd_remove, args)
    elif args.command == "discount":
        from freshkeeper.cli.pantry import cmd_discount

        return _run_command(cmd_discount, args)
    elif args.command == "offers":
        from freshkeeper.cli.pantry import cmd_offers

        return _run_command(cmd_offers, args)

    if args.command == "barcode":
        from freshkeeper.cli.pantry import cmd_barcode

        return _run_command(cmd_barcode, args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
