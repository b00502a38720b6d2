"""Label command handlers used by the unified CLI."""

import argparse
import sys
from datetime import date
from pathlib import Path

from freshkeeper.application.labels.scan import LabelScanResult
from freshkeeper.domain.label import LabelScanOutcome
from freshkeeper.label.disambiguation import annotate_candidates
from freshkeeper.label.expiry_status import status_label
from freshkeeper.runtime import get_logger, load_scan_settings

logger = get_logger(__name__)


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI server."""
    import uvicorn

    from freshkeeper.runtime import label_server as server

    print(f"Starting FreshKeeper server on {args.host}:{args.port}")
    print(f"Scan endpoint: http://{args.host}:{args.port}/scan")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)


def cmd_scan(args: argparse.Namespace) -> None:
    """OCR a label photo, then store or ask for the expiry date."""
    from freshkeeper.application.labels.scan import LabelScanRequest, run_label_scan

    result = run_label_scan(
        LabelScanRequest(
            image_path=Path(args.image),
            ocr_url=args.ocr_url,
            save=not args.no_save,
        )
    )

    if result.status in ("file_not_found", "invalid_image"):
        logger.error("%s", result.error)
        print(f"Error: {result.error}")
        sys.exit(1)

    if result.status == "ocr_unavailable":
        logger.error("%s", result.error)
        print(f"OCR service unavailable: {result.error}")
        print("Make sure the OCR service is running before scanning labels.")
        sys.exit(1)

    _finish_scan(result, save=not args.no_save)


def cmd_parse(args: argparse.Namespace) -> None:
    """Parse recognized label text from a file or stdin."""
    from freshkeeper.application.labels.scan import LabelTextRequest, run_label_text

    if args.text_file == "-":
        text = sys.stdin.read()
    else:
        path = Path(args.text_file)
        if not path.exists():
            print(f"Error: text file not found: {path}")
            sys.exit(1)
        text = path.read_text(encoding="utf-8")

    result = run_label_text(LabelTextRequest(text=text, save=not args.no_save))
    _finish_scan(result, save=not args.no_save)


def print_outcome(outcome: LabelScanOutcome, today: date) -> None:
    """Display what the parser found."""
    settings = load_scan_settings()
    print("\n" + "=" * 60)
    print("PARSED LABEL")
    print("=" * 60)
    print(f"Product: {outcome.product_name}")
    if not outcome.candidates:
        print("Expiry: no date detected")
    for i, choice in enumerate(annotate_candidates(outcome.candidates, today, settings.use_soon_days), 1):
        candidate = choice.candidate
        print(
            f"  {i}. {candidate.resolved_date.isoformat()} [{status_label(choice.status)}]"
            f"  from {candidate.raw_match!r} ({candidate.source_kind})"
        )
    print("=" * 60)


def _finish_scan(result: LabelScanResult, save: bool) -> None:
    outcome = result.outcome
    if outcome is None:
        print("Scan failed: missing parse output.")
        sys.exit(1)

    today = date.today()
    print_outcome(outcome, today)

    if outcome.state == "auto_resolved":
        if result.item is not None:
            print(f"\nSaved {result.item.name} (expires {result.item.expiry_date.isoformat()}) as {result.item.id}")
        return

    if not save:
        return

    if not sys.stdin.isatty():
        if outcome.state == "awaiting_user_choice":
            print("Multiple dates found; run interactively to choose one. Nothing saved.")
        else:
            print("No date detected; add the item with `fk add`. Nothing saved.")
        return

    _prompt_for_date(outcome, today)


def _prompt_for_date(outcome: LabelScanOutcome, today: date) -> None:
    """Ask the user to pick a candidate or type a date, then store the item."""
    from freshkeeper.application.labels.confirm import ConfirmLabelRequest, run_confirm_label

    chosen: date | None = None
    if outcome.state == "awaiting_user_choice":
        print("Which date is the expiry date? (number, or 'm' to enter manually) ", end="")
        answer = input().strip().lower()
        if answer != "m":
            index = int(answer) if answer.isdigit() else 0
            if not 1 <= index <= len(outcome.candidates):
                print(f"Invalid choice: {answer!r}")
                sys.exit(1)
            chosen = outcome.candidates[index - 1].resolved_date

    manual: date | None = None
    name: str | None = None
    if chosen is None:
        print(f"Expiry date for {outcome.product_name} (YYYY-MM-DD, empty to skip): ", end="")
        answer = input().strip()
        if not answer:
            print("Nothing saved.")
            return
        try:
            manual = date.fromisoformat(answer)
        except ValueError:
            print(f"Invalid date: {answer!r}")
            sys.exit(1)
        print(f"Product name [{outcome.product_name}]: ", end="")
        name = input().strip() or None

    confirmed = run_confirm_label(
        ConfirmLabelRequest(outcome=outcome, chosen_date=chosen, manual_date=manual, product_name=name, today=today)
    )
    if confirmed.status != "saved" or confirmed.item is None:
        print(f"Error: {confirmed.error}")
        sys.exit(1)
    print(f"Saved {confirmed.item.name} (expires {confirmed.item.expiry_date.isoformat()}) as {confirmed.item.id}")
