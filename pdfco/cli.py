"""
Command line interface for PDF.co actions.

Usage:
    python -m pdfco list
    python -m pdfco run <action> [--params FILE] [--param KEY=VALUE ...]
    python -m pdfco balance

Examples:
    python -m pdfco run convert_from_pdf --param url=https://example.com/a.pdf \\
        --param convertType=toCsv
    python -m pdfco run compress_pdf --params params.json
    echo '{"url": "https://example.com/a.pdf"}' | python -m pdfco run rotate_pdf --params -

Options:
    --verbose           Debug logging
    --base-url URL      Override PDFCO_BASE_URL
    --poll-interval S   Seconds between job status checks
    --max-attempts N    Job status checks before giving up
    --log-dir DIR       Also write rotating log files
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .actions.registry import ACTION_TYPES, list_actions
from .config.settings import ClientConfig, ConfigValidationError, settings
from .connectors.pdfco_connector import PdfcoConnector
from .core.errors import ActionValidationError, PdfcoError
from .runner import ActionRunner
from .utils.logger import configure_logging


def setup_logging(verbose: bool = False, log_dir: Optional[str] = None) -> None:
    """Configure logging; optionally also write rotating log files."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    if log_dir:
        configure_logging("pdfco", log_dir=log_dir, console=False).setLevel(level)


def parse_param(item: str) -> tuple[str, Any]:
    """Parse KEY=VALUE; VALUE is read as JSON when it parses, else as text."""
    if "=" not in item:
        raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got {item!r}")
    key, raw = item.split("=", 1)
    try:
        value = json.loads(raw)
    except ValueError:
        value = raw
    return key.strip(), value


def load_params(path: Optional[str], pairs: List[tuple[str, Any]]) -> Dict[str, Any]:
    """Merge a JSON params file (or '-' for stdin) with --param overrides."""
    params: Dict[str, Any] = {}
    if path:
        if path == "-":
            params = json.load(sys.stdin)
        else:
            with open(path, "r", encoding="utf-8") as f:
                params = json.load(f)
        if not isinstance(params, dict):
            raise ValueError("Params file must contain a JSON object")
    params.update(dict(pairs))
    return params


def build_config(args) -> ClientConfig:
    return ClientConfig.from_settings(
        base_url=args.base_url,
        poll_interval=args.poll_interval,
        poll_max_attempts=args.max_attempts,
    ).ensure_valid()


def cmd_list(args) -> int:
    """List registered actions."""
    for name in list_actions():
        module = sys.modules[ACTION_TYPES[name].__module__]
        summary = (module.__doc__ or "").strip().splitlines()
        print(f"{name:24} {summary[0] if summary else ''}")
    return 0


def cmd_run(args) -> int:
    """Run one action and print its result envelope."""
    try:
        params = load_params(args.params, args.param or [])
    except (OSError, ValueError) as e:
        print(f"ERROR: Could not read params: {e}", file=sys.stderr)
        return 1

    config = build_config(args)
    runner = ActionRunner.from_config(config)
    try:
        envelope = asyncio.run(runner.run(args.action, params))
    except ActionValidationError as e:
        print(f"ERROR: Invalid parameters for '{e.action}':", file=sys.stderr)
        for err in e.errors:
            print(f"  - {err}", file=sys.stderr)
        return 1
    except PdfcoError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    finally:
        runner.connector.close()

    print(json.dumps(envelope, indent=2))
    return 0


def cmd_balance(args) -> int:
    """Print remaining credits."""
    with PdfcoConnector(build_config(args)) as connector:
        try:
            balance = connector.get_balance()
        except PdfcoError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1
    print(f"Remaining credits: {balance.get('remainingCredits', 'unknown')}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="pdfco",
        description="Run PDF.co document actions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--base-url",
        metavar="URL",
        help="API base URL (default: PDFCO_BASE_URL)",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        metavar="S",
        help="Seconds between job status checks",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        metavar="N",
        help="Job status checks before giving up",
    )
    parser.add_argument(
        "--log-dir",
        metavar="DIR",
        help="Also write rotating log files here (default: LOG_DIR)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List available actions")

    run_parser = subparsers.add_parser("run", help="Run an action")
    run_parser.add_argument(
        "action",
        choices=list_actions(),
        help="Action name",
    )
    run_parser.add_argument(
        "--params",
        metavar="FILE",
        help="JSON file with action parameters ('-' for stdin)",
    )
    run_parser.add_argument(
        "--param",
        action="append",
        type=parse_param,
        metavar="KEY=VALUE",
        help="Single parameter (can repeat, overrides --params)",
    )

    subparsers.add_parser("balance", help="Show remaining API credits")

    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.log_dir or settings.LOG_DIR)

    try:
        if args.command == "list":
            return cmd_list(args)
        elif args.command == "balance":
            return cmd_balance(args)
        else:
            return cmd_run(args)
    except ConfigValidationError as e:
        print("ERROR: Config validation failed:", file=sys.stderr)
        for err in e.errors:
            print(f"  - {err}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
